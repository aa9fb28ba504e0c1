import os
import sys
from pathlib import Path

PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

# Settings are read once at import time.
os.environ.setdefault("JWT_SECRET", "internai-test-secret-0123456789abcdef")
os.environ.setdefault("TRUST_X_USER_ID", "1")
os.environ["GROQ_API_KEY"] = ""
os.environ["RAPIDAPI_KEY"] = ""
