from internai.ai.groq_provider import GroqProvider
from internai.ai.types import AIClient
from internai.core.config import settings


def get_ai_client() -> AIClient:
    return GroqProvider(
        model=settings.groq_model,
        api_key=settings.groq_api_key,
        base_url=settings.groq_base_url,
        timeout_s=settings.groq_timeout_s,
    )
