import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from slowapi.errors import RateLimitExceeded
from slowapi.middleware import SlowAPIMiddleware
from slowapi import _rate_limit_exceeded_handler
import sentry_sdk

from internai.api.v1.health import router as health_router
from internai.api.v1.jobs import router as jobs_router
from internai.api.v1.users import router as users_router
from internai.api.v1.ai import router as ai_router
from internai.core.cors import cors_allowed_origins
from internai.core.rate_limit import limiter
from internai.core.config import settings
from internai.core.dependencies import build_services
from dotenv import load_dotenv
from internai.core.lifespan import lifespan

load_dotenv()
logging.basicConfig(level=settings.log_level, format="%(message)s")
if settings.sentry_dsn:
    sentry_sdk.init(dsn=settings.sentry_dsn)

app = FastAPI(title="InternAI API", version="0.1.0", lifespan=lifespan)
app.state.services = build_services(settings)

app.add_middleware(
    CORSMiddleware,
    allow_origins=cors_allowed_origins(),
    allow_credentials=settings.cors_allow_credentials,
    allow_methods=["*"],
    allow_headers=["*"],
    expose_headers=["X-Jobs-Source", "X-Search-Seq", "X-Search-Stale"],
)
app.state.limiter = limiter
app.add_exception_handler(RateLimitExceeded, _rate_limit_exceeded_handler)
app.add_middleware(SlowAPIMiddleware)

app.include_router(health_router, prefix="/api", tags=["Health"])
app.include_router(jobs_router, prefix="/api", tags=["Jobs"])
app.include_router(users_router, prefix="/api", tags=["Users"])
app.include_router(ai_router, prefix="/api", tags=["AI"])


def run() -> None:
    import uvicorn

    uvicorn.run("internai.main:app", host="0.0.0.0", port=settings.port)
