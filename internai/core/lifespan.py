from contextlib import asynccontextmanager
import logging

from internai.core.config import settings

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app):
    services = app.state.services
    services.store.init_db()
    if not services.jsearch_client.is_configured():
        logger.warning("RAPIDAPI_KEY is not configured; live job search serves mock postings")
    if settings.trust_x_user_id:
        logger.warning("X-User-ID is trusted without verification; deploy behind a trusted network edge only")
    yield
    services.close()
