import logging
import sqlite3

from fastapi import APIRouter, Depends, HTTPException, status

from internai.core.dependencies import get_store
from internai.db.store import JobStore

router = APIRouter()
logger = logging.getLogger(__name__)


@router.get("/health", summary="Health Check", description="Report whether the job store is reachable.")
def health_check(store: JobStore = Depends(get_store)):
    try:
        store.ping()
    except sqlite3.Error as exc:
        logger.warning("health_store_unreachable path=%s: %s", store.db_path, exc)
        raise HTTPException(status_code=status.HTTP_503_SERVICE_UNAVAILABLE, detail="Job store unavailable") from exc
    return {"status": "healthy"}
