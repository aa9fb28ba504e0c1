from __future__ import annotations

from dataclasses import dataclass

from fastapi import Request

from internai.ai.factory import get_ai_client
from internai.ai.types import AIClient
from internai.core.config import Settings
from internai.core.ttl_cache import TTLCache
from internai.db.store import JobStore
from internai.services.job_listing_service import JobListingService, LocalJobSearch
from internai.services.jsearch_client import JSearchClient
from internai.services.search_sequencer import SearchSequencer


@dataclass
class ServiceContainer:
    store: JobStore
    ai_client: AIClient
    jsearch_client: JSearchClient
    job_listings: JobListingService
    local_jobs: LocalJobSearch
    sequencer: SearchSequencer

    def close(self) -> None:
        self.jsearch_client.close()
        self.store.close()


def build_services(cfg: Settings) -> ServiceContainer:
    """Wire the process-wide services. Caches are owned here, one per process."""
    store = JobStore(cfg.database_path)
    jsearch = JSearchClient(api_key=cfg.rapidapi_key, host=cfg.jsearch_host, timeout_s=cfg.jsearch_timeout_s)
    return ServiceContainer(
        store=store,
        ai_client=get_ai_client(),
        jsearch_client=jsearch,
        job_listings=JobListingService(TTLCache(cfg.job_cache_ttl_s), jsearch, store),
        local_jobs=LocalJobSearch(TTLCache(cfg.job_cache_ttl_s), store),
        sequencer=SearchSequencer(cfg.job_cache_ttl_s),
    )


def _services(request: Request) -> ServiceContainer:
    return request.app.state.services


def get_store(request: Request) -> JobStore:
    return _services(request).store


def get_llm(request: Request) -> AIClient:
    return _services(request).ai_client


def get_job_listing_service(request: Request) -> JobListingService:
    return _services(request).job_listings


def get_local_job_search(request: Request) -> LocalJobSearch:
    return _services(request).local_jobs


def get_search_sequencer(request: Request) -> SearchSequencer:
    return _services(request).sequencer
