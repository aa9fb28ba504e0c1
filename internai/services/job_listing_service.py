from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from typing import Literal, Protocol

from internai.catalog.normalizer import normalize_query
from internai.core.ttl_cache import TTLCache
from internai.db.store import JobStore
from internai.schemas.jobs import JobPosting
from internai.services.jsearch_client import JobSearchError, mock_postings

logger = logging.getLogger(__name__)

DEFAULT_KEYWORD = "internship"

LiveSource = Literal["cache", "live", "mock", "fallback"]


class JobSearchClient(Protocol):
    def is_configured(self) -> bool: ...

    def search(self, keyword: str, location: str | None, page: int = 1) -> list[JobPosting]: ...


@dataclass
class LiveJobsResult:
    jobs: list[JobPosting]
    source: LiveSource
    cache_key: str


def live_cache_key(keyword: str | None, location: str | None, page: int) -> str:
    # Whitespace and case are folded so near-duplicate queries share an entry.
    parts = [normalize_query(keyword) or DEFAULT_KEYWORD, normalize_query(location), page]
    return "jsearch:" + json.dumps(parts, ensure_ascii=False)


class JobListingService:
    """Live job search with a fixed-TTL cache in front of the upstream API.

    On upstream failure the local job store is queried instead, filtered by the
    caller's region. Mock and fallback results are never cached.
    """

    def __init__(self, cache: TTLCache, client: JobSearchClient, store: JobStore | None = None) -> None:
        self._cache = cache
        self._client = client
        self._store = store

    @property
    def cache(self) -> TTLCache:
        return self._cache

    def get_live_jobs(
        self,
        keyword: str | None = DEFAULT_KEYWORD,
        location: str | None = None,
        page: int = 1,
        *,
        fallback_region: str | None = None,
    ) -> LiveJobsResult:
        search_keyword = (keyword or "").strip() or DEFAULT_KEYWORD
        search_location = (location or "").strip() or None
        key = live_cache_key(search_keyword, search_location, page)

        cached = self._cache.get(key)
        if cached is not None:
            return LiveJobsResult(jobs=cached, source="cache", cache_key=key)

        if not self._client.is_configured():
            logger.info("jsearch_not_configured returning mock postings")
            return LiveJobsResult(jobs=mock_postings(search_location), source="mock", cache_key=key)

        try:
            jobs = self._client.search(search_keyword, search_location, page)
        except JobSearchError as exc:
            if self._store is None:
                raise
            logger.warning("jsearch_failed keyword=%s falling back to local jobs: %s", search_keyword, exc)
            local = self._store.search_jobs(state=fallback_region)
            return LiveJobsResult(
                jobs=[job.model_copy(update={"source": "fallback"}) for job in local],
                source="fallback",
                cache_key=key,
            )

        self._cache.set(key, jobs)
        return LiveJobsResult(jobs=jobs, source="live", cache_key=key)


class LocalJobSearch:
    """Cached filter queries over persisted jobs. Writes clear the cache."""

    def __init__(self, cache: TTLCache, store: JobStore) -> None:
        self._cache = cache
        self._store = store

    def search(
        self,
        *,
        role: str | None = None,
        company: str | None = None,
        skills: list[str] | None = None,
        state: str | None = None,
        job_type: str | None = None,
    ) -> list[JobPosting]:
        query = {
            "role": role or None,
            "company": company or None,
            "skills": skills or None,
            "state": state or None,
            "type": job_type or None,
        }
        key = json.dumps(query, sort_keys=True)
        cached = self._cache.get(key)
        if cached is not None:
            return cached

        jobs = self._store.search_jobs(role=role, company=company, skills=skills, state=state, job_type=job_type)
        self._cache.set(key, jobs)
        return jobs

    def invalidate(self) -> None:
        self._cache.clear()
