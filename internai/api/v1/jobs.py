from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, Header, HTTPException, Query, Request, Response, status

from internai.catalog import split_skills
from internai.catalog.regions import is_known_state
from internai.core.dependencies import (
    get_job_listing_service,
    get_local_job_search,
    get_search_sequencer,
    get_store,
)
from internai.core.security import CurrentUser, get_optional_user, require_admin
from internai.db.store import JobStore
from internai.schemas.jobs import (
    JobCreateRequest,
    JobDeleteResponse,
    JobPosting,
    JobType,
    JobUpdateRequest,
)
from internai.services.job_listing_service import DEFAULT_KEYWORD, JobListingService, LocalJobSearch
from internai.services.jsearch_client import JobSearchError
from internai.services.region_filter import filter_by_region
from internai.services.search_sequencer import SearchSequencer

router = APIRouter()
logger = logging.getLogger(__name__)


def _search_scope(request: Request, user: CurrentUser | None, field: str | None) -> str:
    if user is not None:
        owner = f"user:{user.id}"
    elif request.client and request.client.host:
        owner = f"ip:{request.client.host}"
    else:
        owner = "anonymous"
    return f"{owner}:{(field or 'live').strip() or 'live'}"


@router.get("/jobs/live", response_model=list[JobPosting])
def live_jobs(
    request: Request,
    response: Response,
    keyword: str = Query(default=DEFAULT_KEYWORD, max_length=200),
    location: str | None = Query(default=None, max_length=200),
    page: int = Query(default=1, ge=1, le=50),
    region: str | None = Query(default=None, max_length=100),
    x_search_seq: int | None = Header(default=None, alias="X-Search-Seq", ge=0),
    x_search_scope: str | None = Header(default=None, alias="X-Search-Scope", max_length=100),
    user: CurrentUser | None = Depends(get_optional_user),
    service: JobListingService = Depends(get_job_listing_service),
    store: JobStore = Depends(get_store),
    sequencer: SearchSequencer = Depends(get_search_sequencer),
):
    effective_region = (region or "").strip() or None
    if effective_region is None and user is not None:
        profile = store.get_user(user.id)
        effective_region = profile.region if profile else None

    scope = _search_scope(request, user, x_search_scope)
    fresh = sequencer.register(scope, x_search_seq) if x_search_seq is not None else True

    try:
        result = service.get_live_jobs(keyword, location, page, fallback_region=effective_region)
    except JobSearchError as exc:
        raise HTTPException(status_code=exc.status_code, detail=f"Failed to fetch live jobs: {exc}") from exc

    response.headers["X-Jobs-Source"] = result.source
    if x_search_seq is not None:
        stale = not fresh or not sequencer.is_latest(scope, x_search_seq)
        response.headers["X-Search-Seq"] = str(x_search_seq)
        response.headers["X-Search-Stale"] = "true" if stale else "false"

    return filter_by_region(result.jobs, effective_region)


@router.get("/jobs", response_model=list[JobPosting])
def search_jobs(
    role: str | None = Query(default=None, max_length=200),
    company: str | None = Query(default=None, max_length=200),
    skills: str | None = Query(default=None, max_length=1000),
    state: str | None = Query(default=None, max_length=100),
    job_type: JobType | None = Query(default=None, alias="type"),
    local_jobs: LocalJobSearch = Depends(get_local_job_search),
):
    if state and not is_known_state(state):
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Invalid state parameter")
    return local_jobs.search(
        role=role,
        company=company,
        skills=split_skills(skills) if skills else None,
        state=state,
        job_type=job_type,
    )


@router.get("/jobs/latest", response_model=list[JobPosting])
def latest_jobs(store: JobStore = Depends(get_store)):
    return store.latest_jobs(limit=10)


@router.get("/jobs/{job_id}", response_model=JobPosting)
def get_job(job_id: str, store: JobStore = Depends(get_store)):
    job = store.get_job(job_id)
    if job is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Job not found")
    return job


@router.post("/jobs", response_model=JobPosting, status_code=status.HTTP_201_CREATED)
def create_job(
    payload: JobCreateRequest,
    admin: CurrentUser = Depends(require_admin),
    store: JobStore = Depends(get_store),
    local_jobs: LocalJobSearch = Depends(get_local_job_search),
):
    job = store.create_job(payload.model_dump(), posted_by=admin.id)
    local_jobs.invalidate()
    logger.info("job_created id=%s by=%s", job.id, admin.id)
    return job


@router.put("/jobs/{job_id}", response_model=JobPosting)
def update_job(
    job_id: str,
    payload: JobUpdateRequest,
    admin: CurrentUser = Depends(require_admin),
    store: JobStore = Depends(get_store),
    local_jobs: LocalJobSearch = Depends(get_local_job_search),
):
    changes = {key: value for key, value in payload.model_dump(exclude_unset=True).items() if value is not None}
    job = store.update_job(job_id, changes)
    if job is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Job not found")
    local_jobs.invalidate()
    logger.info("job_updated id=%s by=%s", job_id, admin.id)
    return job


@router.delete("/jobs/{job_id}", response_model=JobDeleteResponse)
def delete_job(
    job_id: str,
    admin: CurrentUser = Depends(require_admin),
    store: JobStore = Depends(get_store),
    local_jobs: LocalJobSearch = Depends(get_local_job_search),
):
    if not store.delete_job(job_id):
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Job not found")
    local_jobs.invalidate()
    logger.info("job_deleted id=%s by=%s", job_id, admin.id)
    return JobDeleteResponse(message="Job deleted successfully")
