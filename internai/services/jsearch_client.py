from __future__ import annotations

import logging
import re
from datetime import datetime
from typing import Any

import httpx
from pydantic import ValidationError

from internai.core.config import looks_like_placeholder
from internai.schemas.jobs import JobPosting

logger = logging.getLogger(__name__)

_DESCRIPTION_PREVIEW_CHARS = 200


class JobSearchError(RuntimeError):
    def __init__(self, message: str, *, code: str = "job_search_unavailable", status_code: int = 502):
        super().__init__(message)
        self.code = code
        self.status_code = status_code


def _parse_datetime(value: Any) -> datetime | None:
    if not value or not isinstance(value, str):
        return None
    try:
        return datetime.fromisoformat(value.replace("Z", "+00:00"))
    except ValueError:
        return None


def _preview(text: Any) -> str:
    text = str(text or "").strip()
    if len(text) <= _DESCRIPTION_PREVIEW_CHARS:
        return text
    return text[:_DESCRIPTION_PREVIEW_CHARS] + "..."


def _logo_for(employer: str) -> str:
    slug = re.sub(r"\s+", "", employer).lower()
    return f"https://logo.clearbit.com/{slug}.com"


def map_jsearch_job(raw: dict[str, Any]) -> JobPosting:
    employer = str(raw.get("employer_name") or "Unknown")
    location = " ".join(
        str(part) for part in (raw.get("job_city"), raw.get("job_state"), raw.get("job_country")) if part
    ).strip()
    salary = raw.get("job_min_salary") or raw.get("job_max_salary")
    expires = _parse_datetime(raw.get("job_offer_expiration_datetime_utc"))

    return JobPosting(
        id=str(raw.get("job_id") or ""),
        title=str(raw.get("job_title") or ""),
        company=employer,
        location=location,
        description=_preview(raw.get("job_description")),
        workMode="Remote" if raw.get("job_is_remote") else "On-site",
        compensation=f"₹{salary}" if salary else "Paid",
        sourceAt=_parse_datetime(raw.get("job_posted_at_datetime_utc")),
        duration="Flexible",
        applyBy=expires.date().isoformat() if expires else "ASAP",
        link=raw.get("job_apply_link"),
        logo=raw.get("employer_logo") or _logo_for(employer),
        source="live",
    )


def mock_postings(location: str | None) -> list[JobPosting]:
    where = (location or "").strip() or "Bengaluru Urban"
    now = datetime.now().astimezone()
    return [
        JobPosting(
            id="mock_v2_1",
            title="Python Full Stack Using AI",
            company="KodNest Technologies Pvt Ltd",
            location=where,
            workMode="On-site",
            duration="4 Months",
            compensation="₹23,999",
            description="A 4-month project-driven Python internship where VTU students build one complete system...",
            applyBy="2026-05-31",
            link="https://kodnest.com",
            sourceAt=now,
            source="mock",
            logo="https://logo.clearbit.com/kodnest.com",
        ),
        JobPosting(
            id="mock_v2_2",
            title="Data Science Using AI Internship",
            company="KodNest Technologies Pvt Ltd",
            location=where,
            workMode="Hybrid",
            duration="4 Months",
            compensation="₹23,999",
            description="A 4-month beginner-friendly data science internship where VTU students build one insight...",
            applyBy="2026-03-31",
            link="https://kodnest.com",
            sourceAt=now,
            source="mock",
            logo="https://logo.clearbit.com/kodnest.com",
        ),
    ]


class JSearchClient:
    """RapidAPI JSearch wrapper. One request per call, no retries."""

    def __init__(
        self,
        api_key: str | None,
        host: str = "jsearch.p.rapidapi.com",
        timeout_s: float = 15.0,
        transport: httpx.BaseTransport | None = None,
    ):
        self._api_key = (api_key or "").strip()
        self._host = host
        self._timeout_s = timeout_s
        self._transport = transport
        self._client: httpx.Client | None = None

    def is_configured(self) -> bool:
        return not looks_like_placeholder(self._api_key)

    def _get_client(self) -> httpx.Client:
        if self._client is None:
            self._client = httpx.Client(
                base_url=f"https://{self._host}",
                timeout=self._timeout_s,
                transport=self._transport,
                headers={
                    "X-RapidAPI-Key": self._api_key,
                    "X-RapidAPI-Host": self._host,
                },
            )
        return self._client

    def search(self, keyword: str, location: str | None, page: int = 1) -> list[JobPosting]:
        params = {
            "query": f"{keyword} in {location or 'India'}",
            "page": str(page),
            "num_pages": "1",
        }
        try:
            response = self._get_client().get("/search", params=params)
            response.raise_for_status()
            payload = response.json()
        except httpx.HTTPStatusError as exc:
            logger.warning("jsearch_http_error status=%s keyword=%s", exc.response.status_code, keyword)
            raise JobSearchError(f"Job search returned {exc.response.status_code}") from exc
        except (httpx.HTTPError, ValueError) as exc:
            logger.warning("jsearch_request_failed keyword=%s: %s", keyword, exc)
            raise JobSearchError(f"Job search request failed: {exc}") from exc

        data = payload.get("data") if isinstance(payload, dict) else None
        if not isinstance(data, list):
            raise JobSearchError("Job search returned an unexpected payload")
        jobs: list[JobPosting] = []
        for item in data:
            if not isinstance(item, dict):
                continue
            try:
                jobs.append(map_jsearch_job(item))
            except ValidationError as exc:
                logger.warning("jsearch_item_skipped job_id=%s: %s", item.get("job_id"), exc.errors()[:1])
        if data and not jobs:
            raise JobSearchError("Job search returned no usable postings")
        return jobs

    def close(self) -> None:
        if self._client is not None:
            self._client.close()
            self._client = None
