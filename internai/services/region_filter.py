from __future__ import annotations

from typing import Sequence, TypeVar

from internai.catalog.normalizer import normalize_key
from internai.schemas.jobs import JobPosting

J = TypeVar("J", bound=JobPosting)


def filter_by_region(jobs: Sequence[J], region: str | None) -> list[J]:
    """Keep postings located in ``region`` or marked remote.

    With no region every posting passes, in input order.
    """
    wanted = normalize_key(region)
    if not wanted:
        return list(jobs)

    kept: list[J] = []
    for job in jobs:
        location = normalize_key(job.location)
        if wanted in location or "remote" in location:
            kept.append(job)
    return kept
