from __future__ import annotations

import re
from typing import Iterable

_WS_RE = re.compile(r"\s+")


def normalize_key(raw: str | None) -> str:
    """Lower-case and strip a skill or role. Empty input gives ``""``."""
    return (raw or "").strip().lower()


def normalize_query(raw: str | None) -> str:
    return _WS_RE.sub(" ", normalize_key(raw))


def normalize_skills(skills: Iterable[str] | None) -> list[str]:
    seen: set[str] = set()
    result: list[str] = []
    for skill in skills or []:
        if not isinstance(skill, str):
            continue
        key = normalize_key(skill)
        if not key or key in seen:
            continue
        seen.add(key)
        result.append(skill.strip())
    return result


def split_skills(raw: str | None) -> list[str]:
    return normalize_skills((raw or "").split(","))
