from __future__ import annotations

import logging
from typing import Any, Sequence

from internai.ai.parsing import parse_json_response, text_list
from internai.ai.prompts import ROADMAP_SYSTEM_PROMPT, build_roadmap_prompt
from internai.ai.types import AIClient, ChatMessage
from internai.catalog import flatten_bundle, get_resources_for_role, normalize_skills
from internai.schemas.ai import CareerRoadmap, CareerRoadmapPhase, LearningResource

logger = logging.getLogger(__name__)

DEFAULT_ROADMAP_SKILLS = ("Software Development", "Problem Solving", "Communication")


def _phases(raw: Any) -> list[CareerRoadmapPhase]:
    if not isinstance(raw, list):
        return []
    phases = []
    for index, item in enumerate(raw, start=1):
        if not isinstance(item, dict):
            continue
        phases.append(
            CareerRoadmapPhase(
                month=str(item.get("month") or f"Phase {index}"),
                topics=text_list(item.get("topics")),
                actionItems=text_list(item.get("actionItems")),
            )
        )
    return phases


def generate_roadmap(llm: AIClient, dream_job: str, skills: Sequence[str] | None) -> CareerRoadmap:
    """Ask the model for a three-phase plan and attach curated resources.

    Model-suggested links are dropped in favour of the curated bundle for the
    role, so every resource shown is a known-good link.
    """
    dream_job = dream_job.strip()
    user_skills = normalize_skills(skills) or list(DEFAULT_ROADMAP_SKILLS)
    messages = [
        ChatMessage(role="system", content=ROADMAP_SYSTEM_PROMPT),
        ChatMessage(role="user", content=build_roadmap_prompt(dream_job, user_skills)),
    ]
    raw = llm.complete(messages, temperature=0.7, max_tokens=2048, json_mode=True)
    result = parse_json_response(raw)

    resources = [LearningResource(**item) for item in flatten_bundle(get_resources_for_role(dream_job))]
    logger.info("roadmap_generated dream_job=%s resources=%s", dream_job, len(resources))
    return CareerRoadmap(
        dreamJob=dream_job,
        phases=_phases(result.get("phases")),
        recommendedResources=resources,
    )
