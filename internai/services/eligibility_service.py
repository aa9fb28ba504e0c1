from __future__ import annotations

import logging
from typing import Any, Sequence

from internai.ai.parsing import parse_json_response, text_list
from internai.ai.prompts import (
    ANALYZE_SYSTEM_PROMPT,
    ELIGIBILITY_SYSTEM_PROMPT,
    build_analyze_prompt,
    build_eligibility_prompt,
)
from internai.ai.types import AIClient, ChatMessage
from internai.catalog import get_resources_for_role, normalize_key, normalize_skills, sanitize_link
from internai.schemas.ai import (
    ELIGIBILITY_THRESHOLD,
    AnalyzeResponse,
    Certification,
    EligibilityReport,
    InterviewQuestion,
    LearningResource,
    Roadmap,
    RoadmapPhase,
)
from internai.schemas.users import UserProfile

logger = logging.getLogger(__name__)

DEFAULT_ANALYZE_SKILLS = ("React", "JavaScript", "Node.js", "Web Technologies")


def clamp_score(value: Any) -> int:
    try:
        score = int(round(float(value)))
    except (TypeError, ValueError, OverflowError):
        return 0
    return max(0, min(100, score))


def is_eligible(score: int) -> bool:
    return score >= ELIGIBILITY_THRESHOLD


def _string_list(value: Any) -> list[str]:
    if isinstance(value, str):
        value = value.split(",")
    if not isinstance(value, list):
        return []
    return normalize_skills(str(item) for item in value if item is not None)


def _opt_str(value: Any) -> str | None:
    if value is None:
        return None
    text = str(value).strip()
    return text or None


def split_matched_missing(matched: Any, missing: Any) -> tuple[list[str], list[str]]:
    """Deduplicate both lists; a skill reported in both counts as matched."""
    matched_list = _string_list(matched)
    matched_keys = {normalize_key(skill) for skill in matched_list}
    missing_list = [skill for skill in _string_list(missing) if normalize_key(skill) not in matched_keys]
    return matched_list, missing_list


def _resource_list(items: Any, link_type: str) -> list[dict[str, Any]]:
    if not isinstance(items, list):
        return []
    cleaned = []
    for item in items:
        if isinstance(item, dict) and str(item.get("name") or "").strip():
            cleaned.append(sanitize_link(item, link_type))
    return cleaned


def _build_phase(index: int, step: dict[str, Any]) -> RoadmapPhase:
    playlist = step.get("youtubePlaylist")
    youtube = None
    if isinstance(playlist, dict) and str(playlist.get("name") or "").strip():
        youtube = LearningResource(**sanitize_link(playlist, "youtube"))

    return RoadmapPhase(
        title=str(step.get("phase") or step.get("title") or f"Phase {index}"),
        skills=_string_list(step.get("skills")),
        tasks=text_list(step.get("tasks")),
        youtubePlaylist=youtube,
        resources=[LearningResource(**item) for item in _resource_list(step.get("resources"), "resource")],
        certifications=[
            Certification(
                name=item["name"],
                url=item["url"],
                provider=_opt_str(item.get("provider")),
                isFree=item.get("isFree") if isinstance(item.get("isFree"), bool) else None,
            )
            for item in _resource_list(step.get("certifications"), "certification")
        ],
    )


def build_roadmap(raw: Any) -> Roadmap | None:
    if not isinstance(raw, dict):
        return None
    steps = [step for step in raw.get("steps") or [] if isinstance(step, dict)]
    return Roadmap(
        title=str(raw.get("title") or "Path to becoming eligible"),
        duration=str(raw["duration"]) if raw.get("duration") else None,
        steps=[_build_phase(i, step) for i, step in enumerate(steps, start=1)],
    )


def _interview_questions(raw: Any) -> list[InterviewQuestion]:
    if not isinstance(raw, list):
        return []
    questions = []
    for item in raw:
        if isinstance(item, dict) and item.get("question"):
            questions.append(
                InterviewQuestion(
                    question=str(item["question"]),
                    category=_opt_str(item.get("category")),
                    difficulty=_opt_str(item.get("difficulty")),
                    tips=_opt_str(item.get("tips")),
                )
            )
    return questions


def curated_resources(role: str) -> dict[str, list[LearningResource]]:
    bundle = get_resources_for_role(role)
    return {category: [LearningResource(**item) for item in items] for category, items in bundle.items()}


def evaluate(llm: AIClient, skills: Sequence[str] | None, job: dict[str, Any]) -> EligibilityReport:
    """Compare ``skills`` against ``job`` with one model call.

    The score is clamped to 0..100 and eligibility is derived from it, whatever
    the model claimed. Reports are not cached.
    """
    user_skills = normalize_skills(skills)
    messages = [
        ChatMessage(role="system", content=ELIGIBILITY_SYSTEM_PROMPT),
        ChatMessage(role="user", content=build_eligibility_prompt(job, user_skills)),
    ]
    raw = llm.complete(messages, temperature=0.7, max_tokens=2048, json_mode=True)
    result = parse_json_response(raw)

    score = clamp_score(result.get("eligibilityScore", result.get("score")))
    matched, missing = split_matched_missing(result.get("matchedSkills"), result.get("missingSkills"))
    logger.info("eligibility_evaluated title=%s score=%s skills=%s", job.get("title"), score, len(user_skills))

    return EligibilityReport(
        score=score,
        isEligible=is_eligible(score),
        matchedSkills=matched,
        missingSkills=missing,
        requiredSkills=_string_list(result.get("requiredSkills")),
        summary=str(result.get("summary") or ""),
        interviewQuestions=_interview_questions(result.get("interviewQuestions")),
        roadmap=build_roadmap(result.get("roadmap")),
        curatedResources=curated_resources(str(job.get("title") or "")),
    )


def analyze_job_description(llm: AIClient, profile: UserProfile | None, jd_text: str) -> AnalyzeResponse:
    skills = list(profile.skills) if profile and profile.skills else list(DEFAULT_ANALYZE_SKILLS)
    prompt_profile = {
        "name": (profile.name if profile and profile.name else "Guest User"),
        "skills": skills,
    }
    messages = [
        ChatMessage(role="system", content=ANALYZE_SYSTEM_PROMPT),
        ChatMessage(role="user", content=build_analyze_prompt(prompt_profile, jd_text)),
    ]
    raw = llm.complete(messages, temperature=0.7, max_tokens=2048, json_mode=True)
    result = parse_json_response(raw)

    score = clamp_score(result.get("matchPercentage"))
    matched, missing = split_matched_missing(result.get("matchedSkills"), result.get("missingSkills"))
    return AnalyzeResponse(
        title=str(result.get("title") or ""),
        company=str(result.get("company") or ""),
        location=str(result.get("location") or ""),
        matchPercentage=score,
        matchedSkills=matched,
        missingSkills=missing,
        isEligible=is_eligible(score),
        advice=str(result.get("advice") or ""),
    )
