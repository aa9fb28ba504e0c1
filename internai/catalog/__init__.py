from functools import lru_cache

from .interview_questions import InterviewQuestionBank, count_questions
from .links import fallback_url, is_placeholder_url, sanitize_link
from .normalizer import normalize_key, normalize_query, normalize_skills, split_skills
from .resources import DEFAULT_ROLE, ResourceBundle, ResourceCatalog, flatten_bundle


@lru_cache(maxsize=1)
def get_default_catalog() -> ResourceCatalog:
    return ResourceCatalog()


@lru_cache(maxsize=1)
def get_default_question_bank() -> InterviewQuestionBank:
    return InterviewQuestionBank()


def get_resources_for_role(role: str | None) -> ResourceBundle:
    return get_default_catalog().get_resources_for_role(role)


__all__ = [
    "DEFAULT_ROLE",
    "InterviewQuestionBank",
    "ResourceBundle",
    "ResourceCatalog",
    "count_questions",
    "fallback_url",
    "flatten_bundle",
    "get_default_catalog",
    "get_default_question_bank",
    "get_resources_for_role",
    "is_placeholder_url",
    "normalize_key",
    "normalize_query",
    "normalize_skills",
    "sanitize_link",
    "split_skills",
]
