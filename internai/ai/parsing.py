from __future__ import annotations

import json
import logging
from typing import Any

from internai.ai.types import AIResponseParseError

logger = logging.getLogger(__name__)


def extract_json_block(text: str) -> dict[str, Any]:
    start = text.find("{")
    end = text.rfind("}")
    if start == -1 or end == -1 or end < start:
        raise AIResponseParseError("Failed to parse AI response: No JSON block found")
    try:
        parsed = json.loads(text[start : end + 1])
    except json.JSONDecodeError as exc:
        raise AIResponseParseError(f"Failed to parse AI response: {exc}") from exc
    if not isinstance(parsed, dict):
        raise AIResponseParseError("Failed to parse AI response: expected a JSON object")
    return parsed


def parse_json_response(text: str | None) -> dict[str, Any]:
    """Parse a model reply as a JSON object.

    Falls back to the span between the first ``{`` and the last ``}`` for
    replies wrapped in prose or markdown fences.
    """
    raw = text or ""
    try:
        parsed = json.loads(raw)
        if isinstance(parsed, dict):
            return parsed
    except json.JSONDecodeError:
        pass

    try:
        return extract_json_block(raw)
    except AIResponseParseError:
        logger.warning("ai_json_extraction_failed chars=%s", len(raw))
        logger.debug("ai_raw_response=%r", raw[:2000])
        raise


def text_list(value: Any) -> list[str]:
    """Coerce a model field that should be a list of strings.

    A bare string becomes a one-item list; other non-list values are dropped.
    """
    if isinstance(value, str):
        return [value.strip()] if value.strip() else []
    if not isinstance(value, list):
        return []
    return [str(item).strip() for item in value if item is not None and str(item).strip()]
