from __future__ import annotations

from typing import Mapping
from urllib.parse import quote

# Hosts and paths the model emits when it does not know a real link.
PLACEHOLDER_PATTERNS = (
    "actual-url.com",
    "example.com",
    "youtube.com/video",
    "...",
)

# encodeURIComponent leaves these unescaped; keep links identical to the web client.
_URI_COMPONENT_SAFE = "-_.!~*'()"


def _encode(value: str) -> str:
    return quote(value, safe=_URI_COMPONENT_SAFE)


def is_placeholder_url(url: str | None) -> bool:
    text = (url or "").strip().lower()
    if not text:
        return True
    return any(pattern in text for pattern in PLACEHOLDER_PATTERNS)


def fallback_url(name: str, link_type: str = "resource") -> str:
    query = _encode((name or "").strip())
    if link_type == "youtube":
        return f"https://www.youtube.com/results?search_query={query}+tutorial"
    if link_type == "certification":
        return f"https://www.coursera.org/search?query={query}"
    return f"https://www.google.com/search?q={query}+learning+resources"


def sanitize_link(resource: Mapping[str, object] | None, link_type: str = "resource") -> dict[str, object]:
    """Return a copy of ``resource`` whose url resolves.

    Placeholder URLs are replaced by a search URL built from the resource name.
    URLs missing a protocol, or using plain http, are moved to ``https://``.
    Extra keys (provider, isFree) are kept.
    """
    data = dict(resource or {})
    name = str(data.get("name") or "").strip()
    url = str(data.get("url") or "").strip()

    if is_placeholder_url(url):
        url = fallback_url(name, link_type)
    elif url.lower().startswith("http://"):
        url = "https://" + url[len("http://") :]
    elif not url.lower().startswith("https://"):
        url = "https://" + url.lstrip("/")

    data["name"] = name
    data["url"] = url
    return data
