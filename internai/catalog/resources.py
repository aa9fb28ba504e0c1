from __future__ import annotations

import json
from pathlib import Path
from typing import Any, TypeVar

from .normalizer import normalize_key

DEFAULT_ROLE = "Full Stack Developer"
BUNDLE_CATEGORIES = ("youtube", "courses", "certifications", "documentation")

ResourceBundle = dict[str, list[dict[str, str]]]

T = TypeVar("T")


def load_role_table(path: Path) -> dict[str, Any]:
    with path.open("r", encoding="utf-8") as handle:
        raw = json.load(handle)
    if not isinstance(raw, dict):
        raise ValueError(f"{path.name} must contain a JSON object keyed by role")
    return raw


def match_role(table: dict[str, T], role: str | None, default_role: str = DEFAULT_ROLE) -> T:
    """Exact match, then first bidirectional substring match, then the default.

    Substring ties are resolved by declaration order in ``table``.
    """
    stripped = (role or "").strip()
    if stripped in table:
        return table[stripped]

    lower_role = normalize_key(stripped)
    if lower_role:
        for key, value in table.items():
            lower_key = normalize_key(key)
            if lower_role in lower_key or lower_key in lower_role:
                return value

    return table[default_role]


class ResourceCatalog:
    def __init__(self, resources_path: str | Path | None = None) -> None:
        path = Path(resources_path) if resources_path else Path(__file__).with_name("learning_resources.json")
        self._bundles: dict[str, ResourceBundle] = self._load(path)

    @staticmethod
    def _load(path: Path) -> dict[str, ResourceBundle]:
        raw = load_role_table(path)
        bundles: dict[str, ResourceBundle] = {}
        for role, bundle in raw.items():
            bundles[str(role)] = {
                category: [
                    {"name": str(item["name"]), "url": str(item["url"])}
                    for item in (bundle.get(category) or [])
                ]
                for category in BUNDLE_CATEGORIES
            }
        if DEFAULT_ROLE not in bundles:
            raise ValueError(f"learning resources must define '{DEFAULT_ROLE}'")
        return bundles

    @property
    def roles(self) -> list[str]:
        return list(self._bundles)

    def get_resources_for_role(self, role: str | None) -> ResourceBundle:
        return match_role(self._bundles, role)


def flatten_bundle(bundle: ResourceBundle) -> list[dict[str, str]]:
    flat: list[dict[str, str]] = []
    for category in BUNDLE_CATEGORIES:
        flat.extend(dict(item) for item in bundle.get(category, []))
    return flat
