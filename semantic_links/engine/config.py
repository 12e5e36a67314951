"""Configuration helpers for the semantic linking engine."""

from __future__ import annotations

import copy
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict

import yaml


@dataclass(frozen=True)
class EngineConfig:
    """Typed wrapper around the engine configuration dictionary."""

    raw: Dict[str, Any] = field(default_factory=dict)

    def get(self, key: str, default: Any = None) -> Any:
        return self.raw.get(key, default)

    def get_int(self, key: str) -> int:
        return int(self.raw.get(key, DEFAULTS[key]))


# Scoring weights and edge thresholds are constants in ``scoring``.
DEFAULTS: Dict[str, Any] = {
    "download_tagger_data": False,
    "max_concepts": 25,
    "max_tagged_concepts": 15,
    "max_capitalized_concepts": 10,
    "key_topics_limit": 8,
    "graph_workers": 4,
    "parallel_min_pairs": 5000,
    "recommendation_limit": 5,
    "suggestion_limit": 5,
    "selection_limit": 3,
    "matched_concepts_limit": 5,
    "writing_suggestions_limit": 10,
    "excerpt_window": 100,
    "search_limit": 10,
    "browse_limit": 50,
}


def load_config(path: str | Path | None = None) -> EngineConfig:
    """Load configuration from YAML, merging with defaults."""

    data: Dict[str, Any] = copy.deepcopy(DEFAULTS)

    if path and Path(path).is_file():
        with Path(path).open("r", encoding="utf-8") as stream:
            user = yaml.safe_load(stream) or {}
        merge_into(data, user)

    return EngineConfig(data)


def merge_into(base: Dict[str, Any], override: Dict[str, Any]) -> None:
    """Recursively merge override into base dict."""

    for key, value in override.items():
        if isinstance(value, dict) and isinstance(base.get(key), dict):
            merge_into(base[key], value)
        else:
            base[key] = value
