"""Render-data loading (YAML files, --set pairs) and environment settings."""

from __future__ import annotations

import logging
import os
from pathlib import Path

import yaml

logger = logging.getLogger(__name__)

DEFAULT_FIGURE_KEY = "figure"


def figure_key() -> str:
    """Data key the serialised figure is stored under, respecting PLOTSCRIPT_FIGURE_KEY."""
    return os.environ.get("PLOTSCRIPT_FIGURE_KEY") or DEFAULT_FIGURE_KEY


def load_data(path: str | Path) -> dict[str, str]:
    """Load render data from a YAML mapping of names to scalar values.

    Values are converted with ``str()``; ``null`` becomes the empty string.
    Nested mappings or lists raise ``ValueError`` since placeholders can only
    name a flat key.
    """
    with open(path, encoding="utf-8") as f:
        raw = yaml.safe_load(f)

    if raw is None:
        return {}
    if not isinstance(raw, dict):
        raise ValueError(f"Data YAML must be a mapping, got {type(raw).__name__}")

    data: dict[str, str] = {}
    for key, value in raw.items():
        if isinstance(value, (dict, list)):
            raise ValueError(
                f"Value for {key!r} must be a scalar, got {type(value).__name__}"
            )
        data[str(key)] = "" if value is None else str(value)

    logger.debug("Loaded %d data keys from %s", len(data), path)
    return data


def parse_assignments(pairs: list[str] | None) -> dict[str, str]:
    """Parse ``key=value`` strings; later pairs override earlier ones."""
    data: dict[str, str] = {}
    for pair in pairs or []:
        key, sep, value = pair.partition("=")
        if not sep:
            raise ValueError(f"Expected key=value, got {pair!r}")
        data[key] = value
    return data
