"""Handle normalization utilities."""

from __future__ import annotations

import re

from ..platforms import Platform

HANDLE_PATTERN = re.compile(r"^[A-Za-z0-9_]{1,30}$")
MAX_VARIATIONS = 5


def validate_handle(value: str) -> bool:
    """Whether `value` is an acceptable base handle (1-30 letters, digits, underscores)."""
    return bool(HANDLE_PATTERN.match(value or ""))


def normalize_handle(value: str) -> str:
    """
    Clean user input into a candidate handle.

    - Strip whitespace
    - Drop a leading "@" or "u/"
    """
    raw = (value or "").strip()
    if raw.lower().startswith("u/"):
        raw = raw[2:]
    return raw.lstrip("@")


def format_handle(handle: str, platform: Platform | str) -> str:
    """Render a handle the way the platform displays it."""
    return Platform.parse(platform).display_handle(handle)


def generate_handle_variations(base: str) -> list[str]:
    """
    Suggest alternatives for a handle that may be taken.

    Returns at most five unique variations, never the base itself.
    """
    clean = (base or "").strip().lower()
    if not clean:
        return []

    candidates: list[str] = []
    if len(clean) > 3:
        candidates.extend([f"{clean}app", f"{clean}hq", f"{clean}official"])
    candidates.extend([f"{clean}2024", f"{clean}1"])
    if "_" not in clean:
        candidates.append(f"{clean}_official")

    variations: list[str] = []
    for candidate in candidates:
        if candidate != clean and candidate not in variations and validate_handle(candidate):
            variations.append(candidate)
    return variations[:MAX_VARIATIONS]
