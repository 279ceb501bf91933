"""Tag and query-parameter normalization helpers."""

from __future__ import annotations

from collections.abc import Iterable


def normalize_tags(tags: Iterable[str]) -> list[str]:
    """Lowercase and trim tags, dropping blanks and duplicates.

    First occurrence wins, so the result keeps the caller's ordering.
    """
    seen: dict[str, None] = {}
    for tag in tags:
        cleaned = tag.strip().lower()
        if cleaned:
            seen.setdefault(cleaned, None)
    return list(seen)


def parse_tag_list(raw: str | None) -> list[str]:
    """Split a comma-separated tag filter into normalized tag names."""
    if not raw:
        return []
    return normalize_tags(raw.split(","))


def parse_positive_int(raw: object, default: int, maximum: int | None = None) -> int:
    """Parse a page/limit query value, clamping it to ``1..maximum``.

    Non-numeric input falls back to ``default``.
    """
    try:
        value = int(str(raw).strip()) if raw is not None else default
    except ValueError:
        value = default
    value = max(1, value)
    if maximum is not None:
        value = min(value, maximum)
    return value
