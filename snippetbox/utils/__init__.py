"""Utility functions for Snippetbox."""

from snippetbox.utils.tags import normalize_tags, parse_positive_int, parse_tag_list

__all__ = [
    "normalize_tags",
    "parse_positive_int",
    "parse_tag_list",
]
