"""
Identity normalization: comparable keys, slugs and sort names for artist names.
"""

import re

_NON_KEY_CHARS = re.compile(r"[^a-z0-9\s]")
_NON_SLUG_CHARS = re.compile(r"[^a-z0-9\s-]")
_WHITESPACE = re.compile(r"\s+")
_HYPHENS = re.compile(r"-+")


def normalize(name: str) -> str:
    """Comparable form: lowercase alphanumerics separated by single spaces"""
    key = _NON_KEY_CHARS.sub("", name.lower())
    return _WHITESPACE.sub(" ", key).strip()


def slugify(name: str) -> str:
    """URL slug, e.g. "Jeff Mills" -> "jeff-mills" """
    slug = _NON_SLUG_CHARS.sub("", name.lower())
    slug = _WHITESPACE.sub("-", slug)
    slug = _HYPHENS.sub("-", slug)
    return slug.strip("-")


def sort_key(name: str) -> str:
    """"Jeff Mills" -> "Mills, Jeff"; single-token names are returned as-is"""
    parts = name.split()
    if len(parts) <= 1:
        return name
    last = parts.pop()
    return f"{last}, {' '.join(parts)}"
