"""Name and summary formatting helpers."""

from __future__ import annotations

import re

_ACRONYM_BOUNDARY = re.compile(r"([A-Z]+)([A-Z][a-z])")
_WORD_BOUNDARY = re.compile(r"([a-z\d])([A-Z])")


def underscore(name: str) -> str:
    """Convert a qualified constant name to a snake_case path.

    Examples:
        Post -> post
        Blog::HTMLPost -> blog/html_post
        SuperCustomPost -> super_custom_post
    """
    path = name.removeprefix("::").replace("::", "/")
    path = _ACRONYM_BOUNDARY.sub(r"\1_\2", path)
    path = _WORD_BOUNDARY.sub(r"\1_\2", path)
    return path.replace("-", "_").lower()


def pluralize(count: int, singular: str, plural: str | None = None) -> str:
    """``3 models``, ``1 model``. Irregular plurals are passed explicitly."""
    if count == 1:
        return f"1 {singular}"
    return f"{count} {plural or singular + 's'}"


def format_duration(seconds: float) -> str:
    """Elapsed time for task lines: ``0.3s`` under a minute, ``1m 30s`` above."""
    if seconds < 0:
        raise ValueError(f"Negative duration: {seconds}")
    if seconds >= 60:
        minutes, rest = divmod(int(seconds), 60)
        return f"{minutes}m {rest}s"
    return f"{seconds:.1f}s"
