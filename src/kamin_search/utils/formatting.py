"""Display helpers turning result URIs into readable titles."""

from __future__ import annotations

import re

_HTML_SUFFIX = ".html"
_CAMEL_BOUNDARY = re.compile(r"([a-z])([A-Z])")
_DIGIT_RUN = re.compile(r"(\d+)")


def format_url(url: str) -> str:
    """Return a human readable title for ``url``.

    The last path segment is kept, anything from ``.html`` on is dropped, a
    space is inserted before camel-case humps and digit runs, hyphens become
    spaces and the first character is upper-cased::

        >>> format_url("https://x/y/HelloWorld123.html")
        'Hello World 123'
    """
    segment = url.split("/")[-1]
    segment = segment.split(_HTML_SUFFIX)[0]
    segment = _CAMEL_BOUNDARY.sub(r"\1 \2", segment)
    segment = _DIGIT_RUN.sub(r" \1", segment)
    segment = segment.replace("-", " ")
    return segment[:1].upper() + segment[1:]


def format_score(score: float) -> str:
    """Render a relevance score in ``[0, 1]`` as a one-decimal percentage."""
    return f"{score * 100:.1f}%"


__all__ = ["format_url", "format_score"]
