"""
Text helpers for upstream-provided strings.
"""

import re
from typing import Optional

_TAG_RE = re.compile(r"<[^>]*>")


def strip_html(value: Optional[str]) -> str:
    """Remove angle-bracket tags and surrounding whitespace."""
    if not value:
        return ""
    return _TAG_RE.sub("", str(value)).strip()
