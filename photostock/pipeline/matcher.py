"""
Match uploaded photos to invoices by filename.

Photos are named after the invoice, e.g. ``RM10360_AG49724.jpg`` for
``INV#: AG497-24``. Re-uploads may carry a ``(1)`` style suffix.
"""
from __future__ import annotations

import re
from typing import Any, Iterable, Optional


def candidate_name(candidate: Any) -> str:
    """Filename of an upload, or the candidate itself when it is a string."""
    if isinstance(candidate, str):
        return candidate
    return getattr(candidate, "filename", None) or ""


def _pattern(inv_number: str) -> re.Pattern[str]:
    return re.compile(rf"{re.escape(inv_number)}(?:\s*\(\d+\))?", re.IGNORECASE)


def match_image(inv_number: str, candidates: Iterable[Any]) -> Optional[Any]:
    """Return the first candidate whose filename contains *inv_number*."""
    if not inv_number:
        return None
    pattern = _pattern(inv_number)
    for candidate in candidates:
        if pattern.search(candidate_name(candidate)):
            return candidate
    return None
