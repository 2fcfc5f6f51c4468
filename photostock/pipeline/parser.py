"""
Invoice block scanner.

Pulls ``INV#: <token> ... Total: RM <amount>`` blocks out of pasted build
sheets. One block becomes one :class:`Entry`.
"""
from __future__ import annotations

import logging
import re
from typing import Optional

from photostock.schemas import Entry

logger = logging.getLogger(__name__)

INV_ANCHOR = "INV#:"
TOTAL_ANCHOR = "Total:"

_TOKEN = re.compile(r"\s*(\S+)")
_AMOUNT = re.compile(r"\s*RM\s?([0-9,]+)", re.IGNORECASE)


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

def clean_inv_number(token: str) -> str:
    return token.replace("-", "")


def clean_total(digits: str) -> str:
    """``'1,234'`` -> ``'RM1234'``."""
    return "RM" + re.sub(r"[\s,]", "", digits)


def _read_token(text: str, pos: int) -> Optional[tuple[str, int]]:
    """Read the invoice token after an ``INV#:`` anchor ending at *pos*."""
    m = _TOKEN.match(text, pos)
    if not m:
        return None
    token, end = m.group(1), m.end(1)
    # A token glued to the total ("AG497-24Total:") stops at the anchor
    cut = token.find(TOTAL_ANCHOR, 1)
    if cut > 0:
        token, end = token[:cut], m.start(1) + cut
    return token, end


def _find_total(text: str, pos: int) -> Optional[re.Match[str]]:
    """Return the amount match of the first well-formed ``Total:`` at or after *pos*."""
    while True:
        idx = text.find(TOTAL_ANCHOR, pos)
        if idx < 0:
            return None
        m = _AMOUNT.match(text, idx + len(TOTAL_ANCHOR))
        if m:
            return m
        pos = idx + 1


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------

def parse_entries(text: str, location: str = "") -> list[Entry]:
    """Extract every invoice block from *text*.

    Blocks never overlap. An ``INV#:`` anchor with no well-formed ``Total:``
    after it is skipped and scanning resumes at the next anchor. The search
    for ``Total:`` does not stop at other ``INV#:`` anchors, so an invoice
    missing its own total swallows the next block.
    """
    entries: list[Entry] = []
    if not text:
        return entries

    pos = 0
    while True:
        start = text.find(INV_ANCHOR, pos)
        if start < 0:
            break

        token = _read_token(text, start + len(INV_ANCHOR))
        amount = _find_total(text, token[1]) if token else None
        if amount is None:
            pos = start + 1
            continue

        entries.append(
            Entry(
                inv_number=clean_inv_number(token[0]),
                total=clean_total(amount.group(1)),
                original_content=text[start:amount.end()].strip(),
                nas_location=location,
            )
        )
        pos = amount.end()

    logger.info("Parsed %d invoice entries", len(entries))
    return entries
