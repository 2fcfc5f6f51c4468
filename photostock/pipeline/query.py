"""
Search query cleaning.

Users paste whole lines from build sheets into the search box
(``RAM: GSKILL RIPJAWS 2x16GB [RGB] | RM 450``). The rules below strip the
sheet formatting so the remaining words can be matched against saved
invoices. The cleaning is lossy.
"""
from __future__ import annotations

import logging
import re

logger = logging.getLogger(__name__)

# Queries that target a structured field are used as typed
STRUCTURED_FIELD_MARKERS: list[re.Pattern[str]] = [
    re.compile(r"naslocation|\\", re.IGNORECASE),
    re.compile(r"\btotal\b", re.IGNORECASE),
    re.compile(r"created_at,\s*'%d/%m/%Y'", re.IGNORECASE),
    re.compile(r"\btotal,\s*'_',\s*invnumber\b", re.IGNORECASE),
]

CATEGORY_LABELS: list[str] = [
    "speaker",
    "accessories",
    "monitor & accessories",
    "powersupply (psu)",
    "peripherals",
    "gaming chair",
    "gaming desk",
    "software (optional)",
    "optical drive",
    "networking (wifi receiver)",
    "networking (wifi router)",
    "amd ryzen prcessor",
    "intel processor",
    "psu",
    "ram",
    "ssd",
    "hdd",
    "os",
    "powersupplyunit",
    "motherboard (intel)",
    "motherboard (amd)",
    "cooler",
    "graphic card",
    "case",
]

DESCRIPTIVE_WORDS: list[str] = [
    "dual chamber",
    "touchscreen",
    "atx case",
    "with",
    "cooling",
    "matte",
]


def _alternation(words: list[str]) -> str:
    return "|".join(re.escape(w) for w in words)


# (pattern, replacement), applied in order
CLEANING_RULES: list[tuple[re.Pattern[str], str]] = [
    (re.compile(r"\bgskill\b", re.IGNORECASE), "g.skill"),
    (re.compile(rf"\b(?:{_alternation(CATEGORY_LABELS)}):\s*", re.IGNORECASE), ""),
    (re.compile(r"\s?\|\s?rm\s?\d+\b", re.IGNORECASE), ""),
    (re.compile(r"\b\d+\s?years?\s?warranty\b", re.IGNORECASE), ""),
    (re.compile(r"\s?\[.*?\]\s?"), " "),
    (re.compile(r"\s+"), " "),
    (re.compile(rf"\b(?:{_alternation(DESCRIPTIVE_WORDS)})\b", re.IGNORECASE), ""),
]


def is_structured_query(query: str) -> bool:
    return any(p.search(query) for p in STRUCTURED_FIELD_MARKERS)


def preprocess_query(query: str) -> str:
    """Return *query* cleaned of build-sheet noise. Never returns ``None``."""
    if not query:
        return ""
    if is_structured_query(query):
        return query.strip()

    cleaned = query
    for pattern, replacement in CLEANING_RULES:
        cleaned = pattern.sub(replacement, cleaned)
    cleaned = cleaned.strip()

    logger.debug("Search query %r cleaned to %r", query, cleaned)
    return cleaned
