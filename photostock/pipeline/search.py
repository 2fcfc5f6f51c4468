"""
Multi-term search over saved invoices.

A result matches when every search term appears in at least one of its
searchable fields.
"""
from __future__ import annotations

import re
from datetime import datetime
from typing import Any, Iterable, Optional, Sequence

from photostock.config import settings

_TERM = re.compile(r'"([^"]*)"|(\S+)')

# Terms that match either spelling of the same brand
SYNONYM_GROUPS: list[frozenset[str]] = [
    frozenset({"g.skill", "gskill"}),
]


def tokenize(query: str, stopwords: Optional[Sequence[str]] = None) -> list[str]:
    """Split *query* on whitespace, keeping ``"quoted phrases"`` together."""
    stop = {w.lower() for w in (settings.SEARCH_STOPWORDS if stopwords is None else stopwords)}
    terms: list[str] = []
    for m in _TERM.finditer(query or ""):
        term = (m.group(1) if m.group(1) is not None else m.group(2)).strip().lower()
        if term and term not in stop:
            terms.append(term)
    return terms


def _format_date(value: Any) -> str:
    if isinstance(value, datetime):
        return value.strftime("%d/%m/%Y")
    return str(value or "")


def searchable_fields(result: Any) -> list[str]:
    status = getattr(result.status, "value", result.status)
    return [
        str(value or "").lower()
        for value in (
            result.inv_number,
            result.total,
            result.original_content,
            result.image_path,
            result.nas_location,
            status,
            _format_date(result.created_at),
            f"{result.total}_{result.inv_number}",
        )
    ]


def _variants(term: str) -> frozenset[str]:
    for group in SYNONYM_GROUPS:
        if term in group:
            return group
    return frozenset({term})


def matches(result: Any, terms: Sequence[str]) -> bool:
    fields = searchable_fields(result)
    return all(
        any(variant in field for variant in _variants(term) for field in fields)
        for term in terms
    )


def filter_results(
    results: Iterable[Any], query: str, stopwords: Optional[Sequence[str]] = None
) -> list[Any]:
    """Return the results matching every term of *query*, in input order."""
    terms = tokenize(query, stopwords)
    if not terms:
        return list(results)
    return [r for r in results if matches(r, terms)]
