"""
Display ordering for saved invoices.

Newest shoot date first (taken from the ``YYMMDD_`` folder prefix in the NAS
location), then cheapest first.
"""
from __future__ import annotations

import math
import re
from datetime import date
from typing import Any, Iterable, Optional

_LOCATION_DATE = re.compile(r"(\d{2})(\d{2})(\d{2})_")
_NON_NUMERIC = re.compile(r"[^0-9.-]+")
_LEADING_NUMBER = re.compile(r"-?(?:\d+\.?\d*|\.\d+)")

# Totals that cannot be read sort after every readable one
UNPARSABLE_TOTAL = math.inf


def extract_location_date(nas_location: Optional[str]) -> Optional[date]:
    """``'W:\\2024\\241004_Photo'`` -> ``date(2024, 10, 4)``."""
    if not nas_location:
        return None
    m = _LOCATION_DATE.search(nas_location)
    if not m:
        return None
    year, month, day = (int(g) for g in m.groups())
    try:
        return date(year + 2000, month, day)
    except ValueError:
        return None


def parse_total(total: Optional[str]) -> float:
    """Numeric value of a total string such as ``'RM7,660'``.

    Everything except digits, ``.`` and ``-`` is dropped and the leading
    number is read.
    """
    m = _LEADING_NUMBER.match(_NON_NUMERIC.sub("", total or ""))
    if not m:
        return UNPARSABLE_TOTAL
    value = float(m.group(0))
    return UNPARSABLE_TOTAL if math.isnan(value) else value


def sort_key(result: Any) -> tuple:
    shot_on = extract_location_date(result.nas_location)
    return (
        shot_on is None,
        -shot_on.toordinal() if shot_on else 0,
        parse_total(result.total),
        result.inv_number,
    )


def rank_results(results: Iterable[Any]) -> list[Any]:
    """Return *results* as a new list in display order."""
    return sorted(results, key=sort_key)
