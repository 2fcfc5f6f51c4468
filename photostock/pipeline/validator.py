"""
Rule-based entry validation.

Every problem becomes a line of ``Entry.error_message``; nothing here raises
for bad data.
"""
from __future__ import annotations

from typing import AbstractSet, Iterable, Optional, Sequence

from photostock.config import settings
from photostock.schemas import Entry


# ---------------------------------------------------------------------------
# Individual checks
# ---------------------------------------------------------------------------

def check_duplicate(
    entry: Entry, existing: AbstractSet[str], required_specs: Sequence[str]
) -> Optional[str]:
    if entry.inv_number in existing:
        return f"INV#: {entry.inv_number} is already in the database."
    return None


def check_image_missing(
    entry: Entry, existing: AbstractSet[str], required_specs: Sequence[str]
) -> Optional[str]:
    if entry.image:
        return None
    return "Missing image, ensure image filename matches INV#."


def check_specs_missing(
    entry: Entry, existing: AbstractSet[str], required_specs: Sequence[str]
) -> Optional[str]:
    """Spec labels are matched literally and case-sensitively."""
    missing = [spec for spec in required_specs if spec not in entry.original_content]
    if not missing:
        return None
    return f"Missing specs: {', '.join(missing)}. Ensure specs list format is correct."


# ---------------------------------------------------------------------------
# Registry
# ---------------------------------------------------------------------------

ENTRY_CHECKS = [
    check_duplicate,
    check_image_missing,
    check_specs_missing,
]


def validate_entry(
    entry: Entry,
    existing: AbstractSet[str],
    required_specs: Optional[Sequence[str]] = None,
) -> Optional[str]:
    """Run every registered check; ``None`` when the entry can be saved."""
    specs = settings.REQUIRED_SPECS if required_specs is None else required_specs
    messages: list[str] = []
    for fn in ENTRY_CHECKS:
        msg = fn(entry, existing, specs)
        if msg is not None:
            messages.append(msg)
    return "\n".join(messages) if messages else None


def validate_entries(
    entries: Iterable[Entry],
    existing: AbstractSet[str],
    required_specs: Optional[Sequence[str]] = None,
) -> list[Entry]:
    """Return copies of *entries* with ``error_message`` filled in."""
    return [
        entry.model_copy(
            update={"error_message": validate_entry(entry, existing, required_specs)}
        )
        for entry in entries
    ]
