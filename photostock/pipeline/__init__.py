"""
Photostock core pipeline.

Entries: parse → match images → validate.
Search: clean query → filter → rank → paginate.
"""
import logging
from typing import AbstractSet, Any, Iterable, Optional, Sequence

from photostock.pipeline.matcher import candidate_name, match_image
from photostock.pipeline.parser import parse_entries
from photostock.pipeline.query import preprocess_query
from photostock.pipeline.ranker import rank_results
from photostock.pipeline.search import filter_results
from photostock.pipeline.validator import validate_entries
from photostock.schemas import Entry

logger = logging.getLogger(__name__)


def analyze_entries(
    text: str,
    location: str,
    images: Iterable[Any],
    existing: AbstractSet[str],
    required_specs: Optional[Sequence[str]] = None,
) -> list[Entry]:
    """Parse *text* into entries, attach matching image names and validate.

    *existing* holds the invoice numbers already in the database.
    """
    logger.info("Pipeline start: parse")
    entries = parse_entries(text, location)

    logger.info("Pipeline: match images")
    images = list(images)
    matched: list[Entry] = []
    for entry in entries:
        image = match_image(entry.inv_number, images)
        if image is None:
            logger.warning("No image matches INV# %s", entry.inv_number)
        matched.append(
            entry.model_copy(
                update={"image": candidate_name(image) if image is not None else None}
            )
        )

    logger.info("Pipeline: validate")
    validated = validate_entries(matched, existing, required_specs)
    logger.info(
        "Validated %d entries, %d with errors",
        len(validated),
        sum(1 for e in validated if not e.is_valid),
    )
    return validated


def search_results(
    results: Iterable[Any],
    search: str = "",
    page: int = 1,
    per_page: int = 10,
) -> tuple[list[Any], int]:
    """Filter and order *results*, returning ``(page_items, filtered_count)``."""
    query = preprocess_query((search or "").lower())
    filtered = filter_results(results, query)
    ranked = rank_results(filtered)

    offset = (max(page, 1) - 1) * per_page
    logger.info("Search %r matched %d results", query, len(ranked))
    return ranked[offset:offset + per_page], len(ranked)
