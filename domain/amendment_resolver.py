"""
Domain logic for correlating an article with a document's amendment history.

The analysis payload is the BOE ``analisis`` document; amendments live under
``analisis.modificaciones`` and point at index entries through ``afectado``.
"""

import logging
from datetime import date, datetime
from typing import Any, Dict, List, Optional, Union

from opentelemetry import trace

from domain.dates import parse_api_date
from domain.models import AmendmentRecord, AmendmentSummary, ModificationDetail

# Get logger for this module
logger = logging.getLogger(__name__)

# Get tracer for this module
tracer = trace.get_tracer(__name__)


def affects_entry(affected: Union[str, List[Any], None], entry_id: str) -> bool:
    """
    Permissive containment test between an amendment and an index entry id.

    A string matches when it contains ``entry_id`` anywhere, which is looser
    than id equality: "a5" is contained in "a51". A list matches only when
    one of its elements equals ``entry_id``.
    """
    if not affected or not entry_id:
        return False
    if isinstance(affected, str):
        return entry_id in affected
    if isinstance(affected, (list, tuple, set)):
        return entry_id in affected
    return False


def extract_amendments(analysis: Optional[Dict[str, Any]]) -> List[AmendmentRecord]:
    """Return the amendment records of an analysis, or [] if it has none."""
    if not isinstance(analysis, dict):
        return []
    body = analysis.get("analisis")
    if not isinstance(body, dict):
        return []
    items = body.get("modificaciones")
    if not isinstance(items, list):
        return []
    return [AmendmentRecord.from_dict(item) for item in items if isinstance(item, dict)]


def resolve_amendments(
    analysis: Optional[Dict[str, Any]], article_id: str, reference_date: date
) -> AmendmentSummary:
    """
    Summarise the amendments affecting an article on or after a date.

    Args:
        analysis: The analysis payload of the document
        article_id: Id of the located index entry
        reference_date: Amendments dated on or after this day count

    Returns:
        AmendmentSummary with details in the order they appear in the analysis
    """
    with tracer.start_as_current_span("resolve_amendments") as span:
        if isinstance(reference_date, datetime):
            reference_date = reference_date.date()

        span.set_attribute("article.id", article_id)
        span.set_attribute("reference_date", reference_date.isoformat())

        summary = AmendmentSummary()
        records = extract_amendments(analysis)
        span.set_attribute("amendments.total", len(records))
        if not records:
            logger.debug("No amendments listed in analysis")
            return summary

        latest: Optional[date] = None
        for record in records:
            if not affects_entry(record.affected, article_id):
                continue

            amended_on = parse_api_date(record.date)
            if amended_on is None:
                logger.warning(
                    "Skipping amendment %s for %s: unparseable date %r",
                    record.reference_code,
                    article_id,
                    record.date,
                )
                continue

            if amended_on < reference_date:
                continue

            summary.modified = True
            # Strict comparison keeps the first-seen record among equal dates
            if latest is None or amended_on > latest:
                latest = amended_on
                summary.last_modified_date = str(record.date)
            summary.details.append(ModificationDetail.from_record(record))

        span.set_attribute("amendments.qualifying", len(summary.details))
        logger.debug("Resolved amendments for %s: %s", article_id, summary)
        return summary
