"""
Application service that checks a list of article references one by one.
"""

import logging
from datetime import date
from typing import Callable, Dict, List, Optional

from application.article_check_service import ArticleCheckService
from domain.models import (
    ArticleReference,
    CheckResult,
    CheckStatus,
    LawReference,
    ReportEntry,
)
from infrastructure.telemetry import get_tracer

# Get logger for this module
logger = logging.getLogger(__name__)

ProgressCallback = Callable[[int, int, ReportEntry], None]


def summarize(entries: List[ReportEntry]) -> Dict[CheckStatus, int]:
    """Count entries per status; every status is present in the result."""
    counts = {status: 0 for status in CheckStatus}
    for entry in entries:
        counts[entry.status] += 1
    return counts


class BatchCheckService:
    """Runs article checks sequentially, one result per input reference."""

    def __init__(self, checker: ArticleCheckService) -> None:
        self.checker = checker

    def _lookup_law(
        self, laws: Dict[str, LawReference], abbreviation: str
    ) -> Optional[LawReference]:
        return laws.get(abbreviation) or laws.get(abbreviation.upper())

    def check_reference(
        self,
        reference: ArticleReference,
        laws: Dict[str, LawReference],
        reference_date: date,
    ) -> ReportEntry:
        """Check a single reference, turning an unknown abbreviation into a result."""
        law = self._lookup_law(laws, reference.abbreviation)
        if law is None:
            logger.warning("Unknown abbreviation: %s", reference.abbreviation)
            return ReportEntry(
                reference=reference,
                result=CheckResult.not_found(
                    f"Abreviatura no reconocida: {reference.abbreviation}"
                ),
            )

        try:
            result = self.checker.check_article(
                law.document_id, reference.number, reference_date
            )
        except Exception as e:
            # One failing article never stops the batch
            logger.error("Check failed for %s: %s", reference.original_line, e)
            result = CheckResult.failed(str(e))

        return ReportEntry(
            reference=reference,
            result=result,
            document_id=law.document_id,
            display_name=law.display_name,
        )

    def run(
        self,
        references: List[ArticleReference],
        laws: Dict[str, LawReference],
        reference_date: date,
        progress: Optional[ProgressCallback] = None,
    ) -> List[ReportEntry]:
        """
        Check every reference in order.

        Args:
            references: Parsed article list
            laws: Abbreviation mapping
            reference_date: Cutoff date
            progress: Called as ``progress(position, total, entry)`` after each check

        Returns:
            One ReportEntry per reference, in input order
        """
        with get_tracer().start_as_current_span("batch_check") as span:
            span.set_attribute("articles.total", len(references))
            span.set_attribute("reference_date", reference_date.isoformat())

            entries: List[ReportEntry] = []
            total = len(references)
            for position, reference in enumerate(references, start=1):
                logger.info("[%d/%d] Checking %s", position, total, reference.original_line)
                entry = self.check_reference(reference, laws, reference_date)
                entries.append(entry)
                if progress is not None:
                    progress(position, total, entry)

            for status, count in summarize(entries).items():
                span.set_attribute(f"articles.{status.value}", count)
            return entries
