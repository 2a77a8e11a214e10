from datetime import date
import logging

from adapters.boe_client import BOEClient
from domain.amendment_resolver import resolve_amendments
from domain.index_locator import find_article
from domain.models import CheckResult
from infrastructure.telemetry import get_tracer


class ArticleCheckService:
    """Service for checking whether an article was amended since a date."""

    def __init__(self, client: BOEClient):
        self.client = client
        self.logger = logging.getLogger(__name__)

    def check_article(
        self, doc_id: str, article_number: str, reference_date: date
    ) -> CheckResult:
        """
        Locate an article in a document and resolve its amendments.

        Args:
            doc_id: BOE document id, e.g. BOE-A-1889-4763
            article_number: Article number token, e.g. "51"
            reference_date: Amendments on or after this day count as modifications

        Returns:
            CheckResult; failures are reported in the result, never raised
        """
        with get_tracer().start_as_current_span("check_article") as span:
            span.set_attribute("document.id", doc_id)
            span.set_attribute("article.number", article_number)

            try:
                index = self.client.fetch_index(doc_id)
                entry = find_article(index, article_number)

                if entry is None:
                    span.set_attribute("article.found", False)
                    return CheckResult.not_found(
                        f"No se encontró el artículo {article_number} "
                        f"en el documento {doc_id}"
                    )

                span.set_attribute("article.found", True)
                span.set_attribute("article.id", entry.id or "")

                analysis = self.client.fetch_analysis(doc_id)
                summary = resolve_amendments(analysis, entry.id or "", reference_date)

                span.set_attribute("article.modified", summary.modified)
                return CheckResult.resolved(entry, summary)

            except Exception as e:
                self.logger.error(
                    "Error checking article %s in %s: %s", article_number, doc_id, e
                )
                span.set_attribute("error", str(e))
                span.set_attribute("error.type", type(e).__name__)
                return CheckResult.failed(str(e))
