"""
Command-line interface adapter for the batch article check.
"""

import argparse
import logging
import os
from datetime import date
from typing import Callable, List, Optional

from opentelemetry import trace

from adapters.boe_client import BOEClient
from adapters.http_client import HTTPClientAdapter
from adapters.input_parser import load_articles, load_laws
from adapters.report_writer import ReportWriter
from application.article_check_service import ArticleCheckService
from application.batch_check_service import BatchCheckService, summarize
from domain.dates import format_reference_date, parse_reference_date
from domain.models import CheckStatus, ReportEntry
from infrastructure.logging import setup_logger

# Get logger for this module
logger = logging.getLogger(__name__)

# Get tracer for this module
tracer = trace.get_tracer(__name__)

DEFAULT_ABBREVIATIONS_PATH = os.path.join("data", "abreviaturas.json")
DEFAULT_ARTICLES_PATH = os.path.join("data", "articulos.txt")
DEFAULT_OUTPUT_DIR = "informes"


def build_check_service(
    timeout: Optional[int] = None, max_retries: Optional[int] = None
) -> ArticleCheckService:
    """Wire the article check service; unset values come from the environment."""
    if timeout is None:
        timeout = int(os.getenv("BOE_API_TIMEOUT", "30"))
    if max_retries is None:
        max_retries = int(os.getenv("BOE_API_MAX_RETRIES", "0"))
    http_client = HTTPClientAdapter(timeout=timeout, max_retries=max_retries)
    return ArticleCheckService(client=BOEClient(http_client=http_client))


def add_connection_arguments(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "--date",
        dest="reference_date",
        help="Reference date as DD/MM/YYYY (prompted for when omitted)",
    )
    parser.add_argument(
        "--timeout", type=int, help="HTTP timeout in seconds (default: $BOE_API_TIMEOUT or 30)"
    )
    parser.add_argument(
        "--retries",
        type=int,
        help="Retries per API call on network errors (default: $BOE_API_MAX_RETRIES or 0)",
    )
    parser.add_argument(
        "--verbose", action="store_true", help="Increase logging verbosity"
    )


def setup_argument_parser() -> argparse.ArgumentParser:
    """Configure CLI arguments."""
    parser = argparse.ArgumentParser(
        description="Check whether legal articles were amended since a date"
    )
    parser.add_argument(
        "--abbreviations",
        default=DEFAULT_ABBREVIATIONS_PATH,
        help=f"JSON file mapping abbreviations to BOE ids (default: {DEFAULT_ABBREVIATIONS_PATH})",
    )
    parser.add_argument(
        "--articles",
        default=DEFAULT_ARTICLES_PATH,
        help=f"Text file with one article per line (default: {DEFAULT_ARTICLES_PATH})",
    )
    parser.add_argument(
        "--output-dir",
        default=DEFAULT_OUTPUT_DIR,
        help=f"Directory for the generated report (default: {DEFAULT_OUTPUT_DIR})",
    )
    add_connection_arguments(parser)
    return parser


def resolve_reference_date(
    value: Optional[str],
    prompt: Callable[[str], str] = input,
    today: Callable[[], date] = date.today,
) -> date:
    """
    Determine the reference date from the argument or an interactive prompt.

    An invalid date falls back to today.
    """
    if value is None:
        value = prompt("Introduce la fecha de referencia (DD/MM/YYYY): ")

    parsed = parse_reference_date(value)
    if parsed is None:
        fallback = today()
        logger.warning(
            "Invalid date format %r, using today (%s)",
            value,
            format_reference_date(fallback),
        )
        return fallback
    return parsed


def log_entry(position: int, total: int, entry: ReportEntry) -> None:
    result = entry.result
    status = entry.status
    if status == CheckStatus.MODIFIED:
        logger.info(
            "  Modified: last amendment on %s",
            result.last_modified_date or "unknown date",
        )
    elif status == CheckStatus.NOT_MODIFIED:
        logger.info("  Not modified since the reference date")
    elif status == CheckStatus.NOT_FOUND:
        logger.warning("  %s", result.message)
    else:
        logger.error("  Error: %s", result.error_message)


class CheckCLI:
    """CLI for checking a list of articles and writing a report."""

    def __init__(
        self,
        service: Optional[BatchCheckService] = None,
        prompt: Callable[[str], str] = input,
    ) -> None:
        self.parser = setup_argument_parser()
        self.service = service
        self.prompt = prompt

    def run(self, args: Optional[List[str]] = None) -> int:
        """
        Run the batch check.

        Returns:
            Exit code (0 for success, 1 when inputs or the report fail)
        """
        with tracer.start_as_current_span("check_cli.run") as span:
            parsed_args = self.parser.parse_args(args)

            if parsed_args.verbose:
                setup_logger(logging.DEBUG)

            logger.debug("Parsed CLI arguments: %s", parsed_args)
            span.set_attribute("cli.abbreviations", parsed_args.abbreviations)
            span.set_attribute("cli.articles", parsed_args.articles)
            span.set_attribute("cli.output_dir", parsed_args.output_dir)

            reference_date = resolve_reference_date(
                parsed_args.reference_date, prompt=self.prompt
            )
            span.set_attribute("reference_date", reference_date.isoformat())
            logger.info(
                "Checking amendments on or after %s",
                format_reference_date(reference_date),
            )

            try:
                laws = load_laws(parsed_args.abbreviations)
                references = load_articles(parsed_args.articles)
                logger.info(
                    "Loaded %d abbreviations and %d articles", len(laws), len(references)
                )

                service = self.service
                if service is None:
                    service = BatchCheckService(
                        build_check_service(parsed_args.timeout, parsed_args.retries)
                    )

                entries = service.run(references, laws, reference_date, progress=log_entry)

                writer = ReportWriter(output_dir=parsed_args.output_dir)
                report_path = writer.write(entries, reference_date)

                counts = summarize(entries)
                logger.info(
                    "Done: %d modified, %d not modified, %d not found, %d errors",
                    counts[CheckStatus.MODIFIED],
                    counts[CheckStatus.NOT_MODIFIED],
                    counts[CheckStatus.NOT_FOUND],
                    counts[CheckStatus.ERROR],
                )
                logger.info("Report saved to %s", report_path)
                span.set_attribute("report.path", report_path)
                span.set_attribute("success", True)
                span.set_attribute("exit_code", 0)
                return 0

            except FileNotFoundError as e:
                logger.error("Input file not found: %s", e.filename)
                span.set_attribute("success", False)
                span.set_attribute("error.type", "FileNotFoundError")
                span.set_attribute("exit_code", 1)
                return 1
            except Exception as e:
                logger.error("Check run failed: %s", str(e))
                span.set_attribute("success", False)
                span.set_attribute("error.type", type(e).__name__)
                span.set_attribute("error.message", str(e))
                span.set_attribute("exit_code", 1)
                return 1
