import argparse
import json
import logging
import sys
from typing import List, Optional, TextIO

from opentelemetry import trace

from adapters.check_cli import (
    add_connection_arguments,
    build_check_service,
    resolve_reference_date,
)
from application.article_check_service import ArticleCheckService
from infrastructure.logging import setup_logger

logger = logging.getLogger(__name__)

tracer = trace.get_tracer(__name__)


def setup_argument_parser() -> argparse.ArgumentParser:
    """Configure CLI arguments."""
    parser = argparse.ArgumentParser(
        description="Check a single article of a BOE document and print the result as JSON"
    )
    parser.add_argument("doc_id", help="BOE document id, e.g. BOE-A-1889-4763")
    parser.add_argument("number", help="Article number, e.g. 51")
    add_connection_arguments(parser)
    return parser


class ArticleCLI:
    """CLI for a one-off article check."""

    def __init__(
        self,
        service: Optional[ArticleCheckService] = None,
        output: Optional[TextIO] = None,
    ) -> None:
        self.parser = setup_argument_parser()
        self.service = service
        self.output = output

    def run(self, args: Optional[List[str]] = None) -> int:
        with tracer.start_as_current_span("article_cli.run") as span:
            parsed_args = self.parser.parse_args(args)

            if parsed_args.verbose:
                setup_logger(logging.DEBUG)

            span.set_attribute("cli.doc_id", parsed_args.doc_id)
            span.set_attribute("cli.number", parsed_args.number)

            reference_date = resolve_reference_date(parsed_args.reference_date)
            service = self.service or build_check_service(
                parsed_args.timeout, parsed_args.retries
            )

            result = service.check_article(
                parsed_args.doc_id, parsed_args.number, reference_date
            )
            span.set_attribute("result.status", result.status.value)

            output = self.output or sys.stdout
            json.dump(result.to_dict(), output, ensure_ascii=False, indent=2)
            output.write("\n")
            return 0
