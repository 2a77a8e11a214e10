import argparse
import sys

from infrastructure.logging import setup_logger
from infrastructure.telemetry import setup_opentelemetry

from adapters.article_cli import ArticleCLI
from adapters.check_cli import CheckCLI

COMMANDS = {
    "check": (CheckCLI, "Check the article list and write a markdown report"),
    "article": (ArticleCLI, "Check one article of a BOE document and print JSON"),
}


def main() -> int:
    """Run `boe-check <command> [options]` and return its exit code."""
    setup_logger()
    setup_opentelemetry()

    parser = argparse.ArgumentParser(
        prog="boe-check",
        description="Detect amendments to articles of consolidated Spanish legislation",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)
    for name, (_, help_text) in COMMANDS.items():
        subparsers.add_parser(name, help=help_text, add_help=False)

    # Options after the command name belong to the selected CLI
    args, remaining = parser.parse_known_args()
    cli_class, _ = COMMANDS[args.command]
    return cli_class().run(remaining)


if __name__ == "__main__":
    sys.exit(main())
