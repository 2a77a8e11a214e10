"""
Domain logic for locating an article inside a document index.
"""

import logging
from typing import List, Optional

from opentelemetry import trace

from domain.models import IndexEntry

# Get logger for this module
logger = logging.getLogger(__name__)

# Get tracer for this module
tracer = trace.get_tracer(__name__)

ARTICLE_LABEL_PREFIX = "Artículo "


def label_matches_article(entry: IndexEntry, number: str) -> bool:
    """
    Tell whether an index entry is the article with the given number.

    The entry must be an article and its label must contain
    ``"Artículo <number>"``, compared case-insensitively. This is a substring
    test, so "Artículo 5" also occurs in "Artículo 51".
    """
    if not entry.is_article or not entry.label:
        return False
    needle = f"{ARTICLE_LABEL_PREFIX}{number}".casefold()
    return needle in entry.label.casefold()


def find_article(root: IndexEntry, number: str) -> Optional[IndexEntry]:
    """
    Find the first entry matching the article number in pre-order.

    Args:
        root: Root of the index tree (tested as well)
        number: Article number token, e.g. "51"

    Returns:
        The matching entry, or None if no entry matches
    """
    with tracer.start_as_current_span("find_article") as span:
        span.set_attribute("article.number", number)

        visited = 0
        stack: List[IndexEntry] = [root]
        while stack:
            entry = stack.pop()
            visited += 1
            if label_matches_article(entry, number):
                span.set_attribute("index.visited", visited)
                span.set_attribute("article.id", entry.id or "")
                logger.debug(
                    "Found article %s as %s after %d entries",
                    number,
                    entry.id,
                    visited,
                )
                return entry
            # Reversed so the leftmost child is popped first
            stack.extend(reversed(entry.children))

        span.set_attribute("index.visited", visited)
        logger.debug("Article %s not found in %d index entries", number, visited)
        return None
