"""
Date handling for API values and user input.
"""

import logging
from datetime import date, datetime
from typing import Any, Optional

# Get logger for this module
logger = logging.getLogger(__name__)

# Formats seen in the BOE API: ISO dates and the compact YYYYMMDD form
API_DATE_FORMATS = ("%Y-%m-%d", "%Y%m%d")

REFERENCE_DATE_FORMAT = "%d/%m/%Y"


def parse_api_date(value: Any) -> Optional[date]:
    """
    Parse a date coming from the API.

    Args:
        value: A ``date``, ``datetime`` or string in one of the accepted formats

    Returns:
        The calendar date, or None when the value is not a valid date
    """
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if not isinstance(value, str):
        return None

    text = value.strip()
    for fmt in API_DATE_FORMATS:
        try:
            return datetime.strptime(text, fmt).date()
        except ValueError:
            continue

    # ISO datetime such as 2020-01-01T00:00:00
    try:
        return datetime.fromisoformat(text).date()
    except ValueError:
        return None


def parse_reference_date(text: str) -> Optional[date]:
    """Parse a user supplied DD/MM/YYYY date, returning None if invalid."""
    try:
        return datetime.strptime(text.strip(), REFERENCE_DATE_FORMAT).date()
    except ValueError:
        logger.debug("Invalid reference date: %r", text)
        return None


def format_reference_date(value: date) -> str:
    return value.strftime(REFERENCE_DATE_FORMAT)
