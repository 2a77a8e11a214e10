"""
Readers for the local input files: abbreviation mapping and article list.
"""

import json
import logging
import re
from typing import Dict, List, Optional

from domain.models import ArticleReference, LawReference

# Get logger for this module
logger = logging.getLogger(__name__)

# Expected line format: "Art. 51 CC" or "art 51 cc"
ARTICLE_LINE_PATTERN = re.compile(r"Art\.?\s+(\d+)\s+([A-Z]+)", re.IGNORECASE)


def load_laws(file_path: str) -> Dict[str, LawReference]:
    """
    Load the abbreviation mapping from a JSON file.

    The file maps each abbreviation to ``{"id": ..., "nombre": ...}``.

    Raises:
        FileNotFoundError: If the file doesn't exist
        ValueError: If the file is not valid JSON or not an object
    """
    logger.debug("Reading abbreviations file: %s", file_path)
    with open(file_path, "r", encoding="utf-8") as f:
        data = json.load(f)

    if not isinstance(data, dict):
        raise ValueError(f"Abbreviations file must contain a JSON object: {file_path}")

    laws: Dict[str, LawReference] = {}
    for abbreviation, info in data.items():
        if not isinstance(info, dict) or not info.get("id"):
            logger.warning("Abbreviation %s has no document id, skipping", abbreviation)
            continue
        laws[abbreviation] = LawReference(
            abbreviation=abbreviation,
            document_id=str(info["id"]),
            display_name=info.get("nombre"),
        )
    return laws


def parse_article_line(line: str) -> Optional[ArticleReference]:
    match = ARTICLE_LINE_PATTERN.search(line)
    if not match:
        return None
    return ArticleReference(
        number=match.group(1),
        abbreviation=match.group(2),
        original_line=line.strip(),
    )


def load_articles(file_path: str) -> List[ArticleReference]:
    """
    Load article references, one per non-blank line.

    Lines that do not look like ``Art. <number> <ABBR>`` are skipped.

    Raises:
        FileNotFoundError: If the file doesn't exist
    """
    logger.debug("Reading articles file: %s", file_path)
    with open(file_path, "r", encoding="utf-8") as f:
        lines = [line for line in f.read().splitlines() if line.strip()]

    references: List[ArticleReference] = []
    for line in lines:
        reference = parse_article_line(line)
        if reference is None:
            logger.warning("Unrecognised article line: %s", line)
            continue
        references.append(reference)
    return references
