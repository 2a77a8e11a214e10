"""
Client for the BOE open data API (consolidated legislation).
"""

import logging
import os
from typing import Any, Dict, Optional

from adapters.http_client import HTTPClientAdapter
from domain.errors import MalformedResponseError
from domain.models import IndexEntry

# Get logger for this module
logger = logging.getLogger(__name__)

DEFAULT_BASE_URL = "https://www.boe.es/datosabiertos/api"


def unwrap_envelope(payload: Any) -> Any:
    """Return the ``data`` member of a BOE response envelope, if present."""
    if isinstance(payload, dict) and "data" in payload:
        return payload["data"]
    return payload


class BOEClient:
    """Fetches index, analysis and block documents for a consolidated law."""

    def __init__(
        self,
        http_client: Optional[HTTPClientAdapter] = None,
        base_url: Optional[str] = None,
    ) -> None:
        self.http_client = http_client if http_client is not None else HTTPClientAdapter()
        self.base_url = (
            base_url or os.getenv("BOE_API_BASE_URL", DEFAULT_BASE_URL)
        ).rstrip("/")

    def _document_url(self, doc_id: str, path: str) -> str:
        return f"{self.base_url}/legislacion-consolidada/id/{doc_id}/{path}"

    def fetch_index(self, doc_id: str) -> IndexEntry:
        """
        Fetch the structural index of a document.

        Raises:
            NotFoundError, TransportError, MalformedResponseError
        """
        url = self._document_url(doc_id, "texto/indice")
        logger.debug("Fetching index for %s", doc_id)
        data = unwrap_envelope(self.http_client.get_json(url))
        if not isinstance(data, (dict, list)):
            raise MalformedResponseError(f"Unexpected index payload for {doc_id}", url=url)
        return IndexEntry.from_dict(data)

    def fetch_analysis(self, doc_id: str) -> Dict[str, Any]:
        """
        Fetch the analysis (amendment history) of a document.

        Raises:
            NotFoundError, TransportError, MalformedResponseError
        """
        url = self._document_url(doc_id, "analisis")
        logger.debug("Fetching analysis for %s", doc_id)
        data = unwrap_envelope(self.http_client.get_json(url))
        if not isinstance(data, dict):
            raise MalformedResponseError(
                f"Unexpected analysis payload for {doc_id}", url=url
            )
        return data

    def fetch_block(self, doc_id: str, block_id: str) -> Dict[str, Any]:
        """Fetch the text block of a single index entry."""
        url = self._document_url(doc_id, f"texto/bloque/{block_id}")
        logger.debug("Fetching block %s of %s", block_id, doc_id)
        data = unwrap_envelope(self.http_client.get_json(url))
        if not isinstance(data, dict):
            raise MalformedResponseError(
                f"Unexpected block payload for {doc_id}/{block_id}", url=url
            )
        return data
