import json
import logging
import time
from typing import Any, Optional

import requests
from requests import Session
from requests.exceptions import ConnectionError, RequestException, Timeout

from domain.errors import MalformedResponseError, NotFoundError, TransportError
from infrastructure.telemetry import get_tracer

logger = logging.getLogger(__name__)


class HTTPClientAdapter:
    """Adapter for fetching JSON documents with telemetry and error mapping."""

    def __init__(
        self,
        timeout: int = 30,
        max_retries: int = 0,
        base_wait_time: int = 2,
        user_agent: str = "BOEArticleChecker/1.0",
        verify_ssl: bool = True,
        session: Optional[Session] = None,
    ) -> None:
        self.timeout = timeout
        self.max_retries = max_retries
        self.base_wait_time = base_wait_time
        self.user_agent = user_agent
        self.verify_ssl = verify_ssl
        self.session = session if session is not None else requests.Session()
        self.headers = {"User-Agent": user_agent, "Accept": "application/json"}

    def _wait(self, attempt: int) -> None:
        wait_time = 0 if self.base_wait_time == 0 else self.base_wait_time**attempt
        time.sleep(wait_time)

    def get_json(self, url: str) -> Any:
        """
        Perform HTTP GET request and decode the JSON body.

        Connection errors, timeouts and 5xx responses are retried up to
        ``max_retries`` times.

        Returns:
            The decoded JSON document

        Raises:
            NotFoundError: The server answered 404
            TransportError: Network failure or any other HTTP error status
            MalformedResponseError: The body is not valid JSON
        """
        with get_tracer().start_as_current_span("http.get_json") as span:
            span.set_attribute("url", url)

            for attempt in range(self.max_retries + 1):
                try:
                    response = self.session.get(
                        url,
                        timeout=self.timeout,
                        headers=self.headers,
                        verify=self.verify_ssl,
                    )
                except (RequestException, ConnectionError, Timeout) as e:
                    if attempt < self.max_retries:
                        logger.debug("GET %s failed (%s), retrying", url, e)
                        self._wait(attempt)
                        continue
                    span.set_attribute("error", str(e))
                    raise TransportError(str(e), url=url) from e

                status_code = response.status_code
                span.set_attribute("status_code", status_code)

                if status_code == 404:
                    span.set_attribute("error", "not found")
                    raise NotFoundError(f"Resource not found: {url}", url=url)
                if status_code >= 500 and attempt < self.max_retries:
                    logger.debug("GET %s returned %d, retrying", url, status_code)
                    self._wait(attempt)
                    continue
                if status_code >= 400:
                    message = f"HTTP {status_code} for {url}"
                    span.set_attribute("error", message)
                    raise TransportError(message, url=url, status_code=status_code)

                content = response.text
                span.set_attribute("content_length", len(content))
                try:
                    return json.loads(content)
                except ValueError as e:
                    span.set_attribute("error", "invalid json")
                    raise MalformedResponseError(
                        f"Invalid JSON from {url}: {e}", url=url
                    ) from e

        # Only reached when max_retries is negative and no attempt is made
        raise TransportError(f"No request attempted for {url}", url=url)
