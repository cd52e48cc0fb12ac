"""Fetch the web-features dataset over HTTP."""

from __future__ import annotations

from typing import Any

import httpx

from baseline_pages.config import SOURCE_URL
from baseline_pages.errors import NetworkError, ParseError, SourceError
from baseline_pages.logging import get_logger

logger = get_logger(__name__)


class FeatureSource:
    """
    Download and decode the dataset document.

    One GET, no retries. The timeout defaults to None so a slow host stalls
    the build rather than failing it.
    """

    def __init__(
        self,
        url: str = SOURCE_URL,
        timeout: float | None = None,
        client: httpx.Client | None = None,
    ):
        self.url = url
        self.timeout = timeout
        self._client = client

    def _get(self) -> httpx.Response:
        if self._client is not None:
            return self._client.get(self.url)
        with httpx.Client(timeout=self.timeout, follow_redirects=True) as client:
            return client.get(self.url)

    def fetch(self) -> Any:
        """Fetch and parse the dataset.

        Raises:
            NetworkError: Transport failure
            SourceError: Non-success HTTP status
            ParseError: Body is not valid JSON
        """
        logger.info("fetch_started", url=self.url)

        try:
            response = self._get()
        except httpx.TransportError as e:
            raise NetworkError(f"Could not reach {self.url}: {e}", cause=e).with_context(
                url=self.url
            )

        if not response.is_success:
            raise SourceError(
                f"Network response was not ok: {response.status_code} {response.reason_phrase}"
            ).with_context(url=self.url, http_status=response.status_code)

        try:
            document = response.json()
        except (ValueError, RecursionError) as e:
            raise ParseError(f"Response from {self.url} is not valid JSON", cause=e).with_context(
                url=self.url, http_status=response.status_code
            )

        logger.info("fetch_completed", url=self.url, bytes=len(response.content))
        return document
