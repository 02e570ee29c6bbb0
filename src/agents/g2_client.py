"""
G2 API Client.

Fetches reviews for one product from the G2 data API (via RapidAPI) and
translates them into canonical Review records. Rate limiting (HTTP 429) is
retried with the server-supplied Retry-After delay.
"""

import json
import logging
import threading
import time
from typing import Dict, List, Optional
from urllib.parse import quote_plus

import requests

import config.settings as settings
from src.agents.translation import translate_items
from src.exceptions import (
    RateLimitExceeded,
    TransportError,
    UpstreamSchemaError,
    UpstreamStatusError,
)
from src.models.g2_response import G2Response
from src.models.review import Review
from src.utils.storage import ReviewStorage

logger = logging.getLogger(__name__)

TOO_MANY_REQUESTS = 429


def _reject_constant(name: str):
    raise ValueError(f"non-finite number {name} is not valid JSON")


def product_page_url(product: str) -> str:
    """Public G2 review page for a product identifier."""
    return settings.G2_PRODUCT_URL_TEMPLATE.format(product=product)


class G2Client:
    """
    Client for the g2-products endpoint.

    Retries on 429 are bounded by the retry count passed to fetch_reviews()
    and, when configured, by an overall deadline. Backoff waits can be
    interrupted from another thread with cancel().
    """

    def __init__(
        self,
        api_key: str,
        host: str = settings.G2_API_HOST,
        session: Optional[requests.Session] = None,
        timeout_seconds: float = settings.REQUEST_TIMEOUT_SECONDS,
        default_retry_after: int = settings.DEFAULT_RETRY_AFTER_SECONDS,
        retry_deadline_seconds: Optional[float] = settings.RETRY_DEADLINE_SECONDS,
        storage: Optional[ReviewStorage] = None
    ):
        """
        Initialize G2 client.

        Args:
            api_key: RapidAPI key
            host: RapidAPI host serving the G2 data API
            session: HTTP session to reuse (a new one is created if omitted)
            timeout_seconds: Per-request timeout
            default_retry_after: Backoff used when Retry-After is missing or invalid
            retry_deadline_seconds: Overall budget for one fetch including backoff, None for no limit
            storage: Where raw responses are dumped for debugging, None to skip
        """
        self.api_key = api_key
        self.host = host
        self.session = session or requests.Session()
        self.timeout_seconds = timeout_seconds
        self.default_retry_after = default_retry_after
        self.retry_deadline_seconds = retry_deadline_seconds
        self.storage = storage
        self._cancelled = threading.Event()

    def build_url(self, product: str, max_reviews: int) -> str:
        encoded = quote_plus(product_page_url(product))
        return (
            f"https://{self.host}/{settings.G2_API_ENDPOINT}"
            f"?product={encoded}&max_reviews={max_reviews}"
        )

    def headers(self) -> Dict[str, str]:
        return {
            "x-rapidapi-key": self.api_key,
            "x-rapidapi-host": self.host,
        }

    def cancel(self) -> None:
        """Abort any pending (and future) backoff wait."""
        self._cancelled.set()

    def fetch_reviews(
        self,
        product: str,
        max_reviews: int,
        retries_remaining: int = settings.MAX_RETRIES
    ) -> List[Review]:
        """
        Fetch and translate reviews for one product.

        Args:
            product: Product identifier (e.g. "bloxone-ddi")
            max_reviews: Upper bound passed to the API
            retries_remaining: How many times a 429 may be retried

        Returns:
            Reviews numbered from 1 in upstream order

        Raises:
            TransportError: Network failure, cancelled wait, or rate limit not lifted in time
            UpstreamStatusError: Any non-200 status other than a retried 429
            UpstreamSchemaError: Body is not the expected JSON shape
        """
        response = self._get_with_backoff(
            self.build_url(product, max_reviews), retries_remaining
        )
        body = response.content

        if self.storage is not None:
            self.storage.save_raw_response(product, body)

        g2_response = self._parse(body)
        items = g2_response.selected_items()
        logger.info(f"Product: {g2_response.product_name}, Found {len(items)} reviews")

        return translate_items(items, product, g2_response.categories)

    def _get_with_backoff(self, url: str, retries_remaining: int) -> requests.Response:
        deadline = None
        if self.retry_deadline_seconds is not None:
            deadline = time.monotonic() + self.retry_deadline_seconds

        while True:
            response = self._send(url)

            if response.status_code == TOO_MANY_REQUESTS:
                if retries_remaining <= 0:
                    raise RateLimitExceeded(
                        f"API returned status 429 and no retries remain: {response.text}",
                        body=response.text
                    )

                delay = self.parse_retry_after(response.headers.get("Retry-After"))
                if deadline is not None and time.monotonic() + delay > deadline:
                    raise RateLimitExceeded(
                        f"Retry after {delay}s would exceed the "
                        f"{self.retry_deadline_seconds}s retry deadline",
                        body=response.text
                    )

                logger.warning(
                    f"Rate limited. Waiting {delay}s before retry "
                    f"({retries_remaining} attempts left)..."
                )
                self._sleep(delay)
                retries_remaining -= 1
                continue

            if response.status_code != 200:
                raise UpstreamStatusError(response.status_code, response.text)

            return response

    def _send(self, url: str) -> requests.Response:
        try:
            return self.session.get(url, headers=self.headers(), timeout=self.timeout_seconds)
        except requests.exceptions.RequestException as e:
            raise TransportError(f"error making request: {e}") from e

    def _sleep(self, seconds: float) -> None:
        if self._cancelled.wait(seconds):
            raise TransportError("Retry wait cancelled")

    def parse_retry_after(self, value: Optional[str]) -> int:
        """Retry-After as whole seconds, falling back to the default."""
        if not isinstance(value, str):
            return self.default_retry_after
        stripped = value.strip()
        if not (stripped.isascii() and stripped.isdigit()):
            return self.default_retry_after
        return int(stripped)

    def _parse(self, body: bytes) -> G2Response:
        try:
            data = json.loads(body, parse_constant=_reject_constant)
        except ValueError as e:
            preview = body[:200].decode("utf-8", errors="replace")
            if len(body) > 200:
                preview += "..."
            logger.error(f"Failed to parse response: {preview}")
            raise UpstreamSchemaError(f"error parsing JSON response: {e}") from e

        return G2Response.from_dict(data)
