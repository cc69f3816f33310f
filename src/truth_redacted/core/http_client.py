"""Shared HTTP client with retry logic and rate limiting."""

import logging
import time
from typing import Optional, Dict, Any

import requests

logger = logging.getLogger(__name__)

DEFAULT_USER_AGENT = "truth-redacted/0.1 (+https://www.gdeltproject.org/)"
RETRYABLE_STATUS = (429, 500, 502, 503, 504)


class RetryableHTTPClient:
    """HTTP client with exponential backoff retry logic and rate limiting.

    Handles throttling and gateway failures (429, 500, 502, 503, 504) with
    exponential backoff, respects Retry-After headers, and spaces requests out
    to at most ``rps`` per second.

    Args:
        rps: Maximum requests per second (default: 1.0)
        max_retries: Maximum number of attempts (default: 3)
        timeout: Request timeout in seconds (default: 15)
        user_agent: User-Agent header sent with every request
    """

    def __init__(
        self,
        rps: float = 1.0,
        max_retries: int = 3,
        timeout: int = 15,
        user_agent: str = DEFAULT_USER_AGENT,
    ):
        self.session = requests.Session()
        self.session.headers["User-Agent"] = user_agent
        self.rps = rps
        self.max_retries = max(1, int(max_retries))
        self.timeout = timeout
        self.min_interval = 1.0 / max(rps, 0.01)
        self.last_request_time = 0.0

    @classmethod
    def from_config(cls, feed_cfg: Dict[str, Any]) -> "RetryableHTTPClient":
        """Build a client from the ``feed`` config section."""
        return cls(
            rps=float(feed_cfg.get('rps', 1.0)),
            max_retries=int(feed_cfg.get('max_retries', 3)),
            timeout=int(feed_cfg.get('timeout', 15)),
        )

    def _rate_limit(self):
        """Enforce rate limiting between requests."""
        now = time.time()
        elapsed = now - self.last_request_time
        if elapsed < self.min_interval:
            time.sleep(self.min_interval - elapsed)
        self.last_request_time = time.time()

    def get_with_retry(
        self,
        url: str,
        headers: Optional[Dict[str, str]] = None,
        params: Optional[Dict[str, Any]] = None,
        timeout: Optional[int] = None,
    ) -> requests.Response:
        """Make a GET request with exponential backoff retry logic.

        Args:
            url: URL to fetch
            headers: Optional request headers
            params: Optional query parameters
            timeout: Optional timeout override (uses instance default if None)

        Returns:
            Response object on success

        Raises:
            requests.HTTPError: On non-retryable HTTP errors, or when retryable
                statuses persist after the last attempt
            requests.RequestException: On network errors after retries exhausted
        """
        timeout = timeout or self.timeout

        for attempt in range(self.max_retries):
            last_attempt = attempt == self.max_retries - 1
            try:
                self._rate_limit()
                r = self.session.get(url, headers=headers, params=params, timeout=timeout)

                if r.status_code in RETRYABLE_STATUS and not last_attempt:
                    wait = self._calculate_backoff_time(r, attempt)
                    logger.debug("GET %s returned %s; retrying in %.1fs", url, r.status_code, wait)
                    time.sleep(wait)
                    continue

                r.raise_for_status()
                return r

            except requests.HTTPError:
                raise
            except requests.RequestException as e:
                if not last_attempt:
                    wait = min(8.0, 2.0 ** attempt)
                    logger.debug("GET %s failed (%s); retrying in %.1fs", url, e, wait)
                    time.sleep(wait)
                    continue
                raise

        raise requests.RequestException(f"GET {url} failed after {self.max_retries} attempts")

    def fetch_bytes(self, url: str) -> bytes:
        """GET *url* and return the raw body."""
        return self.get_with_retry(url).content

    def _calculate_backoff_time(self, response: requests.Response, attempt: int) -> float:
        """Calculate backoff time, respecting Retry-After header if present."""
        retry_after = response.headers.get("Retry-After")
        if retry_after:
            try:
                wait = float(retry_after)
                return max(wait, 1.0)
            except (ValueError, TypeError):
                pass
        # Exponential backoff: 1s, 2s, 4s, max 8s
        return min(8.0, 2.0 ** attempt)

    def close(self):
        """Close the underlying session."""
        self.session.close()

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()
