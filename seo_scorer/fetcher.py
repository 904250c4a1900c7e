"""
Page fetching for the SEO Scorer.

Downloads the HTML of a page so it can be scored. The scorer itself never
does I/O; every failure here is raised as a FetchError (or its timeout
subclass) so callers can tell it apart from a scoring failure.
"""

import logging
from typing import Dict, Optional

import httpx

from seo_scorer import config

logger = logging.getLogger(__name__)


class FetchError(Exception):
    """Raised when a page cannot be downloaded or is not usable HTML."""
    pass


class FetchTimeoutError(FetchError):
    """Raised when a page download exceeds the configured timeout."""
    pass


def normalize_url(url: str) -> str:
    """Strip whitespace and assume https:// when the URL has no scheme."""
    url = url.strip()
    if url and not url.lower().startswith(("http://", "https://")):
        url = f"https://{url}"
    return url


class PageFetcher:
    """
    Async HTML fetcher backed by httpx.

    Attributes:
        timeout: Seconds allowed for the whole request
        headers: HTTP headers sent with every request
    """

    def __init__(self, timeout: Optional[float] = None, user_agent: Optional[str] = None):
        self.timeout = timeout if timeout is not None else config.FETCH_TIMEOUT
        self.headers: Dict[str, str] = {
            'User-Agent': user_agent or config.FETCH_USER_AGENT,
            'Accept-Language': 'en-US,en;q=0.9',
            'Accept': 'text/html,application/xhtml+xml,application/xml;q=0.9,*/*;q=0.8',
        }

    async def fetch(self, url: str) -> str:
        """
        Fetch the HTML content of a URL.

        Args:
            url: Page URL; https:// is assumed when no scheme is given

        Returns:
            The response body as text

        Raises:
            ValueError: If the URL is empty
            FetchTimeoutError: If the request times out
            FetchError: On network errors, error status codes, non-HTML or empty responses
        """
        url = normalize_url(url or "")
        if not url:
            raise ValueError("URL cannot be empty")

        logger.info(f"Fetching content for {url}")

        try:
            async with httpx.AsyncClient(timeout=self.timeout, follow_redirects=True) as client:
                response = await client.get(url, headers=self.headers)
                response.raise_for_status()
        except httpx.TimeoutException as e:
            logger.error(f"Request timed out while fetching {url}: {e}")
            raise FetchTimeoutError(f"Timed out after {self.timeout:.0f}s fetching {url}") from e
        except httpx.HTTPStatusError as e:
            logger.error(f"HTTP error {e.response.status_code} fetching {url}")
            raise FetchError(f"HTTP error {e.response.status_code} fetching {url}") from e
        except httpx.RequestError as e:
            logger.error(f"Network error while fetching {url}: {e}")
            raise FetchError(f"Network error fetching {url}: {e}") from e

        content_type = response.headers.get('content-type', '')
        if content_type and 'html' not in content_type.lower():
            logger.warning(f"Unexpected content type for {url}: {content_type}")
            raise FetchError(f"Expected an HTML page but got '{content_type}'")

        html = response.text
        if not html or not html.strip():
            logger.warning(f"Empty response from {url}")
            raise FetchError(f"Empty response from {url}")

        logger.info(f"Fetched {len(html)} characters from {url}")
        return html
