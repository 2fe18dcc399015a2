"""
Plain HTTP page fetcher for retailer pages.

One aiohttp session per run, a fixed identifying User-Agent and no retries.
"""

from typing import Optional

import aiohttp

from config.settings import config, ScraperConfig


class RequestError(Exception):
    """Raised when a page responds with a non-success status."""

    def __init__(self, status: int, url: str):
        self.status = status
        self.url = url
        super().__init__(f"Request failed {status} for {url}")


class PageFetcher:
    """Fetches page bodies as text with a single shared session."""

    def __init__(self, scraper_config: Optional[ScraperConfig] = None):
        self.config = scraper_config or config.scraper
        self.session: Optional[aiohttp.ClientSession] = None

    async def __aenter__(self):
        """Async context manager entry."""
        await self.start()
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        """Async context manager exit."""
        await self.close()

    async def start(self) -> None:
        """Open the HTTP session."""
        if self.session is None:
            self.session = aiohttp.ClientSession(
                headers={"User-Agent": self.config.user_agent}
            )

    async def close(self) -> None:
        """Close the HTTP session."""
        if self.session:
            await self.session.close()
            self.session = None

    async def fetch_text(self, url: str) -> str:
        """
        GET a URL and return its body.

        Args:
            url: Absolute page URL

        Returns:
            Response body decoded as text

        Raises:
            RequestError: if the response status is not 2xx
        """
        await self.start()
        async with self.session.get(url) as response:
            if not 200 <= response.status < 300:
                raise RequestError(response.status, url)
            return await response.text()
