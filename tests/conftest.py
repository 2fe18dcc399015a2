"""Shared fixtures: a fake fetcher and page builders."""

import json

import pytest

from config.settings import LoggingConfig, PipelineConfig, ScraperConfig, StorageConfig
from src.extractors.page_fetcher import PageFetcher, RequestError

SITE = "https://rings.example.com"


def ld_script(data) -> str:
    """Wrap a JSON-LD payload in a script tag."""
    return f'<script type="application/ld+json">{json.dumps(data)}</script>'


def page(*scripts: str) -> str:
    return "<html><head>" + "".join(scripts) + "</head><body></body></html>"


def item_list(*urls) -> dict:
    return {
        "@context": "https://schema.org",
        "@type": "ItemList",
        "itemListElement": [
            {"@type": "ListItem", "position": i + 1, "url": url}
            for i, url in enumerate(urls)
        ],
    }


def product(name, **fields) -> dict:
    return {"@context": "https://schema.org", "@type": "Product", "name": name, **fields}


class FakeFetcher(PageFetcher):
    """Serves canned pages; unknown URLs fail with a 404."""

    def __init__(self, pages: dict):
        super().__init__(ScraperConfig(base_url=SITE))
        self.pages = pages
        self.requested: list[str] = []

    async def start(self) -> None:
        pass

    async def close(self) -> None:
        pass

    async def fetch_text(self, url: str) -> str:
        self.requested.append(url)
        body = self.pages.get(url)
        if body is None:
            raise RequestError(404, url)
        if isinstance(body, Exception):
            raise body
        return body


@pytest.fixture
def pipeline_config(tmp_path) -> PipelineConfig:
    return PipelineConfig(
        scraper=ScraperConfig(base_url=SITE),
        storage=StorageConfig(output_path=tmp_path / "assets" / "data" / "rings.json"),
        logging=LoggingConfig(log_dir=tmp_path / "logs"),
    )
