"""
Main ETL pipeline orchestrating extraction, transformation, and loading.
"""

import asyncio
from dataclasses import asdict, dataclass
from datetime import datetime
from enum import Enum
from pathlib import Path
from typing import Optional

from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from config.settings import config, PipelineConfig
from src.extractors.jsonld_extractor import (
    count_json_ld_blocks,
    extract_json_ld,
    find_first_of_type,
    flatten_json_ld,
)
from src.extractors.page_fetcher import PageFetcher
from src.loaders.file_loader import FileLoader
from src.transformers.ring_transformer import (
    dedupe_rings,
    dedupe_urls,
    placeholder_rings,
    RingCard,
    RingTransformer,
)

console = Console()


class PipelineState(str, Enum):
    FETCH_HOME = "fetch_home"
    EXTRACT_LISTING = "extract_listing"
    FETCH_PRODUCT_PAGES = "fetch_product_pages"
    MAP_AND_COLLECT = "map_and_collect"
    DEDUPLICATE = "deduplicate"
    WRITE_OUTPUT = "write_output"
    DONE = "done"


@dataclass
class PipelineStats:
    """Counters for a run. Failures are counted, never reported per page."""

    listed_urls: int = 0
    unique_urls: int = 0
    pages_attempted: int = 0
    pages_failed: int = 0
    pages_without_product: int = 0
    products_unmapped: int = 0
    malformed_blocks: int = 0
    rings_collected: int = 0
    duplicates_dropped: int = 0


def resolve_listing_url(entry, base_url: str) -> Optional[str]:
    """
    Pull a product URL out of one itemListElement entry.

    Accepts ``url``, ``item.url`` or ``item`` (as a string). Absolute http(s)
    URLs are kept, site-relative paths are prefixed with the site root.
    """
    if not isinstance(entry, dict):
        return None

    item = entry.get("item")
    candidate = entry.get("url")
    if not candidate and isinstance(item, dict):
        candidate = item.get("url")
    if not candidate:
        candidate = item

    if not isinstance(candidate, str):
        return None
    if candidate.startswith("http"):
        return candidate
    if candidate.startswith("/"):
        return f"{base_url}{candidate}"
    return None


def listing_urls(items: list[dict], base_url: str) -> list[str]:
    """URLs listed by the first ItemList among ``items`` (empty if none)."""
    item_list = find_first_of_type(items, "ItemList")
    if not item_list:
        return []

    elements = item_list.get("itemListElement") or []
    if not isinstance(elements, list):
        return []

    urls = []
    for entry in elements:
        url = resolve_listing_url(entry, base_url)
        if url:
            urls.append(url)
    return urls


class RingsPipeline:
    """
    ETL Pipeline for building the rings catalog.

    Orchestrates:
    - Extract: Fetch the homepage and listed product pages, read JSON-LD
    - Transform: Map Product items to RingCards and deduplicate
    - Load: Write rings.json
    """

    def __init__(
        self,
        pipeline_config: Optional[PipelineConfig] = None,
        fetcher: Optional[PageFetcher] = None,
    ):
        self.config = pipeline_config or config
        self.fetcher = fetcher or PageFetcher(self.config.scraper)
        self.transformer = RingTransformer()
        self.loader = FileLoader(self.config.storage, self.config.logging)

        self.state = PipelineState.FETCH_HOME
        self.stats = PipelineStats()
        self.collected: list[RingCard] = []
        self.rings: list[RingCard] = []
        self.used_placeholder = False

    @property
    def base_url(self) -> str:
        return self.config.scraper.base_url

    async def run(self) -> dict:
        """
        Run the complete ETL pipeline.

        A failure fetching the homepage or writing the catalog propagates
        to the caller.

        Returns:
            Summary dict with pipeline results
        """
        start_time = datetime.now()
        self._print_header()

        async with self.fetcher:
            # EXTRACT
            console.print("\n[bold blue]═══ EXTRACT PHASE ═══[/bold blue]")
            self.state = PipelineState.FETCH_HOME
            home_html = await self.fetcher.fetch_text(self.base_url)

            self.state = PipelineState.EXTRACT_LISTING
            product_urls = self._extract_listing(home_html)
            console.print(
                f"[cyan]Found {len(product_urls)} candidate product pages[/cyan]"
            )

            self.state = PipelineState.FETCH_PRODUCT_PAGES
            await self._collect_products(product_urls)

        # TRANSFORM
        console.print("\n[bold blue]═══ TRANSFORM PHASE ═══[/bold blue]")
        self.state = PipelineState.DEDUPLICATE
        self.rings = self._finalize(self.collected)

        # LOAD
        console.print("\n[bold blue]═══ LOAD PHASE ═══[/bold blue]")
        self.state = PipelineState.WRITE_OUTPUT
        output_path = await self.loader.save_rings(self.rings)
        await self.loader.append_run_stats(
            {
                "rings_written": len(self.rings),
                "used_placeholder": self.used_placeholder,
                **asdict(self.stats),
            }
        )

        self.state = PipelineState.DONE
        elapsed = (datetime.now() - start_time).total_seconds()
        console.print(f"Wrote {len(self.rings)} rings to {output_path}")
        self._print_summary(elapsed, output_path)

        return {
            "success": True,
            "rings_written": len(self.rings),
            "used_placeholder": self.used_placeholder,
            "output_path": str(output_path),
            "elapsed_seconds": elapsed,
            "stats": asdict(self.stats),
        }

    def _extract_listing(self, home_html: str) -> list[str]:
        """Listed product URLs from the homepage, deduplicated."""
        items = self._page_items(home_html)
        urls = listing_urls(items, self.base_url)
        unique = dedupe_urls(urls)
        self.stats.listed_urls = len(urls)
        self.stats.unique_urls = len(unique)
        return unique

    def _page_items(self, html: str) -> list[dict]:
        blocks = extract_json_ld(html)
        self.stats.malformed_blocks += count_json_ld_blocks(html) - len(blocks)
        return flatten_json_ld(blocks)

    async def _collect_products(self, product_urls: list[str]) -> None:
        """Fetch product pages one at a time, skipping any that fail."""
        limit = self.config.scraper.max_product_pages
        for url in product_urls[:limit]:
            self.stats.pages_attempted += 1
            try:
                html = await self.fetcher.fetch_text(url)
                product = find_first_of_type(self._page_items(html), "Product")
                if not product:
                    self.stats.pages_without_product += 1
                    continue

                self.state = PipelineState.MAP_AND_COLLECT
                ring = self.transformer.transform(product)
                if ring:
                    self.collected.append(ring)
                else:
                    self.stats.products_unmapped += 1
            except Exception:
                self.stats.pages_failed += 1
            finally:
                self.state = PipelineState.FETCH_PRODUCT_PAGES

        self.stats.rings_collected = len(self.collected)
        console.print(
            f"[green]Collected {len(self.collected)} rings from "
            f"{self.stats.pages_attempted} product pages[/green]"
        )
        skipped = (
            self.stats.pages_failed
            + self.stats.pages_without_product
            + self.stats.products_unmapped
        )
        if skipped:
            console.print(f"[yellow]Skipped {skipped} product pages[/yellow]")

    def _finalize(self, collected: list[RingCard]) -> list[RingCard]:
        """Deduplicate by id, or fall back to the placeholder set."""
        rings = dedupe_rings(collected)
        self.stats.duplicates_dropped = len(collected) - len(rings)

        # Catalog never ships empty, even when every collected id was blank
        if not rings:
            self.used_placeholder = True
            console.print(
                "[yellow]No rings found, writing placeholder dataset[/yellow]"
            )
            return placeholder_rings()

        console.print(f"[green]Kept {len(rings)} unique rings[/green]")
        return rings

    def _print_header(self):
        """Print pipeline header."""
        header = Panel(
            "[bold white]RINGS CATALOG PIPELINE[/bold white]\n"
            f"[dim]Site: {self.base_url}[/dim]\n"
            f"[dim]Max product pages: {self.config.scraper.max_product_pages}[/dim]\n"
            f"[dim]Output: {self.config.storage.output_path}[/dim]",
            title="💍 Catalog Scraper",
            border_style="blue",
        )
        console.print(header)

    def _print_summary(self, elapsed: float, output_path: Path):
        """Print final pipeline summary."""
        table = Table(title="Pipeline Results", show_header=True)
        table.add_column("Metric", style="cyan")
        table.add_column("Value", style="green")

        table.add_row("Product Pages Listed", str(self.stats.unique_urls))
        table.add_row("Product Pages Fetched", str(self.stats.pages_attempted))
        table.add_row("Rings Written", str(len(self.rings)))
        table.add_row("Placeholder Data", "yes" if self.used_placeholder else "no")
        table.add_row("Time Elapsed", f"{elapsed:.1f} seconds")
        table.add_row("Output File", str(output_path))

        console.print("\n")
        console.print(table)


async def main():
    """Run the rings catalog pipeline."""
    pipeline = RingsPipeline()
    return await pipeline.run()


if __name__ == "__main__":
    asyncio.run(main())
