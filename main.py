#!/usr/bin/env python3
"""
Rings Catalog ETL - Main Entry Point

Reads JSON-LD product metadata from the retailer's homepage and product pages
and writes the in-app Rings catalog to assets/data/rings.json.

Usage:
    python main.py
"""
import asyncio
import sys
from pathlib import Path

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent))

from config.settings import config, PipelineConfig
from rich.console import Console
from rich.markup import escape
from src.pipeline import RingsPipeline

console = Console()
error_console = Console(stderr=True)


async def run_pipeline(pipeline_config: PipelineConfig) -> dict:
    """Run the ETL pipeline with the given configuration."""
    pipeline = RingsPipeline(pipeline_config)
    return await pipeline.run()


def main() -> int:
    """Main entry point. Takes no arguments."""
    try:
        result = asyncio.run(run_pipeline(config))
    except KeyboardInterrupt:
        error_console.print("\n[yellow]Pipeline cancelled by user[/yellow]")
        return 130
    except Exception as e:
        error_console.print(
            f"\n[bold red]Pipeline failed: {escape(str(e))}[/bold red]"
        )
        return 1

    console.print(
        f"\n[bold green]✓ Pipeline completed successfully![/bold green] "
        f"[green]Output saved to: {escape(result['output_path'])}[/green]"
    )
    return 0


if __name__ == "__main__":
    sys.exit(main())
