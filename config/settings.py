"""
Configuration settings for the rings catalog ETL pipeline.
"""

from dataclasses import dataclass, field
from pathlib import Path

PROJECT_ROOT = Path(__file__).parent.parent


@dataclass
class ScraperConfig:
    """Configuration for fetching retailer pages."""

    # Site root; relative product paths are resolved against it
    base_url: str = "https://www.thediamondguy.co.za"

    # Identifying client header sent with every request
    user_agent: str = "RingConfiguratorBot/1.0 (+noncommercial)"

    # Hard cap on product pages fetched per run
    max_product_pages: int = 60


@dataclass
class StorageConfig:
    """Configuration for the catalog output file."""

    output_path: Path = field(
        default_factory=lambda: PROJECT_ROOT / "assets" / "data" / "rings.json"
    )

    @property
    def output_dir(self) -> Path:
        """Get the directory holding the catalog file."""
        return self.output_path.parent

    def ensure_dirs(self) -> None:
        """Create necessary directories if they don't exist."""
        self.output_dir.mkdir(parents=True, exist_ok=True)


@dataclass
class LoggingConfig:
    """Configuration for the optional run-stats log."""

    log_dir: Path = field(default_factory=lambda: PROJECT_ROOT / "logs")
    log_file: str = "scrape_runs.jsonl"
    log_to_file: bool = False

    @property
    def log_path(self) -> Path:
        return self.log_dir / self.log_file

    def ensure_dirs(self) -> None:
        """Create log directory if it doesn't exist."""
        self.log_dir.mkdir(parents=True, exist_ok=True)


@dataclass
class PipelineConfig:
    """Main configuration combining all settings."""

    scraper: ScraperConfig = field(default_factory=ScraperConfig)
    storage: StorageConfig = field(default_factory=StorageConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)


# Default configuration instance
config = PipelineConfig()
