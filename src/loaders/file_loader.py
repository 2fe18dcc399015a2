"""
File loader writing the rings catalog (and the optional run-stats log).
"""

import json
from datetime import datetime
from pathlib import Path
from typing import Optional

import aiofiles
from rich.console import Console

from config.settings import config, LoggingConfig, StorageConfig
from src.transformers.ring_transformer import RingCard

console = Console()


def render_catalog(rings: list[RingCard]) -> str:
    """Serialize cards as an indented JSON array with a trailing newline."""
    payload = [ring.model_dump(mode="json") for ring in rings]
    return json.dumps(payload, indent=2, ensure_ascii=False) + "\n"


class FileLoader:
    """Writes the catalog file, replacing any previous one."""

    def __init__(
        self,
        storage_config: Optional[StorageConfig] = None,
        logging_config: Optional[LoggingConfig] = None,
    ):
        self.config = storage_config or config.storage
        self.logging = logging_config or config.logging

    async def save_rings(self, rings: list[RingCard]) -> Path:
        """
        Save the catalog to the configured output path.

        Args:
            rings: Final, deduplicated cards

        Returns:
            Path of the written file
        """
        self.config.ensure_dirs()
        output_path = self.config.output_path

        async with aiofiles.open(output_path, "w", encoding="utf-8") as f:
            await f.write(render_catalog(rings))

        return output_path

    async def append_run_stats(self, stats: dict) -> Optional[Path]:
        """Append one JSON line of run counters when file logging is enabled."""
        if not self.logging.log_to_file:
            return None

        self.logging.ensure_dirs()
        entry = {"logged_at": datetime.now().isoformat(), **stats}

        async with aiofiles.open(self.logging.log_path, "a", encoding="utf-8") as f:
            await f.write(json.dumps(entry) + "\n")

        console.print(f"[dim]Run stats appended to {self.logging.log_path}[/dim]")
        return self.logging.log_path
