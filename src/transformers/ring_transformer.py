"""
Ring transformer mapping JSON-LD Product items onto catalog cards.

The card schema is the contract with the in-app Rings catalog; taglines and
model mapping are curated by hand outside this tool.
"""

import re
from typing import Any, Optional

from pydantic import BaseModel, field_validator

DEFAULT_BADGE = "Imported"
DEFAULT_MODEL = 1


def slugify(text: str) -> str:
    """Convert free text to a lowercase, hyphenated slug."""
    slug = text.lower()
    slug = re.sub(r"[^a-z0-9]+", "-", slug)
    return slug.strip("-")


def last_path_segment(url: str) -> Optional[str]:
    """Last non-empty slash-delimited segment of a URL."""
    segments = [part for part in url.split("/") if part]
    return segments[-1] if segments else None


class RingCard(BaseModel):
    """One entry of rings.json. Field order is the serialized order."""

    id: str
    name: str
    tagline: str = ""
    href: str = ""
    badge: str = DEFAULT_BADGE
    model: int = DEFAULT_MODEL

    @field_validator("name")
    @classmethod
    def clean_name(cls, v: str) -> str:
        return v.strip()


# Written when a run collects nothing, so the catalog never ships empty
PLACEHOLDER_RINGS: list[RingCard] = [
    RingCard(
        id="classic-solitaire",
        name="Classic Solitaire",
        tagline="Clean lines, timeless profile",
        badge="Configurable",
        model=1,
    ),
    RingCard(
        id="halo-ensemble",
        name="Halo Ensemble",
        tagline="Soft sparkle, elevated presence",
        badge="Configurable",
        model=2,
    ),
]


def placeholder_rings() -> list[RingCard]:
    return [card.model_copy() for card in PLACEHOLDER_RINGS]


class RingTransformer:
    """Maps candidate Product items into RingCards."""

    def derive_id(self, item: dict, name: str) -> str:
        """sku, else last URL segment, else slugified name."""
        sku = item.get("sku")
        if sku:
            return str(sku)

        url = item.get("url")
        if url:
            segment = last_path_segment(str(url))
            if segment:
                return segment

        return slugify(name)

    def transform(self, item: Any) -> Optional[RingCard]:
        """
        Map one candidate item to a RingCard.

        Args:
            item: Flattened JSON-LD node

        Returns:
            RingCard, or None when the item has no usable name
        """
        if not isinstance(item, dict):
            return None

        name = item.get("name") or item.get("title")
        if not name:
            return None
        name = str(name).strip()
        if not name:
            return None

        url = item.get("url")
        href = str(url) if url else ""

        return RingCard(
            id=self.derive_id(item, name),
            name=name,
            href=href,
        )


def dedupe_rings(cards: list[RingCard]) -> list[RingCard]:
    """Keep the first card per id; cards with an empty id are dropped."""
    seen: set[str] = set()
    unique = []
    for card in cards:
        if not card.id or card.id in seen:
            continue
        seen.add(card.id)
        unique.append(card)
    return unique


def dedupe_urls(urls: list[str]) -> list[str]:
    """Exact-string dedup preserving discovery order."""
    return list(dict.fromkeys(url for url in urls if url))
