"""
JSON-LD extraction from raw HTML.

Pages embed schema.org metadata in <script type="application/ld+json"> tags.
Blocks are parsed into plain JSON trees and flattened into candidate items
(every mapping node, including @graph containers and their children).
"""

import json
import re
from typing import Any, Optional, Union

# Parsed JSON tree: null | scalar | sequence | mapping
JsonLdNode = Union[None, str, int, float, bool, list, dict]

GRAPH_KEY = "@graph"
TYPE_KEY = "@type"

JSON_LD_PATTERN = re.compile(
    r"<script[^>]*type=[\"']application/ld\+json[\"'][^>]*>([\s\S]*?)</script>",
    re.IGNORECASE,
)


def parse_block(raw: str) -> Optional[JsonLdNode]:
    """Parse one script body, returning None when it isn't valid JSON."""
    try:
        return json.loads(raw.strip())
    except ValueError:
        return None


def extract_json_ld(html: str) -> list[JsonLdNode]:
    """
    Find and parse every JSON-LD block in a page.

    Args:
        html: Raw page HTML

    Returns:
        Parsed trees in document order. Malformed or null blocks are skipped.
    """
    blocks = []
    for match in JSON_LD_PATTERN.finditer(html or ""):
        parsed = parse_block(match.group(1))
        if parsed is None:
            continue
        blocks.append(parsed)
    return blocks


def count_json_ld_blocks(html: str) -> int:
    """Count script blocks declared as JSON-LD, parseable or not."""
    return len(JSON_LD_PATTERN.findall(html or ""))


def normalize_to_items(node: JsonLdNode) -> list[dict]:
    """
    Flatten one JSON-LD tree into candidate items, depth first.

    Lists are expanded element by element. A mapping contributes the
    contents of its @graph container (when present) followed by itself.
    Nulls and other scalars contribute nothing.
    """
    items: list[dict] = []
    _collect(node, items)
    return items


def _collect(node: JsonLdNode, items: list[dict]) -> None:
    if node is None:
        return
    if isinstance(node, list):
        for child in node:
            _collect(child, items)
        return
    if isinstance(node, dict):
        if node.get(GRAPH_KEY):
            _collect(node[GRAPH_KEY], items)
        items.append(node)


def flatten_json_ld(blocks: list[JsonLdNode]) -> list[dict]:
    """Flatten every block and concatenate the results."""
    items = []
    for block in blocks:
        items.extend(normalize_to_items(block))
    return items


def has_type(item: Any, type_name: str) -> bool:
    """Check an item's @type tag (a string, or a list of strings)."""
    if not isinstance(item, dict):
        return False
    declared = item.get(TYPE_KEY)
    if isinstance(declared, list):
        return type_name in declared
    return declared == type_name


def find_first_of_type(items: list[dict], type_name: str) -> Optional[dict]:
    """Return the first item tagged ``type_name``, or None."""
    for item in items:
        if has_type(item, type_name):
            return item
    return None
