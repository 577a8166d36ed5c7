"""Query engine over a stored vault index."""

from pathlib import Path
from typing import Dict, Any, Optional, Union
from loguru import logger

from .config import Config
from .models import AssetRecord, SearchFilters, VaultIndex
from .storage import load_index


FiltersArg = Optional[Union[SearchFilters, Dict[str, Any]]]


def normalize_query(query: Any) -> str:
    return str(query or "").strip().lower()


def matches_text(item: AssetRecord, query: str) -> bool:
    """
    Substring match of an already normalized query against the item's
    name, tags, fills and strokes. An empty query matches everything.
    """
    if not query:
        return True
    if query in item.name.lower():
        return True
    if any(query in tag for tag in item.tags):
        return True
    if any(query in color.lower() for color in item.fills):
        return True
    return any(query in color.lower() for color in item.strokes)


def filter_index(index: VaultIndex, query: Any = "", filters: FiltersArg = None) -> VaultIndex:
    """Filtered copy of `index`; colors and build info are passed through."""
    if not isinstance(filters, SearchFilters):
        filters = SearchFilters.from_dict(filters)
    q = normalize_query(query)

    results = [item for item in index.items if matches_text(item, q) and filters.matches(item)]
    return index.with_items(results)


def search_vault(
    root_dir: Union[str, Path],
    query: Any = "",
    filters: FiltersArg = None,
    config: Optional[Config] = None,
) -> VaultIndex:
    """
    Search the stored index of a vault.

    A missing or unreadable sidecar behaves like an empty vault. The color
    histogram in the result always describes the whole vault.
    """
    config = config or Config()
    index = load_index(root_dir, config.indexer.sidecar_name)
    result = filter_index(index, query, filters)
    logger.debug(f"Vault search {query!r} in {root_dir}: {result.count}/{index.count} items")
    return result
