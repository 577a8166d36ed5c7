"""Vault indexing and search services."""

from .errors import InvalidFilters, InvalidVaultRoot, SvgVaultError
from .indexers import VaultIndexer, index_vault
from .models import AssetRecord, ColorCount, SearchFilters, VaultIndex
from .search import search_vault

__all__ = [
    "AssetRecord",
    "ColorCount",
    "InvalidFilters",
    "InvalidVaultRoot",
    "SearchFilters",
    "SvgVaultError",
    "VaultIndex",
    "VaultIndexer",
    "index_vault",
    "search_vault",
]
