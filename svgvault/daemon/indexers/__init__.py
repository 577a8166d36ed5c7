"""Vault indexers."""

from .vault import IndexStats, VaultIndexer, index_vault

__all__ = ["IndexStats", "VaultIndexer", "index_vault"]
