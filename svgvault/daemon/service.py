"""Request/response boundary used by UI clients."""

from pathlib import Path
from typing import Dict, Any, Optional
from loguru import logger

from .config import Config
from .errors import InvalidFilters, InvalidVaultRoot, SvgVaultError
from .indexers import VaultIndexer
from .search import search_vault


def _check_root(root_dir: Any) -> Path:
    if not root_dir or not isinstance(root_dir, str) or not Path(root_dir).expanduser().is_dir():
        raise InvalidVaultRoot()
    return Path(root_dir).expanduser()


class VaultService:
    """
    Runs index and search requests and wraps the outcome in an envelope:
    {"success": True, ...} or {"success": False, "error": message}.
    """

    def __init__(self, config: Optional[Config] = None):
        self.config = config or Config()
        self.stats = {
            "index_count": 0,
            "search_count": 0,
            "error_count": 0,
            "last_index": None,
        }

    def index(self, root_dir: Any) -> Dict[str, Any]:
        try:
            root = _check_root(root_dir)
            indexer = VaultIndexer(self.config)
            index = indexer.index(root)
            self.stats["index_count"] += 1
            self.stats["last_index"] = indexer.get_stats()
            return {"success": True, "index": index.to_dict()}
        except SvgVaultError as e:
            self.stats["error_count"] += 1
            return {"success": False, "error": str(e)}
        except Exception as e:
            logger.exception(f"Vault index failed for {root_dir}")
            self.stats["error_count"] += 1
            return {"success": False, "error": str(e)}

    def search(self, root_dir: Any, query: Any = "", filters: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
        try:
            root = _check_root(root_dir)
            if filters is not None and not isinstance(filters, dict):
                raise InvalidFilters()
            results = search_vault(root, query, filters, self.config)
            self.stats["search_count"] += 1
            return {"success": True, "results": results.to_dict()}
        except SvgVaultError as e:
            self.stats["error_count"] += 1
            return {"success": False, "error": str(e)}
        except Exception as e:
            logger.exception(f"Vault search failed for {root_dir}")
            self.stats["error_count"] += 1
            return {"success": False, "error": str(e)}
