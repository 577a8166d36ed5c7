"""
SVG vault indexer.

Walks a vault root, extracts structural metadata from every SVG file,
aggregates a fill-color histogram and writes the result as a JSON sidecar
inside the root. Every run rebuilds the index from scratch.
"""

import os
import re
import time
from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Dict, Any, Optional, Union
from loguru import logger

from ..config import Config
from ..errors import InvalidVaultRoot
from ..metadata import MetadataExtractor, get_extractor
from ..models import AssetRecord, ColorCount, VaultIndex, color_key
from ..storage import save_index, sidecar_path


SLUG_RE = re.compile(r"[^a-z0-9]+", re.IGNORECASE | re.ASCII)


def slugify(name: str) -> str:
    return SLUG_RE.sub("-", name).lower()


def derive_tags(rel_dir: Path, depth: int = 3) -> List[str]:
    """Slugs of the `depth` nearest folder names of a vault-relative directory."""
    if depth <= 0:
        return []
    folders = [part for part in rel_dir.parts if part not in ("", ".")]
    return [tag for tag in (slugify(part) for part in folders[-depth:]) if tag]


@dataclass
class IndexStats:
    """Diagnostics for one indexing run. Not persisted."""
    files_found: int = 0
    indexed: int = 0
    skipped_files: List[Dict[str, str]] = field(default_factory=list)
    unreadable_dirs: List[str] = field(default_factory=list)
    persisted: bool = False
    duration_ms: float = 0.0

    def to_dict(self) -> Dict[str, Any]:
        return {
            "files_found": self.files_found,
            "indexed": self.indexed,
            "skipped": len(self.skipped_files),
            "skipped_files": list(self.skipped_files),
            "unreadable_dirs": list(self.unreadable_dirs),
            "persisted": self.persisted,
            "duration_ms": round(self.duration_ms, 1),
        }


class VaultIndexer:
    """Builds and persists the index for one vault root at a time."""

    def __init__(self, config: Optional[Config] = None,
                 extractor: Optional[MetadataExtractor] = None):
        self.config = config or Config()
        self.settings = self.config.indexer
        self.extractor = extractor or get_extractor(self.settings.structured_parser)
        self.stats = IndexStats()

    def index(self, root_dir: Union[str, Path]) -> VaultIndex:
        """
        Rebuild the index for `root_dir`.

        Raises InvalidVaultRoot if the root does not exist. Unreadable
        folders and files are skipped; a failed sidecar write is logged and
        the index is still returned.
        """
        if not root_dir or not str(root_dir).strip():
            raise InvalidVaultRoot(root_dir)
        root = Path(root_dir).expanduser().resolve()
        if not root.is_dir():
            raise InvalidVaultRoot(root_dir)

        self.stats = IndexStats()
        start = time.perf_counter()
        logger.info(f"Indexing vault: {root}")

        files: List[Path] = []
        self._walk(root, files)
        self.stats.files_found = len(files)

        items = []
        color_counts: Dict[str, int] = {}

        for file_path in files:
            item = self._index_file(root, file_path)
            if item is None:
                continue
            for color in item.fills:
                key = color_key(color)
                color_counts[key] = color_counts.get(key, 0) + 1
            items.append(item)

        # sorted() is stable, so ties keep discovery order
        ranked = sorted(color_counts.items(), key=lambda kv: kv[1], reverse=True)
        colors = [ColorCount(color=c, count=n) for c, n in ranked[:self.settings.top_colors]]

        index = VaultIndex(
            root_dir=str(root),
            created_at=int(time.time() * 1000),
            colors=colors,
            items=items,
        )
        self.stats.indexed = len(items)

        target = sidecar_path(root, self.settings.sidecar_name)
        try:
            save_index(index, target)
            self.stats.persisted = True
        except (OSError, ValueError) as e:
            logger.warning(f"Could not write index to {target}: {e}")

        self.stats.duration_ms = (time.perf_counter() - start) * 1000
        if self.stats.skipped_files or self.stats.unreadable_dirs:
            logger.warning(
                f"Skipped {len(self.stats.skipped_files)} files and "
                f"{len(self.stats.unreadable_dirs)} unreadable folders under {root}"
            )
        logger.info(
            f"Vault index complete: {index.count} items, {len(colors)} colors "
            f"in {self.stats.duration_ms:.1f}ms"
        )
        return index

    def _is_asset(self, name: str) -> bool:
        return name.lower().endswith(tuple(self.settings.extensions))

    def _scan(self, directory: Path) -> List[os.DirEntry]:
        try:
            with os.scandir(directory) as it:
                return sorted(it, key=lambda e: e.name)
        except OSError as e:
            logger.warning(f"Skipping unreadable folder {directory}: {e}")
            self.stats.unreadable_dirs.append(str(directory))
            return []

    def _walk(self, directory: Path, found: List[Path]) -> None:
        """Collect asset files depth-first in name order without following links."""
        # One iterator per open folder; nesting depth is bounded by the disk only
        pending = [iter(self._scan(directory))]
        while pending:
            entry = next(pending[-1], None)
            if entry is None:
                pending.pop()
                continue
            try:
                if entry.is_dir(follow_symlinks=False):
                    pending.append(iter(self._scan(Path(entry.path))))
                elif entry.is_file(follow_symlinks=False) and self._is_asset(entry.name):
                    found.append(Path(entry.path))
            except OSError as e:
                logger.debug(f"Cannot stat {entry.path}: {e}")

    def _index_file(self, root: Path, file_path: Path) -> Optional[AssetRecord]:
        """Extract one record, or None when the file cannot be read or parsed."""
        try:
            text = file_path.read_text(encoding="utf-8", errors="replace")
            meta = self.extractor.extract(text)
        except Exception as e:
            logger.debug(f"Skipping {file_path}: {e}")
            self.stats.skipped_files.append({"file": str(file_path), "error": str(e)})
            return None

        rel_path = file_path.relative_to(root)
        return AssetRecord(
            id=str(rel_path),
            file=str(file_path),
            name=file_path.name,
            tags=derive_tags(rel_path.parent, self.settings.tag_depth),
            width=meta.width,
            height=meta.height,
            view_box=meta.view_box,
            path_count=meta.path_count,
            fills=meta.fills,
            strokes=meta.strokes,
        )

    def get_stats(self) -> Dict[str, Any]:
        """Statistics for the last run."""
        return self.stats.to_dict()


def index_vault(root_dir: Union[str, Path], config: Optional[Config] = None) -> VaultIndex:
    """Rebuild and persist the index for a vault root."""
    return VaultIndexer(config).index(root_dir)
