"""Sidecar index persistence."""

import json
import os
from pathlib import Path
from typing import Union
from loguru import logger

from .config import DEFAULT_SIDECAR_NAME
from .models import VaultIndex


PathLike = Union[str, Path]


def sidecar_path(root_dir: PathLike, name: str = DEFAULT_SIDECAR_NAME) -> Path:
    return Path(root_dir) / name


def save_index(index: VaultIndex, path: Path) -> None:
    """
    Write the index as JSON.

    The document goes to a temporary sibling first and is renamed over the
    target, so readers see either the previous index or the new one.
    """
    tmp = path.with_name(f"{path.name}.{os.getpid()}.tmp")
    try:
        with tmp.open("w", encoding="utf-8") as fh:
            json.dump(index.to_dict(), fh, indent=2)
        tmp.replace(path)
    finally:
        if tmp.exists():
            tmp.unlink()


def load_index(root_dir: PathLike, name: str = DEFAULT_SIDECAR_NAME) -> VaultIndex:
    """Load the stored index, or an empty one if it is missing or unreadable."""
    path = sidecar_path(root_dir, name)
    if not path.exists():
        logger.debug(f"No index at {path}")
        return VaultIndex.empty(str(root_dir))

    try:
        with path.open("r", encoding="utf-8") as fh:
            data = json.load(fh)
    except (OSError, ValueError) as e:
        logger.warning(f"Could not read index {path}: {e}")
        return VaultIndex.empty(str(root_dir))

    if not isinstance(data, dict):
        logger.warning(f"Ignoring malformed index {path}")
        return VaultIndex.empty(str(root_dir))

    return VaultIndex.from_dict(data, root_dir=str(root_dir))
