"""Data models for the vault index."""

from dataclasses import dataclass, field, replace
from typing import List, Dict, Any, Optional, Union
from loguru import logger


INDEX_VERSION = 1


def color_key(value: Optional[str]) -> str:
    """Normalized form of a color used for aggregation and filtering."""
    return (value or "").strip().lower()


def _list(value: Any) -> list:
    return value if isinstance(value, list) else []


def _strings(value: Any) -> List[str]:
    return [v for v in _list(value) if isinstance(v, str)]


def _optional_str(value: Any) -> Optional[str]:
    return value if isinstance(value, str) else None


@dataclass
class SvgMetadata:
    """Structural metadata extracted from one SVG document."""
    width: Optional[str] = None
    height: Optional[str] = None
    view_box: Optional[str] = None
    path_count: int = 0
    fills: List[str] = field(default_factory=list)
    strokes: List[str] = field(default_factory=list)


@dataclass
class AssetRecord:
    """One indexed asset file."""
    id: str
    file: str
    name: str
    tags: List[str] = field(default_factory=list)
    width: Optional[str] = None
    height: Optional[str] = None
    view_box: Optional[str] = None
    path_count: int = 0
    fills: List[str] = field(default_factory=list)
    strokes: List[str] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        data = {
            'id': self.id,
            'file': self.file,
            'name': self.name,
            'tags': list(self.tags),
        }
        # Undeclared attributes are left out of the JSON document
        if self.width is not None:
            data['width'] = self.width
        if self.height is not None:
            data['height'] = self.height
        if self.view_box is not None:
            data['viewBox'] = self.view_box
        data['pathCount'] = self.path_count
        data['fills'] = list(self.fills)
        data['strokes'] = list(self.strokes)
        return data

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "AssetRecord":
        path_count = data.get('pathCount') or 0
        try:
            path_count = max(int(path_count), 0)
        except (TypeError, ValueError):
            path_count = 0

        return cls(
            id=str(data.get('id', '')),
            file=str(data.get('file', '')),
            name=str(data.get('name', '')),
            tags=_strings(data.get('tags')),
            width=_optional_str(data.get('width')),
            height=_optional_str(data.get('height')),
            view_box=_optional_str(data.get('viewBox')),
            path_count=path_count,
            fills=_strings(data.get('fills')),
            strokes=_strings(data.get('strokes')),
        )

    def fill_keys(self) -> List[str]:
        return [color_key(c) for c in self.fills]

    def stroke_keys(self) -> List[str]:
        return [color_key(c) for c in self.strokes]


@dataclass
class ColorCount:
    """Entry of the vault color histogram."""
    color: str
    count: int

    def to_dict(self) -> Dict[str, Any]:
        return {'color': self.color, 'count': self.count}

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "ColorCount":
        return cls(color=str(data.get('color', '')), count=int(data.get('count', 0)))


@dataclass
class VaultIndex:
    """
    Index of every asset under a vault root.

    `count` always mirrors `len(items)`; readers recompute it rather than
    trusting the stored value.
    """
    root_dir: str
    version: int = INDEX_VERSION
    created_at: int = 0
    colors: List[ColorCount] = field(default_factory=list)
    items: List[AssetRecord] = field(default_factory=list)

    @property
    def count(self) -> int:
        return len(self.items)

    @classmethod
    def empty(cls, root_dir: str) -> "VaultIndex":
        return cls(root_dir=str(root_dir))

    def with_items(self, items: List[AssetRecord]) -> "VaultIndex":
        """Copy of this index holding a different item list."""
        return replace(self, items=list(items))

    def to_dict(self) -> Dict[str, Any]:
        return {
            'version': self.version,
            'rootDir': self.root_dir,
            'createdAt': self.created_at,
            'count': self.count,
            'colors': [c.to_dict() for c in self.colors],
            'items': [item.to_dict() for item in self.items],
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any], root_dir: Optional[str] = None) -> "VaultIndex":
        """Build an index from its JSON form, ignoring unknown fields."""
        items = []
        for raw in _list(data.get('items')):
            if isinstance(raw, dict):
                items.append(AssetRecord.from_dict(raw))

        colors = []
        for raw in _list(data.get('colors')):
            if isinstance(raw, dict) and isinstance(raw.get('color'), str):
                try:
                    colors.append(ColorCount.from_dict(raw))
                except (TypeError, ValueError):
                    continue

        try:
            version = int(data.get('version', INDEX_VERSION))
        except (TypeError, ValueError):
            version = INDEX_VERSION
        try:
            created_at = int(data.get('createdAt') or 0)
        except (TypeError, ValueError):
            created_at = 0

        return cls(
            root_dir=str(data.get('rootDir') or root_dir or ''),
            version=version,
            created_at=created_at,
            colors=colors,
            items=items,
        )


Bound = Optional[Union[int, float]]


def _parse_bound(name: str, value: Any) -> Bound:
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        return value
    text = str(value).strip()
    if not text:
        return None
    try:
        number = float(text)
    except ValueError:
        logger.warning(f"Ignoring non-numeric {name} filter: {value!r}")
        return None
    return int(number) if number.is_integer() else number


def _parse_color(value: Any) -> Optional[str]:
    if value is None:
        return None
    key = color_key(str(value))
    return key or None


@dataclass
class SearchFilters:
    """Structural filters for a vault query; None means no constraint."""
    min_paths: Bound = None
    max_paths: Bound = None
    fill: Optional[str] = None
    stroke: Optional[str] = None

    @classmethod
    def from_dict(cls, data: Optional[Dict[str, Any]]) -> "SearchFilters":
        if not data:
            return cls()
        return cls(
            min_paths=_parse_bound('minPaths', data.get('minPaths')),
            max_paths=_parse_bound('maxPaths', data.get('maxPaths')),
            fill=_parse_color(data.get('fill')),
            stroke=_parse_color(data.get('stroke')),
        )

    def matches(self, item: AssetRecord) -> bool:
        if self.min_paths is not None and item.path_count < self.min_paths:
            return False
        if self.max_paths is not None and item.path_count > self.max_paths:
            return False
        if self.fill and color_key(self.fill) not in item.fill_keys():
            return False
        if self.stroke and color_key(self.stroke) not in item.stroke_keys():
            return False
        return True
