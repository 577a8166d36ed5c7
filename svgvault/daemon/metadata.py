"""
SVG metadata extraction.

Two strategies share one interface:

- PatternExtractor reads attributes straight from the raw markup with
  regular expressions. It never fails.
- StructuredExtractor parses the document and reads the root <svg>
  attributes, falling back to the pattern pass when parsing fails or an
  attribute is not declared.

Path counts and fill/stroke colors always come from the pattern pass, so
only literal fill="..." and stroke="..." attributes are counted. Colors set
through style attributes or stylesheets are not seen.
"""

import re
import xml.etree.ElementTree as ET
from typing import List, Optional
from loguru import logger

from .models import SvgMetadata


WIDTH_RE = re.compile(r'\bwidth\s*=\s*"([^"]+)"', re.IGNORECASE)
HEIGHT_RE = re.compile(r'\bheight\s*=\s*"([^"]+)"', re.IGNORECASE)
VIEWBOX_RE = re.compile(r'\bviewBox\s*=\s*"([^"]+)"', re.IGNORECASE)
PATH_RE = re.compile(r'<path\b', re.IGNORECASE)
FILL_RE = re.compile(r'\bfill\s*=\s*"(#?[a-zA-Z0-9(),.%\s-]+)"')
STROKE_RE = re.compile(r'\bstroke\s*=\s*"(#?[a-zA-Z0-9(),.%\s-]+)"')


def _first(pattern: re.Pattern, text: str) -> Optional[str]:
    match = pattern.search(text)
    return match.group(1) if match else None


def _unique(values: List[str]) -> List[str]:
    """Drop empties and duplicates, keeping first-seen order."""
    return list(dict.fromkeys(v for v in values if v))


def _local_name(tag: str) -> str:
    if "}" in tag:
        tag = tag.rsplit("}", 1)[1]
    if ":" in tag:
        tag = tag.rsplit(":", 1)[1]
    return tag.lower()


class MetadataExtractor:
    """Interface for metadata extraction strategies."""

    name = "base"

    def extract(self, text: str) -> SvgMetadata:
        raise NotImplementedError


class PatternExtractor(MetadataExtractor):
    """Regex extraction against the raw markup."""

    name = "pattern"

    def extract(self, text: str) -> SvgMetadata:
        fills = [m.group(1).strip() for m in FILL_RE.finditer(text)]
        strokes = [m.group(1).strip() for m in STROKE_RE.finditer(text)]

        return SvgMetadata(
            width=_first(WIDTH_RE, text),
            height=_first(HEIGHT_RE, text),
            view_box=_first(VIEWBOX_RE, text),
            path_count=len(PATH_RE.findall(text)),
            fills=_unique(fills),
            strokes=_unique(strokes),
        )


class StructuredExtractor(MetadataExtractor):
    """Parse the document and read the declared root attributes."""

    name = "structured"

    def __init__(self, fallback: Optional[MetadataExtractor] = None):
        self.fallback = fallback or PatternExtractor()

    def extract(self, text: str) -> SvgMetadata:
        basics = self.fallback.extract(text)

        try:
            root = ET.fromstring(text)
        except (ET.ParseError, ValueError) as e:
            logger.debug(f"Structured parse failed, using pattern values: {e}")
            return basics

        if _local_name(root.tag) != "svg":
            return basics

        attrs = root.attrib
        basics.width = attrs.get("width") or basics.width
        basics.height = attrs.get("height") or basics.height
        basics.view_box = attrs.get("viewBox") or basics.view_box
        return basics


def get_extractor(structured: bool = True) -> MetadataExtractor:
    """Select the extraction strategy."""
    if structured:
        return StructuredExtractor()
    return PatternExtractor()
