"""svgvault - index SVG asset folders and search their structural metadata."""

__version__ = "0.1.0"
