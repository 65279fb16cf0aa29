"""shapeforge: SVG shape extraction and placement-function generation."""

__version__ = "0.1.0"
