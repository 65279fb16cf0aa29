"""Shared test fixtures."""

from __future__ import annotations

from pathlib import Path

import pytest

from shapeforge.config import Settings


CIRCLE_SVG = '''<svg width="64" height="64" viewBox="0 0 64 64" fill="none" xmlns="http://www.w3.org/2000/svg">
<circle cx="32" cy="32" r="32" fill="black"/>
</svg>'''

SQUARE_SVG = '''<svg width="64" height="64" viewBox="0 0 64 64" fill="none" xmlns="http://www.w3.org/2000/svg">
<rect width="64" height="64" fill="black"/>
</svg>'''

HEXAGON_SVG = '''<svg width="64" height="64" viewBox="0 0 64 64" fill="none" xmlns="http://www.w3.org/2000/svg">
<path d="M32 0L59.7128 16V48L32 64L4.28719 48V16L32 0Z" fill="black"/>
</svg>'''

POLYGON_SVG = '''<svg viewBox="0 0 64 64" xmlns="http://www.w3.org/2000/svg">
<polygon points="0,0 64,0 32,64" fill="black"/>
</svg>'''

# Figma-style export: clip group, clip rect inside <defs>
CLIPPED_BLOCK_SVG = '''<svg width="64" height="64" viewBox="0 0 64 64" fill="none" xmlns="http://www.w3.org/2000/svg">
<g clip-path="url(#clip0_1_2)">
<path d="M0 0H32V32H0V0Z" fill="black"/>
</g>
<defs>
<clipPath id="clip0_1_2">
<rect width="64" height="64" fill="white"/>
</clipPath>
</defs>
</svg>'''

# Multi-slot flag without a background region
FLAG_NO_BACKGROUND_SVG = '''<svg width="64" height="64" viewBox="0 0 64 64" fill="none" xmlns="http://www.w3.org/2000/svg">
<g clip-path="url(#clip0_12_4)">
<path id="slot_2" d="M64 0H32V64H64L48 32L64 0Z" fill="#0047AB"/>
</g>
<defs>
<clipPath id="clip0_12_4">
<rect width="64" height="64" fill="white"/>
</clipPath>
</defs>
</svg>'''

# No <g> at all: background goes directly under <svg>
FLAG_NO_GROUP_SVG = '''<svg viewBox="0 0 64 64" xmlns="http://www.w3.org/2000/svg">
<rect id="slot_2" y="32" width="64" height="32" fill="#D52B1E"/>
</svg>'''

# Background authored last, other slots out of numeric order
FLAG_STRIPES_SVG = '''<svg viewBox="0 0 64 64" xmlns="http://www.w3.org/2000/svg">
<g>
<rect id="slot_3" width="64" height="16" fill="red"/>
<path id="slot_2" d="M0 16H64V32H0Z" fill="blue"/>
<circle id="slot_4" cx="48" cy="48" r="8" fill="yellow"/>
<rect id="slot_1" width="64" height="64" fill="white"/>
</g>
</svg>'''

# Background + one path, the worked example for placement
FLAG_BASIC_SVG = '''<svg viewBox="0 0 64 64" xmlns="http://www.w3.org/2000/svg">
<rect id="slot_1" width="64" height="64" fill="#FFFFFF"/>
<path id="slot_2" d="M0 0L64 64H0Z" fill="#000000"/>
</svg>'''

# Slot-tagged and untagged regions mixed together
FLAG_MIXED_SVG = '''<svg viewBox="0 0 64 64" xmlns="http://www.w3.org/2000/svg">
<rect id="slot_1" width="64" height="64" fill="white"/>
<circle cx="32" cy="32" r="4" fill="black"/>
<path id="slot_2" d="M0 0H64V8H0Z" fill="blue"/>
</svg>'''

TEXT_ONLY_SVG = '''<svg viewBox="0 0 64 64" xmlns="http://www.w3.org/2000/svg">
<text x="10" y="40">A</text>
</svg>'''


def write_assets(root: Path, tree: dict[str, dict[str, str]]) -> Path:
    """Create ``root/<category>/<name>.svg`` files from a nested mapping."""
    for category, files in tree.items():
        directory = root / category
        directory.mkdir(parents=True, exist_ok=True)
        for name, content in files.items():
            (directory / f"{name}.svg").write_text(content, encoding="utf-8")
    return root


@pytest.fixture
def assets_dir(tmp_path: Path) -> Path:
    return write_assets(
        tmp_path / "assets",
        {
            "primitives": {
                "circle_01": CIRCLE_SVG,
                "square_01": SQUARE_SVG,
                "hexagon_01": HEXAGON_SVG,
            },
            "blocks33": {
                "block33_01": CLIPPED_BLOCK_SVG,
                "block33_02": POLYGON_SVG,
                "broken": TEXT_ONLY_SVG,
            },
            "nautical": {
                "nautical_a_01": FLAG_NO_BACKGROUND_SVG,
                "nautical_b_01": FLAG_NO_GROUP_SVG,
                "nautical_c_01": FLAG_STRIPES_SVG,
            },
        },
    )


@pytest.fixture
def settings(assets_dir: Path, tmp_path: Path) -> Settings:
    return Settings(assets_dir=assets_dir, output_path=tmp_path / "out" / "shape_sets.py")
