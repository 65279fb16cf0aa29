"""Write the consumable shape-sets module from a Registry."""

from __future__ import annotations

import logging
import pprint
from pathlib import Path

from shapeforge.engine.registry import Registry

logger = logging.getLogger(__name__)

_HEADER = '''"""Shape sets, generated from SVG assets.

Do not edit: run ``shapeforge build`` to regenerate.
"""

from shapeforge.engine.registry import Registry, placement_table
'''

_FOOTER = '''
REGISTRY = Registry.model_validate(SHAPE_SET_DATA)

# set key -> {"meta": {...}, "shapes": {name: placement function}}
shape_sets = REGISTRY.placement_sets()


def get_all_shapes():
    """Shapes from every set. Later sets shadow earlier ones on name clashes."""
    return placement_table(REGISTRY.all_shapes())


def get_enabled_shapes():
    """Shapes from sets whose meta.enabled is true."""
    return placement_table(REGISTRY.enabled_shapes())


# Flat name -> placement function lookup
shapes = get_all_shapes()
'''


def render_module(registry: Registry) -> str:
    """Source text of the generated module. Same registry, same text."""
    data = registry.model_dump(mode="json", exclude_none=True)
    lines = [
        _HEADER,
        "SHAPE_SET_DATA = " + pprint.pformat(data, indent=1, width=100, sort_dicts=False),
        _FOOTER,
    ]
    return "\n".join(lines)


def write_module(registry: Registry, output_path: Path) -> Path:
    """Write the module. OSError propagates: an unwritable output is fatal."""
    output_path.parent.mkdir(parents=True, exist_ok=True)
    output_path.write_text(render_module(registry), encoding="utf-8")
    logger.info("Wrote %s", output_path)
    return output_path
