"""Pipeline configuration from environment variables (prefix ``SHAPEFORGE_``)."""

from __future__ import annotations

from pathlib import Path
from typing import Any

from pydantic_settings import BaseSettings

# Fixed display metadata for the known asset categories. multi_color is
# derived from the set's contents at build time, never configured.
DEFAULT_SET_META: dict[str, dict[str, Any]] = {
    "primitives": {
        "name": "Primitives",
        "description": "Basic geometric shapes",
        "icon": "○□△⬡",
        "enabled": True,
    },
    "blocks33": {
        "name": "3×3 Blocks",
        "description": "Complex block patterns",
        "icon": "▦▧▨",
        "enabled": True,
    },
    "nautical": {
        "name": "Nautical Flags",
        "description": "International maritime signal flags",
        "icon": "⚓🚩",
        "enabled": True,
    },
}


class Settings(BaseSettings):
    assets_dir: Path = Path("assets")
    output_path: Path = Path("build/shape_sets.py")

    # Categories whose assets get a slot_1 background injected before extraction
    multi_slot_categories: list[str] = ["nautical"]
    # Categories listed here are processed first, in this order; the rest
    # follow alphabetically. Later sets shadow earlier ones on name collisions.
    set_order: list[str] = ["primitives", "blocks33", "nautical"]
    set_meta: dict[str, dict[str, Any]] = DEFAULT_SET_META

    background_fill: str = "#FFFFFF"

    # Raise instead of warning when two sets export the same shape name
    strict_collisions: bool = False

    log_level: str = "info"

    model_config = {
        "env_prefix": "SHAPEFORGE_",
        "env_file": ".env",
        "env_file_encoding": "utf-8",
    }


settings = Settings()


def get_settings() -> Settings:
    return settings
