"""shapeforge extraction and generation engine."""

from shapeforge.engine.classifier import classify
from shapeforge.engine.generator import generate, select_generator
from shapeforge.engine.pipeline import ShapePipeline, create_pipeline
from shapeforge.engine.registry import Registry, build_registry

__all__ = [
    "classify",
    "generate",
    "select_generator",
    "ShapePipeline",
    "create_pipeline",
    "Registry",
    "build_registry",
]
