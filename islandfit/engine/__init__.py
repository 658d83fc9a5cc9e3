"""IslandFit contour tracing and curve fitting engine."""

from islandfit.engine.registry import transform, Layer, get_registry
from islandfit.engine.config import ConfigurationError, PipelineConfig
from islandfit.engine.context import FrameContext, IslandCurve
from islandfit.engine.pipeline import Pipeline, create_pipeline, process_frame

__all__ = [
    "transform",
    "Layer",
    "get_registry",
    "ConfigurationError",
    "PipelineConfig",
    "FrameContext",
    "IslandCurve",
    "Pipeline",
    "create_pipeline",
    "process_frame",
]
