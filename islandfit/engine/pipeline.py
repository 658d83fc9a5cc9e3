"""Pipeline orchestrator — runs frame transforms in dependency order with config gating."""

from __future__ import annotations

import importlib
import logging
import pkgutil
import time

from islandfit.engine.config import PipelineConfig
from islandfit.engine.context import FrameContext
from islandfit.engine.registry import Layer, TransformRegistry, get_registry
from islandfit.utils.image import IntensityImage

logger = logging.getLogger(__name__)

_TRANSFORM_PACKAGES = ["layer0", "layer1", "layer2", "layer3"]


def register_transforms() -> None:
    """Import all transform modules so @transform decorators fire."""
    for layer_name in _TRANSFORM_PACKAGES:
        package = importlib.import_module(f"islandfit.engine.{layer_name}")
        for _, module_name, _ in pkgutil.iter_modules(package.__path__):
            importlib.import_module(f"{package.__name__}.{module_name}")


class Pipeline:
    """Runs the registered transforms over one FrameContext."""

    def __init__(
        self,
        registry: TransformRegistry | None = None,
        config: PipelineConfig | None = None,
    ) -> None:
        self.registry = registry or get_registry()
        self.config = config or PipelineConfig()

    def run(self, ctx: FrameContext) -> FrameContext:
        """Run the full pipeline on the given context."""
        start = time.perf_counter()

        skip_ids = self._config_gate(ctx)
        all_specs = self.registry.all()
        requested = {s.id for s in all_specs} - skip_ids
        ordered = self.registry.schedule(requested)

        logger.info(
            "Pipeline: %d transforms queued (%d skipped)",
            len(ordered),
            len(skip_ids),
        )

        for spec in ordered:
            t0 = time.perf_counter()
            try:
                spec.fn(ctx)
                ctx.completed_transforms.add(spec.id)
                elapsed = (time.perf_counter() - t0) * 1000
                logger.debug("  %s completed in %.1fms", spec.id, elapsed)
            except Exception as e:
                ctx.errors[spec.id] = str(e)
                logger.warning("  %s FAILED: %s", spec.id, e)

        total = (time.perf_counter() - start) * 1000
        logger.info(
            "Pipeline complete: %d/%d transforms, %d islands (%d skipped) in %.0fms",
            len(ctx.completed_transforms),
            len(ordered),
            ctx.num_islands,
            ctx.skipped_islands,
            total,
        )
        return ctx

    def run_layer(self, ctx: FrameContext, layer: Layer) -> FrameContext:
        """Run only transforms in a specific layer."""
        specs = self.registry.get_layer(layer)
        for spec in specs:
            try:
                spec.fn(ctx)
                ctx.completed_transforms.add(spec.id)
            except Exception as e:
                ctx.errors[spec.id] = str(e)
                logger.warning("  %s FAILED: %s", spec.id, e)
        return ctx

    def process(self, image: IntensityImage) -> FrameContext:
        """Validate a frame against this pipeline's config and run it.

        Raises ConfigurationError before any transform runs if the frame does
        not match the configured geometry.
        """
        ctx = FrameContext.from_image(image, self.config)
        return self.run(ctx)

    def _config_gate(self, ctx: FrameContext) -> set[str]:
        """Transforms switched off by the frame's config."""
        skip: set[str] = set()
        if not ctx.config.single_polynomial:
            skip.add("T1.02")  # Island merge
        if not ctx.config.validate_fit:
            skip.add("T3.01")  # Fit validation
        return skip


def create_pipeline(config: PipelineConfig | None = None) -> Pipeline:
    """Factory function for creating a pipeline with the built-in transforms loaded."""
    register_transforms()
    return Pipeline(config=config)


def process_frame(image: IntensityImage, config: PipelineConfig | None = None) -> FrameContext:
    """Binarize, trace and fit one frame."""
    return create_pipeline(config).process(image)
