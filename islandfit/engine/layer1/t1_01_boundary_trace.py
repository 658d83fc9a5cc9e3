"""T1.01 — Boundary Tracing.

Walk the grid once in raster order and emit one closed boundary loop per
island. Each loop becomes an IslandPolygon.
"""

from __future__ import annotations

import logging

from islandfit.engine.context import FrameContext
from islandfit.engine.registry import Layer, transform
from islandfit.utils.contour import BoundaryTracer
from islandfit.utils.geometry import IslandPolygon

logger = logging.getLogger(__name__)


@transform(
    id="T1.01",
    layer=Layer.TRACING,
    dependencies=["T0.01"],
    description="Trace the closed boundary of every foreground island",
)
def boundary_trace(ctx: FrameContext) -> None:
    if ctx.grid is None:
        raise RuntimeError("Boundary tracing needs a binarized grid")

    paths = BoundaryTracer(ctx.grid).trace_all()
    ctx.polygons = [IslandPolygon(path) for path in paths]
    logger.info("Traced %d islands", len(ctx.polygons))
