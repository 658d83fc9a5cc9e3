"""T1.02 — Island Merge.

Single-polynomial mode: concatenate every traced loop into one closed polygon
so the whole frame is fitted by a single curve. Gated off unless
``single_polynomial`` is set.
"""

from __future__ import annotations

from islandfit.engine.context import FrameContext
from islandfit.engine.registry import Layer, transform
from islandfit.utils.geometry import merge_polygons


@transform(
    id="T1.02",
    layer=Layer.TRACING,
    dependencies=["T1.01"],
    description="Merge all island loops into one polygon",
)
def island_merge(ctx: FrameContext) -> None:
    merged = merge_polygons(ctx.polygons)
    ctx.polygons = [merged] if merged is not None else []
