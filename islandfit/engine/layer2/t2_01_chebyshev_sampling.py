"""T2.01 — Chebyshev Sampling.

Sample each island polygon at second-kind Chebyshev parameters. The node
count grows with the loop length (one node per ``sample_spacing`` vertices)
and never drops below ``min_sample_points``. Loops shorter than
``min_island_size`` are skipped.

Runs in the FITTING layer, so it sees ``ctx.polygons`` after every TRACING
transform, the optional island merge included.
"""

from __future__ import annotations

import logging

from islandfit.engine.context import FrameContext, IslandCurve
from islandfit.engine.registry import Layer, transform
from islandfit.utils.interpolation import chebyshev2

logger = logging.getLogger(__name__)


def sample_point_count(path_length: int, spacing: int, minimum: int) -> int:
    return max(minimum, path_length // spacing)


@transform(
    id="T2.01",
    layer=Layer.FITTING,
    dependencies=["T1.01"],
    description="Sample island polygons at Chebyshev parameters",
)
def chebyshev_sampling(ctx: FrameContext) -> None:
    cfg = ctx.config
    ctx.islands = []
    ctx.skipped_islands = 0

    for index, poly in enumerate(ctx.polygons):
        if poly.path_length < cfg.min_island_size:
            ctx.skipped_islands += 1
            logger.debug("Skipping island %d: %d vertices", index, poly.path_length)
            continue

        count = sample_point_count(poly.path_length, cfg.sample_spacing, cfg.min_sample_points)
        xs = chebyshev2(count - 1)
        ys = poly.sample(xs * 0.5 + 0.5)
        ctx.islands.append(
            IslandCurve(
                id=f"I{index}",
                polygon=poly,
                sample_params=xs,
                samples=ys,
            )
        )
