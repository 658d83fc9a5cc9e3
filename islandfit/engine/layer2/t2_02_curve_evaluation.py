"""T2.02 — Curve Evaluation.

Evaluate each island's interpolating polynomial on a denser parameter grid:
one point per ``eval_spacing`` vertices, at least 3. The grid is Chebyshev
(default) or uniform over [-1, 1).
"""

from __future__ import annotations

from islandfit.engine.context import FrameContext
from islandfit.engine.registry import Layer, transform
from islandfit.utils.interpolation import BarycentricInterpolator, chebyshev2, uniform_grid

MIN_EVAL_POINTS = 3


def eval_params(path_length: int, spacing: int, distribution: str):
    count = max(MIN_EVAL_POINTS, path_length // spacing)
    if distribution == "uniform":
        return uniform_grid(count)
    return chebyshev2(count - 1)


@transform(
    id="T2.02",
    layer=Layer.FITTING,
    dependencies=["T2.01"],
    description="Evaluate barycentric interpolants on a dense parameter grid",
)
def curve_evaluation(ctx: FrameContext) -> None:
    cfg = ctx.config
    for island in ctx.islands:
        interpolant = BarycentricInterpolator(island.samples)
        xs = eval_params(island.polygon.path_length, cfg.eval_spacing, cfg.eval_distribution)
        island.curve_params = xs
        island.curve = interpolant(xs)
