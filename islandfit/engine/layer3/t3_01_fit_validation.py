"""T3.01 — Fit Validation.

Per-island consistency checks:
- loop closure of the traced polygon
- node residual: max |BLI(x_j) - y_j| over the sample nodes (should be ~0)
- 8-connected component of the loop's start pixel
- enclosed area of the loop (shapely), when it has at least 4 vertices
"""

from __future__ import annotations

import numpy as np
from shapely.geometry import Polygon

from islandfit.engine.context import FrameContext
from islandfit.engine.registry import Layer, transform
from islandfit.utils.interpolation import BarycentricInterpolator
from islandfit.utils.morphology import connected_components_grid

_MIN_AREA_VERTICES = 4


@transform(
    id="T3.01",
    layer=Layer.VALIDATION,
    dependencies=["T2.02"],
    description="Check loop closure, node reproduction and island components",
)
def fit_validation(ctx: FrameContext) -> None:
    labels = None
    if ctx.grid is not None:
        labels, _ = connected_components_grid(ctx.grid.foreground)

    for island in ctx.islands:
        pts = island.polygon.points
        island.features["closed"] = bool(np.array_equal(pts[0], pts[-1]))
        island.features["sample_count"] = island.sample_count
        island.features["curve_count"] = island.curve_count

        if island.sample_count >= 2:
            reproduced = BarycentricInterpolator(island.samples)(island.sample_params)
            island.features["node_residual"] = float(np.max(np.abs(reproduced - island.samples)))

        if labels is not None:
            sx, sy = island.polygon.pixel_path()[0]
            island.features["component_id"] = int(labels[sy, sx])

        if len(pts) >= _MIN_AREA_VERTICES:
            island.features["enclosed_area"] = float(Polygon(pts).area)
        else:
            island.features["enclosed_area"] = 0.0
