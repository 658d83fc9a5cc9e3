"""T0.01 — Binarization.

Threshold the frame's intensity into a foreground mask and build the frame's
PixelGrid (foreground, boundary, visited and traced flags).
"""

from __future__ import annotations

import logging

from islandfit.engine.context import FrameContext
from islandfit.engine.registry import Layer, transform
from islandfit.utils.morphology import PixelGrid, otsu_threshold

logger = logging.getLogger(__name__)


@transform(
    id="T0.01",
    layer=Layer.BINARIZATION,
    description="Threshold intensity into a foreground/background pixel grid",
)
def binarize_frame(ctx: FrameContext) -> None:
    cfg = ctx.config
    threshold = float(cfg.threshold)
    if cfg.auto_threshold:
        threshold = otsu_threshold(ctx.image, fallback=cfg.threshold)
        logger.debug("Otsu threshold %.1f (configured %d)", threshold, cfg.threshold)

    ctx.threshold = threshold
    ctx.grid = PixelGrid.from_image(ctx.image, threshold, invert=cfg.invert)
    logger.debug(
        "Binarized: %d foreground, %d boundary pixels",
        int(ctx.grid.foreground.sum()),
        int(ctx.grid.boundary.sum()),
    )
