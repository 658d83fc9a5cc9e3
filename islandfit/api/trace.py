"""POST /api/trace: binarize, trace and fit one frame."""

from __future__ import annotations

import base64
import binascii
import io
import logging
import time
from dataclasses import replace

import numpy as np
from fastapi import APIRouter, Depends, HTTPException
from PIL import Image

from islandfit.config import Settings
from islandfit.dependencies import get_settings
from islandfit.engine.config import ConfigurationError, PipelineConfig
from islandfit.engine.context import FrameContext, IslandCurve
from islandfit.engine.pipeline import create_pipeline
from islandfit.models.requests import TraceRequest
from islandfit.models.responses import IslandResponse, TraceResponse
from islandfit.utils.geometry import complex_to_xy
from islandfit.utils.image import ArrayImage

logger = logging.getLogger(__name__)

router = APIRouter()

_OVERRIDES = (
    "threshold",
    "invert",
    "auto_threshold",
    "sample_spacing",
    "eval_spacing",
    "eval_distribution",
    "single_polynomial",
)


def _decode_image(req: TraceRequest) -> ArrayImage:
    if req.png_base64 is not None:
        try:
            raw = base64.b64decode(req.png_base64, validate=True)
            return ArrayImage.from_pil(Image.open(io.BytesIO(raw)))
        except (binascii.Error, OSError) as e:
            raise HTTPException(status_code=400, detail=f"Invalid PNG payload: {e}") from e

    rows = req.pixels or []
    if not rows or not rows[0]:
        raise HTTPException(status_code=400, detail="Empty pixel grid")
    if any(len(row) != len(rows[0]) for row in rows):
        raise HTTPException(status_code=400, detail="Pixel rows must all have the same length")
    return ArrayImage(np.asarray(rows, dtype=np.int64))


def _build_config(req: TraceRequest, image: ArrayImage, settings: Settings) -> PipelineConfig:
    base = PipelineConfig.from_settings(settings)
    overrides = {
        name: getattr(req, name) for name in _OVERRIDES if getattr(req, name) is not None
    }
    return replace(
        base,
        width=req.width if req.width is not None else image.width,
        height=req.height if req.height is not None else image.height,
        **overrides,
    )


def _island_response(island: IslandCurve) -> IslandResponse:
    return IslandResponse(
        id=island.id,
        polygon=island.polygon.points.tolist(),
        samples=complex_to_xy(island.samples).tolist(),
        curve=complex_to_xy(island.curve).tolist(),
        features=island.features,
    )


@router.post("/trace", response_model=TraceResponse)
async def trace(req: TraceRequest, settings: Settings = Depends(get_settings)) -> TraceResponse:
    start = time.perf_counter()

    image = _decode_image(req)
    config = _build_config(req, image, settings)
    try:
        ctx = FrameContext.from_image(image, config)
    except ConfigurationError as e:
        logger.info("Rejected frame: %s", e)
        raise HTTPException(status_code=422, detail=str(e)) from e

    pipeline = create_pipeline(config)
    ctx = pipeline.run(ctx)

    elapsed = (time.perf_counter() - start) * 1000

    return TraceResponse(
        width=image.width,
        height=image.height,
        threshold=ctx.threshold,
        islands=[_island_response(island) for island in ctx.islands],
        skipped_islands=ctx.skipped_islands,
        processing_time_ms=round(elapsed, 1),
        transforms_completed=len(ctx.completed_transforms),
        transforms_failed=len(ctx.errors),
        errors=ctx.errors,
    )
