"""Shared test fixtures."""

from __future__ import annotations

import numpy as np
import pytest

from islandfit.engine.config import PipelineConfig
from islandfit.utils.image import ArrayImage

FG = 255
BG = 0


def make_frame(width: int, height: int, rects: list[tuple[int, int, int, int]]) -> np.ndarray:
    """Background frame with filled foreground rects given as (x0, y0, x1, y1), inclusive."""
    frame = np.full((height, width), BG, dtype=np.uint8)
    for x0, y0, x1, y1 in rects:
        frame[y0 : y1 + 1, x0 : x1 + 1] = FG
    return frame


def config_for(frame: np.ndarray, **overrides) -> PipelineConfig:
    return PipelineConfig(**{"width": frame.shape[1], "height": frame.shape[0], **overrides})


# 3x3 foreground block centered in a 5x5 frame
BLOCK_3X3 = make_frame(5, 5, [(1, 1, 3, 3)])

# One isolated foreground pixel
SINGLE_PIXEL = make_frame(5, 5, [(2, 2, 2, 2)])

# Horizontal one-pixel-thick bar
THIN_BAR = make_frame(5, 3, [(1, 1, 3, 1)])

# Two disjoint blobs
TWO_BLOBS = make_frame(12, 8, [(1, 1, 3, 3), (6, 2, 9, 5)])

# 12x12 block in a 20x20 frame: 44 perimeter pixels
LARGE_BLOCK = make_frame(20, 20, [(4, 4, 15, 15)])

# 5x5 block with a one-pixel hole in the middle
RING = make_frame(7, 7, [(1, 1, 5, 5)])
RING[3, 3] = BG


class IntensityOnlyImage:
    """Image that only answers per-pixel queries (no array fast path)."""

    def __init__(self, pixels: np.ndarray) -> None:
        self._pixels = pixels

    @property
    def width(self) -> int:
        return self._pixels.shape[1]

    @property
    def height(self) -> int:
        return self._pixels.shape[0]

    def intensity(self, x: int, y: int) -> int:
        return int(self._pixels[y, x])


@pytest.fixture
def block_image() -> ArrayImage:
    return ArrayImage(BLOCK_3X3)


@pytest.fixture
def large_block_image() -> ArrayImage:
    return ArrayImage(LARGE_BLOCK)


@pytest.fixture
def two_blobs_image() -> ArrayImage:
    return ArrayImage(TWO_BLOBS)


@pytest.fixture
def square_loop() -> list[tuple[int, int]]:
    return [(0, 0), (10, 0), (10, 10), (0, 10), (0, 0)]
