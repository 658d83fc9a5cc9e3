"""Binarization, boundary classification and component labeling on pixel grids."""

from __future__ import annotations

from dataclasses import dataclass

import numpy as np
from numpy.typing import NDArray
from skimage.filters import threshold_otsu
from skimage.measure import label

from islandfit.utils.image import IntensityImage, intensity_array


def binarize(image: IntensityImage, threshold: float, invert: bool = False) -> NDArray[np.bool_]:
    """Foreground mask: intensity > threshold, or <= threshold when inverted."""
    values = intensity_array(image)
    if invert:
        return values <= threshold
    return values > threshold


def otsu_threshold(image: IntensityImage, fallback: float) -> float:
    """Otsu threshold of the image histogram. Constant images use the fallback."""
    values = intensity_array(image)
    if values.size == 0 or float(values.min()) == float(values.max()):
        return float(fallback)
    return float(threshold_otsu(values))


def boundary_mask(foreground: NDArray[np.bool_]) -> NDArray[np.bool_]:
    """Foreground pixels on the image edge or with a 4-connected background neighbor."""
    padded = np.pad(foreground, 1, mode="constant", constant_values=False)
    interior = (
        padded[:-2, 1:-1]  # up
        & padded[2:, 1:-1]  # down
        & padded[1:-1, :-2]  # left
        & padded[1:-1, 2:]  # right
    )
    return foreground & ~interior


@dataclass
class PixelGrid:
    """Per-frame pixel state. Every flag is its own (H, W) boolean array.

    ``visited`` marks pixels discovered by a tracing walk, ``traced`` marks
    pixels committed to an emitted island.
    """

    foreground: NDArray[np.bool_]
    boundary: NDArray[np.bool_] | None = None
    visited: NDArray[np.bool_] | None = None
    traced: NDArray[np.bool_] | None = None

    def __post_init__(self) -> None:
        self.foreground = np.asarray(self.foreground, dtype=bool)
        if self.boundary is None:
            self.boundary = boundary_mask(self.foreground)
        if self.visited is None:
            self.visited = np.zeros_like(self.foreground)
        if self.traced is None:
            self.traced = np.zeros_like(self.foreground)

    @classmethod
    def from_image(cls, image: IntensityImage, threshold: float, invert: bool = False) -> PixelGrid:
        return cls(binarize(image, threshold, invert))

    @property
    def width(self) -> int:
        return int(self.foreground.shape[1])

    @property
    def height(self) -> int:
        return int(self.foreground.shape[0])

    def in_bounds(self, x: int, y: int) -> bool:
        return 0 <= x < self.width and 0 <= y < self.height

    def is_claimed(self, x: int, y: int) -> bool:
        return bool(self.visited[y, x] or self.traced[y, x])

    def boundary_pixels(self) -> list[tuple[int, int]]:
        """Boundary pixels as (x, y) in raster order (row-major)."""
        return [(int(c), int(r)) for r, c in np.argwhere(self.boundary)]


def connected_components_grid(grid: NDArray[np.bool_]) -> tuple[NDArray[np.int32], int]:
    """Label 8-connected foreground components, numbered from 1 in raster order."""
    labels, count = label(np.asarray(grid, dtype=bool), connectivity=2, return_num=True)
    return labels.astype(np.int32), int(count)
