"""Intensity image abstraction consumed by the binarizer. No engine imports."""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable

import numpy as np
from numpy.typing import NDArray

if TYPE_CHECKING:
    from PIL import Image


@runtime_checkable
class IntensityImage(Protocol):
    """Anything exposing a size and a per-pixel 8-bit intensity."""

    @property
    def width(self) -> int: ...

    @property
    def height(self) -> int: ...

    def intensity(self, x: int, y: int) -> int: ...


class ArrayImage:
    """Intensity image backed by a numpy array.

    Accepts an (H, W) array, or an (H, W, C) array whose first channel is used
    (the red channel of an RGB frame).
    """

    def __init__(self, pixels: NDArray) -> None:
        arr = np.asarray(pixels)
        if arr.ndim == 3:
            arr = arr[:, :, 0]
        if arr.ndim != 2:
            raise ValueError(f"Expected a 2D or 3D pixel array, got shape {arr.shape}")
        self._pixels = arr

    @classmethod
    def from_pil(cls, image: Image.Image) -> ArrayImage:
        return cls(np.asarray(image.convert("RGB")))

    @property
    def width(self) -> int:
        return int(self._pixels.shape[1])

    @property
    def height(self) -> int:
        return int(self._pixels.shape[0])

    def intensity(self, x: int, y: int) -> int:
        return int(self._pixels[y, x])

    def as_array(self) -> NDArray:
        return self._pixels


def intensity_array(image: IntensityImage) -> NDArray[np.float64]:
    """Materialize an image as an (H, W) float array."""
    as_array = getattr(image, "as_array", None)
    if as_array is not None:
        return np.asarray(as_array(), dtype=np.float64)

    out = np.empty((image.height, image.width), dtype=np.float64)
    for y in range(image.height):
        for x in range(image.width):
            out[y, x] = image.intensity(x, y)
    return out
