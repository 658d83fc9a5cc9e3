"""Leaf-node geometry helpers. No engine imports."""

from __future__ import annotations

from collections.abc import Iterable, Sequence

import numpy as np
from numpy.typing import ArrayLike, NDArray

MIN_VERTICES = 2


class IslandPolygon:
    """Closed vertex loop with fractional positional queries.

    The vertex array always ends with a copy of its first vertex. Positions
    are addressed by ``p`` in (0, 1) along the vertex index; anything outside
    that open interval resolves to the first vertex.
    """

    def __init__(self, points: Iterable[Sequence[float]]) -> None:
        pts = np.asarray([tuple(p) for p in points], dtype=np.float64).reshape(-1, 2)
        if len(pts) == 0:
            raise ValueError("IslandPolygon needs at least one vertex")
        if len(pts) == 1 or not np.array_equal(pts[0], pts[-1]):
            pts = np.vstack([pts, pts[:1]])
        self.points: NDArray[np.float64] = pts

    def __len__(self) -> int:
        return len(self.points)

    def __repr__(self) -> str:
        return f"IslandPolygon({len(self.points)} vertices, start={self.start})"

    @property
    def path_length(self) -> int:
        """Vertex count, closing vertex included."""
        return len(self.points)

    @property
    def start(self) -> tuple[float, float]:
        return (float(self.points[0, 0]), float(self.points[0, 1]))

    def get_point(self, p: float) -> tuple[float, float]:
        """Point at fraction ``p`` of the loop, linearly interpolated."""
        if p <= 0 or p >= 1:
            return self.start
        t = p * (len(self.points) - 1)
        i = int(np.floor(t))
        frac = t - i
        a = self.points[i]
        b = self.points[i + 1]
        return (float(a[0] + (b[0] - a[0]) * frac), float(a[1] + (b[1] - a[1]) * frac))

    def sample(self, params: ArrayLike) -> NDArray[np.complex128]:
        """Vectorized get_point, returned as complex x + iy."""
        p = np.asarray(params, dtype=np.float64)
        n = len(self.points)
        t = p * (n - 1)
        i = np.clip(np.floor(t).astype(np.int64), 0, n - 2)
        frac = (t - i)[..., None]
        pts = self.points[i] + (self.points[i + 1] - self.points[i]) * frac
        clamped = (p <= 0) | (p >= 1)
        pts[clamped] = self.points[0]
        return pts[..., 0] + 1j * pts[..., 1]

    def pixel_path(self) -> list[tuple[int, int]]:
        return [(int(x), int(y)) for x, y in self.points]


def merge_polygons(polygons: Sequence[IslandPolygon]) -> IslandPolygon | None:
    """Concatenate every loop into one closed polygon, in order."""
    if not polygons:
        return None
    stacked = np.vstack([poly.points for poly in polygons])
    return IslandPolygon(stacked)


def complex_to_xy(values: NDArray[np.complex128]) -> NDArray[np.float64]:
    """Complex points to an Nx2 (x, y) array."""
    values = np.asarray(values)
    return np.column_stack([values.real, values.imag])
