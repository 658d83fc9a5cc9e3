"""Contour extraction: Moore-neighbor boundary tracing over a PixelGrid.

Directions are indexed clockwise starting at "down" in image coordinates
(+y down)::

    0: (0, 1)   1: (1, 1)   2: (1, 0)   3: (1, -1)
    4: (0, -1)  5: (-1, -1) 6: (-1, 0)  7: (-1, 1)

Each walk scans clockwise starting one step past the reverse of the last
accepted direction. The seed of a walk behaves as if it had been entered
moving right (direction 2), the direction of the raster scan that found it,
and never looks back left.
"""

from __future__ import annotations

import logging

from islandfit.utils.morphology import PixelGrid

logger = logging.getLogger(__name__)

DIRECTIONS: list[tuple[int, int]] = [
    (0, 1),
    (1, 1),
    (1, 0),
    (1, -1),
    (0, -1),
    (-1, -1),
    (-1, 0),
    (-1, 1),
]

START_DIRECTION = 2

Point = tuple[int, int]
Edge = tuple[Point, Point]


class BoundaryTracer:
    """Walks a PixelGrid once, emitting one closed boundary path per island."""

    def __init__(self, grid: PixelGrid, start_direction: int = START_DIRECTION) -> None:
        self.grid = grid
        self.start_direction = start_direction % 8

    def trace_all(self) -> list[list[Point]]:
        """Trace every unclaimed boundary pixel in raster order."""
        paths: list[list[Point]] = []
        for x, y in self.grid.boundary_pixels():
            if self.grid.is_claimed(x, y):
                continue
            path = self.trace_from(x, y)
            self.commit(path)
            logger.debug("Island %d: %d path points from (%d, %d)", len(paths) + 1, len(path), x, y)
            paths.append(path)
        return paths

    def trace_from(self, x: int, y: int) -> list[Point]:
        """Run one walk from seed (x, y). Returns a closed path."""
        grid = self.grid
        path: list[Point] = [(x, y)]
        grid.visited[y, x] = True

        # Directed steps taken during this walk only
        edges: set[Edge] = set()
        last_dir = self.start_direction
        px, py = x, y

        while True:
            backtrack = (last_dir + 4) % 8
            # The seed has no predecessor, so the reversal itself is skipped
            candidates = 7 if len(path) == 1 else 8
            accepted = None
            for step in range(1, candidates + 1):
                d = (backtrack + step) % 8
                dx, dy = DIRECTIONS[d]
                qx, qy = px + dx, py + dy
                if not grid.in_bounds(qx, qy):
                    continue
                if grid.is_claimed(qx, qy):
                    continue
                if not grid.boundary[qy, qx]:
                    continue
                edge = ((px, py), (qx, qy))
                if edge in edges:
                    continue
                edges.add(edge)
                accepted = d
                break

            if accepted is None:
                break

            dx, dy = DIRECTIONS[accepted]
            px, py = px + dx, py + dy
            path.append((px, py))
            grid.visited[py, px] = True
            last_dir = accepted

        if len(path) == 1 or path[-1] != path[0]:
            path.append(path[0])
        return path

    def commit(self, path: list[Point]) -> None:
        for px, py in path:
            self.grid.traced[py, px] = True


def trace_boundaries(grid: PixelGrid, start_direction: int = START_DIRECTION) -> list[list[Point]]:
    """Convenience wrapper: trace every island boundary of ``grid``."""
    return BoundaryTracer(grid, start_direction).trace_all()


def is_closed(path: list[Point]) -> bool:
    return len(path) >= 2 and path[0] == path[-1]


def is_eight_connected(path: list[Point]) -> bool:
    """True if consecutive points are 8-adjacent (or equal)."""
    for (x0, y0), (x1, y1) in zip(path, path[1:]):
        if max(abs(x1 - x0), abs(y1 - y0)) > 1:
            return False
    return True
