"""FrameContext — the single mutable state object flowing through all transforms.

Per-island results -> IslandCurve (+ IslandCurve.features)
Frame-wide state -> FrameContext.* (grid, polygons, counters)

Nothing here outlives one frame.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any

import numpy as np
from numpy.typing import NDArray

from islandfit.engine.config import ConfigurationError, PipelineConfig
from islandfit.utils.geometry import IslandPolygon
from islandfit.utils.image import IntensityImage
from islandfit.utils.morphology import PixelGrid

logger = logging.getLogger(__name__)


@dataclass
class IslandCurve:
    """Fitted curve data for one island."""

    id: str
    polygon: IslandPolygon
    # Chebyshev parameters in [-1, 1] and the polygon points sampled there
    sample_params: NDArray[np.float64] = field(default_factory=lambda: np.empty(0))
    samples: NDArray[np.complex128] = field(default_factory=lambda: np.empty(0, dtype=np.complex128))
    # Dense evaluation parameters and the interpolated curve
    curve_params: NDArray[np.float64] = field(default_factory=lambda: np.empty(0))
    curve: NDArray[np.complex128] = field(default_factory=lambda: np.empty(0, dtype=np.complex128))
    features: dict[str, Any] = field(default_factory=dict)

    @property
    def sample_count(self) -> int:
        return len(self.samples)

    @property
    def curve_count(self) -> int:
        return len(self.curve)

    @property
    def start(self) -> tuple[float, float]:
        return self.polygon.start


@dataclass
class FrameContext:
    """Shared state for processing one frame."""

    image: IntensityImage
    config: PipelineConfig = field(default_factory=PipelineConfig)
    # Threshold actually applied (differs from config when auto_threshold is on)
    threshold: float = 127.0
    grid: PixelGrid | None = None
    # Raw traced loops, in raster discovery order
    polygons: list[IslandPolygon] = field(default_factory=list)
    # Fitted islands (degenerate ones are absent)
    islands: list[IslandCurve] = field(default_factory=list)
    skipped_islands: int = 0

    # --- Pipeline metadata ---
    completed_transforms: set[str] = field(default_factory=set)
    errors: dict[str, str] = field(default_factory=dict)

    @classmethod
    def from_image(cls, image: IntensityImage, config: PipelineConfig | None = None) -> FrameContext:
        """Validate the frame against the configured geometry and wrap it."""
        config = config or PipelineConfig()
        config.validate()
        if image.width != config.width or image.height != config.height:
            raise ConfigurationError(
                f"Frame is {image.width}x{image.height}, expected {config.width}x{config.height}"
            )
        logger.debug("Frame accepted: %dx%d", image.width, image.height)
        return cls(image=image, config=config, threshold=float(config.threshold))

    @property
    def num_islands(self) -> int:
        return len(self.islands)

    @property
    def num_polygons(self) -> int:
        return len(self.polygons)

    def get_island(self, island_id: str) -> IslandCurve | None:
        for island in self.islands:
            if island.id == island_id:
                return island
        return None
