"""Pipeline configuration: frame geometry, thresholds and fitting density."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from islandfit.config import Settings

EVAL_DISTRIBUTIONS = ("chebyshev", "uniform")


class ConfigurationError(ValueError):
    """Frame or parameters cannot be processed as configured."""


@dataclass
class PipelineConfig:
    """Controls binarization, tracing and curve fitting for one frame."""

    # Expected frame size in pixels
    width: int = 960
    height: int = 720

    # Binarization: foreground = intensity > threshold (<= when inverted)
    threshold: int = 127
    invert: bool = False
    auto_threshold: bool = False  # Otsu on the frame histogram

    # Boundary sampling: one Chebyshev node per sample_spacing path pixels
    sample_spacing: int = 10
    min_sample_points: int = 4

    # Dense evaluation: one curve point per eval_spacing path pixels
    eval_spacing: int = 1
    eval_distribution: str = "chebyshev"

    # Islands with fewer path vertices than this are skipped
    min_island_size: int = 10

    # Merge every island into one polygon before fitting
    single_polynomial: bool = False

    # Run the fit validation layer
    validate_fit: bool = True

    def validate(self) -> None:
        if self.width < 1 or self.height < 1:
            raise ConfigurationError(f"Invalid frame size {self.width}x{self.height}")
        if self.sample_spacing < 1 or self.eval_spacing < 1:
            raise ConfigurationError("sample_spacing and eval_spacing must be >= 1")
        if self.min_sample_points < 2:
            raise ConfigurationError("min_sample_points must be >= 2")
        if self.eval_distribution not in EVAL_DISTRIBUTIONS:
            raise ConfigurationError(
                f"Unknown eval_distribution {self.eval_distribution!r}, "
                f"expected one of {EVAL_DISTRIBUTIONS}"
            )

    @classmethod
    def from_settings(cls, settings: Settings) -> PipelineConfig:
        return cls(
            width=settings.islandfit_frame_width,
            height=settings.islandfit_frame_height,
            threshold=settings.islandfit_threshold,
            invert=settings.islandfit_invert,
            auto_threshold=settings.islandfit_auto_threshold,
            sample_spacing=settings.islandfit_sample_spacing,
            min_sample_points=settings.islandfit_min_sample_points,
            eval_spacing=settings.islandfit_eval_spacing,
            eval_distribution=settings.islandfit_eval_distribution,
            min_island_size=settings.islandfit_min_island_size,
            single_polynomial=settings.islandfit_single_polynomial,
        )
