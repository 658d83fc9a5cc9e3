"""Application configuration from environment variables."""

from __future__ import annotations

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    islandfit_log_level: str = "info"

    # Frame geometry
    islandfit_frame_width: int = 960
    islandfit_frame_height: int = 720

    # Binarization
    islandfit_threshold: int = 127
    islandfit_invert: bool = False
    islandfit_auto_threshold: bool = False

    # Curve fitting
    islandfit_sample_spacing: int = 10
    islandfit_eval_spacing: int = 1
    islandfit_min_sample_points: int = 4
    islandfit_min_island_size: int = 10
    islandfit_eval_distribution: str = "chebyshev"
    islandfit_single_polynomial: bool = False

    model_config = {"env_file": ".env", "env_file_encoding": "utf-8"}


settings = Settings()
