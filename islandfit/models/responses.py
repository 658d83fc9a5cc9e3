"""API response models."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field


class HealthResponse(BaseModel):
    status: str = "ok"
    version: str = "0.1.0"
    transforms_registered: int = 0


class IslandResponse(BaseModel):
    id: str
    polygon: list[list[float]] = Field(default_factory=list, description="Closed loop as [x, y] pairs")
    samples: list[list[float]] = Field(default_factory=list, description="Chebyshev samples as [x, y]")
    curve: list[list[float]] = Field(default_factory=list, description="Dense curve as [x, y]")
    features: dict[str, Any] = Field(default_factory=dict)


class TraceResponse(BaseModel):
    width: int
    height: int
    threshold: float
    islands: list[IslandResponse] = Field(default_factory=list)
    skipped_islands: int = 0
    processing_time_ms: float = 0.0
    transforms_completed: int = 0
    transforms_failed: int = 0
    errors: dict[str, str] = Field(default_factory=dict)
