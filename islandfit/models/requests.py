"""API request models."""

from __future__ import annotations

from pydantic import BaseModel, Field, model_validator


class TraceRequest(BaseModel):
    pixels: list[list[int]] | None = Field(
        default=None,
        description="Row-major 8-bit intensities, one inner list per image row",
    )
    png_base64: str | None = Field(default=None, description="Base64-encoded PNG frame")
    width: int | None = Field(default=None, description="Expected frame width")
    height: int | None = Field(default=None, description="Expected frame height")

    threshold: int | None = Field(default=None, ge=0, le=255)
    invert: bool | None = None
    auto_threshold: bool | None = None
    sample_spacing: int | None = Field(default=None, ge=1)
    eval_spacing: int | None = Field(default=None, ge=1)
    eval_distribution: str | None = None
    single_polynomial: bool | None = None

    @model_validator(mode="after")
    def _one_image_source(self) -> TraceRequest:
        if (self.pixels is None) == (self.png_base64 is None):
            raise ValueError("Provide exactly one of 'pixels' or 'png_base64'")
        return self
