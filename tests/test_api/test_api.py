"""Tests for API endpoints."""

from __future__ import annotations

import base64
import io

from fastapi.testclient import TestClient
from PIL import Image

from islandfit.main import app
from tests.conftest import LARGE_BLOCK, SINGLE_PIXEL, TWO_BLOBS


client = TestClient(app)


def _png_base64(frame) -> str:
    buf = io.BytesIO()
    Image.fromarray(frame).save(buf, format="PNG")
    return base64.b64encode(buf.getvalue()).decode()


def test_health():
    response = client.get("/api/health")
    assert response.status_code == 200
    data = response.json()
    assert data["status"] == "ok"
    assert data["transforms_registered"] == 6


def test_trace_pixels():
    response = client.post("/api/trace", json={"pixels": LARGE_BLOCK.tolist()})
    assert response.status_code == 200
    data = response.json()
    assert data["width"] == 20 and data["height"] == 20
    assert data["skipped_islands"] == 0
    assert data["transforms_failed"] == 0
    (island,) = data["islands"]
    assert len(island["polygon"]) == 45
    assert island["polygon"][0] == island["polygon"][-1] == [4.0, 4.0]
    assert len(island["samples"]) == 4
    assert len(island["curve"]) == 45
    assert island["features"]["closed"] is True


def test_trace_png():
    response = client.post("/api/trace", json={"png_base64": _png_base64(TWO_BLOBS)})
    assert response.status_code == 200
    data = response.json()
    assert data["width"] == 12 and data["height"] == 8
    assert len(data["islands"]) == 1
    assert data["skipped_islands"] == 1


def test_trace_overrides():
    response = client.post(
        "/api/trace",
        json={
            "pixels": TWO_BLOBS.tolist(),
            "single_polynomial": True,
            "sample_spacing": 5,
            "eval_distribution": "uniform",
        },
    )
    assert response.status_code == 200
    (island,) = response.json()["islands"]
    assert len(island["samples"]) == 23 // 5
    assert len(island["curve"]) == 23


def test_trace_degenerate_island_skipped():
    response = client.post("/api/trace", json={"pixels": SINGLE_PIXEL.tolist()})
    assert response.status_code == 200
    data = response.json()
    assert data["islands"] == []
    assert data["skipped_islands"] == 1


def test_trace_size_mismatch():
    response = client.post(
        "/api/trace",
        json={"pixels": LARGE_BLOCK.tolist(), "width": 960, "height": 720},
    )
    assert response.status_code == 422
    assert "expected 960x720" in response.json()["detail"]


def test_trace_invalid_eval_distribution():
    response = client.post(
        "/api/trace",
        json={"pixels": LARGE_BLOCK.tolist(), "eval_distribution": "spiral"},
    )
    assert response.status_code == 422


def test_trace_requires_one_image_source():
    assert client.post("/api/trace", json={}).status_code == 422
    both = {"pixels": [[0]], "png_base64": _png_base64(SINGLE_PIXEL)}
    assert client.post("/api/trace", json=both).status_code == 422


def test_trace_bad_png():
    response = client.post("/api/trace", json={"png_base64": "bm90IGEgcG5n"})
    assert response.status_code == 400


def test_trace_ragged_rows():
    response = client.post("/api/trace", json={"pixels": [[0, 0], [0]]})
    assert response.status_code == 400
