"""Tests for the FastAPI endpoints with stand-in model handles."""

from __future__ import annotations

import numpy as np
import pytest
from fastapi.testclient import TestClient

from stylescan.main import create_app
from stylescan.models.findings import Detection


class FakeSegmenter:
    def segment(self, rgb: np.ndarray) -> np.ndarray:
        return np.ones(rgb.shape[:2], dtype=np.uint8)


class FakeDetector:
    def detect(self, rgb: np.ndarray, max_results: int) -> list[Detection]:
        return [Detection("handbag", 0.8, [1, 1, 3, 3]), Detection("car", 0.9, [0, 0, 1, 1])]


class FailingGemini:
    def generate_content(self, parts):
        raise RuntimeError("Quota exceeded: rate limit")


class FakeLoader:
    def __init__(self, segmenter=None, detector=None, gemini_model=None) -> None:
        self.segmenter = segmenter
        self.detector = detector
        self.gemini_model = gemini_model

    def get_model_status(self) -> dict:
        return {
            "detector_loaded": self.detector is not None,
            "segmenter_loaded": self.segmenter is not None,
            "gemini_loaded": self.gemini_model is not None,
            "device": "cpu",
        }

    def unload_models(self) -> None:
        pass


def _client(**models) -> TestClient:
    return TestClient(create_app(model_loader=FakeLoader(**models), load_models=False))


@pytest.fixture
def client() -> TestClient:
    return _client(segmenter=FakeSegmenter(), detector=FakeDetector())


def test_health_reports_models(client: TestClient) -> None:
    response = client.get("/health")

    assert response.status_code == 200
    assert response.json() == {
        "status": "healthy",
        "models": {"detector": True, "segmenter": True, "gemini": False},
        "device": "cpu",
    }


def test_health_degraded_without_models() -> None:
    assert _client().get("/health").json()["status"] == "degraded"


def test_accessories(client: TestClient) -> None:
    body = client.get("/accessories").json()

    assert "tie" in body["labels"]
    assert body["confidence_threshold"] == 0.45


def test_analyze_upload(client: TestClient, outfit_png: bytes) -> None:
    response = client.post(
        "/analyze",
        files={"file": ("fit.png", outfit_png, "image/png")},
        data={"context": "office interview"},
    )

    assert response.status_code == 200
    body = response.json()
    assert body["image"] == {"width": 8, "height": 12}
    assert body["report"]["upper"]["average_hex"] == "#c81e1e"
    assert body["report"]["lower"]["average_hex"] == "#141e5a"
    assert body["report"]["findings"] == [{"label": "handbag", "confidence": 0.8}]
    assert "### 🌟 Overall Vibe" in body["markdown"]
    assert "advice" not in body


def test_analyze_upload_with_advice_fallback(client: TestClient, outfit_png: bytes) -> None:
    response = client.post(
        "/analyze",
        files={"file": ("fit.png", outfit_png, "image/png")},
        data={"context": "party", "include_advice": "true"},
    )

    advice = response.json()["advice"]
    assert advice["ai_suggestions_available"] is False
    assert advice["analysis"] == response.json()["markdown"]


def test_analyze_rejects_bad_mime(client: TestClient) -> None:
    response = client.post("/analyze", files={"file": ("notes.txt", b"hello", "text/plain")})

    assert response.status_code == 400


def test_analyze_outfit_data_url(client: TestClient, outfit_data_url: str) -> None:
    response = client.post(
        "/api/analyze-outfit",
        json={"image": outfit_data_url, "prompt": "How is this for a date?"},
    )

    assert response.status_code == 200
    body = response.json()
    assert "Occasion Fit" in body["analysis"]
    assert body["ai_suggestions_available"] is False
    assert body["report"]["context"] == "How is this for a date?"


def test_analyze_outfit_missing_prompt(client: TestClient, outfit_data_url: str) -> None:
    response = client.post("/api/analyze-outfit", json={"image": outfit_data_url})

    assert response.status_code == 400
    assert response.json() == {"error": "Missing image or prompt"}


def test_analyze_outfit_prompt_too_long(client: TestClient, outfit_data_url: str) -> None:
    response = client.post("/api/analyze-outfit", json={"image": outfit_data_url, "prompt": "x" * 1001})

    assert response.status_code == 400
    assert "Prompt too long" in response.json()["error"]


def test_analyze_outfit_invalid_image(client: TestClient) -> None:
    response = client.post("/api/analyze-outfit", json={"image": "not-a-data-url", "prompt": "hi"})

    assert response.status_code == 400
    assert response.json() == {"error": "Invalid image format"}


def test_analyze_outfit_maps_service_errors(outfit_data_url: str) -> None:
    client = _client(gemini_model=FailingGemini())

    response = client.post("/api/analyze-outfit", json={"image": outfit_data_url, "prompt": "office"})

    assert response.status_code == 429
    assert response.json() == {"error": "Service is temporarily busy. Please try again later."}


def test_unknown_endpoint(client: TestClient) -> None:
    response = client.get("/nope")

    assert response.status_code == 404
    assert response.json()["error"] == "Endpoint not found"


def test_analyze_outfit_rejects_oversized_request(
    client: TestClient, outfit_data_url: str, monkeypatch: pytest.MonkeyPatch
) -> None:
    monkeypatch.setattr("stylescan.main.MAX_REQUEST_SIZE", 100)

    response = client.post("/api/analyze-outfit", json={"image": outfit_data_url, "prompt": "date"})

    assert response.status_code == 413
    assert response.json() == {"error": "Request too large"}
