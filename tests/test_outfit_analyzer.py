"""Tests for the end-to-end analysis pipeline with stand-in model handles."""

from __future__ import annotations

import numpy as np

from conftest import stacked_image
from stylescan.models.findings import Detection
from stylescan.models.outfit_analyzer import OutfitAnalyzer
from stylescan.models.report import FORMAL_MISS


class FakeSegmenter:
    def __init__(self, flags: np.ndarray) -> None:
        self.flags = flags
        self.calls = 0

    def segment(self, rgb: np.ndarray) -> np.ndarray:
        self.calls += 1
        assert rgb.shape[2] == 3
        return self.flags


class FakeDetector:
    def __init__(self, detections: list[Detection]) -> None:
        self.detections = detections
        self.max_results = None

    def detect(self, rgb: np.ndarray, max_results: int) -> list[Detection]:
        self.max_results = max_results
        return self.detections


def _outfit():
    return stacked_image(4, 3, (255, 0, 0), 3, (0, 0, 255))


def test_upper_and_lower_regions_follow_the_person_mask() -> None:
    flags = np.ones((6, 4), dtype=np.uint8)

    report = OutfitAnalyzer().analyze(_outfit(), flags, [], "office interview")

    assert report.upper_profile.average_hex == "#ff0000"
    assert report.lower_profile.average_hex == "#0000ff"
    assert report.global_profile.average_hex == "#800080"
    assert report.occasion_fit == FORMAL_MISS


def test_missing_segmentation_keeps_global_only() -> None:
    report = OutfitAnalyzer().analyze(_outfit(), None, None, "")

    assert report.global_profile is not None
    assert report.upper_profile is None
    assert report.lower_profile is None
    assert report.findings == ()


def test_empty_segmentation_keeps_global_only() -> None:
    report = OutfitAnalyzer().analyze(_outfit(), np.zeros((6, 4), dtype=np.uint8))

    assert report.global_profile.pixel_count == 24
    assert report.upper_profile is None
    assert report.lower_profile is None


def test_findings_are_filtered() -> None:
    detections = [Detection("tie", 0.9), Detection("tie", 0.3), Detection("car", 0.95)]

    report = OutfitAnalyzer().analyze(_outfit(), None, detections, "")

    assert [(f.label, f.confidence) for f in report.findings] == [("tie", 0.9)]


def test_analyze_photo_uses_injected_models() -> None:
    segmenter = FakeSegmenter(np.ones((6, 4), dtype=np.uint8))
    detector = FakeDetector([Detection("backpack", 0.7, [0, 0, 2, 2])])
    analyzer = OutfitAnalyzer(segmenter=segmenter, detector=detector, max_detections=7)

    report = analyzer.analyze_photo(_outfit(), "hangout")

    assert segmenter.calls == 1
    assert detector.max_results == 7
    assert report.upper_profile is not None
    assert [f.label for f in report.findings] == ["backpack"]
    assert report.context == "hangout"


def test_analyze_photo_without_models() -> None:
    report = OutfitAnalyzer().analyze_photo(_outfit(), "")

    assert report.global_profile is not None
    assert report.upper_profile is None
    assert report.findings == ()
