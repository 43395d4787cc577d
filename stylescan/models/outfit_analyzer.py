"""
Main outfit analysis module that combines segmentation, region statistics and findings
"""

import logging
import time
from typing import Iterable, List, Optional, Sequence

from stylescan.config import ACCESSORY_LABELS, FINDING_CONFIDENCE_THRESHOLD, MAX_DETECTIONS
from stylescan.models.findings import Detection, filter_findings
from stylescan.models.partitioner import Partition, partition_person
from stylescan.models.raster import RasterImage
from stylescan.models.region_stats import compute_region_profile
from stylescan.models.report import StylingReport, synthesize_report

logger = logging.getLogger(__name__)


class OutfitAnalyzer:
    """Runs the region-aware color analysis and builds the styling report"""

    def __init__(self, segmenter=None, detector=None,
                 accessory_labels: Sequence[str] = ACCESSORY_LABELS,
                 confidence_threshold: float = FINDING_CONFIDENCE_THRESHOLD,
                 max_detections: int = MAX_DETECTIONS):
        """
        Initialize outfit analyzer

        Args:
            segmenter: Loaded person segmentation handle with segment(rgb), or None
            detector: Loaded object detection handle with detect(rgb, max_results), or None
            accessory_labels: Detection labels reported as findings
            confidence_threshold: Minimum (exclusive) detection score for findings
            max_detections: Result cap passed to the detector
        """
        self.segmenter = segmenter
        self.detector = detector
        self.accessory_labels = tuple(accessory_labels)
        self.confidence_threshold = confidence_threshold
        self.max_detections = max_detections

    def analyze(self, image: RasterImage, segmentation_flags=None,
                detections: Optional[Iterable[Detection]] = None,
                context: str = "") -> StylingReport:
        """
        Perform the analysis on already-collected model outputs

        Args:
            image: Rasterized photo
            segmentation_flags: Person mask at image resolution (1 = person), or None
            detections: Raw detector output, or None
            context: User's free-text occasion/question

        Returns:
            StylingReport
        """
        start_time = time.time()

        global_profile = compute_region_profile(image)

        if segmentation_flags is not None:
            partition = partition_person(segmentation_flags, image.width, image.height)
        else:
            partition = Partition(person=None, upper=None, lower=None)

        if partition.found:
            logger.info("Person bbox %s, split at row %d", partition.bbox, partition.mid_y)
        else:
            logger.info("No person segmentation, reporting global statistics only")

        upper_profile = compute_region_profile(image, partition.upper) if partition.upper is not None else None
        lower_profile = compute_region_profile(image, partition.lower) if partition.lower is not None else None

        findings = filter_findings(
            detections or [],
            labels=self.accessory_labels,
            threshold=self.confidence_threshold
        )

        report = synthesize_report(global_profile, upper_profile, lower_profile, findings, context)

        logger.info("Analysis complete in %.2fs: %d findings, fit: %s",
                    time.time() - start_time, len(findings), report.occasion_fit)

        return report

    def analyze_photo(self, image: RasterImage, context: str = "") -> StylingReport:
        """Run the loaded vision models on the image, then analyze"""
        rgb = image.rgb_array()

        segmentation_flags = self._segment(rgb)
        detections = self._detect(rgb)

        return self.analyze(image, segmentation_flags, detections, context)

    def _segment(self, rgb):
        if self.segmenter is None:
            logger.warning("Segmentation model not available, skipping upper/lower regions")
            return None
        return self.segmenter.segment(rgb)

    def _detect(self, rgb) -> List[Detection]:
        if self.detector is None:
            logger.warning("Detection model not available, skipping accessory findings")
            return []

        detections = self.detector.detect(rgb, self.max_detections)
        logger.info("Detected %d objects", len(detections))
        return detections
