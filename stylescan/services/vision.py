"""
Adapters over the YOLO segmentation and detection models
"""

import logging
from typing import List

import cv2
import numpy as np

from stylescan.config import PERSON_LABEL
from stylescan.models.findings import Detection

logger = logging.getLogger(__name__)


def _to_bgr(rgb: np.ndarray) -> np.ndarray:
    # ultralytics treats numpy input as OpenCV BGR
    return cv2.cvtColor(rgb, cv2.COLOR_RGB2BGR)


class YoloPersonSegmenter:
    """Person mask from a YOLO segmentation model"""

    def __init__(self, model, person_label: str = PERSON_LABEL, mask_threshold: float = 0.5):
        self.model = model
        self.person_label = person_label
        self.mask_threshold = mask_threshold

    def segment(self, rgb: np.ndarray) -> np.ndarray:
        """
        Segment people in an RGB image

        Returns:
            uint8 array at image resolution, 1 for person pixels and 0 elsewhere
        """
        height, width = rgb.shape[:2]
        flags = np.zeros((height, width), dtype=np.uint8)

        results = self.model.predict(_to_bgr(rgb), retina_masks=True, verbose=False)

        for result in results:
            if result.masks is None or result.boxes is None:
                continue

            class_ids = result.boxes.cls.cpu().numpy().astype(int)
            masks = result.masks.data.cpu().numpy()

            for mask, class_id in zip(masks, class_ids):
                if result.names.get(int(class_id)) != self.person_label:
                    continue

                if mask.shape != (height, width):
                    mask = cv2.resize(mask.astype(np.float32), (width, height),
                                      interpolation=cv2.INTER_NEAREST)

                flags[mask > self.mask_threshold] = 1

        logger.debug("Segmented %d person pixels of %d", int(flags.sum()), flags.size)
        return flags


class YoloObjectDetector:
    """Labelled boxes from a YOLO detection model"""

    def __init__(self, model):
        self.model = model

    def detect(self, rgb: np.ndarray, max_results: int) -> List[Detection]:
        """Detect objects, returning at most max_results in the model's order"""
        results = self.model.predict(_to_bgr(rgb), max_det=max_results, verbose=False)

        detections = []
        for result in results:
            boxes = result.boxes
            if boxes is None:
                continue

            for box in boxes:
                x1, y1, x2, y2 = box.xyxy[0].cpu().numpy()
                confidence = float(box.conf[0].cpu().numpy())
                class_id = int(box.cls[0].cpu().numpy())

                detections.append(Detection(
                    label=result.names.get(class_id, str(class_id)),
                    score=confidence,
                    bbox=[int(x1), int(y1), int(x2), int(y2)]
                ))

        return detections[:max_results]
