"""
Model loading and initialization service
"""

import logging
from pathlib import Path
from typing import Any, Optional

import google.generativeai as genai
import torch
from ultralytics import YOLO

from stylescan.config import (
    DETECTION_MODEL_NAME, GEMINI_API_KEY, GEMINI_MODEL_NAME,
    MODEL_DIR, SEGMENTATION_MODEL_NAME
)
from stylescan.services.vision import YoloObjectDetector, YoloPersonSegmenter

logger = logging.getLogger(__name__)


def _weights_path(name: str) -> str:
    """Prefer a local copy under MODEL_DIR, else let ultralytics resolve the name"""
    local = Path(MODEL_DIR) / name
    return str(local) if local.exists() else name


class ModelLoader:
    """
    Handles loading and initialization of the external models

    One instance is created per application and handed to whoever needs the
    models; nothing reads it as a module global.
    """

    def __init__(self, detection_model_name: str = DETECTION_MODEL_NAME,
                 segmentation_model_name: str = SEGMENTATION_MODEL_NAME,
                 gemini_api_key: str = GEMINI_API_KEY,
                 gemini_model_name: str = GEMINI_MODEL_NAME):
        """Initialize model loader"""
        self.detection_model_name = detection_model_name
        self.segmentation_model_name = segmentation_model_name
        self.gemini_api_key = gemini_api_key
        self.gemini_model_name = gemini_model_name

        self.detector: Optional[YoloObjectDetector] = None
        self.segmenter: Optional[YoloPersonSegmenter] = None
        self.gemini_model: Optional[Any] = None
        self.device: str = "cuda" if torch.cuda.is_available() else "cpu"

        logger.info("Model loader initialized. Device: %s", self.device)

    def load_detection_model(self) -> bool:
        """
        Load YOLO object detection model

        Returns:
            bool: True if successful, False otherwise
        """
        try:
            path = _weights_path(self.detection_model_name)
            logger.info("Loading detection model: %s", path)

            model = YOLO(path)
            model.to(self.device)
            self.detector = YoloObjectDetector(model)

            logger.info("Detection model loaded successfully")
            return True

        except Exception as e:
            logger.error("Error loading detection model: %s", e)
            return False

    def load_segmentation_model(self) -> bool:
        """
        Load YOLO segmentation model used for the person mask

        Returns:
            bool: True if successful, False otherwise
        """
        try:
            path = _weights_path(self.segmentation_model_name)
            logger.info("Loading segmentation model: %s", path)

            model = YOLO(path)
            model.to(self.device)
            self.segmenter = YoloPersonSegmenter(model)

            logger.info("Segmentation model loaded successfully")
            return True

        except Exception as e:
            logger.error("Error loading segmentation model: %s", e)
            return False

    def load_gemini_model(self) -> bool:
        """
        Configure Gemini model for stylist advice

        Returns:
            bool: True if successful, False otherwise
        """
        try:
            if not self.gemini_api_key or self.gemini_api_key == "your-gemini-api-key-here":
                logger.warning("Gemini API key not configured")
                return False

            logger.info("Configuring Gemini model...")

            genai.configure(api_key=self.gemini_api_key)
            self.gemini_model = genai.GenerativeModel(self.gemini_model_name)

            logger.info("Gemini model configured successfully")
            return True

        except Exception as e:
            logger.error("Error configuring Gemini model: %s", e)
            return False

    def load_all_models(self) -> dict:
        """
        Load all models and return status

        Returns:
            dict: Status of each model loading attempt
        """
        logger.info("Loading all models...")

        status = {
            'detector': self.load_detection_model(),
            'segmenter': self.load_segmentation_model(),
            'gemini': self.load_gemini_model()
        }

        successful = sum(status.values())
        logger.info("Model loading complete: %d/%d successful", successful, len(status))

        for model_name, success in status.items():
            logger.info("  %s: %s", model_name, "loaded" if success else "unavailable")

        return status

    def get_model_status(self) -> dict:
        """
        Get current status of all models

        Returns:
            dict: Status information for each model
        """
        return {
            'detector_loaded': self.detector is not None,
            'segmenter_loaded': self.segmenter is not None,
            'gemini_loaded': self.gemini_model is not None,
            'device': self.device
        }

    def unload_models(self) -> None:
        """Unload all models to free memory"""
        logger.info("Unloading models...")

        if self.device == "cuda":
            torch.cuda.empty_cache()

        self.detector = None
        self.segmenter = None
        self.gemini_model = None
