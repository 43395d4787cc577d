"""
Configuration settings for the StyleScan outfit analysis API
"""

import os
from pathlib import Path

# Base directory
BASE_DIR = Path(__file__).parent.parent

# API Configuration
API_TITLE = "StyleScan Outfit Analysis API"
API_DESCRIPTION = "Region-aware color and composition analysis for outfit photos"
API_VERSION = "1.0.0"
API_HOST = os.getenv("API_HOST", "0.0.0.0")
API_PORT = int(os.getenv("API_PORT", "8000"))

# Logging
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")

# API Keys
GEMINI_API_KEY = os.getenv("GEMINI_API_KEY", "your-gemini-api-key-here")

# Model Settings
MODEL_DIR = Path(os.getenv("MODEL_DIR", str(BASE_DIR / "Models")))
DETECTION_MODEL_NAME = os.getenv("DETECTION_MODEL_NAME", "yolov8n.pt")
SEGMENTATION_MODEL_NAME = os.getenv("SEGMENTATION_MODEL_NAME", "yolov8n-seg.pt")
GEMINI_MODEL_NAME = os.getenv("GEMINI_MODEL_NAME", "gemini-2.5-flash")
LOAD_MODELS_ON_STARTUP = os.getenv("LOAD_MODELS_ON_STARTUP", "true").lower() in ("1", "true", "yes")

# COCO class name the segmentation model uses for people
PERSON_LABEL = "person"
MAX_DETECTIONS = 20

# Accessory-relevant COCO labels kept as findings
ACCESSORY_LABELS = (
    'tie', 'backpack', 'handbag', 'umbrella', 'suitcase',
    'sports ball', 'skateboard', 'bottle', 'book', 'cell phone', 'laptop'
)
FINDING_CONFIDENCE_THRESHOLD = 0.45

# Region statistics
QUANTIZATION_SHIFT = 4  # 16 buckets per channel
MAX_SWATCHES = 5
VERY_DARK_LUMA = 30
VERY_LIGHT_LUMA = 225
EXPOSURE_FRACTION_THRESHOLD = 0.25
FALLBACK_SWATCH_RGB = (120, 120, 120)

# Occasion fit
FORMAL_KEYWORDS = ('interview', 'office', 'formal', 'presentation')
SOCIAL_KEYWORDS = ('date', 'party', 'casual', 'hangout')
FORMAL_CONTRAST_THRESHOLD = 110
SOCIAL_BRIGHTNESS_THRESHOLD = 90

# Upload Settings
MAX_IMAGE_SIZE = 4 * 1024 * 1024  # 4MB
MAX_REQUEST_SIZE = MAX_IMAGE_SIZE * 4 // 3 + 2000  # base64 overhead plus prompt
MAX_PROMPT_LENGTH = 1000
MAX_IMAGE_DIMENSION = 1024
ALLOWED_MIME_TYPES = {'image/jpeg', 'image/png', 'image/webp'}
