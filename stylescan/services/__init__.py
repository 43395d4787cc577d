"""
Services package for the external model collaborators
"""

from .model_loader import ModelLoader
from .vision import YoloObjectDetector, YoloPersonSegmenter

__all__ = [
    'ModelLoader',
    'YoloObjectDetector',
    'YoloPersonSegmenter'
]
