"""
Utilities package for helper functions
"""

from .image_handler import ImageHandler
from .logging_setup import configure_logging

__all__ = [
    'ImageHandler',
    'configure_logging'
]
