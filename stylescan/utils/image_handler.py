"""
Image upload validation and rasterization helpers
"""

import base64
import binascii
import logging
from io import BytesIO
from typing import Optional, Tuple

import numpy as np
from PIL import Image, ImageOps, UnidentifiedImageError

from stylescan.config import ALLOWED_MIME_TYPES, MAX_IMAGE_DIMENSION, MAX_IMAGE_SIZE
from stylescan.models.raster import InvalidImageData, RasterImage

logger = logging.getLogger(__name__)


class ImageHandler:
    """Validates uploaded images and turns them into RGBA rasters, all in memory"""

    def __init__(self, max_image_size: int = MAX_IMAGE_SIZE,
                 max_dimension: int = MAX_IMAGE_DIMENSION,
                 allowed_mime_types=ALLOWED_MIME_TYPES):
        self.max_image_size = max_image_size
        self.max_dimension = max_dimension
        self.allowed_mime_types = set(allowed_mime_types)

    def validate_upload(self, content: bytes, content_type: Optional[str]) -> Tuple[bool, str]:
        """
        Validate raw image bytes

        Args:
            content: Image bytes
            content_type: Declared MIME type

        Returns:
            Tuple of (is_valid, error_message)
        """
        if not content:
            return False, "Empty image"

        if content_type not in self.allowed_mime_types:
            return False, "Invalid image type. Only JPEG, PNG and WebP are allowed."

        if len(content) > self.max_image_size:
            max_mb = self.max_image_size / (1024 * 1024)
            return False, f"Image too large. Maximum size is {max_mb:g}MB."

        try:
            with Image.open(BytesIO(content)) as image:
                image.verify()
        except (UnidentifiedImageError, OSError, SyntaxError) as e:
            return False, f"Invalid image file: {e}"

        return True, "Valid image"

    def decode_data_url(self, data_url: str) -> Tuple[bool, str, Optional[str], Optional[bytes]]:
        """
        Split and decode a "data:<mime>;base64,<payload>" string

        Returns:
            Tuple of (is_valid, error_message, mime_type, content)
        """
        header, sep, payload = (data_url or "").partition(',')
        if not sep or not header or not payload:
            return False, "Invalid image format", None, None

        if not header.startswith('data:') or ';base64' not in header:
            return False, "Invalid image format", None, None

        mime = header[len('data:'):].split(';')[0].lower()

        try:
            content = base64.b64decode(payload, validate=True)
        except (binascii.Error, ValueError):
            return False, "Invalid image data", mime, None

        is_valid, error = self.validate_upload(content, mime)
        if not is_valid:
            return False, error, mime, None

        return True, "Valid image", mime, content

    def rasterize(self, content: bytes) -> RasterImage:
        """
        Decode image bytes into an RGBA raster, downscaled to max_dimension

        Raises:
            InvalidImageData: If the bytes cannot be decoded
        """
        try:
            with Image.open(BytesIO(content)) as img:
                img = ImageOps.exif_transpose(img)
                img = img.convert('RGBA')

                original_size = img.size
                if img.width > self.max_dimension or img.height > self.max_dimension:
                    img.thumbnail((self.max_dimension, self.max_dimension), Image.Resampling.LANCZOS)
                    logger.info("Image resized: %dx%d -> %dx%d",
                                original_size[0], original_size[1], img.width, img.height)

                pixels = np.array(img, dtype=np.uint8)

        except (UnidentifiedImageError, OSError) as e:
            raise InvalidImageData(f"Could not decode image: {e}") from e

        return RasterImage.from_array(pixels)
