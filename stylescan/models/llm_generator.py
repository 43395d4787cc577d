"""
Stylist advice generator using Google Gemini, grounded on the computed styling report
"""

import logging
import time
from typing import Any, Dict, Optional

from stylescan.models.report import StylingReport

logger = logging.getLogger(__name__)

SYSTEM_PROMPT = """You are **StyleScan**, an expert AI fashion stylist, personal wardrobe consultant, and aesthetic advisor.
Your tone is friendly, confident, and fashion-forward, like a stylist who wants the user to look their best without judgment.

The user uploads a photo of their outfit and may describe a context or occasion (first date, office day, party, festival, photoshoot, ...).
Analyze the outfit within that context and give clear, helpful, confidence-boosting feedback.

You also receive measured color facts about the photo. Treat them as ground truth for colors, contrast and exposure.

Use Markdown and follow this exact structure:

### 🌟 Overall Vibe
2-3 sentences on the impression the outfit gives and whether it fits the stated context.

### 🎨 Color & Palette
Do the colors work together? Bold, neutral, monochrome, earth-toned? Suggest 1-2 accent colors.

### 🧥 Garment Analysis
* **Top:** fit, shape, layering potential
* **Bottoms:** silhouette, proportion, how it pairs with the top
* **Footwear:** if visible

### ✨ Accessory & Styling Suggestions
3-5 specific, affordable tips the user can act on today, including one clear swap or upgrade.

### ✅ Occasion Fit
A warm, encouraging verdict on how well the look suits the occasion.

Always be supportive, never negative.
"""


class StylistServiceError(Exception):
    """A failed call to the text generation service, with the HTTP status to report"""

    def __init__(self, message: str, status_code: int = 500, details: Optional[str] = None):
        super().__init__(message)
        self.message = message
        self.status_code = status_code
        self.details = details


def classify_service_error(error: Exception) -> StylistServiceError:
    """Map a Gemini client error to a user-facing message and status"""
    text = str(error)
    lowered = text.lower()

    if 'api key' in lowered:
        return StylistServiceError('API configuration error', 500, text)
    if 'rate limit' in lowered or 'quota' in lowered or '429' in lowered:
        return StylistServiceError('Service is temporarily busy. Please try again later.', 429, text)
    if 'timeout' in lowered or 'timed out' in lowered or 'deadline' in lowered:
        return StylistServiceError('Request timed out. Please try again.', 504, text)

    return StylistServiceError('Failed to get analysis from AI.', 500, text)


class StylistAdviceGenerator:
    """Generates stylist advice with Gemini, falling back to the deterministic report"""

    def __init__(self, gemini_model: Optional[Any] = None):
        """
        Args:
            gemini_model: Configured genai.GenerativeModel, or None to always use the report
        """
        self.gemini_model = gemini_model

    @property
    def available(self) -> bool:
        return self.gemini_model is not None

    def generate_advice(self, report: StylingReport, image_bytes: Optional[bytes] = None,
                        mime_type: str = "image/jpeg", fallback: bool = True) -> Dict:
        """
        Generate stylist advice for an analyzed outfit

        Args:
            report: Styling report for the photo
            image_bytes: Original photo, sent alongside the prompt when given
            mime_type: MIME type of image_bytes
            fallback: Return the report instead of raising when Gemini fails

        Returns:
            Dict with 'analysis' (Markdown), 'ai_suggestions_available' and timing

        Raises:
            StylistServiceError: If Gemini fails and fallback is False
        """
        if not self.available:
            logger.info("Gemini model not available, using report as advice")
            return self._create_fallback_advice(report)

        start_time = time.time()
        parts = [SYSTEM_PROMPT, self._create_prompt(report)]
        if image_bytes:
            parts.append({'mime_type': mime_type, 'data': image_bytes})

        try:
            response = self.gemini_model.generate_content(parts)
            text = response.text
        except Exception as e:
            error = classify_service_error(e)
            logger.error("Gemini error (%d): %s", error.status_code, error.details)
            if fallback:
                result = self._create_fallback_advice(report)
                result['suggestion_error'] = error.message
                return result
            raise error from e

        if not text:
            if fallback:
                logger.warning("Empty response from Gemini, using fallback")
                return self._create_fallback_advice(report)
            raise StylistServiceError('Failed to get analysis from AI.', 500, 'Empty response')

        generation_time = time.time() - start_time
        logger.info("Stylist advice generated in %.2fs", generation_time)

        return {
            'analysis': text,
            'ai_suggestions_available': True,
            'suggestion_generation_time': round(generation_time, 2),
        }

    def _create_prompt(self, report: StylingReport) -> str:
        """User turn: the context plus the measured facts"""
        context = report.context or "No specific occasion given."

        return f"""USER CONTEXT:
{context}

MEASURED COLOR FACTS (from pixel analysis of the photo):
{report.to_markdown()}"""

    def _create_fallback_advice(self, report: StylingReport) -> Dict:
        return {
            'analysis': report.to_markdown(),
            'ai_suggestions_available': False,
            'fallback_used': True,
        }
