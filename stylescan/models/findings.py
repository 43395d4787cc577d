"""
Accessory findings: object detections narrowed to fashion-relevant labels
"""

from dataclasses import dataclass, field
from typing import Dict, Iterable, List, Optional

from stylescan.config import ACCESSORY_LABELS, FINDING_CONFIDENCE_THRESHOLD


@dataclass(frozen=True)
class Detection:
    """One raw detector result"""
    label: str
    score: float
    bbox: List[float] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: Dict) -> "Detection":
        """Accept the detector's {'class', 'score', 'bbox'} shape"""
        label = data.get('class', data.get('label'))
        if label is None:
            raise ValueError(f"Detection is missing a class label: {data}")
        return cls(
            label=str(label),
            score=float(data.get('score', data.get('confidence', 0.0))),
            bbox=list(data.get('bbox') or []),
        )

    def to_dict(self) -> Dict:
        return {'class': self.label, 'score': self.score, 'bbox': list(self.bbox)}


@dataclass(frozen=True)
class Finding:
    label: str
    confidence: float

    def to_dict(self) -> Dict:
        return {'label': self.label, 'confidence': round(self.confidence, 3)}


def filter_findings(detections: Iterable[Detection],
                    labels: Optional[Iterable[str]] = None,
                    threshold: float = FINDING_CONFIDENCE_THRESHOLD) -> List[Finding]:
    """
    Keep whitelisted detections scoring above the threshold, in detector order

    Args:
        detections: Raw detections
        labels: Label whitelist, defaults to ACCESSORY_LABELS
        threshold: Scores must be strictly greater than this

    Returns:
        List of findings, possibly empty
    """
    allowed = set(ACCESSORY_LABELS if labels is None else labels)

    return [
        Finding(d.label, d.score)
        for d in detections
        if d.label in allowed and d.score > threshold
    ]
