"""
Styling report synthesis: turns region profiles and findings into a Markdown report
"""

import re
from dataclasses import dataclass
from typing import Dict, List, Optional, Sequence, Tuple

from stylescan.config import (
    FORMAL_CONTRAST_THRESHOLD, FORMAL_KEYWORDS,
    SOCIAL_BRIGHTNESS_THRESHOLD, SOCIAL_KEYWORDS
)
from stylescan.models.color_math import round_half_up
from stylescan.models.findings import Finding
from stylescan.models.region_stats import RegionProfile

PLACEHOLDER = "-"

SECTION_HEADERS = (
    "Overall Vibe",
    "Color & Palette",
    "Garment Analysis",
    "Accessory & Styling Suggestions",
    "Occasion Fit",
)

FORMAL_FIT = "Good for formal/semi-formal"
FORMAL_MISS = "Might need sharper contrast for formal."
SOCIAL_FIT = "Great for social/casual settings"
SOCIAL_MISS = "Might feel a bit dark for a social setting."
VERSATILE_FIT = "Versatile look that should work for most settings."
NO_DATA_FIT = "Not enough image data to judge occasion fit."

_FORMAL_PATTERN = re.compile('|'.join(re.escape(k) for k in FORMAL_KEYWORDS), re.IGNORECASE)
_SOCIAL_PATTERN = re.compile('|'.join(re.escape(k) for k in SOCIAL_KEYWORDS), re.IGNORECASE)


def assess_occasion_fit(context: str, global_profile: Optional[RegionProfile]) -> str:
    """
    Keyword heuristic over the user's context

    Plain substring matching, no language understanding: formal keywords are
    judged on contrast, social keywords on brightness.
    """
    if global_profile is None:
        return NO_DATA_FIT

    context = context or ""

    if _FORMAL_PATTERN.search(context):
        return FORMAL_FIT if global_profile.contrast > FORMAL_CONTRAST_THRESHOLD else FORMAL_MISS

    if _SOCIAL_PATTERN.search(context):
        return SOCIAL_FIT if global_profile.brightness > SOCIAL_BRIGHTNESS_THRESHOLD else SOCIAL_MISS

    return VERSATILE_FIT


@dataclass(frozen=True)
class StylingReport:
    global_profile: Optional[RegionProfile]
    upper_profile: Optional[RegionProfile]
    lower_profile: Optional[RegionProfile]
    findings: Tuple[Finding, ...]
    context: str
    occasion_fit: str

    def to_dict(self) -> Dict:
        def profile(p):
            return p.to_dict() if p is not None else None

        return {
            'global': profile(self.global_profile),
            'upper': profile(self.upper_profile),
            'lower': profile(self.lower_profile),
            'findings': [f.to_dict() for f in self.findings],
            'context': self.context,
            'occasion_fit': self.occasion_fit,
        }

    def to_markdown(self) -> str:
        return render_markdown(self)


def synthesize_report(global_profile: Optional[RegionProfile],
                      upper_profile: Optional[RegionProfile],
                      lower_profile: Optional[RegionProfile],
                      findings: Sequence[Finding],
                      context: str) -> StylingReport:
    """Assemble the report from the computed facts"""
    return StylingReport(
        global_profile=global_profile,
        upper_profile=upper_profile,
        lower_profile=lower_profile,
        findings=tuple(findings),
        context=context or "",
        occasion_fit=assess_occasion_fit(context, global_profile),
    )


def _percent(fraction: float) -> str:
    return f"{round_half_up(fraction * 100)}%"


def _value(profile: Optional[RegionProfile], attr: str) -> str:
    if profile is None:
        return PLACEHOLDER
    return str(getattr(profile, attr))


def _swatch_list(profile: Optional[RegionProfile]) -> str:
    if profile is None or not profile.swatches:
        return PLACEHOLDER
    return ', '.join(f"{s.hex} ({_percent(s.fraction)})" for s in profile.swatches)


def _dominant_hex(profile: Optional[RegionProfile]) -> str:
    if profile is None or profile.dominant is None:
        return PLACEHOLDER
    return profile.dominant.hex


def _analogous(profile: Optional[RegionProfile]) -> str:
    if profile is None or not profile.analogous:
        return PLACEHOLDER
    return ', '.join(profile.analogous)


def _garment_lines(title: str, profile: Optional[RegionProfile]) -> List[str]:
    return [
        f"#### {title}",
        f"* **Average color:** {_value(profile, 'average_hex')}",
        f"* **Dominant color:** {_dominant_hex(profile)}",
        f"* **Contrast:** {_value(profile, 'contrast')}",
        f"* **Vibe:** {_value(profile, 'vibe')}",
        f"* **Accent to try:** {_value(profile, 'complementary')}",
        "",
    ]


def _accessory_lines(report: StylingReport) -> List[str]:
    lines = []

    if report.findings:
        for finding in report.findings:
            lines.append(f"* **Detected:** {finding.label} ({_percent(finding.confidence)} confidence)")
    else:
        lines.append("* **Detected:** no accessories found")

    accent = _value(report.global_profile, 'complementary')
    lines.append(f"* **Accent idea:** pick up {accent} in a small accessory for contrast")
    lines.append(f"* **Tonal idea:** layer with {_analogous(report.global_profile)} for a cohesive look")

    return lines


def render_markdown(report: StylingReport) -> str:
    """Render the fixed-section Markdown document"""
    g = report.global_profile

    if g is not None:
        vibe_line = f"This outfit gives a **{g.vibe}** vibe."
    else:
        vibe_line = f"Vibe: {PLACEHOLDER}"

    lines = [
        "### 🌟 Overall Vibe",
        vibe_line,
        f"* **Exposure:** {_value(g, 'exposure')}",
        f"* **Brightness:** {_value(g, 'brightness')}",
        f"* **Contrast:** {_value(g, 'contrast')}",
        f"* **Context:** {report.context or PLACEHOLDER}",
        "",
        "---",
        "",
        "### 🎨 Color & Palette",
        f"* **Average color:** {_value(g, 'average_hex')}",
        f"* **Dominant colors:** {_swatch_list(g)}",
        f"* **Complementary accent:** {_value(g, 'complementary')}",
        f"* **Analogous accents:** {_analogous(g)}",
        "",
        "---",
        "",
        "### 🧥 Garment Analysis",
    ]
    lines.extend(_garment_lines("Top", report.upper_profile))
    lines.extend(_garment_lines("Bottom", report.lower_profile))
    lines.extend([
        "---",
        "",
        "### ✨ Accessory & Styling Suggestions",
    ])
    lines.extend(_accessory_lines(report))
    lines.extend([
        "",
        "---",
        "",
        "### ✅ Occasion Fit",
        report.occasion_fit,
    ])

    return '\n'.join(lines) + '\n'
