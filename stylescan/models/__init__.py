"""
Models package for outfit analysis components
"""

from .raster import InvalidImageData, RasterImage, RegionMask
from .region_stats import RegionProfile, Swatch, compute_region_profile
from .partitioner import Partition, partition_person
from .findings import Detection, Finding, filter_findings
from .report import StylingReport, render_markdown, synthesize_report
from .outfit_analyzer import OutfitAnalyzer
from .llm_generator import StylistAdviceGenerator, StylistServiceError

__all__ = [
    'InvalidImageData',
    'RasterImage',
    'RegionMask',
    'RegionProfile',
    'Swatch',
    'compute_region_profile',
    'Partition',
    'partition_person',
    'Detection',
    'Finding',
    'filter_findings',
    'StylingReport',
    'render_markdown',
    'synthesize_report',
    'OutfitAnalyzer',
    'StylistAdviceGenerator',
    'StylistServiceError'
]
