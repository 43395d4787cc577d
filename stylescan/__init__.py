"""
StyleScan: region-aware color and composition analysis for outfit photos
"""

__version__ = "1.0.0"
