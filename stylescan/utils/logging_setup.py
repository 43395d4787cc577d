"""
Logging configuration
"""

import logging

from stylescan.config import LOG_LEVEL


def configure_logging(level: str = LOG_LEVEL) -> None:
    """Configure the root logger once for the service"""
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format="%(asctime)s | %(levelname)s | %(name)s | %(message)s",
    )
