"""Utility modules for adocparse.

Provides:
- logger: get_logger for logging
"""

from adocparse.utils.logger import get_logger

__all__ = [
    "get_logger",
]
