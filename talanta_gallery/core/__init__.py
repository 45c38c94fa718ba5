"""
Core utilities and configuration for Talanta Gallery.

This package provides core functionality including logging configuration,
domain errors, security helpers, database setup and I/O models.
"""

from talanta_gallery.core.logging_config import get_logger, setup_logging

__all__ = ["get_logger", "setup_logging"]
