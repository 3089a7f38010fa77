"""
Core utilities and configuration for Leadsync.

This package provides core functionality including logging configuration,
monitoring, database setup, and API I/O models.
"""

from leadsync.core.logging_config import get_logger, setup_logging

__all__ = ["get_logger", "setup_logging"]
