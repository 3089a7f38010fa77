"""
Exception handlers for the Leadsync server.

This package contains custom exception handlers for different error types
and a setup function to register them with the FastAPI application.
"""

from .global_handler import (
    global_exception_handler,
    integration_error_handler,
    integration_not_configured_handler,
    setup_exception_handlers,
)

__all__ = [
    "global_exception_handler",
    "integration_error_handler",
    "integration_not_configured_handler",
    "setup_exception_handlers",
]
