"""
Leadsync Server Package.

This package contains the web server implementation for Leadsync.
It includes the API definition, exception handling, middleware and configuration.

Subpackages:
    api: FastAPI route definitions and endpoint logic.
    core: Configuration and server-wide constants.
    exception_handlers: Mapping of domain errors to HTTP responses.
    middleware: Request logging and timing.
    services: FastAPI dependency providers.
"""
