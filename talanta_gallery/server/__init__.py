"""
Talanta Gallery Server Package.

This package contains the web server implementation for the gallery.
It includes the API definition, auth dependencies, service logic and configuration.

Subpackages:
    api: FastAPI route definitions and endpoint logic.
    core: Configuration, constants and auth dependencies.
    exception_handlers: Mapping of domain errors to JSON responses.
    middleware: Request monitoring middleware.
    services: Workflows spanning several repositories (approval, orders, password reset, ...).
"""
