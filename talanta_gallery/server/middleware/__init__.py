"""
Middleware modules for the Talanta Gallery server.
"""

from .request_monitoring import RequestMonitoringMiddleware

__all__ = ["RequestMonitoringMiddleware"]
