"""
API routers mounted by framework extensions.
"""

from .health import HealthStatus, create_health_router

__all__ = [
    "HealthStatus",
    "create_health_router",
]
