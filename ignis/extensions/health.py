"""
Health extension.

Mounts ``GET <path>`` on the application's root, reporting whether the
startup sequence has completed.
"""

import logging
from typing import Any

from ..presentation.http.routers.health import create_health_router

logger = logging.getLogger(__name__)


def health(cls: Any, path: str = "/health") -> None:
    """Install the health endpoint initializer on the application class."""

    def mount_health(app: Any) -> None:
        include_router = getattr(app.root, 'include_router', None)
        if include_router is None:
            logger.warning(f"Root {type(app.root).__name__} cannot mount routers; "
                           f"health endpoint not available")
            return
        include_router(create_health_router(app), prefix=path, tags=["health"])

    cls.register_initializer(mount_health)


default = health
