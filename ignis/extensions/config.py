"""
Config extension.

Mounts a ``ConfigStore`` on every application instance as ``app.config``
and its forgiving environment importer as ``app.env``.
"""

import logging
from typing import Any

from ..infrastructure.config.store import ConfigStore

logger = logging.getLogger(__name__)


def config(cls: Any) -> None:
    """Install the config store initializer on the application class."""
    cls.register_initializer(mount_config)


def mount_config(app: Any) -> None:
    """Attach a fresh config store to one application instance."""
    store = ConfigStore(app)
    app.config = store
    app.env = store.import_environment
    logger.debug("Mounted config store")


default = config
