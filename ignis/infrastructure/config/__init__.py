"""
Configuration infrastructure: the runtime store, environment handling and
file loading.
"""

from .envar import SIGIL, import_environment, missing_variables, substitute
from .loader import ConfigLoader
from .models import LoggingConfig
from .store import ConfigStore

__all__ = [
    "ConfigStore",
    "ConfigLoader",
    "LoggingConfig",
    "SIGIL",
    "substitute",
    "import_environment",
    "missing_variables",
]
