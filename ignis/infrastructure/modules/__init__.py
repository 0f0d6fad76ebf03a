"""
Module loading for extensions referenced by name.
"""

from .loader import ENTRY_POINT_GROUP, ModuleLoader

__all__ = [
    "ENTRY_POINT_GROUP",
    "ModuleLoader",
]
