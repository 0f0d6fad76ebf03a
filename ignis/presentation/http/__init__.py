"""
HTTP presentation layer built on FastAPI.
"""

from .root import RootApp

__all__ = [
    "RootApp",
]
