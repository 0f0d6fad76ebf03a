"""
Hierarchical configuration store.

Options are addressed by dot-delimited paths (``database.pool.size``) into a
tree of nested dictionaries. Writes resolve ``$NAME`` environment
expressions before anything is stored and notify the owning emitter with
``config.set`` for new options and ``config.modified`` for overwritten ones.
"""

import copy
import logging
import os
from typing import Any, Dict, List, Mapping, Optional

from ...core.domain.events import CONFIG_MODIFIED, CONFIG_SET, ConfigEvent
from ...core.exceptions import (
    ConfigConflictError,
    ConfigNotDefinedError,
    InvalidArgumentError,
)
from ...core.interfaces.messaging import IEventEmitter
from . import envar

logger = logging.getLogger(__name__)

_UNSET = object()


class ConfigStore:
    """
    Configuration tree owned by one application instance.

    Calling the store is shorthand for ``get`` (one argument) and ``set``
    (two arguments), which is how it is exposed as ``app.config``.
    """

    def __init__(self, emitter: IEventEmitter,
                 environ: Optional[Mapping[str, str]] = None,
                 sigil: str = envar.SIGIL) -> None:
        self._emitter = emitter
        self._environ = environ
        self._sigil = sigil
        self._tree: Dict[str, Any] = {}

    @property
    def emitter(self) -> IEventEmitter:
        """Emitter notified of config changes."""
        return self._emitter

    @property
    def environ(self) -> Mapping[str, str]:
        """Environment used for substitution, ``os.environ`` by default."""
        return self._environ if self._environ is not None else os.environ

    def __call__(self, path: str, value: Any = _UNSET) -> Any:
        if value is _UNSET:
            return self.get(path)
        self.set(path, value)
        return None

    def get(self, path: str) -> Any:
        """
        Get a config option.

        Args:
            path: Dot-delimited option path

        Returns:
            The stored value; nested options are returned as a copy

        Raises:
            ConfigNotDefinedError: If any segment of the path is missing
        """
        node: Any = self._tree
        for segment in _split(path):
            if not isinstance(node, dict) or segment not in node:
                raise ConfigNotDefinedError(path)
            node = node[segment]

        if isinstance(node, (dict, list)):
            return copy.deepcopy(node)
        return node

    def has(self, path: str) -> bool:
        """Check whether a config option is defined."""
        try:
            self.get(path)
        except ConfigNotDefinedError:
            return False
        return True

    def set(self, path: str, value: Any) -> None:
        """
        Set a config option, resolving environment substitutions first.

        Args:
            path: Dot-delimited option path; missing parents are created
            value: Value to store

        Raises:
            MissingEnvarError: If the value references an unset variable
            ConfigConflictError: If a parent segment holds a non-mapping value
        """
        resolved = envar.substitute(value, self.environ, self._sigil)
        self.assign(path, resolved)

    def assign(self, path: str, value: Any) -> None:
        """Store a value as-is, without substitution, and emit the change."""
        segments = _split(path)

        node = self._tree
        for segment in segments[:-1]:
            child = node.get(segment, _UNSET)
            if child is _UNSET:
                child = node[segment] = {}
            elif not isinstance(child, dict):
                raise ConfigConflictError(path, segment)
            node = child

        key = segments[-1]
        existed = key in node
        node[key] = copy.deepcopy(value)

        kind = 'modified' if existed else 'set'
        logger.debug(f"Config option {kind}: {path}")
        self._emitter.emit(
            CONFIG_MODIFIED if existed else CONFIG_SET,
            ConfigEvent(kind=kind, key=path, value=value),
            source="config"
        )

    def update(self, options: Mapping[str, Any]) -> None:
        """Set every top-level option of a mapping."""
        for key, value in options.items():
            self.set(str(key), value)

    def import_environment(self, fields: Mapping[str, str]) -> None:
        """
        Import environment variables as ``env.<NAME>`` options.

        Unset variables emit ``config.missing`` instead of failing.

        Args:
            fields: Variable names mapped to descriptions
        """
        envar.import_environment(self, fields)

    def to_dict(self) -> Dict[str, Any]:
        """Copy of the whole config tree."""
        return copy.deepcopy(self._tree)


def _split(path: str) -> List[str]:
    if not isinstance(path, str) or not path:
        raise InvalidArgumentError("Config path must be a non-empty string")

    segments = path.split('.')
    if not all(segments):
        raise InvalidArgumentError(f"Config path has an empty segment: '{path}'")
    return segments
