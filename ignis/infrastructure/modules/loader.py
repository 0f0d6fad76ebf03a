"""
Resolution of extension names to importable objects.

Names passed to ``use`` are looked up among installed ``ignis.extensions``
entry points first, then as peer modules following the ``ignis_<name>``
convention, then as plain module paths. ``package.module:attribute`` selects
an attribute of a module directly.
"""

import importlib
import logging
from importlib.metadata import entry_points
from typing import Any, List, Optional

from ...core.exceptions import InvalidArgumentError
from ...core.interfaces.network import IModuleLoader

logger = logging.getLogger(__name__)

ENTRY_POINT_GROUP = "ignis.extensions"


class ModuleLoader(IModuleLoader):
    """Loads extensions by name from entry points and importable modules."""

    def __init__(self, prefix: str = "ignis_", group: str = ENTRY_POINT_GROUP) -> None:
        self._prefix = prefix
        self._group = group

    def load(self, name: str) -> Any:
        """
        Resolve an extension name.

        Args:
            name: Entry point name, peer module name or ``module:attribute``

        Returns:
            The loaded module or attribute

        Raises:
            InvalidArgumentError: If nothing can be resolved for the name
        """
        if not isinstance(name, str) or not name.strip():
            raise InvalidArgumentError("Extension name must be a non-empty string")

        if ':' in name:
            module_name, _, attribute = name.partition(':')
            module = self._import(module_name)
            if module is None or not hasattr(module, attribute):
                raise InvalidArgumentError(f"Cannot find extension '{name}'")
            return getattr(module, attribute)

        entry_point = self._find_entry_point(name)
        if entry_point is not None:
            logger.debug(f"Loading extension '{name}' from entry point {entry_point.value}")
            return entry_point.load()

        candidates = self._candidates(name)
        for module_name in candidates:
            module = self._import(module_name)
            if module is not None:
                logger.debug(f"Loaded extension '{name}' from module {module_name}")
                return module

        raise InvalidArgumentError(
            f"Cannot find extension '{name}' (tried: {', '.join(candidates)})")

    def _candidates(self, name: str) -> List[str]:
        normalized = name.replace('-', '_')
        candidates = [f"{self._prefix}{normalized}", normalized]
        return list(dict.fromkeys(candidates))

    def _find_entry_point(self, name: str) -> Optional[Any]:
        for entry_point in entry_points(group=self._group):
            if entry_point.name == name:
                return entry_point
        return None

    def _import(self, module_name: str) -> Optional[Any]:
        try:
            return importlib.import_module(module_name)
        except ModuleNotFoundError as e:
            # A missing dependency inside the module is a real error
            if e.name and (module_name == e.name or module_name.startswith(e.name + '.')):
                return None
            raise
