"""
Environment variable handling for the configuration store.

``substitute`` resolves ``$NAME`` expressions strictly: an unset variable is
an error. ``import_environment`` is the forgiving counterpart that reports
unset variables as ``config.missing`` events instead.
"""

import logging
from typing import TYPE_CHECKING, Any, List, Mapping

from ...core.domain.events import CONFIG_MISSING, MissingEnvEvent
from ...core.exceptions import MissingEnvarError

if TYPE_CHECKING:
    from .store import ConfigStore

logger = logging.getLogger(__name__)

SIGIL = '$'


def is_expression(value: Any, sigil: str = SIGIL) -> bool:
    """Check whether a value is a substitution expression."""
    return isinstance(value, str) and len(value) > len(sigil) and value.startswith(sigil)


def substitute(value: Any, environ: Mapping[str, str], sigil: str = SIGIL) -> Any:
    """
    Resolve substitution expressions in a config value.

    Mappings and lists are copied with every string leaf resolved.

    Args:
        value: Value about to be written to the store
        environ: Environment to resolve names against
        sigil: Prefix marking a substitution expression

    Returns:
        The value with every expression replaced by its variable's value

    Raises:
        MissingEnvarError: If an expression names an unset variable
    """
    if is_expression(value, sigil):
        name = value[len(sigil):]
        if name not in environ:
            raise MissingEnvarError(name)
        return environ[name]

    if isinstance(value, Mapping):
        return {key: substitute(item, environ, sigil) for key, item in value.items()}

    if isinstance(value, list):
        return [substitute(item, environ, sigil) for item in value]

    if isinstance(value, tuple):
        items = [substitute(item, environ, sigil) for item in value]
        # Named tuples take one constructor argument per field
        if hasattr(value, '_make'):
            return type(value)._make(items)
        return tuple(items)

    return value


def missing_variables(value: Any, environ: Mapping[str, str], sigil: str = SIGIL) -> List[str]:
    """
    List every unset variable referenced by a config value.

    Args:
        value: Value that would be written to the store
        environ: Environment to resolve names against
        sigil: Prefix marking a substitution expression

    Returns:
        Names of unset variables in the order they appear, without duplicates
    """
    if is_expression(value, sigil):
        name = value[len(sigil):]
        return [] if name in environ else [name]

    if isinstance(value, Mapping):
        items = list(value.values())
    elif isinstance(value, (list, tuple)):
        items = list(value)
    else:
        return []

    names: List[str] = []
    for item in items:
        for name in missing_variables(item, environ, sigil):
            if name not in names:
                names.append(name)
    return names


def import_environment(store: 'ConfigStore', fields: Mapping[str, str]) -> None:
    """
    Import environment variables into ``env.*`` config options.

    Args:
        store: Store receiving the values
        fields: Variable names mapped to human-readable descriptions
    """
    environ = store.environ

    for name, description in fields.items():
        if name not in environ:
            logger.warning(f"[missing] {name}: {description}")
            store.emitter.emit(
                CONFIG_MISSING,
                MissingEnvEvent(name=name, description=description),
                source="config"
            )
        else:
            store.assign(f"env.{name}", environ[name])
