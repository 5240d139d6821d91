"""Discovery options and the process-wide defaults they are merged with.

Defaults are meant to be set once at startup, before any provider is built.
Changing them while other threads construct providers is not guarded.
"""

from enum import IntEnum
from types import MappingProxyType
from typing import Any, Dict, Mapping, Optional


class Method(IntEnum):
    """Identifier extraction strategies."""

    # Reads the file line by line and matches regular expressions
    LINE_SCAN = 0x01
    # Tokenizes the whole file in memory
    TOKENS = 0x02
    # Derives the identifier from the file path (base_src, prefix, extension)
    PATH = 0x04


# Option keys understood by the strategies
OPTION_KEYS = ("method", "base_src", "prefix", "extension")

_FALLBACK: Dict[str, Any] = {"method": Method.LINE_SCAN}

_default_options: Dict[str, Any] = dict(_FALLBACK)


def set_default_options(options: Mapping[str, Any]) -> None:
    """
    Replace the process-wide default options.

    Keys from ``options`` win; ``method`` falls back to LINE_SCAN when absent,
    so an empty mapping resets the defaults.

    Args:
        options: New default options.
    """
    global _default_options
    merged = dict(_FALLBACK)
    merged.update(options)
    _default_options = merged


def get_default_options() -> Dict[str, Any]:
    """Return a copy of the current default options."""
    return dict(_default_options)


def merge_options(options: Optional[Mapping[str, Any]] = None) -> Mapping[str, Any]:
    """
    Merge caller options over the defaults.

    The merge is shallow: a key given by the caller completely replaces the
    default value for that key.

    Args:
        options: Per-provider options, may be None.

    Returns:
        Read-only mapping of the effective options.
    """
    merged = get_default_options()
    if options:
        merged.update(options)
    merged.setdefault("method", Method.LINE_SCAN)
    return MappingProxyType(merged)
