"""Discovery of config provider classes by glob pattern."""

from .errors import (
    BadMethodCallError,
    ClassNameAmbiguousError,
    ConfigError,
    DiscoveryError,
    InvalidFileError,
)
from .options import Method, get_default_options, set_default_options
from .matcher import FileMatcher, expand_braces
from .parser import parse_line_scan, parse_path, parse_tokens
from .loader import ImportLoader, ModuleLoader, RegistryLoader
from .provider import ClassDiscoveryProvider, Discovered
from .config import DiscoveryConfig, coerce_method, load_config

__version__ = "0.1.0"

__all__ = [
    "BadMethodCallError",
    "ClassNameAmbiguousError",
    "ConfigError",
    "DiscoveryError",
    "InvalidFileError",
    "Method",
    "get_default_options",
    "set_default_options",
    "FileMatcher",
    "expand_braces",
    "parse_line_scan",
    "parse_path",
    "parse_tokens",
    "ImportLoader",
    "ModuleLoader",
    "RegistryLoader",
    "ClassDiscoveryProvider",
    "Discovered",
    "DiscoveryConfig",
    "coerce_method",
    "load_config",
]
