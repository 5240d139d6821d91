"""Loading discovery settings from YAML, JSON or TOML files."""

import json
import logging
import tomllib
from pathlib import Path
from typing import Any, Dict, List, NamedTuple, Union

from .errors import BadMethodCallError, ConfigError
from .matcher import expand_braces
from .options import OPTION_KEYS, Method

try:
    import yaml
    HAS_YAML = True
except ImportError:
    HAS_YAML = False

logger = logging.getLogger(__name__)

PARSE_ERRORS: tuple = (json.JSONDecodeError, tomllib.TOMLDecodeError)
if HAS_YAML:
    PARSE_ERRORS += (yaml.YAMLError,)

# Table holding the settings when the file carries other data too
SECTION_KEYS = ("discovery", "provider-discovery", "provider_discovery")

# Accepted spellings for each method
METHOD_NAMES = {
    "line_scan": Method.LINE_SCAN,
    "line-scan": Method.LINE_SCAN,
    "linescan": Method.LINE_SCAN,
    "preg": Method.LINE_SCAN,
    "regex": Method.LINE_SCAN,
    "tokens": Method.TOKENS,
    "token": Method.TOKENS,
    "path": Method.PATH,
}


class DiscoveryConfig(NamedTuple):
    """Patterns and options read from a config file."""

    patterns: List[str]
    options: Dict[str, Any]


def coerce_method(value: Union[str, int, Method]) -> Method:
    """
    Convert a method name or value into a ``Method``.

    Args:
        value: ``Method``, its integer value, or a name such as ``"tokens"``.

    Returns:
        The matching ``Method``.

    Raises:
        BadMethodCallError: If the value names no method.
    """
    if isinstance(value, str):
        key = value.strip().lower()
        if key in METHOD_NAMES:
            return METHOD_NAMES[key]
        if key.isdigit():
            value = int(key)
        else:
            raise BadMethodCallError(f"Unknown parse method `{value}`")

    try:
        return Method(value)
    except (TypeError, ValueError):
        raise BadMethodCallError(f"Unknown parse method `{value}`") from None


def _read_file(file_path: Path) -> Any:
    """Parse a config file according to its suffix."""
    suffix = file_path.suffix.lower()

    try:
        if suffix == ".toml":
            with open(file_path, "rb") as handle:
                return tomllib.load(handle)

        content = file_path.read_text(encoding="utf-8")

        if suffix in {".yaml", ".yml"}:
            if not HAS_YAML:
                raise ConfigError(f"PyYAML is required to read `{file_path}`")
            return yaml.safe_load(content)

        return json.loads(content)

    except (OSError, UnicodeDecodeError) as e:
        raise ConfigError(f"Cannot read config file `{file_path}`: {e}") from e
    except PARSE_ERRORS as e:
        raise ConfigError(f"Invalid config file `{file_path}`: {e}") from e


def _find_section(data: Dict[str, Any]) -> Dict[str, Any]:
    """Return the discovery table, looking inside ``tool`` for pyproject files."""
    for container in (data, data.get("tool") or {}):
        if not isinstance(container, dict):
            continue
        for key in SECTION_KEYS:
            section = container.get(key)
            if isinstance(section, dict):
                return section
    return data


def _resolve(value: str, base_dir: Path) -> str:
    """Anchor a relative path on the config file's directory."""
    path = Path(value)
    if path.is_absolute():
        return value
    return str(base_dir / path)


def _resolve_pattern(pattern: str, base_dir: Path) -> List[str]:
    """Anchor each brace alternative of a pattern on its own."""
    alternatives = expand_braces(pattern)
    if all(Path(alternative).is_absolute() for alternative in alternatives):
        return [pattern]
    return [_resolve(alternative, base_dir) for alternative in alternatives]


def load_config(file_path: Union[str, Path]) -> DiscoveryConfig:
    """
    Read discovery patterns and options from a config file.

    Supported formats are YAML (``.yaml``/``.yml``), TOML (``.toml``) and
    JSON (anything else). Settings live at the top level, or under a
    ``discovery`` table (``[tool.provider-discovery]`` in pyproject.toml).

    Args:
        file_path: Config file to read.

    Returns:
        DiscoveryConfig with patterns and options. Relative patterns and
        ``base_src`` are resolved against the config file's directory.

    Raises:
        ConfigError: If the file cannot be read or has the wrong shape.
        BadMethodCallError: If ``method`` names no known method.
    """
    file_path = Path(file_path)
    data = _read_file(file_path)
    if data is None:
        data = {}
    if not isinstance(data, dict):
        raise ConfigError(f"Config file `{file_path}` must contain a mapping")

    section = _find_section(data)
    base_dir = file_path.parent.resolve()

    raw_patterns = section.get("pattern", section.get("patterns", []))
    if isinstance(raw_patterns, str):
        raw_patterns = [raw_patterns]
    if not isinstance(raw_patterns, list) or not all(isinstance(p, str) for p in raw_patterns):
        raise ConfigError(f"`pattern` in `{file_path}` must be a string or a list of strings")
    patterns = [resolved for p in raw_patterns for resolved in _resolve_pattern(p, base_dir)]

    options: Dict[str, Any] = {}
    for key in OPTION_KEYS:
        if key in section:
            options[key] = section[key]

    if "method" in options:
        options["method"] = coerce_method(options["method"])
    if options.get("base_src"):
        options["base_src"] = _resolve(str(options["base_src"]), base_dir)

    logger.debug("Loaded %d pattern(s) from %s", len(patterns), file_path)
    return DiscoveryConfig(patterns=patterns, options=options)
