"""JSON exporter for discovered providers (machine-friendly format)."""

import json
from pathlib import Path
from typing import Any, Dict, List, Optional, Sequence

from discovery.provider import Discovered


def to_json(
    entries: Sequence[Discovered],
    base: Optional[Path] = None,
    results: Optional[Sequence[Any]] = None,
    indent: int = 2,
) -> str:
    """
    Convert discovered providers to JSON format.

    Args:
        entries: Discovered files and identifiers, in discovery order.
        base: Optional base path for relative path display.
        results: Optional provider results, aligned with ``entries``.
        indent: JSON indentation level.

    Returns:
        JSON string with a ``providers`` list and, when given, ``results``.
    """
    providers: List[Dict[str, str]] = []
    for entry in entries:
        providers.append({
            "file": _get_path_str(Path(entry.file), base),
            "identifier": entry.identifier,
        })

    data: Dict[str, Any] = {"providers": providers}

    if results is not None:
        data["results"] = list(results)

    # Provider results are opaque; fall back to str() for anything json can't encode
    return json.dumps(data, indent=indent, default=str)


def _get_path_str(path: Path, base: Optional[Path]) -> str:
    """Get the string representation of a path."""
    if base is not None:
        try:
            rel_path = path.resolve().relative_to(base.resolve())
            return str(rel_path).replace("\\", "/")
        except ValueError:
            pass
    return str(path).replace("\\", "/")
