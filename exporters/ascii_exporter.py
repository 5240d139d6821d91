"""ASCII tree-style exporter grouping discovered providers by scope."""

from pathlib import Path
from typing import Dict, List, Optional, Sequence, Tuple

from discovery.parser import SCOPE_SEPARATOR
from discovery.provider import Discovered


# Unicode tree characters
UNICODE_BRANCH = "├── "
UNICODE_LAST = "└── "
UNICODE_VERTICAL = "│   "
UNICODE_SPACE = "    "

# ASCII fallback characters
ASCII_BRANCH = "|-- "
ASCII_LAST = "\\-- "
ASCII_VERTICAL = "|   "
ASCII_SPACE = "    "


class _ScopeNode:
    """One scope segment with nested scopes and the classes declared in it."""

    def __init__(self):
        self.children: Dict[str, "_ScopeNode"] = {}
        self.leaves: List[Tuple[str, str]] = []  # (class name, display path)


def to_ascii(
    entries: Sequence[Discovered],
    base: Optional[Path] = None,
    style: str = "tree",
) -> str:
    """
    Convert discovered providers to an ASCII tree of scopes.

    Each top-level scope segment starts its own tree; classes without a scope
    are listed last as ``\\Name``.

    Args:
        entries: Discovered files and identifiers.
        base: Optional base path for relative path display.
        style: Output style - "tree" (Unicode) or "ascii" (pure ASCII).

    Returns:
        ASCII tree string.
    """
    # Select character set based on style
    if style == "ascii":
        chars = (ASCII_BRANCH, ASCII_LAST, ASCII_VERTICAL, ASCII_SPACE)
    else:
        chars = (UNICODE_BRANCH, UNICODE_LAST, UNICODE_VERTICAL, UNICODE_SPACE)

    root = _ScopeNode()
    for entry in entries:
        parts = [part for part in entry.identifier.split(SCOPE_SEPARATOR) if part]
        if not parts:
            continue
        node = root
        for part in parts[:-1]:
            node = node.children.setdefault(part, _ScopeNode())
        node.leaves.append((parts[-1], _get_display_path(Path(entry.file), base)))

    lines: List[str] = []

    scope_names = sorted(root.children)
    for i, name in enumerate(scope_names):
        lines.append(name)
        _render_children(root.children[name], "", chars, lines)

        # Add blank line between root trees (except after last)
        if i < len(scope_names) - 1:
            lines.append("")

    if root.leaves:
        if lines:
            lines.append("")
        for name, display in sorted(root.leaves):
            lines.append(f"{SCOPE_SEPARATOR}{name} ({display})")

    return "\n".join(lines)


def _render_children(
    node: _ScopeNode,
    prefix: str,
    chars: Tuple[str, str, str, str],
    lines: List[str],
) -> None:
    """
    Recursively render nested scopes, then the classes of a scope.

    Args:
        node: Scope whose contents are rendered.
        prefix: Current line prefix for indentation.
        chars: Character set (branch, last, vertical, space).
        lines: Output lines list (modified in place).
    """
    branch, last, vertical, space = chars

    scope_names = sorted(node.children)
    leaves = sorted(node.leaves)
    total_items = len(scope_names) + len(leaves)
    item_index = 0

    for name in scope_names:
        item_index += 1
        is_last = (item_index == total_items)
        connector = last if is_last else branch
        lines.append(f"{prefix}{connector}{name}")
        _render_children(
            node.children[name],
            prefix + (space if is_last else vertical),
            chars,
            lines,
        )

    for name, display in leaves:
        item_index += 1
        connector = last if item_index == total_items else branch
        lines.append(f"{prefix}{connector}{name} ({display})")


def _get_display_path(path: Path, base: Optional[Path]) -> str:
    """Get the display path for a file."""
    if base is not None:
        try:
            rel_path = path.resolve().relative_to(base.resolve())
            return str(rel_path).replace("\\", "/")
        except ValueError:
            pass
    return str(path).replace("\\", "/")
