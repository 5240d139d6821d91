"""Parsers for extracting provider class identifiers from source files."""

import logging
import os
import re
from pathlib import Path
from typing import Optional, Union

from .errors import InvalidFileError
from .lexer import CLASS, NAMESPACE, WHITESPACE, is_classified, tokenize

logger = logging.getLogger(__name__)

PathLike = Union[str, Path]

# Separator between scope segments and before the class name
SCOPE_SEPARATOR = "\\"

# Scope declaration, e.g. "namespace App\Config;"
SCOPE_PATTERN = re.compile(
    r"^\s*namespace\s+(?P<scope>[a-z_][a-z0-9\\_]*)[\s;{]*$",
    re.IGNORECASE,
)

# Class declaration, e.g. "final class ConfigProvider"
NAME_PATTERN = re.compile(
    r"^(?:final\s+)?class\s+(?P<name>[a-z_]\w*)",
    re.IGNORECASE,
)

COMMENT_OPEN = "/*"
COMMENT_CLOSE = "*/"

# Tokens from the class keyword to its name: keyword, whitespace, name
CLASS_NAME_LOOKAHEAD = 2


def parse_line_scan(file_path: PathLike) -> str:
    """
    Get the class identifier by matching lines against regular expressions.

    The file is streamed line by line and reading stops as soon as both the
    scope and the class name are known. Lines inside ``/* ... */`` comments
    are ignored, including the line that closes the comment.

    Args:
        file_path: Path to the source file.

    Returns:
        Identifier in the form ``scope\\Name`` (scope may be empty).

    Raises:
        InvalidFileError: If the file cannot be read or declares no class.
    """
    scope: Optional[str] = None
    name: Optional[str] = None
    in_comment = False

    try:
        with open(file_path, "r", encoding="utf-8", errors="replace") as handle:
            for line in handle:
                comment_end = COMMENT_CLOSE in line
                if in_comment:
                    in_comment = not comment_end
                    continue

                if scope is None:
                    match = SCOPE_PATTERN.match(line)
                    if match:
                        scope = match.group("scope")

                if name is None:
                    match = NAME_PATTERN.match(line)
                    if match:
                        name = match.group("name")

                if COMMENT_OPEN in line and not comment_end:
                    in_comment = True

                if scope is not None and name is not None:
                    break
    except OSError as e:
        raise InvalidFileError(f"Cannot read file `{file_path}`: {e}", file=str(file_path)) from e

    if not name:
        raise InvalidFileError(
            f"Cannot determine class name using file `{file_path}` and method `line_scan`",
            file=str(file_path),
        )

    return f"{scope or ''}{SCOPE_SEPARATOR}{name}"


def parse_tokens(file_path: PathLike) -> str:
    """
    Get the class identifier by tokenizing the whole file.

    Everything classified after the ``namespace`` keyword is appended to the
    scope until the first bare character (``;``, ``{`` ...). The class name is
    read a fixed distance after the ``class`` keyword.

    Args:
        file_path: Path to the source file.

    Returns:
        Identifier in the form ``scope\\Name`` (scope may be empty).

    Raises:
        InvalidFileError: If the file cannot be read or declares no class.
    """
    try:
        source = Path(file_path).read_text(encoding="utf-8", errors="replace")
    except OSError as e:
        raise InvalidFileError(f"Cannot read file `{file_path}`: {e}", file=str(file_path)) from e

    tokens = tokenize(source)
    scope = ""
    name: Optional[str] = None
    accumulating = False

    for index, token in enumerate(tokens):
        if not is_classified(token):
            accumulating = False
            continue

        if token.kind == WHITESPACE:
            continue

        if accumulating:
            scope += token.text
            continue

        if token.kind == NAMESPACE:
            accumulating = True
            continue

        if token.kind == CLASS:
            lookahead = index + CLASS_NAME_LOOKAHEAD
            if lookahead < len(tokens) and is_classified(tokens[lookahead]):
                name = tokens[lookahead].text
            break

    if not name:
        raise InvalidFileError(
            f"Cannot determine class name using file `{file_path}` and method `tokens`",
            file=str(file_path),
        )

    return f"{scope}{SCOPE_SEPARATOR}{name}"


def parse_path(
    file_path: PathLike,
    base_src: Optional[PathLike] = None,
    prefix: Optional[str] = None,
    extension: Optional[str] = None,
) -> str:
    """
    Get the class identifier from the file path alone.

    The file is never opened. The result is only meaningful when ``base_src``
    and ``prefix`` describe the project's directory to scope mapping.

    Args:
        file_path: Path to the source file.
        base_src: Directory prefix to strip from the path.
        prefix: String prepended to the identifier (e.g. ``App\\``).
        extension: Extension to strip; defaults to the file's own extension.

    Returns:
        Identifier built from the path.
    """
    path = str(file_path)
    base = str(base_src) if base_src else ""
    if base and not base.endswith(os.sep):
        base += os.sep

    if extension is None:
        extension = os.path.splitext(path)[1]
    if extension and not extension.startswith("."):
        extension = "." + extension

    if extension and path.endswith(extension):
        path = path[: -len(extension)]
    if base and path.startswith(base):
        path = path[len(base):]

    path = path.replace(os.sep, SCOPE_SEPARATOR)
    if os.altsep:
        path = path.replace(os.altsep, SCOPE_SEPARATOR)

    return f"{prefix or ''}{path}"
