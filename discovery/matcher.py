"""File matching utilities for expanding provider glob patterns."""

import glob
import logging
from typing import Iterator, List

logger = logging.getLogger(__name__)


def expand_braces(pattern: str) -> List[str]:
    """
    Expand ``{a,b}`` groups in a glob pattern.

    Groups may be nested; alternatives keep the order they are written in.
    A group without a closing brace is left as literal text.

    Args:
        pattern: Glob pattern, possibly containing brace groups.

    Returns:
        List of brace-free patterns.
    """
    start = pattern.find("{")
    if start == -1:
        return [pattern]

    depth = 0
    parts: List[str] = []
    last = start + 1
    for index in range(start, len(pattern)):
        char = pattern[index]
        if char == "{":
            depth += 1
        elif char == "}":
            depth -= 1
            if depth == 0:
                parts.append(pattern[last:index])
                head, tail = pattern[:start], pattern[index + 1:]
                expanded: List[str] = []
                for part in parts:
                    expanded.extend(expand_braces(head + part + tail))
                return expanded
        elif char == "," and depth == 1:
            parts.append(pattern[last:index])
            last = index + 1

    return [pattern]


class FileMatcher:
    """
    Expands a pattern into candidate file paths.

    Each brace alternative is globbed on its own and its matches are yielded
    sorted, so the overall order follows the order of the alternatives.
    """

    def __init__(self, recursive: bool = True):
        self.recursive = recursive

    def expand(self, pattern: str) -> Iterator[str]:
        """
        Iterate over paths matching a pattern.

        Args:
            pattern: Glob pattern, brace groups allowed.

        Yields:
            Matching path strings. Literal paths that do not exist are skipped.
        """
        if not pattern:
            return

        for alternative in expand_braces(pattern):
            matches = sorted(glob.glob(alternative, recursive=self.recursive))
            logger.debug("Pattern %s matched %d file(s)", alternative, len(matches))
            yield from matches
