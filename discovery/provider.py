"""Config provider discovery that ties matching, parsing and loading together."""

import logging
import os
from functools import partial
from typing import Any, Callable, Iterator, Mapping, NamedTuple, Optional, Sequence, Union

from .errors import BadMethodCallError, ClassNameAmbiguousError, InvalidFileError
from .loader import ImportLoader, ModuleLoader
from .matcher import FileMatcher
from .options import Method, merge_options
from .parser import parse_line_scan, parse_path, parse_tokens

logger = logging.getLogger(__name__)

Pattern = Union[str, os.PathLike, Sequence[Union[str, os.PathLike]]]


class Discovered(NamedTuple):
    """A candidate file and the identifier extracted from it."""

    file: str
    identifier: str


def normalize_pattern(pattern: Pattern) -> str:
    """
    Turn a pattern or a list of patterns into a single glob pattern.

    Args:
        pattern: A path pattern, or a list/tuple of path patterns.

    Returns:
        The pattern itself, or ``{p1,p2,...}`` for a list.

    Raises:
        BadMethodCallError: If the pattern is of any other type.
    """
    if isinstance(pattern, (str, os.PathLike)):
        return os.fspath(pattern)

    if isinstance(pattern, (list, tuple)) and all(
        isinstance(item, (str, os.PathLike)) for item in pattern
    ):
        return "{" + ",".join(os.fspath(item) for item in pattern) + "}"

    raise BadMethodCallError(
        f"Pattern must be a string or a list of strings, got {type(pattern).__name__}"
    )


class ClassDiscoveryProvider:
    """
    Find config provider classes by pattern and yield what they return.

    Calling the provider (or iterating over it) returns a generator. Each
    pull processes exactly one candidate file: the identifier is extracted,
    resolved through the loader, instantiated and invoked. The first failure
    ends the pass.

    Example:
        >>> provider = ClassDiscoveryProvider("src/*/ConfigProvider.php",
        ...                                   {"method": Method.TOKENS})
        >>> configs = list(provider())
    """

    def __init__(
        self,
        pattern: Pattern,
        options: Optional[Mapping[str, Any]] = None,
        *,
        loader: Optional[ModuleLoader] = None,
        matcher: Optional[FileMatcher] = None,
    ):
        self._pattern = normalize_pattern(pattern)
        self._options = merge_options(options)
        self.loader = loader if loader is not None else ImportLoader()
        self.matcher = matcher if matcher is not None else FileMatcher()

    @property
    def pattern(self) -> str:
        """The normalized glob pattern."""
        return self._pattern

    @property
    def options(self) -> Mapping[str, Any]:
        """Effective options (defaults merged with the constructor's)."""
        return self._options

    def _select_strategy(self) -> Callable[[str], str]:
        """
        Pick the identifier extractor for the configured method.

        Raises:
            BadMethodCallError: If the method is missing or unknown.
        """
        try:
            method = Method(self._options.get("method"))
        except (TypeError, ValueError):
            raise BadMethodCallError(
                f"Invalid parse method selected: {self._options.get('method')!r}"
            ) from None

        logger.debug("Using %s strategy for %s", method.name, self._pattern)

        if method is Method.TOKENS:
            return parse_tokens
        if method is Method.PATH:
            return partial(
                parse_path,
                base_src=self._options.get("base_src"),
                prefix=self._options.get("prefix"),
                extension=self._options.get("extension"),
            )
        return parse_line_scan

    def scan(self) -> Iterator[Discovered]:
        """
        Iterate over candidate files and their identifiers without loading them.

        Yields:
            ``Discovered`` entries in matcher order.

        Raises:
            BadMethodCallError: On the first pull if the method is invalid.
            InvalidFileError: If a file yields no identifier.
        """
        extract = self._select_strategy()

        for file_path in self.matcher.expand(self._pattern):
            logger.debug("Parsing %s", file_path)
            identifier = extract(file_path)
            logger.debug("Found %s in %s", identifier, file_path)
            yield Discovered(file_path, identifier)

    def __call__(self) -> Iterator[Any]:
        """
        Iterate over the results of every discovered provider.

        Raises:
            BadMethodCallError: On the first pull if the method is invalid.
            ClassNameAmbiguousError: If an identifier does not resolve.
            InvalidFileError: If a file yields no identifier, or the loaded
                unit is not callable.
        """
        for file_path, identifier in self.scan():
            if not identifier or not self.loader.exists(identifier):
                raise ClassNameAmbiguousError(
                    f"Determined class name `{identifier}` does not seem to be correct "
                    f"for file `{file_path}`",
                    identifier=identifier,
                    file=file_path,
                )

            unit = self.loader.load(identifier)
            if not self.loader.is_invocable(unit):
                raise InvalidFileError(
                    f"Class `{identifier}` does not seem to be callable",
                    file=file_path,
                )

            yield self.loader.invoke(unit)

    def __iter__(self) -> Iterator[Any]:
        return self()
