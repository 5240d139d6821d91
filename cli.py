#!/usr/bin/env python3
"""
Provider Discovery CLI

Find config provider classes by glob pattern, list their identifiers and
optionally load and invoke them.
"""

import argparse
import logging
import sys
from pathlib import Path
from typing import Any, Dict, List, Optional

from discovery import (
    ClassDiscoveryProvider,
    DiscoveryError,
    ImportLoader,
    coerce_method,
    load_config,
)
from exporters import to_ascii, to_json


def _method_type(value: str):
    """argparse type for --method."""
    try:
        return coerce_method(value)
    except DiscoveryError as e:
        raise argparse.ArgumentTypeError(str(e)) from None


def _configure_logging(verbose: bool) -> None:
    """Configure logging for the discovery packages."""
    level = logging.DEBUG if verbose else logging.WARNING
    logging.basicConfig(
        level=level,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%H:%M:%S",
        stream=sys.stderr,
    )

    # Set level for the package logger even if logging was configured before
    logging.getLogger("discovery").setLevel(level)


def parse_args(args=None):
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(
        prog="provider-discovery",
        description="Discover config provider classes by glob pattern.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  provider-discovery 'src/*/ConfigProvider.php'             # List identifiers (ASCII tree)
  provider-discovery 'src/**/*.php' -m tokens -f json        # Token strategy, JSON output
  provider-discovery 'src/**/*.php' -m path --base-src src --prefix 'App\\'
  provider-discovery -c discovery.yaml                       # Patterns and options from a file
  provider-discovery -c pyproject.toml --invoke -p .         # Import, invoke and print results
        """,
    )

    # Positional arguments
    parser.add_argument(
        "pattern",
        nargs="*",
        help="Glob pattern(s) matching provider files (brace groups allowed)",
    )

    parser.add_argument(
        "-c", "--config",
        type=str,
        default=None,
        help="YAML, JSON or TOML file with pattern and options",
    )

    # Strategy options
    parser.add_argument(
        "-m", "--method",
        type=_method_type,
        default=None,
        help=(
            "Identifier extraction method: line-scan, tokens or path (default: line-scan). "
            "With --invoke, the last identifier segment is imported as an attribute "
            "of the module named by the others"
        ),
    )

    parser.add_argument(
        "--base-src",
        type=str,
        default=None,
        help="Directory prefix stripped by the path method",
    )

    parser.add_argument(
        "--prefix",
        type=str,
        default=None,
        help="Scope prefix prepended by the path method (e.g. 'App\\')",
    )

    parser.add_argument(
        "--extension",
        type=str,
        default=None,
        help="File extension stripped by the path method (default: the file's own)",
    )

    # Loading options
    parser.add_argument(
        "--invoke",
        action="store_true",
        help="Import each provider, call it and include the results in JSON output",
    )

    parser.add_argument(
        "-p", "--python-path",
        action="append",
        default=[],
        help="Directory added to sys.path before importing providers (repeatable)",
    )

    # Output options
    parser.add_argument(
        "-f", "--format",
        choices=["ascii", "json"],
        default="ascii",
        help="Output format (default: ascii, json when --invoke is given)",
    )

    parser.add_argument(
        "--ascii-style",
        choices=["tree", "ascii"],
        default="tree",
        help="ASCII output style: 'tree' (Unicode) or 'ascii' (pure ASCII)",
    )

    parser.add_argument(
        "--relative-to",
        type=str,
        default=None,
        help="Base path for relative path display",
    )

    parser.add_argument(
        "-o", "--output",
        type=str,
        default=None,
        help="Output file (default: stdout)",
    )

    parser.add_argument(
        "-v", "--verbose",
        action="store_true",
        help="Log each parsed file to stderr",
    )

    return parser.parse_args(args)


def main(args=None):
    """Main entry point."""
    parsed = parse_args(args)
    _configure_logging(parsed.verbose)

    patterns: List[str] = list(parsed.pattern)
    options: Dict[str, Any] = {}

    # Config file first, command line flags override it
    if parsed.config:
        try:
            config = load_config(parsed.config)
        except DiscoveryError as e:
            print(f"Error: {e}", file=sys.stderr)
            return 1
        options.update(config.options)
        if not patterns:
            patterns = config.patterns

    if not patterns:
        print("Error: no pattern given (use PATTERN or --config)", file=sys.stderr)
        return 1

    cli_options = {
        "method": parsed.method,
        "base_src": parsed.base_src,
        "prefix": parsed.prefix,
        "extension": parsed.extension,
    }
    options.update({key: value for key, value in cli_options.items() if value is not None})

    for directory in reversed(parsed.python_path):
        sys.path.insert(0, str(Path(directory).resolve()))

    base: Optional[Path] = Path(parsed.relative_to).resolve() if parsed.relative_to else Path.cwd()

    provider = ClassDiscoveryProvider(
        patterns[0] if len(patterns) == 1 else patterns,
        options,
        loader=ImportLoader(),
    )

    try:
        entries = list(provider.scan())
    except DiscoveryError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    results = None
    if parsed.invoke:
        try:
            results = list(provider())
        except DiscoveryError as e:
            print(f"Error: {e}", file=sys.stderr)
            return 1
        except Exception as e:
            print(f"Error invoking providers: {e}", file=sys.stderr)
            return 1

    # Generate output
    if parsed.format == "json" or parsed.invoke:
        output = to_json(entries, base=base, results=results)
    else:
        output = to_ascii(entries, base=base, style=parsed.ascii_style)

    # Write output
    if parsed.output:
        try:
            output_path = Path(parsed.output)
            output_path.write_text(output, encoding="utf-8")
            print(f"Output written to: {output_path}", file=sys.stderr)
        except OSError as e:
            print(f"Error writing output: {e}", file=sys.stderr)
            return 1
    else:
        print(output)

    return 0


if __name__ == "__main__":
    sys.exit(main())
