"""Main CLI entry point for the ead-tree command-line tool.

Converts one markup file into a JSON document (or a text outline) written
to stdout or to an output file. Any conversion error ends the process with a
non-zero status and a one-line diagnostic on stderr.
"""

import argparse
import sys
from pathlib import Path
from typing import List, Optional

from ead_tree import __version__
from ead_tree.api import TreeConverter
from ead_tree.shared.config import OUTPUT_FORMATS, ConfigError, ConverterConfig
from ead_tree.shared.errors import ConversionError
from ead_tree.shared.logging import configure_logging, get_logger
from ead_tree.shared.result import DiagnosticSeverity

EXIT_OK = 0
EXIT_FAILURE = 1
EXIT_INTERRUPTED = 130  # Standard exit code for SIGINT


def create_argument_parser() -> argparse.ArgumentParser:
    """Create the main argument parser."""
    parser = argparse.ArgumentParser(
        prog="ead-tree",
        description="Convert hierarchical markup (e.g. EAD finding aids) to JSON"
    )

    parser.add_argument("--version", action="version", version=__version__)

    parser.add_argument(
        "input",
        type=Path,
        help="Markup file to convert"
    )
    parser.add_argument(
        "--format", "-f",
        choices=list(OUTPUT_FORMATS),
        help="Output format (default: json)"
    )
    parser.add_argument(
        "--output", "-o",
        type=Path,
        help="Output file (default: stdout)"
    )
    parser.add_argument(
        "--indent",
        type=int,
        help="JSON indentation width; 0 puts one value per line, -1 prints compact JSON"
    )
    parser.add_argument(
        "--config", "-c",
        type=Path,
        help="Configuration file path (JSON)"
    )
    parser.add_argument(
        "--lenient-names",
        action="store_true",
        help="Accept close tags whose name differs from the open element"
    )
    parser.add_argument(
        "--keep-namespaces",
        action="store_true",
        help="Keep namespace URIs in element and attribute names"
    )

    verbosity = parser.add_mutually_exclusive_group()
    verbosity.add_argument(
        "--verbose", "-v",
        action="store_true",
        help="Verbose output"
    )
    verbosity.add_argument(
        "--quiet", "-q",
        action="store_true",
        help="Quiet output"
    )

    return parser


def build_config(args: argparse.Namespace) -> ConverterConfig:
    """Load the configuration file, then apply command-line overrides."""
    config = ConverterConfig()
    if args.config:
        config = ConverterConfig.from_file(args.config)

    overrides = {}
    if args.format:
        overrides["output__format"] = args.format
    if args.indent is not None:
        overrides["output__indent"] = None if args.indent < 0 else args.indent
    if args.lenient_names:
        overrides["tree__strict_close_names"] = False
    if args.keep_namespaces:
        overrides["source__strip_namespaces"] = False
    if args.verbose:
        overrides["logging_level"] = "DEBUG"
    elif args.quiet:
        overrides["logging_level"] = "ERROR"

    return config.override(**overrides) if overrides else config


def main(argv: Optional[List[str]] = None) -> int:
    """Main CLI entry point."""
    parser = create_argument_parser()
    args = parser.parse_args(argv)

    try:
        config = build_config(args)
    except ConfigError as e:
        print(f"error: {e}", file=sys.stderr)
        return EXIT_FAILURE

    configure_logging(config.logging_level)
    logger = get_logger(__name__, None, "cli")

    converter = TreeConverter(config)
    try:
        result = converter.convert_file(args.input)
        output = converter.to_text(result)
    except ConversionError as e:
        print(f"error: {args.input}: {e.describe()}", file=sys.stderr)
        return EXIT_FAILURE
    except OSError as e:
        print(f"error: cannot read {args.input}: {e.strerror or e}", file=sys.stderr)
        return EXIT_FAILURE
    except KeyboardInterrupt:
        print("\nConversion interrupted by user", file=sys.stderr)
        return EXIT_INTERRUPTED

    if not args.quiet:
        for diagnostic in result.diagnostics:
            if diagnostic.severity is DiagnosticSeverity.WARNING:
                print(f"warning: {diagnostic.message}", file=sys.stderr)

    logger.debug("Conversion summary", extra=result.summary())

    if args.output:
        try:
            args.output.write_text(output + "\n", encoding="utf-8")
        except OSError as e:
            print(f"error: cannot write {args.output}: {e}", file=sys.stderr)
            return EXIT_FAILURE
    else:
        print(output)

    return EXIT_OK


if __name__ == "__main__":
    sys.exit(main())
