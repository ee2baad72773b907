"""
Command-line entry point for termfind.

Usage:
    termfind . red
        Find "red" in *.go files directly in the current folder.
    termfind . red "*.*" --recursive
        Find "red" in all files in the current folder and its subfolders.
    termfind src red "*.py" -r --filename
        Also report *.py files whose name contains "red".

Report lines go to stdout; logging goes to stderr.
"""

import argparse
import logging
import sys
from typing import List, Optional

from pydantic import ValidationError

from .config.parser import CONFIG_ENV_VAR, ConfigurationError, create_config_template, load_config
from .models.config import FinderConfig
from .models.search_request import SearchRequest
from .tools.report import run_search
from .tools.traverser import TraversalError, Traverser


logger = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_SEARCH_FAILED = 1
EXIT_USAGE = 2


def _err(msg: str) -> None:
    """Print *msg* to stderr."""
    print(msg, file=sys.stderr)


def build_parser() -> argparse.ArgumentParser:
    """Create the argument parser."""
    parser = argparse.ArgumentParser(
        prog="termfind",
        description="Search file names and contents for a literal, case-sensitive term.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=(
            "Folders named in skip_folders (vendor, node_modules, .git by default) are never searched.\n"
            f"Configuration is read from --config, ${CONFIG_ENV_VAR}, or .termfind.yaml."
        ),
    )

    parser.add_argument("folder", nargs="?", metavar="FOLDER", help="Folder to search from.")
    parser.add_argument("term", nargs="?", metavar="TERM", help="Literal text to search for.")
    parser.add_argument(
        "pattern",
        nargs="?",
        default=None,
        metavar="PATTERN",
        help="Glob for file names to search (default from config: *.go).",
    )
    parser.add_argument(
        "--recursive",
        "-r",
        action=argparse.BooleanOptionalAction,
        default=None,
        help="Search subfolders too.",
    )
    parser.add_argument(
        "--filename",
        "-n",
        action=argparse.BooleanOptionalAction,
        default=None,
        help="Also report files whose name contains TERM.",
    )
    parser.add_argument(
        "--max-size",
        type=int,
        default=None,
        metavar="BYTES",
        help="Skip files larger than BYTES (default from config: 1048576).",
    )
    parser.add_argument(
        "--skip",
        action="append",
        default=None,
        metavar="NAME",
        help="Folder name to skip; replaces the configured list, repeatable.",
    )
    parser.add_argument(
        "--config",
        "-c",
        default=None,
        metavar="PATH",
        help="Configuration file to load.",
    )
    parser.add_argument(
        "--strict",
        action="store_true",
        help="Treat configuration warnings as errors.",
    )
    parser.add_argument(
        "--write-config",
        default=None,
        metavar="PATH",
        help="Write a configuration template to PATH and exit.",
    )
    parser.add_argument(
        "--verbose",
        "-v",
        action="store_true",
        help="Log walk details to stderr.",
    )
    return parser


def configure_logging(config: FinderConfig, verbose: bool = False) -> None:
    """Send log records to stderr at the configured level."""
    level = logging.DEBUG if verbose else config.logging.get_level()
    logging.basicConfig(level=level, format=config.logging.format, stream=sys.stderr)


def apply_overrides(config: FinderConfig, args: argparse.Namespace) -> FinderConfig:
    """
    Apply command-line overrides to a loaded configuration.

    Raises:
        ValidationError: If an override is invalid
    """
    data = config.to_dict()
    if args.max_size is not None:
        data['limits']['max_bytes_per_file'] = args.max_size
    if args.skip is not None:
        data['skip_folders'] = args.skip
    return FinderConfig.from_dict(data)


def build_request(config: FinderConfig, args: argparse.Namespace) -> SearchRequest:
    """
    Build the search request, filling unset flags from configuration.

    Raises:
        ValidationError: If the request is invalid
    """
    defaults = config.search
    return SearchRequest(
        term=args.term,
        root_path=args.folder,
        extension_pattern=args.pattern if args.pattern is not None else defaults.extension_pattern,
        recursive=args.recursive if args.recursive is not None else defaults.recursive,
        match_filename=args.filename if args.filename is not None else defaults.match_filename,
    )


def main(argv: Optional[List[str]] = None) -> int:
    """
    Parse CLI arguments and run the search.

    Args:
        argv: Argument list (defaults to sys.argv[1:]).

    Returns:
        Process exit status
    """
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.write_config:
        try:
            create_config_template(args.write_config)
        except ConfigurationError as e:
            _err(f"termfind: error: {e}")
            return EXIT_USAGE
        print(f"Configuration template written to {args.write_config}")
        return EXIT_OK

    if args.folder is None or args.term is None:
        parser.print_usage(sys.stderr)
        _err("termfind: error: FOLDER and TERM are required")
        return EXIT_USAGE

    try:
        result = load_config(args.config, strict_mode=args.strict)
        config = apply_overrides(result.config, args)
        request = build_request(config, args)
    except ConfigurationError as e:
        _err(f"termfind: error: {e}")
        return EXIT_USAGE
    except ValidationError as e:
        _err(f"termfind: error: invalid arguments: {e}")
        return EXIT_USAGE

    configure_logging(config, args.verbose)
    for warning in result.warnings:
        logger.debug(f"Configuration: {warning}")
    logger.debug(f"Request: {request}")

    try:
        run_search(request, traverser=Traverser(config))
    except TraversalError as e:
        _err(f"termfind: error: {e}")
        return EXIT_SEARCH_FAILED

    return EXIT_OK


if __name__ == "__main__":
    sys.exit(main())
