#!/usr/bin/env python3
"""Command-line interface for exportmap.

This module provides the ``exportmap`` command:
- ``resolve``: resolve subpaths through a package's exports field
- ``workspaces``: list the packages and apps of a monorepo
- Configuration file loading and condition overrides
- Text, JSON and YAML output

Example:
    >>> from exportmap.cli import parse_arguments
    >>> args = parse_arguments(["resolve", "package.json", "./utils", "-C", "browser"])
"""

import argparse
import os
import sys
from typing import Any, Dict, List, Optional

from exportmap.core.constants import EXPORTMAP_VERSION, ConfigKey, ManifestFile
from exportmap.core.validators import ValidationError
from exportmap.infrastructure.config_manager import ConfigError, ConfigManager, ConfigSource
from exportmap.infrastructure.logger import Logger, configure_logging, get_logger
from exportmap.manifest.absolute import join_with_root
from exportmap.manifest.package_json import ManifestError, PackageJson
from exportmap.manifest.resolver import ExportsResolver
from exportmap.manifest.workspace import Workspace, WorkspaceError
from exportmap.report import (
    OUTPUT_FORMATS,
    RESOLVE_TEMPLATE,
    WORKSPACES_TEMPLATE,
    render,
    target_to_dict,
    workspace_to_dict,
)

DESCRIPTION = "exportmap - resolve package.json conditional exports"

EXIT_OK = 0
EXIT_ERROR = 1
EXIT_UNRESOLVED = 3
EXIT_INTERRUPTED = 130


class CLIError(Exception):
    """Exception raised for CLI-related errors."""

    pass


def parse_arguments(args: Optional[List[str]] = None) -> argparse.Namespace:
    """
    Parse command-line arguments.

    Args:
        args: Argument list to parse (defaults to sys.argv[1:])

    Returns:
        Parsed arguments namespace

    Raises:
        SystemExit: On invalid arguments or --help/--version
        CLIError: If arguments parse but fail validation
    """
    parser = argparse.ArgumentParser(
        prog="exportmap",
        description=DESCRIPTION,
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Resolve the package root for the standard conditions
  exportmap resolve package.json .

  # Resolve a wildcard subpath and also try the browser condition
  exportmap resolve packages/ui ./components/button -C browser

  # Use a custom condition priority and print absolute paths as JSON
  exportmap resolve package.json ./utils --priority worker import --absolute --format json

  # List the packages and apps of a monorepo
  exportmap workspaces /path/to/repo
        """,
    )

    parser.add_argument(
        "-v",
        "--version",
        action="version",
        version=f"%(prog)s {EXPORTMAP_VERSION}",
    )

    parser.add_argument(
        "-c",
        "--config",
        metavar="FILE",
        type=str,
        help="Configuration file path (YAML format)",
    )

    log_group = parser.add_argument_group("logging options")

    log_group.add_argument(
        "--debug",
        action="store_true",
        help="Enable debug logging",
    )

    log_group.add_argument(
        "--log-file",
        metavar="FILE",
        type=str,
        help="Also write log output to FILE",
    )

    subparsers = parser.add_subparsers(dest="command", metavar="COMMAND")
    subparsers.required = True

    # resolve
    resolve_parser = subparsers.add_parser(
        "resolve", help="Resolve subpaths through a package's exports field"
    )
    resolve_parser.add_argument(
        "manifest",
        metavar="MANIFEST",
        help="package.json file, or a directory containing one",
    )
    resolve_parser.add_argument(
        "subpaths",
        metavar="SUBPATH",
        nargs="+",
        help="Subpaths to resolve (e.g. . ./utils ./components/button)",
    )
    resolve_parser.add_argument(
        "-C",
        "--conditions",
        metavar="COND",
        nargs="+",
        action="append",
        dest="condition_lists",
        help="Extra condition list to resolve (can be specified multiple times)",
    )
    resolve_parser.add_argument(
        "--priority",
        metavar="COND",
        nargs="+",
        help="Global condition priority (default: node browser import require types)",
    )
    resolve_parser.add_argument(
        "--set",
        metavar="NAME=COND,...",
        action="append",
        dest="condition_sets",
        help="Override a standard condition set, e.g. import=import,worker",
    )
    resolve_parser.add_argument(
        "--absolute",
        action="store_true",
        help="Print paths joined onto the package directory",
    )
    resolve_parser.add_argument(
        "--format",
        choices=OUTPUT_FORMATS,
        default="text",
        help="Output format (default: text)",
    )

    # workspaces
    workspaces_parser = subparsers.add_parser(
        "workspaces", help="List packages and apps of a Turborepo-style monorepo"
    )
    workspaces_parser.add_argument("root", metavar="ROOT", help="Monorepo root directory")
    workspaces_parser.add_argument(
        "--format",
        choices=OUTPUT_FORMATS,
        default="text",
        help="Output format (default: text)",
    )

    parsed = parser.parse_args(args)

    _validate_arguments(parsed)

    return parsed


def _validate_arguments(args: argparse.Namespace) -> None:
    """
    Validate parsed arguments.

    Args:
        args: Parsed arguments namespace

    Raises:
        CLIError: If validation fails
    """
    if args.config:
        if not os.path.exists(args.config):
            raise CLIError(f"Configuration file does not exist: {args.config}")

        if not os.path.isfile(args.config):
            raise CLIError(f"Configuration path is not a file: {args.config}")

    if args.command == "resolve":
        if not os.path.exists(args.manifest):
            raise CLIError(f"Manifest does not exist: {args.manifest}")

        for entry in args.condition_sets or []:
            name, sep, conditions = entry.partition("=")
            if not sep or not name or not conditions:
                raise CLIError(f"Invalid condition set override: {entry}\nExpected NAME=COND,...")

    elif args.command == "workspaces":
        if not os.path.isdir(args.root):
            raise CLIError(f"Workspace root is not a directory: {args.root}")


def manifest_path(path: str) -> str:
    """Return the package.json path for a file or package directory."""
    if os.path.isdir(path):
        return os.path.join(path, ManifestFile.PACKAGE_JSON)
    return path


def build_config_from_args(args: argparse.Namespace) -> Dict[str, Any]:
    """
    Build configuration dictionary from command-line arguments.

    Args:
        args: Parsed arguments namespace

    Returns:
        Configuration dictionary for ConfigManager (CLI_ARGS level)
    """
    config: Dict[str, Any] = {}

    resolution: Dict[str, Any] = {}
    if getattr(args, "priority", None):
        resolution[ConfigKey.CONDITIONS] = list(args.priority)

    condition_sets = getattr(args, "condition_sets", None)
    if condition_sets:
        resolution[ConfigKey.CONDITION_SETS] = {}
        for entry in condition_sets:
            name, _, conditions = entry.partition("=")
            resolution[ConfigKey.CONDITION_SETS][name.strip()] = [
                c.strip() for c in conditions.split(",") if c.strip()
            ]

    if resolution:
        config[ConfigKey.RESOLUTION] = resolution

    logging_config: Dict[str, Any] = {}
    if args.debug:
        logging_config[ConfigKey.LOG_LEVEL] = "DEBUG"
    if args.log_file:
        logging_config[ConfigKey.LOG_FILE] = args.log_file

    if logging_config:
        config[ConfigKey.LOGGING] = logging_config

    return config


def load_config(args: argparse.Namespace) -> ConfigManager:
    """
    Build the layered configuration for this invocation.

    Args:
        args: Parsed arguments namespace

    Returns:
        ConfigManager with file, environment and CLI layers loaded

    Raises:
        ConfigError: If the file or the overrides are invalid
    """
    config = ConfigManager(args.config)
    args_config = build_config_from_args(args)
    if args_config:
        config.load_dict(args_config, ConfigSource.CLI_ARGS)
    return config


def setup_logging(config: ConfigManager) -> Logger:
    """
    Setup logging based on the effective configuration.

    Args:
        config: Configuration manager

    Returns:
        Logger for the CLI
    """
    section = f"{ConfigKey.ROOT}.{ConfigKey.LOGGING}"
    log_level = config.get(f"{section}.{ConfigKey.LOG_LEVEL}", "INFO")
    log_file = config.get(f"{section}.{ConfigKey.LOG_FILE}")

    logger = get_logger("exportmap.cli")
    configure_logging(log_level, log_file)

    if log_file:
        logger.debug(f"Logging to file: {log_file}")

    return logger


def run_resolve(args: argparse.Namespace, config: ConfigManager, logger: Logger) -> int:
    """
    Resolve the requested subpaths and print the report.

    Returns:
        EXIT_OK if every subpath resolved, EXIT_UNRESOLVED otherwise
    """
    path = manifest_path(args.manifest)
    package = PackageJson(path)
    table = package.export_table()

    if table is None:
        raise CLIError(f"Package {package.name} has no exports field: {path}")

    resolver = ExportsResolver(table, config.condition_config())

    with logger.add_context(package=package.name):
        results = resolver.resolve_all(args.subpaths)

    root = os.path.dirname(os.path.abspath(path))
    data: Dict[str, Any] = {}
    for subpath, target in results.items():
        if target is None:
            data[subpath] = None
            continue
        if args.absolute:
            target = join_with_root(root, target)
        data[subpath] = target_to_dict(target, args.condition_lists)

    print(render(data, args.format, template=RESOLVE_TEMPLATE))

    unresolved = [subpath for subpath, target in results.items() if target is None]
    if unresolved:
        logger.info("Some subpaths did not resolve", subpaths=",".join(unresolved))
        return EXIT_UNRESOLVED
    return EXIT_OK


def run_workspaces(args: argparse.Namespace, config: ConfigManager, logger: Logger) -> int:
    """List the workspaces under ``args.root``."""
    workspace = Workspace(args.root)
    items = [workspace_to_dict(item) for item in workspace.all_workspaces]
    logger.debug("Found workspaces", root=workspace.root, count=len(items))
    print(render(items, args.format, template=WORKSPACES_TEMPLATE))
    return EXIT_OK


COMMANDS = {
    "resolve": run_resolve,
    "workspaces": run_workspaces,
}


def main(argv: Optional[List[str]] = None) -> int:
    """
    Main CLI entry point.

    Args:
        argv: Argument list (defaults to sys.argv[1:])

    Returns:
        Process exit code
    """
    try:
        args = parse_arguments(argv)
        config = load_config(args)
        logger = setup_logging(config)

        return COMMANDS[args.command](args, config, logger)

    except CLIError as e:
        print(f"Error: {e}", file=sys.stderr)
        return EXIT_ERROR

    except (ConfigError, ManifestError, WorkspaceError, ValidationError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return EXIT_ERROR

    except KeyboardInterrupt:
        print("\nInterrupted by user", file=sys.stderr)
        return EXIT_INTERRUPTED

    except Exception as e:
        print(f"Unexpected error: {e}", file=sys.stderr)
        import traceback

        traceback.print_exc()
        return EXIT_ERROR


if __name__ == "__main__":
    sys.exit(main())
