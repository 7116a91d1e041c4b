"""
fskit CLI argument parser.

This module implements the command-line interface for fskit using argparse.
"""

import argparse
import logging
import sys
from pathlib import Path
from typing import List, Optional

from fskit.core.exceptions import FskitError
from fskit.core.walker import SymlinkPolicy

# Get version from package
try:
    from importlib.metadata import version

    __version__ = version("fskit")
except Exception:
    from fskit import __version__

logger = logging.getLogger(__name__)


class CLI:
    """fskit command-line interface."""

    def __init__(self):
        """Initialize CLI with argument parser."""
        self.parser = self._create_parser()

    def _create_parser(self) -> argparse.ArgumentParser:
        """
        Create argument parser with all subcommands.

        Returns:
            Configured ArgumentParser instance
        """
        parser = argparse.ArgumentParser(
            prog="fskit",
            description="fskit - filesystem path, size and hashing utilities",
            epilog='Use "fskit COMMAND --help" for command-specific help',
            formatter_class=argparse.RawDescriptionHelpFormatter,
        )

        # Global options
        parser.add_argument(
            "--version", action="version", version=f"fskit {__version__}"
        )
        parser.add_argument(
            "--verbose", "-v", action="store_true", help="Enable verbose output"
        )
        parser.add_argument(
            "--quiet",
            "-q",
            action="store_true",
            help="Enable minimal output (errors only)",
        )
        parser.add_argument(
            "--config",
            type=Path,
            metavar="PATH",
            help="Path to configuration file (default: ./fskit.yaml)",
        )

        # Subcommands
        subparsers = parser.add_subparsers(
            dest="command", help="Available commands", metavar="COMMAND"
        )

        self._add_resolve_command(subparsers)
        self._add_realpath_command(subparsers)
        self._add_size_command(subparsers)
        self._add_hash_command(subparsers)
        self._add_stat_command(subparsers)
        self._add_which_command(subparsers)
        self._add_chmod_command(subparsers)

        return parser

    def _add_resolve_command(self, subparsers):
        """Add 'resolve' subcommand."""
        parser = subparsers.add_parser(
            "resolve",
            help="Resolve a path against a base directory",
            description="Lexically resolve INPUT against BASE without touching the filesystem",
        )
        parser.add_argument("base", metavar="BASE", help="Base directory")
        parser.add_argument("input", metavar="INPUT", help="Path to resolve")
        parser.add_argument(
            "--style",
            choices=["posix", "windows"],
            metavar="STYLE",
            help="Path style (posix|windows) [default: current platform]",
        )

    def _add_realpath_command(self, subparsers):
        """Add 'realpath' subcommand."""
        parser = subparsers.add_parser(
            "realpath",
            help="Print the canonical path of an existing entry",
            description="Canonicalize PATH, following symbolic links",
        )
        parser.add_argument("path", metavar="PATH", help="Existing path")

    def _add_size_command(self, subparsers):
        """Add 'size' subcommand."""
        parser = subparsers.add_parser(
            "size",
            help="Print the total size of a directory tree",
            description="Sum the sizes of all regular files under PATH",
        )
        parser.add_argument("path", metavar="PATH", help="Directory to measure")
        parser.add_argument(
            "--symlinks",
            choices=[policy.value for policy in SymlinkPolicy],
            metavar="POLICY",
            help="Symbolic link handling (skip|follow_once) "
            "[default: skip, or size.symlinks from config]",
        )
        parser.add_argument(
            "--human",
            action="store_true",
            help="Print size in human-readable units",
        )

    def _add_hash_command(self, subparsers):
        """Add 'hash' subcommand."""
        parser = subparsers.add_parser(
            "hash",
            help="Print content hashes of files",
            description="Compute content hashes of one or more files",
        )
        parser.add_argument(
            "paths", nargs="+", metavar="PATH", help="Files to hash"
        )
        parser.add_argument(
            "--algorithm",
            metavar="NAME",
            help="Hash algorithm (default: sha256, or hash.algorithm from config)",
        )

    def _add_stat_command(self, subparsers):
        """Add 'stat' subcommand."""
        parser = subparsers.add_parser(
            "stat",
            help="Print metadata of a filesystem entry",
            description="Show type, size and permission bits of PATH",
        )
        parser.add_argument("path", metavar="PATH", help="Existing path")
        parser.add_argument(
            "--json", action="store_true", help="Print metadata as JSON"
        )

    def _add_which_command(self, subparsers):
        """Add 'which' subcommand."""
        parser = subparsers.add_parser(
            "which",
            help="Locate a command on PATH",
            description="Print the first match for COMMAND on PATH",
        )
        parser.add_argument("name", metavar="COMMAND", help="Command name")

    def _add_chmod_command(self, subparsers):
        """Add 'chmod' subcommand."""
        parser = subparsers.add_parser(
            "chmod",
            help="Change permissions of a file",
            description="Apply an octal permission MODE (e.g. 755) to PATH",
        )
        parser.add_argument("mode", metavar="MODE", help="Octal permission string")
        parser.add_argument("path", metavar="PATH", help="Target path")

    def parse_args(self, args: Optional[List[str]] = None):
        """
        Parse command-line arguments.

        Args:
            args: Arguments to parse (uses sys.argv if None)

        Returns:
            Parsed arguments namespace
        """
        return self.parser.parse_args(args)

    def run(self, args: Optional[List[str]] = None) -> int:
        """
        Run CLI with given arguments.

        Args:
            args: Arguments to parse (uses sys.argv if None)

        Returns:
            Exit code (0 for success, non-zero for error)
        """
        parsed_args = self.parse_args(args)

        # Configure logging
        self._configure_logging(parsed_args)

        # Check if command specified
        if not parsed_args.command:
            self.parser.print_help()
            return 1

        # Dispatch to command handler
        try:
            return self._dispatch_command(parsed_args)
        except KeyboardInterrupt:
            logger.info("Operation cancelled by user")
            return 130  # Standard exit code for SIGINT
        except FskitError as e:
            logger.error(f"Error: {e}")
            return 1
        except Exception as e:
            logger.error(f"Error: {e}")
            if parsed_args.verbose:
                import traceback

                traceback.print_exc()
            return 1

    def _configure_logging(self, args):
        """
        Configure logging based on verbose/quiet flags.

        Args:
            args: Parsed arguments with verbose/quiet flags
        """
        if args.verbose:
            level = logging.DEBUG
            format_str = "%(levelname)s [%(name)s] %(message)s"
        elif args.quiet:
            level = logging.ERROR
            format_str = "%(levelname)s: %(message)s"
        else:
            level = logging.INFO
            format_str = "%(message)s"

        logging.basicConfig(
            level=level,
            format=format_str,
            force=True,  # Reconfigure if already configured
        )

    def _dispatch_command(self, args) -> int:
        """
        Dispatch to appropriate command handler.

        Args:
            args: Parsed arguments with command field

        Returns:
            Exit code from command handler
        """
        command_map = {
            "resolve": "fskit.cli.commands.resolve",
            "realpath": "fskit.cli.commands.realpath",
            "size": "fskit.cli.commands.size",
            "hash": "fskit.cli.commands.hash",
            "stat": "fskit.cli.commands.stat",
            "which": "fskit.cli.commands.which",
            "chmod": "fskit.cli.commands.chmod",
        }

        module_name = command_map.get(args.command)
        if not module_name:
            logger.error(f"Unknown command: {args.command}")
            return 1

        try:
            # Dynamic import of command module
            import importlib

            module = importlib.import_module(module_name)

            if not hasattr(module, "run"):
                logger.error(f"Command module {module_name} has no run() function")
                return 1

            return module.run(args)

        except ImportError as e:
            logger.error(f"Failed to load command module: {e}")
            if args.verbose:
                import traceback

                traceback.print_exc()
            return 1


def main():
    """Main entry point for CLI."""
    cli = CLI()
    sys.exit(cli.run())


if __name__ == "__main__":
    main()
