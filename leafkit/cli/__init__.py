"""
leafkit command-line interface.

    leafkit list
    leafkit add ETHUserLeaf [--skip-deps] [--skip-requirements] [--yes] [--strict]
    leafkit remove ETHUserLeaf [--yes]
    leafkit update [ETHUserLeaf] [--yes]
    leafkit outdated
    leafkit check ETHUserLeaf
"""
from __future__ import annotations

import argparse
import logging
import os
import sys
from typing import Sequence

from leafkit import __version__
from leafkit.core.errors import LeafSystemError
from leafkit.core.logging import clearLogContext, configureLogging, setLogContext
from leafkit.leafs.system import LeafSystem
from .commands import (
    addCommand,
    checkCommand,
    listCommand,
    outdatedCommand,
    removeCommand,
    updateCommand,
)
from .prompts import Confirm, stdinConfirm

logger = logging.getLogger(__name__)

__all__ = ["buildParser", "main"]



def buildParser() -> argparse.ArgumentParser:
    common = argparse.ArgumentParser(add_help=False)
    common.add_argument("--project", default=os.getcwd(), help="Project root (default: current directory)")
    common.add_argument("--catalog", default=None, help="Leaf catalog directory")
    common.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")

    parser = argparse.ArgumentParser(prog="leafkit", description="Manage leafs in a project")
    parser.add_argument("--version", action="version", version=f"leafkit {__version__}")
    subparsers = parser.add_subparsers(dest="command", required=True)

    listParser = subparsers.add_parser("list", parents=[common], help="List available leafs")
    listParser.set_defaults(func=listCommand)

    addParser = subparsers.add_parser("add", parents=[common], help="Install a leaf and its dependencies")
    addParser.add_argument("name")
    addParser.add_argument("--skip-deps", action="store_true", help="Do not install missing dependencies")
    addParser.add_argument("--skip-requirements", action="store_true", help="Do not check requirements")
    addParser.add_argument("--strict", action="store_true", help="Refuse to install when dependencies form a cycle")
    addParser.add_argument("-y", "--yes", action="store_true", help="Answer yes to every question")
    addParser.set_defaults(func=addCommand)

    removeParser = subparsers.add_parser("remove", parents=[common], help="Delete an installed leaf")
    removeParser.add_argument("name")
    removeParser.add_argument("-y", "--yes", action="store_true", help="Do not ask for confirmation")
    removeParser.set_defaults(func=removeCommand)

    updateParser = subparsers.add_parser("update", parents=[common], help="Re-copy installed leafs from the catalog")
    updateParser.add_argument("name", nargs="?", default=None)
    updateParser.add_argument("-y", "--yes", action="store_true", help="Do not ask for confirmation")
    updateParser.set_defaults(func=updateCommand)

    outdatedParser = subparsers.add_parser("outdated", parents=[common], help="Show installed leafs with newer catalog versions")
    outdatedParser.set_defaults(func=outdatedCommand)

    checkParser = subparsers.add_parser("check", parents=[common], help="Check a leaf's requirements against the project")
    checkParser.add_argument("name")
    checkParser.set_defaults(func=checkCommand)

    return parser



def main(argv: Sequence[str] | None = None, *, confirm: Confirm = stdinConfirm) -> int:
    args = buildParser().parse_args(argv)
    configureLogging(logging.DEBUG if args.verbose else None)

    setLogContext(command=args.command, projectRoot=str(args.project))
    try:
        system = LeafSystem(args.catalog)
        return int(args.func(args, system, confirm))
    except LeafSystemError as err:
        logger.debug("Command '%s' failed", args.command, exc_info=True)
        print(f"Error: {err}", file=sys.stderr)
        return 1
    finally:
        clearLogContext()
