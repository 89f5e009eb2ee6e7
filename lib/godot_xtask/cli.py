#!/usr/bin/env python3
"""
Godot XTask - Command Line Interface

Usage:
    # Download Godot and the export templates
    xtask setup

    # Build the Rust crate and install it into game/
    xtask build [--release]

    # Build, then open the editor / run the game
    xtask editor
    xtask run

    # Release build + headless export to builds/<Platform>/
    xtask package
"""

import argparse
import logging
import sys
from pathlib import Path
from typing import List, Optional

from .build import build_and_install
from .config import Settings, get_project_root
from .errors import XtaskError
from .export import ensure_export_presets, package_game
from .launch import run_godot
from .platforms import TargetPlatform
from .provision import setup_godot

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="xtask",
        description="Provision Godot, build the Rust GDExtension and run or package the game",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # First time on a new machine
  xtask setup

  # Iterate in the editor
  xtask editor

  # Ship it
  xtask package
        """,
    )
    parser.add_argument(
        "-v", "--verbose",
        action="store_true",
        help="Enable verbose logging",
    )
    parser.add_argument(
        "--project-dir",
        type=Path,
        default=None,
        help="Project root (default: XTASK_PROJECT_DIR or current dir)",
    )

    subparsers = parser.add_subparsers(dest="command", required=True)
    subparsers.add_parser("setup", help="Download and setup Godot Engine and Templates")
    build = subparsers.add_parser("build", help="Build Rust crates and copy artifacts to game/bin")
    build.add_argument("--release", action="store_true", help="Build with the release profile")
    subparsers.add_parser("editor", help="Build and open the Godot Editor")
    subparsers.add_parser("run", help="Build and run the game")
    subparsers.add_parser("package", help="Build and package the game for distribution")
    return parser


def dispatch(
    command: str,
    root: Path,
    settings: Settings,
    target: TargetPlatform,
    release: bool = False,
) -> None:
    """Run one subcommand. Any XtaskError propagates to the caller."""
    if command == "setup":
        setup_godot(root, settings, target)
    elif command == "build":
        build_and_install(root, settings, target, release)
    elif command == "editor":
        build_and_install(root, settings, target, False)
        run_godot(root, settings, target, editor=True)
    elif command == "run":
        build_and_install(root, settings, target, False)
        run_godot(root, settings, target, editor=False)
    elif command == "package":
        build_and_install(root, settings, target, True)
        ensure_export_presets(settings.game_dir(root), target)
        package_game(root, settings, target)
    else:
        raise ValueError(f"Unknown command: {command}")


def main(argv: Optional[List[str]] = None) -> int:
    """CLI Entry point"""
    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        format="[%(levelname)s] %(message)s",
        level=logging.DEBUG if args.verbose else logging.INFO,
    )

    root = args.project_dir if args.project_dir else get_project_root()
    settings = Settings.from_env()
    target = TargetPlatform.current()
    logger.debug(f"Project root: {root}, platform: {target.value}, Godot {settings.godot_version}")

    try:
        dispatch(args.command, root, settings, target, getattr(args, "release", False))
    except XtaskError as e:
        logger.error(str(e))
        return 1
    except OSError as e:
        logger.error(f"Filesystem error during '{args.command}': {e}")
        return 1
    except KeyboardInterrupt:
        logger.error("Interrupted")
        return 130
    return 0


if __name__ == "__main__":
    sys.exit(main())
