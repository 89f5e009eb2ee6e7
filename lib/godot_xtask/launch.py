#!/usr/bin/env python3
"""
Godot XTask - Editor / Game Launcher

Starts the provisioned Godot executable against the embedded game/ project,
either in the editor (-e) or running the game directly.
"""

import logging
import subprocess
from pathlib import Path

from .config import Settings
from .errors import EngineNotFoundError, LaunchError
from .platforms import TargetPlatform, engine_executable

logger = logging.getLogger(__name__)

PROJECT_FILE_TEMPLATE = """; Engine configuration file.
config_version=5

[application]
config/name="{name}"
config/features=PackedStringArray("4.6", "Forward Plus")
config/icon="res://icon.svg"

[dotnet]
project/assembly_name="{name}"
"""


def require_engine(root: Path, settings: Settings, target: TargetPlatform) -> Path:
    """
    Return the provisioned executable path.

    Raises:
        EngineNotFoundError: setup has not been run
    """
    godot_exe = engine_executable(root, settings, target)
    if not godot_exe.exists():
        raise EngineNotFoundError(
            f"Godot executable not found at {godot_exe}. Run 'xtask setup' first."
        )
    return godot_exe


def ensure_project_file(game_dir: Path, project_name: str) -> bool:
    """
    Write a minimal project.godot if the project has none.

    Without it Godot opens the Project Manager instead of the project.
    An existing file is never touched.

    Returns:
        True if the file was created
    """
    project_file = game_dir / "project.godot"
    if project_file.exists():
        return False

    logger.info("project.godot missing. Creating minimal project...")
    project_file.write_text(PROJECT_FILE_TEMPLATE.format(name=project_name), encoding="utf-8")
    return True


def run_godot(
    root: Path, settings: Settings, target: TargetPlatform, editor: bool = False
) -> None:
    """
    Launch Godot on the game/ project and wait for it to exit.

    The engine's exit status is not checked; only a failure to start it is
    an error.
    """
    godot_exe = require_engine(root, settings, target)

    game_dir = settings.game_dir(root)
    game_dir.mkdir(parents=True, exist_ok=True)
    ensure_project_file(game_dir, settings.project_name)

    # Godot resolves --path against its own cwd, so hand it absolute paths
    godot_exe_abs = godot_exe.resolve(strict=True)
    game_dir_abs = game_dir.resolve(strict=True)

    cmd = [str(godot_exe_abs)]
    if editor:
        cmd.append("-e")
    cmd.extend(["--path", str(game_dir_abs)])

    logger.info("Launching Godot...")
    logger.debug(f"Running: {' '.join(cmd)}")
    try:
        subprocess.run(cmd, cwd=game_dir_abs)
    except OSError as e:
        raise LaunchError(f"Failed to launch Godot process: {e}") from e
