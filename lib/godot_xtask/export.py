#!/usr/bin/env python3
"""
Godot XTask - Packaging

Exports a release build of the game for the host platform with Godot's
headless exporter. Output lands in builds/<Platform Name>/.
"""

import logging
import subprocess
from pathlib import Path
from typing import List

from .config import Settings
from .errors import ExportError, LaunchError
from .launch import require_engine
from .platforms import TargetPlatform, export_target

logger = logging.getLogger(__name__)

EXPORT_PRESETS_TEMPLATE = """
[preset.0]

name="{platform_name}"
platform="{platform_name}"
runnable=true
custom_features=""
export_filter="all_resources"
include_filter=""
exclude_filter=""
export_path="../builds/{platform_name}/game"
patch_list=PackedStringArray()
"""


def ensure_export_presets(game_dir: Path, target: TargetPlatform) -> bool:
    """
    Generate export_presets.cfg with a single preset for the host platform.

    Skipped when the file exists so presets edited in the editor survive.

    Returns:
        True if the file was created
    """
    presets_path = game_dir / "export_presets.cfg"
    if presets_path.exists():
        return False

    logger.info("Generating export_presets.cfg...")
    platform_name = export_target(target).name
    content = EXPORT_PRESETS_TEMPLATE.format(platform_name=platform_name).strip()
    game_dir.mkdir(parents=True, exist_ok=True)
    presets_path.write_text(content, encoding="utf-8")
    return True


def export_command(godot_exe: Path, platform_name: str, output_path: Path) -> List[str]:
    return [
        str(godot_exe),
        "--headless",
        "--verbose",
        "--audio-driver", "Dummy",
        "--display-driver", "headless",
        "--export-release", platform_name,
        str(output_path),
    ]


def package_game(root: Path, settings: Settings, target: TargetPlatform) -> Path:
    """
    Run the headless exporter.

    Args:
        root: Project root directory
        settings: Tool settings
        target: Host platform

    Returns:
        Path of the exported build

    Raises:
        EngineNotFoundError: setup has not been run
        LaunchError: Godot could not be started
        ExportError: Exporter exited non-zero
    """
    godot_exe = require_engine(root, settings, target)
    game_dir = settings.game_dir(root)

    platform_name, output_ext = export_target(target)
    output_path = settings.builds_dir(root) / platform_name / f"game{output_ext}"
    output_path.parent.mkdir(parents=True, exist_ok=True)

    logger.info(f"Exporting project for {platform_name}...")

    godot_abs = godot_exe.resolve(strict=True)
    game_abs = game_dir.resolve(strict=True)
    # output file does not exist yet, resolve only its directory
    output_abs = output_path.parent.resolve() / output_path.name

    cmd = export_command(godot_abs, platform_name, output_abs)
    logger.debug(f"Running: {' '.join(cmd)}")
    try:
        result = subprocess.run(cmd, cwd=game_abs)
    except OSError as e:
        raise LaunchError(f"Failed to launch Godot exporter: {e}") from e

    if result.returncode != 0:
        raise ExportError(f"Godot export failed (exit code {result.returncode}).")

    logger.info(
        f"Export complete! Find it at: {settings.builds_dir_name}/{platform_name}/"
    )
    return output_abs
