#!/usr/bin/env python3
"""
Godot XTask - Build & Install

Compiles the GDExtension crate with cargo, copies the shared library into
game/bin/<crate>/<os>/ and regenerates the .gdextension descriptor.
"""

import logging
import shutil
import subprocess
from pathlib import Path

from .config import Settings
from .errors import BuildError
from .platforms import TargetPlatform, artifact_spec

logger = logging.getLogger(__name__)

GDEXTENSION_TEMPLATE = """
[configuration]
entry_symbol = "gdext_rust_init"
compatibility_minimum = "4.1"

[libraries]
linux.debug.x86_64 = "res://bin/{crate}/linux/lib{crate}.so"
linux.release.x86_64 = "res://bin/{crate}/linux/lib{crate}.so"
macos.debug.arm64 = "res://bin/{crate}/macos/arm64/lib{crate}.dylib"
macos.release.arm64 = "res://bin/{crate}/macos/arm64/lib{crate}.dylib"
windows.debug.x86_64 = "res://bin/{crate}/windows/{crate}.dll"
windows.release.x86_64 = "res://bin/{crate}/windows/{crate}.dll"
"""


def cargo_build(root: Path, release: bool = False) -> None:
    """
    Run cargo build in the project root, streaming its output.

    Raises:
        BuildError: cargo missing or exited non-zero
    """
    cmd = ["cargo", "build"]
    if release:
        cmd.append("--release")

    logger.info("Building Rust crates...")
    logger.debug(f"Running: {' '.join(cmd)}")
    try:
        result = subprocess.run(cmd, cwd=root)
    except OSError as e:
        raise BuildError(
            f"Cargo build failed: could not run cargo ({e}). "
            "Is the Rust toolchain installed and on PATH?"
        ) from e

    if result.returncode != 0:
        raise BuildError(f"Cargo build failed (exit code {result.returncode})")


def generate_gdextension_file(game_dir: Path, crate_name: str) -> Path:
    """
    Write <crate>.gdextension, replacing any previous version.

    The library table lists every supported platform no matter which host
    ran the build.
    """
    gdext_path = game_dir / f"{crate_name}.gdextension"
    content = GDEXTENSION_TEMPLATE.format(crate=crate_name).strip()
    gdext_path.write_bytes(content.encode("utf-8"))
    logger.info(f"Generated .gdextension file at: {gdext_path}")
    return gdext_path


def install_artifact(
    root: Path, settings: Settings, target: TargetPlatform, release: bool = False
) -> Path:
    """
    Copy the compiled library from cargo's target dir into the Godot project.

    Args:
        root: Project root directory
        settings: Tool settings
        target: Platform the library was built for
        release: Whether the release profile was built

    Returns:
        Destination path of the copied library

    Raises:
        BuildError: Artifact not found where cargo should have put it
    """
    profile = "release" if release else "debug"
    spec = artifact_spec(target, settings.crate_name)

    src = root / "target" / profile / spec.file_name
    output_dir = settings.game_dir(root) / "bin" / settings.crate_name / spec.subdir
    dst = output_dir / spec.file_name

    if not src.exists():
        raise BuildError(f"Failed to find artifact: {src}")

    output_dir.mkdir(parents=True, exist_ok=True)
    shutil.copyfile(src, dst)
    logger.info(f"Copied artifact to {dst}")
    return dst


def build_and_install(
    root: Path, settings: Settings, target: TargetPlatform, release: bool = False
) -> None:
    """
    Compile the crate and wire the library into the Godot project.

    Args:
        root: Project root directory (holds Cargo.toml)
        settings: Tool settings
        target: Host platform
        release: Build the release profile instead of debug

    Raises:
        BuildError: cargo failed or produced no artifact
    """
    cargo_build(root, release)
    install_artifact(root, settings, target, release)
    generate_gdextension_file(settings.game_dir(root), settings.crate_name)
