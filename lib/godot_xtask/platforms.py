#!/usr/bin/env python3
"""
Godot XTask - Platform Resolution

Maps the host operating system to the file names, paths and export presets
used by every subcommand. The host is detected once (TargetPlatform.current)
and passed around as a value, so each table can be checked for all three
platforms from a single machine.
"""

import os
import platform
from enum import Enum
from pathlib import Path
from typing import Mapping, NamedTuple, Optional

from .config import Settings


class TargetPlatform(Enum):
    WINDOWS = "windows"
    MACOS = "macos"
    LINUX = "linux"

    @classmethod
    def current(cls, system: Optional[str] = None) -> "TargetPlatform":
        """
        Resolve the host platform.

        Args:
            system: Value of platform.system() (detected when omitted)

        Returns:
            WINDOWS or MACOS for those hosts, LINUX for anything else
        """
        if system is None:
            system = platform.system()
        if system == "Windows":
            return cls.WINDOWS
        if system == "Darwin":
            return cls.MACOS
        return cls.LINUX

    @property
    def is_posix(self) -> bool:
        return self is not TargetPlatform.WINDOWS


class EngineDownload(NamedTuple):
    archive_suffix: str
    executable: str  # relative to the engine cache directory


class ExportTarget(NamedTuple):
    name: str
    extension: str


class ArtifactSpec(NamedTuple):
    file_name: str
    subdir: Path  # relative to game/bin/<crate>/


def engine_download(target: TargetPlatform, settings: Settings) -> EngineDownload:
    """Archive suffix and in-archive executable path for the editor."""
    version = settings.godot_version
    if target is TargetPlatform.WINDOWS:
        return EngineDownload("win64.exe.zip", f"Godot_v{version}_win64.exe")
    if target is TargetPlatform.MACOS:
        return EngineDownload("macos.universal.zip", "Godot.app/Contents/MacOS/Godot")
    return EngineDownload("linux.x86_64.zip", f"Godot_v{version}_linux.x86_64")


def export_target(target: TargetPlatform) -> ExportTarget:
    """Export preset name and output file extension."""
    if target is TargetPlatform.WINDOWS:
        return ExportTarget("Windows Desktop", ".exe")
    if target is TargetPlatform.MACOS:
        return ExportTarget("macOS", ".zip")
    return ExportTarget("Linux", "")


def artifact_spec(target: TargetPlatform, crate_name: str) -> ArtifactSpec:
    """
    Shared library produced by cargo for this platform and where it goes.

    Args:
        target: Platform being built
        crate_name: Name of the GDExtension crate

    Returns:
        ArtifactSpec with the library file name and its destination subdir
    """
    if target is TargetPlatform.WINDOWS:
        return ArtifactSpec(f"{crate_name}.dll", Path("windows"))
    if target is TargetPlatform.MACOS:
        return ArtifactSpec(f"lib{crate_name}.dylib", Path("macos") / "arm64")
    return ArtifactSpec(f"lib{crate_name}.so", Path("linux"))


def templates_dir(
    target: TargetPlatform,
    env: Optional[Mapping[str, str]] = None,
    home: Optional[Path] = None,
) -> Path:
    """
    Godot's standard export template directory.

    Linux: $XDG_DATA_HOME/godot/export_templates (~/.local/share fallback)
    macOS: ~/Library/Application Support/Godot/export_templates
    Windows: %APPDATA%/Godot/export_templates (~/AppData/Roaming fallback)
    """
    if env is None:
        env = os.environ
    if home is None:
        home = Path.home()

    if target is TargetPlatform.MACOS:
        return home / "Library" / "Application Support" / "Godot" / "export_templates"
    if target is TargetPlatform.WINDOWS:
        appdata = env.get("APPDATA")
        base = Path(appdata) if appdata else home / "AppData" / "Roaming"
        return base / "Godot" / "export_templates"

    xdg = env.get("XDG_DATA_HOME")
    base = Path(xdg) if xdg else home / ".local" / "share"
    return base / "godot" / "export_templates"


def engine_executable(root: Path, settings: Settings, target: TargetPlatform) -> Path:
    """Path of the provisioned Godot executable under the project root."""
    return settings.bin_dir(root) / engine_download(target, settings).executable
