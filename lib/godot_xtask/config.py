#!/usr/bin/env python3
"""
Godot XTask - Settings and Root Resolution

Process-wide configuration (engine version, download host, crate and
directory names) resolved once at startup. Every value has a default and
most can be overridden through XTASK_* environment variables, which is
how tests point the tool at a mock release host.
"""

import os
from dataclasses import dataclass, replace
from pathlib import Path
from typing import Mapping, Optional

DEFAULT_GODOT_VERSION = "4.6-stable"
DEFAULT_GODOT_VERSION_FULL = "4.6.0-stable"
DEFAULT_BASE_URL = "https://github.com/godotengine/godot/releases/download"

PROJECT_DIR_ENV = "XTASK_PROJECT_DIR"

# env var -> Settings field
ENV_OVERRIDES = {
    "XTASK_GODOT_VERSION": "godot_version",
    "XTASK_GODOT_VERSION_FULL": "godot_version_full",
    "XTASK_BASE_URL": "base_url",
    "XTASK_CRATE_NAME": "crate_name",
    "XTASK_PROJECT_NAME": "project_name",
}


@dataclass(frozen=True)
class Settings:
    """Static configuration threaded through every subcommand."""

    godot_version: str = DEFAULT_GODOT_VERSION
    godot_version_full: str = DEFAULT_GODOT_VERSION_FULL
    base_url: str = DEFAULT_BASE_URL
    crate_name: str = "game"
    project_name: str = "My Rust Game"
    bin_dir_name: str = ".godot_bin"
    game_dir_name: str = "game"
    builds_dir_name: str = "builds"

    @classmethod
    def from_env(cls, env: Optional[Mapping[str, str]] = None) -> "Settings":
        """
        Build settings from defaults plus XTASK_* environment overrides.

        Args:
            env: Environment mapping (defaults to os.environ)

        Returns:
            Settings instance
        """
        if env is None:
            env = os.environ

        overrides = {}
        for var, field_name in ENV_OVERRIDES.items():
            value = env.get(var)
            if value:
                overrides[field_name] = value

        settings = replace(cls(), **overrides)
        return replace(settings, base_url=settings.base_url.rstrip("/"))

    def bin_dir(self, root: Path) -> Path:
        return root / self.bin_dir_name

    def game_dir(self, root: Path) -> Path:
        return root / self.game_dir_name

    def builds_dir(self, root: Path) -> Path:
        return root / self.builds_dir_name

    def release_url(self, file_name: str) -> str:
        """URL of a file attached to the configured Godot release."""
        return f"{self.base_url}/{self.godot_version}/{file_name}"


def get_project_root(env: Optional[Mapping[str, str]] = None) -> Path:
    """
    Get project root from XTASK_PROJECT_DIR or current working directory.

    Returns:
        Path to project root directory
    """
    if env is None:
        env = os.environ
    if env.get(PROJECT_DIR_ENV):
        return Path(env[PROJECT_DIR_ENV])
    return Path.cwd()
