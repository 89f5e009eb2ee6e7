"""
Godot XTask

Developer automation for a Godot game with a Rust GDExtension crate:
engine provisioning, cargo build and install, launching, and export.
"""

from .build import build_and_install, generate_gdextension_file
from .config import Settings, get_project_root
from .errors import XtaskError
from .export import ensure_export_presets, package_game
from .launch import ensure_project_file, run_godot
from .platforms import TargetPlatform
from .provision import setup_godot

__version__ = "0.1.0"

__all__ = [
    "Settings",
    "TargetPlatform",
    "XtaskError",
    "build_and_install",
    "ensure_export_presets",
    "ensure_project_file",
    "generate_gdextension_file",
    "get_project_root",
    "package_game",
    "run_godot",
    "setup_godot",
]
