"""
Godot XTask - Error Types

Every fatal condition raised by the tool derives from XtaskError.
The CLI entry point is the only place these are caught.
"""


class XtaskError(Exception):
    """Base class for all fatal xtask errors."""


class NetworkError(XtaskError):
    """Download failed (transport error or HTTP error status)."""


class ArchiveError(XtaskError):
    """Downloaded archive is corrupt or lacks an expected member."""


class BuildError(XtaskError):
    """Cargo build failed or produced no artifact."""


class EngineNotFoundError(XtaskError):
    """Provisioned Godot executable is missing."""


class LaunchError(XtaskError):
    """Godot process could not be spawned."""


class ExportError(XtaskError):
    """Godot headless export returned a non-zero exit status."""
