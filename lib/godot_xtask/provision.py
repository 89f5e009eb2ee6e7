#!/usr/bin/env python3
"""
Godot XTask - Engine Provisioning

Downloads the Godot editor and its export templates from the release host
and installs them:

- editor into <root>/.godot_bin (extracted as-is)
- templates into the OS standard export_templates/<version_full> directory
"""

import io
import logging
import os
import shutil
import subprocess
import zipfile
from pathlib import Path

import requests

from .config import Settings
from .errors import ArchiveError, NetworkError
from .platforms import TargetPlatform, engine_download, templates_dir

logger = logging.getLogger(__name__)

TEMPLATES_FOLDER = "templates"
SCRATCH_DIR_NAME = "tmp_templates"


def download(url: str) -> bytes:
    """
    Fetch a release archive into memory.

    No timeout is set: editor and template archives run to hundreds of MB.

    Raises:
        NetworkError: On transport failure or an HTTP error status
    """
    logger.debug(f"GET {url}")
    try:
        response = requests.get(url, timeout=None)
        response.raise_for_status()
    except requests.RequestException as e:
        raise NetworkError(f"Download failed for {url}: {e}") from e
    return response.content


def extract_zip(data: bytes, dest: Path) -> None:
    """Extract an in-memory zip archive into dest."""
    try:
        with zipfile.ZipFile(io.BytesIO(data)) as archive:
            archive.extractall(dest)
    except zipfile.BadZipFile as e:
        raise ArchiveError(f"Invalid archive, could not extract to {dest}: {e}") from e


def _clear_quarantine(app_bundle: Path) -> None:
    # Result deliberately ignored: an untagged bundle or missing xattr is not an error.
    try:
        subprocess.run(
            ["xattr", "-d", "com.apple.quarantine", str(app_bundle)],
            stdout=subprocess.DEVNULL,
            stderr=subprocess.DEVNULL,
        )
    except OSError:
        pass


def install_editor(root: Path, settings: Settings, target: TargetPlatform) -> Path:
    """
    Download and unpack the Godot editor for the target platform.

    Args:
        root: Project root directory
        settings: Tool settings
        target: Host platform

    Returns:
        Path to the extracted executable

    Raises:
        NetworkError: Download failed
        ArchiveError: Executable missing after extraction
    """
    spec = engine_download(target, settings)
    bin_dir = settings.bin_dir(root)
    binary_path = bin_dir / spec.executable

    if binary_path.exists():
        logger.info(f"Godot already installed at {binary_path}")
        return binary_path

    bin_dir.mkdir(parents=True, exist_ok=True)

    url = settings.release_url(f"Godot_v{settings.godot_version}_{spec.archive_suffix}")
    logger.info(f"Downloading Godot from: {url}")
    data = download(url)

    logger.info("Extracting...")
    extract_zip(data, bin_dir)

    if not binary_path.exists():
        raise ArchiveError(f"Extracted binary not found at {binary_path}")

    if target.is_posix:
        os.chmod(binary_path, 0o755)
        logger.info(f"Fixed permissions for: {binary_path}")

    if target is TargetPlatform.MACOS:
        _clear_quarantine(bin_dir / "Godot.app")

    logger.info(f"Godot Setup Complete at {bin_dir}")
    return binary_path


def install_templates(root: Path, settings: Settings, target: TargetPlatform) -> Path:
    """
    Install export templates unless this version's directory already exists.

    The archive is unpacked into a scratch folder under the engine cache,
    then its templates/ folder is renamed into place. A failed rename
    (e.g. cache and templates dir on different devices) falls back to a copy.

    Returns:
        Path to the installed version directory
    """
    template_root = templates_dir(target)
    version_dir = template_root / settings.godot_version_full

    if version_dir.exists():
        logger.info(f"Templates already installed at {version_dir}")
        if not (version_dir / "version.txt").exists():
            logger.warning(
                f"{version_dir} has no version.txt; delete it and rerun setup "
                "if exports fail"
            )
        return version_dir

    url = settings.release_url(f"Godot_v{settings.godot_version}_export_templates.tpz")
    logger.info(f"Downloading Export Templates from: {url}")
    data = download(url)

    logger.info("Extracting templates...")
    tmp_extract = settings.bin_dir(root) / SCRATCH_DIR_NAME
    if tmp_extract.exists():
        shutil.rmtree(tmp_extract)

    try:
        extract_zip(data, tmp_extract)

        extracted_folder = tmp_extract / TEMPLATES_FOLDER
        if not extracted_folder.is_dir():
            raise ArchiveError(f"Expected '{TEMPLATES_FOLDER}' folder in .tpz archive")

        template_root.mkdir(parents=True, exist_ok=True)
        try:
            os.rename(extracted_folder, version_dir)
        except OSError as e:
            logger.debug(f"Rename failed ({e}), copying instead")
            shutil.copytree(extracted_folder, version_dir, dirs_exist_ok=True)
    finally:
        shutil.rmtree(tmp_extract, ignore_errors=True)

    logger.info(f"Export Templates installed to {version_dir}")
    return version_dir


def setup_godot(root: Path, settings: Settings, target: TargetPlatform) -> None:
    """Provision the editor, then the export templates."""
    install_editor(root, settings, target)
    logger.info("Checking Export Templates...")
    install_templates(root, settings, target)
