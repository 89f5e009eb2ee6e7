"""
Shared pytest configuration and fixtures for godot-xtask tests.
"""

import io
import zipfile

import pytest
import sys
from pathlib import Path

# Add lib directory to Python path
REPO_ROOT = Path(__file__).parent.parent
LIB_ROOT = REPO_ROOT / "lib"
if str(LIB_ROOT) not in sys.path:
    sys.path.insert(0, str(LIB_ROOT))

from godot_xtask.config import Settings


def pytest_configure(config):
    """Configure pytest with custom markers."""
    config.addinivalue_line("markers", "e2e: End-to-end tests requiring cargo and network access")
    config.addinivalue_line("markers", "unit: Unit tests")
    config.addinivalue_line("markers", "integration: Integration tests")


def pytest_collection_modifyitems(config, items):
    """Skip e2e tests unless --run-e2e is given."""
    if not config.getoption("--run-e2e", default=False):
        skip_e2e = pytest.mark.skip(reason="E2E tests disabled (use --run-e2e to enable)")
        for item in items:
            if "e2e" in item.keywords:
                item.add_marker(skip_e2e)


def pytest_addoption(parser):
    """Add custom command line options."""
    parser.addoption(
        "--run-e2e",
        action="store_true",
        default=False,
        help="Run end-to-end tests that download Godot and invoke cargo"
    )


# ============================================================================
# Shared Fixtures
# ============================================================================

def make_zip(members):
    """
    Build an in-memory zip archive.

    Args:
        members: Mapping of archive path -> bytes content

    Returns:
        bytes: zip file content
    """
    buf = io.BytesIO()
    with zipfile.ZipFile(buf, "w") as archive:
        for name, content in members.items():
            archive.writestr(name, content)
    return buf.getvalue()


@pytest.fixture
def settings():
    """Default settings pointed at a fake release host."""
    return Settings(base_url="https://releases.example.test/godot")


@pytest.fixture
def project_root(tmp_path):
    """
    Create an empty project root (what a fresh checkout looks like to xtask).

    Returns:
        Path to the temporary project root
    """
    root = tmp_path / "project"
    root.mkdir()
    return root


@pytest.fixture
def provisioned_root(project_root, settings):
    """
    Project root with a fake Linux Godot executable already provisioned.

    Returns:
        Path to the temporary project root
    """
    bin_dir = project_root / ".godot_bin"
    bin_dir.mkdir()
    exe = bin_dir / f"Godot_v{settings.godot_version}_linux.x86_64"
    exe.write_bytes(b"#!/bin/sh\n")
    exe.chmod(0o755)
    return project_root


@pytest.fixture
def built_artifact(project_root):
    """
    Place a fake cargo debug artifact for the default 'game' crate on Linux.

    Returns:
        Path to the artifact under target/debug
    """
    artifact = project_root / "target" / "debug" / "libgame.so"
    artifact.parent.mkdir(parents=True)
    artifact.write_bytes(b"\x7fELF fake")
    return artifact


@pytest.fixture
def zip_factory():
    """Return the make_zip helper for building fake release archives."""
    return make_zip
