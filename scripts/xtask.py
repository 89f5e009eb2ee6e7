#!/usr/bin/env python3
"""
Run xtask from a checkout without installing it.

Usage:
    python scripts/xtask.py setup
    python scripts/xtask.py build --release
"""

import sys
from pathlib import Path

# Add lib directory to Python path
lib_path = Path(__file__).parent.parent / "lib"
sys.path.insert(0, str(lib_path))
from godot_xtask.cli import main

if __name__ == "__main__":
    sys.exit(main())
