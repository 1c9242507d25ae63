#!/usr/bin/env python3
"""
CLI script for running the glossary translator from a source checkout.

Usage:
    python run_translator.py translate
    python run_translator.py resume output/iso24765-translated-terminology.backup-100.json
    python run_translator.py validate

Author: Leonardo Pacciani-Mori
License: MIT
"""

import sys
from pathlib import Path

# Allow running without package installation
_script_dir = Path(__file__).parent
_project_root = _script_dir.parent
_src_dir = _project_root / "src"
if _src_dir.exists() and str(_src_dir) not in sys.path:
    sys.path.insert(0, str(_src_dir))

from iso24765_translator.cli import main


if __name__ == "__main__":
    sys.exit(main())
