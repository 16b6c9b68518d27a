"""
Shared test constants.

This module provides constants that are used across multiple test files.
"""

from pathlib import Path

# Repository root (contains src/, config/)
REPO_ROOT = Path(__file__).parent.parent

# Ruleset bundled with the package
REPO_RULES_DIR = REPO_ROOT / "src" / "sheetgen" / "data" / "rules"
