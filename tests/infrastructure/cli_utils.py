"""
Utilities for working with CLI in tests.
"""

import os
import subprocess
import sys
from pathlib import Path

PROJECT_ROOT = Path(__file__).resolve().parents[2]


def run_cli(root: Path, *args: str) -> subprocess.CompletedProcess:
    """
    Runs bcfg.cli with the given arguments in the given directory.

    Args:
        root: Working directory for command execution
        *args: Command line arguments for bcfg.cli

    Returns:
        CompletedProcess with execution results
    """
    env = os.environ.copy()
    env["PYTHONPATH"] = os.pathsep.join(p for p in (str(PROJECT_ROOT), env.get("PYTHONPATH", "")) if p)
    env.pop("BCFG_DEBUG", None)
    return subprocess.run(
        [sys.executable, "-m", "bcfg.cli", *args],
        cwd=root, env=env, capture_output=True, text=True, encoding="utf-8"
    )
