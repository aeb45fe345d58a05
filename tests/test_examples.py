"""Smoke tests for example scripts.

These tests ensure that the example scripts run their main execution paths
without raising exceptions.
"""

from __future__ import annotations

import subprocess
import sys
from pathlib import Path

# Determine the repo root
ROOT = Path(__file__).resolve().parents[1]


def test_bell_marginals_example_runs() -> None:
    """Test that examples/bell_marginals.py runs successfully."""
    script = ROOT / "examples" / "bell_marginals.py"
    assert script.exists(), f"Example script not found: {script}"

    result = subprocess.run(
        [sys.executable, str(script)],
        capture_output=True,
        text=True,
        check=False,
        timeout=60,
        cwd=str(ROOT),
    )

    assert result.returncode == 0, (
        f"Example script failed with return code {result.returncode}.\n"
        f"STDOUT:\n{result.stdout}\n"
        f"STDERR:\n{result.stderr}"
    )

    assert "trace out 0: purity 0.500" in result.stdout
    assert "trace out 1 gives |0><0|: True" in result.stdout
    assert "trace out 0 gives |+><+|: True" in result.stdout
