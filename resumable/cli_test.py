import os
import subprocess
import sys
from pathlib import Path

import pytest

ROOT = Path(__file__).parent.parent


def run(*args: str) -> subprocess.CompletedProcess[str]:
    return subprocess.run(
        [sys.executable, "-m", "resumable", *args],
        cwd=ROOT,
        env={**os.environ, "RESUMABLE_FAULT": "raise"},
        capture_output=True,
        text=True,
    )


@pytest.mark.timeout(10)
def test_awaiter():
    result = run("awaiter")
    assert result.returncode == 0, result.stderr
    assert result.stdout.splitlines() == ["1"]


@pytest.mark.timeout(10)
def test_generator():
    result = run("generator")
    assert result.returncode == 0, result.stderr
    assert result.stdout.splitlines() == [str(n) for n in range(1, 22)]


@pytest.mark.timeout(10)
def test_generator_stop_at():
    result = run("generator", "--stop-at", "3")
    assert result.returncode == 0, result.stderr
    assert result.stdout.splitlines() == ["1", "2", "3"]


@pytest.mark.timeout(10)
def test_trace_goes_to_stderr():
    result = run("awaiter", "--trace")
    assert result.returncode == 0, result.stderr
    assert result.stdout.splitlines() == ["1"]
    assert "<ComputationResumed" in result.stderr
    assert "<ComputationCompleted" in result.stderr
    assert "value=0>" in result.stderr
