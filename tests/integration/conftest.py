import json
import subprocess
import sys
from pathlib import Path

import pytest

from ..conftest import SAMPLE_VCL


def run_cli(args, cwd=None, env=None, timeout=60):
    """
    Run the CLI as a subprocess: python -m vclscan.cli <args>
    Returns CompletedProcess with stdout/stderr text captured.
    """
    cmd = [sys.executable, "-m", "vclscan.cli"] + list(map(str, args))
    return subprocess.run(cmd, cwd=cwd, env=env, capture_output=True, text=True, timeout=timeout)


@pytest.fixture()
def vcl_tree(tmp_path: Path) -> Path:
    """A small directory of VCL files plus noise that must be ignored."""
    root = tmp_path / "varnish"
    (root / "includes").mkdir(parents=True)
    (root / "default.vcl").write_text(SAMPLE_VCL)
    (root / "includes" / "backends.vcl").write_text('backend api {\n    .host = "api.internal";\n}\n')
    (root / "README.md").write_text("backend docs {\n")
    return root


@pytest.fixture()
def out_dir(tmp_path: Path) -> Path:
    d = tmp_path / "out"
    d.mkdir(parents=True, exist_ok=True)
    return d


def load_json(p: Path):
    with p.open("r") as f:
        return json.load(f)


def assert_exit_ok(proc):
    assert proc.returncode == 0, f"Non-zero exit:\nSTDOUT:\n{proc.stdout}\nSTDERR:\n{proc.stderr}"


def assert_file(p: Path):
    assert p.exists(), f"Expected file missing: {p}"
    return p
