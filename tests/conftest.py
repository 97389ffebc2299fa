import stat
from pathlib import Path

import pytest


SAMPLE_VCL = """\
vcl 4.0;

include "devicedetect.vcl";

backend default {
    .host = "127.0.0.1";
    .port = "8080";
}

acl purge {
    "localhost";
}

sub vcl_recv {
    set req.http.X-Forwarded-For = client.ip;
    if (req.url ~ "^/health") {
        return (synth(200, "OK"));
    }
}

sub vcl_backend_response {
    set beresp.ttl = 120s;
    set beresp.grace = 6h;
}
"""

VCL_LIST_OUTPUT = """\
available   auto    cold        0    old_config
active      auto    warm        0    X-Forwarded-For
active      auto    warm        0    Surrogate-Key
"""


def write_fake_varnishadm(directory: Path, stdout: str = "", stderr: str = "", exit_code: int = 0, sleep: float = 0) -> Path:
    """
    Write an executable stand-in for varnishadm. It records its arguments in
    ``args.txt`` next to itself, prints ``stdout``/``stderr`` and exits with
    ``exit_code``.
    """
    script = directory / "varnishadm"
    body = ["#!/bin/sh", f'echo "$@" > "{directory / "args.txt"}"']
    if sleep:
        body.append(f"exec sleep {sleep}")
    if stdout:
        body += ["cat <<'EOF'", stdout.rstrip("\n"), "EOF"]
    if stderr:
        body.append(f"echo '{stderr}' >&2")
    body.append(f"exit {exit_code}")
    script.write_text("\n".join(body) + "\n")
    script.chmod(script.stat().st_mode | stat.S_IXUSR | stat.S_IXGRP | stat.S_IXOTH)
    return script


@pytest.fixture()
def fake_varnishadm(tmp_path: Path):
    bin_dir = tmp_path / "bin"
    bin_dir.mkdir()

    def factory(**kwargs) -> Path:
        return write_fake_varnishadm(bin_dir, **kwargs)

    return factory


@pytest.fixture()
def sample_vcl(tmp_path: Path) -> Path:
    path = tmp_path / "default.vcl"
    path.write_text(SAMPLE_VCL)
    return path
