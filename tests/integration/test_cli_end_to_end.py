from pathlib import Path

from .conftest import run_cli, load_json, assert_exit_ok, assert_file


def test_full_file_analysis_with_live_headers(sample_vcl: Path, fake_varnishadm):
    script = fake_varnishadm(stdout="active  auto  warm  Authorization\n")
    proc = run_cli([sample_vcl, "--varnishadm", script])
    assert_exit_ok(proc)

    lines = proc.stdout.splitlines()
    assert lines[0] == f"Analyzing Varnish Configuration File: {sample_vcl}"
    assert "Configuration: Found backend definition named 'default'." in lines
    assert "Configuration: Backend server port is '8080'." in lines
    assert "Configuration: Returning a synthetic response with status code '200'." in lines
    assert 'Unrecognized line:     if (req.url ~ "^/health") {' in lines
    assert lines[-3:] == [
        "Checking HTTP headers set in the active VCL:",
        "Header: Authorization",
        "Recommendation: Be cautious with the Authorization header, ensure it doesn't cache sensitive data.",
    ]


def test_blank_file_yields_one_warning_pair_per_line(tmp_path: Path, fake_varnishadm):
    blank = tmp_path / "blank.vcl"
    blank.write_text("\n\n\n")
    script = fake_varnishadm()
    proc = run_cli([blank, "--varnishadm", script])
    assert_exit_ok(proc)

    pair = ["Unrecognized line: ", "Warning: This line could not be analyzed and may require manual review."]
    assert proc.stdout.splitlines() == (
        [f"Analyzing Varnish Configuration File: {blank}"]
        + pair * 3
        + ["No HTTP headers set in the active VCL."]
    )


def test_failed_probe_is_reported_distinctly(sample_vcl: Path, fake_varnishadm):
    script = fake_varnishadm(stderr="Rejected 107", exit_code=1)
    proc = run_cli([sample_vcl, "--varnishadm", script])
    assert proc.returncode == 3
    assert "No HTTP headers set in the active VCL." not in proc.stdout
    assert proc.stdout.splitlines()[-1].startswith("Header audit failed:")
    assert "Rejected 107" in proc.stdout
    # the analysis itself still ran to completion
    assert "Configuration: Setting backend response grace period to '6h'." in proc.stdout


def test_missing_argument_prints_usage():
    proc = run_cli([])
    assert proc.returncode == 1
    assert proc.stdout.startswith("Usage: vclscan <path_to_varnish_config_file>")


def test_missing_file_is_an_error(tmp_path: Path):
    missing = tmp_path / "nope.vcl"
    proc = run_cli([missing, "--no-audit"])
    assert proc.returncode == 1
    assert proc.stdout.strip() == f"Error: Configuration file '{missing}' not found!"


def test_binary_file_is_an_error(tmp_path: Path):
    blob = tmp_path / "blob.vcl"
    blob.write_bytes(b"\x00\xff" * 32)
    proc = run_cli([blob, "--no-audit"])
    assert proc.returncode == 1
    assert "not a readable text file" in proc.stdout


def test_directory_scan_with_reports(vcl_tree: Path, out_dir: Path):
    proc = run_cli([vcl_tree, "--no-audit", "--no-progress", "--line-numbers", "--out", out_dir])
    assert_exit_ok(proc)

    assert f"Analyzing Varnish Configuration File: {vcl_tree / 'default.vcl'}" in proc.stdout
    assert f"Analyzing Varnish Configuration File: {vcl_tree / 'includes' / 'backends.vcl'}" in proc.stdout
    assert "README.md" not in proc.stdout
    assert f"[{vcl_tree / 'includes' / 'backends.vcl'}:2]" in proc.stdout

    index = load_json(assert_file(out_dir / "index.json"))
    assert {Path(item["file"]).name for item in index} == {"default.vcl", "backends.vcl"}
    annotations = load_json(assert_file(out_dir / "annotations.json"))
    assert any(a["values"].get("host") == "api.internal" for a in annotations)
    assert_file(out_dir / "annotations.md")
    assert "- not run" in assert_file(out_dir / "summary.md").read_text()


def test_empty_directory_reports_no_files(tmp_path: Path):
    empty = tmp_path / "empty"
    empty.mkdir()
    proc = run_cli([empty, "--no-audit"])
    assert_exit_ok(proc)
    assert "No files matching '*.vcl'" in proc.stdout


def test_unstartable_varnishadm_is_an_audit_failure(sample_vcl: Path, tmp_path: Path):
    script = tmp_path / "varnishadm-noshebang"
    script.write_text("echo active\n")
    script.chmod(0o755)
    proc = run_cli([sample_vcl, "--varnishadm", script])
    assert proc.returncode == 3
    assert "Traceback" not in proc.stderr
    assert proc.stdout.splitlines()[-1].startswith("Header audit failed:")
