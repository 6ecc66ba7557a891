"""Integration tests for the lnkview CLI."""

import json
import os
import subprocess
import sys
from pathlib import Path

from conftest import TERMINATOR, build_lnk, header_bytes

SRC = Path(__file__).resolve().parent.parent / "src"


def run_cli(*args):
    """Run ``lnkview`` as a subprocess and return CompletedProcess."""
    env = dict(os.environ)
    env["PYTHONIOENCODING"] = "utf-8"
    env["PYTHONPATH"] = os.pathsep.join(
        p for p in (str(SRC), env.get("PYTHONPATH")) if p
    )
    return subprocess.run(
        [sys.executable, "-m", "lnkview", *args],
        capture_output=True,
        encoding="utf-8",
        timeout=30,
        env=env,
    )


def _write(tmp_path, data, name="test.lnk"):
    p = tmp_path / name
    p.write_bytes(data)
    return str(p)


class TestParseSubcommand:
    """Test ``lnkview parse``."""

    def test_parse_displays_output(self, tmp_path, full_lnk_bytes):
        path = _write(tmp_path, full_lnk_bytes)
        result = run_cli("parse", path)
        assert result.returncode == 0
        assert f"FILE: {path}" in result.stdout
        assert "--- ShellLinkHeader ---" in result.stdout
        assert "Name: Notepad" in result.stdout
        assert "KnownFolderName: Desktop" in result.stdout

    def test_parse_json_output(self, tmp_path, minimal_lnk_bytes):
        path = _write(tmp_path, minimal_lnk_bytes)
        result = run_cli("parse", "--json", path)
        assert result.returncode == 0
        data = json.loads(result.stdout)
        assert data["title"] == "ShellLinkFile"
        assert [c["title"] for c in data["children"]] == [
            "ShellLinkHeader",
            "ExtraDataBlocks",
        ]

    def test_parse_descriptions(self, tmp_path, minimal_lnk_bytes):
        path = _write(tmp_path, minimal_lnk_bytes)
        result = run_cli("parse", "-d", path)
        assert "(Must be 0x0000004C (76 bytes))" in result.stdout

    def test_parse_multiple_files(self, tmp_path, minimal_lnk_bytes, full_lnk_bytes):
        a = _write(tmp_path, minimal_lnk_bytes, "a.lnk")
        b = _write(tmp_path, full_lnk_bytes, "b.lnk")
        result = run_cli("parse", a, b)
        assert result.returncode == 0
        assert f"FILE: {a}" in result.stdout
        assert f"FILE: {b}" in result.stdout

    def test_parse_missing_file(self, tmp_path):
        result = run_cli("parse", str(tmp_path / "nope.lnk"))
        assert result.returncode == 2
        assert "error:" in result.stderr

    def test_invalid_header_strict(self, tmp_path):
        path = _write(tmp_path, build_lnk(header_size=0x50))
        result = run_cli("parse", path)
        assert result.returncode == 2
        assert "Invalid header size" in result.stderr

    def test_invalid_header_best_effort(self, tmp_path):
        path = _write(tmp_path, build_lnk(header_size=0x50))
        result = run_cli("parse", "--best-effort", path)
        assert result.returncode == 0
        assert "ERROR: InvalidHeader" in result.stdout

    def test_truncated_file_reports_inline(self, tmp_path, full_lnk_bytes):
        path = _write(tmp_path, full_lnk_bytes[:180])
        result = run_cli("parse", path)
        assert result.returncode == 0
        assert "ERROR: TruncatedInput" in result.stdout
        assert "NOT DECODED: ExtraDataBlocks" in result.stdout

    def test_codepage(self, tmp_path):
        data = header_bytes(0x04) + b"\x02\x00\x82\xa0" + TERMINATOR
        path = _write(tmp_path, data)
        result = run_cli("parse", "--codepage", "cp932", path)
        assert result.returncode == 0
        assert "Name: \u3042" in result.stdout

    def test_unknown_codepage(self, tmp_path, minimal_lnk_bytes):
        path = _write(tmp_path, minimal_lnk_bytes)
        result = run_cli("parse", "--codepage", "no-such-codec", path)
        assert result.returncode != 0
        assert "Unknown code page" in result.stderr

    def test_verbose_logs_to_stderr(self, tmp_path, minimal_lnk_bytes):
        path = _write(tmp_path, minimal_lnk_bytes)
        result = run_cli("-v", "parse", path)
        assert result.returncode == 0
        assert "DEBUG lnkview.parser" in result.stderr


class TestDetectSubcommand:
    """Test ``lnkview detect``."""

    def test_detect_yes(self, tmp_path, minimal_lnk_bytes):
        path = _write(tmp_path, minimal_lnk_bytes)
        result = run_cli("detect", path)
        assert result.returncode == 0
        assert result.stdout.strip() == f"{path}: yes"

    def test_detect_no(self, tmp_path):
        path = _write(tmp_path, b"MZ\x90\x00", "prog.exe")
        result = run_cli("detect", path)
        assert result.returncode == 1
        assert result.stdout.strip() == f"{path}: no"

    def test_detect_mixed(self, tmp_path, minimal_lnk_bytes):
        a = _write(tmp_path, minimal_lnk_bytes, "a.lnk")
        b = _write(tmp_path, b"", "empty.lnk")
        result = run_cli("detect", a, b)
        assert result.returncode == 1
        assert result.stdout.splitlines() == [f"{a}: yes", f"{b}: no"]

    def test_detect_missing_file(self, tmp_path):
        result = run_cli("detect", str(tmp_path / "nope.lnk"))
        assert result.returncode == 2


class TestNoCommand:
    """Test behavior with no subcommand."""

    def test_no_command_shows_help(self):
        result = run_cli()
        assert result.returncode == 1
        assert "usage:" in result.stdout
