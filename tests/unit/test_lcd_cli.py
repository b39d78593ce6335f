"""Unit tests for CLI entry points."""

from __future__ import annotations

from pathlib import Path

import pytest

from lcd_cli import main
from lcd_config import INPUT_FILE_ENV
from tests.fixture_paths import fixture_path


def test_encode_writes_one_png_per_row(tmp_path: Path) -> None:
    exit_code = main([
        "encode",
        "--input-file", str(fixture_path("inputs/test_input.txt")),
        "--output-dir", str(tmp_path),
    ])

    assert exit_code == 0
    assert sorted(p.name for p in tmp_path.iterdir()) == ["0000.png", "1337.png", "2674.png", "9999.png"]


def test_encode_uses_env_input_override(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    input_file = tmp_path / "ids.txt"
    input_file.write_text("4321\n", encoding="utf-8")
    monkeypatch.setenv(INPUT_FILE_ENV, str(input_file))

    exit_code = main(["encode", "--output-dir", str(tmp_path / "out")])

    assert exit_code == 0
    assert (tmp_path / "out" / "4321.png").is_file()


def test_encode_returns_1_on_bad_row(tmp_path: Path) -> None:
    exit_code = main([
        "encode",
        "--input-file", str(fixture_path("inputs/not_int_input.txt")),
        "--output-dir", str(tmp_path),
    ])

    assert exit_code == 1


def test_encode_returns_1_on_missing_input(tmp_path: Path) -> None:
    exit_code = main([
        "encode",
        "--input-file", str(tmp_path / "missing.txt"),
        "--output-dir", str(tmp_path / "out"),
    ])

    assert exit_code == 1
    assert not (tmp_path / "out").exists()


def test_decode_prints_identifier(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    main(["encode", "--input-file", str(fixture_path("inputs/test_input.txt")), "--output-dir", str(tmp_path)])
    capsys.readouterr()

    exit_code = main(["decode", str(tmp_path / "1337.png")])

    out = capsys.readouterr().out
    assert exit_code == 0
    assert "DECODE OK" in out
    assert "1337" in out


def test_decode_reports_reject(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    bad = tmp_path / "bad.png"
    bad.write_bytes(b"garbage")

    exit_code = main(["decode", str(bad)])

    assert exit_code == 1
    assert "DECODE REJECT" in capsys.readouterr().out


def test_show_prints_checksum_and_pattern(capsys: pytest.CaptureFixture[str]) -> None:
    exit_code = main(["show", "2674"])

    out = capsys.readouterr().out
    assert exit_code == 0
    assert "checksum_digits: 09" in out
    assert "checksum_value: 9" in out


def test_show_rejects_malformed_identifier() -> None:
    assert main(["show", "26a4"]) == 1
