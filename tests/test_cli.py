import logging
import runpy
import sys

import pytest

from unitool import __version__
from unitool.cli import main


def test_check_clean_file(tmp_path, capsys):
    path = tmp_path / "clean.txt"
    path.write_text("hello\nworld\n", encoding="utf-8")

    assert main(["check", str(path)]) == 0

    out = capsys.readouterr().out
    assert f"Unicode Normalization Tool Version: {__version__}" in out
    assert f"Checking file: {path}" in out
    assert "✓ All text is properly normalized (Form KC)" in out


def test_check_reports_columns(tmp_path, capsys):
    path = tmp_path / "data.txt"
    path.write_text("ok\ncafe\u0301\n", encoding="utf-8")

    assert main(["check", str(path)]) == 1

    out = capsys.readouterr().out
    assert "⚠ Found 1 line(s) with normalization issues:" in out
    assert "Line    2:" in out
    assert "  Column:   3 'e' (U+0065) → '\u00e9' (U+00E9)" in out


def test_check_caps_detailed_issues(tmp_path, capsys):
    path = tmp_path / "many.txt"
    path.write_text("Ａ\n" * 12, encoding="utf-8")

    assert main(["check", str(path)]) == 1

    out = capsys.readouterr().out
    assert "Found 12 line(s)" in out
    assert sum(1 for line in out.splitlines() if line.startswith("Line ")) == 10
    assert "... and 2 more issue(s)" in out


def test_check_reports_invalid_lines(tmp_path, capsys):
    path = tmp_path / "bad.txt"
    path.write_bytes(b"fine\n\xff\xfe\n")

    assert main(["check", str(path)]) == 1

    out = capsys.readouterr().out
    assert "✗ Line 2: not valid UTF-8 text" in out


def test_check_missing_file(tmp_path, capsys):
    path = tmp_path / "missing.txt"

    assert main(["check", str(path)]) == 1
    assert f"Error: File not found: {path}" in capsys.readouterr().out


def test_normalize(tmp_path, capsys):
    src = tmp_path / "in.txt"
    dst = tmp_path / "out.txt"
    src.write_text("one\n①\nthree\n", encoding="utf-8")

    assert main(["normalize", str(src), str(dst)]) == 0

    out = capsys.readouterr().out
    assert f"Normalizing: {src} → {dst}" in out
    assert "✓ Complete: 3 lines processed, 1 lines normalized" in out
    assert dst.read_text(encoding="utf-8") == "one\n1\nthree\n"


def test_normalize_missing_input(tmp_path, capsys):
    src = tmp_path / "missing.txt"
    dst = tmp_path / "out.txt"

    assert main(["normalize", str(src), str(dst)]) == 1
    assert f"Error: File not found: {src}" in capsys.readouterr().out
    assert not dst.exists()


def test_compare_equivalent(capsys):
    assert main(["compare", "⽷", "糸"]) == 0

    out = capsys.readouterr().out
    assert "String 1: '⽷'" in out
    assert "  Character: '⽷' → U+2F77 (decimal: 12151)" in out
    assert "    Normalized Form C: ✓ | Normalized Form KC: ✗" in out
    assert "  String 1: '糸' (U+7CF8)" in out
    assert "✓ Strings are equivalent after normalization" in out


def test_compare_different(capsys):
    assert main(["compare", "a", "b"]) == 1
    assert "✗ Strings are different even after normalization" in capsys.readouterr().out


def test_compare_rejects_invalid_text(capsys):
    assert main(["compare", "a\udcff", "a"]) == 1
    assert "Error: unpaired surrogate U+DCFF at index 1" in capsys.readouterr().out


def test_missing_arguments_is_usage_error():
    with pytest.raises(SystemExit) as exc:
        main(["normalize", "only-one"])
    assert exc.value.code == 2


def test_normalize_unwritable_output(tmp_path, capsys):
    src = tmp_path / "in.txt"
    dst = tmp_path / "nodir" / "out.txt"
    src.write_text("①\n", encoding="utf-8")

    assert main(["normalize", str(src), str(dst)]) == 1
    assert f"Error: Cannot write output: {dst}" in capsys.readouterr().out
    assert not dst.parent.exists()


def test_verbose_logs_line_count(tmp_path, caplog):
    path = tmp_path / "clean.txt"
    path.write_text("a\nb\n", encoding="utf-8")
    caplog.set_level(logging.DEBUG, logger="unitool.cli")

    assert main(["-v", "check", str(path)]) == 0
    assert "Checked 2 line(s)" in caplog.text


def test_run_as_module(monkeypatch, capsys):
    monkeypatch.setattr(sys, "argv", ["unitool", "compare", "⽷", "糸"])

    with pytest.raises(SystemExit) as exc:
        runpy.run_module("unitool", run_name="__main__")
    assert exc.value.code == 0
    assert "Strings are equivalent after normalization" in capsys.readouterr().out
