"""Tests for the conventional INI location helpers in pyini.ini.lookup."""

from __future__ import annotations

import logging
import os
from typing import TYPE_CHECKING

from pyini.ini import parser as ini_parser
from pyini.ini.lookup import candidate_paths, load_candidates, read_ini_data
from pyini.ini.model import DEF_SECTION

if TYPE_CHECKING:
    from pathlib import Path

    import pytest


def _write(path: Path, text: str) -> str:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(text, encoding="utf-8")
    return str(path)


def test_candidate_paths_order(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    """Working dir, /etc, home, XDG config dir, then the extras."""
    monkeypatch.chdir(tmp_path)
    monkeypatch.setenv("HOME", str(tmp_path / "home"))
    monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path / "xdg"))

    assert candidate_paths("app", ["extra.ini"]) == [
        os.path.join(os.getcwd(), "app.ini"),
        "/etc/app.ini",
        str(tmp_path / "home" / ".app.ini"),
        str(tmp_path / "xdg" / "app.ini"),
        os.path.join(os.getcwd(), "extra.ini"),
    ]


def test_candidate_paths_without_xdg(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    """`~/.config` stands in for an unset XDG_CONFIG_HOME."""
    monkeypatch.setenv("HOME", str(tmp_path))
    monkeypatch.delenv("XDG_CONFIG_HOME", raising=False)
    assert candidate_paths("app")[3] == str(tmp_path / ".config" / "app.ini")


def test_load_candidates_merges_in_order(tmp_path: Path) -> None:
    """Later files win; missing ones are skipped; the last one is recorded."""
    low = _write(tmp_path / "low.ini", "a = low\nb = low\n[s]\nx = 1\n")
    high = _write(tmp_path / "high.ini", "b = high\n[t]\ny = 2\n")
    missing = str(tmp_path / "missing.ini")

    ini = load_candidates([low, missing, high])
    assert ini.as_string("", "a") == ("low", True)
    assert ini.as_string("", "b") == ("high", True)
    assert ini.as_string("", "iniFile") == (high, True)
    assert ini.filename == high
    assert ini.sections() == ([DEF_SECTION, "s", "t"], 3)


def test_load_candidates_warns_on_unreadable(
    tmp_path: Path, caplog: pytest.LogCaptureFixture
) -> None:
    """Candidates that exist but can't be read are logged and skipped."""
    caplog.set_level(logging.WARNING)
    ini = load_candidates([str(tmp_path)])
    assert len(ini) == 0
    assert "INI candidate skipped" in caplog.text


def test_read_ini_data(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    """The merged default section of all found candidates."""
    monkeypatch.chdir(tmp_path)
    monkeypatch.setenv("HOME", str(tmp_path / "home"))
    monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path / "xdg"))
    name = "pyini-lookup-test"
    _write(tmp_path / f"{name}.ini", "level = cwd\nkeep = yes\n")
    xdg = _write(tmp_path / "xdg" / f"{name}.ini", "level = xdg\n")

    data = read_ini_data(name)
    assert data["level"] == "xdg"
    assert data.as_bool("keep") == (True, True)
    assert data["iniFile"] == xdg


def test_load_candidates_skips_undecodable(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch, caplog: pytest.LogCaptureFixture
) -> None:
    """A file no codec can read is skipped; the files around it still merge."""
    monkeypatch.setattr(
        ini_parser.chardet, "detect", lambda raw: {"encoding": None, "confidence": 0.0}
    )
    caplog.set_level(logging.WARNING)
    first = _write(tmp_path / "first.ini", "a = 1\n")
    bad = tmp_path / "bad.ini"
    bad.write_bytes(b"\xff\xfe\x80" * 50 + b"\xff")
    last = _write(tmp_path / "last.ini", "b = 2\n")

    ini = load_candidates([first, str(bad), last])
    assert ini.as_string("", "a") == ("1", True)
    assert ini.as_string("", "b") == ("2", True)
    assert ini.filename == last
    assert "INI candidate skipped" in caplog.text
