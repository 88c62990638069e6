"""Tests for the perch CLI — ``perch routes``."""

import json
from pathlib import Path

import pytest

from perch.cli import main

MENUS = [
    {
        "id": 1,
        "name": "Tools",
        "path": "tools",
        "children": [{"id": 2, "name": "Paste", "path": "paste", "component": "Tools/Paste"}],
    },
    {"id": 3, "name": "Ghost", "path": ""},
]


def _write(tmp_path: Path, payload: object) -> Path:
    path = tmp_path / "menus.json"
    path.write_text(json.dumps(payload), encoding="utf-8")
    return path


class TestRoutesCommand:
    def test_bare_list(self, tmp_path: Path, capsys) -> None:
        main(["routes", str(_write(tmp_path, MENUS))])
        out = capsys.readouterr().out
        assert "NAME" in out
        assert "/tools/paste" in out
        assert "Layout" in out
        assert "Ghost" not in out

    def test_envelope_with_views(self, tmp_path: Path, capsys) -> None:
        view = tmp_path / "views" / "Tools" / "Paste"
        view.mkdir(parents=True)
        (view / "index.py").write_text("view = 1\n", encoding="utf-8")
        path = _write(tmp_path, {"code": 200, "message": "ok", "data": MENUS})

        main(["routes", str(path), "--views", str(tmp_path / "views")])

        lines = capsys.readouterr().out.splitlines()
        paste = next(line for line in lines if line.startswith("Paste"))
        assert "Tools/Paste" in paste

    def test_unknown_component_shows_not_found(self, tmp_path: Path, capsys) -> None:
        main(["routes", str(_write(tmp_path, MENUS))])
        lines = capsys.readouterr().out.splitlines()
        paste = next(line for line in lines if line.startswith("Paste"))
        assert paste.rstrip().endswith("NotFound")

    def test_empty(self, tmp_path: Path, capsys) -> None:
        main(["routes", str(_write(tmp_path, []))])
        assert "No routes compiled." in capsys.readouterr().out

    def test_failed_envelope(self, tmp_path: Path, capsys) -> None:
        path = _write(tmp_path, {"code": 401, "message": "expired", "data": None})
        with pytest.raises(SystemExit) as exc_info:
            main(["routes", str(path)])
        assert exc_info.value.code == 1
        assert "expired" in capsys.readouterr().err

    def test_missing_file(self, tmp_path: Path, capsys) -> None:
        with pytest.raises(SystemExit):
            main(["routes", str(tmp_path / "missing.json")])
        assert "Error" in capsys.readouterr().err

    def test_no_command_prints_help(self, capsys) -> None:
        with pytest.raises(SystemExit):
            main([])
        assert "routes" in capsys.readouterr().out
