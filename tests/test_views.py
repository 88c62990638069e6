"""Tests for perch.views — lazy view units and startup discovery."""

from pathlib import Path

import pytest

from perch.views import NOT_FOUND_VIEW, PASS_THROUGH, SHELL_LAYOUT, ViewUnit, discover_views


def _write_view(root: Path, logical_id: str, body: str = "view = 'ok'\n") -> Path:
    directory = root.joinpath(*logical_id.split("/"))
    directory.mkdir(parents=True, exist_ok=True)
    index = directory / "index.py"
    index.write_text(body, encoding="utf-8")
    return index


class TestViewUnit:
    def test_builtin_units(self) -> None:
        for unit in (SHELL_LAYOUT, PASS_THROUGH, NOT_FOUND_VIEW):
            assert unit.is_builtin
            assert unit.load() is None

    def test_loader_wins(self) -> None:
        unit = ViewUnit(name="X", loader=lambda: 42)
        assert unit.load() == 42
        assert not unit.is_builtin

    def test_load_from_source_returns_view_attribute(self, tmp_path: Path) -> None:
        index = _write_view(tmp_path, "Tools/Paste", "view = 'paste'\n")
        assert ViewUnit(name="Tools/Paste", source=index).load() == "paste"

    def test_load_from_source_without_view_returns_module(self, tmp_path: Path) -> None:
        index = _write_view(tmp_path, "Plain", "TITLE = 'plain'\n")
        module = ViewUnit(name="Plain", source=index).load()
        assert module.TITLE == "plain"

    def test_loading_is_lazy(self, tmp_path: Path) -> None:
        index = _write_view(tmp_path, "Broken", "raise RuntimeError('boom')\n")
        unit = ViewUnit(name="Broken", source=index)
        with pytest.raises(RuntimeError, match="boom"):
            unit.load()


class TestDiscoverViews:
    def test_discovers_nested_ids(self, tmp_path: Path) -> None:
        _write_view(tmp_path, "Dashboard")
        _write_view(tmp_path, "Tools/Paste")
        _write_view(tmp_path, "NotFound")
        registry = discover_views(tmp_path)
        assert set(registry) == {"Dashboard", "Tools/Paste", "NotFound"}
        assert registry["Tools/Paste"].name == "Tools/Paste"

    def test_skips_private_dirs_and_root_index(self, tmp_path: Path) -> None:
        _write_view(tmp_path, "_shared")
        _write_view(tmp_path, "Tools/_draft")
        (tmp_path / "index.py").write_text("", encoding="utf-8")
        assert discover_views(tmp_path) == {}

    def test_directory_without_index_is_not_a_view(self, tmp_path: Path) -> None:
        _write_view(tmp_path, "Tools/Paste")
        assert "Tools" not in discover_views(tmp_path)

    def test_missing_directory(self, tmp_path: Path) -> None:
        with pytest.raises(FileNotFoundError):
            discover_views(tmp_path / "missing")
