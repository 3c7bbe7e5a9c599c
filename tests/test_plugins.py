"""Tests for plugin discovery and registration."""

from __future__ import annotations

import typing as typ
from textwrap import dedent

import pytest

from bookbinder.errors import PluginLoadError, UnknownStageError
from bookbinder.pipeline import StageRegistry, register_core_stages
from bookbinder.plugins import ENTRY_POINT_GROUP, load_plugins

if typ.TYPE_CHECKING:
    from pathlib import Path

    from pytest_mock import MockerFixture


@pytest.fixture
def registry() -> StageRegistry:
    registry = StageRegistry()
    register_core_stages(registry)
    return registry


def _write_plugin(directory: Path, name: str, body: str) -> None:
    (directory / f"{name}.py").write_text(dedent(body), encoding="utf-8")


def test_builtin_toc_plugin_is_always_loaded(registry: StageRegistry) -> None:
    loaded = load_plugins(registry, include_entry_points=False)
    assert loaded == ["bookbinder.toc.plugin.register"]
    assert "toc:insert" in registry


def test_configured_module_runs_after_builtins(
    registry: StageRegistry, tmp_path: Path, monkeypatch: pytest.MonkeyPatch
) -> None:
    _write_plugin(
        tmp_path,
        "bookbinder_test_index",
        """\
        def register(registry):
            registry.after("toc:insert", "index:build", lambda c, s, e: s)
        """,
    )
    monkeypatch.syspath_prepend(str(tmp_path))
    load_plugins(registry, ["bookbinder_test_index"], include_entry_points=False)
    names = registry.names()
    assert names.index("index:build") == names.index("toc:insert") + 1, (
        f"expected index:build right after toc:insert, got {names!r}"
    )


def test_module_without_register_hook(
    registry: StageRegistry, tmp_path: Path, monkeypatch: pytest.MonkeyPatch
) -> None:
    _write_plugin(tmp_path, "bookbinder_test_nohook", "VALUE = 1\n")
    monkeypatch.syspath_prepend(str(tmp_path))
    with pytest.raises(PluginLoadError, match="register"):
        load_plugins(registry, ["bookbinder_test_nohook"], include_entry_points=False)


def test_unimportable_module(registry: StageRegistry) -> None:
    with pytest.raises(PluginLoadError, match="bookbinder_missing_plugin"):
        load_plugins(
            registry, ["bookbinder_missing_plugin"], include_entry_points=False
        )


def test_plugin_with_unknown_anchor_propagates(
    registry: StageRegistry, tmp_path: Path, monkeypatch: pytest.MonkeyPatch
) -> None:
    _write_plugin(
        tmp_path,
        "bookbinder_test_badanchor",
        """\
        def register(registry):
            registry.before("nonexistent", "oops", lambda c, s, e: s)
        """,
    )
    monkeypatch.syspath_prepend(str(tmp_path))
    with pytest.raises(UnknownStageError):
        load_plugins(
            registry, ["bookbinder_test_badanchor"], include_entry_points=False
        )


def test_entry_points_are_loaded(
    registry: StageRegistry, mocker: MockerFixture
) -> None:
    def _hook(target: StageRegistry) -> None:
        target.register("publish", lambda c, s, e: s)

    entry = mocker.Mock()
    entry.name = "publish"
    entry.load.return_value = _hook
    entry_points = mocker.patch("bookbinder.plugins.metadata.entry_points")
    entry_points.return_value.select.return_value = [entry]

    loaded = load_plugins(registry)

    entry_points.return_value.select.assert_called_once_with(group=ENTRY_POINT_GROUP)
    assert registry.names()[-1] == "publish"
    assert len(loaded) == 2


def test_broken_entry_point(registry: StageRegistry, mocker: MockerFixture) -> None:
    entry = mocker.Mock()
    entry.name = "broken"
    entry.load.side_effect = ImportError("no module")
    entry_points = mocker.patch("bookbinder.plugins.metadata.entry_points")
    entry_points.return_value.select.return_value = [entry]
    with pytest.raises(PluginLoadError, match="broken"):
        load_plugins(registry)
