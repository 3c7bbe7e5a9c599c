"""Discover plugins and let them attach stages to a build's registry.

A plugin is any importable module exposing ``register(registry)``. The
built-in TOC plugin is always loaded first; then modules named in the book
configuration's ``plugins`` list; then installed distributions advertising an
entry point in the ``bookbinder.plugins`` group.
"""

from __future__ import annotations

import importlib
import typing as typ
from importlib import metadata

from loguru import logger

from .errors import PluginLoadError

if typ.TYPE_CHECKING:
    import collections.abc as cabc

    from .pipeline.registry import StageRegistry

ENTRY_POINT_GROUP = "bookbinder.plugins"
BUILTIN_PLUGINS = ("bookbinder.toc.plugin",)

PluginHook = typ.Callable[["StageRegistry"], None]


def _describe_plugin(obj: object) -> str:
    module = getattr(obj, "__module__", obj.__class__.__module__)
    name = getattr(obj, "__qualname__", obj.__class__.__name__)
    return f"{module}.{name}"


def _module_hook(module_name: str) -> PluginHook:
    try:
        module = importlib.import_module(module_name)
    except ImportError as exc:
        msg = f"Unable to import plugin module '{module_name}': {exc}"
        raise PluginLoadError(msg) from exc
    hook = getattr(module, "register", None)
    if not callable(hook):
        msg = f"Plugin module '{module_name}' does not define register(registry)."
        raise PluginLoadError(msg)
    return hook


def _entry_point_hooks() -> list[PluginHook]:
    hooks: list[PluginHook] = []
    for entry in metadata.entry_points().select(group=ENTRY_POINT_GROUP):
        try:
            hook = entry.load()
        except ImportError as exc:
            msg = f"Unable to load plugin entry point '{entry.name}': {exc}"
            raise PluginLoadError(msg) from exc
        hooks.append(hook)
    return hooks


def load_plugins(
    registry: StageRegistry,
    module_names: cabc.Iterable[str] = (),
    *,
    include_entry_points: bool = True,
) -> list[str]:
    """Run every plugin's ``register`` hook against ``registry``.

    Parameters
    ----------
    registry : StageRegistry
        Registry already holding the core stages.
    module_names : Iterable[str], optional
        Dotted module names configured for the book.
    include_entry_points : bool, optional
        Also load plugins advertised through package metadata.

    Returns
    -------
    list[str]
        Qualified names of the hooks that ran, in order.

    Raises
    ------
    PluginLoadError
        If a plugin cannot be imported or has no ``register`` hook.
    DuplicateStageError, UnknownStageError
        Propagated from the registry when a plugin positions its stages badly.
    """
    hooks = [_module_hook(name) for name in (*BUILTIN_PLUGINS, *module_names)]
    if include_entry_points:
        hooks.extend(_entry_point_hooks())
    loaded: list[str] = []
    for hook in hooks:
        hook(registry)
        loaded.append(_describe_plugin(hook))
        logger.debug("loaded plugin {}", loaded[-1])
    return loaded


__all__ = ["BUILTIN_PLUGINS", "ENTRY_POINT_GROUP", "load_plugins"]
