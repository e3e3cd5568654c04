"""Registry of plugin creators by name."""

from __future__ import annotations

from typing import Any, Callable

from moviescrape.plugin_api import Plugin, PluginError

CreatorFunc = Callable[[Any], Plugin]

_creators: dict[str, CreatorFunc] = {}


def register(name: str, creator: CreatorFunc) -> None:
    """Register ``creator`` under ``name``, replacing any earlier one."""
    _creators[name] = creator


def create_plugin(name: str, args: Any = None) -> Plugin:
    """Create the plugin registered as ``name``."""
    try:
        creator = _creators[name]
    except KeyError:
        raise PluginError(f"plugin:{name} not found") from None
    return creator(args)


def plugin_to_creator(plugin: Plugin) -> CreatorFunc:
    """Wrap an existing plugin instance as a creator that ignores its arguments."""
    return lambda args: plugin


def plugins() -> list[str]:
    """Names of all registered plugins, sorted."""
    return sorted(_creators)