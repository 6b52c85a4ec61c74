"""
Plugin Registry

PluginRegistry: in-process registry holding the ordered plugin list and
running hooks across it.

Hooks run in registration order, synchronously. The first exception
stops the run: it is annotated with the originating plugin's name and
re-raised to the caller.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from typing import TYPE_CHECKING, Any

from portfolio.plugins.base import PluginEntry
from portfolio.plugins.hooks import ALL_HOOKS, DEFAULT_SITE_PLUGIN

if TYPE_CHECKING:
    from portfolio.plugins.base import PluginBase

logger = logging.getLogger(__name__)


def annotate_exception(exc: BaseException, plugin_name: str) -> None:
    """
    Append ``(from plugin: <name>)`` to an exception's message in place.

    The first positional argument carries the message for built-in
    exceptions; exceptions that keep a ``message`` attribute (such as
    PortfolioError) are updated as well so both renderings agree.
    """
    suffix = f" (from plugin: {plugin_name})"
    if exc.args and isinstance(exc.args[0], str):
        exc.args = (exc.args[0] + suffix, *exc.args[1:])
    else:
        exc.args = (suffix.lstrip(), *exc.args)
    if isinstance(getattr(exc, "message", None), str):
        exc.message += suffix


class PluginRegistry:
    """
    Ordered registry for site plugins.

    Stores plugin entries in registration order; the order is the
    order hooks run in.
    """

    def __init__(self) -> None:
        self._entries: list[PluginEntry] = []

    # ── Registration ──────────────────────────────────────────────────────────

    def register(self, plugin: PluginBase, options: dict[str, Any] | None = None, name: str | None = None) -> None:
        """Append a plugin to the run order."""
        entry = PluginEntry(plugin=plugin, options=options or {}, name=name or "")
        if self.is_registered(entry.name):
            logger.warning("Plugin %s registered twice; both entries will run", entry.name)
        self._entries.append(entry)
        logger.info("Plugin registered: %s", entry.name)

    def clear(self) -> None:
        """Remove every registered plugin."""
        self._entries.clear()

    # ── Lookup ────────────────────────────────────────────────────────────────

    def get(self, name: str) -> PluginEntry | None:
        """Return the first entry with the given name, or None if not registered."""
        return next((entry for entry in self._entries if entry.name == name), None)

    def entries(self) -> list[PluginEntry]:
        """Return all entries in registration order."""
        return list(self._entries)

    def is_registered(self, name: str) -> bool:
        """Return True if a plugin with the given name has been registered."""
        return any(entry.name == name for entry in self._entries)

    # ── Hook dispatch ─────────────────────────────────────────────────────────

    def run_api(
        self,
        api: str,
        args: Any = None,
        default_return: Any = None,
        arg_transform: Callable[..., Any] | None = None,
    ) -> list[Any]:
        """
        Run a hook in every plugin that implements it.

        Args:
            api:            Hook name from portfolio.plugins.hooks.
            args:           Hook argument object passed to every plugin.
            default_return: Value returned (as a one-item list) when no plugin
                            produced a result.
            arg_transform:  Optional ``f(args=..., result=...)`` producing the
                            args for the next plugin from a truthy result.

        Returns:
            Non-None results in plugin order, or ``[default_return]``.

        Raises:
            Exception: whatever a plugin raised, with the plugin name appended
                       to its message unless it came from the site's own code.
        """
        if api not in ALL_HOOKS:
            logger.warning("This API doesn't exist: %s", api)

        results: list[Any] = []
        for entry in self._entries:
            hook = getattr(entry.plugin, api, None)
            if not callable(hook):
                continue
            try:
                result = hook(args, entry.options)
            except Exception as exc:
                if entry.name != DEFAULT_SITE_PLUGIN:
                    annotate_exception(exc, entry.name)
                raise
            if result and arg_transform is not None:
                args = arg_transform(args=args, result=result)
            if result is not None:
                results.append(result)

        if results:
            return results
        return [default_return]


# ── Global singleton ──────────────────────────────────────────────────────────
# Populated by portfolio.plugins.loader.initialize_plugins() at startup.
plugin_registry = PluginRegistry()
