"""
Plugin Base Classes

PluginMeta:  declarative metadata for a plugin (name, version, options schema).
PluginBase:  abstract base class all plugins must subclass.
PluginEntry: one slot of the ordered plugin list: plugin, resolved options, name.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any

from portfolio.plugins.hooks import ALL_HOOKS


@dataclass
class PluginMeta:
    """
    Declarative metadata describing a plugin.

    Attributes:
        name:          Machine-readable slug, e.g. "sitemap", "manifest".
        version:       Semver string, e.g. "1.0.0".
        description:   Human-readable description shown by the plugin API.
        author:        Plugin author (defaults to "Site Maintainers").
        config_schema: JSON Schema fragments describing the plugin options.
    """

    name: str
    version: str
    description: str
    author: str = "Site Maintainers"
    config_schema: dict[str, Any] = field(default_factory=dict)


class PluginBase(ABC):
    """
    Abstract base class for site plugins.

    Subclasses must implement the `meta` property. Hooks are optional: a
    plugin implements a hook from ``portfolio.plugins.hooks`` by defining a
    method of that name taking ``(args, options)``. Plugins that do not
    define a hook are skipped when it runs.
    """

    #: Option defaults, merged under site-derived and persisted options.
    default_options: dict[str, Any] = {}

    @property
    @abstractmethod
    def meta(self) -> PluginMeta:
        """Return the plugin's metadata."""
        ...

    def implemented_hooks(self) -> list[str]:
        """Return the known hook names this plugin defines, in hook-list order."""
        return [hook for hook in ALL_HOOKS if callable(getattr(self, hook, None))]


@dataclass
class PluginEntry:
    """A plugin together with its resolved options and display name."""

    plugin: Any
    options: dict[str, Any] = field(default_factory=dict)
    name: str = ""

    def __post_init__(self) -> None:
        if not self.name:
            meta = getattr(self.plugin, "meta", None)
            self.name = getattr(meta, "name", "") or type(self.plugin).__name__
