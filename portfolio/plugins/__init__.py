"""
Site Plugin System

Public API for the plugin system:
    PluginMeta: plugin metadata dataclass
    PluginBase: abstract base class for all plugins
    PluginEntry: plugin + options + name, one slot of the run order
    PluginRegistry: ordered registry + hook runner
    plugin_registry: global singleton registry instance
"""

from .base import PluginBase, PluginEntry, PluginMeta
from .registry import PluginRegistry, plugin_registry

__all__ = ["PluginBase", "PluginEntry", "PluginMeta", "PluginRegistry", "plugin_registry"]
