"""
Plugin Loader

Assembles the ordered plugin list at application startup:
plugin defaults, then options derived from the site configuration, then
per-plugin overrides persisted in the plugins config JSON file.
"""

from __future__ import annotations

import copy
import json
import logging
from pathlib import Path
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from portfolio.config import Settings
    from portfolio.plugins.base import PluginBase
    from portfolio.plugins.registry import PluginRegistry
    from portfolio.schemas.site import SiteConfig

logger = logging.getLogger(__name__)

# ── Manifest defaults ─────────────────────────────────────────────────────────
MANIFEST_BACKGROUND_COLOR = "#304CFD"
MANIFEST_THEME_COLOR = "#304CFD"
MANIFEST_ICON = "images/icon.png"


# ── Config I/O ────────────────────────────────────────────────────────────────


def load_plugins_config(path: Path) -> dict[str, dict[str, Any]]:
    """
    Load persisted plugin overrides from disk.

    Returns an empty mapping if the file does not exist or cannot be parsed.
    """
    if path.exists():
        try:
            data = json.loads(path.read_text(encoding="utf-8"))
        except (ValueError, OSError) as exc:
            # ValueError covers JSONDecodeError and UnicodeDecodeError
            logger.warning("Failed to read plugins config: %s", exc)
        else:
            if isinstance(data, dict):
                return _object_entries(data, path)
            logger.warning("Ignoring plugins config %s: top level is not an object", path)
    return {}


def _object_entries(data: dict[str, Any], path: Path) -> dict[str, dict[str, Any]]:
    entries = {}
    for name, entry in data.items():
        if isinstance(entry, dict):
            entries[name] = entry
        else:
            logger.warning("Ignoring plugins config entry %r in %s: not an object", name, path)
    return entries


def save_plugins_config(path: Path, config: dict[str, dict[str, Any]]) -> None:
    """Persist plugin overrides to disk."""
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(
        json.dumps(config, indent=2, ensure_ascii=False),
        encoding="utf-8",
    )


# ── Option resolution ─────────────────────────────────────────────────────────


def site_plugin_options(site: SiteConfig, app_settings: Settings) -> dict[str, dict[str, Any]]:
    """Options each built-in plugin takes from the site configuration."""
    from portfolio.plugins.manifest_plugin import icon_digest

    icon_path = app_settings.static_dir / MANIFEST_ICON
    return {
        "offline": {
            "precache_pages": [site.page_url(key) for key in ("home", "blog", "resume", "contact")],
            "cache_version": app_settings.app_version,
        },
        "manifest": {
            "name": site.site_title,
            "short_name": site.site_title,
            "start_url": site.page_url("home"),
            "background_color": MANIFEST_BACKGROUND_COLOR,
            "theme_color": MANIFEST_THEME_COLOR,
            "icon": str(icon_path),
            "cache_digest": icon_digest(icon_path),
        },
        "google-analytics": {
            "tracking_id": site.google_analytic_tracking_id,
        },
    }


def resolve_options(
    plugin: PluginBase,
    derived: dict[str, Any] | None = None,
    persisted: dict[str, Any] | None = None,
) -> dict[str, Any]:
    """Merge defaults < site-derived < persisted options; ``enabled`` is not an option."""
    options = copy.deepcopy(plugin.default_options)
    options.update(derived or {})
    options.update({k: v for k, v in (persisted or {}).items() if k != "enabled"})
    return options


def builtin_plugins() -> list[PluginBase]:
    """Built-in plugins in run order; the site's own plugin always runs last."""
    from portfolio.plugins.analytics_plugin import AnalyticsPlugin
    from portfolio.plugins.helmet_plugin import HelmetPlugin
    from portfolio.plugins.manifest_plugin import ManifestPlugin
    from portfolio.plugins.offline_plugin import OfflinePlugin
    from portfolio.plugins.site_plugin import SitePlugin
    from portfolio.plugins.sitemap_plugin import SitemapPlugin

    return [HelmetPlugin(), OfflinePlugin(), ManifestPlugin(), SitemapPlugin(), AnalyticsPlugin(), SitePlugin()]


# ── Startup initialisation ────────────────────────────────────────────────────


def initialize_plugins(registry: PluginRegistry, site: SiteConfig, app_settings: Settings) -> None:
    """
    Populate the registry with the built-in plugins.

    Plugins whose persisted config sets ``"enabled": false`` are skipped.
    Called from main.create_app() and the static build; clears the registry
    first so repeated calls do not duplicate entries.
    """
    persisted = load_plugins_config(app_settings.plugins_config_file)
    derived = site_plugin_options(site, app_settings)

    registry.clear()
    for plugin in builtin_plugins():
        name = plugin.meta.name
        plugin_config = persisted.get(name, {})
        if plugin_config.get("enabled", True) is False:
            logger.info("Plugin %s disabled by config", name)
            continue
        registry.register(plugin, resolve_options(plugin, derived.get(name), plugin_config), name)

    logger.info("Plugin initialisation complete, %d plugins loaded", len(registry.entries()))
