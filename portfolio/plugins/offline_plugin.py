"""
Offline Plugin

Service worker for offline reading: precaches the app-shell pages,
serves navigations network-first with a cached fallback and static
assets cache-first.

Hook implementations:
  - on_render_body → service worker registration script (production only)
  - on_post_build  → write sw.js
"""

from __future__ import annotations

import hashlib
import json
import logging
from pathlib import Path
from typing import Any

from portfolio.plugins.args import PostBuildArgs, RenderBodyArgs
from portfolio.plugins.base import PluginBase, PluginMeta

logger = logging.getLogger(__name__)

SERVICE_WORKER_FILENAME = "sw.js"

_META = PluginMeta(
    name="offline",
    version="1.0.0",
    description="Offline support: service worker with app-shell precache and runtime caching",
    config_schema={
        "precache_pages": {"type": "array", "items": {"type": "string"}, "default": ["/"]},
        "cache_prefix": {"type": "string", "default": "portfolio"},
        "cache_version": {"type": "string", "default": ""},
    },
)

_SERVICE_WORKER_TEMPLATE = """\
const CACHE_NAME = {cache_name};
const PRECACHE_URLS = {precache};

self.addEventListener("install", (event) => {{
  event.waitUntil(
    caches.open(CACHE_NAME).then((cache) => cache.addAll(PRECACHE_URLS)).then(() => self.skipWaiting())
  );
}});

self.addEventListener("activate", (event) => {{
  event.waitUntil(
    caches.keys()
      .then((keys) => Promise.all(keys.filter((key) => key !== CACHE_NAME).map((key) => caches.delete(key))))
      .then(() => self.clients.claim())
  );
}});

self.addEventListener("fetch", (event) => {{
  const request = event.request;
  if (request.method !== "GET" || new URL(request.url).origin !== self.location.origin) {{
    return;
  }}
  if (request.mode === "navigate") {{
    event.respondWith(
      fetch(request)
        .then((response) => {{
          const copy = response.clone();
          caches.open(CACHE_NAME).then((cache) => cache.put(request, copy));
          return response;
        }})
        .catch(() => caches.match(request).then((cached) => cached || caches.match("/")))
    );
    return;
  }}
  event.respondWith(
    caches.match(request).then((cached) => cached || fetch(request).then((response) => {{
      const copy = response.clone();
      caches.open(CACHE_NAME).then((cache) => cache.put(request, copy));
      return response;
    }}))
  );
}});
"""

_REGISTRATION_SCRIPT = (
    "<script>"
    "if ('serviceWorker' in navigator) {"
    "window.addEventListener('load', function () {"
    "navigator.serviceWorker.register('/%s');"
    "});"
    "}"
    "</script>"
)


class OfflinePlugin(PluginBase):
    """Service worker generation and registration."""

    default_options = {
        "precache_pages": ["/"],
        "cache_prefix": "portfolio",
        "cache_version": "",
    }

    @property
    def meta(self) -> PluginMeta:
        return _META

    def cache_name(self, options: dict[str, Any]) -> str:
        """Cache name changes whenever the precache list or version changes."""
        fingerprint = json.dumps([options.get("cache_version", ""), options["precache_pages"]])
        digest = hashlib.sha256(fingerprint.encode()).hexdigest()[:12]
        return f"{options['cache_prefix']}-{digest}"

    def service_worker(self, options: dict[str, Any]) -> str:
        """Return the service worker source for the given options."""
        return _SERVICE_WORKER_TEMPLATE.format(
            cache_name=json.dumps(self.cache_name(options)),
            precache=json.dumps(list(options["precache_pages"])),
        )

    def on_render_body(self, args: RenderBodyArgs, options: dict[str, Any]) -> None:
        if args.environment.lower() != "production":
            return None
        args.set_post_body_components([_REGISTRATION_SCRIPT % SERVICE_WORKER_FILENAME])
        return None

    def on_post_build(self, args: PostBuildArgs, options: dict[str, Any]) -> Path:
        path = args.output_dir / SERVICE_WORKER_FILENAME
        path.write_text(self.service_worker(options), encoding="utf-8")
        logger.info("OfflinePlugin: wrote %s (%d precached pages)", path, len(options["precache_pages"]))
        return path
