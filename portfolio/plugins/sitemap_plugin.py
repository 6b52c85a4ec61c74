"""
Sitemap Plugin

Publishes a sitemap index plus URL-set chunks of at most ``entry_limit``
URLs each, built by SEOService.

Hook implementations:
  - on_render_body → <link rel="sitemap"> in the document head
  - on_post_build  → write sitemap-index.xml and sitemap-<n>.xml
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any

from markupsafe import escape

from portfolio.plugins.args import PostBuildArgs, RenderBodyArgs
from portfolio.plugins.base import PluginBase, PluginMeta
from portfolio.services.seo_service import SITEMAP_INDEX_FILENAME, SEOService

logger = logging.getLogger(__name__)

_META = PluginMeta(
    name="sitemap",
    version="1.0.0",
    description="XML sitemap: index plus chunked URL sets, head link for crawlers",
    config_schema={
        "output": {"type": "string", "default": "/sitemap"},
        "create_link_in_head": {"type": "boolean", "default": True},
        "entry_limit": {"type": "integer", "default": 45000},
        "excludes": {"type": "array", "items": {"type": "string"}, "default": []},
    },
)


class SitemapPlugin(PluginBase):
    """Sitemap generation."""

    default_options = {
        "output": "/sitemap",
        "create_link_in_head": True,
        "entry_limit": 45000,
        "excludes": [],
    }

    @property
    def meta(self) -> PluginMeta:
        return _META

    def index_path(self, options: dict[str, Any]) -> str:
        return "/" + options["output"].strip("/") + "/" + SITEMAP_INDEX_FILENAME

    def generate(self, service: SEOService, paths: list[str], options: dict[str, Any]) -> dict[str, str]:
        return service.generate_sitemaps(
            paths,
            output=options["output"],
            entry_limit=int(options["entry_limit"]),
            excludes=options.get("excludes") or [],
        )

    def on_render_body(self, args: RenderBodyArgs, options: dict[str, Any]) -> None:
        if not options.get("create_link_in_head"):
            return None
        href = escape(self.index_path(options))
        args.set_head_components([f'<link rel="sitemap" type="application/xml" href="{href}"/>'])
        return None

    def on_post_build(self, args: PostBuildArgs, options: dict[str, Any]) -> list[Path]:
        service = SEOService(args.site)
        target_dir = args.output_dir / options["output"].strip("/")
        target_dir.mkdir(parents=True, exist_ok=True)

        written: list[Path] = []
        for filename, document in self.generate(service, args.paths, options).items():
            path = target_dir / filename
            path.write_text(document, encoding="utf-8")
            written.append(path)

        logger.info("SitemapPlugin: wrote %d sitemap file(s) to %s", len(written), target_dir)
        return written
