"""
Head Tags Plugin

Turns the page's SeoMeta into document head tags: <title>, description
and keywords, Open Graph and Twitter Card metadata, plus the canonical
link. Also sets the document language on <html>.

Hook implementations:
  - on_render_body → html lang attribute and head components for the current page
"""

from __future__ import annotations

import logging
from typing import Any

from markupsafe import escape

from portfolio.plugins.args import RenderBodyArgs
from portfolio.plugins.base import PluginBase, PluginMeta

logger = logging.getLogger(__name__)

_META = PluginMeta(
    name="helmet",
    version="1.0.0",
    description="Document head management: title, meta description, Open Graph and Twitter Card tags",
    config_schema={
        "title_separator": {"type": "string", "default": " | "},
        "twitter_card": {"type": "string", "default": "summary"},
    },
)


def _meta_tag(attr: str, key: str, content: str) -> str:
    return f'<meta {attr}="{escape(key)}" content="{escape(content)}"/>'


class HelmetPlugin(PluginBase):
    """Renders per-page head tags from SeoMeta."""

    default_options = {"title_separator": " | ", "twitter_card": "summary"}

    @property
    def meta(self) -> PluginMeta:
        return _META

    def page_title(self, title: str, site_title: str, separator: str = " | ") -> str:
        if not title or title == site_title:
            return site_title
        return f"{title}{separator}{site_title}"

    def on_render_body(self, args: RenderBodyArgs, options: dict[str, Any]) -> None:
        args.set_html_attributes({"lang": args.site.default_language})
        seo = args.seo
        if seo is None:
            return None

        site = args.site
        title = self.page_title(seo.title, site.site_title, options.get("title_separator", " | "))
        description = seo.description or site.site_description
        url = site.absolute_url(seo.path)

        components = [
            f"<title>{escape(title)}</title>",
            _meta_tag("name", "description", description),
            f'<link rel="canonical" href="{escape(url)}"/>',
            _meta_tag("property", "og:title", title),
            _meta_tag("property", "og:description", description),
            _meta_tag("property", "og:type", seo.og_type),
            _meta_tag("property", "og:url", url),
            _meta_tag("name", "twitter:card", options.get("twitter_card", "summary")),
            _meta_tag("name", "twitter:creator", site.author),
            _meta_tag("name", "twitter:title", title),
            _meta_tag("name", "twitter:description", description),
        ]
        if seo.keywords:
            components.insert(2, _meta_tag("name", "keywords", ", ".join(seo.keywords)))
        if seo.image:
            image_url = site.absolute_url(seo.image)
            components.append(_meta_tag("property", "og:image", image_url))
            components.append(_meta_tag("name", "twitter:image", image_url))

        args.set_head_components(components)
        logger.debug("HelmetPlugin: %d head tags for %s", len(components), args.pathname)
        return None
