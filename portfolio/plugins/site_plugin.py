"""
Site Plugin

The site's own rendering hooks. Registered last under the name
``default-site-plugin``; exceptions raised here are reported as-is.
"""

from __future__ import annotations

from typing import Any

from markupsafe import Markup

from portfolio.plugins.args import PreRenderHtmlArgs, RenderBodyArgs, WrapPageArgs
from portfolio.plugins.base import PluginBase, PluginMeta
from portfolio.plugins.hooks import DEFAULT_SITE_PLUGIN

_META = PluginMeta(
    name=DEFAULT_SITE_PLUGIN,
    version="1.0.0",
    description="Site rendering hooks: document language, head ordering, page root container",
)


class SitePlugin(PluginBase):
    default_options = {"root_id": "___portfolio"}

    @property
    def meta(self) -> PluginMeta:
        return _META

    def on_render_body(self, args: RenderBodyArgs, options: dict[str, Any]) -> None:
        args.set_html_attributes({"lang": args.site.default_language})

    def on_pre_render_html(self, args: PreRenderHtmlArgs, options: dict[str, Any]) -> None:
        # <title> first, everything else keeps plugin order
        head = args.get_head_components()
        first = [c for c in head if c.startswith("<title")]
        args.replace_head_components(first + [c for c in head if not c.startswith("<title")])

    def wrap_page_element(self, args: WrapPageArgs, options: dict[str, Any]) -> Markup:
        return Markup('<div id="{}">{}</div>').format(options["root_id"], args.element)
