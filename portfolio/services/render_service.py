"""
Render Service

Renders a page template and assembles the final HTML document through
the plugin hooks:

1. ``wrap_page_element``: plugins wrap the rendered page markup in turn
2. ``on_render_body``: plugins contribute head/body components and attributes
3. ``on_pre_render_html``: plugins reorder or replace the collected components
4. ``html.html``: the document shell places everything
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any

from fastapi.templating import Jinja2Templates
from markupsafe import Markup

from portfolio.constants.site import NAV_ITEMS
from portfolio.plugins.args import PreRenderHtmlArgs, RenderBodyArgs, WrapPageArgs, chain_element
from portfolio.plugins.hooks import HOOK_ON_PRE_RENDER_HTML, HOOK_ON_RENDER_BODY, HOOK_WRAP_PAGE_ELEMENT
from portfolio.plugins.registry import PluginRegistry
from portfolio.schemas.seo import SeoMeta
from portfolio.schemas.site import SiteConfig
from portfolio.services.social_service import SocialLinksService
from portfolio.utils.slugify import slugify

logger = logging.getLogger(__name__)

TEMPLATES_DIR = Path(__file__).resolve().parent.parent / "templates"
DOCUMENT_TEMPLATE = "html.html"

templates = Jinja2Templates(directory=str(TEMPLATES_DIR))
templates.env.filters["slugify"] = slugify


class RenderService:
    """Page rendering and HTML document assembly."""

    def __init__(self, site: SiteConfig, registry: PluginRegistry, environment: str = "development"):
        self.site = site
        self.registry = registry
        self.environment = environment
        self.env = templates.env

    def base_context(self, pathname: str) -> dict[str, Any]:
        """Context shared by every page: site data, navigation and sidebar."""
        return {
            "site": self.site,
            "pathname": pathname,
            "is_home": pathname == self.site.page_url("home"),
            "nav_items": [(label, self.site.page_url(key)) for label, key in NAV_ITEMS],
            "profile": self.site.profile,
            "sidebar_links": SocialLinksService(self.site).sidebar_links(),
            "tag_url": self.tag_url,
            "post_url": self.post_url,
        }

    def tag_url(self, tag: str) -> str:
        return f"{self.site.page_url('tag')}/{slugify(tag)}"

    def post_url(self, slug: str) -> str:
        return f"{self.site.page_url('blog')}/{slug}"

    def render_fragment(self, template_name: str, pathname: str, context: dict[str, Any] | None = None) -> Markup:
        """Render a page template without the document shell."""
        template = self.env.get_template(template_name)
        return Markup(template.render(**self.base_context(pathname), **(context or {})))

    def render_document(self, element: Markup, pathname: str, seo: SeoMeta | None = None) -> str:
        """Run the render hooks around an already-rendered page element."""
        wrapped = self.registry.run_api(
            HOOK_WRAP_PAGE_ELEMENT,
            WrapPageArgs(element=element, pathname=pathname),
            default_return=element,
            arg_transform=chain_element,
        )
        body = Markup(wrapped[-1])

        render_args = RenderBodyArgs(pathname=pathname, site=self.site, environment=self.environment, seo=seo)
        self.registry.run_api(HOOK_ON_RENDER_BODY, render_args)

        pre_render = PreRenderHtmlArgs(
            pathname=pathname,
            head_components=render_args.head_components,
            pre_body_components=render_args.pre_body_components,
            post_body_components=render_args.post_body_components,
        )
        self.registry.run_api(HOOK_ON_PRE_RENDER_HTML, pre_render)

        return self.env.get_template(DOCUMENT_TEMPLATE).render(
            html_attributes=render_args.html_attributes,
            body_attributes=render_args.body_attributes,
            head_components=pre_render.head_components,
            pre_body_components=pre_render.pre_body_components,
            post_body_components=pre_render.post_body_components,
            body=body,
        )

    def render_page(
        self,
        template_name: str,
        pathname: str,
        seo: SeoMeta | None = None,
        context: dict[str, Any] | None = None,
    ) -> str:
        """Render a full HTML document for one page."""
        element = self.render_fragment(template_name, pathname, context)
        document = self.render_document(element, pathname, seo)
        logger.debug("Rendered %s with %s (%d bytes)", pathname, template_name, len(document))
        return document
