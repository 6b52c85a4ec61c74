"""
Page Service

One method per site page. Each gathers the page's data, builds its
SeoMeta and hands both to RenderService. Routes and the static build
share these methods so served and built pages are identical.
"""

from __future__ import annotations

import logging
from typing import Any

from portfolio.constants.site import (
    ABOUT_KEYWORDS,
    ABOUT_PARAGRAPHS,
    ABOUT_TILES,
    CONTACT_DESCRIPTION,
    CONTACT_KEYWORDS,
)
from portfolio.config import Settings
from portfolio.plugins.registry import PluginRegistry
from portfolio.schemas.seo import SeoMeta
from portfolio.schemas.site import SiteConfig
from portfolio.services.content_service import ContentService
from portfolio.services.render_service import RenderService
from portfolio.services.social_service import SocialSharingService
from portfolio.utils.sanitize import dom_html, strip_tags

logger = logging.getLogger(__name__)

NOT_FOUND_PATH = "/404"


def about_description(paragraphs: list[str] | None = None) -> str:
    """About paragraphs as plain text joined by single spaces."""
    return " ".join(strip_tags(p) for p in (paragraphs if paragraphs is not None else ABOUT_PARAGRAPHS))


def create_page_service(site: SiteConfig, app_settings: Settings, registry: PluginRegistry) -> PageService:
    """Wire content loading and rendering for one site configuration."""
    content = ContentService(app_settings.content_dir, show_drafts=app_settings.show_drafts)
    renderer = RenderService(site, registry, environment=app_settings.environment)
    return PageService(site, content, renderer, contact_relay_enabled=app_settings.contact_relay_enabled)


class PageService:
    def __init__(
        self,
        site: SiteConfig,
        content: ContentService,
        renderer: RenderService,
        contact_relay_enabled: bool = False,
    ):
        self.site = site
        self.content = content
        self.renderer = renderer
        self.contact_relay_enabled = contact_relay_enabled

    # ── Paths ─────────────────────────────────────────────────────────────────

    def blog_page_path(self, page: int) -> str:
        blog = self.site.page_url("blog")
        return blog if page == 1 else f"{blog}/page/{page}"

    def all_paths(self) -> list[str]:
        """Every renderable page path, for the sitemap and the static build."""
        paths = [self.site.page_url(key) for key in ("home", "blog", "contact", "resume", "tag")]
        total_pages = self.content.paginate(1, self.site.posts_for_archive_page).total_pages
        paths.extend(self.blog_page_path(page) for page in range(2, total_pages + 1))
        paths.extend(self.renderer.post_url(post.slug) for post in self.content.posts)
        paths.extend(self.renderer.tag_url(tag) for tag in self.content.all_tags(self.site.tags))
        return list(dict.fromkeys(paths))

    # ── Pages ─────────────────────────────────────────────────────────────────

    def home(self) -> str:
        path = self.site.page_url("home")
        seo = SeoMeta(title="About", description=about_description(), path=path, keywords=ABOUT_KEYWORDS)
        return self.renderer.render_page(
            "pages/about.html",
            path,
            seo,
            {
                "paragraphs": [dom_html(p) for p in ABOUT_PARAGRAPHS],
                "tiles": ABOUT_TILES,
            },
        )

    def blog(self, page: int = 1) -> str:
        post_page = self.content.paginate(page, self.site.posts_for_archive_page)
        path = self.blog_page_path(page)
        seo = SeoMeta(
            title="Blog" if page == 1 else f"Blog - page {page}",
            description=f"Posts from {self.site.site_title}: {self.site.site_description}",
            path=path,
            keywords=list(self.site.tags),
        )
        return self.renderer.render_page(
            "pages/blog.html",
            path,
            seo,
            {
                "post_page": post_page,
                "tags": self.content.all_tags(self.site.tags),
                "previous_url": self.blog_page_path(page - 1) if post_page.has_previous else None,
                "next_url": self.blog_page_path(page + 1) if post_page.has_next else None,
            },
        )

    def post(self, slug: str) -> str:
        post = self.content.get_post(slug)
        path = self.renderer.post_url(post.slug)
        seo = SeoMeta(
            title=post.title,
            description=post.excerpt,
            path=path,
            keywords=post.tags,
            og_type="article",
            image=post.cover,
        )
        return self.renderer.render_page(
            "pages/post.html",
            path,
            seo,
            {
                "post": post,
                "tags": self.content.all_tags(self.site.tags),
                "share_urls": SocialSharingService(self.site).get_share_urls(post),
                "disqus": {
                    "script": self.site.disqus_script,
                    "url": self.site.absolute_url(path),
                    "identifier": post.slug,
                    "title": post.title,
                },
            },
        )

    def tags(self) -> str:
        path = self.site.page_url("tag")
        tags = self.content.all_tags(self.site.tags)
        seo = SeoMeta(
            title="Tags",
            description=f"Topics covered on {self.site.site_title}: " + ", ".join(e.name for e in tags.values()),
            path=path,
            keywords=[e.name for e in tags.values()],
        )
        return self.renderer.render_page(
            "pages/tags.html",
            path,
            seo,
            {"tags": tags, "counts": self.content.tag_counts(self.site.tags)},
        )

    def tag(self, tag_slug: str) -> str:
        key, entry = self.content.resolve_tag(tag_slug, self.site.tags)
        path = self.renderer.tag_url(key)
        seo = SeoMeta(title=entry.name, description=entry.description or f"Posts tagged {entry.name}", path=path)
        return self.renderer.render_page(
            "pages/tag.html",
            path,
            seo,
            {
                "tag_key": key,
                "tag": entry,
                "posts": self.content.posts_by_tag(key),
                "tags": self.content.all_tags(self.site.tags),
            },
        )

    def resume(self) -> str:
        path = self.site.page_url("resume")
        seo = SeoMeta(title="Resume", description=f"Resume of {self.site.author}", path=path)
        return self.renderer.render_page("pages/resume.html", path, seo, {"resume_html": self.content.load_resume()})

    def contact(self, status: str | None = None, message: str | None = None, form: dict[str, Any] | None = None) -> str:
        path = self.site.page_url("contact")
        seo = SeoMeta(title="Contact", description=CONTACT_DESCRIPTION, path=path, keywords=CONTACT_KEYWORDS)
        action = path if self.contact_relay_enabled else self.site.contact_form_url
        return self.renderer.render_page(
            "pages/contact.html",
            path,
            seo,
            {
                "form_action": action,
                "status": status,
                "status_message": message,
                "form": form or {},
            },
        )

    def not_found(self, requested_path: str | None = None) -> str:
        seo = SeoMeta(title="404: Not found", description="This page does not exist.", path=NOT_FOUND_PATH)
        return self.renderer.render_page(
            "pages/404.html",
            NOT_FOUND_PATH,
            seo,
            {"requested_path": requested_path},
        )
