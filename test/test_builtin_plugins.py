"""
Tests for the built-in plugins

Each plugin is exercised directly through its hook methods with
hand-built args, then together through RenderService.
"""

import json
from pathlib import Path

import pytest
from markupsafe import Markup

from portfolio.plugins.analytics_plugin import AnalyticsPlugin
from portfolio.plugins.args import PostBuildArgs, PreRenderHtmlArgs, RenderBodyArgs, WrapPageArgs
from portfolio.plugins.helmet_plugin import HelmetPlugin
from portfolio.plugins.loader import resolve_options
from portfolio.plugins.manifest_plugin import (
    ICON_SIZES,
    ManifestPlugin,
    icon_digest,
    icon_size_from_filename,
)
from portfolio.plugins.offline_plugin import OfflinePlugin
from portfolio.plugins.site_plugin import SitePlugin
from portfolio.plugins.sitemap_plugin import SitemapPlugin
from portfolio.schemas.seo import SeoMeta

STATIC_ICON = Path(__file__).resolve().parent.parent / "portfolio" / "static" / "images" / "icon.png"


def render_args(site, pathname="/", environment="development", seo=None):
    return RenderBodyArgs(pathname=pathname, site=site, environment=environment, seo=seo)


class TestHelmetPlugin:
    def test_title_combines_page_and_site(self, site):
        plugin = HelmetPlugin()
        assert plugin.page_title("Blog", site.site_title) == f"Blog | {site.site_title}"

    def test_title_without_page_title_is_site_title(self, site):
        plugin = HelmetPlugin()
        assert plugin.page_title("", site.site_title) == site.site_title
        assert plugin.page_title(site.site_title, site.site_title) == site.site_title

    def test_emits_seo_tags(self, site):
        plugin = HelmetPlugin()
        args = render_args(site, "/blog", seo=SeoMeta(title="Blog", description="All posts", path="/blog"))
        plugin.on_render_body(args, plugin.default_options)

        head = "\n".join(args.head_components)
        assert head.startswith(f"<title>Blog | {site.site_title}</title>")
        assert '<meta name="description" content="All posts"/>' in head
        assert f'<link rel="canonical" href="{site.site_url}/blog"/>' in head
        assert '<meta property="og:type" content="website"/>' in head
        assert '<meta name="twitter:card" content="summary"/>' in head
        assert "og:image" not in head

    def test_description_falls_back_to_site_description(self, site):
        plugin = HelmetPlugin()
        args = render_args(site, seo=SeoMeta(title="About"))
        plugin.on_render_body(args, plugin.default_options)
        assert f'content="{site.site_description}"' in "".join(args.head_components)

    def test_keywords_and_image(self, site):
        plugin = HelmetPlugin()
        seo = SeoMeta(title="Post", path="/blog/x", keywords=["Swift", "UIKit"], og_type="article", image="/img.png")
        args = render_args(site, "/blog/x", seo=seo)
        plugin.on_render_body(args, plugin.default_options)

        head = "".join(args.head_components)
        assert '<meta name="keywords" content="Swift, UIKit"/>' in head
        assert f'<meta property="og:image" content="{site.site_url}/img.png"/>' in head
        assert '<meta property="og:type" content="article"/>' in head

    def test_escapes_values(self, site):
        plugin = HelmetPlugin()
        args = render_args(site, seo=SeoMeta(title='<script>"x"</script>'))
        plugin.on_render_body(args, plugin.default_options)
        assert "<script>" not in "".join(args.head_components)

    def test_no_seo_no_tags(self, site):
        args = render_args(site)
        HelmetPlugin().on_render_body(args, HelmetPlugin.default_options)
        assert args.head_components == []

    def test_sets_document_language(self, site):
        args = render_args(site, seo=SeoMeta(title="About"))
        HelmetPlugin().on_render_body(args, HelmetPlugin.default_options)
        assert args.html_attributes == {"lang": site.default_language}


class TestSitePlugin:
    def test_sets_document_language(self, site):
        args = render_args(site)
        SitePlugin().on_render_body(args, SitePlugin.default_options)
        assert args.html_attributes == {"lang": "en"}

    def test_moves_title_first(self):
        args = PreRenderHtmlArgs(
            pathname="/",
            head_components=[Markup('<link rel="manifest"/>'), Markup("<title>T</title>"), Markup("<meta/>")],
        )
        SitePlugin().on_pre_render_html(args, SitePlugin.default_options)
        assert args.head_components == ["<title>T</title>", '<link rel="manifest"/>', "<meta/>"]

    def test_wraps_page_in_root_container(self):
        args = WrapPageArgs(element=Markup("<main>hi</main>"), pathname="/")
        result = SitePlugin().wrap_page_element(args, SitePlugin.default_options)
        assert result == '<div id="___portfolio"><main>hi</main></div>'


class TestAnalyticsPlugin:
    def options(self, **overrides):
        return resolve_options(AnalyticsPlugin(), {"tracking_id": "UA-123"}, overrides)

    def test_no_snippet_outside_production(self, site):
        args = render_args(site, environment="development")
        AnalyticsPlugin().on_render_body(args, self.options())
        assert args.post_body_components == []
        assert args.head_components == []

    def test_snippet_after_body_by_default(self, site):
        args = render_args(site, environment="production")
        AnalyticsPlugin().on_render_body(args, self.options())
        assert len(args.post_body_components) == 1
        assert "ga('create', \"UA-123\", 'auto', {});" in args.post_body_components[0]
        assert "ga('send', 'pageview');" in args.post_body_components[0]

    def test_snippet_in_head(self, site):
        args = render_args(site, environment="production")
        AnalyticsPlugin().on_render_body(args, self.options(head=True))
        assert len(args.head_components) == 1
        assert args.post_body_components == []

    def test_no_tracking_id_no_snippet(self, site):
        args = render_args(site, environment="production")
        AnalyticsPlugin().on_render_body(args, resolve_options(AnalyticsPlugin(), {"tracking_id": ""}))
        assert args.post_body_components == []

    def test_excluded_path(self, site):
        args = render_args(site, pathname="/resume", environment="production")
        AnalyticsPlugin().on_render_body(args, self.options(exclude=["/resume*"]))
        assert args.post_body_components == []

    def test_anonymize_dnt_and_delay(self):
        script = AnalyticsPlugin().tracking_script(
            self.options(anonymize=True, respect_dnt=True, page_transition_delay=250)
        )
        assert "ga('set', 'anonymizeIp', true);" in script
        assert "navigator.doNotTrack" in script
        assert "setTimeout(function() { ga('send', 'pageview'); }, 250);" in script


class TestOfflinePlugin:
    def test_registration_only_in_production(self, site):
        plugin = OfflinePlugin()
        dev = render_args(site, environment="development")
        prod = render_args(site, environment="production")
        plugin.on_render_body(dev, plugin.default_options)
        plugin.on_render_body(prod, plugin.default_options)
        assert dev.post_body_components == []
        assert "navigator.serviceWorker.register('/sw.js')" in prod.post_body_components[0]

    def test_service_worker_precaches_pages(self):
        plugin = OfflinePlugin()
        options = resolve_options(plugin, {"precache_pages": ["/", "/blog"]})
        source = plugin.service_worker(options)
        assert 'const PRECACHE_URLS = ["/", "/blog"];' in source
        assert f'const CACHE_NAME = "{plugin.cache_name(options)}";' in source

    def test_cache_name_changes_with_version(self):
        plugin = OfflinePlugin()
        v1 = plugin.cache_name(resolve_options(plugin, {"cache_version": "1.0.0"}))
        v2 = plugin.cache_name(resolve_options(plugin, {"cache_version": "1.0.1"}))
        assert v1 != v2
        assert v1.startswith("portfolio-")

    def test_post_build_writes_service_worker(self, site, tmp_path):
        plugin = OfflinePlugin()
        path = plugin.on_post_build(PostBuildArgs(output_dir=tmp_path, site=site), plugin.default_options)
        assert path == tmp_path / "sw.js"
        assert "addEventListener" in path.read_text(encoding="utf-8")


class TestManifestPlugin:
    def options(self, **overrides):
        derived = {
            "name": "Ahmed Komsan",
            "short_name": "Komsan",
            "background_color": "#304CFD",
            "theme_color": "#304CFD",
            "icon": str(STATIC_ICON),
            "cache_digest": icon_digest(STATIC_ICON),
        }
        derived.update(overrides)
        return resolve_options(ManifestPlugin(), derived)

    def test_manifest_document(self):
        manifest = ManifestPlugin().build_manifest(self.options())
        assert manifest["name"] == "Ahmed Komsan"
        assert manifest["short_name"] == "Komsan"
        assert manifest["display"] == "standalone"
        assert manifest["theme_color"] == "#304CFD"
        assert [icon["sizes"] for icon in manifest["icons"]] == [f"{s}x{s}" for s in ICON_SIZES]

    def test_query_cache_busting(self):
        options = self.options()
        url = ManifestPlugin().icon_url(48, options)
        assert url == f"/icons/icon-48x48.png?v={options['cache_digest']}"

    def test_name_cache_busting(self):
        options = self.options(cache_busting_mode="name")
        url = ManifestPlugin().icon_url(48, options)
        assert url == f"/icons/icon-48x48-{options['cache_digest']}.png"

    def test_head_components(self, site):
        args = render_args(site)
        ManifestPlugin().on_render_body(args, self.options())
        head = "".join(args.head_components)
        assert '<link rel="manifest" href="/manifest.webmanifest" crossorigin="anonymous"/>' in head
        assert '<meta name="theme-color" content="#304CFD"/>' in head
        assert head.count('rel="apple-touch-icon"') == len(ICON_SIZES)
        assert 'rel="icon"' in head

    def test_no_legacy_icons(self, site):
        args = render_args(site)
        ManifestPlugin().on_render_body(args, self.options(legacy=False))
        assert "apple-touch-icon" not in "".join(args.head_components)

    def test_post_build_writes_manifest_and_icons(self, site, tmp_path):
        written = ManifestPlugin().on_post_build(PostBuildArgs(output_dir=tmp_path, site=site), self.options())
        manifest = json.loads((tmp_path / "manifest.webmanifest").read_text(encoding="utf-8"))
        assert manifest["name"] == "Ahmed Komsan"
        assert (tmp_path / "icons" / "icon-512x512.png").is_file()
        assert (tmp_path / "favicon-32x32.png").is_file()
        assert len(written) == 1 + len(ICON_SIZES) + 1

    def test_post_build_without_icon_file(self, site, tmp_path):
        options = self.options(icon=str(tmp_path / "missing.png"), cache_digest="")
        written = ManifestPlugin().on_post_build(PostBuildArgs(output_dir=tmp_path, site=site), options)
        assert written == [tmp_path / "manifest.webmanifest"]

    @pytest.mark.parametrize(
        "filename,size",
        [
            ("icon-48x48.png", 48),
            ("favicon-32x32.png", 32),
            ("icon-192x192-" + "a" * 32 + ".png", 192),
            ("icon-48x96.png", None),
            ("icon-50x50.png", None),
            ("../secret.png", None),
        ],
    )
    def test_icon_size_from_filename(self, filename, size):
        assert icon_size_from_filename(filename) == size


class TestSitemapPlugin:
    def test_head_link(self, site):
        args = render_args(site)
        SitemapPlugin().on_render_body(args, SitemapPlugin.default_options)
        assert args.head_components == ['<link rel="sitemap" type="application/xml" href="/sitemap/sitemap-index.xml"/>']

    def test_no_head_link_when_disabled(self, site):
        args = render_args(site)
        options = resolve_options(SitemapPlugin(), {"create_link_in_head": False})
        SitemapPlugin().on_render_body(args, options)
        assert args.head_components == []

    def test_post_build_writes_chunks(self, site, tmp_path):
        options = resolve_options(SitemapPlugin(), {"entry_limit": 2})
        args = PostBuildArgs(output_dir=tmp_path, site=site, paths=["/", "/blog", "/tags", "/404"])
        written = SitemapPlugin().on_post_build(args, options)

        names = sorted(path.name for path in written)
        assert names == ["sitemap-0.xml", "sitemap-1.xml", "sitemap-index.xml"]
        index = (tmp_path / "sitemap" / "sitemap-index.xml").read_text(encoding="utf-8")
        assert f"{site.site_url}/sitemap/sitemap-1.xml" in index


class TestRenderPipeline:
    """All plugins together through RenderService"""

    def test_document_structure(self, page_service):
        html = page_service.home()
        assert html.startswith("<!DOCTYPE html>")
        assert '<html lang="en"' in html
        assert '<div id="___portfolio">' in html
        head = html.split("</head>")[0]
        assert head.index("<title>") < head.index('rel="manifest"') < head.index('rel="sitemap"')

    def test_development_has_no_analytics_or_service_worker(self, page_service):
        html = page_service.home()
        assert "google-analytics.com/analytics.js" not in html
        assert "serviceWorker" not in html
