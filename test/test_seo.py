"""
Tests for SEOService

Sitemap chunking and exclusion, RSS feed and robots.txt generation.
"""

import datetime as dt
from xml.etree.ElementTree import fromstring

import pytest

from portfolio.schemas.post import Post
from portfolio.services.seo_service import SITEMAP_INDEX_FILENAME, SEOService, sitemap_chunk_filename

NS = {"sm": "http://www.sitemaps.org/schemas/sitemap/0.9"}


@pytest.fixture
def service(site) -> SEOService:
    return SEOService(site)


def _locs(document: str) -> list[str]:
    root = fromstring(document.encode("utf-8"))
    return [loc.text for loc in root.iter(f"{{{NS['sm']}}}loc")]


def _post(slug: str, day: int, tags=None) -> Post:
    return Post(slug=slug, title=f"Post {slug}", date=dt.date(2021, 1, day), tags=tags or [], excerpt=f"About {slug}")


class TestFilterPaths:
    def test_always_excludes_404_pages(self, service):
        assert service.filter_paths(["/", "/404", "/404.html", "/blog"]) == ["/", "/blog"]

    def test_glob_excludes(self, service):
        paths = ["/", "/tags", "/tags/swift", "/tags/uikit", "/blog"]
        assert service.filter_paths(paths, ["/tags/*"]) == ["/", "/tags", "/blog"]

    def test_duplicates_removed_in_order(self, service):
        assert service.filter_paths(["/blog", "/", "/blog"]) == ["/blog", "/"]


class TestSitemaps:
    def test_single_chunk(self, service, site):
        files = service.generate_sitemaps(["/", "/blog"])
        assert list(files) == ["sitemap-0.xml", SITEMAP_INDEX_FILENAME]
        assert _locs(files["sitemap-0.xml"]) == [f"{site.site_url}/", f"{site.site_url}/blog"]

    def test_chunked_by_entry_limit(self, service, site):
        paths = [f"/blog/post-{i}" for i in range(5)]
        files = service.generate_sitemaps(paths, entry_limit=2)

        chunks = [name for name in files if name != SITEMAP_INDEX_FILENAME]
        assert chunks == [sitemap_chunk_filename(i) for i in range(3)]
        assert [len(_locs(files[name])) for name in chunks] == [2, 2, 1]
        assert _locs(files[SITEMAP_INDEX_FILENAME]) == [f"{site.site_url}/sitemap/{name}" for name in chunks]

    def test_excluded_paths_not_counted(self, service):
        files = service.generate_sitemaps(["/", "/404", "/resume", "/contact"], entry_limit=2, excludes=["/resume"])
        assert _locs(files["sitemap-0.xml"])[-1].endswith("/contact")
        assert "sitemap-1.xml" not in files

    def test_custom_output_directory(self, service, site):
        files = service.generate_sitemaps(["/"], output="maps/")
        assert _locs(files[SITEMAP_INDEX_FILENAME]) == [f"{site.site_url}/maps/sitemap-0.xml"]

    def test_empty_site_still_has_one_chunk(self, service):
        files = service.generate_sitemaps([])
        assert _locs(files["sitemap-0.xml"]) == []

    def test_entry_limit_must_be_positive(self, service):
        with pytest.raises(ValueError):
            service.generate_sitemaps(["/"], entry_limit=0)


class TestRssFeed:
    def test_channel_metadata(self, service, site):
        root = fromstring(service.generate_rss_feed([]).encode("utf-8"))
        channel = root.find("channel")
        assert root.get("version") == "2.0"
        assert channel.findtext("title") == site.site_title
        assert channel.findtext("description") == site.site_description
        assert channel.findtext("language") == "en"

    def test_items(self, service, site):
        feed = service.generate_rss_feed([_post("b", 2, ["Swift"]), _post("a", 1)])
        items = fromstring(feed.encode("utf-8")).find("channel").findall("item")
        assert [item.findtext("link") for item in items] == [f"{site.site_url}/blog/b", f"{site.site_url}/blog/a"]
        assert items[0].findtext("pubDate") == "Sat, 02 Jan 2021 00:00:00 +0000"
        assert items[0].findtext("category") == "Swift"
        assert items[0].findtext("description") == "About b"

    def test_limit(self, service):
        posts = [_post(str(day), day) for day in range(1, 11)]
        feed = service.generate_rss_feed(posts, limit=3)
        assert len(fromstring(feed.encode("utf-8")).find("channel").findall("item")) == 3


class TestRobotsTxt:
    def test_allows_everything_and_points_at_sitemap(self, service, site):
        robots = service.generate_robots_txt(sitemap_path="/sitemap/sitemap-index.xml")
        assert robots.startswith("User-agent: *\nAllow: /\n")
        assert f"Sitemap: {site.site_url}/sitemap/sitemap-index.xml" in robots

    def test_disallow(self, service):
        robots = service.generate_robots_txt(disallow=["/404"])
        assert "Disallow: /404" in robots
        assert "Sitemap:" not in robots

    def test_custom_base_url(self, site):
        robots = SEOService(site, base_url="http://localhost:8000/").generate_robots_txt("/sitemap/sitemap-index.xml")
        assert "Sitemap: http://localhost:8000/sitemap/sitemap-index.xml" in robots
