"""
SEO Service

Provides sitemap (index + chunked URL sets), RSS feed and robots.txt
generation for search engine optimization.
"""

import fnmatch
import logging
from datetime import datetime, time, timezone
from xml.etree.ElementTree import Element, SubElement, tostring  # nosec B405

from portfolio.schemas.post import Post
from portfolio.schemas.site import SiteConfig

logger = logging.getLogger(__name__)

SITEMAP_NS = "http://www.sitemaps.org/schemas/sitemap/0.9"
XML_DECLARATION = '<?xml version="1.0" encoding="UTF-8"?>\n'
SITEMAP_INDEX_FILENAME = "sitemap-index.xml"

# Paths never listed in a sitemap
ALWAYS_EXCLUDED = ["/404", "/404/", "/404.html", "/offline-plugin-app-shell-fallback/"]


def sitemap_chunk_filename(index: int) -> str:
    return f"sitemap-{index}.xml"


class SEOService:
    """Service for generating SEO-related documents."""

    def __init__(self, site: SiteConfig, base_url: str | None = None):
        self.site = site
        self.base_url = (base_url or site.site_url).rstrip("/")

    def _url(self, path: str) -> str:
        return f"{self.base_url}/{path.lstrip('/')}"

    def filter_paths(self, paths: list[str], excludes: list[str] | None = None) -> list[str]:
        """
        Drop excluded paths, keeping first-seen order and removing duplicates.

        Args:
            paths: Site-relative page paths
            excludes: Glob patterns (fnmatch syntax) to leave out

        Returns:
            Paths to list in the sitemap
        """
        patterns = list(ALWAYS_EXCLUDED) + list(excludes or [])
        kept: list[str] = []
        seen: set[str] = set()
        for path in paths:
            if path in seen:
                continue
            seen.add(path)
            if any(fnmatch.fnmatchcase(path, pattern) for pattern in patterns):
                continue
            kept.append(path)
        return kept

    def generate_urlset(self, paths: list[str]) -> str:
        """Generate a single <urlset> document for the given paths."""
        urlset = Element("urlset")
        urlset.set("xmlns", SITEMAP_NS)
        for path in paths:
            url = SubElement(urlset, "url")
            loc = SubElement(url, "loc")
            loc.text = self._url(path)
            changefreq = SubElement(url, "changefreq")
            changefreq.text = "daily"
            priority = SubElement(url, "priority")
            priority.text = "0.7"
        return XML_DECLARATION + tostring(urlset, encoding="unicode")

    def generate_sitemap_index(self, sitemap_urls: list[str]) -> str:
        """
        Generate sitemap index for the chunked sitemaps.

        Args:
            sitemap_urls: Site-relative URLs of the individual sitemaps

        Returns:
            XML string in sitemap index format
        """
        sitemapindex = Element("sitemapindex")
        sitemapindex.set("xmlns", SITEMAP_NS)

        for url in sitemap_urls:
            sitemap = SubElement(sitemapindex, "sitemap")
            loc = SubElement(sitemap, "loc")
            loc.text = self._url(url)
            lastmod = SubElement(sitemap, "lastmod")
            lastmod.text = datetime.now(timezone.utc).strftime("%Y-%m-%d")

        return XML_DECLARATION + tostring(sitemapindex, encoding="unicode")

    def generate_sitemaps(
        self,
        paths: list[str],
        output: str = "/sitemap",
        entry_limit: int = 45000,
        excludes: list[str] | None = None,
    ) -> dict[str, str]:
        """
        Generate the sitemap index and its URL-set chunks.

        Args:
            paths: All site-relative page paths
            output: URL directory the sitemap files are served from
            entry_limit: Maximum number of URLs per chunk
            excludes: Glob patterns to leave out

        Returns:
            Mapping of file name to XML document, index included
        """
        if entry_limit < 1:
            raise ValueError("entry_limit must be at least 1")

        kept = self.filter_paths(paths, excludes)
        chunks = [kept[i : i + entry_limit] for i in range(0, len(kept), entry_limit)] or [[]]
        output = "/" + output.strip("/")

        files: dict[str, str] = {}
        for index, chunk in enumerate(chunks):
            files[sitemap_chunk_filename(index)] = self.generate_urlset(chunk)
        files[SITEMAP_INDEX_FILENAME] = self.generate_sitemap_index([f"{output}/{name}" for name in files])

        logger.info(f"Generated sitemap with {len(kept)} URLs in {len(chunks)} chunk(s)")
        return files

    def generate_rss_feed(self, posts: list[Post], limit: int = 20, feed_path: str = "/rss.xml") -> str:
        """
        Generate RSS 2.0 feed for the newest posts.

        Args:
            posts: Posts, newest first
            limit: Maximum number of items in feed
            feed_path: Path the feed itself is served from (atom:link rel=self)

        Returns:
            XML string in RSS 2.0 format
        """
        rss = Element("rss")
        rss.set("version", "2.0")
        rss.set("xmlns:atom", "http://www.w3.org/2005/Atom")

        channel = SubElement(rss, "channel")

        title = SubElement(channel, "title")
        title.text = self.site.site_title

        link = SubElement(channel, "link")
        link.text = self.base_url

        description = SubElement(channel, "description")
        description.text = self.site.site_description

        language = SubElement(channel, "language")
        language.text = self.site.default_language

        last_build_date = SubElement(channel, "lastBuildDate")
        last_build_date.text = datetime.now(timezone.utc).strftime("%a, %d %b %Y %H:%M:%S +0000")

        atom_link = SubElement(channel, "atom:link")
        atom_link.set("href", self._url(feed_path))
        atom_link.set("rel", "self")
        atom_link.set("type", "application/rss+xml")

        blog_path = self.site.page_url("blog")
        for post in posts[:limit]:
            item = SubElement(channel, "item")
            post_url = self._url(f"{blog_path}/{post.slug}")

            item_title = SubElement(item, "title")
            item_title.text = post.title

            item_link = SubElement(item, "link")
            item_link.text = post_url

            item_guid = SubElement(item, "guid")
            item_guid.set("isPermaLink", "true")
            item_guid.text = post_url

            if post.excerpt:
                item_description = SubElement(item, "description")
                item_description.text = post.excerpt

            item_pub_date = SubElement(item, "pubDate")
            published = datetime.combine(post.date, time.min, tzinfo=timezone.utc)
            item_pub_date.text = published.strftime("%a, %d %b %Y %H:%M:%S +0000")

            for tag in post.tags:
                item_category = SubElement(item, "category")
                item_category.text = tag

        logger.debug(f"Generated RSS feed with {min(len(posts), limit)} items")
        return XML_DECLARATION + tostring(rss, encoding="unicode")

    def generate_robots_txt(self, sitemap_path: str | None = None, disallow: list[str] | None = None) -> str:
        """Generate robots.txt pointing crawlers at the sitemap index."""
        lines = ["User-agent: *", "Allow: /"]
        for path in disallow or []:
            lines.append(f"Disallow: {path}")
        if sitemap_path:
            lines.append("")
            lines.append(f"Sitemap: {self._url(sitemap_path)}")
        return "\n".join(lines) + "\n"
