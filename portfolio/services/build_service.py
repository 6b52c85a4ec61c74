"""
Build Service

Static site generation: renders every page through PageService into the
output directory, writes the feed and crawler files, copies the static
assets and finally runs the ``on_post_build`` hook so plugins can emit
their own files (sitemaps, manifest and icons, service worker).
"""

from __future__ import annotations

import logging
import shutil
import time
from dataclasses import dataclass, field
from pathlib import Path

from portfolio.plugins.args import PostBuildArgs
from portfolio.plugins.hooks import HOOK_ON_POST_BUILD
from portfolio.plugins.registry import PluginRegistry
from portfolio.services.page_service import PageService
from portfolio.services.seo_service import SEOService

logger = logging.getLogger(__name__)

NOT_FOUND_FILENAME = "404.html"
RSS_FILENAME = "rss.xml"
ROBOTS_FILENAME = "robots.txt"
STATIC_DIRNAME = "static"


@dataclass
class BuildResult:
    output_dir: Path
    pages: list[str] = field(default_factory=list)
    files: list[Path] = field(default_factory=list)
    duration_ms: float = 0.0


def page_file(output_dir: Path, path: str) -> Path:
    """``/blog/page/2`` → ``<output>/blog/page/2/index.html``."""
    relative = path.strip("/")
    return output_dir / relative / "index.html" if relative else output_dir / "index.html"


class BuildService:
    def __init__(
        self,
        pages: PageService,
        registry: PluginRegistry,
        static_dir: Path | None = None,
        environment: str = "production",
    ):
        self.pages = pages
        self.registry = registry
        self.static_dir = static_dir
        self.environment = environment
        self.site = pages.site

    def render_pages(self, output_dir: Path) -> tuple[list[str], list[Path]]:
        """Write every page path plus the 404 page."""
        paths = self.pages.all_paths()
        written: list[Path] = []

        for path in paths:
            target = page_file(output_dir, path)
            target.parent.mkdir(parents=True, exist_ok=True)
            target.write_text(self.render_path(path), encoding="utf-8")
            written.append(target)

        not_found = output_dir / NOT_FOUND_FILENAME
        not_found.write_text(self.pages.not_found(), encoding="utf-8")
        written.append(not_found)
        return paths, written

    def render_path(self, path: str) -> str:
        """Render one site path by dispatching to the matching PageService method."""
        blog = self.site.page_url("blog")
        tag = self.site.page_url("tag")

        if path == self.site.page_url("home"):
            return self.pages.home()
        if path == blog:
            return self.pages.blog(1)
        if path.startswith(f"{blog}/page/"):
            return self.pages.blog(int(path.rsplit("/", 1)[1]))
        if path.startswith(f"{blog}/"):
            return self.pages.post(path[len(blog) + 1 :])
        if path == tag:
            return self.pages.tags()
        if path.startswith(f"{tag}/"):
            return self.pages.tag(path[len(tag) + 1 :])
        if path == self.site.page_url("resume"):
            return self.pages.resume()
        if path == self.site.page_url("contact"):
            return self.pages.contact()
        raise ValueError(f"No page renders {path}")

    def write_feeds(self, output_dir: Path) -> list[Path]:
        service = SEOService(self.site)
        sitemap = self.registry.get("sitemap")
        sitemap_path = sitemap.plugin.index_path(sitemap.options) if sitemap else None

        rss = output_dir / RSS_FILENAME
        rss.write_text(service.generate_rss_feed(self.pages.content.posts, feed_path=f"/{RSS_FILENAME}"), encoding="utf-8")
        robots = output_dir / ROBOTS_FILENAME
        robots.write_text(service.generate_robots_txt(sitemap_path=sitemap_path), encoding="utf-8")
        return [rss, robots]

    def copy_static(self, output_dir: Path) -> list[Path]:
        if self.static_dir is None or not self.static_dir.is_dir():
            return []
        target = output_dir / STATIC_DIRNAME
        shutil.copytree(self.static_dir, target, dirs_exist_ok=True)
        return [target]

    def build(self, output_dir: Path, clean: bool = True) -> BuildResult:
        """
        Generate the whole site into ``output_dir``.

        Args:
            output_dir: Target directory, created if missing
            clean: Remove the previous build first

        Returns:
            BuildResult listing rendered paths and written files
        """
        start = time.perf_counter()
        if clean and output_dir.exists():
            shutil.rmtree(output_dir)
        output_dir.mkdir(parents=True, exist_ok=True)

        # Posts are re-read so a long-running process picks up edits
        self.pages.content.reload()

        paths, files = self.render_pages(output_dir)
        files.extend(self.write_feeds(output_dir))
        files.extend(self.copy_static(output_dir))

        self.registry.run_api(
            HOOK_ON_POST_BUILD,
            PostBuildArgs(output_dir=output_dir, site=self.site, paths=paths, environment=self.environment),
        )

        result = BuildResult(
            output_dir=output_dir,
            pages=paths,
            files=files,
            duration_ms=round((time.perf_counter() - start) * 1000, 2),
        )
        logger.info(
            f"Built {len(paths)} pages into {output_dir} in {result.duration_ms}ms",
            extra={"output_dir": str(output_dir), "pages": len(paths), "duration_ms": result.duration_ms},
        )
        return result
