"""
Content Service

Loads blog posts from markdown files with YAML front matter and answers
the listing queries the pages need: newest-first archive pages, single
posts by slug, posts by tag and per-tag counts.

Post file format::

    ---
    title: Getting started with UIKit
    date: 2020-05-01
    tags: [UIKit, IOS]
    excerpt: Optional summary, derived from the body when omitted
    cover: /images/cover.png
    draft: false
    ---
    Markdown body
"""

import datetime as dt
import logging
import math
from pathlib import Path
from typing import Any

import frontmatter
import markdown
import yaml
from pydantic import ValidationError

from portfolio.constants.site import FALLBACK_TAG_COLOR
from portfolio.exceptions import ContentError, PageNotFoundError, PostNotFoundError, TagNotFoundError
from portfolio.schemas.post import Post, PostPage
from portfolio.schemas.site import TagEntry
from portfolio.utils.sanitize import truncate_text
from portfolio.utils.slugify import slugify

logger = logging.getLogger(__name__)

MARKDOWN_EXTENSIONS = ["fenced_code", "tables", "toc", "sane_lists"]
EXCERPT_LENGTH = 200


def render_markdown(text: str) -> str:
    """Render markdown to HTML with the site's extension set."""
    return markdown.markdown(text, extensions=MARKDOWN_EXTENSIONS, output_format="html")


def _parse_date(value: Any, source: str) -> dt.date:
    if isinstance(value, dt.datetime):
        return value.date()
    if isinstance(value, dt.date):
        return value
    if isinstance(value, str):
        try:
            return dt.date.fromisoformat(value.strip()[:10])
        except ValueError:
            pass
    raise ContentError(f"Invalid or missing date in {source}: {value!r}", source=source)


def _parse_tags(value: Any, source: str) -> list[str]:
    if value is None:
        return []
    if isinstance(value, str):
        tags = [tag.strip() for tag in value.split(",")]
    elif isinstance(value, list) and not any(isinstance(tag, (dict, list)) for tag in value):
        tags = [str(tag).strip() for tag in value]
    else:
        raise ContentError(f"Invalid tags in {source}: {value!r}", source=source)
    tags = [tag for tag in tags if tag]
    for tag in tags:
        if not slugify(tag):
            raise ContentError(f"Tag {tag!r} in {source} has no URL slug", source=source)
    return tags


def parse_post(path: Path) -> Post:
    """
    Parse one markdown file into a Post.

    Raises:
        ContentError: if the file cannot be read, its front matter is not
            valid YAML, ``title``/``date`` are missing, or a field has the
            wrong type
    """
    source = str(path)
    try:
        document = frontmatter.load(source)
    except (OSError, UnicodeDecodeError, ValueError, yaml.YAMLError) as exc:
        raise ContentError(f"Cannot read post {path.name}: {exc}", source=source) from exc

    title = str(document.get("title") or "").strip()
    if not title:
        raise ContentError(f"Post {path.name} has no title", source=source)

    slug = slugify(str(document.get("slug") or path.stem))
    if not slug:
        raise ContentError(f"Post {path.name} has no URL slug", source=source)

    html = render_markdown(document.content)
    excerpt = str(document.get("excerpt") or "").strip() or truncate_text(html, EXCERPT_LENGTH)

    try:
        return Post(
            slug=slug,
            title=title,
            date=_parse_date(document.get("date"), source),
            tags=_parse_tags(document.get("tags"), source),
            excerpt=excerpt,
            cover=document.get("cover"),
            draft=bool(document.get("draft", False)),
            html=html,
            source_path=path,
        )
    except ValidationError as exc:
        raise ContentError(f"Invalid front matter in {path.name}: {exc}", source=source) from exc


class ContentService:
    """Read-only access to the posts under ``<content_dir>/posts``."""

    def __init__(self, content_dir: Path, show_drafts: bool = False):
        self.content_dir = Path(content_dir)
        self.show_drafts = show_drafts
        self._posts: list[Post] | None = None

    @property
    def posts_dir(self) -> Path:
        return self.content_dir / "posts"

    # ── Loading ───────────────────────────────────────────────────────────────

    def load_posts(self) -> list[Post]:
        """
        Parse every post file, newest first.

        Raises:
            ContentError: on a malformed file or two posts sharing a slug
        """
        if not self.posts_dir.is_dir():
            logger.warning("Posts directory %s does not exist", self.posts_dir)
            return []

        posts: list[Post] = []
        seen: dict[str, Path] = {}
        for path in sorted(self.posts_dir.glob("*.md")):
            post = parse_post(path)
            if post.draft and not self.show_drafts:
                logger.debug("Skipping draft %s", path.name)
                continue
            if post.slug in seen:
                raise ContentError(
                    f"Duplicate post slug '{post.slug}' in {path.name} and {seen[post.slug].name}",
                    source=str(path),
                )
            seen[post.slug] = path
            posts.append(post)

        posts.sort(key=lambda p: (p.date, p.title), reverse=True)
        logger.info("Loaded %d posts from %s", len(posts), self.posts_dir)
        return posts

    @property
    def posts(self) -> list[Post]:
        if self._posts is None:
            self._posts = self.load_posts()
        return self._posts

    def reload(self) -> None:
        self._posts = None

    # ── Queries ───────────────────────────────────────────────────────────────

    def get_post(self, slug: str) -> Post:
        for post in self.posts:
            if post.slug == slug:
                return post
        raise PostNotFoundError(slug)

    def paginate(self, page: int, per_page: int) -> PostPage:
        """
        Return one archive page.

        Page 1 always exists, even with no posts.

        Raises:
            PageNotFoundError: if ``page`` is outside 1..total_pages
        """
        total = len(self.posts)
        total_pages = max(1, math.ceil(total / per_page))
        if page < 1 or page > total_pages:
            raise PageNotFoundError(f"blog page {page}")
        start = (page - 1) * per_page
        return PostPage(
            posts=self.posts[start : start + per_page],
            page=page,
            total_pages=total_pages,
            total_posts=total,
        )

    def tag_keys(self, taxonomy: dict[str, TagEntry]) -> dict[str, str]:
        """
        Map each tag URL slug to the tag key that owns it.

        Taxonomy keys win; post tags that slugify alike (``iOS`` and ``IOS``)
        share the first key.
        """
        keys: dict[str, str] = {}
        post_tags = sorted({tag for post in self.posts for tag in post.tags})
        for key in [*taxonomy, *post_tags]:
            keys.setdefault(slugify(key), key)
        return keys

    def tag_counts(self, taxonomy: dict[str, TagEntry] | None = None) -> dict[str, int]:
        """Posts per tag key, merging tags that share a slug."""
        keys = self.tag_keys(taxonomy or {})
        counts: dict[str, int] = {}
        for post in self.posts:
            for key in dict.fromkeys(keys[slugify(tag)] for tag in post.tags):
                counts[key] = counts.get(key, 0) + 1
        return counts

    def all_tags(self, taxonomy: dict[str, TagEntry]) -> dict[str, TagEntry]:
        """
        Taxonomy entries plus fallback entries for tags only posts use.

        One entry per slug, sorted by tag key.
        """
        tags = dict(taxonomy)
        for key in self.tag_keys(taxonomy).values():
            if key not in tags:
                tags[key] = TagEntry(name=key, description="", color=FALLBACK_TAG_COLOR)
        return dict(sorted(tags.items()))

    def resolve_tag(self, tag_slug: str, taxonomy: dict[str, TagEntry]) -> tuple[str, TagEntry]:
        """
        Find a tag by its URL slug.

        Raises:
            TagNotFoundError: if no taxonomy entry or post tag matches
        """
        key = self.tag_keys(taxonomy).get(tag_slug) if tag_slug else None
        if key is None:
            raise TagNotFoundError(tag_slug)
        return key, self.all_tags(taxonomy)[key]

    def posts_by_tag(self, tag: str) -> list[Post]:
        """Posts carrying ``tag`` or any tag with the same slug."""
        tag_slug = slugify(tag)
        return [post for post in self.posts if any(slugify(t) == tag_slug for t in post.tags)]

    def load_resume(self) -> str | None:
        """Rendered ``resume.md``, or None when the file is absent."""
        path = self.content_dir / "resume.md"
        if not path.is_file():
            return None
        return render_markdown(frontmatter.load(str(path)).content)
