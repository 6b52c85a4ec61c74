import datetime as dt
from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field


class Post(BaseModel):
    """A blog post parsed from a markdown file with front matter."""

    model_config = ConfigDict(frozen=True)

    slug: str
    title: str
    date: dt.date
    tags: list[str] = Field(default_factory=list)
    excerpt: str = ""
    cover: str | None = None
    draft: bool = False
    html: str = ""
    source_path: Path | None = None

    @property
    def display_date(self) -> str:
        return self.date.strftime("%b %d, %Y")


class PostPage(BaseModel):
    """One archive page of the blog listing."""

    posts: list[Post]
    page: int
    total_pages: int
    total_posts: int

    @property
    def has_next(self) -> bool:
        return self.page < self.total_pages

    @property
    def has_previous(self) -> bool:
        return self.page > 1
