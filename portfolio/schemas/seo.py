from pydantic import BaseModel, Field


class SeoMeta(BaseModel):
    """Per-page metadata handed to the head-tag plugin."""

    title: str
    description: str = ""
    path: str = "/"
    keywords: list[str] = Field(default_factory=list)
    og_type: str = "website"
    image: str | None = None
