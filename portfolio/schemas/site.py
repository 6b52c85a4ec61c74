"""
Site configuration records.

Built once at startup from ``portfolio.constants.site.SITE`` plus the
environment overrides in ``portfolio.config.Settings``; never mutated.
"""

from pydantic import BaseModel, ConfigDict, Field, RootModel

from portfolio.exceptions import ConfigurationError

HEX_COLOR_PATTERN = r"^#(?:[0-9a-fA-F]{3}){1,2}$"


class TagEntry(BaseModel):
    model_config = ConfigDict(frozen=True)

    name: str
    description: str = ""
    color: str = Field(..., pattern=HEX_COLOR_PATTERN)


class SocialLinks(RootModel[dict[str, str]]):
    """Mapping from platform name to URL."""

    model_config = ConfigDict(frozen=True)

    def get(self, platform: str) -> str | None:
        return self.root.get(platform)

    def __contains__(self, platform: str) -> bool:
        return platform in self.root

    def items(self):
        return self.root.items()


class AuthorProfile(BaseModel):
    model_config = ConfigDict(frozen=True)

    first_name: str
    last_name: str
    badge: str = ""
    location: str = ""
    email: str = ""

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}".strip()


class SiteConfig(BaseModel):
    """Read-only site metadata singleton."""

    model_config = ConfigDict(frozen=True)

    path_prefix: str = ""
    site_url: str
    site_title: str
    site_description: str
    author: str
    posts_for_archive_page: int = Field(3, ge=1)
    default_language: str = "en"
    disqus_script: str
    contact_form_url: str
    google_analytic_tracking_id: str
    pages: dict[str, str]
    social: SocialLinks
    tags: dict[str, TagEntry]
    profile: AuthorProfile

    def page_url(self, key: str) -> str:
        """
        Return the URL path for a page key.

        Paths in ``pages`` may be written with or without a leading slash;
        the result always has exactly one and carries the path prefix.

        Raises:
            ConfigurationError: if the page key is not configured
        """
        try:
            path = self.pages[key]
        except KeyError:
            raise ConfigurationError(f"Unknown page key '{key}'", key=key) from None
        path = "/" + path.strip("/")
        prefix = self.path_prefix.rstrip("/")
        return f"{prefix}{path}" if path != "/" else f"{prefix}/"

    def absolute_url(self, path: str) -> str:
        """Join a site-relative path onto ``site_url``."""
        return self.site_url.rstrip("/") + "/" + path.lstrip("/")
