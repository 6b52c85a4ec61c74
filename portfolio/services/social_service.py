"""Social profile links for the sidebar and share URLs for posts."""

import logging
from urllib.parse import quote_plus

from portfolio.constants.site import SIDEBAR_SOCIAL_ICONS
from portfolio.schemas.post import Post
from portfolio.schemas.site import SiteConfig

logger = logging.getLogger(__name__)


class SocialLinksService:
    """Resolves the sidebar's social icons against the configured links."""

    def __init__(self, site: SiteConfig):
        self.site = site

    def sidebar_links(self) -> list[dict[str, str]]:
        """Icons in sidebar order; platforms without a configured URL are left out."""
        links = []
        for platform, icon in SIDEBAR_SOCIAL_ICONS:
            href = self.site.social.get(platform)
            if not href:
                logger.debug("Sidebar link for %s skipped: not configured", platform)
                continue
            links.append({"platform": platform, "icon": icon, "href": href})
        return links


class SocialSharingService:
    """Generates sharing URLs for posts across social platforms."""

    def __init__(self, site: SiteConfig):
        self.site = site

    def post_url(self, post: Post) -> str:
        return self.site.absolute_url(f"{self.site.page_url('blog')}/{post.slug}")

    def get_share_urls(self, post: Post) -> dict[str, str]:
        """Return share URLs for Twitter, Facebook, LinkedIn, WhatsApp, and Email."""
        url = quote_plus(self.post_url(post))
        text = quote_plus(post.title)
        return {
            "twitter": f"https://twitter.com/intent/tweet?url={url}&text={text}",
            "facebook": f"https://www.facebook.com/sharer.php?u={url}",
            "linkedin": f"https://www.linkedin.com/sharing/share-offsite/?url={url}",
            "whatsapp": f"https://wa.me/?text={text}%20{url}",
            "email": f"mailto:?subject={text}&body={url}",
        }
