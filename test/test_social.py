"""
Tests for social links and post sharing
"""

import datetime as dt
from urllib.parse import quote_plus

from portfolio.constants.site import SITE
from portfolio.schemas.post import Post
from portfolio.services.social_service import SocialLinksService, SocialSharingService
from portfolio.site_config import build_site_config


def _post() -> Post:
    return Post(slug="swift-result", title="Swift Result & errors", date=dt.date(2020, 6, 3))


class TestSidebarLinks:
    def test_only_configured_platforms(self, site):
        links = SocialLinksService(site).sidebar_links()
        assert [link["platform"] for link in links] == ["twitter", "github", "instagram"]

    def test_sidebar_order_and_icons(self, app_settings):
        social = {
            "stackoverflow": "https://stackoverflow.com/users/1",
            "linkedin": "https://linkedin.com/in/x",
            "github": "https://github.com/x",
        }
        site = build_site_config(app_settings, {**SITE, "social": social})
        links = SocialLinksService(site).sidebar_links()
        assert [(link["platform"], link["icon"]) for link in links] == [
            ("linkedin", "linkedin"),
            ("github", "github"),
            ("stackoverflow", "stack-overflow"),
        ]

    def test_empty_social_config(self, app_settings):
        site = build_site_config(app_settings, {**SITE, "social": {}})
        assert SocialLinksService(site).sidebar_links() == []


class TestSocialSharing:
    def test_post_url(self, site):
        assert SocialSharingService(site).post_url(_post()) == f"{site.site_url}/blog/swift-result"

    def test_share_urls(self, site):
        urls = SocialSharingService(site).get_share_urls(_post())
        encoded = quote_plus(f"{site.site_url}/blog/swift-result")
        assert set(urls) == {"twitter", "facebook", "linkedin", "whatsapp", "email"}
        assert urls["twitter"] == f"https://twitter.com/intent/tweet?url={encoded}&text=Swift+Result+%26+errors"
        assert urls["facebook"].endswith(encoded)
        assert urls["email"].startswith("mailto:?subject=Swift+Result+%26+errors")
