"""Constants package for the portfolio site."""

from .site import ABOUT_PARAGRAPHS, ABOUT_TILES, FALLBACK_TAG_COLOR, NAV_ITEMS, SIDEBAR_SOCIAL_ICONS, SITE

__all__ = [
    "SITE",
    "ABOUT_PARAGRAPHS",
    "ABOUT_TILES",
    "FALLBACK_TAG_COLOR",
    "NAV_ITEMS",
    "SIDEBAR_SOCIAL_ICONS",
]
