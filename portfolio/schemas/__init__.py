from .contact import ContactMessage
from .post import Post, PostPage
from .seo import SeoMeta
from .site import AuthorProfile, SiteConfig, SocialLinks, TagEntry

# Define the public API of this module
__all__ = [
    "AuthorProfile",
    "ContactMessage",
    "Post",
    "PostPage",
    "SeoMeta",
    "SiteConfig",
    "SocialLinks",
    "TagEntry",
]
