"""
Plugin Hook Constants

Centralised list of hook names a plugin may implement. A plugin
implements a hook by defining a method with the hook's name; the
registry calls it as ``hook(args, options)``.
"""

from __future__ import annotations

# ── Server-side rendering ─────────────────────────────────────────────────────
HOOK_ON_RENDER_BODY = "on_render_body"
HOOK_ON_PRE_RENDER_HTML = "on_pre_render_html"
HOOK_WRAP_PAGE_ELEMENT = "wrap_page_element"

# ── Static build ──────────────────────────────────────────────────────────────
HOOK_ON_POST_BUILD = "on_post_build"

# ── Master list ───────────────────────────────────────────────────────────────
ALL_HOOKS: list[str] = [
    HOOK_ON_RENDER_BODY,
    HOOK_ON_PRE_RENDER_HTML,
    HOOK_WRAP_PAGE_ELEMENT,
    HOOK_ON_POST_BUILD,
]

# Name of the entry holding the site's own hooks. Errors raised by it are
# not annotated with a plugin name.
DEFAULT_SITE_PLUGIN = "default-site-plugin"
