"""
Google Analytics Plugin

Emits the analytics.js loader and tracker setup for production pages.

Hook implementations:
  - on_render_body → tracking snippet in <head> (``head: true``) or after the body
"""

from __future__ import annotations

import fnmatch
import json
import logging
from typing import Any

from portfolio.plugins.args import RenderBodyArgs
from portfolio.plugins.base import PluginBase, PluginMeta

logger = logging.getLogger(__name__)

ANALYTICS_JS_URL = "https://www.google-analytics.com/analytics.js"

_DNT_CHECK = (
    "!(parseInt(navigator.doNotTrack) === 1 || parseInt(window.doNotTrack) === 1 || "
    'parseInt(navigator.msDoNotTrack) === 1 || navigator.doNotTrack === "yes")'
)

_META = PluginMeta(
    name="google-analytics",
    version="1.0.0",
    description="Google Analytics: analytics.js tracking snippet with anonymize-IP and Do-Not-Track support",
    config_schema={
        "tracking_id": {"type": "string"},
        "head": {"type": "boolean", "default": False},
        "anonymize": {"type": "boolean", "default": False},
        "respect_dnt": {"type": "boolean", "default": False},
        "exclude": {"type": "array", "items": {"type": "string"}, "default": []},
        "page_transition_delay": {"type": "integer", "default": 0},
    },
)


class AnalyticsPlugin(PluginBase):
    """Google Analytics tracking snippet."""

    default_options = {
        "tracking_id": "",
        "head": False,
        "anonymize": False,
        "respect_dnt": False,
        "exclude": [],
        "page_transition_delay": 0,
    }

    @property
    def meta(self) -> PluginMeta:
        return _META

    def is_excluded(self, pathname: str, options: dict[str, Any]) -> bool:
        return any(fnmatch.fnmatchcase(pathname, pattern) for pattern in options.get("exclude") or [])

    def tracking_script(self, options: dict[str, Any]) -> str:
        """Return the inline <script> element for the configured tracker."""
        condition = _DNT_CHECK if options.get("respect_dnt") else "true"
        tracking_id = json.dumps(options["tracking_id"])
        lines = [
            "<script>",
            f"if ({condition}) {{",
            "  (function(i,s,o,g,r,a,m){i['GoogleAnalyticsObject']=r;i[r]=i[r]||function(){",
            "  (i[r].q=i[r].q||[]).push(arguments)},i[r].l=1*new Date();a=s.createElement(o),",
            "  m=s.getElementsByTagName(o)[0];a.async=1;a.src=g;m.parentNode.insertBefore(a,m)",
            f"  }})(window,document,'script',{json.dumps(ANALYTICS_JS_URL)},'ga');",
            "}",
            'if (typeof ga === "function") {',
            f"  ga('create', {tracking_id}, 'auto', {{}});",
        ]
        if options.get("anonymize"):
            lines.append("  ga('set', 'anonymizeIp', true);")
        delay = int(options.get("page_transition_delay") or 0)
        if delay:
            lines.append(f"  setTimeout(function() {{ ga('send', 'pageview'); }}, {delay});")
        else:
            lines.append("  ga('send', 'pageview');")
        lines.extend(["}", "</script>"])
        return "\n".join(lines)

    def on_render_body(self, args: RenderBodyArgs, options: dict[str, Any]) -> None:
        if args.environment.lower() != "production":
            return None
        if not options.get("tracking_id"):
            logger.debug("AnalyticsPlugin: no tracking_id configured, snippet skipped")
            return None
        if self.is_excluded(args.pathname, options):
            return None

        script = self.tracking_script(options)
        if options.get("head"):
            args.set_head_components([script])
        else:
            args.set_post_body_components([script])
        return None
