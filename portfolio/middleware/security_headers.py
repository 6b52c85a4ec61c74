"""
Security Headers Middleware

Adds the usual hardening headers to every response. The Content Security
Policy is built from the site's third-party embeds: Google Analytics,
Disqus comments and the external contact form endpoint.
"""

from typing import Callable
from urllib.parse import urlsplit

from fastapi import Request
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.responses import Response

ANALYTICS_ORIGINS = ("https://www.google-analytics.com",)
DISQUS_ORIGINS = ("https://*.disqus.com", "https://*.disquscdn.com")


def origin_of(url: str | None) -> str | None:
    """``scheme://host[:port]`` of an absolute URL, None for relative ones."""
    if not url:
        return None
    parts = urlsplit(url)
    if not parts.scheme or not parts.netloc:
        return None
    return f"{parts.scheme}://{parts.netloc}"


def build_csp(
    disqus_script: str | None = None,
    contact_form_url: str | None = None,
) -> str:
    """Content Security Policy allowing the configured embeds."""
    scripts = ["'self'", "'unsafe-inline'", *ANALYTICS_ORIGINS, *DISQUS_ORIGINS]
    disqus_origin = origin_of(disqus_script)
    if disqus_origin and disqus_origin not in scripts:
        scripts.append(disqus_origin)

    form_actions = ["'self'"]
    form_origin = origin_of(contact_form_url)
    if form_origin:
        form_actions.append(form_origin)

    return (
        "default-src 'self'; "
        f"script-src {' '.join(scripts)}; "
        "style-src 'self' 'unsafe-inline' https://*.disquscdn.com; "
        "img-src 'self' data: https:; "
        "font-src 'self' data:; "
        f"connect-src 'self' {' '.join(ANALYTICS_ORIGINS)} {' '.join(DISQUS_ORIGINS)}; "
        f"frame-src {' '.join(DISQUS_ORIGINS)}; "
        "frame-ancestors 'none'; "
        "base-uri 'self'; "
        f"form-action {' '.join(form_actions)}"
    )


class SecurityHeadersMiddleware(BaseHTTPMiddleware):
    """
    Middleware that adds security headers to all responses.

    Headers added:
    - X-Content-Type-Options: Prevent MIME type sniffing
    - X-Frame-Options: Prevent clickjacking
    - Content-Security-Policy: Control resource loading
    - Referrer-Policy: Control referrer information
    - Permissions-Policy: Control browser features
    - Strict-Transport-Security: Enforce HTTPS (when enabled)
    """

    def __init__(
        self,
        app,
        enable_hsts: bool = False,
        hsts_max_age: int = 31536000,  # 1 year
        csp_policy: str | None = None,
    ):
        super().__init__(app)
        self.enable_hsts = enable_hsts
        self.hsts_max_age = hsts_max_age
        self.csp_policy = csp_policy or build_csp()

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        response = await call_next(request)

        response.headers["X-Content-Type-Options"] = "nosniff"
        response.headers["X-Frame-Options"] = "DENY"
        response.headers["Content-Security-Policy"] = self.csp_policy
        response.headers["Referrer-Policy"] = "strict-origin-when-cross-origin"
        response.headers["Permissions-Policy"] = "geolocation=(), microphone=(), camera=(), payment=()"

        if self.enable_hsts:
            response.headers["Strict-Transport-Security"] = f"max-age={self.hsts_max_age}; includeSubDomains"

        if "Server" in response.headers:
            del response.headers["Server"]

        return response
