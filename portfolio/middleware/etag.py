"""
ETag Middleware

Pages, feeds and sitemaps only change when content or configuration
changes, so GET responses carry a content hash ETag and a matching
``If-None-Match`` gets 304 Not Modified.
"""

import hashlib

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

# Static files already get ETags from StaticFiles
EXCLUDED_PREFIXES = ("/static/",)

CACHEABLE_TYPES = (
    "text/html",
    "application/xml",
    "application/rss+xml",
    "text/xml",
    "text/plain",
    "text/javascript",
    "application/javascript",
    "application/json",
    "application/manifest+json",
)


def compute_etag(body: bytes) -> str:
    return '"' + hashlib.md5(body).hexdigest() + '"'  # nosec S324


def etag_matches(if_none_match: str | None, etag: str) -> bool:
    """``If-None-Match`` may list several tags, weak or strong, or ``*``."""
    if not if_none_match:
        return False
    candidates = [tag.strip() for tag in if_none_match.split(",")]
    return "*" in candidates or any(tag.removeprefix("W/") == etag for tag in candidates)


class ETagMiddleware(BaseHTTPMiddleware):
    async def dispatch(self, request: Request, call_next: RequestResponseEndpoint) -> Response:
        if request.method != "GET" or request.url.path.startswith(EXCLUDED_PREFIXES):
            return await call_next(request)

        response = await call_next(request)

        content_type = response.headers.get("content-type", "")
        if response.status_code != 200 or not content_type.startswith(CACHEABLE_TYPES):
            return response

        if "content-disposition" in response.headers or "etag" in response.headers:
            return response

        body = b""
        async for chunk in response.body_iterator:
            body += chunk if isinstance(chunk, bytes) else chunk.encode()

        etag = compute_etag(body)

        if etag_matches(request.headers.get("if-none-match"), etag):
            headers = {"ETag": etag}
            if "cache-control" in response.headers:
                headers["Cache-Control"] = response.headers["cache-control"]
            return Response(status_code=304, headers=headers)

        headers = dict(response.headers)
        headers.pop("content-length", None)
        headers["ETag"] = etag
        return Response(
            content=body,
            status_code=response.status_code,
            headers=headers,
            media_type=response.media_type,
        )
