"""
SEO Routes

Feeds, crawler files and plugin-generated assets, served live with the
same generators the static build writes to disk.
"""

from pathlib import Path

from fastapi import APIRouter, Depends, HTTPException, Request, status
from fastapi.responses import JSONResponse, Response

from portfolio.exceptions import ResourceNotFoundError
from portfolio.plugins.base import PluginEntry
from portfolio.plugins.manifest_plugin import MANIFEST_FILENAME, icon_size_from_filename, resize_icon
from portfolio.plugins.offline_plugin import SERVICE_WORKER_FILENAME
from portfolio.plugins.registry import PluginRegistry
from portfolio.services.seo_service import SEOService

router = APIRouter(tags=["SEO"])

RSS_PATH = "/rss.xml"


def get_registry(request: Request) -> PluginRegistry:
    return request.app.state.registry


def get_seo_service(request: Request) -> SEOService:
    return SEOService(request.app.state.site)


def require_plugin(registry: PluginRegistry, name: str) -> PluginEntry:
    entry = registry.get(name)
    if entry is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=f"Plugin '{name}' is not enabled")
    return entry


def sitemap_index_path(registry: PluginRegistry) -> str | None:
    entry = registry.get("sitemap")
    return entry.plugin.index_path(entry.options) if entry else None


@router.get(RSS_PATH)
def get_rss_feed(request: Request, service: SEOService = Depends(get_seo_service)) -> Response:
    """RSS 2.0 feed of the newest posts."""
    feed = service.generate_rss_feed(request.app.state.content.posts, feed_path=RSS_PATH)
    return Response(
        content=feed,
        media_type="application/rss+xml",
        headers={"Cache-Control": "public, max-age=3600"},
    )


@router.get("/robots.txt")
def get_robots_txt(
    service: SEOService = Depends(get_seo_service),
    registry: PluginRegistry = Depends(get_registry),
) -> Response:
    return Response(
        content=service.generate_robots_txt(sitemap_path=sitemap_index_path(registry)),
        media_type="text/plain",
        headers={"Cache-Control": "public, max-age=86400"},
    )


@router.get("/sitemap/{filename}")
def get_sitemap(
    filename: str,
    request: Request,
    service: SEOService = Depends(get_seo_service),
    registry: PluginRegistry = Depends(get_registry),
) -> Response:
    """Sitemap index or one URL-set chunk."""
    entry = require_plugin(registry, "sitemap")
    documents = entry.plugin.generate(service, request.app.state.pages.all_paths(), entry.options)
    if filename not in documents:
        raise ResourceNotFoundError("Sitemap", filename)
    return Response(
        content=documents[filename],
        media_type="application/xml",
        headers={"Cache-Control": "public, max-age=3600"},
    )


@router.get(f"/{MANIFEST_FILENAME}")
def get_manifest(registry: PluginRegistry = Depends(get_registry)) -> JSONResponse:
    entry = require_plugin(registry, "manifest")
    return JSONResponse(entry.plugin.build_manifest(entry.options), media_type="application/manifest+json")


@router.get("/favicon-{suffix}")
def get_favicon(suffix: str, registry: PluginRegistry = Depends(get_registry)) -> Response:
    return get_icon(f"favicon-{suffix}", registry)


@router.get("/icons/{filename}")
def get_icon(filename: str, registry: PluginRegistry = Depends(get_registry)) -> Response:
    """Manifest icons and favicon, resized from the source icon on request."""
    entry = require_plugin(registry, "manifest")
    size = icon_size_from_filename(filename)
    source = Path(entry.options["icon"]) if entry.options.get("icon") else None
    if size is None or source is None or not source.is_file():
        raise ResourceNotFoundError("Icon", filename)
    return Response(
        content=resize_icon(source, size),
        media_type="image/png",
        headers={"Cache-Control": "public, max-age=86400"},
    )


@router.get(f"/{SERVICE_WORKER_FILENAME}")
def get_service_worker(registry: PluginRegistry = Depends(get_registry)) -> Response:
    entry = require_plugin(registry, "offline")
    return Response(
        content=entry.plugin.service_worker(entry.options),
        media_type="text/javascript",
        headers={"Cache-Control": "no-cache"},
    )
