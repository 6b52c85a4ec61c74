import logging

from fastapi import FastAPI
from fastapi.staticfiles import StaticFiles

from portfolio.config import Settings, settings
from portfolio.exception_handlers import register_exception_handlers
from portfolio.middleware.etag import ETagMiddleware
from portfolio.middleware.logging import StructuredLoggingMiddleware, setup_structured_logging
from portfolio.middleware.security_headers import SecurityHeadersMiddleware, build_csp
from portfolio.plugins.loader import initialize_plugins
from portfolio.plugins.registry import PluginRegistry, plugin_registry
from portfolio.routes import pages, plugins, seo
from portfolio.services.contact_service import ContactService
from portfolio.services.page_service import create_page_service
from portfolio.site_config import build_site_config

logger = logging.getLogger("portfolio")


def create_app(app_settings: Settings | None = None, registry: PluginRegistry | None = None) -> FastAPI:
    """Create the FastAPI application serving the site."""
    app_settings = app_settings or settings
    registry = registry if registry is not None else plugin_registry

    setup_structured_logging(log_level=app_settings.log_level, json_format=app_settings.log_json)

    site = build_site_config(app_settings)
    initialize_plugins(registry, site, app_settings)

    app = FastAPI(
        title=app_settings.app_name,
        description="Personal portfolio and blog",
        debug=app_settings.debug,
        version=app_settings.app_version,
    )

    page_service = create_page_service(site, app_settings, registry)
    app.state.settings = app_settings
    app.state.site = site
    app.state.registry = registry
    app.state.pages = page_service
    app.state.content = page_service.content
    app.state.contact = (
        ContactService(app_settings.contact_form_endpoint, timeout=app_settings.contact_timeout_seconds)
        if app_settings.contact_relay_enabled
        else None
    )

    # Last added runs first: logging wraps everything
    app.add_middleware(ETagMiddleware)
    app.add_middleware(
        SecurityHeadersMiddleware,
        enable_hsts=app_settings.is_production,
        csp_policy=build_csp(site.disqus_script, site.contact_form_url),
    )
    app.add_middleware(StructuredLoggingMiddleware)

    app.include_router(plugins.router)
    app.include_router(seo.router)
    app.include_router(pages.router)

    app.mount("/static", StaticFiles(directory=str(app_settings.static_dir)), name="static")

    register_exception_handlers(app)

    logger.info(
        f"Running in {app_settings.environment} mode with {len(registry.entries())} plugins",
    )
    return app


app = create_app()
