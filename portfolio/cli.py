"""
Command line entry point.

    portfolio serve [--host HOST] [--port PORT] [--reload]
    portfolio build [--output DIR] [--no-clean]
    portfolio plugins list
    portfolio plugins enable|disable NAME
"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

from portfolio.config import Settings, settings
from portfolio.exceptions import PortfolioError
from portfolio.middleware.logging import setup_structured_logging

logger = logging.getLogger("portfolio.cli")


def run_serve(args: argparse.Namespace, app_settings: Settings) -> int:
    import uvicorn

    uvicorn.run(
        "main:app",
        host=args.host,
        port=args.port,
        reload=args.reload,
        log_level=app_settings.log_level.lower(),
    )
    return 0


def run_build(args: argparse.Namespace, app_settings: Settings) -> int:
    from portfolio.plugins.loader import initialize_plugins
    from portfolio.plugins.registry import PluginRegistry
    from portfolio.services.build_service import BuildService
    from portfolio.services.page_service import create_page_service
    from portfolio.site_config import build_site_config

    # Built pages are what visitors get: analytics and the service worker are on
    build_settings = app_settings.model_copy(update={"environment": "production"})
    output_dir = Path(args.output) if args.output else build_settings.output_dir

    site = build_site_config(build_settings)
    registry = PluginRegistry()
    initialize_plugins(registry, site, build_settings)
    pages = create_page_service(site, build_settings, registry)

    result = BuildService(pages, registry, static_dir=build_settings.static_dir).build(
        output_dir, clean=not args.no_clean
    )
    print(f"Built {len(result.pages)} pages into {result.output_dir} ({result.duration_ms}ms)")
    return 0


def run_plugins(args: argparse.Namespace, app_settings: Settings) -> int:
    from portfolio.plugins.loader import builtin_plugins, load_plugins_config, save_plugins_config

    config_path = app_settings.plugins_config_file
    config = load_plugins_config(config_path)
    known = [plugin.meta.name for plugin in builtin_plugins()]

    if args.pcmd == "list":
        for name in known:
            state = "enabled" if config.get(name, {}).get("enabled", True) else "disabled"
            print(f"{name:20} {state}")
        return 0

    if args.name not in known:
        print(f"Unknown plugin: {args.name} (known: {', '.join(known)})", file=sys.stderr)
        return 2

    config.setdefault(args.name, {})["enabled"] = args.pcmd == "enable"
    save_plugins_config(config_path, config)
    logger.info(f"Plugin {args.name} {args.pcmd}d in {config_path}")
    print(f"{args.name} {args.pcmd}d; restart the server or rebuild to apply")
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="portfolio", description="Portfolio and blog site")
    sub = parser.add_subparsers(dest="cmd", required=True)

    p_serve = sub.add_parser("serve", help="Serve the site with uvicorn")
    p_serve.add_argument("--host", default="127.0.0.1")
    p_serve.add_argument("--port", type=int, default=8000)
    p_serve.add_argument("--reload", action="store_true", help="Reload on code changes")

    p_build = sub.add_parser("build", help="Render the site to static files")
    p_build.add_argument("--output", "-o", default=None, help="Output directory (default: settings.output_dir)")
    p_build.add_argument("--no-clean", action="store_true", help="Keep files from the previous build")

    p_plugins = sub.add_parser("plugins", help="List, enable or disable plugins")
    sub_plugins = p_plugins.add_subparsers(dest="pcmd", required=True)
    sub_plugins.add_parser("list")
    for action in ("enable", "disable"):
        sub_plugins.add_parser(action).add_argument("name")

    return parser


def main(argv: list[str] | None = None, app_settings: Settings | None = None) -> int:
    args = build_parser().parse_args(argv)
    app_settings = app_settings or settings
    setup_structured_logging(log_level=app_settings.log_level, json_format=app_settings.log_json)

    handlers = {"serve": run_serve, "build": run_build, "plugins": run_plugins}
    try:
        return handlers[args.cmd](args, app_settings)
    except PortfolioError as exc:
        logger.error(f"{exc.error_code.value}: {exc.message}", extra={"error_code": exc.error_code.value})
        print(f"error: {exc.message}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
