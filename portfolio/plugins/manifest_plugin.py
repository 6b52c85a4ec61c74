"""
Web App Manifest Plugin

Generates ``manifest.webmanifest`` and the icon set derived from one
source image, and links them from every page.

Hook implementations:
  - on_render_body → manifest link, favicon, theme-color, legacy apple-touch-icons
  - on_post_build  → write manifest.webmanifest, resize icons with Pillow
"""

from __future__ import annotations

import hashlib
import io
import json
import logging
import re
from pathlib import Path
from typing import Any

from markupsafe import escape
from PIL import Image

from portfolio.plugins.args import PostBuildArgs, RenderBodyArgs
from portfolio.plugins.base import PluginBase, PluginMeta

logger = logging.getLogger(__name__)

MANIFEST_FILENAME = "manifest.webmanifest"
FAVICON_SIZE = 32
ICON_SIZES = [48, 72, 96, 144, 192, 256, 384, 512]

_META = PluginMeta(
    name="manifest",
    version="1.0.0",
    description="Web app manifest: installable-site metadata, favicon and icon set generation",
    config_schema={
        "name": {"type": "string"},
        "short_name": {"type": "string"},
        "start_url": {"type": "string", "default": "/"},
        "background_color": {"type": "string"},
        "theme_color": {"type": "string"},
        "display": {"type": "string", "default": "standalone"},
        "icon": {"type": "string"},
        "legacy": {"type": "boolean", "default": True},
        "theme_color_in_head": {"type": "boolean", "default": True},
        "cache_busting_mode": {"type": "string", "enum": ["query", "name", "none"], "default": "query"},
        "crossorigin": {"type": "string", "default": "anonymous"},
        "include_favicon": {"type": "boolean", "default": True},
    },
)


def icon_digest(icon_path: Path) -> str:
    """MD5 of the source icon; empty string when the icon does not exist."""
    if not icon_path.is_file():
        return ""
    return hashlib.md5(icon_path.read_bytes()).hexdigest()  # nosec S324


def _bust(path: str, digest: str, mode: str) -> str:
    if not digest or mode == "none":
        return path
    if mode == "name":
        stem, dot, ext = path.rpartition(".")
        return f"{stem}-{digest}{dot}{ext}"
    return f"{path}?v={digest}"


ICON_FILENAME_RE = re.compile(r"^(?:icon|favicon)-(\d+)x\1(?:-[0-9a-f]{32})?\.png$")


def icon_size_from_filename(filename: str) -> int | None:
    """Size encoded in a generated icon file name, busted or not."""
    match = ICON_FILENAME_RE.match(filename)
    if match is None:
        return None
    size = int(match.group(1))
    return size if size in ICON_SIZES or size == FAVICON_SIZE else None


def resize_icon(source: Path, size: int) -> bytes:
    """PNG bytes of the source image scaled to a square icon."""
    buffer = io.BytesIO()
    with Image.open(source) as image:
        image.convert("RGBA").resize((size, size), Image.Resampling.LANCZOS).save(buffer, "PNG")
    return buffer.getvalue()


class ManifestPlugin(PluginBase):
    """Web app manifest and icon generation."""

    default_options = {
        "start_url": "/",
        "display": "standalone",
        "legacy": True,
        "theme_color_in_head": True,
        "cache_busting_mode": "query",
        "crossorigin": "anonymous",
        "include_favicon": True,
        "cache_digest": "",
    }

    @property
    def meta(self) -> PluginMeta:
        return _META

    def icon_url(self, size: int, options: dict[str, Any]) -> str:
        return _bust(f"/icons/icon-{size}x{size}.png", options.get("cache_digest", ""), options["cache_busting_mode"])

    def build_manifest(self, options: dict[str, Any]) -> dict[str, Any]:
        """Return the manifest document for the given options."""
        manifest: dict[str, Any] = {
            "name": options.get("name", ""),
            "short_name": options.get("short_name") or options.get("name", ""),
            "start_url": options["start_url"],
            "background_color": options.get("background_color", "#ffffff"),
            "theme_color": options.get("theme_color", "#ffffff"),
            "display": options["display"],
        }
        if options.get("icon"):
            manifest["icons"] = [
                {"src": self.icon_url(size, options), "sizes": f"{size}x{size}", "type": "image/png"}
                for size in ICON_SIZES
            ]
        return manifest

    def on_render_body(self, args: RenderBodyArgs, options: dict[str, Any]) -> None:
        digest = options.get("cache_digest", "")
        mode = options["cache_busting_mode"]
        components: list[str] = []

        if options.get("icon") and options.get("include_favicon"):
            favicon = _bust(f"/favicon-{FAVICON_SIZE}x{FAVICON_SIZE}.png", digest, mode)
            components.append(f'<link rel="icon" href="{escape(favicon)}" type="image/png"/>')

        components.append(
            f'<link rel="manifest" href="/{MANIFEST_FILENAME}" crossorigin="{escape(options["crossorigin"])}"/>'
        )

        if options.get("theme_color_in_head") and options.get("theme_color"):
            components.append(f'<meta name="theme-color" content="{escape(options["theme_color"])}"/>')

        if options.get("icon") and options.get("legacy"):
            for size in ICON_SIZES:
                components.append(
                    f'<link rel="apple-touch-icon" sizes="{size}x{size}" href="{escape(self.icon_url(size, options))}"/>'
                )

        args.set_head_components(components)
        return None

    def on_post_build(self, args: PostBuildArgs, options: dict[str, Any]) -> list[Path]:
        written: list[Path] = []
        manifest_path = args.output_dir / MANIFEST_FILENAME
        manifest_path.write_text(json.dumps(self.build_manifest(options), indent=2), encoding="utf-8")
        written.append(manifest_path)

        source = Path(options["icon"]) if options.get("icon") else None
        if source is None or not source.is_file():
            if source is not None:
                logger.warning("Manifest icon %s not found; icon set not generated", source)
            return written

        icons_dir = args.output_dir / "icons"
        icons_dir.mkdir(parents=True, exist_ok=True)
        digest = options.get("cache_digest", "")
        name_mode = options["cache_busting_mode"] == "name"

        for size in ICON_SIZES:
            filename = _bust(f"icon-{size}x{size}.png", digest, "name") if name_mode else f"icon-{size}x{size}.png"
            target = icons_dir / filename
            target.write_bytes(resize_icon(source, size))
            written.append(target)
        if options.get("include_favicon"):
            favicon_name = f"favicon-{FAVICON_SIZE}x{FAVICON_SIZE}.png"
            favicon = args.output_dir / (_bust(favicon_name, digest, "name") if name_mode else favicon_name)
            favicon.write_bytes(resize_icon(source, FAVICON_SIZE))
            written.append(favicon)

        logger.info("ManifestPlugin: wrote manifest and %d icon files", len(written) - 1)
        return written
