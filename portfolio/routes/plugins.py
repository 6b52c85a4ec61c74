"""
Plugin Inspection Routes

GET /api/plugins          → loaded plugins in run order
GET /api/plugins/{name}   → single plugin by name

Read-only: plugins are enabled, disabled and configured through
data/plugins_config.json (see ``portfolio plugins``) and take effect on
the next start.
"""

from __future__ import annotations

from typing import Any

from fastapi import APIRouter, Depends, Request
from pydantic import BaseModel

from portfolio.exceptions import ResourceNotFoundError
from portfolio.plugins.base import PluginEntry
from portfolio.plugins.registry import PluginRegistry

router = APIRouter(prefix="/api/plugins", tags=["Plugins"])


class PluginResponse(BaseModel):
    name: str
    position: int
    version: str
    description: str
    author: str
    hooks: list[str]
    options: dict[str, Any]
    config_schema: dict[str, Any]


def get_registry(request: Request) -> PluginRegistry:
    return request.app.state.registry


def _build_response(entry: PluginEntry, position: int) -> PluginResponse:
    meta = entry.plugin.meta
    return PluginResponse(
        name=entry.name,
        position=position,
        version=meta.version,
        description=meta.description,
        author=meta.author,
        hooks=entry.plugin.implemented_hooks(),
        options=entry.options,
        config_schema=meta.config_schema,
    )


@router.get("", response_model=list[PluginResponse])
def list_plugins(registry: PluginRegistry = Depends(get_registry)) -> list[PluginResponse]:
    return [_build_response(entry, position) for position, entry in enumerate(registry.entries())]


@router.get("/{name}", response_model=PluginResponse)
def get_plugin(name: str, registry: PluginRegistry = Depends(get_registry)) -> PluginResponse:
    for position, entry in enumerate(registry.entries()):
        if entry.name == name:
            return _build_response(entry, position)
    raise ResourceNotFoundError("Plugin", name)
