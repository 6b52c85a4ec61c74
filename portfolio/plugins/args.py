"""
Hook argument objects.

Each hook receives one of these as its ``args``. Render hooks collect
markup through setter methods; the render service reads the collected
pieces back when it assembles the HTML document.
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from pathlib import Path
from typing import TYPE_CHECKING, Any

from markupsafe import Markup

if TYPE_CHECKING:
    from portfolio.schemas.seo import SeoMeta
    from portfolio.schemas.site import SiteConfig


@dataclass
class RenderBodyArgs:
    pathname: str
    site: SiteConfig
    environment: str = "development"
    seo: SeoMeta | None = None
    head_components: list[Markup] = field(default_factory=list)
    html_attributes: dict[str, str] = field(default_factory=dict)
    body_attributes: dict[str, str] = field(default_factory=dict)
    pre_body_components: list[Markup] = field(default_factory=list)
    post_body_components: list[Markup] = field(default_factory=list)

    def set_head_components(self, components: list[str]) -> None:
        self.head_components.extend(Markup(c) for c in components)

    def set_html_attributes(self, attributes: dict[str, str]) -> None:
        self.html_attributes.update(attributes)

    def set_body_attributes(self, attributes: dict[str, str]) -> None:
        self.body_attributes.update(attributes)

    def set_pre_body_components(self, components: list[str]) -> None:
        self.pre_body_components.extend(Markup(c) for c in components)

    def set_post_body_components(self, components: list[str]) -> None:
        self.post_body_components.extend(Markup(c) for c in components)


@dataclass
class PreRenderHtmlArgs:
    pathname: str
    head_components: list[Markup] = field(default_factory=list)
    pre_body_components: list[Markup] = field(default_factory=list)
    post_body_components: list[Markup] = field(default_factory=list)

    def get_head_components(self) -> list[Markup]:
        return list(self.head_components)

    def replace_head_components(self, components: list[str]) -> None:
        self.head_components = [Markup(c) for c in components]

    def get_pre_body_components(self) -> list[Markup]:
        return list(self.pre_body_components)

    def replace_pre_body_components(self, components: list[str]) -> None:
        self.pre_body_components = [Markup(c) for c in components]

    def get_post_body_components(self) -> list[Markup]:
        return list(self.post_body_components)

    def replace_post_body_components(self, components: list[str]) -> None:
        self.post_body_components = [Markup(c) for c in components]


@dataclass(frozen=True)
class WrapPageArgs:
    element: Markup
    pathname: str
    props: dict[str, Any] = field(default_factory=dict)


def chain_element(*, args: WrapPageArgs, result: str) -> WrapPageArgs:
    """``arg_transform`` for wrap_page_element: the next plugin wraps the previous result."""
    return replace(args, element=Markup(result))


@dataclass
class PostBuildArgs:
    output_dir: Path
    site: SiteConfig
    paths: list[str] = field(default_factory=list)
    environment: str = "production"
