"""
Pytest configuration and fixtures for portfolio tests
"""

import os
import sys
from pathlib import Path

import pytest
from fastapi.testclient import TestClient

sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), "..")))  # noqa: PTH100, PTH118, PTH119, PTH120

from portfolio.config import Settings  # noqa: E402
from portfolio.plugins.registry import PluginRegistry  # noqa: E402
from portfolio.site_config import build_site_config  # noqa: E402

POSTS = {
    "uikit-basics.md": (
        "---\n"
        "title: UIKit basics\n"
        "date: 2020-04-12\n"
        "tags: [UIKit, IOS]\n"
        "excerpt: Views and view controllers.\n"
        "---\n"
        "# Views\n\nA **view** draws content.\n"
    ),
    "swift-result.md": (
        "---\n"
        "title: Swift Result type\n"
        "date: 2020-06-03\n"
        "tags:\n"
        "  - Swift\n"
        "---\n"
        "Use `Result` in completion handlers.\n"
    ),
    "xcode-configs.md": (
        "---\n"
        "title: Xcode build configurations\n"
        "date: 2020-09-21\n"
        "tags: [IOS, Xcode]\n"
        "cover: /static/images/cover.png\n"
        "---\n"
        "Staging and production <b>configurations</b>.\n"
    ),
    "diffable.md": (
        "---\n"
        "slug: diffable-data-source\n"
        "title: Diffable data sources\n"
        "date: 2021-01-15\n"
        "tags: [UIKit, Swift]\n"
        "---\n"
        "Snapshots replace reloadData.\n"
    ),
    "draft.md": (
        "---\n"
        "title: Unfinished\n"
        "date: 2021-03-02\n"
        "tags: [Swift]\n"
        "draft: true\n"
        "---\n"
        "Notes.\n"
    ),
}


def write_posts(content_dir: Path, posts: dict[str, str]) -> Path:
    posts_dir = content_dir / "posts"
    posts_dir.mkdir(parents=True, exist_ok=True)
    for name, text in posts.items():
        (posts_dir / name).write_text(text, encoding="utf-8")
    return posts_dir


@pytest.fixture
def content_dir(tmp_path: Path) -> Path:
    """Content directory with four published posts, one draft and a resume."""
    directory = tmp_path / "content"
    write_posts(directory, POSTS)
    (directory / "resume.md").write_text("## Experience\n\nIOS engineer.\n", encoding="utf-8")
    return directory


@pytest.fixture
def app_settings(tmp_path: Path, content_dir: Path) -> Settings:
    return Settings(
        _env_file=None,
        environment="development",
        log_json=False,
        content_dir=content_dir,
        output_dir=tmp_path / "public",
        plugins_config_file=tmp_path / "plugins_config.json",
    )


@pytest.fixture
def site(app_settings: Settings):
    return build_site_config(app_settings)


@pytest.fixture
def registry() -> PluginRegistry:
    return PluginRegistry()


@pytest.fixture
def page_service(site, app_settings: Settings, registry: PluginRegistry):
    """PageService with the built-in plugins loaded."""
    from portfolio.plugins.loader import initialize_plugins
    from portfolio.services.page_service import create_page_service

    initialize_plugins(registry, site, app_settings)
    return create_page_service(site, app_settings, registry)


@pytest.fixture
def app(app_settings: Settings, registry: PluginRegistry):
    from main import create_app

    return create_app(app_settings, registry)


@pytest.fixture
def client(app):
    """Test client for an app serving the fixture content"""
    return TestClient(app)
