"""
Tests for the static build and the command line
"""

import json

import pytest
from PIL import Image

from conftest import write_posts
from portfolio.cli import build_parser, main
from portfolio.plugins.loader import load_plugins_config
from portfolio.services.build_service import BuildService, page_file


@pytest.fixture
def builder(page_service, registry, app_settings) -> BuildService:
    return BuildService(page_service, registry, static_dir=app_settings.static_dir)


class TestPageFile:
    @pytest.mark.parametrize(
        "path,expected",
        [("/", "index.html"), ("/blog", "blog/index.html"), ("/blog/page/2", "blog/page/2/index.html")],
    )
    def test_directory_index(self, tmp_path, path, expected):
        assert page_file(tmp_path, path) == tmp_path / expected


class TestBuildService:
    def test_every_page_written(self, builder, tmp_path):
        output = tmp_path / "site"
        result = builder.build(output)

        assert result.output_dir == output
        for path in result.pages:
            assert page_file(output, path).is_file()
        assert (output / "blog" / "diffable-data-source" / "index.html").is_file()
        assert (output / "blog" / "page" / "2" / "index.html").is_file()
        assert (output / "tags" / "xcode" / "index.html").is_file()
        assert not (output / "blog" / "draft").exists()

    def test_404_page(self, builder, tmp_path):
        builder.build(tmp_path / "site")
        assert "sidebar-404-radius" in (tmp_path / "site" / "404.html").read_text(encoding="utf-8")

    def test_feeds_and_static(self, builder, tmp_path):
        output = tmp_path / "site"
        builder.build(output)

        assert "<rss" in (output / "rss.xml").read_text(encoding="utf-8")
        assert "Sitemap:" in (output / "robots.txt").read_text(encoding="utf-8")
        assert (output / "static" / "images" / "icon.png").is_file()

    def test_plugin_files(self, builder, tmp_path):
        output = tmp_path / "site"
        builder.build(output)

        assert (output / "sitemap" / "sitemap-index.xml").is_file()
        assert (output / "sitemap" / "sitemap-0.xml").is_file()
        assert (output / "sw.js").is_file()
        manifest = json.loads((output / "manifest.webmanifest").read_text(encoding="utf-8"))
        assert len(manifest["icons"]) == 8
        with Image.open(output / "icons" / "icon-512x512.png") as icon:
            assert icon.size == (512, 512)
        assert (output / "favicon-32x32.png").is_file()

    def test_clean_removes_previous_build(self, builder, tmp_path):
        output = tmp_path / "site"
        output.mkdir()
        (output / "stale.html").write_text("old", encoding="utf-8")

        builder.build(output, clean=False)
        assert (output / "stale.html").exists()
        builder.build(output)
        assert not (output / "stale.html").exists()

    def test_unknown_path(self, builder):
        with pytest.raises(ValueError):
            builder.render_path("/archive")

    def test_tags_sharing_a_slug_built_once(self, builder, content_dir, tmp_path):
        write_posts(content_dir, {"ios-lower.md": "---\ntitle: Lowercase spelling\ndate: 2021-02-01\ntags: [iOS]\n---\nbody\n"})
        result = builder.build(tmp_path / "site")
        assert result.pages.count("/tags/ios") == 1
        assert len(result.pages) == len(set(result.pages))


class TestCli:
    def test_parser_requires_command(self):
        with pytest.raises(SystemExit):
            build_parser().parse_args([])

    def test_build_command(self, app_settings, tmp_path, capsys):
        output = tmp_path / "out"
        assert main(["build", "-o", str(output)], app_settings) == 0

        assert "Built" in capsys.readouterr().out
        home = (output / "index.html").read_text(encoding="utf-8")
        # Built pages are production pages
        assert "google-analytics.com" in home
        assert "serviceWorker" in home

    def test_plugins_list(self, app_settings, capsys):
        assert main(["plugins", "list"], app_settings) == 0
        out = capsys.readouterr().out
        assert "sitemap" in out
        assert "enabled" in out

    def test_disable_and_enable(self, app_settings, capsys):
        assert main(["plugins", "disable", "offline"], app_settings) == 0
        assert load_plugins_config(app_settings.plugins_config_file)["offline"]["enabled"] is False

        main(["plugins", "list"], app_settings)
        assert "disabled" in capsys.readouterr().out

        assert main(["plugins", "enable", "offline"], app_settings) == 0
        assert load_plugins_config(app_settings.plugins_config_file)["offline"]["enabled"] is True

    def test_disabled_plugin_skipped_in_build(self, app_settings, tmp_path):
        main(["plugins", "disable", "offline"], app_settings)
        output = tmp_path / "out"
        main(["build", "-o", str(output)], app_settings)
        assert not (output / "sw.js").exists()

    def test_plugins_list_with_non_object_entry(self, app_settings, capsys):
        app_settings.plugins_config_file.write_text(json.dumps({"sitemap": True}), encoding="utf-8")
        assert main(["plugins", "list"], app_settings) == 0
        assert "sitemap" in capsys.readouterr().out

    def test_unknown_plugin(self, app_settings, capsys):
        assert main(["plugins", "enable", "nope"], app_settings) == 2
        assert "Unknown plugin: nope" in capsys.readouterr().err

    def test_content_error_exit_code(self, app_settings, content_dir, capsys):
        (content_dir / "posts" / "broken.md").write_text("---\ndate: 2021-01-01\n---\n", encoding="utf-8")
        assert main(["build", "-o", str(content_dir.parent / "out")], app_settings) == 1
        assert "has no title" in capsys.readouterr().err
