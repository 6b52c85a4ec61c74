"""
Tests for HTML text utilities

strip_tags feeds meta descriptions, dom_html renders authored copy and
truncate_text builds post excerpts.
"""

from markupsafe import Markup

from portfolio.constants.site import ABOUT_PARAGRAPHS
from portfolio.services.page_service import about_description
from portfolio.utils.sanitize import dom_html, strip_tags, truncate_text


class TestStripTags:
    """Plain text from authored HTML"""

    def test_strips_all_html_tags(self):
        clean = strip_tags("<div><p>Hello <strong>World</strong></p></div>")
        assert "<" not in clean
        assert ">" not in clean
        assert clean == "Hello World"

    def test_decodes_entities(self):
        assert strip_tags("Tom &amp; Jerry") == "Tom & Jerry"

    def test_spacing_entities_collapse_to_one_space(self):
        assert strip_tags("Hi!&ensp;&nbsp; there") == "Hi! there"

    def test_none_returns_empty_string(self):
        assert strip_tags(None) == ""


class TestAboutDescription:
    """The About page description is the stripped paragraphs joined by spaces"""

    def test_joins_paragraphs_with_single_spaces(self):
        assert about_description(["<b>One</b>", "Two &amp; three"]) == "One Two & three"

    def test_default_paragraphs_have_no_markup(self):
        description = about_description()
        assert "<b>" not in description
        assert "&ensp;" not in description
        assert "Ahmed Komsan" in description
        assert "  " not in description

    def test_one_segment_per_paragraph(self):
        description = about_description()
        for paragraph in ABOUT_PARAGRAPHS:
            assert strip_tags(paragraph) in description


class TestDomHtml:
    def test_returns_markup(self):
        assert isinstance(dom_html("<b>bold</b>"), Markup)

    def test_keeps_inline_formatting(self):
        assert str(dom_html("I'm <b>Ahmed</b>")) == "I'm <b>Ahmed</b>"

    def test_escapes_block_and_script_tags(self):
        rendered = str(dom_html("<script>alert(1)</script>"))
        assert "<script>" not in rendered
        assert "&lt;script&gt;" in rendered

    def test_drops_javascript_links(self):
        rendered = str(dom_html('<a href="javascript:alert(1)">x</a>'))
        assert "javascript:" not in rendered


class TestTruncateText:
    def test_short_text_unchanged(self):
        assert truncate_text("<p>Short post</p>") == "Short post"

    def test_cuts_on_word_boundary(self):
        text = "word " * 100
        excerpt = truncate_text(text, length=22)
        assert excerpt == "word word word word…"
        assert len(excerpt) <= 23
