"""Tests for text helpers."""

from __future__ import annotations

import pytest

from postcraft.blog.text import (
    count_words,
    derive_meta_description,
    escape_attr,
    escape_html,
    has_heading_tag,
    is_safe_url,
    slugify,
    strip_tags,
    text_to_html,
)


class TestEscaping:
    def test_escape_html_keeps_quotes(self):
        assert escape_html('<b>"hi" & \'bye\'</b>') == "&lt;b&gt;\"hi\" &amp; 'bye'&lt;/b&gt;"

    def test_escape_attr_escapes_quotes(self):
        assert escape_attr('a "b"') == "a &quot;b&quot;"


class TestUrls:
    @pytest.mark.parametrize(
        "url",
        ["https://example.com", "http://example.com/x", "mailto:hi@example.com", "/about", "#faq"],
    )
    def test_safe(self, url):
        assert is_safe_url(url)

    @pytest.mark.parametrize(
        "url",
        ["javascript:alert(1)", "JavaScript:alert(1)", "data:text/html,hi", "ftp://example.com"],
    )
    def test_unsafe(self, url):
        assert not is_safe_url(url)

    def test_text_to_html_mixed(self):
        out = text_to_html("Visit [us](https://example.com) & <smile>")
        assert out == 'Visit <a href="https://example.com">us</a> &amp; &lt;smile&gt;'


class TestStripTags:
    def test_drops_markup_scripts_and_comments(self):
        markup = '<p>Hello <b>world</b></p><!-- image: x --><script>var a = "b";</script>'
        assert strip_tags(markup).split() == ["Hello", "world"]

    def test_unescapes_entities(self):
        assert strip_tags("<p>Tom &amp; Jerry</p>").strip() == "Tom & Jerry"


class TestCounting:
    def test_count_words(self):
        assert count_words("  one two\nthree  ") == 3
        assert count_words("") == 0

    def test_heading_tag(self):
        assert has_heading_tag("text <H2>x</H2>")
        assert not has_heading_tag("<header>not a heading</header>")


class TestSlugify:
    def test_basic(self):
        assert slugify("Best Eco Bags!") == "best-eco-bags"

    def test_collapses_separators(self):
        assert slugify("Eco  Bags -- A_Guide") == "eco-bags-a-guide"

    def test_truncates(self):
        slug = slugify("word " * 30)
        assert len(slug) <= 60
        assert not slug.endswith("-")


class TestMetaDescription:
    def test_explicit_wins(self):
        assert derive_meta_description("  Given.  ", "Intro text") == "Given."

    def test_short_intro_used_whole(self):
        assert derive_meta_description("", "A short <b>intro</b>.") == "A short intro."

    def test_long_intro_truncated(self):
        desc = derive_meta_description("", "word " * 60)
        assert desc.endswith("...")
        assert len(desc) <= 153
