"""Tests for the section catalogue."""

from __future__ import annotations

import pytest

from postcraft.blog.models import BlogSections
from postcraft.blog.sections import (
    CANONICAL_ORDER,
    SectionId,
    compact,
    match_heading,
    section_heading,
    suggest_alt_text,
)


class TestMatchHeading:
    @pytest.mark.parametrize(
        "line,expected",
        [
            ("## What Is", SectionId.WHAT_IS),
            ("What is it?", SectionId.WHAT_IS),
            ("# Benefits", SectionId.BENEFITS),
            ("How It Works:", SectionId.HOW_IT_WORKS),
            ("Use-Cases", SectionId.USE_CASES),
            ("**Brand Promotion**", SectionId.BRAND_PROMOTION),
            ("FAQ", SectionId.FAQS),
            ("Frequently Asked Questions", SectionId.FAQS),
            ("Intro", SectionId.INTRODUCTION),
        ],
    )
    def test_aliases(self, line, expected):
        assert match_heading(line) == expected

    def test_unknown(self):
        assert match_heading("Shipping and returns") is None

    def test_compact(self):
        assert compact("How It Works!") == "howitworks"


class TestHeadings:
    def test_keyword_inserted(self):
        assert section_heading(SectionId.HOW_IT_WORKS, "eco bags") == (
            "How eco bags Works: Step-by-Step Process"
        )

    def test_without_keyword(self):
        assert section_heading(SectionId.FAQS, "") == "Frequently Asked Questions About It"

    def test_brand_uses_label(self):
        assert section_heading(SectionId.BRAND_PROMOTION, "eco bags") == "Brand Promotion"

    def test_alt_text(self):
        assert suggest_alt_text("featured", "eco bags") == "eco bags - Complete Guide"
        assert suggest_alt_text(SectionId.TYPES, "eco bags") == "eco bags types comparison"
        assert suggest_alt_text(SectionId.CONCLUSION, "eco bags") == "eco bags"


class TestSlots:
    def test_mapping_is_total_and_ordered(self):
        mapping = BlogSections().as_mapping()
        assert tuple(mapping) == CANONICAL_ORDER
        assert len(mapping) == 8
