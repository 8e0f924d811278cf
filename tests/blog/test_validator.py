"""Tests for the content rules validator."""

from __future__ import annotations

import pytest
from pydantic import ValidationError

from postcraft.blog.models import (
    BlogPost,
    BlogValidationRules,
    BrandPromotionSection,
    FAQItem,
    ImageData,
    Severity,
)
from postcraft.blog.parser import parse
from postcraft.blog.validator import validate


def _valid_post(intro: str) -> BlogPost:
    return BlogPost(
        primary_keyword="eco bags",
        h1_title="Best Eco Bags",
        featured_image=ImageData(file_reference="hero.jpg", alt="eco bags - Complete Guide"),
        introduction=intro,
    )


def _errors_for(post: BlogPost, section: str) -> list[str]:
    return [
        d.message
        for d in validate(post).for_section(section)
        if d.severity == Severity.ERROR
    ]


class TestRequiredFields:
    def test_empty_post(self):
        state = validate(parse(""))
        assert not state.is_valid
        assert "Primary keyword is required" in state.errors
        assert "Blog title (H1) is required" in state.errors
        assert "Featured image is required" in state.errors
        assert "Introduction paragraph is required" in state.errors
        assert state.completed_sections == []

    def test_minimal_document_is_valid(self, minimal):
        state = validate(parse(minimal))
        assert state.is_valid
        assert state.errors == []

    def test_full_document_is_valid_without_warnings(self, full_document):
        state = validate(parse(full_document))
        assert state.is_valid
        assert state.warnings == []
        assert state.completed_sections == [
            "primaryKeyword",
            "h1Title",
            "featuredImage",
            "introduction",
            "whatIs",
            "benefits",
            "types",
            "howItWorks",
            "useCases",
            "faqs",
            "brandPromotion",
            "conclusion",
        ]

    def test_featured_alt_required(self, intro):
        post = _valid_post(intro)
        post.featured_image = ImageData(file_reference="hero.jpg", alt="")
        assert _errors_for(post, "featuredImage") == ["Featured image alt text is required"]


class TestTitle:
    def test_title_must_include_keyword(self, intro):
        post = _valid_post(intro)
        post.h1_title = "Best Reusable Totes"
        assert _errors_for(post, "h1Title") == ["H1 title must include the primary keyword"]

    def test_keyword_match_ignores_case(self, intro):
        post = _valid_post(intro)
        post.h1_title = "ECO BAGS Explained"
        assert _errors_for(post, "h1Title") == []

    def test_heading_tags_rejected(self, intro):
        post = _valid_post(intro)
        post.h1_title = "<h2>Best Eco Bags</h2>"
        assert "H1 title cannot contain HTML heading tags" in _errors_for(post, "h1Title")

    def test_keyword_check_can_be_disabled(self, intro):
        post = _valid_post(intro)
        post.h1_title = "Something Else"
        state = validate(post, BlogValidationRules(h1_has_keyword=False))
        assert state.is_valid


class TestIntroduction:
    def test_short_intro_warns(self):
        state = validate(_valid_post("Too short."))
        assert state.is_valid
        assert state.warnings[0].startswith("Introduction is too short (2 words")

    def test_long_intro_warns(self):
        state = validate(_valid_post(" ".join(["word"] * 181)))
        assert any(w.startswith("Introduction is too long (181 words") for w in state.warnings)

    def test_heading_tags_in_intro(self, intro):
        post = _valid_post(f"<h3>Intro</h3> {intro}")
        assert _errors_for(post, "introduction") == [
            "Introduction paragraph cannot contain heading tags"
        ]

    def test_custom_minimum(self):
        rules = BlogValidationRules(introduction_min_words=2)
        state = validate(_valid_post("Too short."), rules)
        assert not any("too short" in w for w in state.warnings)


class TestSectionRules:
    def test_empty_lists_warn(self, minimal):
        warnings = validate(parse(minimal)).warnings
        assert "Benefits section has no items" in warnings
        assert "FAQs section has no items" in warnings
        assert "'What Is' section is empty" in warnings
        assert "Conclusion is empty" in warnings

    def test_incomplete_faq_warns(self, intro):
        post = _valid_post(intro)
        post.sections.faqs.items = [FAQItem(question="Why?")]
        assert "1 FAQ item(s) are missing a question or an answer" in validate(post).warnings

    def test_too_many_faqs_warns(self, intro):
        post = _valid_post(intro)
        post.sections.faqs.items = [FAQItem(question=f"Q{i}?", answer="A.") for i in range(7)]
        assert "FAQs section should have at most 6 items (currently 7)" in validate(post).warnings

    def test_faq_answer_heading_tags(self, intro):
        post = _valid_post(intro)
        post.sections.faqs.items = [FAQItem(question="Why?", answer="<h2>Because</h2>")]
        assert _errors_for(post, "faqs") == ["FAQ answers cannot contain heading tags"]

    def test_enabled_brand_needs_name(self, intro):
        post = _valid_post(intro)
        post.sections.brand_promotion = BrandPromotionSection(enabled=True, cta="Buy now")
        state = validate(post)
        assert "Brand name is required when Brand Promotion is enabled" in state.errors
        assert "brandPromotion" not in state.completed_sections

    def test_disabled_brand_is_not_checked(self, intro):
        post = _valid_post(intro)
        post.sections.brand_promotion = BrandPromotionSection(enabled=False)
        state = validate(post)
        assert state.is_valid
        assert "brandPromotion" not in state.completed_sections


class TestMonotonicity:
    @pytest.mark.parametrize(
        "field,section,value",
        [
            ("primary_keyword", "primaryKeyword", "eco bags"),
            ("h1_title", "h1Title", "Best Eco Bags"),
            ("h1_title", "h1Title", "Unrelated Title"),
            ("h1_title", "h1Title", "<h2>Best Totes</h2>"),
            ("h1_title", "h1Title", "<h2>Best Eco Bags</h2>"),
            ("introduction", "introduction", "Short intro."),
            ("introduction", "introduction", "<h2>Intro</h2>"),
        ],
    )
    def test_filling_a_field_never_adds_errors(self, field, section, value):
        empty = BlogPost(primary_keyword="eco bags")
        if field == "primary_keyword":
            empty = BlogPost()
        filled = empty.model_copy(update={field: value})
        assert len(_errors_for(filled, section)) <= len(_errors_for(empty, section))

    @pytest.mark.parametrize(
        "rules",
        [
            BlogValidationRules(),
            BlogValidationRules(h1_count=0),
            BlogValidationRules(h1_has_keyword=False),
        ],
    )
    def test_heading_tag_title_under_any_rules(self, rules):
        empty = BlogPost(primary_keyword="eco bags")
        filled = empty.model_copy(update={"h1_title": "<h2>Best Totes</h2>"})

        def count(post: BlogPost) -> int:
            return len(
                [
                    d
                    for d in validate(post, rules).for_section("h1Title")
                    if d.severity == Severity.ERROR
                ]
            )

        assert count(filled) <= count(empty)

    def test_empty_title_fails_keyword_rule(self):
        errors = _errors_for(BlogPost(primary_keyword="eco bags"), "h1Title")
        assert errors == [
            "Blog title (H1) is required",
            "H1 title must include the primary keyword",
        ]

    def test_binding_featured_image_never_adds_errors(self):
        empty = BlogPost(primary_keyword="eco bags")
        filled = empty.model_copy(
            update={"featured_image": ImageData(file_reference="hero.jpg")}
        )
        assert len(_errors_for(filled, "featuredImage")) <= len(
            _errors_for(empty, "featuredImage")
        )


class TestRules:
    def test_rules_are_frozen(self):
        rules = BlogValidationRules()
        with pytest.raises(ValidationError):
            rules.faq_max_items = 10

    def test_featured_check_can_be_disabled(self, intro):
        post = _valid_post(intro)
        post.featured_image = ImageData()
        state = validate(post, BlogValidationRules(featured_image_exists=False))
        assert state.is_valid
