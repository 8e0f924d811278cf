"""SEO and content rules evaluated over a parsed ``BlogPost``."""

from __future__ import annotations

from postcraft.blog.models import (
    DEFAULT_RULES,
    BlogPost,
    BlogValidationRules,
    Diagnostic,
    Severity,
    ValidationState,
)
from postcraft.blog.sections import SECTION_LABELS, SectionId
from postcraft.blog.text import count_words, has_heading_tag


class _Collector:
    def __init__(self) -> None:
        self.diagnostics: list[Diagnostic] = []

    def error(self, section: str, message: str) -> None:
        self.diagnostics.append(
            Diagnostic(section=str(section), message=message, severity=Severity.ERROR)
        )

    def warning(self, section: str, message: str) -> None:
        self.diagnostics.append(
            Diagnostic(section=str(section), message=message, severity=Severity.WARNING)
        )

    def has_error(self, section: str) -> bool:
        return any(
            d.section == section and d.severity == Severity.ERROR for d in self.diagnostics
        )


def validate(post: BlogPost, rules: BlogValidationRules = DEFAULT_RULES) -> ValidationState:
    """Evaluate *rules* against *post*.

    Blocking problems land in ``errors``, advisory ones in ``warnings``.
    A section is completed when it has content and no error.
    """
    out = _Collector()
    completed: list[tuple[str, bool]] = []

    keyword = post.primary_keyword.strip()
    if rules.primary_keyword_filled and not keyword:
        out.error("primaryKeyword", "Primary keyword is required")
    completed.append(("primaryKeyword", bool(keyword)))

    _check_title(post, rules, out)
    completed.append(("h1Title", bool(post.h1_title.strip())))

    image = post.featured_image
    if rules.featured_image_exists:
        if not image.is_bound:
            out.error("featuredImage", "Featured image is required")
        if not image.alt.strip():
            out.error("featuredImage", "Featured image alt text is required")
    completed.append(("featuredImage", image.is_bound))

    _check_introduction(post, rules, out)
    completed.append((SectionId.INTRODUCTION, bool(post.introduction.strip())))

    sections = post.sections
    if not sections.what_is.content.strip():
        out.warning(SectionId.WHAT_IS, "'What Is' section is empty")
    completed.append((SectionId.WHAT_IS, bool(sections.what_is.content.strip())))

    counts = {
        SectionId.BENEFITS: len(sections.benefits.items),
        SectionId.TYPES: len(sections.types.items),
        SectionId.HOW_IT_WORKS: len(sections.how_it_works.steps),
        SectionId.USE_CASES: len(sections.use_cases.items),
        SectionId.FAQS: len(sections.faqs.items),
    }
    for section_id, count in counts.items():
        if count == 0:
            out.warning(section_id, f"{SECTION_LABELS[section_id]} section has no items")
        completed.append((section_id, count > 0))

    _check_faqs(post, rules, out)

    brand = sections.brand_promotion
    if brand.enabled:
        if not brand.brand_name.strip():
            out.error(
                SectionId.BRAND_PROMOTION,
                "Brand name is required when Brand Promotion is enabled",
            )
        completed.append((SectionId.BRAND_PROMOTION, bool(brand.brand_name.strip())))

    if not sections.conclusion.content.strip():
        out.warning(SectionId.CONCLUSION, "Conclusion is empty")
    completed.append((SectionId.CONCLUSION, bool(sections.conclusion.content.strip())))

    return ValidationState(
        errors=[d.message for d in out.diagnostics if d.severity == Severity.ERROR],
        warnings=[d.message for d in out.diagnostics if d.severity == Severity.WARNING],
        completed_sections=[
            str(section) for section, filled in completed if filled and not out.has_error(section)
        ],
        diagnostics=out.diagnostics,
    )


def _check_title(post: BlogPost, rules: BlogValidationRules, out: _Collector) -> None:
    # At most one error per rule; an empty title fails both rules.
    title = post.h1_title.strip()
    keyword = post.primary_keyword.strip()
    if rules.h1_count:
        if not title:
            out.error("h1Title", "Blog title (H1) is required")
        elif has_heading_tag(title):
            out.error("h1Title", "H1 title cannot contain HTML heading tags")
    if rules.h1_has_keyword and keyword and keyword.lower() not in title.lower():
        out.error("h1Title", "H1 title must include the primary keyword")


def _check_introduction(post: BlogPost, rules: BlogValidationRules, out: _Collector) -> None:
    intro = post.introduction.strip()
    section = SectionId.INTRODUCTION
    if not intro:
        out.error(section, "Introduction paragraph is required")
        return
    if has_heading_tag(intro):
        out.error(section, "Introduction paragraph cannot contain heading tags")
    words = count_words(intro)
    if words < rules.introduction_min_words:
        out.warning(
            section,
            f"Introduction is too short ({words} words, "
            f"recommended at least {rules.introduction_min_words})",
        )
    elif words > rules.introduction_max_words:
        out.warning(
            section,
            f"Introduction is too long ({words} words, "
            f"recommended at most {rules.introduction_max_words})",
        )


def _check_faqs(post: BlogPost, rules: BlogValidationRules, out: _Collector) -> None:
    items = post.sections.faqs.items
    incomplete = [f for f in items if not f.is_complete]
    if incomplete:
        out.warning(
            SectionId.FAQS,
            f"{len(incomplete)} FAQ item(s) are missing a question or an answer",
        )
    if len(items) > rules.faq_max_items:
        out.warning(
            SectionId.FAQS,
            f"FAQs section should have at most {rules.faq_max_items} items "
            f"(currently {len(items)})",
        )
    if any(has_heading_tag(f.answer) for f in items):
        out.error(SectionId.FAQS, "FAQ answers cannot contain heading tags")
