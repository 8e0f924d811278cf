"""Section catalogue: ids, canonical order, heading aliases and labels."""

from __future__ import annotations

import re
from enum import StrEnum


class SectionId(StrEnum):
    """Blocks a blog post is made of.

    The first eight are the fixed slots of ``BlogSections``. ``INTRODUCTION``
    and ``HEADER`` are top-level blocks that live outside the slot mapping.
    """

    WHAT_IS = "whatIs"
    BENEFITS = "benefits"
    TYPES = "types"
    HOW_IT_WORKS = "howItWorks"
    USE_CASES = "useCases"
    BRAND_PROMOTION = "brandPromotion"
    FAQS = "faqs"
    CONCLUSION = "conclusion"
    INTRODUCTION = "introduction"
    HEADER = "header"


CANONICAL_ORDER: tuple[SectionId, ...] = (
    SectionId.WHAT_IS,
    SectionId.BENEFITS,
    SectionId.TYPES,
    SectionId.HOW_IT_WORKS,
    SectionId.USE_CASES,
    SectionId.BRAND_PROMOTION,
    SectionId.FAQS,
    SectionId.CONCLUSION,
)

LIST_SECTIONS: frozenset[SectionId] = frozenset(
    {
        SectionId.BENEFITS,
        SectionId.TYPES,
        SectionId.HOW_IT_WORKS,
        SectionId.USE_CASES,
        SectionId.FAQS,
    }
)

SECTION_LABELS: dict[str, str] = {
    SectionId.WHAT_IS: "What Is",
    SectionId.BENEFITS: "Benefits",
    SectionId.TYPES: "Types",
    SectionId.HOW_IT_WORKS: "How It Works",
    SectionId.USE_CASES: "Use Cases",
    SectionId.BRAND_PROMOTION: "Brand Promotion",
    SectionId.FAQS: "FAQs",
    SectionId.CONCLUSION: "Conclusion",
    SectionId.INTRODUCTION: "Introduction",
    SectionId.HEADER: "Header",
    "primaryKeyword": "Primary Keyword",
    "h1Title": "Blog Title (H1)",
    "featuredImage": "Featured Image",
}

# Fields whose absence lands in ``missingRequired``.
REQUIRED_FIELDS: tuple[str, ...] = (
    "primaryKeyword",
    "h1Title",
    "featuredImage",
    SectionId.INTRODUCTION,
)

# Keys are compacted (lowercase letters and digits only).
_HEADING_ALIASES: dict[str, SectionId] = {
    "introduction": SectionId.INTRODUCTION,
    "intro": SectionId.INTRODUCTION,
    "introparagraph": SectionId.INTRODUCTION,
    "whatis": SectionId.WHAT_IS,
    "whatisit": SectionId.WHAT_IS,
    "benefits": SectionId.BENEFITS,
    "keybenefits": SectionId.BENEFITS,
    "types": SectionId.TYPES,
    "howitworks": SectionId.HOW_IT_WORKS,
    "steps": SectionId.HOW_IT_WORKS,
    "usecases": SectionId.USE_CASES,
    "brandpromotion": SectionId.BRAND_PROMOTION,
    "faq": SectionId.FAQS,
    "faqs": SectionId.FAQS,
    "frequentlyaskedquestions": SectionId.FAQS,
    "conclusion": SectionId.CONCLUSION,
}

_MARKDOWN_HEADING = re.compile(r"^\s*#{1,6}\s*")
_NON_ALNUM = re.compile(r"[^a-z0-9]")


def compact(text: str) -> str:
    """Lowercase *text* and drop everything but letters and digits."""
    return _NON_ALNUM.sub("", text.lower())


def match_heading(line: str) -> SectionId | None:
    """Return the section a heading line opens, or None."""
    stripped = _MARKDOWN_HEADING.sub("", line)
    if len(stripped) > 60:
        return None
    return _HEADING_ALIASES.get(compact(stripped))


def section_heading(section_id: SectionId, keyword: str) -> str:
    """SEO heading the renderer emits for a slot."""
    kw = keyword or "It"
    headings = {
        SectionId.WHAT_IS: f"What Is {kw} and Why It Matters Today",
        SectionId.BENEFITS: f"{kw} Benefits: Key Advantages You Need to Know",
        SectionId.TYPES: f"{kw} Types: A Comprehensive Breakdown",
        SectionId.HOW_IT_WORKS: f"How {kw} Works: Step-by-Step Process",
        SectionId.USE_CASES: f"{kw} Use Cases: Real-World Applications",
        SectionId.FAQS: f"Frequently Asked Questions About {kw}",
        SectionId.CONCLUSION: f"Conclusion: {kw} & Moving Forward",
    }
    return headings.get(section_id, SECTION_LABELS.get(section_id, str(section_id)))


def suggest_alt_text(context: str, keyword: str) -> str:
    """Default alt text for an image in *context*."""
    suggestions = {
        "featured": f"{keyword} - Complete Guide",
        SectionId.WHAT_IS: f"What is {keyword}",
        SectionId.BENEFITS: f"{keyword} benefits",
        SectionId.TYPES: f"{keyword} types comparison",
        SectionId.HOW_IT_WORKS: f"{keyword} process diagram",
        SectionId.USE_CASES: f"{keyword} real-world use cases",
        SectionId.FAQS: f"{keyword} frequently asked questions",
    }
    return suggestions.get(context, keyword)
