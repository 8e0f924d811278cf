"""schema.org structured data (JSON-LD) for rendered posts."""

from __future__ import annotations

import json

from postcraft.blog.models import BlogPost
from postcraft.blog.text import derive_meta_description


def article_schema(
    post: BlogPost,
    *,
    title: str | None = None,
    date_published: str | None = None,
    author: str | None = None,
    image_url: str | None = None,
) -> dict[str, object]:
    """``BlogPosting`` markup. Only supplied values are included."""
    schema: dict[str, object] = {
        "@context": "https://schema.org",
        "@type": "BlogPosting",
        "headline": title or post.h1_title or "Blog Post",
    }
    description = derive_meta_description(post.meta_description, post.introduction)
    if description:
        schema["description"] = description
    keywords = [k for k in [post.primary_keyword, *post.secondary_keywords] if k]
    if keywords:
        schema["keywords"] = ", ".join(keywords)
    if date_published:
        schema["datePublished"] = date_published
    if author:
        schema["author"] = {"@type": "Person", "name": author}
    if image_url:
        schema["image"] = image_url
    return schema


def faq_schema(post: BlogPost) -> dict[str, object] | None:
    """``FAQPage`` markup for complete Q&A pairs, or None when there are none."""
    faqs = [f for f in post.sections.faqs.items if f.is_complete]
    if not faqs:
        return None
    return {
        "@context": "https://schema.org",
        "@type": "FAQPage",
        "mainEntity": [
            {
                "@type": "Question",
                "name": faq.question,
                "acceptedAnswer": {"@type": "Answer", "text": faq.answer},
            }
            for faq in faqs
        ],
    }


def to_script(schema: dict[str, object]) -> str:
    """Wrap a schema in a JSON-LD script tag."""
    payload = json.dumps(schema, indent=2, ensure_ascii=False).replace("</", "<\\/")
    return f'<script type="application/ld+json">\n{payload}\n</script>'
