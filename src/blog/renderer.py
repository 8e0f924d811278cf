"""HTML renderer for validated blog posts.

Walks the post in canonical order and emits one block per non-empty
section. Image references are resolved against caller-supplied URLs;
unresolved ones are left as placeholders and surfaced so the caller can
upload them and render again.
"""

from __future__ import annotations

import logging
from enum import StrEnum

from pydantic import Field

from postcraft.blog.models import (
    BlogPost,
    CamelModel,
    ImageReference,
    Severity,
    ValidationState,
)
from postcraft.blog.schema import article_schema, faq_schema, to_script
from postcraft.blog.sections import (
    CANONICAL_ORDER,
    REQUIRED_FIELDS,
    SECTION_LABELS,
    SectionId,
    section_heading,
)
from postcraft.blog.templates import BLOG_CSS, DOCUMENT
from postcraft.blog.text import (
    count_words,
    derive_meta_description,
    escape_attr,
    escape_html,
    strip_tags,
    text_to_html,
)

logger = logging.getLogger(__name__)


class OutputFormat(StrEnum):
    FRAGMENT = "fragment"
    DOCUMENT = "document"


class RenderOptions(CamelModel):
    """Caller options for one render pass."""

    include_schema: bool = True
    include_images: bool = True
    blog_title: str | None = None
    blog_date: str | None = None
    author_name: str | None = None
    image_urls: dict[str, str] = Field(default_factory=dict)
    featured_image_url: str | None = None
    format: OutputFormat = OutputFormat.FRAGMENT


class SectionSummary(CamelModel):
    id: str
    name: str
    word_count: int = 0
    valid: bool = True
    warnings: list[str] = Field(default_factory=list)
    images: list[ImageReference] = Field(default_factory=list)


class RenderMetadata(CamelModel):
    total_words: int = 0
    total_sections: int = 0
    is_valid: bool = False
    missing_required: list[str] = Field(default_factory=list)
    warnings: list[str] = Field(default_factory=list)
    section_word_counts: dict[str, int] = Field(default_factory=dict)


class RenderResult(CamelModel):
    html: str
    images: list[ImageReference] = Field(default_factory=list)
    requires_image_upload: bool = False
    metadata: RenderMetadata = Field(default_factory=RenderMetadata)
    sections: list[SectionSummary] = Field(default_factory=list)


class _Emitted(CamelModel):
    section: str
    html: str
    counted: bool = True


class HtmlRenderer:
    """Renders one post. Holds per-call state only; create one per render."""

    def __init__(self, post: BlogPost, options: RenderOptions) -> None:
        self.post = post
        self.options = options
        self.keyword = post.primary_keyword.strip()
        self.missing: list[ImageReference] = []

    def render(self, validation: ValidationState) -> RenderResult:
        blocks = self._blocks()
        fragment = "\n\n".join(b.html for b in blocks)
        html = fragment
        if self.options.format == OutputFormat.DOCUMENT:
            html = self._document(fragment)

        counts = {
            b.section: count_words(strip_tags(b.html)) for b in blocks if b.counted
        }
        slots = [b for b in blocks if b.section in {s.value for s in CANONICAL_ORDER}]

        missing_images = _dedupe(self.missing)
        if missing_images:
            logger.info(
                "%d image(s) need uploading: %s",
                len(missing_images),
                ", ".join(ref.keyword for ref in missing_images),
            )

        return RenderResult(
            html=html,
            images=missing_images,
            requires_image_upload=bool(missing_images),
            metadata=RenderMetadata(
                total_words=sum(counts.values()),
                total_sections=len(slots),
                is_valid=validation.is_valid,
                missing_required=missing_required(self.post),
                warnings=list(validation.warnings),
                section_word_counts=counts,
            ),
            sections=[
                SectionSummary(
                    id=section,
                    name=SECTION_LABELS.get(section, section),
                    word_count=count,
                    valid=validation.section_is_valid(section),
                    warnings=[
                        d.message
                        for d in validation.for_section(section)
                        if d.severity == Severity.WARNING
                    ],
                    images=self.post.images_for(section),
                )
                for section, count in counts.items()
            ],
        )

    # -- walk ----------------------------------------------------------

    def _blocks(self) -> list[_Emitted]:
        post = self.post
        blocks: list[_Emitted] = []

        if self.options.include_schema:
            scripts = [
                to_script(
                    article_schema(
                        post,
                        title=self.options.blog_title,
                        date_published=self.options.blog_date,
                        author=self.options.author_name,
                        image_url=self._featured_url(),
                    )
                )
            ]
            faqs = faq_schema(post)
            if faqs is not None:
                scripts.append(to_script(faqs))
            blocks.append(_Emitted(section="schema", html="\n".join(scripts), counted=False))

        if post.h1_title.strip():
            h1 = f"<h1>{text_to_html(post.h1_title)}</h1>"
            blocks.append(_Emitted(section="h1Title", html=h1))

        byline = self._byline()
        if byline:
            blocks.append(_Emitted(section="byline", html=byline, counted=False))

        featured = self._featured_image()
        if featured:
            blocks.append(_Emitted(section="featuredImage", html=featured, counted=False))

        header_images = self._images(SectionId.HEADER)
        if header_images:
            blocks.append(
                _Emitted(
                    section=SectionId.HEADER.value,
                    html="\n".join(header_images),
                    counted=False,
                )
            )

        intro = self._paragraphs(post.introduction) + self._images(SectionId.INTRODUCTION)
        if intro:
            blocks.append(_Emitted(section=SectionId.INTRODUCTION.value, html="\n".join(intro)))

        brand_enabled = post.sections.brand_promotion.enabled
        for section_id in CANONICAL_ORDER:
            if section_id == SectionId.BRAND_PROMOTION and not brand_enabled:
                continue
            body = self._section(section_id)
            if body:
                body.extend(self._images(section_id))
                blocks.append(_Emitted(section=section_id.value, html="\n".join(body)))
            elif self.post.images_for(section_id):
                blocks.append(
                    _Emitted(
                        section=section_id.value,
                        html="\n".join(self._images(section_id)),
                    )
                )
        return blocks

    def _section(self, section_id: SectionId) -> list[str]:
        sections = self.post.sections
        if section_id == SectionId.WHAT_IS:
            return self._with_heading(section_id, self._paragraphs(sections.what_is.content))
        if section_id == SectionId.BENEFITS:
            return self._with_heading(section_id, self._list("ul", sections.benefits.items))
        if section_id == SectionId.TYPES:
            return self._with_heading(section_id, self._subsections(sections.types.items))
        if section_id == SectionId.HOW_IT_WORKS:
            return self._with_heading(section_id, self._list("ol", sections.how_it_works.steps))
        if section_id == SectionId.USE_CASES:
            return self._with_heading(section_id, self._subsections(sections.use_cases.items))
        if section_id == SectionId.BRAND_PROMOTION:
            return self._brand_promotion()
        if section_id == SectionId.FAQS:
            return self._with_heading(section_id, self._faqs())
        if section_id == SectionId.CONCLUSION:
            body = self._paragraphs(sections.conclusion.content)
            if sections.conclusion.cta.strip():
                body.append(f"<p><em>{text_to_html(sections.conclusion.cta)}</em></p>")
            return self._with_heading(section_id, body)
        return []

    def _with_heading(self, section_id: SectionId, body: list[str]) -> list[str]:
        if not body:
            return []
        heading = section_heading(section_id, self.keyword)
        return [f"<h2>{escape_html(heading)}</h2>", *body]

    # -- pieces --------------------------------------------------------

    @staticmethod
    def _paragraphs(text: str) -> list[str]:
        return [
            f"<p>{text_to_html(' '.join(p.split()))}</p>"
            for p in text.split("\n\n")
            if p.strip()
        ]

    @staticmethod
    def _item_html(title: str, description: str) -> str:
        if title and description:
            return f"<strong>{text_to_html(title)}</strong>: {text_to_html(description)}"
        return text_to_html(title or description)

    def _list(self, tag: str, items: list) -> list[str]:
        rows = [
            f"<li>{self._item_html(i.title.strip(), i.description.strip())}</li>"
            for i in items
            if i.title.strip() or i.description.strip()
        ]
        if not rows:
            return []
        return [f"<{tag}>", *rows, f"</{tag}>"]

    @staticmethod
    def _subsections(items: list) -> list[str]:
        out: list[str] = []
        for item in items:
            title, description = item.title.strip(), item.description.strip()
            if title:
                out.append(f"<h3>{text_to_html(title)}</h3>")
            if description:
                out.append(f"<p>{text_to_html(description)}</p>")
        return out

    def _faqs(self) -> list[str]:
        rows: list[str] = []
        for faq in self.post.sections.faqs.items:
            if not (faq.question.strip() or faq.answer.strip()):
                continue
            rows.append(f"<dt><strong>{text_to_html(faq.question)}</strong></dt>")
            rows.append(f"<dd>{text_to_html(faq.answer)}</dd>")
        if not rows:
            return []
        return ["<dl>", *rows, "</dl>"]

    def _brand_promotion(self) -> list[str]:
        brand = self.post.sections.brand_promotion
        if not brand.enabled:
            return []
        inner: list[str] = []
        if brand.brand_name.strip():
            inner.append(f"<h3>{text_to_html(brand.brand_name)}</h3>")
        bullets = [b for b in brand.usp_bullets if b.strip()]
        if bullets:
            inner.append("<ul>")
            inner.extend(f"<li>{text_to_html(b)}</li>" for b in bullets)
            inner.append("</ul>")
        if brand.cta.strip():
            inner.append(f"<p><strong>{text_to_html(brand.cta)}</strong></p>")
        if not inner:
            return []
        return ['<div class="brand-promotion">', *inner, "</div>"]

    def _byline(self) -> str:
        author = (self.options.author_name or "").strip()
        date = (self.options.blog_date or "").strip()
        if not author and not date:
            return ""
        parts: list[str] = []
        if author:
            parts.append(f"By {escape_html(author)}")
        if date:
            parts.append(f'<time datetime="{escape_attr(date)}">{escape_html(date)}</time>')
        return f'<p class="byline">{" &middot; ".join(parts)}</p>'

    def _featured_url(self) -> str | None:
        if self.options.featured_image_url:
            return self.options.featured_image_url
        ref = self.post.featured_image.file_reference
        if ref:
            return self.options.image_urls.get(ref.strip())
        return None

    def _featured_image(self) -> str:
        image = self.post.featured_image
        url = self._featured_url()
        if self.options.include_images and url:
            alt = image.alt or self.post.h1_title
            return f'<img src="{escape_attr(url)}" alt="{escape_attr(alt)}" />'
        if not image.is_bound:
            return ""
        reference = (image.file_reference or "").strip()
        if self.options.include_images:
            self.missing.append(
                ImageReference(keyword=reference, section_id="featuredImage", position=0)
            )
        return _placeholder(reference)

    def _images(self, section_id: SectionId) -> list[str]:
        tags: list[str] = []
        for ref in self.post.images_for(section_id.value):
            url = self.options.image_urls.get(ref.keyword)
            if self.options.include_images and url:
                tags.append(f'<img src="{escape_attr(url)}" alt="{escape_attr(ref.keyword)}" />')
                continue
            if self.options.include_images:
                self.missing.append(ref)
            tags.append(_placeholder(ref.keyword))
        return tags

    def _document(self, fragment: str) -> str:
        post = self.post
        title = self.options.blog_title or post.h1_title or "Blog Post"
        description = derive_meta_description(post.meta_description, post.introduction)
        keywords = ", ".join(k for k in [post.primary_keyword, *post.secondary_keywords] if k)
        extra: list[str] = []
        featured = self._featured_url()
        if featured and self.options.include_images:
            extra.append(f'<meta property="og:image" content="{escape_attr(featured)}">')
        if self.options.author_name:
            extra.append(f'<meta name="author" content="{escape_attr(self.options.author_name)}">')
        return DOCUMENT.substitute(
            title=escape_attr(title),
            description=escape_attr(description),
            keywords=escape_attr(keywords),
            extra_meta="".join(f"{line}\n" for line in extra),
            css=BLOG_CSS,
            content=fragment,
        )


def _placeholder(keyword: str) -> str:
    safe = " ".join(keyword.replace("--", "-").split())
    return f"<!-- image: {escape_html(safe)} -->"


def _dedupe(refs: list[ImageReference]) -> list[ImageReference]:
    seen: set[str] = set()
    out: list[ImageReference] = []
    for ref in refs:
        if ref.keyword in seen:
            continue
        seen.add(ref.keyword)
        out.append(ref)
    return out


def missing_required(post: BlogPost) -> list[str]:
    """Required fields of *post* that have no content."""
    filled = {
        "primaryKeyword": bool(post.primary_keyword.strip()),
        "h1Title": bool(post.h1_title.strip()),
        "featuredImage": post.featured_image.is_bound,
        SectionId.INTRODUCTION.value: bool(post.introduction.strip()),
    }
    return [field for field in REQUIRED_FIELDS if not filled[field]]


def render(
    post: BlogPost,
    validation: ValidationState,
    options: RenderOptions | None = None,
) -> RenderResult:
    """Render *post* to HTML.

    Identical arguments always give byte-identical output.
    """
    return HtmlRenderer(post, options or RenderOptions()).render(validation)
