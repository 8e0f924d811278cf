"""Document parser: loosely structured draft text to a ``BlogPost``.

The parser is a finite-state scanner. Every line is classified first
(``LineKind``) and then drives a transition between three states:

- ``OUTSIDE``: before the first section heading. Text here is treated as
  an implicit introduction and images attach to the ``header`` block.
- ``IN_SECTION``: inside a section, between items.
- ``IN_LIST_ITEM``: inside a bullet, step or Q&A pair of a list section.

Parsing never fails. Unknown lines degrade to plain content and missing
sections stay empty.
"""

from __future__ import annotations

import logging
import re
from enum import StrEnum

from pydantic import BaseModel, Field

from postcraft.blog.models import (
    BenefitItem,
    BenefitsSection,
    BlogPost,
    BlogSections,
    BrandPromotionSection,
    ConclusionSection,
    FAQItem,
    FAQsSection,
    HowItWorksSection,
    ImageData,
    ImageReference,
    StepItem,
    TypeItem,
    TypesSection,
    UseCaseItem,
    UseCasesSection,
    WhatIsSection,
)
from postcraft.blog.sections import (
    CANONICAL_ORDER,
    LIST_SECTIONS,
    SectionId,
    match_heading,
    suggest_alt_text,
)
from postcraft.blog.text import slugify

logger = logging.getLogger(__name__)

_IMAGE_MARKER = re.compile(
    r"\[image:\s*([^\]\n]+?)\s*\]|\{img\}\s*([^\n\r{}\[\]]+)", re.IGNORECASE
)
_FIELD = re.compile(
    r"^(primary keyword|secondary keywords?|h1 title|h1|title|featured image alt"
    r"|featured image|meta description|slug|brand name|brand|call to action|cta"
    r"|enabled)\s*:\s*(.*)$",
    re.IGNORECASE,
)
_BULLET = re.compile(r"^(?:[-*+•]|\d+[.)])\s+(.+)$")
_QUESTION = re.compile(r"^(?:q|question)\s*\d*\s*[:.)]\s*(.+)$", re.IGNORECASE)
_ANSWER = re.compile(r"^(?:a|answer)\s*\d*\s*[:.)]\s*(.+)$", re.IGNORECASE)
_BOLD_TITLE = re.compile(r"^\*\*(.+?)\*\*\s*(?:[:\-–—]\s*)?(.*)$")
_ITEM_SEPARATOR = re.compile(r":\s|\s[-–—]\s")
_TITLE_LINE = re.compile(r"^#\s+(.+)$")

_GLOBAL_FIELDS = {
    "primary keyword": "primary_keyword",
    "secondary keyword": "secondary_keywords",
    "secondary keywords": "secondary_keywords",
    "h1": "h1_title",
    "h1 title": "h1_title",
    "featured image": "featured_image",
    "featured image alt": "featured_image_alt",
    "meta description": "meta_description",
    "slug": "slug",
}
_BRAND_FIELDS = {
    "brand": "brand_name",
    "brand name": "brand_name",
    "cta": "cta",
    "call to action": "cta",
    "enabled": "enabled",
}
_CONCLUSION_FIELDS = {"cta": "cta", "call to action": "cta"}
_TRUTHY = {"yes", "true", "on", "1", "enabled", "y"}


class ScanState(StrEnum):
    OUTSIDE = "outside"
    IN_SECTION = "in_section"
    IN_LIST_ITEM = "in_list_item"


class LineKind(StrEnum):
    BLANK = "blank"
    IMAGE = "image"
    FIELD = "field"
    HEADING = "heading"
    BULLET = "bullet"
    QUESTION = "question"
    ANSWER = "answer"
    TEXT = "text"


class Line(BaseModel):
    """One classified input line."""

    kind: LineKind
    text: str = ""
    key: str = ""
    section: SectionId | None = None
    images: list[str] = Field(default_factory=list)


class _Item(BaseModel):
    title: str = ""
    description: str = ""


class _Block(BaseModel):
    """Content accumulated for one occurrence of a section."""

    section: SectionId
    implicit: bool = False
    paragraphs: list[list[str]] = Field(default_factory=list)
    items: list[_Item] = Field(default_factory=list)
    faqs: list[FAQItem] = Field(default_factory=list)
    bullets: list[str] = Field(default_factory=list)
    fields: dict[str, str] = Field(default_factory=dict)
    images: list[str] = Field(default_factory=list)
    paragraph_open: bool = False

    @property
    def has_written_content(self) -> bool:
        return bool(
            any(self.paragraphs)
            or self.items
            or self.faqs
            or self.bullets
            or any(v.strip() for v in self.fields.values())
        )

    @property
    def has_content(self) -> bool:
        return self.has_written_content or bool(self.images)

    def add_text(self, text: str) -> None:
        if not self.paragraph_open:
            self.paragraphs.append([])
            self.paragraph_open = True
        self.paragraphs[-1].append(text)

    def end_paragraph(self) -> None:
        self.paragraph_open = False

    def text(self) -> str:
        return "\n\n".join(" ".join(p) for p in self.paragraphs if p)


def classify(raw: str, section: SectionId | None, state: ScanState) -> Line:
    """Classify one raw line in the context of the enclosing section."""
    images = [(m.group(1) or m.group(2)).strip() for m in _IMAGE_MARKER.finditer(raw)]
    images = [kw for kw in images if kw]
    text = _IMAGE_MARKER.sub("", raw).strip()

    if not text:
        kind = LineKind.IMAGE if images else LineKind.BLANK
        return Line(kind=kind, images=images)

    field = _FIELD.match(text)
    if field:
        key = " ".join(field.group(1).lower().split())
        value = field.group(2).strip()
        if _accepts_field(key, section, state):
            return Line(kind=LineKind.FIELD, key=key, text=value, images=images)

    # Inside FAQs a line ending in "?" is a question even when it reads
    # like a heading ("What is it?").
    is_faq_question = (
        section == SectionId.FAQS and text.endswith("?") and not text.startswith("#")
    )
    heading = None if is_faq_question else match_heading(text)
    if heading is not None:
        return Line(kind=LineKind.HEADING, section=heading, text=text, images=images)

    if section == SectionId.FAQS:
        question = _QUESTION.match(text)
        if question:
            return Line(kind=LineKind.QUESTION, text=question.group(1).strip(), images=images)
        answer = _ANSWER.match(text)
        if answer:
            return Line(kind=LineKind.ANSWER, text=answer.group(1).strip(), images=images)

    bullet = _BULLET.match(text)
    if bullet:
        return Line(kind=LineKind.BULLET, text=bullet.group(1).strip(), images=images)

    return Line(kind=LineKind.TEXT, text=text, images=images)


def _accepts_field(key: str, section: SectionId | None, state: ScanState) -> bool:
    if key in _GLOBAL_FIELDS:
        return True
    if key == "title":
        return state == ScanState.OUTSIDE
    if section == SectionId.BRAND_PROMOTION:
        return key in _BRAND_FIELDS
    if section == SectionId.CONCLUSION:
        return key in _CONCLUSION_FIELDS
    return False


def split_item(text: str) -> tuple[str, str]:
    """Split an item line into (title, description)."""
    text = text.strip()
    bold = _BOLD_TITLE.match(text)
    if bold:
        return bold.group(1).strip(), bold.group(2).strip()
    if text.endswith(":"):
        return text[:-1].strip(), ""
    sep = _ITEM_SEPARATOR.search(text)
    if sep:
        return text[: sep.start()].strip(), text[sep.end() :].strip()
    return text, ""


class DocumentScanner:
    """Single left-to-right scan over a draft document."""

    def __init__(self) -> None:
        self.state = ScanState.OUTSIDE
        self.current = _Block(section=SectionId.INTRODUCTION, implicit=True)
        self.blocks: dict[SectionId, _Block] = {}
        self.header: dict[str, str] = {}
        self.header_images: list[str] = []

    def feed(self, raw: str) -> None:
        section = None if self.state == ScanState.OUTSIDE else self.current.section
        line = classify(raw, section, self.state)

        if line.kind == LineKind.FIELD and line.key == "featured image":
            if not line.text and line.images:
                line.text, line.images = line.images[0], line.images[1:]

        self._take_images(line.images)

        if line.kind == LineKind.IMAGE:
            return
        if line.kind == LineKind.HEADING and line.section is not None:
            self._open(line.section)
            return
        if line.kind == LineKind.FIELD and (line.key in _GLOBAL_FIELDS or line.key == "title"):
            self._set_header(line.key, line.text)
            return
        if line.kind == LineKind.BLANK:
            self.current.end_paragraph()
            if self.state == ScanState.IN_LIST_ITEM:
                self.state = ScanState.IN_SECTION
            return

        if self.state == ScanState.OUTSIDE:
            self._outside(line)
        elif self.current.section in LIST_SECTIONS:
            if self.current.section == SectionId.FAQS:
                self._faq(line)
            else:
                self._list(line)
        elif self.current.section == SectionId.BRAND_PROMOTION:
            self._brand(line)
        else:
            self._text(line)

    def finish(self) -> None:
        self._close()

    # -- transitions ---------------------------------------------------

    def _open(self, section: SectionId) -> None:
        self._close()
        self.current = _Block(section=section)
        self.state = ScanState.IN_SECTION

    def _close(self) -> None:
        block = self.current
        existing = self.blocks.get(block.section)
        if not block.has_content:
            if existing is not None and not block.implicit:
                logger.warning(
                    "Ignoring empty duplicate '%s' section; keeping earlier content",
                    block.section,
                )
            return
        if existing is not None and not block.has_written_content:
            logger.debug("Adding images from duplicate '%s' section", block.section)
            existing.images.extend(block.images)
            return
        if existing is not None:
            logger.debug("Later '%s' section replaces the earlier one", block.section)
        self.blocks[block.section] = block

    def _take_images(self, keywords: list[str]) -> None:
        if not keywords:
            return
        if self.current.implicit:
            self.header_images.extend(keywords)
        else:
            self.current.images.extend(keywords)

    def _set_header(self, key: str, value: str) -> None:
        name = "h1_title" if key == "title" else _GLOBAL_FIELDS[key]
        if not value:
            return
        self.header[name] = value

    def _outside(self, line: Line) -> None:
        title = _TITLE_LINE.match(line.text)
        if title and "h1_title" not in self.header:
            self.header["h1_title"] = title.group(1).strip()
            return
        self.current.add_text(line.text)

    def _text(self, line: Line) -> None:
        block = self.current
        if line.kind == LineKind.FIELD:
            block.fields[_CONCLUSION_FIELDS[line.key]] = line.text
            return
        block.add_text(line.text)

    def _list(self, line: Line) -> None:
        block = self.current
        if line.kind == LineKind.BULLET or self.state != ScanState.IN_LIST_ITEM:
            title, description = split_item(line.text)
            block.items.append(_Item(title=title, description=description))
            self.state = ScanState.IN_LIST_ITEM
            return
        item = block.items[-1]
        item.description = f"{item.description} {line.text}".strip()

    def _faq(self, line: Line) -> None:
        block = self.current
        kind = line.kind
        text = line.text
        if kind == LineKind.BULLET:
            inner = classify(text, SectionId.FAQS, self.state)
            if inner.kind in (LineKind.QUESTION, LineKind.ANSWER):
                kind, text = inner.kind, inner.text

        open_pair = block.faqs[-1] if block.faqs else None
        if kind == LineKind.QUESTION or (kind != LineKind.ANSWER and text.endswith("?")):
            block.faqs.append(FAQItem(question=text))
        elif kind == LineKind.ANSWER:
            if open_pair is None or open_pair.answer:
                block.faqs.append(FAQItem(answer=text))
            else:
                open_pair.answer = text
        elif open_pair is None:
            block.faqs.append(FAQItem(question=text))
        elif not open_pair.answer:
            open_pair.answer = text
        else:
            open_pair.answer = f"{open_pair.answer} {text}"
        self.state = ScanState.IN_LIST_ITEM

    def _brand(self, line: Line) -> None:
        block = self.current
        if line.kind == LineKind.FIELD:
            name = _BRAND_FIELDS[line.key]
            if name == "cta" and block.fields.get("cta"):
                block.fields["cta"] = f"{block.fields['cta']} {line.text}".strip()
            else:
                block.fields[name] = line.text
        elif line.kind == LineKind.BULLET:
            block.bullets.append(line.text)
        elif not block.fields.get("brand_name"):
            block.fields["brand_name"] = line.text
        else:
            block.fields["cta"] = f"{block.fields.get('cta', '')} {line.text}".strip()


def parse(document: str) -> BlogPost:
    """Parse a draft document into a ``BlogPost``.

    Total over any string: unrecognised or missing sections degrade to
    empty defaults.
    """
    scanner = DocumentScanner()
    for raw in document.splitlines():
        scanner.feed(raw)
    scanner.finish()
    post = _build_post(scanner)
    logger.debug(
        "Parsed document: %d block(s), %d image reference(s)",
        len(scanner.blocks),
        len(post.images),
    )
    return post


def _build_post(scanner: DocumentScanner) -> BlogPost:
    header = scanner.header
    blocks = scanner.blocks
    keyword = header.get("primary_keyword", "").strip()

    def block(section: SectionId) -> _Block:
        return blocks.get(section) or _Block(section=section)

    def items(section: SectionId) -> list[_Item]:
        return block(section).items

    def slot_image(section: SectionId) -> ImageData:
        refs = block(section).images
        if not refs:
            return ImageData()
        return ImageData(
            file_reference=refs[0],
            alt=suggest_alt_text(section, keyword) if keyword else refs[0],
        )

    brand = block(SectionId.BRAND_PROMOTION)
    enabled_raw = brand.fields.get("enabled")
    if enabled_raw is not None:
        enabled = enabled_raw.strip().lower() in _TRUTHY
    else:
        enabled = brand.has_content

    conclusion = block(SectionId.CONCLUSION)

    sections = BlogSections(
        what_is=WhatIsSection(
            content=block(SectionId.WHAT_IS).text(),
            image=slot_image(SectionId.WHAT_IS),
        ),
        benefits=BenefitsSection(
            items=[BenefitItem(**i.model_dump()) for i in items(SectionId.BENEFITS)],
            image=slot_image(SectionId.BENEFITS),
        ),
        types=TypesSection(
            items=[TypeItem(**i.model_dump()) for i in items(SectionId.TYPES)],
            comparison_image=slot_image(SectionId.TYPES),
        ),
        how_it_works=HowItWorksSection(
            steps=[StepItem(**i.model_dump()) for i in items(SectionId.HOW_IT_WORKS)],
            diagram_image=slot_image(SectionId.HOW_IT_WORKS),
        ),
        use_cases=UseCasesSection(
            items=[UseCaseItem(**i.model_dump()) for i in items(SectionId.USE_CASES)],
            image=slot_image(SectionId.USE_CASES),
        ),
        brand_promotion=BrandPromotionSection(
            enabled=enabled,
            brand_name=brand.fields.get("brand_name", ""),
            usp_bullets=list(brand.bullets),
            cta=brand.fields.get("cta", ""),
        ),
        faqs=FAQsSection(items=list(block(SectionId.FAQS).faqs)),
        conclusion=ConclusionSection(
            content=conclusion.text(),
            cta=conclusion.fields.get("cta", ""),
        ),
    )

    images = [
        ImageReference(keyword=kw, section_id=SectionId.HEADER.value, position=i)
        for i, kw in enumerate(scanner.header_images)
    ]
    for section in (SectionId.INTRODUCTION, *CANONICAL_ORDER):
        for i, kw in enumerate(block(section).images):
            images.append(ImageReference(keyword=kw, section_id=section.value, position=i))

    featured_ref = header.get("featured_image", "").strip() or None
    featured_alt = header.get("featured_image_alt", "").strip()
    if featured_ref and not featured_alt and keyword:
        featured_alt = suggest_alt_text("featured", keyword)

    secondary = [
        kw.strip() for kw in header.get("secondary_keywords", "").split(",") if kw.strip()
    ]
    h1 = header.get("h1_title", "").strip()

    return BlogPost(
        primary_keyword=keyword,
        secondary_keywords=secondary,
        h1_title=h1,
        featured_image=ImageData(file_reference=featured_ref, alt=featured_alt),
        introduction=block(SectionId.INTRODUCTION).text(),
        sections=sections,
        meta_description=header.get("meta_description", "").strip(),
        slug=header.get("slug", "").strip() or slugify(h1),
        images=images,
    )
