"""Canonical blog post models: the structured form of one article."""

from __future__ import annotations

from enum import StrEnum

from pydantic import BaseModel, ConfigDict, Field, computed_field
from pydantic.alias_generators import to_camel

from postcraft.blog.sections import CANONICAL_ORDER, SectionId


class CamelModel(BaseModel):
    """Base model serialised with camelCase keys on the wire."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class ImageData(CamelModel):
    """An uploaded image and its alt text."""

    file_reference: str | None = None
    alt: str = ""

    @property
    def is_bound(self) -> bool:
        return bool(self.file_reference and self.file_reference.strip())


class BenefitItem(CamelModel):
    title: str = ""
    description: str = ""


class TypeItem(CamelModel):
    title: str = ""
    description: str = ""


class StepItem(CamelModel):
    title: str = ""
    description: str = ""


class UseCaseItem(CamelModel):
    title: str = ""
    description: str = ""


class FAQItem(CamelModel):
    question: str = ""
    answer: str = ""

    @property
    def is_complete(self) -> bool:
        return bool(self.question.strip() and self.answer.strip())


class WhatIsSection(CamelModel):
    content: str = ""
    image: ImageData = Field(default_factory=ImageData)


class BenefitsSection(CamelModel):
    items: list[BenefitItem] = Field(default_factory=list)
    image: ImageData = Field(default_factory=ImageData)


class TypesSection(CamelModel):
    items: list[TypeItem] = Field(default_factory=list)
    comparison_image: ImageData = Field(default_factory=ImageData)


class HowItWorksSection(CamelModel):
    steps: list[StepItem] = Field(default_factory=list)
    diagram_image: ImageData = Field(default_factory=ImageData)


class UseCasesSection(CamelModel):
    items: list[UseCaseItem] = Field(default_factory=list)
    image: ImageData = Field(default_factory=ImageData)


class BrandPromotionSection(CamelModel):
    enabled: bool = False
    brand_name: str = ""
    usp_bullets: list[str] = Field(default_factory=list)
    cta: str = ""


class FAQsSection(CamelModel):
    items: list[FAQItem] = Field(default_factory=list)


class ConclusionSection(CamelModel):
    content: str = ""
    cta: str = ""


class BlogSections(CamelModel):
    """The eight fixed content slots.

    Every slot is always present; a slot without content holds empty
    strings and collections.
    """

    what_is: WhatIsSection = Field(default_factory=WhatIsSection)
    benefits: BenefitsSection = Field(default_factory=BenefitsSection)
    types: TypesSection = Field(default_factory=TypesSection)
    how_it_works: HowItWorksSection = Field(default_factory=HowItWorksSection)
    use_cases: UseCasesSection = Field(default_factory=UseCasesSection)
    brand_promotion: BrandPromotionSection = Field(default_factory=BrandPromotionSection)
    faqs: FAQsSection = Field(default_factory=FAQsSection)
    conclusion: ConclusionSection = Field(default_factory=ConclusionSection)

    def get(self, section_id: SectionId) -> BaseModel:
        """Return the slot for *section_id*."""
        return getattr(self, _SLOT_ATTRS[section_id])

    def as_mapping(self) -> dict[SectionId, BaseModel]:
        """All eight slots keyed by section id, in canonical order."""
        return {sid: self.get(sid) for sid in CANONICAL_ORDER}


_SLOT_ATTRS: dict[SectionId, str] = {
    SectionId.WHAT_IS: "what_is",
    SectionId.BENEFITS: "benefits",
    SectionId.TYPES: "types",
    SectionId.HOW_IT_WORKS: "how_it_works",
    SectionId.USE_CASES: "use_cases",
    SectionId.BRAND_PROMOTION: "brand_promotion",
    SectionId.FAQS: "faqs",
    SectionId.CONCLUSION: "conclusion",
}


class ImageReference(CamelModel):
    """Where an image must be inserted, keyed by the keyword it is hosted under."""

    keyword: str
    section_id: str
    position: int | None = None


class BlogPost(CamelModel):
    """Canonical structured representation of one article."""

    primary_keyword: str = ""
    secondary_keywords: list[str] = Field(default_factory=list)
    keyword_locked: bool = False
    h1_title: str = ""
    featured_image: ImageData = Field(default_factory=ImageData)
    introduction: str = ""
    sections: BlogSections = Field(default_factory=BlogSections)
    meta_description: str = ""
    slug: str = ""
    images: list[ImageReference] = Field(default_factory=list)

    def images_for(self, section_id: str) -> list[ImageReference]:
        """Image references attached to one block, in position order."""
        refs = [ref for ref in self.images if ref.section_id == section_id]
        return sorted(refs, key=lambda r: r.position or 0)


class Severity(StrEnum):
    ERROR = "error"
    WARNING = "warning"


class Diagnostic(CamelModel):
    """A single validation finding tied to the block it concerns."""

    section: str
    message: str
    severity: Severity


class ValidationState(CamelModel):
    """Result of one validation pass. Derived, never persisted."""

    errors: list[str] = Field(default_factory=list)
    warnings: list[str] = Field(default_factory=list)
    completed_sections: list[str] = Field(default_factory=list)
    diagnostics: list[Diagnostic] = Field(default_factory=list)

    @computed_field(alias="isValid")  # type: ignore[prop-decorator]
    @property
    def is_valid(self) -> bool:
        return not self.errors

    def for_section(self, section: str) -> list[Diagnostic]:
        return [d for d in self.diagnostics if d.section == section]

    def section_is_valid(self, section: str) -> bool:
        return not any(d.severity == Severity.ERROR for d in self.for_section(section))


class BlogValidationRules(CamelModel):
    """Fixed rule set consulted by the validator."""

    model_config = ConfigDict(frozen=True)

    h1_count: int = 1
    h1_has_keyword: bool = True
    featured_image_exists: bool = True
    introduction_min_words: int = 50
    introduction_max_words: int = 180
    primary_keyword_filled: bool = True
    faq_max_items: int = 6


DEFAULT_RULES = BlogValidationRules()
