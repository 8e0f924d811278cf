"""JSON request/response contracts for the parse and render endpoints.

Responses carry a closed ``kind`` tag so callers can branch exhaustively
instead of probing optional fields.
"""

from __future__ import annotations

from enum import StrEnum

from pydantic import Field

from postcraft.blog.models import BlogPost, CamelModel, ImageReference, ValidationState
from postcraft.blog.renderer import (
    OutputFormat,
    RenderMetadata,
    RenderOptions,
    RenderResult,
    SectionSummary,
)


class ParseResultKind(StrEnum):
    PARSED = "parsed"
    INVALID_REQUEST = "invalid_request"


class RenderResultKind(StrEnum):
    RENDERED = "rendered"
    IMAGE_UPLOAD_REQUIRED = "image_upload_required"
    INVALID_REQUEST = "invalid_request"


class ParseDocumentRequest(CamelModel):
    document: str | None = None
    previous: BlogPost | None = None


class ParseDocumentResponse(CamelModel):
    success: bool
    kind: ParseResultKind
    data: BlogPost | None = None
    validation: ValidationState | None = None
    error: str | None = None
    message: str | None = None

    @classmethod
    def parsed(cls, post: BlogPost, validation: ValidationState) -> ParseDocumentResponse:
        return cls(success=True, kind=ParseResultKind.PARSED, data=post, validation=validation)

    @classmethod
    def invalid(cls, error: str, message: str) -> ParseDocumentResponse:
        return cls(
            success=False,
            kind=ParseResultKind.INVALID_REQUEST,
            error=error,
            message=message,
        )


class GenerateHTMLRequest(CamelModel):
    document: str | None = None
    options: RenderOptions | None = None
    format: OutputFormat | None = None

    def render_options(self) -> RenderOptions:
        """Options with the top-level ``format`` folded in."""
        options = self.options or RenderOptions()
        if self.format is None:
            return options
        return options.model_copy(update={"format": self.format})


class GenerateHTMLResponse(CamelModel):
    success: bool
    kind: RenderResultKind
    html: str | None = None
    requires_image_upload: bool = False
    images: list[ImageReference] = Field(default_factory=list)
    metadata: RenderMetadata | None = None
    sections: list[SectionSummary] = Field(default_factory=list)
    error: str | None = None
    message: str | None = None

    @classmethod
    def from_render(cls, result: RenderResult) -> GenerateHTMLResponse:
        if result.requires_image_upload:
            keywords = ", ".join(ref.keyword for ref in result.images)
            return cls(
                success=False,
                kind=RenderResultKind.IMAGE_UPLOAD_REQUIRED,
                html=result.html,
                requires_image_upload=True,
                images=result.images,
                metadata=result.metadata,
                sections=result.sections,
                message=(
                    f"Document contains {len(result.images)} image(s) without a hosted URL "
                    f"({keywords}). Upload them and render again with imageUrls."
                ),
            )
        return cls(
            success=True,
            kind=RenderResultKind.RENDERED,
            html=result.html,
            images=result.images,
            metadata=result.metadata,
            sections=result.sections,
        )

    @classmethod
    def invalid(cls, error: str, message: str) -> GenerateHTMLResponse:
        return cls(
            success=False,
            kind=RenderResultKind.INVALID_REQUEST,
            error=error,
            message=message,
        )
