"""Request handlers wrapping the parse, validate and render pipeline.

Handlers never raise for caller mistakes: malformed requests come back as
an ``invalid_request`` response with a human-readable message.
"""

from __future__ import annotations

import logging
from typing import Any

from pydantic import ValidationError

from postcraft.blog.merge import merge_posts
from postcraft.blog.models import (
    DEFAULT_RULES,
    BlogPost,
    BlogValidationRules,
    ValidationState,
)
from postcraft.blog.parser import parse
from postcraft.blog.renderer import render
from postcraft.blog.validator import validate
from postcraft.contracts import (
    GenerateHTMLRequest,
    GenerateHTMLResponse,
    ParseDocumentRequest,
    ParseDocumentResponse,
)
from postcraft.errors import ErrorKind, PipelineReport

logger = logging.getLogger(__name__)

EMPTY_DOCUMENT_MESSAGE = "Document must be a non-empty string"


def parse_document(
    request: ParseDocumentRequest | dict[str, Any],
    rules: BlogValidationRules = DEFAULT_RULES,
    report: PipelineReport | None = None,
) -> ParseDocumentResponse:
    """Parse a document into a ``BlogPost`` and validate it."""
    report = report if report is not None else PipelineReport()
    try:
        req = ParseDocumentRequest.model_validate(request)
    except ValidationError as exc:
        report.add_error(
            "request", str(exc), kind=ErrorKind.INVALID_REQUEST, recoverable=False
        )
        return ParseDocumentResponse.invalid("Invalid request body", _first_error(exc))

    if not req.document or not req.document.strip():
        report.add_error(
            "request",
            EMPTY_DOCUMENT_MESSAGE,
            kind=ErrorKind.INVALID_REQUEST,
            recoverable=False,
        )
        return ParseDocumentResponse.invalid("Missing 'document' field", EMPTY_DOCUMENT_MESSAGE)

    post = parse(req.document)
    _note_malformed(post, report)
    if req.previous is not None:
        post = merge_posts(req.previous, post)
    report.mark_stage_complete("parse")

    validation = _validate(post, rules, report)
    return ParseDocumentResponse.parsed(post, validation)


def generate_html(
    request: GenerateHTMLRequest | dict[str, Any],
    rules: BlogValidationRules = DEFAULT_RULES,
    report: PipelineReport | None = None,
) -> GenerateHTMLResponse:
    """Run the full pipeline and render HTML.

    When images lack hosted URLs the response is ``image_upload_required``
    and still carries the draft HTML; the caller uploads the listed images
    and calls again with ``imageUrls`` filled in.
    """
    report = report if report is not None else PipelineReport()
    try:
        req = GenerateHTMLRequest.model_validate(request)
    except ValidationError as exc:
        report.add_error(
            "request", str(exc), kind=ErrorKind.INVALID_REQUEST, recoverable=False
        )
        return GenerateHTMLResponse.invalid("Invalid request body", _first_error(exc))

    if not req.document or not req.document.strip():
        report.add_error(
            "request",
            EMPTY_DOCUMENT_MESSAGE,
            kind=ErrorKind.INVALID_REQUEST,
            recoverable=False,
        )
        return GenerateHTMLResponse.invalid("Missing 'document' field", EMPTY_DOCUMENT_MESSAGE)

    options = req.render_options()
    logger.debug(
        "Generating HTML: %d characters, format=%s, %d image URL(s)",
        len(req.document),
        options.format,
        len(options.image_urls),
    )

    post = parse(req.document)
    _note_malformed(post, report)
    report.mark_stage_complete("parse")
    validation = _validate(post, rules, report)

    result = render(post, validation, options)
    if result.requires_image_upload:
        report.add_error(
            "render",
            f"{len(result.images)} image(s) need uploading",
            kind=ErrorKind.IMAGE_UPLOAD_REQUIRED,
        )
    report.mark_stage_complete("render")
    logger.debug("Rendered %d characters of HTML", len(result.html))
    return GenerateHTMLResponse.from_render(result)


def _note_malformed(post: BlogPost, report: PipelineReport) -> None:
    if post == BlogPost():
        report.add_error(
            "parse",
            "No recognizable fields or sections found",
            kind=ErrorKind.MALFORMED_INPUT,
        )


def _validate(
    post: BlogPost, rules: BlogValidationRules, report: PipelineReport
) -> ValidationState:
    validation = validate(post, rules)
    for message in validation.errors:
        report.add_error("validate", message, kind=ErrorKind.VALIDATION_FAILED)
    if validation.errors:
        logger.info("Validation found %d error(s)", len(validation.errors))
    report.mark_stage_complete("validate")
    return validation


def _first_error(exc: ValidationError) -> str:
    errors = exc.errors()
    if not errors:
        return str(exc)
    first = errors[0]
    location = ".".join(str(part) for part in first.get("loc", ()))
    return f"{location}: {first.get('msg', 'invalid value')}" if location else first["msg"]
