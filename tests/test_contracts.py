"""Tests for the request/response contracts."""

from __future__ import annotations

from postcraft.blog.models import ImageReference
from postcraft.blog.renderer import OutputFormat, RenderOptions, RenderResult
from postcraft.contracts import (
    GenerateHTMLRequest,
    GenerateHTMLResponse,
    ParseDocumentRequest,
    ParseDocumentResponse,
    ParseResultKind,
    RenderResultKind,
)


class TestRequests:
    def test_camel_case_options(self):
        req = GenerateHTMLRequest.model_validate(
            {
                "document": "x",
                "options": {
                    "includeSchema": False,
                    "imageUrls": {"hero": "https://cdn.example.com/h.png"},
                    "featuredImageUrl": "https://cdn.example.com/f.png",
                    "blogDate": "2026-01-15",
                },
            }
        )
        options = req.render_options()
        assert options.include_schema is False
        assert options.image_urls == {"hero": "https://cdn.example.com/h.png"}
        assert options.featured_image_url == "https://cdn.example.com/f.png"
        assert options.blog_date == "2026-01-15"

    def test_top_level_format_wins(self):
        req = GenerateHTMLRequest(
            document="x",
            options=RenderOptions(format=OutputFormat.FRAGMENT),
            format=OutputFormat.DOCUMENT,
        )
        assert req.render_options().format == OutputFormat.DOCUMENT
        assert req.options.format == OutputFormat.FRAGMENT

    def test_null_options(self):
        req = GenerateHTMLRequest.model_validate({"document": "x", "options": None})
        assert req.render_options() == RenderOptions()

    def test_null_options_with_format(self):
        req = GenerateHTMLRequest.model_validate(
            {"document": "x", "options": None, "format": "document"}
        )
        assert req.render_options() == RenderOptions(format=OutputFormat.DOCUMENT)

    def test_defaults(self):
        req = ParseDocumentRequest()
        assert req.document is None
        assert req.previous is None
        assert GenerateHTMLRequest().render_options() == RenderOptions()


class TestResponses:
    def test_invalid_parse_response(self):
        response = ParseDocumentResponse.invalid("Missing 'document' field", "empty")
        assert response.kind == ParseResultKind.INVALID_REQUEST
        assert response.success is False

    def test_from_render_rendered(self):
        response = GenerateHTMLResponse.from_render(RenderResult(html="<p>x</p>"))
        assert response.kind == RenderResultKind.RENDERED
        assert response.success is True
        assert response.message is None

    def test_from_render_upload_required(self):
        refs = [
            ImageReference(keyword="hero", section_id="whatIs", position=0),
            ImageReference(keyword="chart", section_id="benefits", position=0),
        ]
        result = RenderResult(html="<!-- image: hero -->", images=refs, requires_image_upload=True)
        response = GenerateHTMLResponse.from_render(result)
        assert response.kind == RenderResultKind.IMAGE_UPLOAD_REQUIRED
        assert response.success is False
        assert response.html == "<!-- image: hero -->"
        assert "2 image(s)" in response.message
        assert "hero, chart" in response.message

    def test_serialised_keys(self):
        data = GenerateHTMLResponse.invalid("bad", "worse").model_dump(by_alias=True)
        assert data["kind"] == RenderResultKind.INVALID_REQUEST
        assert "requiresImageUpload" in data
