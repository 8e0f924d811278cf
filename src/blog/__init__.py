"""Blog post pipeline: parse a draft, validate it, render HTML.

Data flows strictly forward: raw text to ``BlogPost`` (parser), to
``ValidationState`` (validator), to HTML plus metadata (renderer). Every
stage is pure and synchronous.
"""

from postcraft.blog.merge import lock_keyword, merge_posts
from postcraft.blog.models import (
    DEFAULT_RULES,
    BlogPost,
    BlogSections,
    BlogValidationRules,
    ImageData,
    ImageReference,
    ValidationState,
)
from postcraft.blog.parser import parse
from postcraft.blog.renderer import OutputFormat, RenderOptions, RenderResult, render
from postcraft.blog.sections import CANONICAL_ORDER, SectionId
from postcraft.blog.validator import validate

__all__ = [
    "CANONICAL_ORDER",
    "DEFAULT_RULES",
    "BlogPost",
    "BlogSections",
    "BlogValidationRules",
    "ImageData",
    "ImageReference",
    "OutputFormat",
    "RenderOptions",
    "RenderResult",
    "SectionId",
    "ValidationState",
    "lock_keyword",
    "merge_posts",
    "parse",
    "render",
    "validate",
]
