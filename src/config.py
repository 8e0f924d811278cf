"""Unified configuration loaded from .postcraft.toml, env vars, and CLI flags.

Loading order: defaults → TOML file → env vars → CLI flags.
"""

from __future__ import annotations

import logging
import os
import tomllib
from pathlib import Path

from pydantic import BaseModel, Field

from postcraft.blog.models import BlogValidationRules
from postcraft.blog.renderer import OutputFormat, RenderOptions

logger = logging.getLogger(__name__)

CONFIG_FILENAME = ".postcraft.toml"
CONFIG_SEARCH_PATHS = [
    Path("."),
]


class RenderSectionConfig(BaseModel):
    """[render] section."""

    include_schema: bool = True
    include_images: bool = True
    format: OutputFormat = OutputFormat.FRAGMENT
    author_name: str = ""
    blog_title: str = ""


class RulesSectionConfig(BaseModel):
    """[rules] section."""

    introduction_min_words: int = 50
    introduction_max_words: int = 180
    faq_max_items: int = 6


class ImagesSectionConfig(BaseModel):
    """[images] section: URLs already hosted, keyed by image keyword."""

    urls: dict[str, str] = Field(default_factory=dict)
    featured_image_url: str = ""


class PostcraftConfig(BaseModel):
    """Top-level configuration model."""

    render: RenderSectionConfig = Field(default_factory=RenderSectionConfig)
    rules: RulesSectionConfig = Field(default_factory=RulesSectionConfig)
    images: ImagesSectionConfig = Field(default_factory=ImagesSectionConfig)

    def to_validation_rules(self) -> BlogValidationRules:
        """Build the (frozen) rule set the validator consults."""
        return BlogValidationRules(
            introduction_min_words=self.rules.introduction_min_words,
            introduction_max_words=self.rules.introduction_max_words,
            faq_max_items=self.rules.faq_max_items,
        )

    def to_render_options(self, **overrides: object) -> RenderOptions:
        """Build render options, with explicit per-call values on top."""
        options = RenderOptions(
            include_schema=self.render.include_schema,
            include_images=self.render.include_images,
            format=self.render.format,
            author_name=self.render.author_name or None,
            blog_title=self.render.blog_title or None,
            image_urls=dict(self.images.urls),
            featured_image_url=self.images.featured_image_url or None,
        )
        updates = {k: v for k, v in overrides.items() if v is not None}
        if "image_urls" in updates:
            updates["image_urls"] = {**options.image_urls, **updates["image_urls"]}
        return options.model_copy(update=updates)


def load_config(path: str | Path | None = None) -> PostcraftConfig:
    """Load configuration from a TOML file.

    Search order:
    1. Explicit path (if provided)
    2. .postcraft.toml in CWD
    3. ~/.config/postcraft/config.toml

    Then overlay environment variables.

    Args:
        path: Explicit path to a TOML file.

    Returns:
        Merged PostcraftConfig.
    """
    data: dict[str, object] = {}

    if path is not None:
        toml_path = Path(path)
        if toml_path.exists():
            data = _load_toml(toml_path)
        else:
            logger.warning("Config file not found: %s", toml_path)
    else:
        for search_dir in CONFIG_SEARCH_PATHS:
            candidate = search_dir / CONFIG_FILENAME
            if candidate.exists():
                data = _load_toml(candidate)
                logger.info("Loaded config from %s", candidate)
                break
        global_config = Path.home() / ".config" / "postcraft" / "config.toml"
        if not data and global_config.exists():
            data = _load_toml(global_config)
            logger.info("Loaded config from %s", global_config)

    config = PostcraftConfig.model_validate(data) if data else PostcraftConfig()

    return _apply_env_vars(config)


def merge_cli_overrides(config: PostcraftConfig, **cli_kwargs: object) -> PostcraftConfig:
    """Overlay explicitly-set CLI flags onto the config.

    Only overrides values where the CLI flag was explicitly provided
    (i.e., not None).
    """
    data = config.model_dump()

    mapping: dict[str, tuple[str, str]] = {
        "include_schema": ("render", "include_schema"),
        "include_images": ("render", "include_images"),
        "output_format": ("render", "format"),
        "author": ("render", "author_name"),
        "title": ("render", "blog_title"),
        "featured_image_url": ("images", "featured_image_url"),
        "intro_min_words": ("rules", "introduction_min_words"),
    }

    for key, value in cli_kwargs.items():
        if value is None:
            continue
        if key in mapping:
            section, field = mapping[key]
            data[section][field] = value
        elif key == "image_urls":
            data["images"]["urls"].update(value)

    return PostcraftConfig.model_validate(data)


def _load_toml(path: Path) -> dict[str, object]:
    """Load a TOML file and return the data dict."""
    try:
        with open(path, "rb") as f:
            return tomllib.load(f)
    except (tomllib.TOMLDecodeError, OSError) as exc:
        logger.warning("Failed to parse %s: %s", path, exc)
        return {}


def _apply_env_vars(config: PostcraftConfig) -> PostcraftConfig:
    """Apply environment variable overrides to config."""
    data = config.model_dump()

    env_mapping: dict[str, tuple[str, str]] = {
        "POSTCRAFT_AUTHOR": ("render", "author_name"),
        "POSTCRAFT_FORMAT": ("render", "format"),
        "POSTCRAFT_FEATURED_IMAGE_URL": ("images", "featured_image_url"),
    }

    for env_var, (section, field) in env_mapping.items():
        value = os.environ.get(env_var)
        if value is not None:
            data[section][field] = value

    min_words = os.environ.get("POSTCRAFT_INTRO_MIN_WORDS")
    if min_words is not None:
        try:
            data["rules"]["introduction_min_words"] = int(min_words)
        except ValueError:
            logger.warning("Ignoring non-numeric POSTCRAFT_INTRO_MIN_WORDS=%r", min_words)

    return PostcraftConfig.model_validate(data)
