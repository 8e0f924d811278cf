"""Keyword lock: keep the primary keyword stable across re-parses."""

from __future__ import annotations

import logging

from postcraft.blog.models import BlogPost

logger = logging.getLogger(__name__)


def lock_keyword(post: BlogPost) -> BlogPost:
    """Return a copy of *post* with its keywords locked.

    A post without a primary keyword has nothing to lock and is returned
    unchanged.
    """
    if not post.primary_keyword.strip():
        return post
    return post.model_copy(update={"keyword_locked": True})


def merge_posts(previous: BlogPost, incoming: BlogPost) -> BlogPost:
    """Merge a fresh parse into the previous state of the same post.

    Everything comes from *incoming*, except that a locked keyword setup
    in *previous* survives unchanged.
    """
    if not previous.keyword_locked:
        return incoming
    if incoming.primary_keyword and incoming.primary_keyword != previous.primary_keyword:
        logger.info(
            "Keyword locked to '%s'; ignoring '%s'",
            previous.primary_keyword,
            incoming.primary_keyword,
        )
    return incoming.model_copy(
        update={
            "primary_keyword": previous.primary_keyword,
            "secondary_keywords": list(previous.secondary_keywords),
            "keyword_locked": True,
        }
    )
