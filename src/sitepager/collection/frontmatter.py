"""YAML front matter parsing and rendering."""

from __future__ import annotations

from typing import Any, Mapping

import frontmatter
import yaml

from .errors import CollectionError

FRONT_MATTER_SUFFIXES = frozenset({".md", ".markdown", ".html", ".htm", ".njk"})


def split_front_matter(text: str, *, source: str = "<string>") -> tuple[dict[str, Any], str]:
    """Return the front matter fields and the remaining body of ``text``.

    Text without a front matter block is returned unchanged. When a block is
    present the body is stripped of surrounding whitespace.

    Raises:
        CollectionError: If the front matter is not valid YAML.
    """
    if not frontmatter.checks(text):
        return {}, text

    try:
        post = frontmatter.loads(text)
    except yaml.YAMLError as exc:
        raise CollectionError(f"{source}: invalid front matter: {exc}") from exc
    return dict(post.metadata), post.content


def render_front_matter(fields: Mapping[str, Any], body: str) -> str:
    """Serialize ``fields`` as a front matter block followed by ``body``."""
    if not fields:
        return body
    post = frontmatter.Post(body)
    post.metadata.update(fields)
    return frontmatter.dumps(post, sort_keys=False) + "\n"
