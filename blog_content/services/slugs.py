import re
import unicodedata
from pathlib import PurePath
from typing import Dict, Iterable, Optional

from blog_content.errors import MalformedFieldError, SlugCollisionError

_INVALID_CHARS = re.compile(r"[^\w\s-]")
_SEPARATORS = re.compile(r"[\s_-]+")


def slugify(text: str) -> str:
    """Lowercase, ASCII-fold and hyphenate text into a URL-safe slug."""
    folded = unicodedata.normalize("NFKD", text).encode("ascii", "ignore").decode()
    cleaned = _INVALID_CHARS.sub("", folded.strip().lower())
    return _SEPARATORS.sub("-", cleaned).strip("-")


def resolve_slug(post_slug: Optional[str], title: str, source_path: str) -> str:
    """
    Pick the routing slug for a post: explicit postSlug first, then the title,
    then the file name as a last resort.
    """
    if post_slug and post_slug.strip():
        slug = slugify(post_slug)
    else:
        slug = slugify(title or "")

    if not slug:
        slug = slugify(PurePath(source_path).stem)
    if not slug:
        raise MalformedFieldError(
            "title", source_path, title, "does not produce a usable slug"
        )
    return slug


def index_by_slug(posts: Iterable) -> Dict[str, object]:
    """Map slug -> post. Duplicates are a hard error, never renamed."""
    index: Dict[str, object] = {}
    for post in posts:
        existing = index.get(post.slug)
        if existing is not None:
            raise SlugCollisionError(
                post.slug, existing.source_path, post.source_path
            )
        index[post.slug] = post
    return index
