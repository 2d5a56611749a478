from typing import Optional, Tuple

import frontmatter
import yaml
from pydantic import ValidationError

from blog_content.errors import MalformedFieldError, SchemaError
from blog_content.schemas.post import REQUIRED_FIELDS, Post
from blog_content.services.slugs import resolve_slug


def split_frontmatter(content: str) -> Tuple[dict, str]:
    """
    Split raw file content into (metadata, body).

    Only the first ``---`` block is metadata. Anything after its closing
    delimiter, including a second frontmatter-looking block left behind by
    an edited duplicate, is returned untouched as body text.
    """
    parsed = frontmatter.loads(content)
    return dict(parsed.metadata), parsed.content


def parse_post(
    content: str, source_path: str, *, timezone: Optional[str] = None
) -> Post:
    """Validate one Markdown file and return its Post. No I/O, no logging."""
    try:
        metadata, body = split_frontmatter(content)
    except yaml.YAMLError as e:
        raise MalformedFieldError("frontmatter", source_path, None, str(e)) from e

    for field in REQUIRED_FIELDS:
        if metadata.get(field) is None:
            raise SchemaError(field, source_path)

    data = {
        **metadata,
        "body": body,
        "source_path": source_path,
    }
    context = {"timezone": timezone} if timezone else None

    try:
        post = Post.model_validate(data, context=context)
    except ValidationError as e:
        first = e.errors()[0]
        field = str(first["loc"][0]) if first["loc"] else "frontmatter"
        raise MalformedFieldError(
            field, source_path, metadata.get(field), first["msg"]
        ) from e

    # Resolve eagerly so an unusable title fails here, not at indexing time.
    resolve_slug(post.postSlug, post.title, source_path)
    return post


def dump_post(post: Post) -> str:
    """Serialize a Post back into frontmatter + body."""
    return frontmatter.dumps(frontmatter.Post(post.body, **post.frontmatter()))
