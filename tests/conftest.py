import textwrap
from datetime import datetime, timezone
from pathlib import Path

import yaml

from blog_content.errors import NotFoundError
from blog_content.schemas.post import Post
from blog_content.settings import Settings

NOW = datetime(2026, 1, 1, 12, 0, tzinfo=timezone.utc)

DEFAULT_FRONTMATTER = {
    "author": "Steven",
    "pubDatetime": "2024-01-01T00:00:00Z",
    "title": "Hello World",
    "draft": False,
}


def markdown(raw: str) -> str:
    """Dedent an indented triple-quoted Markdown document."""
    return textwrap.dedent(raw).lstrip()


def make_markdown(body: str = "Body text.", **fields) -> str:
    """
    Build a Markdown document from DEFAULT_FRONTMATTER plus overrides.
    Passing a field as None removes it from the header.
    """
    metadata = {**DEFAULT_FRONTMATTER, **fields}
    metadata = {k: v for k, v in metadata.items() if v is not None}
    header = yaml.safe_dump(metadata, sort_keys=False, allow_unicode=True)
    return f"---\n{header}---\n\n{body}\n"


def write_post(directory: Path, name: str, text: str) -> Path:
    path = directory / name
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(text, encoding="utf-8")
    return path


def make_post(slug: str, **overrides) -> Post:
    """Construct a Post directly, bypassing file parsing."""
    data = {
        "author": "Steven",
        "pubDatetime": datetime(2024, 1, 1, tzinfo=timezone.utc),
        "title": slug.replace("-", " ").title(),
        "postSlug": slug,
        "draft": False,
        "body": "Body text.",
        "source_path": f"posts/{slug}.md",
    }
    data.update(overrides)
    return Post(**data)


def make_settings(posts_dir=".", **overrides) -> Settings:
    values = {"POSTS_DIR": str(posts_dir), "SITE_TIMEZONE": "UTC"}
    values.update(overrides)
    return Settings(**values)


class FakePostsService:
    """
    Minimal posts service stand-in for router tests.
    """

    def __init__(
        self, list_posts_return=None, get_post_return=None, tags=None, recent=None
    ):
        self._list_posts_return = list_posts_return or {"items": []}
        self._get_post_return = get_post_return
        self._tags = tags or []
        self._recent = recent or []
        self.calls = []

    def list_posts(self, tag=None, page=1):
        self.calls.append(("list_posts", tag, page))
        return self._list_posts_return

    def get_post(self, slug: str):
        self.calls.append(("get_post", slug))
        if self._get_post_return is None:
            raise NotFoundError(slug)
        return self._get_post_return

    def list_tags(self):
        return self._tags

    def recent_posts(self):
        return self._recent
