import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Iterable, List, Optional

from blog_content.errors import ContentError, MalformedFieldError
from blog_content.schemas.post import Post
from blog_content.services.collection import Collection
from blog_content.services.frontmatter_parser import parse_post
from blog_content.settings import Settings, settings as default_settings

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ParseResult:
    """Outcome of validating one source file: either a post or the error."""

    path: Path
    post: Optional[Post] = None
    error: Optional[ContentError] = None

    @property
    def ok(self) -> bool:
        return self.error is None


def discover_sources(posts_dir) -> List[Path]:
    """All Markdown files under posts_dir, sorted. Names starting with _ are ignored."""
    root = Path(posts_dir)
    if not root.is_dir():
        raise FileNotFoundError(f"Posts directory not found: {root}")

    sources = []
    for path in sorted(root.rglob("*.md")):
        if not path.is_file():
            continue
        if path.name.startswith("_"):
            logger.debug(f"Skipping underscore-prefixed file {path}")
            continue
        sources.append(path)
    return sources


def validate_sources(
    paths: Iterable[Path], *, timezone: Optional[str] = None
) -> List[ParseResult]:
    results = []
    for path in paths:
        try:
            # utf-8-sig drops a leading BOM so the --- delimiter is still first
            content = path.read_text(encoding="utf-8-sig")
        except (UnicodeDecodeError, OSError) as e:
            error = MalformedFieldError("encoding", str(path), None, str(e))
            results.append(ParseResult(path=path, error=error))
            continue
        try:
            post = parse_post(content, str(path), timezone=timezone)
        except ContentError as e:
            results.append(ParseResult(path=path, error=e))
            continue
        results.append(ParseResult(path=path, post=post))
    return results


def build_collection(settings: Optional[Settings] = None) -> Collection:
    """
    Run one ingestion pass: discover, validate, index.

    Every invalid file is logged; the first one (in path order) is raised so
    the build stops before anything partial reaches the renderer.
    """
    settings = settings or default_settings
    sources = discover_sources(settings.POSTS_DIR)
    results = validate_sources(sources, timezone=settings.SITE_TIMEZONE)

    failures = [r for r in results if not r.ok]
    for failure in failures:
        logger.error(f"Invalid post {failure.path}: {failure.error}")
    if failures:
        logger.error(
            f"Ingestion aborted: {len(failures)}/{len(results)} posts failed validation"
        )
        raise failures[0].error

    try:
        collection = Collection((r.post for r in results), settings=settings)
    except ContentError as e:
        logger.error(f"Ingestion aborted: {e}")
        raise

    drafts = sum(1 for post in collection.all() if post.draft)
    logger.info(
        f"Ingested {len(collection)} posts ({drafts} drafts) from {settings.POSTS_DIR}"
    )
    return collection
