import math
from dataclasses import dataclass
from datetime import datetime, timezone
from itertools import islice
from typing import Iterable, Iterator, List, Optional, Sequence

from blog_content.errors import NotFoundError
from blog_content.schemas.post import Post
from blog_content.services.slugs import index_by_slug
from blog_content.settings import Settings, settings as default_settings
from blog_content.utils import load_timezone


@dataclass(frozen=True)
class Page:
    items: List[Post]
    page: int
    total_pages: int
    total: int

    @property
    def has_next(self) -> bool:
        return self.page < self.total_pages

    @property
    def has_previous(self) -> bool:
        return self.page > 1


class Collection:
    """
    Every Post from one ingestion pass, newest first, with the query views the
    site renderer needs. Built wholesale; never mutated afterwards.
    """

    def __init__(self, posts: Iterable[Post], *, settings: Optional[Settings] = None):
        self.settings = settings or default_settings
        # slug ascending first so equal timestamps keep a stable order
        ordered = sorted(posts, key=lambda p: p.slug)
        ordered.sort(key=lambda p: p.pubDatetime, reverse=True)
        self._posts = tuple(ordered)
        self._by_slug = index_by_slug(self._posts)

    def __len__(self) -> int:
        return len(self._posts)

    def all(self) -> Iterator[Post]:
        yield from self._posts

    def _now(self, now: Optional[datetime]) -> datetime:
        if now is None:
            return datetime.now(timezone.utc)
        if now.tzinfo is None:
            # post datetimes are always aware; read a naive clock as site time
            return now.replace(tzinfo=load_timezone(self.settings.SITE_TIMEZONE))
        return now

    def published(self, now: Optional[datetime] = None) -> Iterator[Post]:
        """Non-draft posts whose publish time (minus the scheduling margin) has passed."""
        now = self._now(now)
        cutoff = now + self.settings.scheduled_post_margin
        for post in self.all():
            if post.draft:
                continue
            if not self.settings.SHOW_SCHEDULED and post.pubDatetime > cutoff:
                continue
            yield post

    def by_tag(self, tag: str, now: Optional[datetime] = None) -> Iterator[Post]:
        return (post for post in self.published(now) if post.has_tag(tag))

    def by_slug(self, slug: str) -> Post:
        try:
            return self._by_slug[slug]
        except KeyError:
            raise NotFoundError(f"No post with slug {slug!r}") from None

    def recent(self, now: Optional[datetime] = None) -> List[Post]:
        """The newest published posts for the home page, POST_PER_INDEX of them."""
        return list(islice(self.published(now), self.settings.POST_PER_INDEX))

    def featured(self, now: Optional[datetime] = None) -> Iterator[Post]:
        return (post for post in self.published(now) if post.featured)

    def unique_tags(self, now: Optional[datetime] = None) -> List[str]:
        tags = {}
        for post in self.published(now):
            for tag in post.tags:
                tags.setdefault(tag.casefold(), tag)
        return [tags[key] for key in sorted(tags)]

    def paginate(
        self, posts: Iterable[Post], page: int = 1, per_page: Optional[int] = None
    ) -> Page:
        if per_page is None:
            per_page = self.settings.POST_PER_PAGE
        return paginate(list(posts), page, per_page)


def paginate(posts: Sequence[Post], page: int, per_page: int) -> Page:
    """Slice a post sequence into 1-based pages. An empty sequence has one empty page."""
    if per_page < 1:
        raise ValueError("per_page must be at least 1")
    total_pages = max(1, math.ceil(len(posts) / per_page))
    if page < 1 or page > total_pages:
        raise NotFoundError(f"Page {page} out of range (1-{total_pages})")
    start = (page - 1) * per_page
    return Page(
        items=list(posts[start : start + per_page]),
        page=page,
        total_pages=total_pages,
        total=len(posts),
    )
