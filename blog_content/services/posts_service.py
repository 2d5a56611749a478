import logging
from datetime import datetime
from typing import List, Optional

from blog_content.schemas.blog import PostDetail, PostPage, PostSummary
from blog_content.schemas.post import Post
from blog_content.services.collection import Collection
from blog_content.settings import Settings

logger = logging.getLogger(__name__)


class PostsService:
    def __init__(self, collection: Collection, settings: Settings):
        self.collection = collection
        self.settings = settings

    def list_posts(
        self,
        tag: Optional[str] = None,
        page: int = 1,
        now: Optional[datetime] = None,
    ) -> PostPage:
        posts = (
            self.collection.by_tag(tag, now)
            if tag
            else self.collection.published(now)
        )
        result = self.collection.paginate(posts, page)
        return PostPage(
            items=[self._summary(p) for p in result.items],
            page=result.page,
            totalPages=result.total_pages,
            total=result.total,
        )

    def get_post(self, slug: str) -> PostDetail:
        """Drafts are returned too: this is the preview path."""
        post = self.collection.by_slug(slug)
        if post.draft:
            logger.debug(f"Serving draft preview for {slug}")
        return PostDetail(
            **self._summary(post).model_dump(),
            canonicalURL=post.canonicalURL,
            body=post.body,
        )

    def recent_posts(self, now: Optional[datetime] = None) -> List[PostSummary]:
        return [self._summary(p) for p in self.collection.recent(now)]

    def list_tags(self, now: Optional[datetime] = None) -> List[str]:
        return self.collection.unique_tags(now)

    def _summary(self, post: Post) -> PostSummary:
        return PostSummary(
            slug=post.slug,
            url=self.settings.post_url(post.slug),
            title=post.title,
            author=post.author,
            description=post.description,
            pubDatetime=post.pubDatetime,
            modDatetime=post.modDatetime,
            tags=list(post.tags),
            featured=post.featured,
            draft=post.draft,
            ogImage=post.ogImage,
            readingTime=post.readingTime,
        )
