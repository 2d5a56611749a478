import logging
from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException

from blog_content import dependencies as deps
from blog_content.errors import NotFoundError
from blog_content.schemas.blog import PostDetail, PostPage, PostSummary
from blog_content.services.posts_service import PostsService

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("/posts", response_model=PostPage)
def list_posts(
    tag: Optional[str] = None,
    page: int = 1,
    service: PostsService = Depends(deps.get_posts_service),
):
    """Published posts, newest first, optionally filtered by tag."""
    try:
        return service.list_posts(tag=tag, page=page)
    except NotFoundError:
        raise HTTPException(status_code=404, detail="Page not found")
    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"Unexpected error listing posts: {e}")
        raise HTTPException(status_code=500, detail="Failed to retrieve posts")


@router.get("/posts/{slug}", response_model=PostDetail)
def get_post(
    slug: str,
    service: PostsService = Depends(deps.get_posts_service),
):
    """Get a single post by slug, drafts included."""
    try:
        return service.get_post(slug)
    except NotFoundError:
        raise HTTPException(status_code=404, detail="Post not found")
    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"Unexpected error retrieving post {slug}: {e}")
        raise HTTPException(status_code=500, detail="Failed to retrieve post")


@router.get("/recent", response_model=List[PostSummary])
def recent_posts(service: PostsService = Depends(deps.get_posts_service)):
    """Newest published posts for the home page."""
    try:
        return service.recent_posts()
    except Exception as e:
        logger.error(f"Unexpected error listing recent posts: {e}")
        raise HTTPException(status_code=500, detail="Failed to retrieve posts")


@router.get("/tags", response_model=List[str])
def list_tags(service: PostsService = Depends(deps.get_posts_service)):
    try:
        return service.list_tags()
    except Exception as e:
        logger.error(f"Unexpected error listing tags: {e}")
        raise HTTPException(status_code=500, detail="Failed to retrieve tags")
