from fastapi import Depends, Request

from blog_content.security import get_settings
from blog_content.services.posts_service import PostsService


def get_collection(request: Request):
    """The collection built once at startup (see main.lifespan)."""
    return request.app.state.collection


def get_posts_service(
    collection=Depends(get_collection),
    current_settings=Depends(get_settings),
):
    return PostsService(collection=collection, settings=current_settings)
