from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, Field


class PostSummary(BaseModel):
    slug: str
    url: str
    title: str
    author: str
    description: str = ""
    pubDatetime: datetime
    modDatetime: Optional[datetime] = None
    tags: List[str] = Field(default_factory=list)
    featured: bool = False
    draft: bool = False
    ogImage: Optional[str] = None
    readingTime: Optional[str] = None


class PostDetail(PostSummary):
    canonicalURL: Optional[str] = None
    body: str  # Markdown content without frontmatter


class PostPage(BaseModel):
    items: List[PostSummary] = Field(default_factory=list)
    page: int = 1
    totalPages: int = 1
    total: int = 0
