from datetime import datetime
from typing import List, Optional

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    ValidationInfo,
    computed_field,
    field_validator,
)

from blog_content.services.slugs import resolve_slug
from blog_content.settings import settings
from blog_content.utils import calculate_reading_time, date_to_datetime, load_timezone

# Frontmatter keys in the order they are written back out.
FRONTMATTER_FIELDS = (
    "author",
    "pubDatetime",
    "modDatetime",
    "title",
    "postSlug",
    "featured",
    "draft",
    "tags",
    "ogImage",
    "canonicalURL",
    "description",
)

REQUIRED_FIELDS = ("author", "pubDatetime", "title", "draft")


class Post(BaseModel):
    """One validated blog post. Frozen: every ingestion pass builds new records."""

    model_config = ConfigDict(frozen=True)

    author: str
    pubDatetime: datetime
    modDatetime: Optional[datetime] = None
    title: str
    postSlug: Optional[str] = None
    featured: bool = False
    draft: bool
    tags: List[str] = Field(default_factory=list)
    ogImage: Optional[str] = None
    canonicalURL: Optional[str] = None
    description: str = ""
    body: str = ""
    source_path: str

    @field_validator("pubDatetime", "modDatetime", mode="before")
    @classmethod
    def _widen_dates(cls, value):
        return date_to_datetime(value)

    @field_validator("pubDatetime", "modDatetime")
    @classmethod
    def _attach_timezone(cls, value: Optional[datetime], info: ValidationInfo):
        if value is None or value.tzinfo is not None:
            return value
        tz_name = (info.context or {}).get("timezone") or settings.SITE_TIMEZONE
        return value.replace(tzinfo=load_timezone(tz_name))

    @field_validator("title")
    @classmethod
    def _title_not_blank(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("title cannot be empty")
        return value

    @field_validator("tags", mode="before")
    @classmethod
    def _normalize_tags(cls, value):
        if value is None:
            return []
        if isinstance(value, str):
            value = [value]
        if not isinstance(value, (list, tuple)):
            raise ValueError("tags must be a list of strings")

        tags: List[str] = []
        seen = set()
        for tag in value:
            if not isinstance(tag, str):
                raise ValueError(f"tag {tag!r} is not a string")
            tag = tag.strip()
            if not tag:
                raise ValueError("tags cannot contain empty entries")
            # AKS and aks are the same tag; keep whichever came first
            if tag.casefold() in seen:
                continue
            seen.add(tag.casefold())
            tags.append(tag)
        return tags

    @computed_field
    @property
    def slug(self) -> str:
        return resolve_slug(self.postSlug, self.title, self.source_path)

    @computed_field
    @property
    def readingTime(self) -> str:
        return calculate_reading_time(self.body)

    def has_tag(self, tag: str) -> bool:
        wanted = tag.strip().casefold()
        return any(t.casefold() == wanted for t in self.tags)

    def frontmatter(self) -> dict:
        """Metadata as it would appear in the YAML header (None values omitted)."""
        metadata = {}
        for name in FRONTMATTER_FIELDS:
            value = getattr(self, name)
            if value is None:
                continue
            if isinstance(value, datetime):
                value = value.isoformat()
            elif isinstance(value, list):
                value = list(value)
            metadata[name] = value
        return metadata
