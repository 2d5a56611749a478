from typing import Any, Optional


class ContentError(Exception):
    """Base class for failures that abort an ingestion pass."""

    def __init__(self, message: str, path: Optional[str] = None):
        super().__init__(message)
        self.path = path


class SchemaError(ContentError):
    """A required frontmatter field is missing."""

    def __init__(self, field: str, path: str):
        super().__init__(f"{path}: missing required frontmatter field {field!r}", path)
        self.field = field


class MalformedFieldError(ContentError):
    """A frontmatter field is present but cannot be parsed to its expected type."""

    def __init__(self, field: str, path: str, value: Any = None, reason: str = ""):
        message = f"{path}: malformed frontmatter field {field!r} (got {value!r})"
        if reason:
            message = f"{message}: {reason}"
        super().__init__(message, path)
        self.field = field
        self.value = value
        self.reason = reason


class SlugCollisionError(ContentError):
    """Two posts resolve to the same slug."""

    def __init__(self, slug: str, first_path: str, second_path: str):
        super().__init__(
            f"slug {slug!r} is used by both {first_path} and {second_path}",
            second_path,
        )
        self.slug = slug
        self.first_path = first_path
        self.second_path = second_path

    @property
    def paths(self) -> tuple[str, str]:
        return self.first_path, self.second_path


class NotFoundError(LookupError):
    """Query miss. Recoverable by the caller (e.g. render a 404)."""

    def __init__(self, message: str):
        super().__init__(message)
