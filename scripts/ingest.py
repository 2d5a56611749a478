import logging
import sys

from blog_content.errors import ContentError
from blog_content.services.ingester import build_collection
from blog_content.settings import Settings, settings

logger = logging.getLogger(__name__)


def main(current_settings: Settings = settings) -> int:
    """Validate the whole corpus once. Returns a process exit code."""
    try:
        collection = build_collection(current_settings)
    except (ContentError, FileNotFoundError) as e:
        logger.error(f"Ingestion failed: {e}")
        return 1

    published = sum(1 for _ in collection.published())
    logger.info(
        f"Ingestion completed successfully: {published} published, "
        f"{len(collection) - published} hidden (drafts or scheduled)."
    )
    return 0


if __name__ == "__main__":
    logging.basicConfig(
        level=getattr(logging, settings.LOG_LEVEL.upper()),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    )
    sys.exit(main())
