import logging
from contextlib import asynccontextmanager

from fastapi import Depends, FastAPI

from blog_content.routers import posts
from blog_content.security import require_preview_key
from blog_content.services.ingester import build_collection
from blog_content.settings import settings

# Configure logging
logging.basicConfig(
    level=getattr(logging, settings.LOG_LEVEL.upper()),
    format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    # A broken corpus stops startup; never serve a partial index.
    app.state.collection = build_collection(settings)
    logger.info(f"Preview API serving {len(app.state.collection)} posts")

    try:
        yield
    finally:
        app.state.collection = None
        logger.info("Preview API shut down")


app = FastAPI(
    title="Blog Content Preview API",
    description="Read-only view over the validated post collection",
    lifespan=lifespan,
)

app.include_router(posts.router, dependencies=[Depends(require_preview_key)])


@app.get("/")
async def root():
    return {"message": "Blog content preview API is running"}
