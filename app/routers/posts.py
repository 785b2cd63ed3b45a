import logging
from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException

from app import dependencies as deps
from app.errors import NotFound, UnsupportedSortKind, UpstreamUnavailable
from app.schemas.blog import Post, TagFilterItem
from app.services.posts_service import PostsService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api")


@router.get("/posts", response_model=List[Post])
async def list_posts(
    tag: Optional[str] = None,
    sort: Optional[str] = None,
    service: PostsService = Depends(deps.get_posts_service),
):
    """Get published posts, optionally filtered by tag."""
    try:
        return await service.list_posts(tag=tag, sort=sort)
    except UnsupportedSortKind as e:
        raise HTTPException(status_code=400, detail=str(e))
    except UpstreamUnavailable as e:
        logger.error(f"Notion unavailable listing posts: {e}")
        raise HTTPException(status_code=502, detail="Content source unavailable")
    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"Unexpected error listing posts: {e}")
        raise HTTPException(status_code=500, detail="Failed to retrieve posts")


@router.get("/posts/{slug}", response_model=Post)
async def get_post(
    slug: str,
    service: PostsService = Depends(deps.get_posts_service),
):
    """Get a single published post by slug."""
    try:
        return await service.get_post(slug)
    except NotFound:
        raise HTTPException(status_code=404, detail="Post not found")
    except UpstreamUnavailable as e:
        logger.error(f"Notion unavailable retrieving post {slug}: {e}")
        raise HTTPException(status_code=502, detail="Content source unavailable")
    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"Unexpected error retrieving post {slug}: {e}")
        raise HTTPException(status_code=500, detail="Failed to retrieve post")


@router.get("/tags", response_model=List[TagFilterItem])
async def list_tags(service: PostsService = Depends(deps.get_posts_service)):
    """Get tag counts across all published posts."""
    try:
        return await service.list_tags()
    except UpstreamUnavailable as e:
        logger.error(f"Notion unavailable counting tags: {e}")
        raise HTTPException(status_code=502, detail="Content source unavailable")
    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"Unexpected error counting tags: {e}")
        raise HTTPException(status_code=500, detail="Failed to retrieve tags")
