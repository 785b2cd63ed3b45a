import asyncio
import logging
from pathlib import Path
from typing import Optional

from fastapi import APIRouter, Depends, Request
from fastapi.responses import HTMLResponse
from fastapi.templating import Jinja2Templates

from app import dependencies as deps
from app.errors import NotFound, UnsupportedSortKind, UpstreamUnavailable
from app.repos.posts_repo import ALL_TAG_ID
from app.schemas.blog import SortKind
from app.services.posts_service import PostsService
from app.settings import Settings

logger = logging.getLogger(__name__)

TEMPLATES_DIR = Path(__file__).resolve().parent.parent / "templates"
templates = Jinja2Templates(directory=str(TEMPLATES_DIR))

router = APIRouter()

SORT_OPTIONS = [
    (SortKind.LATEST.value, "최신순"),
    (SortKind.OLDEST.value, "오래된순"),
]


def render_error_page(
    request: Request, current_settings: Settings, status_code: int, message: str
):
    return templates.TemplateResponse(
        request,
        "error.html",
        {"settings": current_settings, "status_code": status_code, "message": message},
        status_code=status_code,
    )


async def _fetch_all(*coros):
    """Run fetches concurrently; if one fails, cancel and drain the rest."""
    tasks = [asyncio.ensure_future(coro) for coro in coros]
    try:
        return await asyncio.gather(*tasks)
    except BaseException:
        for task in tasks:
            task.cancel()
        await asyncio.gather(*tasks, return_exceptions=True)
        raise


@router.get("/", response_class=HTMLResponse)
async def home(
    request: Request,
    tag: Optional[str] = None,
    sort: Optional[str] = None,
    service: PostsService = Depends(deps.get_posts_service),
    current_settings: Settings = Depends(deps.get_settings),
):
    """Post list with tag sidebar and sort control."""
    selected_tag = tag or current_settings.ALL_TAG_NAME
    is_all = selected_tag in (ALL_TAG_ID, current_settings.ALL_TAG_NAME)
    try:
        sort_kind = SortKind.parse(sort)
    except UnsupportedSortKind as e:
        return render_error_page(request, current_settings, 400, str(e))
    selected_sort = sort_kind.value

    try:
        posts, tags = await _fetch_all(
            service.list_posts(tag=selected_tag, sort=sort_kind),
            service.list_tags(),
        )
    except UpstreamUnavailable as e:
        logger.error(f"Notion unavailable rendering home page: {e}")
        return render_error_page(
            request, current_settings, 502, "글 목록을 불러오지 못했습니다."
        )

    heading = "블로그 목록" if is_all else f"{selected_tag} 관련 글"
    return templates.TemplateResponse(
        request,
        "index.html",
        {
            "settings": current_settings,
            "heading": heading,
            "posts": posts,
            "tags": tags,
            "selected_tag": current_settings.ALL_TAG_NAME if is_all else selected_tag,
            "selected_sort": selected_sort,
            "sort_options": SORT_OPTIONS,
        },
    )


@router.get("/blog/{slug}", response_class=HTMLResponse)
async def post_page(
    request: Request,
    slug: str,
    service: PostsService = Depends(deps.get_posts_service),
    current_settings: Settings = Depends(deps.get_settings),
):
    try:
        post = await service.get_post(slug)
    except NotFound:
        return render_error_page(
            request, current_settings, 404, "글을 찾을 수 없습니다."
        )
    except UpstreamUnavailable as e:
        logger.error(f"Notion unavailable rendering post {slug}: {e}")
        return render_error_page(
            request, current_settings, 502, "글을 불러오지 못했습니다."
        )

    return templates.TemplateResponse(
        request, "post.html", {"settings": current_settings, "post": post}
    )
