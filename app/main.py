import logging
from pathlib import Path

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from fastapi.staticfiles import StaticFiles

from app.errors import MissingConfiguration
from app.routers import pages, posts
from app.settings import settings

# Configure logging
logging.basicConfig(
    level=getattr(logging, settings.LOG_LEVEL.upper()),
    format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)

STATIC_DIR = Path(__file__).resolve().parent / "static"

app = FastAPI(
    title="Notion Blog", description="Blog front end backed by a Notion database"
)


@app.exception_handler(MissingConfiguration)
async def missing_configuration_handler(request: Request, exc: MissingConfiguration):
    logger.error(f"{exc} (while serving {request.url.path})")
    if not request.url.path.startswith(posts.router.prefix):
        return pages.render_error_page(request, settings, 500, str(exc))
    return JSONResponse(status_code=500, content={"detail": str(exc)})


app.mount("/static", StaticFiles(directory=str(STATIC_DIR)), name="static")
app.include_router(pages.router)
app.include_router(posts.router)


@app.get("/health")
async def health():
    return {"message": "Notion blog is running"}
