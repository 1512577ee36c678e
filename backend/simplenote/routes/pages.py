"""
SimpleNote: Page Route
======================

What:  GET / serves the single HTML page.
       Paths with no route (e.g. /anything-else) fall through to FastAPI's 404.
"""

from fastapi import APIRouter, Depends
from fastapi.responses import HTMLResponse

from simplenote.dependencies import get_page_renderer
from simplenote.services.page import PageRenderer

router = APIRouter(tags=["Page"])


@router.get("/", response_class=HTMLResponse, summary="Notes page")
async def index(page: PageRenderer = Depends(get_page_renderer)) -> HTMLResponse:
    return HTMLResponse(content=page.render())
