from fastapi import APIRouter, Request
from fastapi.responses import HTMLResponse

from ..deps import templates
from ..organizers import DEVELOPERS, ORGANIZERS, initials

router = APIRouter()


@router.get("/organizers", response_class=HTMLResponse)
async def page_organizers(request: Request):
    return templates.TemplateResponse(
        request,
        "organizers.html",
        {"organizers": ORGANIZERS, "developers": DEVELOPERS, "initials": initials},
    )
