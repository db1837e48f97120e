from typing import Optional

from fastapi import APIRouter, Depends, Form, Request, status
from fastapi.responses import HTMLResponse, RedirectResponse

from .. import catalog
from ..deps import get_store, templates
from ..errors import DomainError, StoreError
from ..registration import submit_registration
from ..schemas import Registration, RegistrationIn
from ..store import RegistrationStore

router = APIRouter()

STORE_FAILURE_MESSAGE = "There was an error processing your registration. Please try again."


def render_form(request: Request, form: RegistrationIn, error: Optional[str] = None, status_code: int = 200):
    chosen = [e for e in map(catalog.find_event, form.selected_events) if e]
    return templates.TemplateResponse(
        request,
        "register.html",
        {
            "form": form,
            "technical": catalog.TECHNICAL,
            "non_technical": catalog.NON_TECHNICAL,
            "total": sum(e.price for e in chosen),
            "error": error,
        },
        status_code=status_code,
    )


# ---------- Registration pages ----------
@router.get("/", include_in_schema=False)
async def index():
    return RedirectResponse("/register")


@router.get("/register", response_class=HTMLResponse)
async def page_register(request: Request, event: Optional[str] = None):
    preselected = [e.id for e in catalog.preselect(event)]
    return render_form(request, RegistrationIn(selected_events=preselected))


@router.post("/register", response_class=HTMLResponse)
async def submit_register(
    request: Request,
    name: str = Form(""),
    email: str = Form(""),
    phone: str = Form(""),
    college: str = Form(""),
    roll_number: str = Form(""),
    section: str = Form(""),
    selected_events: list[str] = Form(default=[]),
    store: RegistrationStore = Depends(get_store),
):
    payload = RegistrationIn(
        name=name,
        email=email,
        phone=phone,
        college=college,
        roll_number=roll_number,
        section=section,
        selected_events=selected_events,
    )
    try:
        saved = await submit_registration(store, payload)
    except StoreError:
        return render_form(request, payload, STORE_FAILURE_MESSAGE, status.HTTP_503_SERVICE_UNAVAILABLE)
    except DomainError as e:
        return render_form(request, payload, e.message, status.HTTP_400_BAD_REQUEST)

    return templates.TemplateResponse(request, "thanks.html", {"registration": saved})


# ---------- JSON APIs ----------
@router.get("/api/events")
async def api_events():
    return {
        "technical": list(catalog.TECHNICAL),
        "non_technical": list(catalog.NON_TECHNICAL),
    }


@router.post("/api/registrations", status_code=status.HTTP_201_CREATED, response_model=Registration)
async def api_create_registration(payload: RegistrationIn, store: RegistrationStore = Depends(get_store)):
    return await submit_registration(store, payload)
