import logging
from datetime import datetime, timezone

from fastapi import APIRouter, Depends, Form, HTTPException, Request, status
from fastapi.responses import HTMLResponse, RedirectResponse, Response, StreamingResponse

from .. import catalog, export, stats
from ..dashboard import DashboardLoader
from ..deps import get_dashboard, templates
from ..errors import StoreError
from ..schemas import StatsOut
from ..session import AdminSession, get_admin_session, require_admin_api, require_admin_page

logger = logging.getLogger(__name__)

router = APIRouter()

XLSX_MEDIA_TYPE = "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet"


def today_utc():
    return datetime.now(timezone.utc).date()


def attachment(content: bytes, media_type: str, filename: str) -> StreamingResponse:
    return StreamingResponse(
        iter([content]),
        media_type=media_type,
        headers={"Content-Disposition": f'attachment; filename="{filename}"'},
    )


# ---------- Login ----------
@router.get("/admin/login", response_class=HTMLResponse)
async def page_login(request: Request, session: AdminSession = Depends(get_admin_session)):
    if session.is_admin:
        return RedirectResponse("/admin", status_code=status.HTTP_303_SEE_OTHER)
    return templates.TemplateResponse(request, "admin_login.html", {"error": None})


@router.post("/admin/login", response_class=HTMLResponse)
async def submit_login(
    request: Request,
    password: str = Form(""),
    session: AdminSession = Depends(get_admin_session),
):
    if session.login(password):
        logger.info("Admin login")
        return RedirectResponse("/admin", status_code=status.HTTP_303_SEE_OTHER)
    logger.warning("Rejected admin login attempt")
    return templates.TemplateResponse(
        request,
        "admin_login.html",
        {"error": "Incorrect password"},
        status_code=status.HTTP_401_UNAUTHORIZED,
    )


@router.post("/admin/logout")
async def submit_logout(session: AdminSession = Depends(get_admin_session)):
    session.logout()
    return RedirectResponse("/admin/login", status_code=status.HTTP_303_SEE_OTHER)


# ---------- Dashboard ----------
@router.get("/admin", response_class=HTMLResponse, dependencies=[Depends(require_admin_page)])
async def page_dashboard(request: Request, loader: DashboardLoader = Depends(get_dashboard)):
    error = None
    try:
        snapshot = await loader.refresh()
    except StoreError:
        error = "Failed to fetch registration data"
        snapshot = loader.snapshot

    grouped = stats.by_category(snapshot.stats)
    return templates.TemplateResponse(
        request,
        "admin.html",
        {
            "snapshot": snapshot,
            "grouped": grouped,
            "labels": catalog.CATEGORY_LABELS,
            "category_revenue": stats.category_revenue,
            "error": error,
        },
    )


# ---------- Admin JSON / exports ----------
@router.get("/api/admin/stats", response_model=StatsOut, dependencies=[Depends(require_admin_api)])
async def api_stats(loader: DashboardLoader = Depends(get_dashboard)):
    snapshot = await loader.refresh()
    return StatsOut(generation=snapshot.generation, totals=snapshot.totals, stats=snapshot.stats)


@router.get("/api/admin/export/registrations.csv", dependencies=[Depends(require_admin_api)])
async def export_registrations_csv(loader: DashboardLoader = Depends(get_dashboard)):
    snapshot = await loader.refresh()
    body = export.export_all(snapshot.registrations)
    logger.info("Exported %d registrations to CSV", len(snapshot.registrations))
    return attachment(body.encode("utf-8"), "text/csv; charset=utf-8", export.all_export_filename(today_utc()))


@router.get("/api/admin/export/events/{event_id}/participants.csv", dependencies=[Depends(require_admin_api)])
async def export_event_csv(event_id: str, loader: DashboardLoader = Depends(get_dashboard)):
    snapshot = await loader.refresh()
    stat = snapshot.find_stat(event_id)
    event = catalog.find_event(event_id)
    if stat is None and event is None:
        raise HTTPException(status_code=404, detail="Event not found")
    event_name = stat.event_name if stat else event.name

    body = export.export_for_event_id(snapshot.registrations, event_id)
    logger.info("Exported participants of %s (%r) to CSV", event_id, event_name)
    return attachment(body.encode("utf-8"), "text/csv; charset=utf-8", export.event_export_filename(event_name))


@router.get("/api/admin/export/registrations.xlsx", dependencies=[Depends(require_admin_api)])
async def export_registrations_xlsx(loader: DashboardLoader = Depends(get_dashboard)) -> Response:
    snapshot = await loader.refresh()
    xlsx_bytes = export.build_excel(snapshot.registrations)
    logger.info("Exported %d registrations to Excel", len(snapshot.registrations))
    return attachment(xlsx_bytes, XLSX_MEDIA_TYPE, f"registrations_{today_utc().isoformat()}.xlsx")
