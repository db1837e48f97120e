import logging

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse, RedirectResponse
from starlette.middleware.sessions import SessionMiddleware

from . import config
from .errors import DomainError, StoreError
from .routes.admin import router as admin_router
from .routes.organizers import router as organizers_router
from .routes.registration import router as registration_router
from .session import LoginRequired
from .store import build_store

logging.basicConfig(level=config.LOG_LEVEL, format="%(asctime)s %(levelname)s %(name)s: %(message)s")
logger = logging.getLogger(__name__)

app = FastAPI(title=f"{config.FEST_NAME} Registration", version="1.0.0")
app.add_middleware(SessionMiddleware, secret_key=config.SECRET_KEY, same_site="lax")

app.include_router(registration_router, tags=["Registration"])
app.include_router(organizers_router, tags=["Organizers"])
app.include_router(admin_router, tags=["Admin"])


@app.on_event("startup")
async def on_startup():
    app.state.store = build_store()
    try:
        await app.state.store.prepare()
        logger.info("Registration store ready.")
    except Exception as e:
        logger.warning("Could not prepare registration store: %s", e)
        logger.warning("Running in limited mode; store calls will report errors.")


# ---------- Error mapping ----------
@app.exception_handler(LoginRequired)
async def login_required_handler(request: Request, exc: LoginRequired):
    return RedirectResponse("/admin/login", status_code=status.HTTP_303_SEE_OTHER)


@app.exception_handler(StoreError)
async def store_error_handler(request: Request, exc: StoreError):
    logger.error("%s %s: %s", request.method, request.url.path, exc)
    return JSONResponse(
        status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
        content={"code": exc.code.value, "message": exc.message},
    )


@app.exception_handler(DomainError)
async def domain_error_handler(request: Request, exc: DomainError):
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={"code": exc.code.value, "message": exc.message},
    )
