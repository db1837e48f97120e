from pathlib import Path

from fastapi import Depends, Request
from fastapi.templating import Jinja2Templates

from . import config
from .dashboard import DashboardLoader
from .store import RegistrationStore, build_store

templates = Jinja2Templates(directory=str(Path(__file__).parent / "templates"))
templates.env.globals["fest_name"] = config.FEST_NAME


def get_store(request: Request) -> RegistrationStore:
    store = getattr(request.app.state, "store", None)
    if store is None:
        store = request.app.state.store = build_store()
    return store


def get_dashboard(request: Request, store: RegistrationStore = Depends(get_store)) -> DashboardLoader:
    # one loader per store so refresh ordering is shared across requests
    loader = getattr(request.app.state, "dashboard", None)
    if loader is None or loader.store is not store:
        loader = request.app.state.dashboard = DashboardLoader(store)
    return loader
