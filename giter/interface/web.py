"""FastAPI application serving the commit history page and JSON endpoint."""

import logging
from pathlib import Path
from typing import Optional

from fastapi import Depends, FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import HTMLResponse, JSONResponse
from fastapi.staticfiles import StaticFiles
from fastapi.templating import Jinja2Templates

from giter.application.history_service import HistoryService
from giter.config import Settings
from giter.infrastructure.github_client import GitHubRESTClient, UpstreamError

logger = logging.getLogger(__name__)

BASE_DIR = Path(__file__).resolve().parent
templates = Jinja2Templates(directory=str(BASE_DIR / "templates"))


def get_history_service(request: Request) -> HistoryService:
    """Dependency returning the service attached to the running app."""
    return request.app.state.history_service


def create_app(settings: Optional[Settings] = None, history_service: Optional[HistoryService] = None) -> FastAPI:
    """
    Create the web application.

    Args:
        settings: Runtime settings. If None, read from the environment.
        history_service: Service answering history requests. If None, one is
            built on a GitHubRESTClient for ``settings``.
    """
    if settings is None:
        settings = Settings.from_env()
    if history_service is None:
        history_service = HistoryService(GitHubRESTClient(settings), settings)

    app = FastAPI(title="Giter", description="Commit history across public GitHub repositories")
    app.state.history_service = history_service

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_methods=["GET", "OPTIONS"],
        allow_headers=["Origin", "Content-Type", "Accept"],
        expose_headers=["Content-Length"],
        max_age=12 * 60 * 60,
    )

    app.mount("/static", StaticFiles(directory=str(BASE_DIR / "static")), name="static")

    @app.get("/", response_class=HTMLResponse)
    def index(request: Request):
        return templates.TemplateResponse(request, "index.html", {"account": settings.account})

    @app.get("/api/git-history")
    def git_history(service: HistoryService = Depends(get_history_service)):
        """Return every commit of every public repository as a flat JSON array."""
        try:
            history = service.build_history()
        except UpstreamError as e:
            logger.error(f"Failed to build git history: {e}")
            return JSONResponse(status_code=500, content={"error": str(e)})

        return JSONResponse(content=[entry.to_dict() for entry in history])

    return app
