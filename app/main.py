"""FastAPI application entry point."""

from __future__ import annotations

from contextlib import asynccontextmanager
from pathlib import Path

from fastapi import FastAPI, Request
from fastapi.staticfiles import StaticFiles
from fastapi.responses import FileResponse, RedirectResponse

from app.db.engine import create_tables, engine
from app.api.router import api_router
from app.services.auth import get_cached_email, LOGIN_PATH


@asynccontextmanager
async def lifespan(app: FastAPI):
    await create_tables()
    yield
    await engine.dispose()


app = FastAPI(
    title="TrashTrack",
    description="Report waste with AI-verified type and quantity.",
    version="0.1.0",
    lifespan=lifespan,
)

# API routes
app.include_router(api_router)

# Static files (HTML/CSS/JS)
_static_dir = Path(__file__).parent / "static"
app.mount("/static", StaticFiles(directory=str(_static_dir)), name="static")


@app.get("/")
async def root():
    return RedirectResponse("/report")


@app.get("/report")
async def report_page(request: Request):
    if not get_cached_email(request):
        return RedirectResponse(LOGIN_PATH)
    return FileResponse(str(_static_dir / "report.html"))


@app.get("/login")
async def login_page():
    return FileResponse(str(_static_dir / "login.html"))
