"""FastAPI application exposing the demo session's trigger and read surfaces."""
from __future__ import annotations

from typing import Optional

from fastapi import Body, FastAPI, HTTPException
from fastapi.middleware.cors import CORSMiddleware
from pydantic import BaseModel

from .config import get_settings
from .overlays import OverlayError
from .scheduler import AsyncioScheduler
from .schemas import ExportFormat, RunMode, SessionSnapshot
from .session import DemoSession


class RunResponse(BaseModel):
    accepted: bool
    state: SessionSnapshot


class ToggleResponse(BaseModel):
    open: bool
    state: SessionSnapshot


def create_app(session: Optional[DemoSession] = None) -> FastAPI:
    if session is None:
        settings = get_settings()
        session = DemoSession(AsyncioScheduler(time_scale=settings.time_scale), settings=settings)

    app = FastAPI(title="Invoice Pipeline Demo", version="0.1.0")
    app.state.session = session

    # Add CORS middleware to allow browser requests
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],  # Allow all origins for development
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Handlers are async so every mutation runs on the event loop thread
    @app.get("/health")
    async def health() -> dict[str, str]:
        return {"status": "ok"}

    @app.get("/state", response_model=SessionSnapshot)
    async def state():
        return session.snapshot()

    @app.put("/mode", response_model=SessionSnapshot)
    async def select_mode(mode: RunMode = Body(..., embed=True)):
        session.select_mode(mode)
        return session.snapshot()

    @app.put("/custom-input", response_model=SessionSnapshot)
    async def set_custom_input(text: str = Body(..., embed=True)):
        session.set_custom_input(text)
        return session.snapshot()

    @app.post("/run", response_model=RunResponse)
    async def run():
        accepted = session.trigger_run()
        return RunResponse(accepted=accepted, state=session.snapshot())

    @app.post("/export/{fmt}", response_model=SessionSnapshot)
    async def export(fmt: str):
        try:
            export_format = ExportFormat.parse(fmt)
        except ValueError:
            raise HTTPException(status_code=400, detail="format must be pdf or csv")
        session.trigger_export(export_format)
        return session.snapshot()

    @app.post("/export-menu/toggle", response_model=ToggleResponse)
    async def toggle_export_menu():
        is_open = session.toggle_export_menu()
        return ToggleResponse(open=is_open, state=session.snapshot())

    @app.post("/help", response_model=SessionSnapshot)
    async def open_help():
        session.open_help()
        return session.snapshot()

    @app.delete("/help", response_model=SessionSnapshot)
    async def close_help():
        session.close_help()
        return session.snapshot()

    @app.post("/results/{index}/preview", response_model=SessionSnapshot)
    async def preview(index: int):
        try:
            session.select_result_index(index)
        except (IndexError, OverlayError) as exc:
            raise HTTPException(status_code=404, detail=str(exc))
        return session.snapshot()

    @app.delete("/preview", response_model=SessionSnapshot)
    async def close_preview():
        session.close_preview()
        return session.snapshot()

    @app.post("/overlay/dismiss", response_model=SessionSnapshot)
    async def dismiss_overlay():
        session.dismiss_overlay()
        return session.snapshot()

    return app


app = create_app()
