"""
Break Reminder – Backend API
Start with: uvicorn break_reminder.main:app --reload
"""
import logging
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from break_reminder import __version__, config
from break_reminder.controller import SessionController
from break_reminder.db import make_engine
from break_reminder.routers import sessions, windows
from break_reminder.store import KeyValueStore
from break_reminder.window_surface import HeadlessWindowSurface, WindowOptions, parse_monitor

logging.basicConfig(
    level=getattr(logging, config.LOG_LEVEL.upper(), logging.INFO),
    format=config.LOG_FORMAT,
)
logger = logging.getLogger(__name__)

MAIN_WINDOW_OPTIONS = WindowOptions(
    label=config.MAIN_WINDOW,
    url="index.html",
    title="Break Reminder",
    width=320,
    height=240,
    decorations=False,
)


def build_controller() -> SessionController:
    """Wire the default controller: SQLite store plus a headless window surface."""
    store = KeyValueStore(make_engine(config.DATABASE_URL))
    surface = HeadlessWindowSurface(parse_monitor(config.PRIMARY_MONITOR))
    surface.create_window(MAIN_WINDOW_OPTIONS).show()
    return SessionController(store, surface)


def create_app(controller: Optional[SessionController] = None) -> FastAPI:
    @asynccontextmanager
    async def lifespan(app: FastAPI):
        if getattr(app.state, "controller", None) is None:
            app.state.controller = build_controller()
        app.state.controller.resume()
        logger.info("Break Reminder API ready")
        yield
        app.state.controller.shutdown()

    app = FastAPI(
        title="Break Reminder API",
        description="Work session timer with a full-screen break overlay",
        version=__version__,
        lifespan=lifespan,
    )
    app.state.controller = controller

    # Allow the desktop frontend to call this API
    app.add_middleware(
        CORSMiddleware,
        allow_origins=config.CORS_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.get("/health")
    def health():
        """Check that the API is running. Frontend can call this first."""
        return {"status": "ok", "message": "Break Reminder API is running"}

    @app.get("/")
    def root():
        """Root welcome."""
        return {"app": "Break Reminder", "docs": "/docs"}

    app.include_router(sessions.router)
    app.include_router(windows.router)
    return app


app = create_app()
