from __future__ import annotations

from contextlib import asynccontextmanager
from typing import AsyncIterator

import httpx
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from jobconsole.application import Console
from jobconsole.core.log import configure_logging
from jobconsole.core.settings import ConsoleSettings
from jobconsole.routes import imports, jobs, overview


def create_app(
    settings: ConsoleSettings | None = None,
    *,
    http_client: httpx.AsyncClient | None = None,
    initial_load: bool = True,
) -> FastAPI:
    settings = settings or ConsoleSettings.from_env()
    configure_logging(settings.log_level)

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        console = Console(settings, http_client=http_client)
        app.state.console = console
        await console.start(initial_load=initial_load)
        try:
            yield
        finally:
            await console.close()

    app = FastAPI(title="Job Import Console API", version="0.1.0", lifespan=lifespan)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.include_router(imports.router, prefix="/api")
    app.include_router(jobs.router, prefix="/api")
    app.include_router(overview.router, prefix="/api")

    @app.get("/", include_in_schema=False)
    async def root() -> JSONResponse:
        """Provide a lightweight landing page for container checks."""
        return JSONResponse(
            {
                "message": "Job Import Console API",
                "docs": "/docs",
                "remote": settings.api_url,
                "health": "/api/console/dashboard",
            }
        )

    return app


app = create_app()
