"""FastAPI application setup."""

from contextlib import asynccontextmanager

from fastapi import FastAPI

from ..session import TraceSession
from .routes import events


def create_fastapi_app(session: TraceSession) -> FastAPI:
    """Create and configure the FastAPI application for one run."""

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        """Manage application lifespan."""
        yield
        # Shutdown: a run that never finished leaves no artifact
        if not session.finished:
            session.abandon()

    fastapi_app = FastAPI(
        title="buildtrace",
        description="Records build pipeline notifications as a Chrome trace",
        version="0.1.0",
        lifespan=lifespan,
    )

    fastapi_app.include_router(events.create_events_router(session))

    return fastapi_app
