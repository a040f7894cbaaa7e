"""Host notification routes."""

from fastapi import APIRouter, HTTPException
from pydantic import BaseModel

from ...errors import ContractViolation, SinkError
from ...logging_config import get_logger
from ...models import Category
from ...session import TraceSession

logger = get_logger(__name__)


class FileEnterRequest(BaseModel):
    """Request model for entering a file."""

    path: str | None = None
    directory: str | None = None


class StageRequest(BaseModel):
    """Request model for a stage start."""

    label: str
    category: Category
    order: int


class FunctionRequest(BaseModel):
    """Request model for a parsed function."""

    signature: str
    file_path: str
    enclosing_scope: str | None = None
    scope_category: Category = Category.UNKNOWN


class AcceptedResponse(BaseModel):
    """Response model for accepted notifications."""

    accepted: bool = True


class FinishResponse(BaseModel):
    """Response model for a finished run."""

    events: int
    trace_file: str | None = None


class StatusResponse(BaseModel):
    """Response model for run status."""

    finished: bool
    emitted_events: int
    inclusions: int
    open_inclusions: int
    stages: int
    scopes: int
    functions: int


def create_events_router(session: TraceSession) -> APIRouter:
    """Create the notification router bound to one session."""
    # Handlers stay on the event loop, blocking I/O included, so notifications
    # reach the session one at a time and in arrival order.
    router = APIRouter(prefix="/api", tags=["events"])

    def conflict(e: ContractViolation) -> HTTPException:
        logger.error("Rejected notification: %s", e)
        return HTTPException(status_code=409, detail=str(e))

    @router.post("/file/enter", response_model=AcceptedResponse)
    async def file_enter(request: FileEnterRequest) -> dict:
        """Host entered a file."""
        try:
            session.file_enter(request.path, request.directory)
        except ContractViolation as e:
            raise conflict(e)
        return {"accepted": True}

    @router.post("/file/leave", response_model=AcceptedResponse)
    async def file_leave() -> dict:
        """Host left the innermost file."""
        try:
            session.file_leave()
        except ContractViolation as e:
            raise conflict(e)
        return {"accepted": True}

    @router.post("/declaration/finished", response_model=AcceptedResponse)
    async def declaration_finished() -> dict:
        """Host finished a declaration."""
        try:
            session.declaration_finished()
        except ContractViolation as e:
            raise conflict(e)
        return {"accepted": True}

    @router.post("/stage", response_model=AcceptedResponse)
    async def stage_begin(request: StageRequest) -> dict:
        """Host started an optimization stage."""
        try:
            session.stage_begin(request.label, request.category, request.order)
        except ContractViolation as e:
            raise conflict(e)
        return {"accepted": True}

    @router.post("/function", response_model=AcceptedResponse)
    async def function_parsed(request: FunctionRequest) -> dict:
        """Host parsed a function."""
        try:
            session.function_parsed(
                request.signature,
                request.file_path,
                request.enclosing_scope,
                request.scope_category,
            )
        except ContractViolation as e:
            raise conflict(e)
        return {"accepted": True}

    @router.post("/run/finish", response_model=FinishResponse)
    async def run_finished() -> dict:
        """Write the trace."""
        try:
            events = session.run_finished()
        except ContractViolation as e:
            raise conflict(e)
        except SinkError as e:
            logger.error("Trace emission failed: %s", e)
            raise HTTPException(status_code=500, detail=str(e))

        sink_path = getattr(session.sink, "path", None)
        return {
            "events": events,
            "trace_file": str(sink_path) if sink_path is not None else None,
        }

    @router.get("/run/status", response_model=StatusResponse)
    async def run_status() -> dict:
        """Current record counts."""
        return session.status()

    return router
