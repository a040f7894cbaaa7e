"""Tests for the HTTP ingestion adapter."""

import json

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient

from buildtrace.api import create_fastapi_app
from buildtrace.session import TraceSession


class BrokenSink:
    """Sink that cannot be written."""

    def __init__(self):
        self.discarded = False

    def write(self, text: str) -> None:
        raise OSError("Sink closed underneath")

    def close(self) -> None:
        pass

    def discard(self) -> None:
        self.discarded = True


@pytest_asyncio.fixture
async def client(session):
    """Create an HTTP client bound to the session."""
    app = create_fastapi_app(session)
    async with AsyncClient(
        transport=ASGITransport(app=app), base_url="http://test"
    ) as ac:
        yield ac


class TestNotifications:
    """Tests for the notification routes."""

    @pytest.mark.asyncio
    async def test_full_run(self, client, clock, memory_sink):
        """Test a run delivered over HTTP."""
        ms = 1_000_000
        response = await client.post("/api/file/enter", json={"path": "main.cpp"})
        assert response.status_code == 200
        assert response.json() == {"accepted": True}

        clock.value = 2 * ms
        response = await client.post(
            "/api/function",
            json={
                "signature": "void N::f()",
                "file_path": "main.cpp",
                "enclosing_scope": "N",
                "scope_category": "NAMESPACE",
            },
        )
        assert response.status_code == 200

        clock.value = 4 * ms
        response = await client.post(
            "/api/stage", json={"label": "inline", "category": "GIMPLE_PASS", "order": 3}
        )
        assert response.status_code == 200

        clock.value = 6 * ms
        assert (await client.post("/api/file/leave")).status_code == 200
        clock.value = 8 * ms

        response = await client.post("/api/run/finish")
        assert response.status_code == 200
        assert response.json() == {"events": 5, "trace_file": None}

        events = json.loads(memory_sink.value)["traceEvents"]
        assert [e["name"] for e in events if e["ph"] == "B"] == [
            "TU",
            "main.cpp",
            "inline",
            "void N::f()",
            "N",
        ]

    @pytest.mark.asyncio
    async def test_declaration_finished(self, client, session):
        """Test that the declaration route closes open files."""
        await client.post("/api/file/enter", json={"path": "main.c"})
        response = await client.post("/api/declaration/finished")
        assert response.status_code == 200
        assert session.store.inclusion_stack == []

    @pytest.mark.asyncio
    async def test_unmatched_leave_conflict(self, client):
        """Test that an unmatched leave returns 409."""
        response = await client.post("/api/file/leave")
        assert response.status_code == 409

    @pytest.mark.asyncio
    async def test_finish_twice_conflict(self, client):
        """Test that a finished run rejects further notifications."""
        assert (await client.post("/api/run/finish")).status_code == 200
        assert (await client.post("/api/run/finish")).status_code == 409
        response = await client.post("/api/file/enter", json={"path": "late.h"})
        assert response.status_code == 409

    @pytest.mark.asyncio
    async def test_invalid_category(self, client):
        """Test that an unknown category fails validation."""
        response = await client.post(
            "/api/stage", json={"label": "x", "category": "BOGUS", "order": 1}
        )
        assert response.status_code == 422

    @pytest.mark.asyncio
    async def test_status(self, client):
        """Test the status route."""
        await client.post("/api/file/enter", json={"path": "main.c"})
        response = await client.get("/api/run/status")
        assert response.status_code == 200
        data = response.json()
        assert data["finished"] is False
        assert data["open_inclusions"] == 1


class TestSinkFailure:
    """Tests for emission failures over HTTP."""

    @pytest.mark.asyncio
    async def test_sink_failure_returns_500(self, clock):
        """Test that a failed write is reported as a server error."""
        sink = BrokenSink()
        app = create_fastapi_app(TraceSession(sink, clock=clock))
        async with AsyncClient(
            transport=ASGITransport(app=app), base_url="http://test"
        ) as ac:
            response = await ac.post("/api/run/finish")
        assert response.status_code == 500
        assert sink.discarded
