"""API test infrastructure: async httpx client against the ASGI app."""

from __future__ import annotations

import logging
from collections.abc import AsyncGenerator

import pytest_asyncio
from httpx import ASGITransport, AsyncClient


# ---------------------------------------------------------------------------
# FastAPI app
# ---------------------------------------------------------------------------

@pytest_asyncio.fixture
async def app():
    from app.main import create_app

    root = logging.getLogger()
    handlers, level = list(root.handlers), root.level

    application = create_app()

    yield application

    root.handlers[:] = handlers
    root.setLevel(level)


@pytest_asyncio.fixture
async def client(app) -> AsyncGenerator[AsyncClient, None]:
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac
