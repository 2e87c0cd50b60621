from __future__ import annotations

import json
from typing import Any, Callable

import httpx
import pytest
import pytest_asyncio
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool
from sqlmodel import SQLModel

from teamplan.api.main import app
from teamplan.api.routes import get_generation_client
from teamplan.database import models  # noqa: F401  (registers tables)
from teamplan.database.session import get_db
from teamplan.llm.base import LLMAdapter
from teamplan.llm.ollama import OllamaAdapter, OllamaConfig
from teamplan.schemas import RawModelResponse


LOGIN_PAGE_OUTPUT = (
    'Sure! ```json\n'
    '{"tasks":[{"title":"Design UI","description":"...","duration":"2d","assignees":["Alice"]}],'
    '"timeline":"1 week"}\n'
    '```'
)


class FakeAdapter(LLMAdapter):
    """In-memory adapter returning canned text or raising a canned error."""

    default_model = "fake-model"

    def __init__(self, content: str = "", error: Exception | None = None, done: bool = True):
        self.content = content
        self.error = error
        self.done = done
        self.healthy = True
        self.requests = []

    @property
    def provider_name(self) -> str:
        return "fake"

    async def generate(self, prompt, model=None, temperature=None, max_tokens=None, options=None):
        request = self._build_request(prompt, model, temperature, max_tokens, options)
        self.requests.append(request)
        if self.error is not None:
            raise self.error
        return RawModelResponse(model=request.model, response=self.content, done=self.done)

    async def health_check(self) -> bool:
        return self.healthy


@pytest.fixture
def login_page_output() -> str:
    """Model output for the 'Build a login page' scenario."""
    return LOGIN_PAGE_OUTPUT


@pytest.fixture
def make_adapter() -> Callable[..., FakeAdapter]:
    """Factory for fake generation adapters."""
    return FakeAdapter


@pytest.fixture
def ollama_factory():
    """Build an OllamaAdapter whose HTTP traffic goes to `handler`.

    Every request seen by the transport is appended to `adapter.seen`.
    """
    def factory(handler, **config: Any) -> OllamaAdapter:
        seen: list[httpx.Request] = []

        def recording(request: httpx.Request):
            seen.append(request)
            return handler(request)

        config.setdefault("base_url", "http://ollama.test")
        adapter = OllamaAdapter(OllamaConfig(**config), transport=httpx.MockTransport(recording))
        adapter.seen = seen
        return adapter

    return factory


def generate_body(content: str = "{}", **extra: Any) -> dict[str, Any]:
    body = {
        "model": "llama2",
        "created_at": "2023-08-04T19:22:45.499127Z",
        "response": content,
        "done": True,
    }
    body.update(extra)
    return body


@pytest.fixture
def ollama_body() -> Callable[..., dict[str, Any]]:
    """Factory for /api/generate response bodies."""
    return generate_body


def request_json(request: httpx.Request) -> dict[str, Any]:
    return json.loads(request.content)


@pytest.fixture
def read_json() -> Callable[[httpx.Request], dict[str, Any]]:
    return request_json


@pytest.fixture
def plan_api(make_adapter):
    """Install a fake adapter on the app and hand it to the test."""
    adapter = make_adapter()
    app.dependency_overrides[get_generation_client] = lambda: adapter
    yield adapter
    app.dependency_overrides.pop(get_generation_client, None)


@pytest_asyncio.fixture
async def api_client():
    """HTTP client against the app backed by an in-memory SQLite database."""
    engine = create_async_engine(
        "sqlite+aiosqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    async with engine.begin() as conn:
        await conn.run_sync(SQLModel.metadata.create_all)

    session_maker = async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)

    async def override_get_db():
        async with session_maker() as session:
            try:
                yield session
                await session.commit()
            except Exception:
                await session.rollback()
                raise

    app.dependency_overrides[get_db] = override_get_db
    transport = httpx.ASGITransport(app=app)
    async with httpx.AsyncClient(transport=transport, base_url="http://test") as client:
        yield client

    app.dependency_overrides.pop(get_db, None)
    await engine.dispose()
