import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import create_async_engine
from sqlalchemy.pool import StaticPool

from app.core.database import build_session_factory, create_schema
from app.main import create_app
from app.services.task_collection import TaskCollection
from app.services.task_store import TaskStore


@pytest.fixture
async def engine():
    """In-memory SQLite engine shared by every session in a test."""
    engine = create_async_engine(
        "sqlite+aiosqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    await create_schema(engine)
    yield engine
    await engine.dispose()


@pytest.fixture
def task_store(engine):
    return TaskStore(build_session_factory(engine))


@pytest.fixture
def collection(task_store):
    return TaskCollection(task_store)


@pytest.fixture
async def client(collection):
    """HTTP client bound to an app that uses the test collection."""
    app = create_app()
    app.state.task_collection = collection
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
        yield ac
