import pytest
from sqlalchemy import text
from sqlalchemy.ext.asyncio import AsyncEngine

from app.core.database import build_engine


@pytest.mark.asyncio
async def test_build_engine_for_given_url():
    engine = build_engine("sqlite+aiosqlite://")
    try:
        assert isinstance(engine, AsyncEngine)
        assert engine.dialect.name == "sqlite"
        async with engine.connect() as conn:
            assert (await conn.execute(text("SELECT 1"))).scalar() == 1
    finally:
        await engine.dispose()
