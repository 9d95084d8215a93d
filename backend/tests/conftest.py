import asyncio
import os

import pytest

# Settings are read at import time, so point them at SQLite before the app loads
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///:memory:")
os.environ.setdefault("RATE_LIMIT_REQUESTS", "0")

from fastapi.testclient import TestClient
from sqlalchemy.ext.asyncio import async_sessionmaker, create_async_engine
from sqlalchemy.pool import NullPool

import db.recipe  # noqa: F401
from core.rate_limit import NoopRateLimiter
from db.database import Base, get_async_session
from main import app


def make_recipe_payload(**overrides):
    payload = {
        "name": "Widget",
        "weight": 2.5,
        "dimensions": {"length": 10, "width": 5, "height": 2, "unit": "cm"},
        "yield_percentage": 90,
        "waste_factor": 0.2,
        "unit_of_measure": "piece",
        "inventory_location": "Shelf A",
        "parts": [{"name": "bolt", "quantity": 2, "cost_per_unit": 5}],
        "labor": [{"type": "assembly", "cost_per_hour": 20, "hours_needed": 3}],
    }
    payload.update(overrides)
    return payload


@pytest.fixture()
def recipe_payload():
    return make_recipe_payload()


@pytest.fixture()
def session_maker(tmp_path):
    """Fresh SQLite database per test"""
    engine = create_async_engine(
        f"sqlite+aiosqlite:///{tmp_path / 'recipes.db'}",
        poolclass=NullPool,
    )

    async def create_tables():
        async with engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)

    asyncio.run(create_tables())
    yield async_sessionmaker(engine, expire_on_commit=False)
    asyncio.run(engine.dispose())


@pytest.fixture()
def client(session_maker):
    async def override_session():
        async with session_maker() as session:
            yield session

    previous_limiter = app.state.rate_limiter
    app.dependency_overrides[get_async_session] = override_session
    app.state.rate_limiter = NoopRateLimiter()
    yield TestClient(app)
    app.dependency_overrides.clear()
    app.state.rate_limiter = previous_limiter
