"""API fixtures: in-memory SQLite, seeded users and an ASGI client."""

from collections.abc import AsyncGenerator

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, create_async_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from app import models  # noqa: F401
from app.core.database import Base, get_db
from app.core.security import create_access_token
from app.dependencies.services import get_distance_service
from app.main import app
from app.models.user.user import User


@pytest_asyncio.fixture
async def session_factory() -> AsyncGenerator[sessionmaker, None]:
    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
        echo=False,
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield sessionmaker(bind=engine, expire_on_commit=False, class_=AsyncSession)

    await engine.dispose()


@pytest_asyncio.fixture
async def users(session_factory) -> dict:
    async with session_factory() as session:
        seeded = {
            "owner": User(email="owner@example.com", username="owner"),
            "viewer": User(email="viewer@example.com", username="viewer"),
            "stranger": User(email="stranger@example.com", username="stranger"),
        }
        session.add_all(seeded.values())
        await session.commit()
        return {role: user.id for role, user in seeded.items()}


@pytest.fixture
def auth(users) -> dict:
    """Bearer headers per seeded role."""
    return {
        role: {"Authorization": f"Bearer {create_access_token({'sub': str(user_id)})}"}
        for role, user_id in users.items()
    }


@pytest_asyncio.fixture
async def client(session_factory, distance_service) -> AsyncGenerator[AsyncClient, None]:
    async def override_get_db():
        async with session_factory() as db:
            yield db

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_distance_service] = lambda: distance_service

    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
        yield ac

    app.dependency_overrides.clear()


@pytest_asyncio.fixture
async def trip_id(client, auth) -> str:
    response = await client.post(
        "/trips",
        json={
            "name": "Lisbon getaway",
            "destinations": ["Lisbon"],
            "start_date": "2025-06-01",
            "end_date": "2025-06-03",
        },
        headers=auth["owner"],
    )
    assert response.status_code == 201
    return response.json()["id"]
