import os

# Configuração de teste antes de importar a aplicação (Settings lê o ambiente no import)
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///:memory:")
os.environ["ENVIRONMENT"] = "test"
os.environ.pop("LEAPING_API_URL", None)

import httpx
import pytest
from sqlalchemy.ext.asyncio import AsyncSession, create_async_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from backoffice import crud
from backoffice.database import get_db
from backoffice.db import models  # noqa: F401
from backoffice.db.base_class import Base
from backoffice.main import app


class FeedRecorder:
    """Substitui o feed Redis: guarda os eventos publicados."""

    def __init__(self):
        self.events = []

    async def publish(self, table, event, new=None, old=None):
        self.events.append({"table": table, "event": event, "new": new, "old": old})
        return True


@pytest.fixture
async def engine():
    engine = create_async_engine(
        "sqlite+aiosqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    await engine.dispose()


@pytest.fixture
def session_factory(engine):
    return sessionmaker(bind=engine, class_=AsyncSession, expire_on_commit=False, autoflush=False)


@pytest.fixture
async def db(session_factory):
    async with session_factory() as session:
        yield session


@pytest.fixture
def feed(monkeypatch):
    recorder = FeedRecorder()
    monkeypatch.setattr(crud.order, "feed", recorder)
    monkeypatch.setattr(crud.reservation, "feed", recorder)
    monkeypatch.setattr(crud.reservation_approval, "feed", recorder)
    return recorder


@pytest.fixture
async def client(session_factory, feed):
    async def override_get_db():
        async with session_factory() as session:
            yield session

    app.dependency_overrides[get_db] = override_get_db
    transport = httpx.ASGITransport(app=app)
    async with httpx.AsyncClient(transport=transport, base_url="http://testserver") as ac:
        yield ac
    app.dependency_overrides.clear()
