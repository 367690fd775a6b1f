"""Shared fixtures: an isolated database URL for the app, in-memory SQLite for units."""

import os
import tempfile
from pathlib import Path

# Must run before content_admin.config caches its settings.
_TEST_DB = Path(tempfile.mkdtemp(prefix="content-admin-")) / "test.db"
os.environ.setdefault("DATABASE_URL", f"sqlite:///{_TEST_DB}")
os.environ.setdefault("APP_ENV", "test")

import pytest
import pytest_asyncio
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker
from sqlalchemy.pool import StaticPool

from content_admin.application.services import (
    FieldNameTranslator,
    QueryBuilder,
    build_default_registry,
)
from content_admin.infrastructure.database.repositories import SQLAlchemyEntityRepository
from content_admin.infrastructure.database.session import build_engine, create_tables


@pytest.fixture
def registry():
    return build_default_registry()


@pytest.fixture
def translator() -> FieldNameTranslator:
    return FieldNameTranslator()


@pytest_asyncio.fixture
async def db_engine():
    engine = build_engine("sqlite+aiosqlite://", poolclass=StaticPool)
    await create_tables(engine)
    yield engine
    await engine.dispose()


@pytest.fixture
def session_factory(db_engine) -> async_sessionmaker[AsyncSession]:
    return async_sessionmaker(db_engine, class_=AsyncSession, expire_on_commit=False)


@pytest_asyncio.fixture
async def session(session_factory):
    async with session_factory() as session:
        yield session


@pytest.fixture
def repository(session) -> SQLAlchemyEntityRepository:
    return SQLAlchemyEntityRepository(session)


@pytest.fixture
def query_builder(registry, repository, translator) -> QueryBuilder:
    return QueryBuilder(registry, repository, translator)
