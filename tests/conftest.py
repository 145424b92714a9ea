# tests/conftest.py
from __future__ import annotations

from typing import Callable, Generator

import cloudinary.uploader
import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient
from sqlalchemy import text

from app.core.config import Settings
from app.db.store import DocumentStore
from app.db.tables import metadata
from app.main import create_app

TEST_DB_URL = "sqlite+aiosqlite:///:memory:"


# --------------------------------------------------------------------
# Schema helpers: the app never creates its table, so tests do
# --------------------------------------------------------------------
async def create_schema(store: DocumentStore) -> None:
    async with store.engine.begin() as conn:
        await conn.run_sync(metadata.create_all)


async def _execute(store: DocumentStore, sql: str) -> None:
    async with store.engine.begin() as conn:
        await conn.execute(text(sql))


# --------------------------------------------------------------------
# Fake Cloudinary: keeps uploaded objects in memory
# --------------------------------------------------------------------
class FakeCloudinary:
    def __init__(self):
        self.objects: dict[str, bytes] = {}
        self.calls: list[dict] = []
        self.error: Exception | None = None
        self.response: dict | None = None  # replaces the normal reply when set

    def upload(self, file, **options):
        self.calls.append(options)
        if self.error is not None:
            raise self.error
        key = f"{options['folder']}/{options['public_id']}"
        self.objects[key] = file.read()
        if self.response is not None:
            return self.response
        return {
            "public_id": key,
            "secure_url": f"https://res.cloudinary.com/{options['cloud_name']}/image/upload/v1/{key}",
        }


@pytest.fixture(autouse=True)
def fake_cloudinary(monkeypatch) -> FakeCloudinary:
    fake = FakeCloudinary()
    monkeypatch.setattr(cloudinary.uploader, "upload", fake.upload)
    return fake


# --------------------------------------------------------------------
# App + client on a fresh in-memory database per test
# --------------------------------------------------------------------
@pytest.fixture
def settings() -> Settings:
    return Settings(
        database_url=TEST_DB_URL,
        cloudinary_cloud_name="demo",
        cloudinary_api_key="key",
        cloudinary_api_secret="secret",
        _env_file=None,
    )


@pytest.fixture
def app(settings) -> FastAPI:
    return create_app(settings)


@pytest.fixture
def client(app) -> Generator[TestClient, None, None]:
    with TestClient(app) as c:
        c.portal.call(create_schema, app.state.store)
        yield c


@pytest.fixture
def execute_sql(app, client) -> Callable[[str], None]:
    """Run raw SQL on the app's own connection, e.g. to break the table."""

    def _run(sql: str) -> None:
        client.portal.call(_execute, app.state.store, sql)

    return _run
