from __future__ import annotations

import asyncio
import logging
from typing import Any, Optional

from sqlalchemy import insert, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncEngine, create_async_engine
from sqlalchemy.pool import StaticPool

from app.core.errors import ListingError, PersistenceError
from app.db.tables import documents

log = logging.getLogger("app.db")


class DocumentStore:
    """
    Owns the single database connection shared by all requests.

    The engine pool never holds more than one connection, and every round
    trip goes through ``_lock`` so concurrent requests queue on it instead
    of interleaving statements on the same connection.
    """

    def __init__(self, url: str, echo: bool = False):
        engine_kwargs: dict[str, Any] = {"echo": echo}
        if url.startswith("sqlite") and ":memory:" in url:
            engine_kwargs["poolclass"] = StaticPool
        else:
            engine_kwargs["pool_size"] = 1
            engine_kwargs["max_overflow"] = 0
            engine_kwargs["pool_pre_ping"] = True

        self._engine: AsyncEngine = create_async_engine(url, **engine_kwargs)
        self._lock = asyncio.Lock()

    @property
    def engine(self) -> AsyncEngine:
        return self._engine

    async def add(
        self,
        voornaam: Optional[str],
        familienaam: Optional[str],
        url: str,
    ) -> dict[str, Any]:
        """Insert one document row and return it, including its new id."""
        stmt = (
            insert(documents)
            .values(voornaam=voornaam, familienaam=familienaam, url=url)
            .returning(*documents.c)
        )
        try:
            async with self._lock:
                async with self._engine.begin() as conn:
                    result = await conn.execute(stmt)
                    row = result.mappings().one()
        except SQLAlchemyError as exc:
            log.error("Fout bij opslaan document (url=%s): %s", url, exc)
            raise PersistenceError() from exc
        return dict(row)

    async def list_newest_first(self) -> list[dict[str, Any]]:
        stmt = select(documents).order_by(documents.c.id.desc())
        try:
            async with self._lock:
                async with self._engine.connect() as conn:
                    result = await conn.execute(stmt)
                    rows = result.mappings().all()
        except SQLAlchemyError as exc:
            log.error("Fout bij ophalen documenten: %s", exc)
            raise ListingError() from exc
        return [dict(r) for r in rows]

    async def dispose(self) -> None:
        await self._engine.dispose()
