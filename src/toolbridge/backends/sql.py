"""SQL backend — executes query text on a PostgreSQL connection pool.

``POST /tools/sql.query`` with ``{"sql": "..."}`` answers
``{"ok": true, "rows": [...]}``, or ``{"ok": false, "error": "..."}`` with
status 400.  No validation, transaction scoping, or paging is applied to
the query.
"""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from typing import TYPE_CHECKING, Any, Protocol, runtime_checkable

import psycopg
from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from psycopg.rows import dict_row
from psycopg_pool import AsyncConnectionPool
from starlette.responses import JSONResponse

if TYPE_CHECKING:
    from collections.abc import AsyncIterator

    from toolbridge.config import SqlServerSettings

logger = logging.getLogger(__name__)


@runtime_checkable
class QueryRunner(Protocol):
    """Runs one statement and returns its rows as dicts."""

    async def fetch(self, sql: str) -> list[dict[str, Any]]: ...


class PgQueryRunner:
    """Runs statements on a lazily opened :class:`AsyncConnectionPool`."""

    def __init__(self, settings: SqlServerSettings) -> None:
        self._pool = AsyncConnectionPool(
            settings.database_url,
            min_size=settings.min_pool_size,
            max_size=settings.max_pool_size,
            open=False,
        )

    async def open(self) -> None:
        await self._pool.open()

    async def close(self) -> None:
        await self._pool.close()

    async def fetch(self, sql: str) -> list[dict[str, Any]]:
        async with self._pool.connection() as conn, conn.cursor(row_factory=dict_row) as cur:
            await cur.execute(sql)  # type: ignore[arg-type]
            if cur.description is None:
                return []
            return await cur.fetchall()


def _error(message: str) -> JSONResponse:
    return JSONResponse(status_code=400, content={"ok": False, "error": message})


def create_app(settings: SqlServerSettings, runner: QueryRunner | None = None) -> FastAPI:
    """Build the SQL service.  *runner* defaults to a pool on ``settings.database_url``."""
    query_runner: QueryRunner = runner if runner is not None else PgQueryRunner(settings)

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        if isinstance(query_runner, PgQueryRunner):
            await query_runner.open()
        try:
            yield
        finally:
            if isinstance(query_runner, PgQueryRunner):
                await query_runner.close()

    app = FastAPI(title="toolbridge-sql", lifespan=lifespan)

    @app.get("/")
    async def health() -> dict[str, str]:
        return {"service": "mcp-sql", "status": "ok"}

    @app.post("/tools/sql.query")
    async def sql_query(request: Request) -> JSONResponse:
        try:
            body: Any = await request.json()
        except ValueError:
            # Covers malformed JSON and bytes that are not valid UTF-8.
            return _error("request body must be JSON")

        sql = body.get("sql") if isinstance(body, dict) else None
        if not isinstance(sql, str) or not sql:
            return _error("missing sql parameter")

        logger.info("Executing SQL: %s", sql)
        try:
            rows = await query_runner.fetch(sql)
        except psycopg.Error as exc:
            logger.error("SQL Error: %s", exc)
            return _error(str(exc))
        return JSONResponse(content={"ok": True, "rows": jsonable_encoder(rows)})

    return app


def run(settings: SqlServerSettings) -> None:
    """Serve the SQL backend with uvicorn until interrupted."""
    import uvicorn

    logger.info("SQL backend listening on %s:%s", settings.host, settings.port)
    uvicorn.run(create_app(settings), host=settings.host, port=settings.port, log_config=None)
