"""
PostgreSQL access.

Reads the four source tables in full. Each table is read on its own async
connection and the four queries run concurrently; the load only succeeds
when all four return.

- Use load_dashboard_data() from async code
- Use load_dashboard_data_sync() from Streamlit pages and scripts
"""
import asyncio
import logging
from typing import Any, Awaitable, Callable, Dict, List, Optional

import psycopg
from psycopg import sql
from psycopg.rows import dict_row
from pydantic import ValidationError

from observatorio.config.settings import Settings, get_settings
from observatorio.database.normalization import normalize_table
from observatorio.exceptions import DataLoadError
from observatorio.models import AnalisisIA, Coautor, DashboardData, Diputado, Mocion

logger = logging.getLogger(__name__)

RawTables = Dict[str, List[Dict[str, Any]]]
Connector = Callable[[Settings], Awaitable[Any]]


# ============================================================
# Connections
# ============================================================

async def connect(settings: Settings) -> psycopg.AsyncConnection:
    """Open a read-only async connection returning rows as dicts."""
    params = {"connect_timeout": settings.DATABASE_CONNECT_TIMEOUT}
    if settings.DATABASE_SSLMODE:
        params["sslmode"] = settings.DATABASE_SSLMODE

    conn = await psycopg.AsyncConnection.connect(
        settings.DATABASE_URL,
        row_factory=dict_row,
        autocommit=True,
        **params
    )
    await conn.set_read_only(True)
    return conn


async def fetch_table(conn, table: str) -> List[Dict[str, Any]]:
    """Run SELECT * on one table."""
    query = sql.SQL("SELECT * FROM {}").format(sql.Identifier(table))
    async with conn.cursor() as cur:
        await cur.execute(query)
        rows = await cur.fetchall()
    return [dict(row) for row in rows]


async def _read_table(settings: Settings, table: str, connector: Connector) -> List[Dict[str, Any]]:
    conn = await connector(settings)
    async with conn:
        return await fetch_table(conn, table)


# ============================================================
# Full Load
# ============================================================

async def fetch_raw_tables(
    settings: Optional[Settings] = None,
    connector: Connector = connect
) -> RawTables:
    """
    Read the four source tables concurrently.

    Args:
        settings: Connection settings (default: environment settings)
        connector: Coroutine opening a connection (tests pass a fake)

    Returns:
        Dict with keys mociones, coautores, diputados, analisis_ia

    Raises:
        DataLoadError: If any of the four reads fails
    """
    if settings is None:
        try:
            settings = get_settings()
        except ValidationError as e:
            raise DataLoadError(f"Configuración de base de datos incompleta: {e}") from e
    tables = settings.table_names

    results = await asyncio.gather(
        *(_read_table(settings, table, connector) for table in tables.values()),
        return_exceptions=True
    )

    for name, result in zip(tables, results):
        if isinstance(result, BaseException):
            logger.error(f"Failed to read table '{tables[name]}': {result}")
            if isinstance(result, (psycopg.Error, OSError)):
                raise DataLoadError(f"Error al leer '{tables[name]}': {result}") from result
            raise result

    raw = dict(zip(tables, results))
    for name, rows in raw.items():
        logger.info(f"{name}: {len(rows)} rows")
        if rows:
            logger.debug(f"{name} columns: {list(rows[0].keys())}")
    return raw


def build_dashboard_data(raw: RawTables) -> DashboardData:
    """
    Normalize raw tables and validate them into DashboardData.

    Rows without a bill id (or without a deputy name, for co-authorships
    and deputies) cannot be joined and are skipped with a warning.
    """
    return DashboardData(
        mociones=_validate_rows(Mocion, raw.get("mociones"), "mociones"),
        coautores=_validate_rows(Coautor, raw.get("coautores"), "coautores"),
        diputados=_validate_rows(Diputado, raw.get("diputados"), "diputados"),
        analisis_ia=_validate_rows(AnalisisIA, raw.get("analisis_ia"), "analisis_ia"),
    )


def _validate_rows(model, rows, table: str) -> tuple:
    valid = []
    skipped = 0
    for row in normalize_table(rows):
        try:
            valid.append(model.model_validate(row))
        except ValueError as e:
            skipped += 1
            logger.debug(f"Skipping {table} row: {e}")
    if skipped:
        logger.warning(f"Skipped {skipped} unusable rows in {table}")
    return tuple(valid)


async def load_dashboard_data(
    settings: Optional[Settings] = None,
    connector: Connector = connect
) -> DashboardData:
    """Fetch and normalize the four source tables."""
    raw = await fetch_raw_tables(settings, connector)
    return build_dashboard_data(raw)


def load_dashboard_data_sync(
    settings: Optional[Settings] = None,
    connector: Connector = connect
) -> DashboardData:
    """Blocking version of load_dashboard_data() for Streamlit and scripts."""
    return asyncio.run(load_dashboard_data(settings, connector))


# ============================================================
# Convenience function for testing connection
# ============================================================

async def test_connection(settings: Optional[Settings] = None) -> bool:
    """
    Test that we can connect to PostgreSQL.

    Returns:
        True if connection successful, raises exception otherwise.
    """
    settings = settings or get_settings()
    conn = await connect(settings)
    async with conn:
        async with conn.cursor() as cur:
            await cur.execute("SELECT 1 AS ok")
            row = await cur.fetchone()
    return row["ok"] == 1
