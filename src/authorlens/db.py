"""PostgreSQL connection to the commit database via psycopg3."""

import psycopg
from psycopg.rows import dict_row

from authorlens.config import Settings


def get_connection(
    settings: Settings | None = None,
    *,
    conninfo: str | None = None,
    timeout: float | None = None,
) -> psycopg.Connection:
    """Open a synchronous connection to PostgreSQL with dict row factory.

    *timeout* (seconds) bounds both the connection attempt and every statement
    run on the connection.
    """
    if conninfo is None:
        if settings is None:
            from authorlens.config import get_settings
            settings = get_settings()
        conninfo = settings.database_url
        if timeout is None:
            timeout = settings.db_timeout

    kwargs: dict = {"row_factory": dict_row}
    if timeout is not None:
        kwargs["connect_timeout"] = max(1, int(timeout))
        kwargs["options"] = f"-c statement_timeout={int(timeout * 1000)}"
    return psycopg.connect(conninfo, **kwargs)


def execute_query(conn: psycopg.Connection, query: str, params: tuple = ()) -> list[dict]:
    """Execute a query and return all rows as dicts."""
    with conn.cursor() as cur:
        cur.execute(query, params)
        if cur.description:
            return cur.fetchall()
        return []
