"""Engine lookups - find which engine owns a data source.

The table classifier only needs get_engine(data_source_id); anything with that
method can be passed in.
"""
from typing import Any, Dict, Optional, Protocol

from psycopg2 import sql

from ..config import get_datasource_table
from .connection import get_connection


class EngineLookup(Protocol):
    def get_engine(self, data_source_id: Any) -> Optional[str]:
        ...


class StaticEngineLookup:
    """In-memory data source id -> engine mapping."""

    def __init__(self, engines: Optional[Dict[Any, str]] = None):
        self.engines = dict(engines or {})

    def get_engine(self, data_source_id: Any) -> Optional[str]:
        return self.engines.get(data_source_id)


class PostgresEngineLookup:
    """
    Read engines from the data-source catalog table.

    Each call opens its own connection, so instances can be shared across threads.
    """

    def __init__(self, table: Optional[str] = None):
        self.table = table or get_datasource_table()

    def get_engine(self, data_source_id: Any) -> Optional[str]:
        query = sql.SQL("SELECT engine FROM {} WHERE id = %s").format(
            sql.Identifier(*self.table.split('.'))
        )
        with get_connection() as conn:
            with conn.cursor() as cur:
                cur.execute(query, (data_source_id,))
                row = cur.fetchone()
        return row[0] if row else None
