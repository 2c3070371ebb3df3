"""PostgreSQL connection to the data-source catalog"""
import os
from contextlib import contextmanager
from typing import Generator

import psycopg2
from psycopg2.extensions import connection as PgConnection

from .. import config  # noqa: F401  (loads .env)

# libpq keyword -> environment variable
DB_ENV_VARS = (
    ('dbname', 'DB_NAME'),
    ('user', 'DB_USER'),
    ('password', 'DB_PASSWORD'),
    ('host', 'DB_HOST'),
    ('port', 'DB_PORT'),
)


def get_connection_string() -> str:
    """
    Build a libpq connection string from DB_* environment variables.

    Empty values are left out so unix socket auth works when DB_HOST is unset.
    """
    parts = []
    for keyword, env_var in DB_ENV_VARS:
        default = 'metabase' if keyword == 'dbname' else ''
        value = os.getenv(env_var, default)
        if value:
            parts.append(f"{keyword}={value}")
    return " ".join(parts)


@contextmanager
def get_connection() -> Generator[PgConnection, None, None]:
    """
    Read-only use: the catalog is never written from here.

    Usage:
        with get_connection() as conn:
            with conn.cursor() as cur:
                cur.execute("SELECT engine FROM metabase_database WHERE id = %s", (1,))
    """
    conn = psycopg2.connect(get_connection_string())
    try:
        yield conn
        conn.commit()
    except Exception:
        conn.rollback()
        raise
    finally:
        conn.close()
