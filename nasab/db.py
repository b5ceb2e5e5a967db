from __future__ import annotations

import os
from contextlib import contextmanager
from typing import Iterator

import psycopg


def get_database_url() -> str:
    url = os.environ.get("DATABASE_URL")
    if not url:
        raise RuntimeError("DATABASE_URL is not set")
    return url


@contextmanager
def db_conn() -> Iterator[psycopg.Connection]:
    """Yield a read-only connection to the profiles database."""
    with psycopg.connect(get_database_url()) as conn:
        conn.read_only = True
        yield conn
