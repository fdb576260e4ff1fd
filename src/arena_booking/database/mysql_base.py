from __future__ import annotations

import json
from contextlib import contextmanager
from typing import Any, Dict, List, Optional

from .connection import DatabaseConnection


@contextmanager
def db_cursor(conn_factory: DatabaseConnection, *, dictionary: bool = True):
    conn = conn_factory.connect()
    try:
        cur = conn.cursor(dictionary=dictionary)
        try:
            yield conn, cur
            conn.commit()
        finally:
            cur.close()
    except Exception:
        conn.rollback()
        raise
    finally:
        conn.close()


def fetchone(cur) -> Optional[Dict[str, Any]]:
    row = cur.fetchone()
    return row if row else None


def fetchall(cur) -> List[Dict[str, Any]]:
    rows = cur.fetchall()
    return list(rows or [])


def as_bool(value: Any) -> bool:
    """MySQL returns BOOLEAN columns as TINYINT (0/1)."""
    if value is None:
        return False
    return bool(int(value))


def load_json_list(value: Any) -> List[str]:
    """Decode a JSON column holding a list of strings.

    mysql-connector returns JSON columns as ``str`` (or ``bytes`` on some
    builds); already-decoded lists are passed through.
    """
    if value is None:
        return []
    if isinstance(value, (list, tuple)):
        return [str(v) for v in value]
    if isinstance(value, (bytes, bytearray)):
        value = value.decode("utf-8")
    decoded = json.loads(value) if value else []
    return [str(v) for v in decoded]


def dump_json_list(values) -> str:
    return json.dumps([str(v) for v in (values or [])], ensure_ascii=False)
