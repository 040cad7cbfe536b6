"""Schema and seed application for MySQL (used by scripts/ and AUTO_INIT_DB)."""

from __future__ import annotations

import re
from pathlib import Path
from typing import Iterator

import mysql.connector

from ..core.logging import get_logger

logger = get_logger(__name__)

# Quoted strings and '--' comments are matched whole so ';' inside them never splits.
_SQL_TOKEN = re.compile(
    r"""
      '(?:[^'\\]|\\.)*'        # single-quoted literal
    | "(?:[^"\\]|\\.)*"        # double-quoted literal
    | --[^\n]*                 # line comment
    | ;                        # statement end
    | [^'";-]+ | -             # anything else
    """,
    re.VERBOSE | re.DOTALL,
)
_DB_LEVEL = re.compile(r"(?im)^\s*(?:CREATE\s+DATABASE\b|USE\b).*?;\s*$")


def _server_kwargs(db_config: dict, *, with_database: bool = True) -> dict:
    kwargs = {
        "host": str(db_config.get("host", "localhost")),
        "port": int(db_config.get("port", 3306)),
        "user": str(db_config.get("user", "root")),
        "password": str(db_config.get("password", "")),
        "use_pure": True,
    }
    if with_database:
        kwargs["database"] = _database_name(db_config)
    return kwargs


def _database_name(db_config: dict) -> str:
    return str(db_config.get("database", "attendance_db"))


def _strip_create_db_and_use(sql: str) -> str:
    # The target database comes from DB_CONFIG, not from the file.
    return _DB_LEVEL.sub("", sql)


def _iter_sql_statements(sql: str) -> Iterator[str]:
    parts: list[str] = []
    for token in _SQL_TOKEN.findall(sql):
        if token.startswith("--"):
            continue
        if token == ";":
            stmt = "".join(parts).strip()
            parts = []
            if stmt:
                yield stmt
            continue
        parts.append(token)

    stmt = "".join(parts).strip()
    if stmt:
        yield stmt


def ensure_database_exists(db_config: dict) -> None:
    conn = mysql.connector.connect(**_server_kwargs(db_config, with_database=False))
    try:
        cur = conn.cursor()
        cur.execute(
            f"CREATE DATABASE IF NOT EXISTS `{_database_name(db_config)}` "
            "CHARACTER SET utf8mb4 COLLATE utf8mb4_unicode_ci"
        )
        conn.commit()
    finally:
        conn.close()


def apply_sql_file(db_config: dict, *, path: str | Path) -> None:
    path = Path(path)
    statements = list(_iter_sql_statements(_strip_create_db_and_use(path.read_text(encoding="utf-8"))))

    conn = mysql.connector.connect(**_server_kwargs(db_config))
    try:
        cur = conn.cursor()
        for stmt in statements:
            cur.execute(stmt)
        conn.commit()
    finally:
        conn.close()
    logger.info("Applied %s (%d statements) to %s", path.name, len(statements), _database_name(db_config))


def apply_schema(db_config: dict, *, schema_path: str | Path) -> None:
    ensure_database_exists(db_config)
    apply_sql_file(db_config, path=schema_path)


def apply_seed_sql(db_config: dict, *, seed_path: str | Path) -> None:
    apply_sql_file(db_config, path=seed_path)


def list_tables(db_config: dict) -> list[str]:
    conn = mysql.connector.connect(**_server_kwargs(db_config))
    try:
        cur = conn.cursor()
        cur.execute("SHOW TABLES")
        return sorted(str(row[0]) for row in cur.fetchall())
    finally:
        conn.close()
