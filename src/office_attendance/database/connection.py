from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

import mysql.connector

from ..core.constants import DEFAULT_STORE_TIMEOUT_SECONDS


@dataclass
class DBConfig:
    host: str
    port: int
    user: str
    password: str
    database: str
    timeout_seconds: float = DEFAULT_STORE_TIMEOUT_SECONDS


class DatabaseConnection:
    """Singleton-like DB connection factory.

    Note: We create short-lived connections per operation; every connection
    carries the configured deadline (connect timeout + MAX_EXECUTION_TIME).
    """

    _instance: Optional["DatabaseConnection"] = None

    def __init__(self, config: DBConfig):
        self._config = config

    @classmethod
    def get_instance(cls, config: DBConfig) -> "DatabaseConnection":
        if cls._instance is None:
            cls._instance = DatabaseConnection(config)
        return cls._instance

    @property
    def timeout_seconds(self) -> float:
        return self._config.timeout_seconds

    def connect(self):
        conn = mysql.connector.connect(
            host=self._config.host,
            port=int(self._config.port),
            user=self._config.user,
            password=self._config.password,
            database=self._config.database,
            connection_timeout=max(1, int(round(self._config.timeout_seconds))),
            time_zone="+00:00",
        )
        try:
            cur = conn.cursor()
            try:
                # Bounds read-only statements server-side; writes are bounded by the socket timeout.
                cur.execute("SET SESSION MAX_EXECUTION_TIME=%s", (int(self._config.timeout_seconds * 1000),))
            finally:
                cur.close()
        except mysql.connector.Error:
            conn.close()
            raise
        return conn
