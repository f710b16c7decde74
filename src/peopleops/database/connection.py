from __future__ import annotations

from dataclasses import dataclass
from typing import Dict

import mysql.connector

from ..core.constants import DEFAULT_DB_TIMEOUT_SECONDS


@dataclass(frozen=True)
class DBConfig:
    host: str
    port: int
    user: str
    password: str
    database: str
    timeout: int = DEFAULT_DB_TIMEOUT_SECONDS

    @classmethod
    def from_dict(cls, db_config: dict) -> "DBConfig":
        return cls(
            host=str(db_config.get("host", "localhost")),
            port=int(db_config.get("port", 3306)),
            user=str(db_config.get("user", "root")),
            password=str(db_config.get("password", "")),
            database=str(db_config.get("database", "peopleops")),
            timeout=int(db_config.get("timeout", DEFAULT_DB_TIMEOUT_SECONDS)),
        )


class DatabaseConnection:
    """Singleton-like DB connection factory, one instance per DBConfig.

    Note: We create short-lived connections per operation (safe for simple Flask apps).
    Every connection is bounded by `timeout` both for connecting and for
    statement execution.
    """

    _instances: Dict[DBConfig, "DatabaseConnection"] = {}

    def __init__(self, config: DBConfig):
        self._config = config

    @classmethod
    def get_instance(cls, config: DBConfig) -> "DatabaseConnection":
        instance = cls._instances.get(config)
        if instance is None:
            instance = cls._instances[config] = DatabaseConnection(config)
        return instance

    @property
    def target(self) -> str:
        c = self._config
        return f"{c.user}@{c.host}:{c.port}/{c.database}"

    def connect(self):
        conn = mysql.connector.connect(
            host=self._config.host,
            port=int(self._config.port),
            user=self._config.user,
            password=self._config.password,
            database=self._config.database,
            connection_timeout=int(self._config.timeout),
        )
        try:
            cur = conn.cursor()
            try:
                # SELECT-only limit, in milliseconds
                cur.execute("SET SESSION max_execution_time=%s", (int(self._config.timeout) * 1000,))
            finally:
                cur.close()
        except mysql.connector.Error:
            conn.close()
            raise
        return conn
