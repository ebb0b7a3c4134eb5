from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

import mysql.connector
from mysql.connector import pooling

from ..core.constants import DEFAULT_POOL_SIZE


@dataclass
class DBConfig:
    host: str
    port: int
    user: str
    password: str
    database: str
    pool_size: int = DEFAULT_POOL_SIZE


class DatabaseConnection:
    """Singleton-like DB connection factory.

    With ``pool_size > 0`` connections come from a shared pool and
    ``close()`` hands them back; otherwise each operation opens its own
    short-lived connection.
    """

    _instance: Optional["DatabaseConnection"] = None

    def __init__(self, config: DBConfig):
        self._config = config
        self._pool: Optional[pooling.MySQLConnectionPool] = None

    @classmethod
    def get_instance(cls, config: DBConfig) -> "DatabaseConnection":
        if cls._instance is None:
            cls._instance = DatabaseConnection(config)
        return cls._instance

    def _connect_kwargs(self) -> dict:
        return {
            "host": self._config.host,
            "port": int(self._config.port),
            "user": self._config.user,
            "password": self._config.password,
            "database": self._config.database,
        }

    def connect(self):
        if self._config.pool_size <= 0:
            return mysql.connector.connect(**self._connect_kwargs())

        if self._pool is None:
            self._pool = pooling.MySQLConnectionPool(
                pool_name=f"club_attendance_{self._config.database}",
                pool_size=int(self._config.pool_size),
                **self._connect_kwargs(),
            )
        return self._pool.get_connection()
