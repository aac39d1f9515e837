from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

import mysql.connector
from mysql.connector import pooling


@dataclass(frozen=True)
class DBConfig:
    host: str
    port: int
    user: str
    password: str
    database: str
    pool_size: int = 0

    @classmethod
    def from_dict(cls, db_config: dict) -> "DBConfig":
        return cls(
            host=str(db_config.get("host", "localhost")),
            port=int(db_config.get("port", 3306)),
            user=str(db_config.get("user", "root")),
            password=str(db_config.get("password", "")),
            database=str(db_config.get("database", "opsdesk")),
            pool_size=int(db_config.get("pool_size", 0) or 0),
        )


class DatabaseConnection:
    """Connection factory shared by every MySQL repository.

    With pool_size > 0 connections come from a mysql-connector pool,
    otherwise a short-lived connection is opened per operation.
    """

    _instance: Optional["DatabaseConnection"] = None

    def __init__(self, config: DBConfig):
        self._config = config
        self._pool: Optional[pooling.MySQLConnectionPool] = None

    @classmethod
    def get_instance(cls, config: DBConfig) -> "DatabaseConnection":
        if cls._instance is None or cls._instance._config != config:
            cls._instance = DatabaseConnection(config)
        return cls._instance

    @property
    def config(self) -> DBConfig:
        return self._config

    def _connect_kwargs(self) -> dict:
        return {
            "host": self._config.host,
            "port": int(self._config.port),
            "user": self._config.user,
            "password": self._config.password,
            "database": self._config.database,
        }

    def connect(self):
        if self._config.pool_size > 0:
            if self._pool is None:
                self._pool = pooling.MySQLConnectionPool(
                    pool_name="opsdesk",
                    pool_size=self._config.pool_size,
                    **self._connect_kwargs(),
                )
            return self._pool.get_connection()
        return mysql.connector.connect(**self._connect_kwargs())
