from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Optional

import mysql.connector

DEFAULT_DATABASE = "batch_attendance"


@dataclass(frozen=True)
class DBConfig:
    host: str
    port: int
    user: str
    password: str
    database: str

    @classmethod
    def from_dict(cls, db_config: dict) -> "DBConfig":
        """Build from a settings DB_CONFIG dict, filling local defaults."""
        return cls(
            host=str(db_config.get("host", "localhost")),
            port=int(db_config.get("port", 3306)),
            user=str(db_config.get("user", "root")),
            password=str(db_config.get("password") or ""),
            database=str(db_config.get("database") or DEFAULT_DATABASE),
        )

    def connect_kwargs(self, *, with_database: bool = True) -> Dict[str, Any]:
        kwargs: Dict[str, Any] = {
            "host": self.host,
            "port": self.port,
            "user": self.user,
            "password": self.password,
        }
        if with_database:
            kwargs["database"] = self.database
        return kwargs


class DatabaseConnection:
    """Process-wide MySQL connection source.

    Each repository call opens its own short-lived connection, so request
    threads and the background ranking job never share one. Sessions run in
    UTC: DATETIME columns hold naive UTC instants.
    """

    _instance: Optional["DatabaseConnection"] = None

    def __init__(self, config: DBConfig):
        self._config = config

    @property
    def config(self) -> DBConfig:
        return self._config

    @classmethod
    def get_instance(cls, config: DBConfig) -> "DatabaseConnection":
        if cls._instance is None or cls._instance.config != config:
            cls._instance = DatabaseConnection(config)
        return cls._instance

    def connect(self):
        return mysql.connector.connect(time_zone="+00:00", **self._config.connect_kwargs())
