"""
Database connection management.
"""
import sqlite3
import logging
from pathlib import Path
from typing import Optional

from ..exceptions import DatabaseError
from .schema import init_schema

class DBManager:
    def __init__(self, db_path: Path, read_only: bool = False):
        self.db_path = db_path
        self.read_only = read_only
        self._conn: Optional[sqlite3.Connection] = None

    def connect(self) -> sqlite3.Connection:
        """
        Connects to the SQLite database and configures pragmas.

        A read-only connection expects an existing database and leaves
        both the file and its schema untouched.
        """
        if self._conn:
            return self._conn

        mode = " (read-only)" if self.read_only else ""
        logging.info(f"Connecting to event database: {self.db_path}{mode}")
        try:
            if self.read_only:
                self._conn = sqlite3.connect(f"{self.db_path.resolve().as_uri()}?mode=ro", uri=True)
                return self._conn

            self.db_path.parent.mkdir(parents=True, exist_ok=True)
            self._conn = sqlite3.connect(self.db_path)

            self._conn.execute("PRAGMA journal_mode=WAL;")
            self._conn.execute("PRAGMA synchronous=NORMAL;")

            # Ensure schema exists
            init_schema(self._conn)
        except (OSError, sqlite3.Error) as e:
            self.close()
            raise DatabaseError(f"Cannot open event database {self.db_path}: {e}") from e

        return self._conn

    def close(self):
        if self._conn:
            self._conn.close()
            self._conn = None

    def __enter__(self):
        return self.connect()

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()
