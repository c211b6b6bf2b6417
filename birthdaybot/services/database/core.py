"""
BirthdayBot - Database Core
===========================

Base database class with connection management and table initialization.
"""

import os
import shutil
import sqlite3
import time
from contextlib import contextmanager
from pathlib import Path
from typing import Iterator, Optional

from birthdaybot.core.constants import DB_TIMEOUT
from birthdaybot.core.logger import logger


CORRUPTION_MARKERS = (
    "disk i/o error",
    "database disk image is malformed",
    "file is not a database",
    "file is encrypted",
)


class DatabaseUnavailableError(Exception):
    """Raised when the database is unhealthy and operations cannot proceed."""
    pass


class DatabaseCore:
    """Base database class with connection management."""

    def __init__(self, dsn: str) -> None:
        """
        Initialize database connection and create tables if needed.

        Args:
            dsn: Path to the SQLite file, or a "file:" URI.
        """
        self.dsn = dsn
        self._is_uri = dsn.startswith("file:")
        self._healthy = True
        self._corruption_reason: Optional[str] = None
        self._init_db()

    @property
    def is_healthy(self) -> bool:
        """Check if database is healthy and operational."""
        return self._healthy

    @property
    def corruption_reason(self) -> Optional[str]:
        """Get the reason for database corruption if unhealthy."""
        return self._corruption_reason

    def require_healthy(self) -> None:
        """Raise RuntimeError if database is unhealthy.

        Called at startup to fail fast if the database cannot be used.
        """
        if not self._healthy:
            raise RuntimeError(
                f"Database is unhealthy: {self._corruption_reason or 'Unknown error'}. "
                "Manual intervention required - check logs for backup location."
            )

    def _connect(self) -> sqlite3.Connection:
        conn = sqlite3.connect(self.dsn, timeout=DB_TIMEOUT, uri=self._is_uri)
        conn.row_factory = sqlite3.Row
        return conn

    def _file_path(self) -> Optional[str]:
        """Filesystem path of the database, if the DSN names one."""
        if self._is_uri or self.dsn == ":memory:":
            return None
        return self.dsn

    def _check_integrity(self) -> bool:
        """Check database integrity. Returns True if healthy."""
        try:
            conn = self._connect()
            try:
                row = conn.execute("PRAGMA integrity_check").fetchone()
            finally:
                conn.close()
            return row[0] == "ok"
        except sqlite3.Error as e:
            logger.error_tree("DB Integrity Check Failed", e)
            return False

    def _backup_corrupted(self) -> None:
        """Backup corrupted database file."""
        path = self._file_path()
        if not path or not os.path.exists(path):
            return
        backup_path = f"{path}.corrupted.{int(time.time())}"
        try:
            shutil.copy2(path, backup_path)
            logger.tree("Corrupted DB Backed Up", [
                ("Backup", backup_path),
            ], emoji="💾")
        except OSError as e:
            logger.error_tree("DB Backup Failed", e)

    def _mark_unhealthy(self, reason: str) -> None:
        self._healthy = False
        self._corruption_reason = reason

    @contextmanager
    def _get_conn(self) -> Iterator[sqlite3.Connection]:
        """Get a connection wrapped in a single transaction.

        Commits when the block exits cleanly and rolls back when it raises.

        Raises:
            DatabaseUnavailableError: If the database is unhealthy.
            sqlite3.Error: If connecting, executing or committing fails.
        """
        if not self._healthy:
            logger.tree("Database Unhealthy", [
                ("Status", "Operation rejected"),
                ("Reason", self._corruption_reason or "Unknown"),
            ], emoji="⚠️")
            raise DatabaseUnavailableError(
                f"Database is unavailable: {self._corruption_reason or 'unhealthy'}"
            )

        conn = None
        try:
            conn = self._connect()
            yield conn
            conn.commit()
        except sqlite3.DatabaseError as e:
            if conn is not None:
                conn.rollback()
            if any(marker in str(e).lower() for marker in CORRUPTION_MARKERS):
                self._mark_unhealthy(str(e))
                logger.error_tree("Database Corruption Detected", e)
                self._backup_corrupted()
            raise
        except Exception:
            if conn is not None:
                conn.rollback()
            raise
        finally:
            if conn is not None:
                conn.close()

    def _init_db(self) -> None:
        """Initialize database tables."""
        logger.tree("Database Init", [
            ("DSN", self.dsn),
            ("Status", "Starting"),
        ], emoji="🗄️")

        path = self._file_path()
        if path:
            Path(path).parent.mkdir(parents=True, exist_ok=True)

        # Check integrity on startup
        if path and os.path.exists(path) and not self._check_integrity():
            self._mark_unhealthy("PRAGMA integrity_check failed on startup")
            logger.tree("DATABASE CORRUPTION DETECTED", [
                ("Path", path),
                ("Status", "INTEGRITY CHECK FAILED"),
                ("Action", "Creating backup - MANUAL INTERVENTION REQUIRED"),
            ], emoji="🚨")
            self._backup_corrupted()
            return

        try:
            with self._get_conn() as conn:
                # =============================================================
                # Birthday Tables
                # =============================================================

                conn.execute("""
                    CREATE TABLE IF NOT EXISTS users (
                        id TEXT PRIMARY KEY,
                        birthdate INTEGER NOT NULL
                    ) STRICT
                """)
        except sqlite3.Error as e:
            if self._healthy:
                self._mark_unhealthy(f"Could not initialize tables: {e}")
            logger.error_tree("Database Init Failed", e, [
                ("DSN", self.dsn),
            ])
            return

        logger.tree("Database Init", [
            ("DSN", self.dsn),
            ("Status", "Ready"),
        ], emoji="✅")
