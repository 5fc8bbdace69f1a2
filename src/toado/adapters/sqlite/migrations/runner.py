"""Forward-only schema migrations.

Applied versions are recorded in the ``schema_version`` table. Migrations run
in ascending version order when a database is opened, and each one commits
together with its version row.
"""

from __future__ import annotations

import sqlite3
from abc import ABC, abstractmethod
from collections.abc import Iterable
from datetime import UTC, datetime

from toado.utils.logger import get_logger

CREATE_VERSION_TABLE = """
CREATE TABLE IF NOT EXISTS schema_version (
    version INTEGER PRIMARY KEY,
    description TEXT NOT NULL,
    applied_at DATETIME NOT NULL
)
"""


class Migration(ABC):
    """One schema step. Subclasses set ``version`` and ``description``."""

    version: int
    description: str

    @abstractmethod
    def up(self, connection: sqlite3.Connection) -> None:
        """Apply the schema change."""


class MigrationRunner:
    """Applies pending migrations to one connection."""

    def __init__(self, connection: sqlite3.Connection):
        self.connection = connection
        with self.connection:
            self.connection.execute(CREATE_VERSION_TABLE)

    def current_version(self) -> int:
        """Highest applied version, 0 for a fresh database."""
        row = self.connection.execute("SELECT MAX(version) FROM schema_version").fetchone()
        return row[0] or 0

    def history(self) -> list[dict]:
        rows = self.connection.execute(
            "SELECT version, description, applied_at FROM schema_version ORDER BY version"
        ).fetchall()
        return [
            {"version": row[0], "description": row[1], "applied_at": row[2]}
            for row in rows
        ]

    def apply(self, migration: Migration) -> None:
        """Apply a single migration.

        Raises:
            ValueError: If the version is not above the current version
            RuntimeError: If the migration fails; its transaction is rolled back
        """
        current = self.current_version()
        if migration.version <= current:
            raise ValueError(
                f"Migration version {migration.version} is not greater than "
                f"current version {current}"
            )

        try:
            with self.connection:
                migration.up(self.connection)
                self.connection.execute(
                    "INSERT INTO schema_version (version, description, applied_at) "
                    "VALUES (?, ?, ?)",
                    (
                        migration.version,
                        migration.description,
                        datetime.now(UTC).isoformat(),
                    ),
                )
        except Exception as e:
            raise RuntimeError(f"Migration {migration.version} failed: {e}") from e

        get_logger("sqlite").info(
            "applied migration %d: %s", migration.version, migration.description
        )

    def run(self, migrations: Iterable[Migration]) -> list[Migration]:
        """Apply every migration above the current version, lowest first.

        Returns:
            The migrations that were applied
        """
        current = self.current_version()
        pending = sorted(
            (m for m in migrations if m.version > current), key=lambda m: m.version
        )
        for migration in pending:
            self.apply(migration)
        return pending
