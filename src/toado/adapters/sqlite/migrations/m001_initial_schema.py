"""Migration 001: the projects and tasks tables."""

import sqlite3

from toado.adapters.sqlite import schema

from .runner import Migration


class InitialSchemaMigration(Migration):
    version = 1
    description = "Initial database schema"

    def up(self, connection: sqlite3.Connection) -> None:
        for statement in schema.ALL_TABLES + schema.ALL_INDEXES:
            connection.execute(statement)


ALL_MIGRATIONS = [InitialSchemaMigration()]
