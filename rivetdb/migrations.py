"""Schema migration framework shared by catalog backends."""

from __future__ import annotations

from abc import ABC, abstractmethod


class CatalogMigrations(ABC):
    """Database-specific migration steps for a catalog backend."""

    @abstractmethod
    def ensure_migrations_table(self) -> None:
        """Create the migrations tracking table if it does not exist."""

    @abstractmethod
    def current_version(self) -> int:
        """Return the current schema version, or 0 if none was applied."""

    @abstractmethod
    def record_version(self, version: int) -> None:
        """Record that a migration version has been applied."""

    @abstractmethod
    def migrate_v1(self) -> None:
        """Apply the initial schema."""


def run_migrations(migrations: CatalogMigrations) -> None:
    """Apply every pending migration in order, recording each one."""
    migrations.ensure_migrations_table()
    if migrations.current_version() < 1:
        migrations.migrate_v1()
        migrations.record_version(1)