"""Service layer for Toado."""

from .storage_service import StorageService

__all__ = ["StorageService"]
