"""Smart Set persistence layer."""

from smartset.storage.connection import DatabaseConnection
from smartset.storage.records import RecordStore
from smartset.storage.store import DEFAULT_BOARD_NAME, ProductionStore

__all__ = ["DEFAULT_BOARD_NAME", "DatabaseConnection", "ProductionStore", "RecordStore"]
