from digesttrack.repositories.base import DerivedStore, DerivedTables, EntryStore
from digesttrack.repositories.sql import SqlAlchemyStore

__all__ = ["DerivedStore", "DerivedTables", "EntryStore", "SqlAlchemyStore"]
