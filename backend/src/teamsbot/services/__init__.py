"""
Services package for the messaging extension.
"""

from .record_store import DataSource, InMemoryDataSource, JsonFileDataSource, RecordStore, get_record_store

__all__ = [
    "DataSource",
    "InMemoryDataSource",
    "JsonFileDataSource",
    "RecordStore",
    "get_record_store",
]
