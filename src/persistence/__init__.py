"""Persistence subsystem exports."""

from persistence.manager import StoreRegistry
from persistence.record_store import BoundedRecordStore, StoreSpec, parse_limit
from persistence.write_queue import WriteQueue

__all__ = ["BoundedRecordStore", "StoreRegistry", "StoreSpec", "WriteQueue", "parse_limit"]
