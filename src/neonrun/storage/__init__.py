"""Persistence of the best score and distance."""

from neonrun.storage.records import (
    HIGH_DISTANCE_KEY,
    HIGH_SCORE_KEY,
    JsonRecordStore,
    MemoryRecordStore,
    RecordStore,
    read_record,
)

__all__ = [
    "HIGH_DISTANCE_KEY",
    "HIGH_SCORE_KEY",
    "JsonRecordStore",
    "MemoryRecordStore",
    "RecordStore",
    "read_record",
]
