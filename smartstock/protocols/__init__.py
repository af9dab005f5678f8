"""
SmartStock Protocols.

Defines interfaces for external system integration.
"""

from smartstock.protocols.generator import TextGenerator
from smartstock.protocols.store import (
    APPEND_ONLY,
    AUDITS,
    COLLECTIONS,
    LOCATIONS,
    PRODUCTS,
    RecordStore,
    StoreResult,
)

__all__ = [
    "APPEND_ONLY",
    "AUDITS",
    "COLLECTIONS",
    "LOCATIONS",
    "PRODUCTS",
    "RecordStore",
    "StoreResult",
    "TextGenerator",
]
