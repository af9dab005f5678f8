"""
SmartStock Adapters.

Implementations of protocols for external systems. Concrete backends
(django_store, memory, gemini, noop) are loaded by dotted path from
settings, so importing this package does not import them.
"""

from smartstock.adapters.registry import (
    get_record_store,
    get_text_generator,
    reset_adapters,
)

__all__ = [
    "get_record_store",
    "get_text_generator",
    "reset_adapters",
]
