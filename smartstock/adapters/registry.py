"""
Adapter registry — loads the configured backends from settings.

Usage:
    from smartstock.adapters import get_record_store, get_text_generator

    store = get_record_store()
    result = store.select("products", order_by="name")

Settings:
    SMARTSTOCK = {
        "RECORD_STORE": "smartstock.adapters.django_store.DjangoRecordStore",
        "TEXT_GENERATOR": "smartstock.adapters.gemini.GeminiTextGenerator",
    }

An empty or unimportable dotted path raises ImproperlyConfigured.
"""

from __future__ import annotations

import logging
import threading

from django.core.exceptions import ImproperlyConfigured
from django.utils.module_loading import import_string

from smartstock.conf import smartstock_settings
from smartstock.protocols.generator import TextGenerator
from smartstock.protocols.store import RecordStore

logger = logging.getLogger(__name__)


# Cached adapter instances
_lock = threading.Lock()
_record_store: RecordStore | None = None
_text_generator: TextGenerator | None = None


def _load(setting_name: str):
    path = getattr(smartstock_settings, setting_name)
    if not path:
        raise ImproperlyConfigured(f"SMARTSTOCK['{setting_name}'] must be configured.")
    try:
        adapter_class = import_string(path)
    except ImportError as e:
        raise ImproperlyConfigured(
            f"Failed to import {setting_name.lower()} '{path}': {e}"
        ) from e
    logger.debug("Loaded %s: %s", setting_name, path)
    return adapter_class()


def get_record_store() -> RecordStore:
    """
    Return the configured record store.

    Raises:
        ImproperlyConfigured: If RECORD_STORE is empty or import fails
    """
    global _record_store

    if _record_store is None:
        with _lock:
            if _record_store is None:  # double-checked
                _record_store = _load("RECORD_STORE")
    return _record_store


def get_text_generator() -> TextGenerator:
    """
    Return the configured text generator.

    Raises:
        ImproperlyConfigured: If TEXT_GENERATOR is empty or import fails
    """
    global _text_generator

    if _text_generator is None:
        with _lock:
            if _text_generator is None:  # double-checked
                _text_generator = _load("TEXT_GENERATOR")
    return _text_generator


def reset_adapters() -> None:
    """Reset the cached adapters. Useful for testing."""
    global _record_store, _text_generator
    _record_store = None
    _text_generator = None
