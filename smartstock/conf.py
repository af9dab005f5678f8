"""
SmartStock configuration.

Usage in settings.py:
    SMARTSTOCK = {
        "RECORD_STORE": "smartstock.adapters.django_store.DjangoRecordStore",
        "TEXT_GENERATOR": "smartstock.adapters.gemini.GeminiTextGenerator",
        "GEMINI_MODEL": "gemini-3-pro-preview",
        "AUDIT_HISTORY_LIMIT": 50,
    }
"""

from dataclasses import dataclass
from typing import Any

from django.conf import settings


@dataclass
class SmartstockSettings:
    """SmartStock configuration settings."""

    # Record store backend (dotted path)
    RECORD_STORE: str = "smartstock.adapters.django_store.DjangoRecordStore"

    # Text generation backend for insights and placement suggestions (dotted path)
    TEXT_GENERATOR: str = "smartstock.adapters.gemini.GeminiTextGenerator"

    # Gemini model and key (empty key = read GEMINI_API_KEY / API_KEY from env)
    GEMINI_MODEL: str = "gemini-3-pro-preview"
    GEMINI_API_KEY: str = ""

    # Most recent audits kept in a snapshot
    AUDIT_HISTORY_LIMIT: int = 50

    # Category assigned to products saved without one
    DEFAULT_CATEGORY: str = "Geral"


def get_smartstock_settings() -> SmartstockSettings:
    """Load settings from Django settings."""
    user_settings: dict[str, Any] = getattr(settings, "SMARTSTOCK", {})
    return SmartstockSettings(**{
        k: v for k, v in user_settings.items()
        if k in SmartstockSettings.__dataclass_fields__
    })


class _LazySettings:
    """Lazy proxy that re-reads settings on every attribute access."""

    def __getattr__(self, name):
        return getattr(get_smartstock_settings(), name)


smartstock_settings = _LazySettings()
