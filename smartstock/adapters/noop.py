"""
Noop Text Generator — Stub adapter for development and testing.

Usage in settings.py:
    SMARTSTOCK = {
        "TEXT_GENERATOR": "smartstock.adapters.noop.NoopTextGenerator",
    }
"""

from __future__ import annotations


class NoopTextGenerator:
    """
    No-operation text generator.

    Always answers with an empty JSON array, so insight and placement
    requests succeed with no suggestions. Suitable for local development
    without an API key and for CI.
    """

    def generate(self, prompt, schema):
        return "[]"
