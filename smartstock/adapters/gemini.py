"""
Gemini Text Generator — TextGenerator backed by the Google Gen AI SDK.

Settings:
    SMARTSTOCK = {
        "TEXT_GENERATOR": "smartstock.adapters.gemini.GeminiTextGenerator",
        "GEMINI_MODEL": "gemini-3-pro-preview",
        "GEMINI_API_KEY": "...",  # or GEMINI_API_KEY / API_KEY in the environment
    }
"""

from __future__ import annotations

import logging
import os
import threading
from typing import Any

from google import genai
from google.genai import types

from smartstock.conf import smartstock_settings

logger = logging.getLogger(__name__)


class GeminiTextGenerator:
    """
    Structured JSON generation through Gemini.

    The client is created on first use, so a missing API key surfaces as
    a generation failure (which the suggestion gateway degrades to an
    empty result) rather than as an import-time error.
    """

    def __init__(self, api_key: str | None = None, model: str | None = None):
        self._api_key = api_key
        self._model = model
        self._client: genai.Client | None = None
        self._lock = threading.Lock()

    @property
    def model(self) -> str:
        return self._model or smartstock_settings.GEMINI_MODEL

    def _resolve_api_key(self) -> str | None:
        return (
            self._api_key
            or smartstock_settings.GEMINI_API_KEY
            or os.environ.get("GEMINI_API_KEY")
            or os.environ.get("API_KEY")
        )

    def _get_client(self) -> genai.Client:
        if self._client is None:
            with self._lock:
                if self._client is None:
                    self._client = genai.Client(api_key=self._resolve_api_key())
        return self._client

    def generate(self, prompt: str, schema: dict[str, Any]) -> str:
        response = self._get_client().models.generate_content(
            model=self.model,
            contents=prompt,
            config=types.GenerateContentConfig(
                response_mime_type="application/json",
                response_json_schema=schema,
            ),
        )
        logger.debug("gemini.generate", extra={"model": self.model})
        return (response.text or "").strip()
