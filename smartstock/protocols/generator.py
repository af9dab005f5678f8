"""
Text Generation Protocol — Interface for the generative-AI backend.
"""

from __future__ import annotations

from typing import Any, Protocol, runtime_checkable


@runtime_checkable
class TextGenerator(Protocol):
    """
    Protocol for structured text generation.

    Implementations send a natural-language prompt plus a JSON schema
    describing the expected output and return the raw response text.
    They may raise on any transport or API failure; callers treat the
    result as untrusted.
    """

    def generate(self, prompt: str, schema: dict[str, Any]) -> str:
        """
        Generate JSON text for a prompt.

        Args:
            prompt: Instructions and embedded data
            schema: JSON schema of the expected response

        Returns:
            Response text (expected to be JSON conforming to schema)
        """
        ...
