"""LLM provider interface."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any


class LLMProvider(ABC):
    """Abstract model provider used by the content generator."""

    @abstractmethod
    async def generate(self, payload: dict[str, Any]) -> dict[str, Any]:
        """Send a generation payload and return the decoded reply envelope."""
