"""Pure transformation adapters between the transcript and provider formats.

Gemini is served through its OpenAI-compatible endpoint and reuses the
OpenAI adapter.
"""

from .openai import OpenAIRequestAdapter
from .anthropic import AnthropicRequestAdapter, ephemeral

__all__ = [
    "OpenAIRequestAdapter",
    "AnthropicRequestAdapter",
    "ephemeral",
]
