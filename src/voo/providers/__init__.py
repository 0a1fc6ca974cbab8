from .anthropic import AnthropicClient
from .base import DEFAULT_TIMEOUT, BaseModelClient, ModelClient, RequestAdapter
from .gemini import DEFAULT_GEMINI_MODEL, GeminiClient
from .openai import OpenAIClient

__all__ = [
    "BaseModelClient",
    "ModelClient",
    "RequestAdapter",
    "DEFAULT_TIMEOUT",
    "OpenAIClient",
    "AnthropicClient",
    "GeminiClient",
    "DEFAULT_GEMINI_MODEL",
]
