"""
LLM Provider implementations.

This module provides concrete implementations of LLM providers.
Currently supports Google Gemini API via GeminiProvider.
"""

from .gemini import GeminiProvider
from .factory import create_provider

__all__ = [
    "GeminiProvider",
    "create_provider",
]
