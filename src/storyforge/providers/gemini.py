"""
Google Gemini LLM Provider implementation.

This module provides the GeminiProvider class for interacting with
Google's Generative AI models. All Gemini-specific code is isolated here.
"""

import os
import logging
from typing import List, Optional

import google.generativeai as genai  # type: ignore[import-untyped]

from ..config import DEFAULT_MODEL
from ..utils.llm import BaseLLMClient

logger = logging.getLogger(__name__)

ALLOWED_MODELS: List[str] = [
    "gemini-2.5-flash",
    "gemini-2.0-flash",
    "gemini-2.0-flash-exp",
    "gemini-1.5-pro",
    "gemini-1.5-flash",
]

DEFAULT_GEMINI_MODEL = DEFAULT_MODEL


def _validate_gemini_model_name(model_name: str, allowed_models: Optional[List[str]] = None) -> str:
    """
    Validate and normalize a Gemini model name.

    Args:
        model_name: Model name (with or without 'models/' prefix)
        allowed_models: Accepted model names (uses ALLOWED_MODELS if None)

    Returns:
        Normalized model name with 'models/' prefix

    Raises:
        ValueError: If model is not allowed
    """
    base_name = model_name.replace("models/", "")
    allowed = [m.replace("models/", "") for m in (allowed_models or ALLOWED_MODELS)]

    if base_name not in allowed:
        raise ValueError(
            f"Invalid Gemini model: {model_name}. Allowed models: {', '.join(allowed)}"
        )
    return f"models/{base_name}"


class GeminiProvider(BaseLLMClient):
    """
    Provider for interacting with Google Gemini API.

    Implements the BaseLLMClient interface so the story generation service
    stays provider-agnostic. The provider imposes no deadline of its own;
    callers wrap ``generate()`` with ``call_with_timeout``.
    """

    provider_label = "Gemini AI"

    def __init__(
        self,
        api_key: Optional[str] = None,
        model_name: str = DEFAULT_GEMINI_MODEL,
        temperature: float = 0.7
    ):
        """
        Initialize Gemini provider.

        Args:
            api_key: Google API key (if None, uses GOOGLE_API_KEY or GEMINI_API_KEY env var)
            model_name: Model name (default: gemini-2.0-flash)
            temperature: Generation temperature (default: 0.7)

        Raises:
            ValueError: If no API key is available or the model name is invalid
        """
        self.api_key = api_key or os.getenv("GOOGLE_API_KEY") or os.getenv("GEMINI_API_KEY")
        if not self.api_key:
            raise ValueError("GOOGLE_API_KEY environment variable is required")

        genai.configure(api_key=self.api_key)
        self._genai = genai

        self._model_name = _validate_gemini_model_name(model_name)
        self.temperature = temperature

        logger.info(f"Initialized GeminiProvider with model: {self._model_name}")

    @property
    def model_name(self) -> str:
        """Get the model name being used by this provider."""
        return self._model_name

    def generate(
        self,
        prompt: str,
        system_prompt: Optional[str] = None,
        temperature: Optional[float] = None,
        max_tokens: Optional[int] = None,
    ) -> str:
        """
        Generate text using the configured Gemini model.

        Args:
            prompt: User prompt
            system_prompt: Optional system prompt
            temperature: Generation temperature (overrides instance default)
            max_tokens: Maximum output tokens (model default if None)

        Returns:
            Generated text ("" if the model returned none)

        Raises:
            Exception: If generation fails
        """
        full_prompt = prompt
        if system_prompt:
            full_prompt = f"{system_prompt}\n\n{prompt}"

        generation_config = {
            "temperature": temperature if temperature is not None else self.temperature,
        }
        if max_tokens:
            generation_config["max_output_tokens"] = max_tokens

        try:
            model = self._genai.GenerativeModel(self.model_name)
            response = model.generate_content(
                full_prompt,
                generation_config=generation_config,
            )
        except (ConnectionError, TimeoutError, OSError) as e:
            logger.error(f"Network error generating content with Gemini: {e}", exc_info=True)
            raise
        except Exception as e:
            # Google API exceptions (quota, overload, auth) carry their status in the message
            logger.error(f"Error generating content with Gemini: {e}", exc_info=True)
            raise

        text = self._extract_text(response)
        if not text:
            finish_reason = "UNKNOWN"
            if getattr(response, "candidates", None):
                finish_reason = getattr(response.candidates[0], "finish_reason", "UNKNOWN")
            logger.warning(f"Gemini generation finished with reason: {finish_reason}. No text returned.")
            return ""

        logger.debug(f"Gemini returned {len(text)} characters")
        return text

    @staticmethod
    def _extract_text(response) -> str:
        """Pull text out of a response verbatim, tolerating blocked/empty candidates."""
        try:
            text = response.text
        except (ValueError, AttributeError):
            # response.text raises ValueError when the candidate has no parts
            text = ""
        if text:
            return text

        parts = []
        for candidate in getattr(response, "candidates", None) or []:
            content = getattr(candidate, "content", None)
            for part in getattr(content, "parts", None) or []:
                if getattr(part, "text", None):
                    parts.append(part.text)
        return "".join(parts)
