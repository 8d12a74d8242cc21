"""
LLM client interface and call helpers.

This module defines the provider-agnostic client interface used by the
story generation service, along with the helpers that put a deadline on a
model call and classify its failures.
"""

import logging
from abc import ABC, abstractmethod
from concurrent.futures import ThreadPoolExecutor, wait
from typing import Any, Callable, Optional, TypeVar

from .errors import ModelTimeoutError
from .llm_constants import RETRYABLE_ERROR_MARKERS

logger = logging.getLogger(__name__)

T = TypeVar("T")


class BaseLLMClient(ABC):
    """
    Interface every LLM provider implements.

    The story generation core only needs a single "generate text from a
    prompt" operation; anything else is provider-specific.
    """

    #: Human-readable provider name used in status messages
    provider_label: str = "LLM"

    @property
    @abstractmethod
    def model_name(self) -> str:
        """Get the model name being used by this provider."""

    @abstractmethod
    def generate(
        self,
        prompt: str,
        system_prompt: Optional[str] = None,
        temperature: Optional[float] = None,
        max_tokens: Optional[int] = None,
    ) -> str:
        """
        Generate text from a prompt.

        Args:
            prompt: The main prompt
            system_prompt: System/instruction prompt (optional)
            temperature: Override default temperature
            max_tokens: Override default max output tokens

        Returns:
            Generated text

        Raises:
            Exception: If generation fails
        """


def is_retryable_error(error: BaseException) -> bool:
    """
    Decide whether a failed model call is worth retrying.

    An error is transient iff its message mentions one of the known
    overload, rate-limit or timeout markers (case-insensitive).

    Args:
        error: Exception raised by the model call

    Returns:
        True if the call should be retried
    """
    message = str(error).lower()
    return any(marker in message for marker in RETRYABLE_ERROR_MARKERS)


def call_with_timeout(
    func: Callable[..., T],
    timeout: float,
    timeout_message: str,
    *args: Any,
    **kwargs: Any
) -> T:
    """
    Run ``func`` and wait at most ``timeout`` seconds for it to settle.

    The call runs on a worker thread and is raced against the deadline.
    Whichever settles first decides the outcome. A running thread cannot be
    cancelled, so on timeout the call is left to finish in the background and
    its result is discarded.

    Args:
        func: Callable to run
        timeout: Deadline in seconds
        timeout_message: Message of the ModelTimeoutError raised on expiry
        *args: Positional arguments for ``func``
        **kwargs: Keyword arguments for ``func``

    Returns:
        Whatever ``func`` returns

    Raises:
        ModelTimeoutError: If the deadline passes first
        Exception: Anything ``func`` raises
    """
    executor = ThreadPoolExecutor(max_workers=1, thread_name_prefix="llm-call")
    future = executor.submit(func, *args, **kwargs)
    try:
        done, _ = wait([future], timeout=timeout)
        if not done:
            if not future.cancel():
                logger.warning(
                    f"Abandoning model call still running after {timeout:g}s; its result will be discarded"
                )
            raise ModelTimeoutError(timeout_message, timeout)
        return future.result()
    finally:
        executor.shutdown(wait=False)
