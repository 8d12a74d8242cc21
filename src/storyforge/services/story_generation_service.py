"""
Story generation service.

Drives one story request end to end: prompt building, the model call under a
deadline with retries, scene parsing and result assembly.
"""

import math
import time
import logging
from typing import Any, Dict, Optional, Union

from pydantic import ValidationError as PydanticValidationError

from ..config import GeneratorConfig
from ..models import (
    AvailabilityReport,
    CharacterProfile,
    GenerationMetadata,
    GenerationOptions,
    GenerationResult,
    Scene,
    Story,
    StoryboardRequest,
)
from ..utils.errors import StoryGenerationError, ValidationError
from ..utils.llm import BaseLLMClient, call_with_timeout, is_retryable_error
from ..utils.llm_constants import (
    AVAILABILITY_PROBE_PROMPT,
    DEFAULT_STORYBOARD_STYLE,
    READ_TIME_CHARS_PER_MINUTE,
)
from ..utils.scene_parser import SceneParser
from ..utils.story_prompt_builder import build_story_prompt
from ..utils.storyboard_prompt_builder import build_storyboard_request

logger = logging.getLogger(__name__)


class StoryGenerationService:
    """Service for orchestrating story generation against an LLM provider."""

    def __init__(
        self,
        client: Optional[BaseLLMClient] = None,
        config: Optional[GeneratorConfig] = None,
        parser: Optional[SceneParser] = None
    ):
        """
        Initialize story generation service.

        Args:
            client: LLM client (created from ``config`` on first use if None)
            config: Generator configuration (defaults if None)
            parser: Scene parser (built from ``config`` if None)
        """
        self.config = config or GeneratorConfig()
        self._client = client
        self.parser = parser or SceneParser(timeout=self.config.parse_timeout_seconds)

    @property
    def client(self) -> BaseLLMClient:
        """Get the LLM client, creating it from the configuration if needed."""
        if self._client is None:
            from ..providers.factory import create_provider
            self._client = create_provider(config=self.config)
        return self._client

    def generate_story(
        self,
        prompt: str,
        genre: str,
        character: Union[CharacterProfile, Dict[str, Any]],
        options: Optional[Union[GenerationOptions, Dict[str, Any]]] = None
    ) -> GenerationResult:
        """
        Generate a four-scene story.

        Each attempt builds the prompt and calls the model under the request
        timeout. Transient failures are retried after a fixed delay; anything
        else, or running out of attempts, is terminal. Once the model answers,
        parsing always produces a Story, degraded or not.

        Args:
            prompt: The user's story prompt
            genre: Story genre
            character: Protagonist profile (model or dict)
            options: Generation options (model, dict or None for defaults)

        Returns:
            GenerationResult with success=True

        Raises:
            ValidationError: If character or options are malformed
            StoryGenerationError: If every attempt failed or a non-retryable error occurred
        """
        character = self._coerce_character(character)
        options = self._coerce_options(options)
        max_attempts = self.config.max_attempts
        timeout = self.config.request_timeout_seconds

        attempt = 1
        while True:
            logger.info(f"Generating story (attempt {attempt}/{max_attempts}) for genre: {genre}")
            try:
                story_prompt = build_story_prompt(prompt, genre, character, options)
                story_text = call_with_timeout(
                    self.client.generate,
                    timeout,
                    f"Model request timed out after {timeout:g} seconds",
                    story_prompt,
                )
            except Exception as e:
                retryable = is_retryable_error(e)
                logger.error(f"Story generation attempt {attempt} failed: {e}", exc_info=True)

                if attempt >= max_attempts or not retryable:
                    logger.error(f"Story generation failed after {attempt} attempts")
                    raise StoryGenerationError(attempt, e, retryable) from e

                logger.warning(f"Retryable error, waiting {self.config.retry_delay_seconds:g}s before retry...")
                time.sleep(self.config.retry_delay_seconds)
                attempt += 1
                continue

            story_text = story_text or ""
            logger.info(f"Response received, length: {len(story_text)} characters")

            story = self.parser.parse(story_text, character)
            logger.info(f"Story generation successful on attempt {attempt}")
            return self._build_result(story, story_text, genre, character, attempt)

    def check_availability(self) -> AvailabilityReport:
        """
        Probe the model with a minimal request under its own timeout.

        Never raises: failures, including failing to build the client, are
        reported with a retryable flag.

        Returns:
            AvailabilityReport
        """
        timeout = self.config.availability_timeout_seconds
        logger.info(f"Checking model availability with {timeout:g}s timeout...")
        try:
            client = self.client
            call_with_timeout(
                client.generate,
                timeout,
                "Model availability check timed out",
                AVAILABILITY_PROBE_PROMPT,
            )
        except Exception as e:
            logger.warning(f"Model availability check failed: {e}")
            return AvailabilityReport(
                available=False,
                model=self._model_identifier(),
                error=str(e),
                retryable=is_retryable_error(e),
            )

        logger.info("Model availability check completed successfully")
        return AvailabilityReport(
            available=True,
            model=self._model_identifier(),
            message=f"{client.provider_label} is available",
        )

    def generate_storyboard_request(
        self,
        scene: Union[Scene, Dict[str, Any]],
        style: str = DEFAULT_STORYBOARD_STYLE
    ) -> StoryboardRequest:
        """
        Build the image request for a scene.

        Args:
            scene: Parsed scene (model or dict)
            style: Art style (default: cartoon)

        Returns:
            StoryboardRequest with image_url unset
        """
        if isinstance(scene, dict):
            try:
                scene = Scene(**scene)
            except PydanticValidationError as e:
                raise ValidationError("Invalid scene", details={"errors": e.errors()}) from e
        logger.debug(f"Building storyboard request for scene: {scene.title}")
        return build_storyboard_request(scene, style)

    def _build_result(
        self,
        story: Story,
        story_text: str,
        genre: str,
        character: CharacterProfile,
        attempt: int
    ) -> GenerationResult:
        """Assemble the successful result and its metadata."""
        metadata = GenerationMetadata(
            genre=genre,
            character=character.name,
            estimated_read_time=math.ceil(len(story_text) / READ_TIME_CHARS_PER_MINUTE),
            scene_count=len(story.scenes),
            generated_by=self._model_identifier(),
            attempt=attempt,
        )
        return GenerationResult(success=True, story=story, raw_text=story_text, metadata=metadata)

    def _model_identifier(self) -> str:
        """Model name without the 'models/' prefix."""
        model_name = self._client.model_name if self._client is not None else self.config.model_name
        return model_name.replace("models/", "")

    @staticmethod
    def _coerce_character(character: Union[CharacterProfile, Dict[str, Any]]) -> CharacterProfile:
        if isinstance(character, CharacterProfile):
            return character
        if not isinstance(character, dict):
            raise ValidationError(
                "Character must be a mapping with at least a name",
                details={"type": type(character).__name__},
            )
        try:
            return CharacterProfile(**character)
        except PydanticValidationError as e:
            raise ValidationError("Invalid character profile", details={"errors": e.errors()}) from e

    @staticmethod
    def _coerce_options(options: Optional[Union[GenerationOptions, Dict[str, Any]]]) -> GenerationOptions:
        if options is None:
            return GenerationOptions()
        if isinstance(options, GenerationOptions):
            return options
        if not isinstance(options, dict):
            raise ValidationError(
                "Options must be a mapping",
                details={"type": type(options).__name__},
            )
        try:
            return GenerationOptions(**options)
        except PydanticValidationError as e:
            raise ValidationError("Invalid generation options", details={"errors": e.errors()}) from e
