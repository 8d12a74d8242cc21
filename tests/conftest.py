"""
Shared pytest fixtures for test suite.

This module provides common fixtures used across multiple test files,
reducing duplication and ensuring consistency.
"""

import os
import threading
from unittest.mock import MagicMock, patch

import pytest

from src.storyforge.config import GeneratorConfig
from src.storyforge.models import CharacterProfile
from src.storyforge.providers.gemini import GeminiProvider
from src.storyforge.services.story_generation_service import StoryGenerationService
from src.storyforge.utils.llm import BaseLLMClient


WELL_FORMED_STORY = """SCENE 1: The Lighthouse Glow
Mara was exploring the old library beneath the lighthouse when a strange glow spilled from behind the shelves. Curious and a little nervous, they pulled the heaviest book aside.

SCENE 2: The Secret Revealed
Behind the shelf sat a brass compass that hummed softly in their hands. Its needle ignored the north and pointed straight out to sea.

SCENE 3: The Storm Rises
Following the needle, Mara rowed into the dark ocean as thunder cracked overhead. The waves grew taller and the little boat spun, but they refused to turn back.

SCENE 4: The Way Home
At dawn the compass led Mara to a forgotten island where the lost keepers of the light waited. Together they sailed home, happy and excited for the next adventure."""


# Character fixtures
@pytest.fixture
def sample_character():
    """Sample protagonist used across tests."""
    return CharacterProfile(
        name="Mara",
        traits=["curious", "brave", "stubborn"],
        description="A lighthouse keeper with an unusual collection",
    )


@pytest.fixture
def minimal_character():
    """Protagonist with only a name."""
    return CharacterProfile(name="Tom")


# Model output fixtures
@pytest.fixture
def well_formed_story():
    """Model output with four well-marked scenes."""
    return WELL_FORMED_STORY


def make_marked_story(count: int) -> str:
    """
    Build model output with ``count`` well-marked scenes.

    Args:
        count: Number of SCENE markers to emit

    Returns:
        Story text with titles "Title 1".."Title <count>"
    """
    return "\n\n".join(
        f"SCENE {n}: Title {n}\nThis is the body of scene number {n}. Something happens here."
        for n in range(1, count + 1)
    )


# Configuration fixtures
@pytest.fixture
def fast_config():
    """Configuration with no retry delay and short deadlines."""
    return GeneratorConfig(
        api_key="test_key",
        retry_delay_seconds=0,
        request_timeout_seconds=5,
        availability_timeout_seconds=5,
    )


# ============================================================================
# Standardized Mocking Utilities
# ============================================================================
# Mocking Strategy:
# 1. Use mock_llm_client for the service-level LLM dependency
# 2. Use mock_gemini_provider when exercising GeminiProvider against a patched
#    google.generativeai module
# 3. Use blocking_generate for timeout scenarios; it releases its threads on teardown

@pytest.fixture
def mock_llm_client():
    """
    Standardized fixture for mocking the LLM client.

    Returns a MagicMock constrained to the BaseLLMClient interface whose
    generate() returns the well-formed story.

    Usage:
        def test_something(mock_llm_client):
            mock_llm_client.generate.side_effect = [Exception("503"), "text"]
    """
    client = MagicMock(spec=BaseLLMClient)
    client.model_name = "models/gemini-2.0-flash"
    client.provider_label = "Gemini AI"
    client.generate.return_value = WELL_FORMED_STORY
    return client


@pytest.fixture
def service(mock_llm_client, fast_config):
    """Story generation service wired to the mock client."""
    return StoryGenerationService(client=mock_llm_client, config=fast_config)


@pytest.fixture
def blocking_generate():
    """
    A generate() stand-in that blocks until the test finishes.

    Yields:
        Callable usable as ``side_effect`` for a mocked generate()
    """
    release = threading.Event()

    def generate(*args, **kwargs):
        release.wait(timeout=5)
        return WELL_FORMED_STORY

    yield generate
    release.set()


@pytest.fixture
def mock_gemini_provider():
    """
    Create a GeminiProvider against a patched google.generativeai module.

    The provider exposes ``_mock_model`` and ``_mock_model_class`` for
    verifying calls.
    """
    with patch.dict(os.environ, {"GOOGLE_API_KEY": "test_key"}):
        with patch('google.generativeai.configure'):
            with patch('google.generativeai.GenerativeModel') as mock_model_class:
                mock_model = MagicMock()
                mock_response = MagicMock()
                mock_response.text = "Generated story text"
                mock_model.generate_content.return_value = mock_response
                mock_model_class.return_value = mock_model

                provider = GeminiProvider(api_key="test_key")
                provider._mock_model = mock_model
                provider._mock_model_class = mock_model_class
                yield provider
