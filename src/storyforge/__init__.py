"""
Story Forge

Turns a story prompt and a character profile into a four-scene story via
an LLM, with storyboard prompts for each scene.
"""

from .config import GeneratorConfig
from .models import (
    CharacterProfile,
    GenerationOptions,
    Scene,
    Story,
    GenerationResult,
    AvailabilityReport,
    StoryboardRequest,
)
from .services import StoryGenerationService
from .utils.errors import StoryGenerationError

__version__ = "0.1.0"

__all__ = [
    "GeneratorConfig",
    "CharacterProfile",
    "GenerationOptions",
    "Scene",
    "Story",
    "GenerationResult",
    "AvailabilityReport",
    "StoryboardRequest",
    "StoryGenerationService",
    "StoryGenerationError",
]
