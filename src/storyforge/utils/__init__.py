"""
Utility modules for the story generation core.

Modules:
- llm: LLM client interface, call deadline and retry classification
- story_prompt_builder: Instruction text for story generation
- scene_parser: Model output to four-scene Story
- text_classifier: Setting/action/mood tagging of scene text
- storyboard_prompt_builder: Image-generation prompts per scene
"""

from .llm import BaseLLMClient, call_with_timeout, is_retryable_error
from .story_prompt_builder import build_story_prompt
from .scene_parser import SceneParser, parse_story_into_scenes
from .text_classifier import classify_scene
from .storyboard_prompt_builder import build_storyboard_prompt, build_storyboard_request

__all__ = [
    "BaseLLMClient",
    "call_with_timeout",
    "is_retryable_error",
    "build_story_prompt",
    "SceneParser",
    "parse_story_into_scenes",
    "classify_scene",
    "build_storyboard_prompt",
    "build_storyboard_request",
]
