"""
Story prompt builder for LLM story generation.

This module builds the instruction text sent to the model. The prompt pins
down the exact output shape the scene parser expects: four scenes, each
opened by a literal ``SCENE <n>:`` marker, a title line and a short body.

Key Components:
- Dataclass: StoryPromptParams - Parameter object with every default resolved
- Functions: resolve_prompt_params, build_story_prompt and the section builders
"""

from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Union

from ..models import CharacterProfile, GenerationOptions
from ..tones import get_example_phrasing, get_length_guidance, get_tone_guidance
from .llm_constants import SCENE_COUNT

DEFAULT_CHARACTER_NAME = "the protagonist"
DEFAULT_CHARACTER_TRAITS = "adventurous"
DEFAULT_CHARACTER_DESCRIPTION = "an adventurous character"


@dataclass
class StoryPromptParams:
    """Parameters for building story generation prompts."""
    prompt: str
    genre: str
    char_name: str
    char_traits: str
    char_description: str
    tone: str
    length: str
    include_voice: bool
    include_video: bool


def resolve_prompt_params(
    prompt: str,
    genre: str,
    character: CharacterProfile,
    options: Optional[Union[GenerationOptions, Dict[str, Any]]] = None
) -> StoryPromptParams:
    """
    Fill in defaults for absent character fields and options.

    Args:
        prompt: The user's story prompt
        genre: Story genre
        character: Protagonist profile
        options: Generation options (defaults used if None)

    Returns:
        StoryPromptParams with no missing values
    """
    if options is None:
        options = GenerationOptions()
    elif isinstance(options, dict):
        options = GenerationOptions(**options)

    return StoryPromptParams(
        prompt=prompt,
        genre=genre,
        char_name=character.name or DEFAULT_CHARACTER_NAME,
        char_traits=", ".join(character.traits) if character.traits else DEFAULT_CHARACTER_TRAITS,
        char_description=character.description or DEFAULT_CHARACTER_DESCRIPTION,
        tone=options.tone,
        length=options.length,
        include_voice=options.include_voice,
        include_video=options.include_video,
    )


def build_brief_section(params: StoryPromptParams) -> str:
    """Build the character/prompt/option summary at the top of the prompt."""
    voice = "Yes - Include narrative elements" if params.include_voice else "No - Focus on visual action only"
    video = "Yes - Optimize for visual storytelling" if params.include_video else "No - Text-focused"
    return f"""You are a professional story creator. Create an engaging story with EXACTLY {SCENE_COUNT} scenes.

CHARACTER: {params.char_name}
CHARACTER DESCRIPTION: {params.char_description}
TRAITS: {params.char_traits}
STORY PROMPT: {params.prompt}
GENRE: {params.genre}
TONE: {params.tone} - {get_tone_guidance(params.tone)}
LENGTH: {params.length} - {get_length_guidance(params.length)}
VOICE NARRATION: {voice}
VIDEO GENERATION: {video}

CRITICAL REQUIREMENT: Create EXACTLY {SCENE_COUNT} scenes - NO MORE, NO LESS"""


def build_format_section(tone: str) -> str:
    """Build the mandatory output format with one template block per scene."""
    body_hints = [
        "Make it narrative, descriptive, and {tone}. Focus on character emotions, dialogue, "
        "and story progression rather than just visual descriptions.",
        "Continue the narrative naturally from Scene 1. Include character development and {tone} elements.",
        "Build tension or develop the plot further. Maintain the {tone} throughout.",
        "Provide a satisfying conclusion that matches the {tone} and resolves the story.",
    ]
    blocks = []
    for number, hint in enumerate(body_hints, start=1):
        blocks.append(
            f"SCENE {number}: [Engaging scene title]\n"
            f"[2-3 sentences of engaging story content that readers will enjoy. {hint.format(tone=tone)}]"
        )
    return "MANDATORY FORMAT - DO NOT DEVIATE:\n\n" + "\n\n".join(blocks)


def build_requirements_section(params: StoryPromptParams) -> str:
    """Build the requirement checklist, including the optional voice/video lines."""
    requirements: List[str] = [
        f"EXACTLY {SCENE_COUNT} scenes only",
        'Each scene must start with "SCENE X:"',
        "Write 2-3 engaging sentences per scene that tell a story",
        "Focus on narrative, dialogue, emotions, and character development",
        f"Match the {params.tone} tone throughout",
        "Make it readable and enjoyable for humans",
        f"Consider {params.char_name}'s traits: {params.char_traits}",
        f"Use the character description: {params.char_description}",
        f"Appropriate for {params.genre} genre and {params.length} length",
        f"NO additional scenes beyond {SCENE_COUNT}",
    ]
    if params.include_voice:
        requirements.append("Include narrative elements suitable for voice-over")
    if params.include_video:
        requirements.append("Ensure each scene is visually compelling for video")
    return "REQUIREMENTS:\n" + "\n".join(f"- {line}" for line in requirements)


def build_example_section(tone: str, char_name: str) -> str:
    """Build the worked example story, phrased for the requested tone."""
    beats = get_example_phrasing(tone, char_name)
    return f"""EXAMPLE FOR {tone.upper()} TONE:
SCENE 1: The Mysterious Discovery
{char_name} was exploring the old library when they noticed a strange glow coming from behind the dusty shelves. {beats["discovery"]} What they found would change everything.

SCENE 2: The Secret Revealed
{beats["revelation"]} The ancient artifact hummed with energy, its surface covered in symbols they had never seen before. {beats["revelation_close"]}

SCENE 3: The Challenge Emerges
{beats["challenge"]} The room began to shift and change around them, presenting challenges they never expected. {beats["challenge_close"]}

SCENE 4: The Resolution
{beats["resolution"]} The artifact's power had awakened something special in them, and they knew their ordinary life was now behind them. {beats["resolution_close"]}"""


def build_story_prompt(
    prompt: str,
    genre: str,
    character: CharacterProfile,
    options: Optional[Union[GenerationOptions, Dict[str, Any]]] = None
) -> str:
    """
    Build the full instruction text for story generation.

    The result is deterministic given its inputs; only the worked example
    changes with the tone.

    Args:
        prompt: The user's story prompt
        genre: Story genre
        character: Protagonist profile
        options: Generation options (defaults used if None)

    Returns:
        Prompt string for the model
    """
    params = resolve_prompt_params(prompt, genre, character, options)
    sections = [
        build_brief_section(params),
        build_format_section(params.tone),
        build_requirements_section(params),
        build_example_section(params.tone, params.char_name),
        f"NOW CREATE YOUR STORY WITH EXACTLY {SCENE_COUNT} SCENES FOLLOWING THIS EXACT FORMAT:",
    ]
    return "\n\n".join(sections)
