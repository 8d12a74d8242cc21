"""
Storyboard prompt builder.

Turns a parsed scene into text prompts for the downstream image service:
a detailed storyboard panel prompt stored on every scene, and a styled
image request built on demand.
"""

from ..models import CharacterProfile, Scene, StoryboardRequest
from .llm_constants import (
    DEFAULT_STORYBOARD_STYLE,
    STORYBOARD_CONTENT_EXCERPT_CHARS,
    STORYBOARD_MAX_TRAITS,
    STORYBOARD_REQUEST_EXCERPT_CHARS,
)
from .text_classifier import classify_scene

VISUAL_STYLE = (
    "Clean storyboard illustration, cinematic composition, clear character poses, "
    "detailed background elements, professional animation reference quality. "
    "Character should be the main focus with supporting environmental details."
)
CAMERA_ANGLE = "Medium shot showing character and environment"
LIGHTING = "Dramatic and appropriate for the scene mood"


def build_storyboard_prompt(scene_title: str, scene_content: str, character: CharacterProfile) -> str:
    """
    Build the storyboard panel prompt for a scene.

    Args:
        scene_title: Scene title
        scene_content: Scene narrative text
        character: Protagonist profile

    Returns:
        Multi-line image-generation prompt
    """
    char_name = character.name or "character"
    traits = character.traits[:STORYBOARD_MAX_TRAITS] if character.traits else []
    char_traits = ", ".join(traits) or "adventurous"
    tags = classify_scene(scene_content)

    return f"""Create a detailed storyboard panel for: {scene_title}

Main character: {char_name} ({char_traits})
Setting: {tags.setting}
Action: {char_name} is {tags.action}
Mood/Expression: {tags.mood}

Visual style: {VISUAL_STYLE}

Camera angle: {CAMERA_ANGLE}
Lighting: {LIGHTING}

Based on story content: {scene_content[:STORYBOARD_CONTENT_EXCERPT_CHARS]}..."""


def build_storyboard_request(scene: Scene, style: str = DEFAULT_STORYBOARD_STYLE) -> StoryboardRequest:
    """
    Build an image request for a scene in the given art style.

    ``image_url`` stays empty; the image service fills it in.

    Args:
        scene: Parsed scene
        style: Art style (default: cartoon)

    Returns:
        StoryboardRequest for the scene
    """
    style = style or DEFAULT_STORYBOARD_STYLE
    prompt = f"""Create a detailed storyboard image for this scene:

Title: {scene.title}
Character: {scene.character_name}

Description: {scene.content[:STORYBOARD_REQUEST_EXCERPT_CHARS]}

Style: {style} storyboard illustration, clear composition, good for animation reference

Requirements:
- Show the key moment of the scene
- Include the character prominently
- Clear visual storytelling
- Professional storyboard quality
- {style} art style"""

    return StoryboardRequest(prompt=prompt, scene_id=scene.id, image_url=None)
