"""
Tests for story prompt building.

Tests cover the required output format, tone/length guidance lookup,
character defaults, optional voice/video lines and the tone-specific
worked example.
"""

import pytest

from src.storyforge.models import CharacterProfile, GenerationOptions
from src.storyforge.utils.story_prompt_builder import (
    build_requirements_section,
    build_story_prompt,
    resolve_prompt_params,
)


def build(character, **options):
    return build_story_prompt(
        "A lighthouse that hums at night",
        "fantasy",
        character,
        GenerationOptions(**options),
    )


class TestPromptFormat:
    """Test the mandatory output format."""

    def test_prompt_asks_for_four_marked_scenes(self, sample_character):
        """Test that every scene marker appears in the format section."""
        prompt = build(sample_character)

        assert "Create an engaging story with EXACTLY 4 scenes." in prompt
        for number in range(1, 5):
            assert f"SCENE {number}: [Engaging scene title]" in prompt
        assert 'Each scene must start with "SCENE X:"' in prompt
        assert prompt.rstrip().endswith("NOW CREATE YOUR STORY WITH EXACTLY 4 SCENES FOLLOWING THIS EXACT FORMAT:")

    def test_prompt_includes_inputs(self, sample_character):
        """Test that prompt, genre and character details are embedded."""
        prompt = build(sample_character)

        assert "STORY PROMPT: A lighthouse that hums at night" in prompt
        assert "GENRE: fantasy" in prompt
        assert "CHARACTER: Mara" in prompt
        assert "TRAITS: curious, brave, stubborn" in prompt
        assert "CHARACTER DESCRIPTION: A lighthouse keeper with an unusual collection" in prompt
        assert "Consider Mara's traits: curious, brave, stubborn" in prompt

    def test_prompt_is_deterministic(self, sample_character):
        """Test that identical inputs give identical prompts."""
        assert build(sample_character, tone="dramatic") == build(sample_character, tone="dramatic")

    def test_defaults_when_options_missing(self, sample_character):
        """Test that None options mean lighthearted/medium with voice and video."""
        prompt = build_story_prompt("A quest", "adventure", sample_character, None)

        assert "TONE: lighthearted - Keep it fun and upbeat" in prompt
        assert "LENGTH: medium - Well-developed story with clear progression" in prompt
        assert "VOICE NARRATION: Yes - Include narrative elements" in prompt
        assert "VIDEO GENERATION: Yes - Optimize for visual storytelling" in prompt

    def test_accepts_options_dict_with_camel_case_keys(self, sample_character):
        """Test that front-end style option dicts are understood."""
        prompt = build_story_prompt(
            "A quest", "adventure", sample_character,
            {"tone": "mysterious", "includeVoice": False},
        )

        assert "TONE: mysterious - Add suspense and intrigue" in prompt
        assert "VOICE NARRATION: No - Focus on visual action only" in prompt


class TestCharacterDefaults:
    """Test defaulting of absent character fields."""

    def test_blank_character_gets_generic_values(self):
        """Test that missing name, traits and description are filled in."""
        params = resolve_prompt_params("A quest", "adventure", CharacterProfile(name=""), None)

        assert params.char_name == "the protagonist"
        assert params.char_traits == "adventurous"
        assert params.char_description == "an adventurous character"

    def test_name_only_character(self, minimal_character):
        """Test that a name-only character keeps its name."""
        prompt = build(minimal_character)

        assert "CHARACTER: Tom" in prompt
        assert "TRAITS: adventurous" in prompt


class TestGuidance:
    """Test tone and length guidance lookup."""

    @pytest.mark.parametrize("tone,guidance", [
        ("lighthearted", "Keep it fun and upbeat"),
        ("serious", "Make it thoughtful and meaningful"),
        ("humorous", "Add comedy and funny moments"),
        ("dramatic", "Include emotional depth and tension"),
        ("mysterious", "Add suspense and intrigue"),
        ("romantic", "Include heartwarming moments"),
        ("whimsical", "Engaging and appropriate"),
    ])
    def test_tone_guidance(self, sample_character, tone, guidance):
        assert f"TONE: {tone} - {guidance}" in build(sample_character, tone=tone)

    def test_capitalized_tone_gets_its_guidance(self, sample_character):
        """Test that tone names from a form are matched regardless of case."""
        prompt = build(sample_character, tone="Humorous")

        assert "TONE: Humorous - Add comedy and funny moments" in prompt
        assert "EXAMPLE FOR HUMOROUS TONE:" in prompt
        assert "With typical clumsiness, they knocked over three books while investigating." in prompt

    @pytest.mark.parametrize("length,guidance", [
        ("short", "Simple and focused story progression"),
        ("medium", "Well-developed story with clear progression"),
        ("long", "Rich story with detailed character development"),
        ("epic", "Well-paced story"),
    ])
    def test_length_guidance(self, sample_character, length, guidance):
        assert f"LENGTH: {length} - {guidance}" in build(sample_character, length=length)


class TestVoiceAndVideo:
    """Test the optional voice/video requirement lines."""

    def test_lines_present_when_enabled(self, sample_character):
        prompt = build(sample_character, include_voice=True, include_video=True)

        assert "- Include narrative elements suitable for voice-over" in prompt
        assert "- Ensure each scene is visually compelling for video" in prompt

    def test_lines_absent_when_disabled(self, sample_character):
        prompt = build(sample_character, include_voice=False, include_video=False)

        assert "voice-over" not in prompt
        assert "visually compelling for video" not in prompt
        assert "VIDEO GENERATION: No - Text-focused" in prompt

    def test_requirements_have_no_blank_lines(self, sample_character):
        """Test that disabled options leave no empty bullet lines behind."""
        params = resolve_prompt_params(
            "A quest", "adventure", sample_character,
            GenerationOptions(include_voice=False, include_video=False),
        )
        section = build_requirements_section(params)

        assert all(line.strip() for line in section.splitlines())


class TestWorkedExample:
    """Test the tone-specific example story."""

    def test_example_heading_uses_tone(self, sample_character):
        assert "EXAMPLE FOR HUMOROUS TONE:" in build(sample_character, tone="humorous")

    @pytest.mark.parametrize("tone,phrase", [
        ("humorous", "With typical clumsiness, they knocked over three books while investigating."),
        ("dramatic", "Their heart raced as they approached the mysterious light."),
        ("mysterious", "An eerie silence filled the air as they cautiously moved closer."),
        ("lighthearted", "Curiosity sparked in their eyes as they investigated."),
        ("romantic", "Curiosity sparked in their eyes as they investigated."),
    ])
    def test_discovery_beat_follows_tone(self, sample_character, tone, phrase):
        assert phrase in build(sample_character, tone=tone)

    def test_example_uses_character_name(self, sample_character):
        prompt = build(sample_character, tone="dramatic")

        assert "Mara was exploring the old library" in prompt
        assert "Mara's eyes widened in disbelief at what lay before them." in prompt
        assert "With courage they didn't know they possessed, Mara made their choice." in prompt

    def test_humorous_closers(self, sample_character):
        prompt = build(sample_character, tone="humorous")

        assert "They poked it experimentally, hoping it wouldn't explode." in prompt
        assert "They just hoped the next adventure would involve less falling down." in prompt
        assert "They knew this discovery would change their life forever." not in prompt

    def test_non_humorous_closers(self, sample_character):
        prompt = build(sample_character, tone="mysterious")

        assert "They knew this discovery would change their life forever." in prompt
        assert "This was only the beginning of their adventure." in prompt
        assert "This was just the beginning of their extraordinary journey." in prompt
