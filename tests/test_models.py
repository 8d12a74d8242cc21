"""
Tests for the story data model.

Tests cover field validation, defaulting of options, scene/story
invariants and camelCase serialization.
"""

import pytest
from pydantic import ValidationError

from src.storyforge.models import (
    AvailabilityReport,
    CharacterProfile,
    GenerationOptions,
    Scene,
    Story,
    Tone,
)


def make_scene(number, **overrides):
    fields = {
        "id": f"scene_{number}",
        "number": number,
        "title": f"Title {number}",
        "content": f"Content {number}",
        "character_name": "Mara",
    }
    fields.update(overrides)
    return Scene(**fields)


class TestCharacterProfile:
    """Test the protagonist model."""

    def test_only_name_is_required(self):
        character = CharacterProfile(name="Mara")

        assert character.traits is None
        assert character.description is None

    def test_name_is_required(self):
        with pytest.raises(ValidationError):
            CharacterProfile(traits=["brave"])

    def test_is_immutable(self):
        character = CharacterProfile(name="Mara")

        with pytest.raises(ValidationError):
            character.name = "Tom"


class TestGenerationOptions:
    """Test option defaults and coercion."""

    def test_defaults(self):
        options = GenerationOptions()

        assert options.tone == "lighthearted"
        assert options.length == "medium"
        assert options.include_voice is True
        assert options.include_video is True

    def test_blank_values_fall_back_to_defaults(self):
        options = GenerationOptions(tone="  ", length=None)

        assert options.tone == "lighthearted"
        assert options.length == "medium"

    def test_unknown_tone_is_kept(self):
        assert GenerationOptions(tone="whimsical").tone == "whimsical"

    def test_enum_values_are_unwrapped(self):
        assert GenerationOptions(tone=Tone.DRAMATIC).tone == "dramatic"

    def test_camel_case_aliases(self):
        options = GenerationOptions(**{"includeVoice": False, "includeVideo": False})

        assert options.include_voice is False
        assert options.include_video is False
        assert options.to_dict()["includeVoice"] is False


class TestScene:
    """Test scene invariants."""

    def test_description_defaults_to_content(self):
        assert make_scene(1).description == "Content 1"

    def test_id_must_match_number(self):
        with pytest.raises(ValidationError, match="does not match number"):
            make_scene(2, id="scene_3")

    def test_id_format(self):
        with pytest.raises(ValidationError):
            make_scene(1, id="first")

    @pytest.mark.parametrize("field", ["title", "content"])
    def test_title_and_content_are_non_empty(self, field):
        with pytest.raises(ValidationError):
            make_scene(1, **{field: ""})

    def test_serializes_to_camel_case(self):
        payload = make_scene(1, storyboard_prompt="Draw it").to_dict()

        assert payload["characterName"] == "Mara"
        assert payload["storyboardPrompt"] == "Draw it"
        assert "character_name" not in payload


class TestStory:
    """Test story invariants."""

    def test_valid_story(self):
        story = Story(
            title="Mara's Adventure",
            scenes=[make_scene(n) for n in range(1, 5)],
            total_scenes=4,
            character=CharacterProfile(name="Mara"),
        )

        payload = story.to_dict()
        assert payload["totalScenes"] == 4
        assert "emergencyFallback" not in payload
        assert "fallbackParsed" not in payload

    def test_total_scenes_must_match(self):
        with pytest.raises(ValidationError, match="does not match scene count"):
            Story(
                title="Mara's Adventure",
                scenes=[make_scene(1), make_scene(2)],
                total_scenes=4,
                character=CharacterProfile(name="Mara"),
            )

    def test_scene_numbers_must_be_sequential(self):
        with pytest.raises(ValidationError, match="Scene numbers must run"):
            Story(
                title="Mara's Adventure",
                scenes=[make_scene(1), make_scene(3)],
                total_scenes=2,
                character=CharacterProfile(name="Mara"),
            )


class TestAvailabilityReport:
    """Test availability report serialization."""

    def test_failure_payload(self):
        report = AvailabilityReport(available=False, model="gemini-2.0-flash", error="boom", retryable=True)

        assert report.to_dict() == {
            "available": False,
            "model": "gemini-2.0-flash",
            "error": "boom",
            "retryable": True,
        }
