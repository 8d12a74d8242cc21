"""
Standardized story data model.

This module defines the canonical structure for the objects flowing through
story generation using Pydantic for validation and type safety. Fields are
snake_case in Python and serialize to the camelCase shape the front-end and
the storyboard pipeline consume (``to_dict()``).
"""

from enum import Enum
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator
from pydantic.alias_generators import to_camel


class Tone(str, Enum):
    """Story tone options."""
    LIGHTHEARTED = "lighthearted"
    SERIOUS = "serious"
    HUMOROUS = "humorous"
    DRAMATIC = "dramatic"
    MYSTERIOUS = "mysterious"
    ROMANTIC = "romantic"


class StoryLength(str, Enum):
    """Story length options."""
    SHORT = "short"
    MEDIUM = "medium"
    LONG = "long"


class StoryBaseModel(BaseModel):
    """Shared configuration: camelCase aliases, population by field name."""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    def to_dict(self) -> Dict[str, Any]:
        """Convert model to its serialized (camelCase) dictionary."""
        return self.model_dump(by_alias=True, exclude_none=True)


class CharacterProfile(StoryBaseModel):
    """The protagonist supplied by the caller."""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, frozen=True)

    name: str
    traits: Optional[List[str]] = None
    description: Optional[str] = None


class GenerationOptions(StoryBaseModel):
    """
    Options collected by the story form.

    ``tone`` and ``length`` are deliberately plain strings: unknown values
    are accepted and fall back to generic guidance in the prompt.
    """
    tone: str = Tone.LIGHTHEARTED.value
    length: str = StoryLength.MEDIUM.value
    include_voice: bool = True
    include_video: bool = True

    @field_validator("tone", "length", mode="before")
    @classmethod
    def default_blank(cls, v, info):
        """Treat missing/blank values as the defaults."""
        if v is None or (isinstance(v, str) and not v.strip()):
            return Tone.LIGHTHEARTED.value if info.field_name == "tone" else StoryLength.MEDIUM.value
        if isinstance(v, Enum):
            return v.value
        return v


class Scene(StoryBaseModel):
    """A single story segment with its derived storyboard prompt."""
    id: str = Field(..., pattern=r"^scene_\d+$")
    number: int = Field(..., ge=1)
    title: str = Field(..., min_length=1)
    content: str = Field(..., min_length=1)
    description: str = ""
    character_name: str
    storyboard_prompt: str = ""

    @model_validator(mode="after")
    def check_identity(self) -> "Scene":
        """Keep id and number in step; description mirrors content."""
        if self.id != f"scene_{self.number}":
            raise ValueError(f"Scene id '{self.id}' does not match number {self.number}")
        if not self.description:
            self.description = self.content
        return self


class Story(StoryBaseModel):
    """
    A parsed story.

    Normally holds exactly four scenes. The emergency fallback holds one.
    """
    title: str
    scenes: List[Scene]
    total_scenes: int = Field(..., ge=1)
    character: CharacterProfile
    emergency_fallback: Optional[bool] = None
    fallback_parsed: Optional[bool] = None

    @model_validator(mode="after")
    def check_scenes(self) -> "Story":
        """Ensure scene numbering runs 1..n and matches total_scenes."""
        if len(self.scenes) != self.total_scenes:
            raise ValueError(
                f"total_scenes ({self.total_scenes}) does not match scene count ({len(self.scenes)})"
            )
        numbers = [scene.number for scene in self.scenes]
        if numbers != list(range(1, len(self.scenes) + 1)):
            raise ValueError(f"Scene numbers must run 1..{len(self.scenes)}, got {numbers}")
        return self


class GenerationMetadata(StoryBaseModel):
    """Bookkeeping attached to a successful generation."""
    genre: str
    character: str
    estimated_read_time: int = Field(..., ge=0)
    scene_count: int = Field(..., ge=0)
    generated_by: str
    attempt: int = Field(..., ge=1)


class GenerationResult(StoryBaseModel):
    """Outcome of StoryGenerationService.generate_story()."""
    success: bool
    story: Story
    raw_text: str
    metadata: GenerationMetadata


class AvailabilityReport(StoryBaseModel):
    """Outcome of the availability probe. Never raised, always returned."""
    available: bool
    model: str
    message: Optional[str] = None
    error: Optional[str] = None
    retryable: Optional[bool] = None


class StoryboardRequest(StoryBaseModel):
    """Image request for one scene; ``image_url`` is filled in downstream."""
    prompt: str
    scene_id: str
    image_url: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        """Keep ``imageUrl`` in the payload even while it is unset."""
        return self.model_dump(by_alias=True)
