"""
Scene parser for model output.

Turns the model's free text into a Story of exactly four scenes. Parsing
never fails from the caller's point of view; it walks a ladder of
strategies and degrades instead:

1. Split on ``SCENE <n>:`` markers (the format the prompt asks for).
2. Scan line by line for looser ``Scene <n>`` headers.
3. Cut the text into four chunks of whole sentences.

Whatever a strategy yields is capped/padded to four scenes. Text too short
to parse, or a parse that raises outright, becomes a single-scene
emergency story instead.
"""

import logging
import math
import re
import time
from typing import Callable, List, NamedTuple, Optional

from ..models import CharacterProfile, Scene, Story
from .errors import ParseTimeoutError
from .llm_constants import (
    EMERGENCY_EXCERPT_CHARS,
    EMERGENCY_SCENE_TITLE,
    EMERGENCY_STORYBOARD_EXCERPT_CHARS,
    MIN_PARSEABLE_LENGTH,
    PARSE_TIMEOUT_SECONDS,
    SCENE_COUNT,
)
from .storyboard_prompt_builder import build_storyboard_prompt

logger = logging.getLogger(__name__)

SCENE_MARKER_PATTERN = re.compile(r"SCENE\s+\d+:", re.IGNORECASE)
SCENE_HEADER_PATTERN = re.compile(r"^scene\s+\d+", re.IGNORECASE)
SCENE_HEADER_PREFIX_PATTERN = re.compile(r"^scene\s+\d+\s*:?\s*", re.IGNORECASE)
SENTENCE_BREAK_PATTERN = re.compile(r"[.!?]+")


class SceneDraft(NamedTuple):
    """Title and content of a scene before numbering."""
    title: str
    content: str


class ParseDeadline:
    """
    Cooperative deadline for a single parse.

    Parsing is synchronous, so nothing can interrupt it from outside; the
    parse loops call ``check()`` between segments instead.
    """

    def __init__(self, timeout: Optional[float], clock: Callable[[], float] = time.monotonic):
        self.timeout = timeout
        self._clock = clock
        self._expires_at = clock() + timeout if timeout is not None else None

    def check(self) -> None:
        if self._expires_at is not None and self._clock() > self._expires_at:
            raise ParseTimeoutError(self.timeout)


class ParseStrategy(NamedTuple):
    """One rung of the fallback ladder."""
    name: str
    func: Callable[[str, ParseDeadline], List[SceneDraft]]
    fallback: bool


def split_on_markers(text: str, deadline: ParseDeadline) -> List[SceneDraft]:
    """
    Split text on literal ``SCENE <n>:`` markers.

    The first line of each segment is the title and the rest is the content.
    Segments missing either are skipped. Stops after four usable segments.
    """
    parts = SCENE_MARKER_PATTERN.split(text)
    start = 1 if not parts[0].strip() else 0

    drafts: List[SceneDraft] = []
    for part in parts[start:]:
        deadline.check()
        if len(drafts) >= SCENE_COUNT:
            break
        part = part.strip()
        if not part:
            continue
        lines = part.split("\n")
        title = lines[0].strip()
        content = "\n".join(lines[1:]).strip()
        if title and content:
            drafts.append(SceneDraft(title, content))
    return drafts


def scan_scene_headers(text: str, deadline: ParseDeadline) -> List[SceneDraft]:
    """
    Scan non-empty lines for ``Scene <n>`` headers (any case, colon optional).

    The rest of a header line is the title. Following lines are joined with
    spaces into the content. Scenes that end up with no content are dropped.
    """
    drafts: List[SceneDraft] = []
    title: Optional[str] = None
    content: List[str] = []
    headers_seen = 0

    def flush():
        body = " ".join(content).strip()
        if title is not None and body:
            drafts.append(SceneDraft(title, body))

    for line in text.split("\n"):
        deadline.check()
        line = line.strip()
        if not line:
            continue
        if SCENE_HEADER_PATTERN.match(line):
            flush()
            headers_seen += 1
            title = SCENE_HEADER_PREFIX_PATTERN.sub("", line).strip() or f"Scene {headers_seen}"
            content = []
        elif title is not None:
            content.append(line)
    flush()
    return drafts


def split_into_chunks(text: str, num_chunks: int = SCENE_COUNT) -> List[str]:
    """
    Cut text into ``num_chunks`` runs of whole sentences.

    Sentences are split on ``.``, ``!`` and ``?``; each chunk takes
    ``ceil(sentences / num_chunks)`` of them in order, so trailing chunks may
    be short or missing. Chunks are re-joined with ". " and end in a period.
    """
    sentences = [s.strip() for s in SENTENCE_BREAK_PATTERN.split(text) if s.strip()]
    if not sentences:
        return []
    chunk_size = math.ceil(len(sentences) / num_chunks)

    chunks = []
    for i in range(num_chunks):
        chunk = ". ".join(sentences[i * chunk_size:(i + 1) * chunk_size]).strip()
        if chunk:
            chunks.append(chunk + ".")
    return chunks


def chunk_by_sentences(text: str, deadline: ParseDeadline) -> List[SceneDraft]:
    """Last resort: one untitled scene per sentence chunk."""
    deadline.check()
    return [
        SceneDraft(f"Scene {i}", chunk)
        for i, chunk in enumerate(split_into_chunks(text, SCENE_COUNT), start=1)
    ]


def build_scene(number: int, title: str, content: str, character: CharacterProfile) -> Scene:
    """Build a numbered scene with its storyboard prompt."""
    return Scene(
        id=f"scene_{number}",
        number=number,
        title=title,
        content=content,
        description=content,
        character_name=character.name,
        storyboard_prompt=build_storyboard_prompt(title, content, character),
    )


def story_title(character: CharacterProfile) -> str:
    return f"{character.name}'s Adventure"


def build_emergency_story(character: CharacterProfile, raw_text: str = "") -> Story:
    """
    Single-scene story for text too short to parse.

    The scene carries the raw text itself, or a stock sentence if blank.
    """
    logger.warning(f"Creating emergency fallback story for {character.name}")
    content = raw_text if raw_text and raw_text.strip() else (
        f"{character.name} embarks on an exciting adventure filled with challenges and discoveries."
    )
    scene = Scene(
        id="scene_1",
        number=1,
        title=EMERGENCY_SCENE_TITLE,
        content=content,
        description=content,
        character_name=character.name,
        storyboard_prompt=f"{character.name} begins an exciting adventure",
    )
    return Story(
        title=story_title(character),
        scenes=[scene],
        total_scenes=1,
        character=character,
        emergency_fallback=True,
    )


def build_parse_failure_story(character: CharacterProfile, raw_text: str) -> Story:
    """Single-scene story built from the head of the raw text after a parse blew up."""
    excerpt = raw_text[:EMERGENCY_EXCERPT_CHARS] + "..."
    scene = Scene(
        id="scene_1",
        number=1,
        title=EMERGENCY_SCENE_TITLE,
        content=excerpt,
        description=excerpt,
        character_name=character.name,
        storyboard_prompt=(
            f"{character.name} begins an adventure, {raw_text[:EMERGENCY_STORYBOARD_EXCERPT_CHARS]}"
        ),
    )
    return Story(
        title=story_title(character),
        scenes=[scene],
        total_scenes=1,
        character=character,
        emergency_fallback=True,
    )


class SceneParser:
    """
    Parses model output into a four-scene Story.

    ``parse()`` never raises. Strategies are tried in order until one yields
    at least one scene; exceptions in the primary strategy fall through to
    the next one, anything else becomes the single-scene emergency story.
    """

    def __init__(self, timeout: Optional[float] = PARSE_TIMEOUT_SECONDS):
        """
        Initialize the parser.

        Args:
            timeout: Cooperative parse deadline in seconds (None disables it)
        """
        self.timeout = timeout
        self.strategies = (
            ParseStrategy("scene markers", split_on_markers, fallback=False),
            ParseStrategy("line scan", scan_scene_headers, fallback=True),
            ParseStrategy("sentence chunks", chunk_by_sentences, fallback=True),
        )

    def parse(self, raw_text: Optional[str], character: CharacterProfile) -> Story:
        """
        Parse raw model text into a Story.

        Args:
            raw_text: Verbatim model output
            character: Protagonist profile

        Returns:
            Story with four scenes, or one scene under the emergency fallback
        """
        raw_text = raw_text or ""
        logger.info(f"Starting scene parsing for text length: {len(raw_text)}")

        if len(raw_text) < MIN_PARSEABLE_LENGTH:
            logger.warning(f"Story text too short ({len(raw_text)} chars), using emergency fallback")
            return build_emergency_story(character, raw_text)

        try:
            return self._parse_with_strategies(raw_text, character)
        except Exception as e:
            logger.error(f"Parsing error, using emergency fallback story structure: {e}", exc_info=True)
            return build_parse_failure_story(character, raw_text)

    def _parse_with_strategies(self, raw_text: str, character: CharacterProfile) -> Story:
        deadline = ParseDeadline(self.timeout)
        drafts: List[SceneDraft] = []
        used_fallback = False

        for strategy in self.strategies:
            try:
                drafts = strategy.func(raw_text, deadline)
            except ParseTimeoutError:
                raise
            except Exception as e:
                if strategy.fallback:
                    raise
                logger.error(f"Error in {strategy.name} parsing: {e}", exc_info=True)
                drafts = []
            if drafts:
                used_fallback = strategy.fallback
                logger.info(f"Parsed {len(drafts)} scenes using {strategy.name} strategy")
                break
            logger.warning(f"{strategy.name.capitalize()} parsing found no scenes, trying next strategy")
        else:
            used_fallback = True

        return self._assemble(drafts, character, used_fallback)

    def _assemble(self, drafts: List[SceneDraft], character: CharacterProfile, used_fallback: bool) -> Story:
        """Number the drafts, then trim or pad to exactly four scenes."""
        if len(drafts) > SCENE_COUNT:
            logger.warning(f"Generated {len(drafts)} scenes, trimming to exactly {SCENE_COUNT}")
            drafts = drafts[:SCENE_COUNT]
        elif len(drafts) < SCENE_COUNT:
            logger.warning(f"Only generated {len(drafts)} scenes, padding to exactly {SCENE_COUNT}")
            filler = f"{character.name} continues their adventure with determination and courage."
            drafts = list(drafts) + [
                SceneDraft(f"Scene {number}", filler)
                for number in range(len(drafts) + 1, SCENE_COUNT + 1)
            ]

        scenes = [
            build_scene(number, draft.title, draft.content, character)
            for number, draft in enumerate(drafts, start=1)
        ]
        return Story(
            title=story_title(character),
            scenes=scenes,
            total_scenes=SCENE_COUNT,
            character=character,
            fallback_parsed=True if used_fallback else None,
        )


def parse_story_into_scenes(
    raw_text: Optional[str],
    character: CharacterProfile,
    timeout: Optional[float] = PARSE_TIMEOUT_SECONDS
) -> Story:
    """Parse raw model text with a one-off SceneParser."""
    return SceneParser(timeout=timeout).parse(raw_text, character)
