#!/usr/bin/env python3
"""
CLI tool for local story generation.

Provides commands for generating a four-scene story, probing model
availability and re-parsing saved model output without a web front-end.
"""

import json
import logging
import os
import sys
from typing import Optional, Tuple

import click
from dotenv import load_dotenv

from src.storyforge.config import GeneratorConfig
from src.storyforge.models import CharacterProfile, GenerationOptions, GenerationResult, Story
from src.storyforge.services import StoryGenerationService
from src.storyforge.tones import get_available_lengths, get_available_tones
from src.storyforge.utils.errors import APIError
from src.storyforge.utils.scene_parser import SceneParser

# Load environment variables
load_dotenv()

logging.basicConfig(
    level=logging.DEBUG if os.getenv('STORY_DEBUG') else logging.WARNING,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)
logger = logging.getLogger(__name__)


def get_service() -> StoryGenerationService:
    """Build a story generation service from environment configuration."""
    return StoryGenerationService(config=GeneratorConfig.from_env())


def build_character(name: str, traits: Tuple[str, ...], description: Optional[str]) -> CharacterProfile:
    return CharacterProfile(name=name, traits=list(traits) or None, description=description)


def echo_story(story: Story) -> None:
    """Print a story as readable text."""
    click.echo(f"\n{story.title}")
    click.echo("=" * len(story.title))
    if story.emergency_fallback:
        click.echo("(emergency fallback: model output could not be parsed)")
    elif story.fallback_parsed:
        click.echo("(parsed with fallback strategy)")
    for scene in story.scenes:
        click.echo(f"\nScene {scene.number}: {scene.title}")
        click.echo(scene.content)


@click.group()
def cli():
    """CLI tool for local story generation."""
    pass


@cli.command()
@click.argument('prompt')
@click.option('--genre', default='adventure', help='Story genre (default: adventure)')
@click.option('--name', 'character_name', required=True, help='Protagonist name')
@click.option('--trait', 'traits', multiple=True, help='Character trait (repeatable)')
@click.option('--description', help='Character description')
@click.option('--tone', default='lighthearted', help=f"Tone: {', '.join(get_available_tones())}")
@click.option('--length', default='medium', help=f"Length: {', '.join(get_available_lengths())}")
@click.option('--voice/--no-voice', default=True, help='Ask for voice-over friendly narration')
@click.option('--video/--no-video', default=True, help='Ask for visually compelling scenes')
@click.option('--format', 'output_format', type=click.Choice(['text', 'json']),
              default='text', help='Output format (default: text)')
def generate(
    prompt: str,
    genre: str,
    character_name: str,
    traits: Tuple[str, ...],
    description: Optional[str],
    tone: str,
    length: str,
    voice: bool,
    video: bool,
    output_format: str
) -> None:
    """
    Generate a four-scene story from PROMPT.

    Raises:
        SystemExit: Exits with code 1 if generation fails after all retries.
    """
    character = build_character(character_name, traits, description)
    options = GenerationOptions(tone=tone, length=length, include_voice=voice, include_video=video)

    try:
        result: GenerationResult = get_service().generate_story(prompt, genre, character, options)
    except (APIError, ValueError) as e:
        click.echo(f"Error generating story: {e}", err=True)
        sys.exit(1)

    if output_format == 'json':
        click.echo(json.dumps(result.to_dict(), indent=2))
        return

    echo_story(result.story)
    metadata = result.metadata
    click.echo(
        f"\nGenerated by {metadata.generated_by} on attempt {metadata.attempt} "
        f"(~{metadata.estimated_read_time} min read)"
    )


@cli.command()
def check() -> None:
    """
    Check whether the configured model is reachable.

    Raises:
        SystemExit: Exits with code 1 if the model is unavailable.
    """
    try:
        service = get_service()
    except (APIError, ValueError) as e:
        click.echo(f"✗ Model unavailable: {e}", err=True)
        sys.exit(1)

    report = service.check_availability()
    if report.available:
        click.echo(f"✓ {report.message} ({report.model})")
        return

    hint = " (transient, try again later)" if report.retryable else ""
    click.echo(f"✗ {report.model} unavailable: {report.error}{hint}", err=True)
    sys.exit(1)


@cli.command()
@click.argument('raw_file', type=click.File('r'))
@click.option('--name', 'character_name', required=True, help='Protagonist name')
@click.option('--trait', 'traits', multiple=True, help='Character trait (repeatable)')
@click.option('--format', 'output_format', type=click.Choice(['text', 'json']),
              default='text', help='Output format (default: text)')
def parse(raw_file, character_name: str, traits: Tuple[str, ...], output_format: str) -> None:
    """
    Parse saved model output from RAW_FILE into scenes.

    Useful for replaying a response that produced a degraded story.
    """
    story = SceneParser().parse(raw_file.read(), build_character(character_name, traits, None))
    if output_format == 'json':
        click.echo(json.dumps(story.to_dict(), indent=2))
    else:
        echo_story(story)


if __name__ == '__main__':
    cli()
