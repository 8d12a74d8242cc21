"""
Tone and length configurations for story prompts.

Each tone supplies a line of guidance for the model and, for a few tones,
its own phrasing of the worked example story embedded in the prompt.
Lengths supply pacing guidance only.

Lookups never fail: unknown tones and lengths fall back to generic guidance
and the default example phrasing.
"""

from typing import Dict

TONE_GUIDANCE: Dict[str, str] = {
    "lighthearted": "Keep it fun and upbeat",
    "serious": "Make it thoughtful and meaningful",
    "humorous": "Add comedy and funny moments",
    "dramatic": "Include emotional depth and tension",
    "mysterious": "Add suspense and intrigue",
    "romantic": "Include heartwarming moments",
}

DEFAULT_TONE_GUIDANCE = "Engaging and appropriate"

LENGTH_GUIDANCE: Dict[str, str] = {
    "short": "Simple and focused story progression",
    "medium": "Well-developed story with clear progression",
    "long": "Rich story with detailed character development",
}

DEFAULT_LENGTH_GUIDANCE = "Well-paced story"

# Beats of the worked example story. "{name}" is the protagonist.
_DEFAULT_CLOSERS = {
    "revelation_close": "They knew this discovery would change their life forever.",
    "challenge_close": "This was only the beginning of their adventure.",
    "resolution_close": "This was just the beginning of their extraordinary journey.",
}

EXAMPLE_PHRASINGS: Dict[str, Dict[str, str]] = {
    "humorous": {
        "discovery": "With typical clumsiness, they knocked over three books while investigating.",
        "revelation": "{name} couldn't believe their eyes - and immediately tripped over their own feet in surprise.",
        "revelation_close": "They poked it experimentally, hoping it wouldn't explode.",
        "challenge": "Just as {name} was getting comfortable with their find, everything went hilariously wrong.",
        "challenge_close": "They wondered if they should have just stayed in bed today.",
        "resolution": "Through a combination of luck and questionable decision-making, {name} found their way forward.",
        "resolution_close": "They just hoped the next adventure would involve less falling down.",
    },
    "dramatic": {
        "discovery": "Their heart raced as they approached the mysterious light.",
        "revelation": "{name}'s eyes widened in disbelief at what lay before them.",
        "challenge": "Suddenly, {name} realized the true weight of their discovery.",
        "resolution": "With courage they didn't know they possessed, {name} made their choice.",
        **_DEFAULT_CLOSERS,
    },
    "mysterious": {
        "discovery": "An eerie silence filled the air as they cautiously moved closer.",
        "revelation": "{name} carefully examined the discovery, sensing its importance.",
        "challenge": "The artifact began to reveal its secrets, but at what cost?",
        "resolution": "{name} embraced the mystery and stepped into the unknown.",
        **_DEFAULT_CLOSERS,
    },
    "default": {
        "discovery": "Curiosity sparked in their eyes as they investigated.",
        "revelation": "{name} gasped as they realized what they had found.",
        "challenge": "{name} faced their first real test.",
        "resolution": "{name} discovered the strength within themselves.",
        **_DEFAULT_CLOSERS,
    },
}


def get_tone_guidance(tone: str) -> str:
    """
    Get the guidance line for a tone.

    Args:
        tone: Tone name (case-insensitive)

    Returns:
        Guidance text, or generic guidance for unknown tones
    """
    return TONE_GUIDANCE.get((tone or "").lower(), DEFAULT_TONE_GUIDANCE)


def get_length_guidance(length: str) -> str:
    """Get the guidance line for a story length, generic if unknown."""
    return LENGTH_GUIDANCE.get((length or "").lower(), DEFAULT_LENGTH_GUIDANCE)


def get_example_phrasing(tone: str, character_name: str) -> Dict[str, str]:
    """
    Get the worked-example beats for a tone with the protagonist filled in.

    Args:
        tone: Tone name (case-insensitive)
        character_name: Name substituted for "{name}"

    Returns:
        Dict of beat name to sentence
    """
    phrasing = EXAMPLE_PHRASINGS.get((tone or "").lower(), EXAMPLE_PHRASINGS["default"])
    return {beat: text.format(name=character_name) for beat, text in phrasing.items()}


def get_available_tones():
    """Get list of tones with dedicated guidance."""
    return list(TONE_GUIDANCE.keys())


def get_available_lengths():
    """Get list of lengths with dedicated guidance."""
    return list(LENGTH_GUIDANCE.keys())
