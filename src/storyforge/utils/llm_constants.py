"""
Constants for LLM story generation.

This module centralizes all magic numbers and configuration values
used in story generation, scene parsing, and storyboard prompt building.
"""

# Scene Structure
# Every generated story is shaped into exactly this many scenes
SCENE_COUNT = 4

# Retry Policy
# Maximum number of model calls per generate_story() request
MAX_ATTEMPTS = 3

# Fixed delay between attempts (seconds)
RETRY_DELAY_SECONDS = 2.0

# Error message fragments (lower-case) that mark a model failure as transient
RETRYABLE_ERROR_MARKERS = (
    "overloaded",
    "service unavailable",
    "503",
    "temporarily unavailable",
    "rate limit",
    "quota exceeded",
    "timed out",
    "timeout",
)

# Timeouts (seconds)
# Deadline for a single story generation call
REQUEST_TIMEOUT_SECONDS = 45.0

# Deadline for the availability probe
AVAILABILITY_TIMEOUT_SECONDS = 30.0

# Cooperative deadline for scene parsing
PARSE_TIMEOUT_SECONDS = 10.0

# Prompt sent by the availability probe
AVAILABILITY_PROBE_PROMPT = "Test"

# Scene Parsing
# Model output shorter than this is not worth parsing
MIN_PARSEABLE_LENGTH = 50

# Characters of raw text kept when parsing blows up
EMERGENCY_EXCERPT_CHARS = 500

# Characters of raw text folded into the emergency storyboard prompt
EMERGENCY_STORYBOARD_EXCERPT_CHARS = 100

EMERGENCY_SCENE_TITLE = "The Adventure Begins"

# Storyboard Prompts
# Characters of scene content quoted in a storyboard prompt
STORYBOARD_CONTENT_EXCERPT_CHARS = 150

# Characters of scene content quoted in a storyboard image request
STORYBOARD_REQUEST_EXCERPT_CHARS = 300

# Number of character traits named in a storyboard prompt
STORYBOARD_MAX_TRAITS = 2

DEFAULT_STORYBOARD_STYLE = "cartoon"

# Metadata
# Characters of raw text per minute of estimated reading time
READ_TIME_CHARS_PER_MINUTE = 1000
