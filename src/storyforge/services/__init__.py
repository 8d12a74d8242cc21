"""
Service layer for the story generation core.

Services are independent of any HTTP layer and can be used by:
- Web route handlers in a surrounding application
- Background jobs
- CLI commands
"""

from .story_generation_service import StoryGenerationService

__all__ = [
    'StoryGenerationService',
]
