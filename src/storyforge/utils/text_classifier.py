"""
Keyword classification of scene text.

Three independent passes tag a scene with a setting, an action and a mood.
Each pass walks an ordered rule table and the first rule with a matching
keyword wins; if none match the pass falls back to its default label.
Matching is plain substring search on the lower-cased text.
"""

from typing import NamedTuple, Sequence, Tuple


class ClassificationRule(NamedTuple):
    """A keyword set and the label it assigns."""
    keywords: Tuple[str, ...]
    label: str

    def matches(self, text: str) -> bool:
        return any(keyword in text for keyword in self.keywords)


class SceneTags(NamedTuple):
    """Classification result for one scene."""
    setting: str
    action: str
    mood: str


SETTING_RULES: Tuple[ClassificationRule, ...] = (
    ClassificationRule(("library", "book"), "ancient library with books and shelves"),
    ClassificationRule(("forest", "tree"), "mystical forest"),
    ClassificationRule(("cave", "underground"), "mysterious cave"),
    ClassificationRule(("castle", "tower"), "medieval castle"),
    ClassificationRule(("city", "street"), "bustling city street"),
    ClassificationRule(("mountain", "peak"), "mountain landscape"),
    ClassificationRule(("ocean", "sea"), "coastal scene with ocean"),
)
DEFAULT_SETTING = "indoor scene"

ACTION_RULES: Tuple[ClassificationRule, ...] = (
    ClassificationRule(("running", "chase"), "running or chasing"),
    ClassificationRule(("fighting", "battle"), "in combat stance"),
    ClassificationRule(("searching", "looking"), "searching and investigating"),
    ClassificationRule(("climbing", "ascending"), "climbing"),
    ClassificationRule(("flying", "soaring"), "flying through the air"),
    ClassificationRule(("discovering", "found"), "making a discovery"),
    ClassificationRule(("hiding", "sneaking"), "hiding or sneaking"),
)
DEFAULT_ACTION = "standing"

MOOD_RULES: Tuple[ClassificationRule, ...] = (
    ClassificationRule(("scared", "afraid", "terrified"), "scared or worried"),
    ClassificationRule(("happy", "excited", "joy"), "happy and excited"),
    ClassificationRule(("angry", "furious", "mad"), "angry or determined"),
    ClassificationRule(("surprised", "shocked", "amazed"), "surprised and amazed"),
    ClassificationRule(("sad", "crying", "upset"), "sad or emotional"),
    ClassificationRule(("curious", "wonder", "investigate"), "curious and focused"),
)
DEFAULT_MOOD = "neutral"


def classify(text: str, rules: Sequence[ClassificationRule], default: str) -> str:
    """
    Return the label of the first rule matching ``text``.

    Args:
        text: Text to classify (lower-cased here)
        rules: Ordered rule table
        default: Label used when no rule matches

    Returns:
        Matching label or ``default``
    """
    lowered = (text or "").lower()
    for rule in rules:
        if rule.matches(lowered):
            return rule.label
    return default


def classify_scene(content: str) -> SceneTags:
    """Tag scene content with setting, action and mood."""
    return SceneTags(
        setting=classify(content, SETTING_RULES, DEFAULT_SETTING),
        action=classify(content, ACTION_RULES, DEFAULT_ACTION),
        mood=classify(content, MOOD_RULES, DEFAULT_MOOD),
    )
