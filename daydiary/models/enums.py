"""
Enums and constants for the application.
"""
from enum import Enum


class Mood(str, Enum):
    """Moods an entry can be tagged with."""
    HAPPY = "😊"
    CALM = "😌"
    SAD = "😔"
    ANGRY = "😤"
    STRONG = "💪"


MOOD_GRADIENTS = {
    Mood.HAPPY: "linear-gradient(135deg, #ffecd2, #fcb69f)",
    Mood.CALM: "linear-gradient(135deg, #a1c4fd, #c2e9fb)",
    Mood.SAD: "linear-gradient(135deg, #d4fc79, #96e6a1)",
    Mood.ANGRY: "linear-gradient(135deg, #f5576c, #f093fb)",
    Mood.STRONG: "linear-gradient(135deg, #43e97b, #38f9d7)",
}

DEFAULT_MOOD_GRADIENT = "linear-gradient(135deg, #dbe6f6, #c5796d)"


def gradient_for_mood(mood) -> str:
    """Decorative background for a mood; unknown or missing moods get the default."""
    try:
        return MOOD_GRADIENTS[Mood(mood)]
    except ValueError:
        return DEFAULT_MOOD_GRADIENT


class NoteColor(str, Enum):
    """Sticky note colors."""
    YELLOW = "yellow"
    PINK = "pink"
    BLUE = "blue"
    GREEN = "green"
    PURPLE = "purple"
