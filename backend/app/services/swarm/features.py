# features.py - Counts category keyword hits in a feedback text blob.

from __future__ import annotations
from typing import Dict, Tuple


# Fixed keyword lists per category. Multi-word entries are matched as phrases.
KEYWORDS: Dict[str, Tuple[str, ...]] = {
    "urgent": ("critical", "urgent", "immediate", "asap", "now", "crash", "broken", "down", "blocking"),
    "breadth": ("all users", "everyone", "entire", "widespread", "major", "critical", "important"),
    "negative": ("frustrated", "angry", "hate", "terrible", "awful", "horrible", "unusable"),
    "positive": ("love", "great", "excellent", "awesome", "amazing"),
    "novelty": ("new", "innovative", "unique", "different", "novel", "creative", "never"),
    "simple": ("simple", "easy", "quick", "small", "minor"),
    "complex": ("complex", "difficult", "major", "redesign", "rebuild"),
}


def build_text(title: str, description: str) -> str:
    """Concatenate and lower-case the fields the agents read."""
    return f"{title or ''} {description or ''}".lower()


def count_hits(text: str, keywords: Tuple[str, ...]) -> int:
    """
    Number of distinct keywords that occur anywhere in text.
    Substring match, so 'crashing' counts for 'crash'.
    """
    return sum(1 for kw in keywords if kw in text)


def extract_matches(text: str) -> Dict[str, int]:
    """Return hit counts for every keyword category."""
    lowered = text.lower()
    return {category: count_hits(lowered, kws) for category, kws in KEYWORDS.items()}
