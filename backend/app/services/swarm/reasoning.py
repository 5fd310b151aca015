"""Canned explanations for agent scores, selected by severity band."""
from __future__ import annotations

from enum import Enum
from typing import Dict


class Band(str, Enum):
    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"


HIGH_THRESHOLD = 70.0
MEDIUM_THRESHOLD = 40.0

REASONING_TEMPLATES: Dict[str, Dict[Band, str]] = {
    "urgency": {
        Band.HIGH: "This feedback indicates a time-sensitive issue that requires immediate attention. Keywords suggest blocking or critical nature.",
        Band.MEDIUM: "Moderate urgency detected. This issue should be addressed in the near term but is not immediately blocking.",
        Band.LOW: "This feedback does not indicate urgent time constraints. Can be scheduled based on other priority factors.",
    },
    "impact": {
        Band.HIGH: "Analysis suggests this affects a large user base or critical functionality. High business impact expected.",
        Band.MEDIUM: "This issue appears to affect a moderate subset of users or non-critical features.",
        Band.LOW: "Limited impact detected. Issue affects small user segment or edge cases.",
    },
    "sentiment": {
        Band.HIGH: "Strong negative sentiment detected. Customer frustration or dissatisfaction is evident in the feedback.",
        Band.MEDIUM: "Moderate concern expressed by customer. Some dissatisfaction but not severe.",
        Band.LOW: "Neutral or positive tone. Customer is providing constructive feedback without strong negative emotion.",
    },
    "novelty": {
        Band.HIGH: "This represents a unique or innovative request that could provide competitive differentiation.",
        Band.MEDIUM: "Some novel aspects but similar to existing features or common requests.",
        Band.LOW: "Standard request that follows common patterns. Low innovation potential.",
    },
    "effort": {
        Band.HIGH: "Implementation appears complex and would require significant development resources and time.",
        Band.MEDIUM: "Moderate effort required. Standard development complexity with some technical challenges.",
        Band.LOW: "Relatively simple implementation. Can likely be addressed quickly with existing infrastructure.",
    },
}


def band_from_score(score: float) -> Band:
    """Map score to severity band."""
    if score >= HIGH_THRESHOLD:
        return Band.HIGH
    if score >= MEDIUM_THRESHOLD:
        return Band.MEDIUM
    return Band.LOW


def generate_reasoning(agent_type: str, score: float) -> str:
    agent = getattr(agent_type, "value", agent_type)
    return REASONING_TEMPLATES[agent][band_from_score(score)]
