"""Consensus aggregation across the five swarm agents."""
from __future__ import annotations

from typing import Mapping

from .agents import AGENT_TYPES
from .errors import IncompleteAgentScores, InvalidAgentType


def validate_agent_scores(scores: Mapping[str, float]) -> None:
    """Reject unknown agent names and partial agent sets."""
    keys = [getattr(k, "value", k) for k in scores]
    for key in keys:
        if key not in AGENT_TYPES:
            raise InvalidAgentType(key, AGENT_TYPES)

    missing = [agent for agent in AGENT_TYPES if agent not in keys]
    if missing:
        raise IncompleteAgentScores(missing)


def consensus_score(scores: Mapping[str, float]) -> float:
    """Mean of all five agent scores, rounded to one decimal."""
    validate_agent_scores(scores)
    return round(sum(scores.values()) / len(AGENT_TYPES), 1)
