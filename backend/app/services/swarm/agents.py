"""
Heuristic agent scorers for swarm analysis.

Each agent turns keyword hit counts into a score:
    base + boost_weight * boost_hits - offset_weight * offset_hits + jitter
capped at 100. There is no lower cap, so sentiment and effort can go
negative when only offsetting keywords are present.
"""
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Dict, Optional, Protocol

from .features import extract_matches
from .reasoning import generate_reasoning

MAX_SCORE = 100.0


class AgentType(str, Enum):
    """The five swarm agents."""
    URGENCY = "urgency"
    IMPACT = "impact"
    SENTIMENT = "sentiment"
    NOVELTY = "novelty"
    EFFORT = "effort"


AGENT_TYPES = [agent.value for agent in AgentType]


class RandomSource(Protocol):
    """Anything with a random() -> float in [0, 1), e.g. random.Random."""

    def random(self) -> float: ...


@dataclass(frozen=True)
class AgentFormula:
    base: float
    boost_category: str
    boost_weight: float
    jitter: float
    offset_category: Optional[str] = None
    offset_weight: float = 0.0


AGENT_FORMULAS: Dict[AgentType, AgentFormula] = {
    AgentType.URGENCY: AgentFormula(base=40, boost_category="urgent", boost_weight=15, jitter=30),
    AgentType.IMPACT: AgentFormula(base=35, boost_category="breadth", boost_weight=20, jitter=35),
    AgentType.SENTIMENT: AgentFormula(
        base=30, boost_category="negative", boost_weight=25, jitter=30,
        offset_category="positive", offset_weight=10,
    ),
    AgentType.NOVELTY: AgentFormula(base=20, boost_category="novelty", boost_weight=15, jitter=50),
    # Effort: higher means more work
    AgentType.EFFORT: AgentFormula(
        base=50, boost_category="complex", boost_weight=20, jitter=30,
        offset_category="simple", offset_weight=15,
    ),
}


@dataclass(frozen=True)
class AgentResult:
    agent_type: AgentType
    score: float
    reasoning: str


def score_agent(
    agent_type: AgentType,
    matches: Dict[str, int],
    rng: RandomSource,
) -> float:
    """Compute one agent's raw (unrounded) score from keyword hits."""
    formula = AGENT_FORMULAS[AgentType(agent_type)]

    score = formula.base + formula.boost_weight * matches.get(formula.boost_category, 0)
    if formula.offset_category:
        score -= formula.offset_weight * matches.get(formula.offset_category, 0)
    score += rng.random() * formula.jitter

    return min(MAX_SCORE, score)


def run_agents(text: str, rng: RandomSource) -> Dict[AgentType, AgentResult]:
    """
    Run all five agents against a lower-cased feedback text.

    Scores are rounded to one decimal; reasoning is chosen from the
    unrounded score, so 69.96 reads as medium even though it is stored
    as 70.0. Agents run in AgentType order so a seeded rng gives
    reproducible results.
    """
    matches = extract_matches(text)
    results: Dict[AgentType, AgentResult] = {}

    for agent_type in AgentType:
        raw = score_agent(agent_type, matches, rng)
        results[agent_type] = AgentResult(
            agent_type=agent_type,
            score=round(raw, 1),
            reasoning=generate_reasoning(agent_type, raw),
        )

    return results
