# Swarm module - Heuristic agents and consensus scoring
from .agents import (
    AgentType,
    AgentResult,
    AgentFormula,
    RandomSource,
    score_agent,
    run_agents,
    AGENT_FORMULAS,
    AGENT_TYPES,
)
from .consensus import consensus_score, validate_agent_scores
from .errors import (
    SwarmError,
    MissingFeedbackId,
    FeedbackNotFound,
    InvalidAgentType,
    IncompleteAgentScores,
)
from .features import KEYWORDS, build_text, extract_matches
from .reasoning import Band, band_from_score, generate_reasoning

__all__ = [
    "AgentType",
    "AgentResult",
    "AgentFormula",
    "RandomSource",
    "score_agent",
    "run_agents",
    "AGENT_FORMULAS",
    "AGENT_TYPES",
    "consensus_score",
    "validate_agent_scores",
    "SwarmError",
    "MissingFeedbackId",
    "FeedbackNotFound",
    "InvalidAgentType",
    "IncompleteAgentScores",
    "KEYWORDS",
    "build_text",
    "extract_matches",
    "Band",
    "band_from_score",
    "generate_reasoning",
]
