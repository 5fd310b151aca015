# Ranking module - Global priority list of analysed feedback
from .priority_store import (
    RankingOutcome,
    record_analysis,
    top_priorities,
    clamp_limit,
)

__all__ = [
    "RankingOutcome",
    "record_analysis",
    "top_priorities",
    "clamp_limit",
]
