"""
Priority ranking store.

Keeps a single global, rank-ordered list of analysed feedback items.
A feedback item gets its rank the first time it is analysed and keeps it;
ranks are allocated as max(rank) + 1 inside one write transaction so
concurrent first analyses never share a rank.
"""
from __future__ import annotations

import sqlite3
from dataclasses import dataclass, field
from typing import Any, Dict, List, Mapping, Optional

from app.core.config import settings
from app.core.logging import get_logger
from app.db import crud
from app.db.database import immediate_transaction
from app.services.swarm import (
    AgentResult,
    AgentType,
    FeedbackNotFound,
    consensus_score,
    validate_agent_scores,
)

logger = get_logger(__name__)


@dataclass(frozen=True)
class RankingOutcome:
    """Result of recording one swarm analysis."""
    entry: Dict[str, Any]
    created: bool
    consensus_score: float
    scores: Dict[str, Dict[str, Any]] = field(default_factory=dict)

    @property
    def rank(self) -> int:
        return self.entry["rank"]


def record_analysis(
    feedback_id: int,
    agent_results: Mapping[str, AgentResult],
) -> RankingOutcome:
    """
    Persist one analysis run and rank the feedback item if it is new.

    Appends one score record per agent, computes the consensus score,
    then inserts a ranking entry unless one already exists for the item.
    The consensus score of this run is always returned, even when the
    stored entry keeps an older score.
    """
    validate_agent_scores(agent_results)

    if crud.get_feedback(feedback_id) is None:
        raise FeedbackNotFound(feedback_id)

    by_name = {getattr(k, "value", k): v for k, v in agent_results.items()}

    scores: Dict[str, Dict[str, Any]] = {}
    for agent_type in AgentType:
        result = by_name[agent_type.value]
        crud.save_agent_score(
            feedback_id=feedback_id,
            agent_type=agent_type.value,
            score=result.score,
            reasoning=result.reasoning,
        )
        scores[agent_type.value] = {"score": result.score, "reasoning": result.reasoning}

    consensus = consensus_score({agent: s["score"] for agent, s in scores.items()})

    with immediate_transaction() as conn:
        entry = crud.find_ranking_entry(conn, feedback_id)
        if entry is None:
            entry = crud.insert_ranking_entry(conn, feedback_id, consensus)
            created = True
            logger.info(
                f"Ranked feedback {feedback_id} at #{entry['rank']} "
                f"(consensus {consensus})")
        else:
            entry = _resolve_existing_entry(conn, entry, consensus)
            created = False

    return RankingOutcome(
        entry=entry,
        created=created,
        consensus_score=consensus,
        scores=scores,
    )


def _resolve_existing_entry(
    conn: sqlite3.Connection,
    entry: Dict[str, Any],
    consensus: float,
) -> Dict[str, Any]:
    """
    Decide what re-analysis does to an already ranked item.

    By default the stored entry is left untouched, so the stored score can
    drift from the latest run. With refresh_ranking_on_reanalysis the score
    is overwritten; the rank is never reassigned either way.
    """
    if settings.refresh_ranking_on_reanalysis:
        logger.info(
            f"Refreshing consensus score for feedback {entry['feedback_id']}: "
            f"{entry['consensus_score']} -> {consensus}")
        return crud.update_ranking_score(conn, entry["feedback_id"], consensus)

    logger.debug(
        f"Feedback {entry['feedback_id']} already ranked #{entry['rank']}, "
        f"keeping stored score {entry['consensus_score']}")
    return entry


def clamp_limit(limit: Optional[int]) -> int:
    """Bound a requested list size to [1, top_priorities_max]."""
    if limit is None:
        limit = settings.top_priorities_default
    return max(1, min(int(limit), settings.top_priorities_max))


def top_priorities(limit: Optional[int] = None) -> List[Dict[str, Any]]:
    """Ranking entries joined with their feedback, ascending by rank."""
    return crud.list_top_priorities(clamp_limit(limit))
