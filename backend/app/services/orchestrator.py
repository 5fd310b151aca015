import random
import time
import uuid
from typing import Optional
from app.core.config import settings
from app.core.logging import get_logger
from app.db.crud import get_feedback
from app.models.schemas import AgentScore, SwarmAnalyzeResponse
from app.services.ranking import record_analysis
from app.services.swarm import (
    FeedbackNotFound, MissingFeedbackId, RandomSource, build_text, run_agents
)

logger = get_logger(__name__)


class PipelineTimings:
    """Track timing metrics for pipeline stages."""

    def __init__(self):
        self.start_time = time.time()
        self.lookup_ms: float = 0
        self.scoring_ms: float = 0
        self.persist_ms: float = 0
        self.total_ms: float = 0

    def log_summary(self, request_id: str):
        self.total_ms = (time.time() - self.start_time) * 1000
        logger.info(
            f"[{request_id}] Swarm analysis completed - "
            f"lookup: {self.lookup_ms:.1f}ms, "
            f"scoring: {self.scoring_ms:.1f}ms, "
            f"persist: {self.persist_ms:.1f}ms, "
            f"total: {self.total_ms:.1f}ms"
        )


def get_random_source() -> RandomSource:
    """Random source for agent jitter, seeded when configured."""
    return random.Random(settings.swarm_random_seed)


def analyze_feedback(
    feedback_id: Optional[int],
    rng: Optional[RandomSource] = None
) -> SwarmAnalyzeResponse:
    """
    Run a full swarm analysis for one feedback item.

    Stages:
    1. Resolve the feedback item (fails before any scoring work)
    2. Score with all five agents
    3. Persist scores and rank the item if it is new
    4. Return response
    """
    if not feedback_id:
        raise MissingFeedbackId()

    rng = rng or get_random_source()
    request_id = uuid.uuid4().hex[:8]
    timings = PipelineTimings()

    logger.info(f"[{request_id}] Starting swarm analysis for feedback {feedback_id}")

    # Stage 1: Resolve feedback
    t0 = time.time()
    item = get_feedback(feedback_id)
    timings.lookup_ms = (time.time() - t0) * 1000

    if item is None:
        logger.info(f"[{request_id}] Feedback {feedback_id} not found")
        raise FeedbackNotFound(feedback_id)

    # Stage 2: Score
    t0 = time.time()
    results = run_agents(build_text(item['title'], item['description']), rng)
    timings.scoring_ms = (time.time() - t0) * 1000

    # Stage 3: Persist and rank
    t0 = time.time()
    outcome = record_analysis(feedback_id, results)
    timings.persist_ms = (time.time() - t0) * 1000

    timings.log_summary(request_id)

    # Stage 4: Build response
    return SwarmAnalyzeResponse(
        feedback_id=feedback_id,
        scores={
            agent: AgentScore(score=s['score'], reasoning=s['reasoning'])
            for agent, s in outcome.scores.items()
        },
        consensus_score=outcome.consensus_score,
        rank=outcome.rank,
        newly_ranked=outcome.created,
    )
