from collections import defaultdict
from fastapi import APIRouter, Depends, HTTPException, Query
from typing import Dict, List, Literal, Optional
from app.models.schemas import (
    FeedbackCreate, FeedbackItem, SwarmAnalyzeRequest, SwarmAnalyzeResponse,
    AgentScoreRecord, RankingEntry, TopPriority, HealthResponse, ErrorResponse
)
from app.services.orchestrator import analyze_feedback, get_random_source
from app.services.ranking import top_priorities
from app.services.swarm import (
    AGENT_TYPES, FeedbackNotFound, InvalidAgentType, RandomSource, SwarmError
)
from app.db.crud import (
    create_feedback, get_feedback, list_feedback, list_agent_scores, list_ranking_entries
)
from app.core.logging import get_logger

logger = get_logger(__name__)

router = APIRouter(prefix="/api", tags=["api"])

MAX_PAGE_SIZE = 200


@router.post(
    "/feedback",
    response_model=FeedbackItem,
    status_code=201,
    responses={
        500: {"model": ErrorResponse, "description": "Database error"}
    }
)
async def submit_feedback(body: FeedbackCreate):
    """Create a feedback item that can later be analysed."""
    try:
        item = create_feedback(
            title=body.title.strip(),
            description=body.description.strip(),
            source=body.source,
            customer_email=body.customer_email.lower().strip() if body.customer_email else None,
            customer_name=body.customer_name.strip() if body.customer_name else None
        )
        return FeedbackItem(**item)
    except Exception as e:
        logger.error(f"Failed to create feedback: {e}", exc_info=True)
        raise HTTPException(
            status_code=500, detail=f"Failed to create feedback: {str(e)}")


@router.get(
    "/feedback",
    response_model=List[FeedbackItem],
    responses={
        500: {"model": ErrorResponse, "description": "Database error"}
    }
)
async def get_feedback_list(
    limit: int = Query(50, ge=1, le=MAX_PAGE_SIZE),
    offset: int = Query(0, ge=0)
):
    """List feedback items, newest first."""
    try:
        return [FeedbackItem(**item) for item in list_feedback(limit=limit, offset=offset)]
    except Exception as e:
        logger.error(f"Failed to list feedback: {e}", exc_info=True)
        raise HTTPException(
            status_code=500, detail=f"Failed to list feedback: {str(e)}")


@router.get(
    "/feedback/{feedback_id}",
    response_model=FeedbackItem,
    responses={
        404: {"model": ErrorResponse, "description": "Feedback not found"}
    }
)
async def get_feedback_detail(feedback_id: int):
    """Get a single feedback item."""
    item = get_feedback(feedback_id)
    if not item:
        raise FeedbackNotFound(feedback_id)
    return FeedbackItem(**item)


@router.post(
    "/swarm-analyze",
    response_model=SwarmAnalyzeResponse,
    responses={
        400: {"model": ErrorResponse, "description": "Missing feedback id"},
        404: {"model": ErrorResponse, "description": "Feedback not found"},
        500: {"model": ErrorResponse, "description": "Processing error"}
    }
)
async def swarm_analyze(
    body: SwarmAnalyzeRequest,
    rng: RandomSource = Depends(get_random_source)
):
    """
    Run all five agents against a feedback item.

    Stores the agent scores, returns the consensus score and places the
    item on the priority list the first time it is analysed.
    """
    try:
        return analyze_feedback(body.feedback_id, rng)
    except SwarmError:
        raise
    except Exception as e:
        logger.error(f"Swarm analysis failed: {e}", exc_info=True)
        raise HTTPException(
            status_code=500, detail=f"Swarm analysis failed: {str(e)}")


@router.get(
    "/swarm-scores",
    response_model=List[AgentScoreRecord],
    responses={
        400: {"model": ErrorResponse, "description": "Invalid agent type"},
        500: {"model": ErrorResponse, "description": "Database error"}
    }
)
async def get_swarm_scores(
    feedback_id: Optional[int] = None,
    agent_type: Optional[str] = None,
    min_score: Optional[float] = Query(None, ge=0, le=100),
    max_score: Optional[float] = Query(None, ge=0, le=100),
    sort: Literal["created_at", "score"] = "created_at",
    order: Literal["asc", "desc"] = "desc",
    limit: int = Query(50, ge=1, le=MAX_PAGE_SIZE),
    offset: int = Query(0, ge=0)
):
    """
    List agent score history, newest first by default.

    Optionally filtered by feedback item, agent type and score range.
    """
    if agent_type is not None and agent_type not in AGENT_TYPES:
        raise InvalidAgentType(agent_type, AGENT_TYPES)

    try:
        records = list_agent_scores(
            feedback_id=feedback_id, agent_type=agent_type,
            min_score=min_score, max_score=max_score,
            sort=sort, order=order, limit=limit, offset=offset
        )
        return [AgentScoreRecord(**r) for r in records]
    except Exception as e:
        logger.error(f"Failed to list swarm scores: {e}", exc_info=True)
        raise HTTPException(
            status_code=500, detail=f"Failed to list swarm scores: {str(e)}")


@router.get(
    "/feedback/{feedback_id}/swarm-scores",
    response_model=Dict[str, List[AgentScoreRecord]],
    responses={
        404: {"model": ErrorResponse, "description": "Feedback not found"}
    }
)
async def get_swarm_scores_grouped(feedback_id: int):
    """Full score history for one feedback item, grouped by agent type."""
    if not get_feedback(feedback_id):
        raise FeedbackNotFound(feedback_id)

    grouped: Dict[str, List[AgentScoreRecord]] = defaultdict(list)
    # The store caps a single page, so walk the history in pages
    offset = 0
    while True:
        page = list_agent_scores(
            feedback_id=feedback_id, limit=MAX_PAGE_SIZE, offset=offset)
        for r in page:
            grouped[r['agent_type']].append(AgentScoreRecord(**r))
        if len(page) < MAX_PAGE_SIZE:
            break
        offset += MAX_PAGE_SIZE

    return dict(grouped)


@router.get(
    "/top-priorities",
    response_model=List[TopPriority],
    responses={
        500: {"model": ErrorResponse, "description": "Database error"}
    }
)
async def get_top_priorities(top: Optional[int] = None):
    """
    Get the priority list ordered by rank.

    `top` is clamped to the configured maximum (100 by default).
    """
    try:
        return [TopPriority(**row) for row in top_priorities(top)]
    except Exception as e:
        logger.error(f"Failed to list top priorities: {e}", exc_info=True)
        raise HTTPException(
            status_code=500, detail=f"Failed to list top priorities: {str(e)}")


@router.get(
    "/rankings",
    response_model=List[RankingEntry],
    responses={
        500: {"model": ErrorResponse, "description": "Database error"}
    }
)
async def get_rankings(
    min_rank: Optional[int] = Query(None, ge=1),
    max_rank: Optional[int] = Query(None, ge=1),
    min_score: Optional[float] = Query(None, ge=0, le=100),
    max_score: Optional[float] = Query(None, ge=0, le=100),
    sort: Literal["rank", "consensus_score", "created_at"] = "rank",
    order: Literal["asc", "desc"] = "asc",
    limit: int = Query(50, ge=1, le=MAX_PAGE_SIZE),
    offset: int = Query(0, ge=0)
):
    """
    List raw ranking entries with rank and score range filters.

    Unlike /top-priorities this does not join feedback content.
    """
    try:
        rows = list_ranking_entries(
            min_rank=min_rank, max_rank=max_rank,
            min_score=min_score, max_score=max_score,
            sort=sort, order=order, limit=limit, offset=offset
        )
        return [RankingEntry(**row) for row in rows]
    except Exception as e:
        logger.error(f"Failed to list rankings: {e}", exc_info=True)
        raise HTTPException(
            status_code=500, detail=f"Failed to list rankings: {str(e)}")


@router.get("/health", response_model=HealthResponse)
async def health_check():
    """Health check endpoint."""
    return HealthResponse()
