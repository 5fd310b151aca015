from pydantic import BaseModel, Field
from typing import List, Optional, Dict, Literal
from datetime import datetime, timezone


# ============================================================================
# Feedback Models
# ============================================================================

FeedbackSource = Literal["form", "csv", "api"]


class FeedbackCreate(BaseModel):
    """Request body for POST /api/feedback."""
    title: str = Field(min_length=1, max_length=500)
    description: str = Field(min_length=1, max_length=5000)
    source: FeedbackSource
    customer_email: Optional[str] = Field(
        default=None, pattern=r"^[^\s@]+@[^\s@]+\.[^\s@]+$")
    customer_name: Optional[str] = Field(default=None, max_length=200)


class FeedbackItem(BaseModel):
    """A stored feedback item."""
    id: int
    title: str
    description: str
    source: str
    customer_email: Optional[str] = None
    customer_name: Optional[str] = None
    created_at: str
    updated_at: str


# ============================================================================
# Swarm Analysis Models
# ============================================================================

class SwarmAnalyzeRequest(BaseModel):
    """Request body for POST /api/swarm-analyze."""
    feedback_id: Optional[int] = None


class AgentScore(BaseModel):
    """One agent's verdict in an analysis run."""
    # No lower bound: sentiment and effort can go below zero
    score: float = Field(le=100)
    reasoning: str


class SwarmAnalyzeResponse(BaseModel):
    """Response from POST /api/swarm-analyze."""
    feedback_id: int
    scores: Dict[str, AgentScore]
    consensus_score: float
    rank: int
    newly_ranked: bool
    message: str = "Swarm analysis completed successfully"


class AgentScoreRecord(BaseModel):
    """A persisted agent score (append-only history)."""
    id: int
    feedback_id: int
    agent_type: str
    score: float
    reasoning: str
    created_at: str


# ============================================================================
# Ranking Models
# ============================================================================

class RankingEntry(BaseModel):
    """A stored ranking entry."""
    id: int
    feedback_id: int
    rank: int
    consensus_score: float
    created_at: str
    updated_at: str


class TopPriority(BaseModel):
    """Ranking entry joined with its feedback content."""
    id: int
    feedback_id: int
    rank: int
    consensus_score: float
    created_at: str
    updated_at: str
    feedback_title: str
    feedback_description: str
    feedback_source: str
    feedback_customer_email: Optional[str] = None
    feedback_customer_name: Optional[str] = None


# ============================================================================
# API Response Models
# ============================================================================

class HealthResponse(BaseModel):
    """Health check response."""
    status: str = "ok"
    timestamp: str = Field(
        default_factory=lambda: datetime.now(timezone.utc).isoformat())


class ErrorResponse(BaseModel):
    """Standard error response."""
    detail: str
    code: Optional[str] = None
