import sqlite3
from typing import Optional, List, Dict, Any
from datetime import datetime, timezone
from app.db.database import get_db_connection
from app.core.logging import get_logger

logger = get_logger(__name__)


def _now() -> str:
    return datetime.now(timezone.utc).isoformat()


# ============================================================================
# Feedback
# ============================================================================

def create_feedback(
    title: str,
    description: str,
    source: str,
    customer_email: Optional[str] = None,
    customer_name: Optional[str] = None
) -> Dict[str, Any]:
    """Create a new feedback record and return it."""
    now = _now()
    with get_db_connection() as conn:
        cursor = conn.execute(
            """
            INSERT INTO feedback (title, description, source, customer_email,
                                  customer_name, created_at, updated_at)
            VALUES (?, ?, ?, ?, ?, ?, ?)
            """,
            (title, description, source, customer_email, customer_name, now, now)
        )
        conn.commit()
        feedback_id = cursor.lastrowid
    logger.info(f"Created feedback {feedback_id} from source {source}")
    return get_feedback(feedback_id)


def get_feedback(feedback_id: int) -> Optional[Dict[str, Any]]:
    """Retrieve a feedback item by ID."""
    with get_db_connection() as conn:
        row = conn.execute(
            "SELECT * FROM feedback WHERE id = ?",
            (feedback_id,)
        ).fetchone()

        if not row:
            return None

        return dict(row)


def list_feedback(limit: int = 50, offset: int = 0) -> List[Dict[str, Any]]:
    """List feedback items, newest first."""
    with get_db_connection() as conn:
        rows = conn.execute(
            """
            SELECT * FROM feedback
            ORDER BY created_at DESC, id DESC
            LIMIT ? OFFSET ?
            """,
            (limit, offset)
        ).fetchall()

        return [dict(row) for row in rows]


# ============================================================================
# Agent scores (append-only)
# ============================================================================

def save_agent_score(
    feedback_id: int,
    agent_type: str,
    score: float,
    reasoning: str
) -> Dict[str, Any]:
    """Append one agent score record."""
    created_at = _now()
    with get_db_connection() as conn:
        cursor = conn.execute(
            """
            INSERT INTO swarm_scores (feedback_id, agent_type, score, reasoning, created_at)
            VALUES (?, ?, ?, ?, ?)
            """,
            (feedback_id, agent_type, score, reasoning, created_at)
        )
        conn.commit()
        record_id = cursor.lastrowid
    logger.debug(f"Saved {agent_type} score {score} for feedback {feedback_id}")
    return {
        'id': record_id,
        'feedback_id': feedback_id,
        'agent_type': agent_type,
        'score': score,
        'reasoning': reasoning,
        'created_at': created_at,
    }


# Columns allowed in ORDER BY
SCORE_SORT_COLUMNS = {"created_at": "created_at", "score": "score"}
RANKING_SORT_COLUMNS = {
    "rank": "rank",
    "consensus_score": "consensus_score",
    "created_at": "created_at",
}


def _order_clause(sort: str, order: str, columns: Dict[str, str]) -> str:
    column = columns.get(sort)
    if column is None:
        raise ValueError(f"Unsupported sort field: {sort}")
    direction = "DESC" if order.lower() == "desc" else "ASC"
    return f"ORDER BY {column} {direction}, id {direction}"


def _range_conditions(
    column: str,
    minimum: Optional[float],
    maximum: Optional[float],
    conditions: List[str],
    params: List[Any]
) -> None:
    if minimum is not None:
        conditions.append(f"{column} >= ?")
        params.append(minimum)
    if maximum is not None:
        conditions.append(f"{column} <= ?")
        params.append(maximum)


def list_agent_scores(
    feedback_id: Optional[int] = None,
    agent_type: Optional[str] = None,
    min_score: Optional[float] = None,
    max_score: Optional[float] = None,
    sort: str = "created_at",
    order: str = "desc",
    limit: int = 50,
    offset: int = 0
) -> List[Dict[str, Any]]:
    """List agent score records, newest first by default, with optional filters."""
    conditions: List[str] = []
    params: List[Any] = []

    if feedback_id is not None:
        conditions.append("feedback_id = ?")
        params.append(feedback_id)
    if agent_type is not None:
        conditions.append("agent_type = ?")
        params.append(agent_type)
    _range_conditions("score", min_score, max_score, conditions, params)

    where = f"WHERE {' AND '.join(conditions)}" if conditions else ""
    order_by = _order_clause(sort, order, SCORE_SORT_COLUMNS)

    with get_db_connection() as conn:
        rows = conn.execute(
            f"""
            SELECT id, feedback_id, agent_type, score, reasoning, created_at
            FROM swarm_scores
            {where}
            {order_by}
            LIMIT ? OFFSET ?
            """,
            (*params, limit, offset)
        ).fetchall()

        return [dict(row) for row in rows]


# ============================================================================
# Ranking entries
#
# These helpers take an open connection so the priority store can compose
# them inside a single write transaction.
# ============================================================================

def find_ranking_entry(
    conn: sqlite3.Connection,
    feedback_id: int
) -> Optional[Dict[str, Any]]:
    """Look up the ranking entry for a feedback item."""
    row = conn.execute(
        "SELECT * FROM top_priorities WHERE feedback_id = ?",
        (feedback_id,)
    ).fetchone()
    return dict(row) if row else None


def insert_ranking_entry(
    conn: sqlite3.Connection,
    feedback_id: int,
    consensus_score: float
) -> Dict[str, Any]:
    """Insert a ranking entry at the next rank after the current maximum."""
    now = _now()
    conn.execute(
        """
        INSERT INTO top_priorities (feedback_id, rank, consensus_score, created_at, updated_at)
        SELECT ?, COALESCE(MAX(rank), 0) + 1, ?, ?, ?
        FROM top_priorities
        """,
        (feedback_id, consensus_score, now, now)
    )
    return find_ranking_entry(conn, feedback_id)


def update_ranking_score(
    conn: sqlite3.Connection,
    feedback_id: int,
    consensus_score: float
) -> Dict[str, Any]:
    """Overwrite the stored consensus score; the rank is left as is."""
    conn.execute(
        """
        UPDATE top_priorities
        SET consensus_score = ?, updated_at = ?
        WHERE feedback_id = ?
        """,
        (consensus_score, _now(), feedback_id)
    )
    return find_ranking_entry(conn, feedback_id)


def list_top_priorities(limit: int) -> List[Dict[str, Any]]:
    """List ranking entries joined with their feedback, ordered by rank."""
    with get_db_connection() as conn:
        rows = conn.execute(
            """
            SELECT tp.id, tp.feedback_id, tp.rank, tp.consensus_score,
                   tp.created_at, tp.updated_at,
                   f.title AS feedback_title,
                   f.description AS feedback_description,
                   f.source AS feedback_source,
                   f.customer_email AS feedback_customer_email,
                   f.customer_name AS feedback_customer_name
            FROM top_priorities tp
            INNER JOIN feedback f ON f.id = tp.feedback_id
            ORDER BY tp.rank ASC
            LIMIT ?
            """,
            (limit,)
        ).fetchall()

        return [dict(row) for row in rows]


def list_ranking_entries(
    min_rank: Optional[int] = None,
    max_rank: Optional[int] = None,
    min_score: Optional[float] = None,
    max_score: Optional[float] = None,
    sort: str = "rank",
    order: str = "asc",
    limit: int = 50,
    offset: int = 0
) -> List[Dict[str, Any]]:
    """List raw ranking entries with rank and score range filters."""
    conditions: List[str] = []
    params: List[Any] = []
    _range_conditions("rank", min_rank, max_rank, conditions, params)
    _range_conditions("consensus_score", min_score, max_score, conditions, params)

    where = f"WHERE {' AND '.join(conditions)}" if conditions else ""
    order_by = _order_clause(sort, order, RANKING_SORT_COLUMNS)

    with get_db_connection() as conn:
        rows = conn.execute(
            f"""
            SELECT id, feedback_id, rank, consensus_score, created_at, updated_at
            FROM top_priorities
            {where}
            {order_by}
            LIMIT ? OFFSET ?
            """,
            (*params, limit, offset)
        ).fetchall()

        return [dict(row) for row in rows]
