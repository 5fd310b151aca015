"""
Error kinds raised by the swarm analysis core.
All are deterministic validation failures and are never retried.
"""


class SwarmError(Exception):
    """Base class for swarm analysis errors."""
    code = "SWARM_ERROR"
    status_code = 400

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class MissingFeedbackId(SwarmError):
    code = "MISSING_FEEDBACK_ID"
    status_code = 400

    def __init__(self, message: str = "feedback_id is required"):
        super().__init__(message)


class FeedbackNotFound(SwarmError):
    code = "FEEDBACK_NOT_FOUND"
    status_code = 404

    def __init__(self, feedback_id: int):
        super().__init__(f"Feedback not found: {feedback_id}")
        self.feedback_id = feedback_id


class InvalidAgentType(SwarmError):
    code = "INVALID_AGENT_TYPE"
    status_code = 400

    def __init__(self, agent_type: str, valid: list[str]):
        super().__init__(
            f"Invalid agent type '{agent_type}'. Must be one of: {', '.join(valid)}")
        self.agent_type = agent_type


class IncompleteAgentScores(SwarmError):
    code = "INCOMPLETE_AGENT_SCORES"
    status_code = 400

    def __init__(self, missing: list[str]):
        super().__init__(f"Missing scores for agent(s): {', '.join(missing)}")
        self.missing = missing
