import pytest

from app.services.swarm import (
    AgentType, IncompleteAgentScores, InvalidAgentType, consensus_score
)


def _scores(**overrides):
    scores = {"urgency": 85, "impact": 75, "sentiment": 30, "novelty": 20, "effort": 50}
    scores.update(overrides)
    return scores


class TestConsensusScore:
    def test_mean_of_five(self):
        assert consensus_score(_scores()) == 52.0

    def test_rounded_to_one_decimal(self):
        # 261 / 5 = 52.2 and 260.33 / 5 = 52.066
        assert consensus_score(_scores(effort=51)) == 52.2
        assert consensus_score(_scores(effort=50.33)) == 52.1

    def test_negative_scores_pull_mean_down(self):
        assert consensus_score(_scores(sentiment=-20, effort=-25)) == 27.0

    def test_accepts_enum_keys(self):
        scores = {AgentType(k): v for k, v in _scores().items()}
        assert consensus_score(scores) == 52.0

    def test_partial_set_rejected(self):
        scores = _scores()
        del scores["novelty"]
        with pytest.raises(IncompleteAgentScores) as exc:
            consensus_score(scores)
        assert exc.value.missing == ["novelty"]
        assert exc.value.code == "INCOMPLETE_AGENT_SCORES"

    def test_unknown_agent_rejected(self):
        with pytest.raises(InvalidAgentType) as exc:
            consensus_score(_scores(popularity=90))
        assert exc.value.agent_type == "popularity"
        assert exc.value.code == "INVALID_AGENT_TYPE"
