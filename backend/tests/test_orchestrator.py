import pytest

from app.db import crud
from app.services.orchestrator import analyze_feedback, get_random_source
from app.services.swarm import FeedbackNotFound, MissingFeedbackId
from app.services.swarm.reasoning import REASONING_TEMPLATES, Band


class TestAnalyzeFeedback:
    def test_missing_id(self, db_path):
        with pytest.raises(MissingFeedbackId) as exc:
            analyze_feedback(None)
        assert exc.value.code == "MISSING_FEEDBACK_ID"

    def test_zero_id_counts_as_missing(self, db_path):
        with pytest.raises(MissingFeedbackId):
            analyze_feedback(0)

    def test_not_found(self, db_path, fixed_rng):
        with pytest.raises(FeedbackNotFound) as exc:
            analyze_feedback(42, fixed_rng(0.0))
        assert exc.value.status_code == 404
        assert crud.list_agent_scores(feedback_id=42) == []

    def test_scenario(self, scenario_feedback, fixed_rng):
        response = analyze_feedback(scenario_feedback["id"], fixed_rng(0.0))

        assert response.feedback_id == scenario_feedback["id"]
        assert set(response.scores) == {"urgency", "impact", "sentiment", "novelty", "effort"}
        assert response.scores["urgency"].score >= 85
        assert response.scores["impact"].score >= 75
        assert response.scores["urgency"].reasoning == REASONING_TEMPLATES["urgency"][Band.HIGH]
        assert response.consensus_score == 52.0
        assert response.rank == 1
        assert response.newly_ranked is True
        assert response.message == "Swarm analysis completed successfully"

    def test_second_run_not_newly_ranked(self, scenario_feedback, fixed_rng):
        analyze_feedback(scenario_feedback["id"], fixed_rng(0.0))
        response = analyze_feedback(scenario_feedback["id"], fixed_rng(0.0))
        assert response.rank == 1
        assert response.newly_ranked is False


class TestRandomSource:
    def test_seeded_from_settings(self, monkeypatch):
        from app.core.config import settings

        monkeypatch.setattr(settings, "swarm_random_seed", 7)
        assert get_random_source().random() == get_random_source().random()
