import random

import pytest

from app.services.swarm import (
    AGENT_TYPES, AgentType, extract_matches, run_agents, score_agent
)
from app.services.swarm.reasoning import REASONING_TEMPLATES, Band


class TestScoreAgent:
    @pytest.mark.parametrize(
        "agent_type,expected",
        [
            (AgentType.URGENCY, 40),
            (AgentType.IMPACT, 35),
            (AgentType.SENTIMENT, 30),
            (AgentType.NOVELTY, 20),
            (AgentType.EFFORT, 50),
        ],
    )
    def test_base_without_hits_or_jitter(self, fixed_rng, agent_type, expected):
        assert score_agent(agent_type, extract_matches(""), fixed_rng(0.0)) == expected

    @pytest.mark.parametrize(
        "agent_type,jitter",
        [
            (AgentType.URGENCY, 30),
            (AgentType.IMPACT, 35),
            (AgentType.SENTIMENT, 30),
            (AgentType.NOVELTY, 50),
            (AgentType.EFFORT, 30),
        ],
    )
    def test_jitter_scales_with_range(self, fixed_rng, agent_type, jitter):
        matches = extract_matches("")
        low = score_agent(agent_type, matches, fixed_rng(0.0))
        half = score_agent(agent_type, matches, fixed_rng(0.5))
        assert half - low == pytest.approx(jitter / 2)

    def test_weights(self, fixed_rng):
        rng = fixed_rng(0.0)
        assert score_agent(AgentType.URGENCY, {"urgent": 2}, rng) == 70
        assert score_agent(AgentType.IMPACT, {"breadth": 2}, rng) == 75
        assert score_agent(AgentType.SENTIMENT, {"negative": 1, "positive": 1}, rng) == 45
        assert score_agent(AgentType.NOVELTY, {"novelty": 3}, rng) == 65
        assert score_agent(AgentType.EFFORT, {"complex": 1, "simple": 2}, rng) == 40

    def test_capped_at_100(self, fixed_rng):
        matches = extract_matches("critical urgent immediate asap crash broken down blocking")
        assert score_agent(AgentType.URGENCY, matches, fixed_rng(0.99)) == 100

    def test_sentiment_not_clamped_below_zero(self, fixed_rng):
        matches = extract_matches("love great excellent awesome amazing")
        assert score_agent(AgentType.SENTIMENT, matches, fixed_rng(0.0)) == -20

    def test_effort_not_clamped_below_zero(self, fixed_rng):
        matches = extract_matches("simple easy quick small minor")
        assert score_agent(AgentType.EFFORT, matches, fixed_rng(0.0)) == -25

    def test_accepts_plain_agent_name(self, fixed_rng):
        assert score_agent("urgency", {}, fixed_rng(0.0)) == 40


class TestRunAgents:
    def test_runs_all_five(self, fixed_rng):
        results = run_agents("anything", fixed_rng(0.3))
        assert [a.value for a in results] == AGENT_TYPES
        assert all(r.score <= 100 for r in results.values())

    def test_scenario_with_zero_jitter(self, fixed_rng):
        results = run_agents(
            "critical bug crashing the app for everyone, totally broken", fixed_rng(0.0))
        assert results[AgentType.URGENCY].score >= 85
        assert results[AgentType.IMPACT].score >= 75
        assert results[AgentType.URGENCY].reasoning == REASONING_TEMPLATES["urgency"][Band.HIGH]

    def test_scores_rounded_to_one_decimal(self, fixed_rng):
        results = run_agents("", fixed_rng(0.123456))
        # 40 + 0.123456 * 30
        assert results[AgentType.URGENCY].score == 43.7

    def test_seeded_rng_is_reproducible(self):
        first = run_agents("new feature request", random.Random(42))
        second = run_agents("new feature request", random.Random(42))
        assert first == second

    def test_reasoning_follows_score_band(self, fixed_rng):
        results = run_agents("", fixed_rng(0.0))
        # novelty base 20 -> low, effort base 50 -> medium
        assert results[AgentType.NOVELTY].reasoning == REASONING_TEMPLATES["novelty"][Band.LOW]
        assert results[AgentType.EFFORT].reasoning == REASONING_TEMPLATES["effort"][Band.MEDIUM]

    def test_reasoning_uses_unrounded_score_at_high_edge(self, fixed_rng):
        # 40 + 0.99867 * 30 = 69.9601, stored as 70.0
        result = run_agents("", fixed_rng(0.99867))[AgentType.URGENCY]
        assert result.score == 70.0
        assert result.reasoning == REASONING_TEMPLATES["urgency"][Band.MEDIUM]

    def test_reasoning_uses_unrounded_score_at_medium_edge(self, fixed_rng):
        # 20 + 0.3992 * 50 = 39.96, stored as 40.0
        result = run_agents("", fixed_rng(0.3992))[AgentType.NOVELTY]
        assert result.score == 40.0
        assert result.reasoning == REASONING_TEMPLATES["novelty"][Band.LOW]
