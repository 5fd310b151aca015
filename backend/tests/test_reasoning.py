import pytest

from app.services.swarm import AGENT_TYPES, AgentType, Band, band_from_score, generate_reasoning
from app.services.swarm.reasoning import REASONING_TEMPLATES


class TestBandFromScore:
    @pytest.mark.parametrize(
        "score,band",
        [
            (100, Band.HIGH),
            (70, Band.HIGH),
            (69.9, Band.MEDIUM),
            (40, Band.MEDIUM),
            (39.9, Band.LOW),
            (0, Band.LOW),
            (-25, Band.LOW),
        ],
    )
    def test_boundaries(self, score, band):
        assert band_from_score(score) == band


class TestGenerateReasoning:
    def test_fifteen_distinct_templates(self):
        templates = [
            REASONING_TEMPLATES[agent][band] for agent in AGENT_TYPES for band in Band
        ]
        assert len(templates) == 15
        assert len(set(templates)) == 15

    def test_accepts_enum_or_name(self):
        assert generate_reasoning(AgentType.IMPACT, 80) == generate_reasoning("impact", 80)

    def test_urgency_high(self):
        assert generate_reasoning("urgency", 85).startswith(
            "This feedback indicates a time-sensitive issue")
