from recoverytrack.engine.priority import explain_priority, prioritize, tier_for_percentile
from recoverytrack.kb import PRIORITY_EXPLANATIONS
from recoverytrack.models.enums import PriorityTier
from tests.conftest import make_subject


class TestTierForPercentile:
    def test_bands(self):
        assert tier_for_percentile(0.0) == PriorityTier.CRITICAL
        assert tier_for_percentile(0.29) == PriorityTier.CRITICAL
        assert tier_for_percentile(0.30) == PriorityTier.HIGH
        assert tier_for_percentile(0.59) == PriorityTier.HIGH
        assert tier_for_percentile(0.60) == PriorityTier.MEDIUM
        assert tier_for_percentile(0.84) == PriorityTier.MEDIUM
        assert tier_for_percentile(0.85) == PriorityTier.LOW


class TestPrioritize:
    def test_sorted_descending_by_pressure(self):
        subjects = [
            make_subject("Low", pressure_score=2.0),
            make_subject("High", pressure_score=30.0),
            make_subject("Mid", pressure_score=9.5),
        ]
        ranked = prioritize(subjects)
        assert [s.name for s in ranked] == ["High", "Mid", "Low"]
        assert [s.priority_rank for s in ranked] == [1, 2, 3]

    def test_ties_keep_insertion_order(self):
        subjects = [
            make_subject("First", pressure_score=5.0),
            make_subject("Second", pressure_score=5.0),
            make_subject("Top", pressure_score=8.0),
            make_subject("Third", pressure_score=5.0),
        ]
        ranked = prioritize(subjects)
        assert [s.name for s in ranked] == ["Top", "First", "Second", "Third"]

    def test_ranks_are_a_permutation(self):
        subjects = [make_subject(f"S{i}", pressure_score=float(1 + (i * 7) % 5)) for i in range(12)]
        ranked = prioritize(subjects)
        assert sorted(s.priority_rank for s in ranked) == list(range(1, 13))
        scores = [s.pressure_score for s in ranked]
        assert scores == sorted(scores, reverse=True)

    def test_tiers_for_ten_subjects(self):
        subjects = [make_subject(f"S{i}", pressure_score=float(20 - i)) for i in range(10)]
        tiers = [s.priority_tier for s in prioritize(subjects)]
        assert tiers == (
            [PriorityTier.CRITICAL] * 3
            + [PriorityTier.HIGH] * 3
            + [PriorityTier.MEDIUM] * 3
            + [PriorityTier.LOW]
        )

    def test_single_subject_is_critical(self):
        ranked = prioritize([make_subject(pressure_score=3.0)])
        assert ranked[0].priority_tier == PriorityTier.CRITICAL

    def test_empty(self):
        assert prioritize([]) == []


class TestExplanation:
    def test_urgent_large_backlog(self):
        subject = make_subject(chapters=10, urgency_score=1.0)
        assert explain_priority(subject, PriorityTier.CRITICAL) == PRIORITY_EXPLANATIONS[
            (PriorityTier.CRITICAL, True, True)
        ]

    def test_thresholds_are_inclusive(self):
        subject = make_subject(chapters=8, urgency_score=0.8)
        assert explain_priority(subject, PriorityTier.LOW) == PRIORITY_EXPLANATIONS[
            (PriorityTier.LOW, True, True)
        ]

    def test_calm_small_backlog(self):
        subject = make_subject(chapters=7, urgency_score=0.5)
        assert explain_priority(subject, PriorityTier.MEDIUM) == PRIORITY_EXPLANATIONS[
            (PriorityTier.MEDIUM, False, False)
        ]

    def test_table_covers_every_combination(self):
        for tier in PriorityTier:
            for urgent in (True, False):
                for large in (True, False):
                    assert (tier, urgent, large) in PRIORITY_EXPLANATIONS

    def test_prioritize_sets_explanation(self):
        ranked = prioritize([make_subject(chapters=2, urgency_score=0.2, pressure_score=1.0)])
        assert ranked[0].priority_explanation == PRIORITY_EXPLANATIONS[
            (PriorityTier.CRITICAL, False, False)
        ]
