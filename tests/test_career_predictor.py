import asyncio

import pytest

from career_engine.models.schemas import CareerPrediction, PredictedRole, SimilarityScore, UserFeatureProfile
from career_engine.models.schemas.records import CareerTransition
from career_engine.services.career.career_predictor import (
    CareerPathPredictor,
    aggregate_transitions,
    build_career_timeline,
    calculate_confidence,
)
from career_engine.services.career.mastery import round_half_up


def _transition(to_role, years, from_role="senior-engineer"):
    return CareerTransition(user_id="p", from_role=from_role, to_role=to_role, years_to_transition=years)


class TestAggregation:
    def test_incremental_average(self):
        transitions = [_transition("staff", 3.0), _transition("staff", 4.0), _transition("staff", 5.5)]
        dest = aggregate_transitions(transitions, "senior-engineer")["staff"]
        assert dest.count == 3
        assert dest.avg_years == pytest.approx(4.1666667)

    def test_only_matching_origin(self):
        transitions = [_transition("staff", 3.0), _transition("lead", 1.0, from_role="engineer")]
        assert list(aggregate_transitions(transitions, "senior-engineer")) == ["staff"]


class TestConfidence:
    def test_all_penalties(self):
        profile = UserFeatureProfile(user_id="x", skills=("html",), years_of_experience=0.5)
        assert calculate_confidence(profile, 0) == 55

    def test_full_confidence(self):
        profile = UserFeatureProfile(user_id="x", skills=("a", "b", "c"), years_of_experience=1.0)
        assert calculate_confidence(profile, 3) == 100

    def test_single_penalty(self):
        profile = UserFeatureProfile(user_id="x", skills=("a", "b", "c"), years_of_experience=4.0)
        assert calculate_confidence(profile, 2) == 90


class TestTimeline:
    def test_step_zero_is_current_state(self):
        timeline = build_career_timeline([], "senior-engineer")
        assert len(timeline) == 1
        step = timeline[0]
        assert (step.step, step.role, step.duration_years, step.salary) == (0, "senior-engineer", 0, 0)
        assert step.skills_to_learn == []

    def test_walks_top_four(self):
        predictions = [
            PredictedRole(role=f"r{i}", probability=50 - i, years_to_achieve=1.5, salary=1000 * i)
            for i in range(6)
        ]
        timeline = build_career_timeline(predictions, "start")
        assert [s.role for s in timeline] == ["start", "r0", "r1", "r2", "r3"]
        assert [s.duration_years for s in timeline] == [0, 2, 2, 2, 2]
        assert timeline[-1].cumulative_years == pytest.approx(6.0)

    def test_round_half_up(self):
        assert round_half_up(2.5) == 3
        assert round_half_up(3.75, 1) == pytest.approx(3.8)
        assert round_half_up(0.25, 1) == pytest.approx(0.3)


class TestCareerPathPredictor:
    @pytest.mark.asyncio
    async def test_predicts_from_peer_transitions(self, engine):
        profile = await engine.extract_features("alice")
        peers = await engine.find_similar_users("alice", 20)
        prediction = await engine.predictor.predict(profile, peers)

        assert isinstance(prediction, CareerPrediction)
        assert prediction.current_role == "senior-engineer"
        roles = [(r.role, r.probability) for r in prediction.predicted_roles]
        # 5 transitions scanned: 2 to staff, 1 to manager
        assert roles == [("staff-engineer", pytest.approx(40.0)), ("engineering-manager", pytest.approx(20.0))]
        staff = prediction.predicted_roles[0]
        assert staff.years_to_achieve == pytest.approx(3.8)
        assert staff.salary == 185000
        assert staff.required_skills == ["system-design", "aws", "mentoring"]

    @pytest.mark.asyncio
    async def test_career_path(self, engine):
        profile = await engine.extract_features("alice")
        peers = await engine.find_similar_users("alice", 20)
        path = (await engine.predictor.predict(profile, peers)).career_path

        assert [(s.step, s.role, s.duration_years) for s in path] == [
            (0, "senior-engineer", 0),
            (1, "staff-engineer", 4),
            (2, "engineering-manager", 2),
        ]
        assert path[2].cumulative_years == pytest.approx(5.8)
        assert path[2].salary == 175000

    @pytest.mark.asyncio
    async def test_confidence_for_sparse_user(self, engine):
        profile = await engine.extract_features("alice")
        peers = await engine.find_similar_users("alice", 20)
        prediction = await engine.predictor.predict(profile, peers)
        # 2 skills, 2 predicted roles
        assert prediction.confidence_score == 70

    @pytest.mark.asyncio
    async def test_no_matching_transitions(self, engine):
        profile = await engine.extract_features("newbie")
        peers = await engine.find_similar_users("newbie", 20)
        prediction = await engine.predictor.predict(profile, peers)

        assert prediction.predicted_roles == []
        assert len(prediction.career_path) == 1
        assert prediction.career_path[0].role == "junior-developer"
        assert prediction.confidence_score == 55

    @pytest.mark.asyncio
    async def test_unknown_role_salary_defaults_to_zero(self, market_store):
        class OneTransition:
            async def get_career_transitions(self, peer_ids, limit):
                return [_transition("astronaut", 9.0)]

        predictor = CareerPathPredictor(market_store, OneTransition())
        profile = UserFeatureProfile(user_id="x", target_role="senior-engineer")
        prediction = await predictor.predict(profile, [SimilarityScore(peer_id="p", score=0.5)])
        assert prediction.predicted_roles[0].salary == 0
        assert prediction.predicted_roles[0].probability == 100

    @pytest.mark.asyncio
    async def test_transition_timeout_degrades(self, market_store):
        class StuckTransitions:
            async def get_career_transitions(self, peer_ids, limit):
                await asyncio.sleep(5)
                return []

        predictor = CareerPathPredictor(market_store, StuckTransitions(), scan_timeout=0.1)
        profile = UserFeatureProfile(user_id="x", skills=("a", "b", "c"), years_of_experience=3)
        prediction = await predictor.predict(profile, [SimilarityScore(peer_id="p", score=0.5)])
        assert prediction.predicted_roles == []
        assert prediction.confidence_score == 90

    @pytest.mark.asyncio
    async def test_caps_at_five_predicted_roles(self, market_store):
        class ManyTransitions:
            async def get_career_transitions(self, peer_ids, limit):
                return [_transition(f"role-{i}", 1.0) for i in range(7)]

        predictor = CareerPathPredictor(market_store, ManyTransitions())
        profile = UserFeatureProfile(user_id="x", target_role="senior-engineer")
        prediction = await predictor.predict(profile, [SimilarityScore(peer_id="p", score=0.5)])
        assert len(prediction.predicted_roles) == 5
        assert len(prediction.career_path) == 5
        assert [r.role for r in prediction.predicted_roles] == [f"role-{i}" for i in range(5)]

    @pytest.mark.asyncio
    async def test_scan_limit_is_applied_by_store(self, market_store, transition_store):
        predictor = CareerPathPredictor(market_store, transition_store, scan_limit=2)
        peers = [SimilarityScore(peer_id=uid, score=0.5) for uid in ("bob", "carol", "dave", "erin")]
        transitions = await predictor.load_transitions(peers)
        # dave (2024) and bob (2023) are the newest
        assert [t.user_id for t in transitions] == ["dave", "bob"]

        profile = UserFeatureProfile(user_id="x", target_role="senior-engineer")
        roles = await predictor.predict_roles(profile, transitions)
        assert sorted((r.role, r.probability) for r in roles) == [
            ("engineering-manager", 50.0),
            ("staff-engineer", 50.0),
        ]
