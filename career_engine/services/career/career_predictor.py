"""Career Path Predictor: likely next roles from peers' historical transitions.

Transitions of similar peers that start from the user's current role are
grouped by destination. Each destination's share of all scanned transitions
becomes its probability; the top destinations form the predicted timeline.
"""

import asyncio
import logging
from dataclasses import dataclass

from career_engine.models.schemas.career_prediction import (
    CareerPathStep,
    CareerPrediction,
    PredictedRole,
)
from career_engine.models.schemas.feature_profile import UserFeatureProfile
from career_engine.models.schemas.records import CareerTransition
from career_engine.models.schemas.similarity import SimilarityScore
from career_engine.services.career.mastery import round_half_up
from career_engine.services.stores import MarketStore, TransitionStore

logger = logging.getLogger(__name__)

MAX_PREDICTED_ROLES = 5
MAX_PATH_STEPS = 4

# Confidence calibration. Heuristic constants, tune with care.
BASE_CONFIDENCE = 100
FEW_SKILLS_THRESHOLD = 3
FEW_SKILLS_PENALTY = 20
JUNIOR_YEARS_THRESHOLD = 1
JUNIOR_PENALTY = 15
FEW_PREDICTIONS_THRESHOLD = 3
FEW_PREDICTIONS_PENALTY = 10
MIN_CONFIDENCE = 30


@dataclass
class _Destination:
    count: int = 0
    avg_years: float = 0.0

    def add(self, years: float) -> None:
        self.count += 1
        self.avg_years = (self.avg_years * (self.count - 1) + years) / self.count


def aggregate_transitions(
    transitions: list[CareerTransition], from_role: str
) -> dict[str, _Destination]:
    """Count and average years per destination role, in first-seen order."""
    destinations: dict[str, _Destination] = {}
    for t in transitions:
        if t.from_role != from_role:
            continue
        destinations.setdefault(t.to_role, _Destination()).add(t.years_to_transition)
    return destinations


def calculate_confidence(profile: UserFeatureProfile, prediction_count: int) -> int:
    confidence = BASE_CONFIDENCE
    if len(profile.skills) < FEW_SKILLS_THRESHOLD:
        confidence -= FEW_SKILLS_PENALTY
    if profile.years_of_experience < JUNIOR_YEARS_THRESHOLD:
        confidence -= JUNIOR_PENALTY
    if prediction_count < FEW_PREDICTIONS_THRESHOLD:
        confidence -= FEW_PREDICTIONS_PENALTY
    return max(confidence, MIN_CONFIDENCE)


def build_career_timeline(
    predictions: list[PredictedRole], current_role: str
) -> list[CareerPathStep]:
    timeline = [CareerPathStep(step=0, role=current_role)]
    cumulative = 0.0
    for idx, pred in enumerate(predictions[:MAX_PATH_STEPS], start=1):
        cumulative += pred.years_to_achieve
        timeline.append(CareerPathStep(
            step=idx,
            role=pred.role,
            duration_years=int(round_half_up(pred.years_to_achieve)),
            cumulative_years=round_half_up(cumulative, 1),
            skills_to_learn=list(pred.required_skills),
            salary=pred.salary,
        ))
    return timeline


class CareerPathPredictor:
    def __init__(
        self,
        market_store: MarketStore,
        transition_store: TransitionStore,
        scan_limit: int = 5000,
        scan_timeout: float | None = None,
    ) -> None:
        self._market = market_store
        self._transitions = transition_store
        self.scan_limit = scan_limit
        self.scan_timeout = scan_timeout

    async def load_transitions(self, peers: list[SimilarityScore]) -> list[CareerTransition]:
        """Up to ``scan_limit`` of the peers' transitions, newest first.

        The limit is applied by the store, so probabilities are computed over
        exactly what it returns. A timed-out scan yields none.
        """
        if not peers:
            return []
        try:
            transitions = await asyncio.wait_for(
                self._transitions.get_career_transitions(
                    [p.peer_id for p in peers], self.scan_limit
                ),
                timeout=self.scan_timeout,
            )
        except asyncio.TimeoutError:
            logger.warning(
                "Transition scan over %d peers timed out after %ss", len(peers), self.scan_timeout
            )
            return []
        return transitions

    async def predict_roles(
        self, profile: UserFeatureProfile, transitions: list[CareerTransition]
    ) -> list[PredictedRole]:
        destinations = aggregate_transitions(transitions, profile.target_role)
        total = max(len(transitions), 1)
        roles = await asyncio.gather(*(self._market.get_role(name) for name in destinations))

        predictions = []
        for (name, dest), role in zip(destinations.items(), roles):
            predictions.append(PredictedRole(
                role=name,
                probability=min(dest.count / total * 100, 100.0),
                years_to_achieve=round_half_up(dest.avg_years, 1),
                required_skills=list(role.required_skills) if role else [],
                salary=(role.average_salary if role else None) or 0.0,
            ))
        predictions.sort(key=lambda p: p.probability, reverse=True)
        return predictions

    async def predict(
        self, profile: UserFeatureProfile, peers: list[SimilarityScore]
    ) -> CareerPrediction:
        transitions = await self.load_transitions(peers)
        predictions = await self.predict_roles(profile, transitions)
        logger.debug(
            "User %s: %d transitions from %d peers, %d candidate roles",
            profile.user_id, len(transitions), len(peers), len(predictions),
        )
        return CareerPrediction(
            user_id=profile.user_id,
            current_role=profile.target_role,
            predicted_roles=predictions[:MAX_PREDICTED_ROLES],
            career_path=build_career_timeline(predictions, profile.target_role),
            confidence_score=calculate_confidence(profile, len(predictions)),
        )
