"""Deterministic ride-safety scoring.

Turns a single WeatherObservation plus a vehicle category into an ordered list
of advisory hints and a 0-100 provider score. Pure functions only: no I/O and
no shared state, so they are safe to call from any worker.
"""

from __future__ import annotations

from typing import List, Sequence, Tuple

from .domain import VehicleType, WeatherObservation

GOOD_CONDITIONS_HINT = "Good conditions for riding"

MAX_SCORE = 100.0
MIN_SCORE = 0.0

# (threshold, penalty) pairs, most severe first. Only the first matching
# breakpoint of a ladder applies.
Ladder = Sequence[Tuple[float, float]]

WIND_PENALTIES_KPH: Ladder = ((50.0, 30.0), (40.0, 20.0), (30.0, 10.0))
PRECIP_PENALTIES_MM: Ladder = ((10.0, 30.0), (5.0, 20.0), (0.0, 10.0))
COLD_PENALTIES_C: Ladder = ((0.0, 40.0), (5.0, 20.0))
VISIBILITY_PENALTIES_KM: Ladder = ((1.0, 30.0), (2.0, 15.0))

BIKE_WIND_PENALTY_THRESHOLD_KPH = 25.0
BIKE_WIND_PENALTY = 15.0
MOTOR_WET_PENALTY = 5.0


def _penalty_above(value: float, ladder: Ladder) -> float:
    """Return the penalty for the highest threshold that `value` exceeds."""
    for threshold, penalty in ladder:
        if value > threshold:
            return penalty
    return 0.0


def _penalty_below(value: float, ladder: Ladder) -> float:
    """Return the penalty for the lowest threshold that `value` falls under."""
    for threshold, penalty in ladder:
        if value < threshold:
            return penalty
    return 0.0


def _clamp_score(score: float) -> float:
    """Clamp a score to the 0-100 range."""
    return max(MIN_SCORE, min(MAX_SCORE, score))


def generate_hints(observation: WeatherObservation, vehicle: VehicleType) -> List[str]:
    """Return advisory hints in evaluation order.

    Order: wind, precipitation, temperature, visibility, UV, then
    vehicle-specific rules. Falls back to a single "good conditions" hint when
    nothing fires.
    """
    hints: List[str] = []

    if observation.wind_kph > 40:
        hints.append("Strong wind conditions")

    if observation.precip_mm > 5:
        hints.append("Heavy precipitation")
    elif observation.precip_mm > 0:
        hints.append("Light rain")

    if observation.temperature_c < 0:
        hints.append("Freezing temperature - risk of ice")
    elif observation.temperature_c < 5:
        hints.append("Cold temperature")

    if observation.visibility_km < 2:
        hints.append("Low visibility")

    if observation.uv_index > 7:
        hints.append("High UV index")

    if vehicle is VehicleType.BIKE:
        if observation.wind_kph > 30:
            hints.append("Wind too strong for cycling")
    elif vehicle is VehicleType.MOTOR:
        if observation.precip_mm > 0 and observation.temperature_c < 5:
            hints.append("Cold and wet - slippery conditions")

    if not hints:
        hints.append(GOOD_CONDITIONS_HINT)
    return hints


def calculate_provider_score(observation: WeatherObservation, vehicle: VehicleType) -> float:
    """Score riding conditions from 0 (avoid) to 100 (ideal).

    Each weather category contributes at most one penalty from its ladder;
    vehicle adjustments are added on top and the total is clamped.
    """
    score = MAX_SCORE
    score -= _penalty_above(observation.wind_kph, WIND_PENALTIES_KPH)
    score -= _penalty_above(observation.precip_mm, PRECIP_PENALTIES_MM)
    score -= _penalty_below(observation.temperature_c, COLD_PENALTIES_C)
    score -= _penalty_below(observation.visibility_km, VISIBILITY_PENALTIES_KM)

    if vehicle is VehicleType.BIKE and observation.wind_kph > BIKE_WIND_PENALTY_THRESHOLD_KPH:
        score -= BIKE_WIND_PENALTY
    elif vehicle is VehicleType.MOTOR and observation.precip_mm > 0:
        score -= MOTOR_WET_PENALTY

    return _clamp_score(score)
