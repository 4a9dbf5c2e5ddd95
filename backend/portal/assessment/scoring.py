"""Raw conduct score to weighted component score conversion."""

from decimal import Decimal, ROUND_HALF_UP
from typing import NamedTuple, Union

from ..models.enums import AssessmentType, ASSESSMENT_SEQUENCE

Number = Union[int, float, Decimal]

TOTAL_POINTS = 100
_ONE_DECIMAL = Decimal("0.1")


class ScoreScale(NamedTuple):
    raw_max: int
    weighted_max: int


SCORE_TABLE = {
    AssessmentType.cla1: ScoreScale(raw_max=20, weighted_max=10),
    AssessmentType.cla2: ScoreScale(raw_max=30, weighted_max=15),
    AssessmentType.cla3: ScoreScale(raw_max=50, weighted_max=25),
    AssessmentType.external: ScoreScale(raw_max=100, weighted_max=50),
}

if set(SCORE_TABLE) != set(ASSESSMENT_SEQUENCE):
    raise RuntimeError("Score table must cover every assessment type")
if sum(scale.weighted_max for scale in SCORE_TABLE.values()) != TOTAL_POINTS:
    raise RuntimeError(f"Weighted maxima must sum to {TOTAL_POINTS}")


def scale_for(assessment_type: AssessmentType) -> ScoreScale:
    return SCORE_TABLE[assessment_type]


def raw_max(assessment_type: AssessmentType) -> int:
    return SCORE_TABLE[assessment_type].raw_max


def weighted_max(assessment_type: AssessmentType) -> int:
    return SCORE_TABLE[assessment_type].weighted_max


def is_valid_raw_score(raw_score: Number, assessment_type: AssessmentType) -> bool:
    """Check that a raw score lies within ``[0, raw_max]`` for the type."""
    return 0 <= raw_score <= raw_max(assessment_type)


def _to_decimal(value: Number) -> Decimal:
    if isinstance(value, Decimal):
        return value
    # str() keeps 0.1 as 0.1 instead of its binary expansion
    return Decimal(str(value))


def convert_decimal(raw_score: Number, assessment_type: AssessmentType) -> Decimal:
    """Weighted contribution as a Decimal rounded to one place.

    Rounds half-up first and clamps to the weighted maximum afterwards, so a
    full raw score always lands exactly on the cap.
    """
    scale = SCORE_TABLE[assessment_type]
    scaled = _to_decimal(raw_score) * scale.weighted_max / scale.raw_max
    rounded = scaled.quantize(_ONE_DECIMAL, rounding=ROUND_HALF_UP)
    return min(Decimal(scale.weighted_max), rounded)


def convert(raw_score: Number, assessment_type: AssessmentType) -> float:
    """Convert a raw conduct score into its weighted contribution.

    The caller is responsible for range checking; see
    :func:`is_valid_raw_score`.
    """
    return float(convert_decimal(raw_score, assessment_type))
