"""Assessment window resolution and evaluation scoring."""
from .scoring import SCORE_TABLE, ScoreScale, convert, is_valid_raw_score, raw_max, weighted_max
from .windows import WindowCatalog, WindowRecord, WindowState
from .phases import AssessmentPhaseResolver, PhaseMode, next_logical_phase, is_valid_transition
from .evaluation import ComponentScore, Evaluation, GradingStatus, StudentStatus

__all__ = [
    "SCORE_TABLE",
    "ScoreScale",
    "convert",
    "is_valid_raw_score",
    "raw_max",
    "weighted_max",
    "WindowCatalog",
    "WindowRecord",
    "WindowState",
    "AssessmentPhaseResolver",
    "PhaseMode",
    "next_logical_phase",
    "is_valid_transition",
    "ComponentScore",
    "Evaluation",
    "GradingStatus",
    "StudentStatus",
]
