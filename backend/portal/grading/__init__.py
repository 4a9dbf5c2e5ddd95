"""Grading workflow and assessment API."""
from .errors import (
    GradingError, ScoreOutOfRange, PhaseNotActive, UnknownComponent,
    StudentNotEnrolled, NotGroupMember, GradesLocked,
)
from .repository import Enrollment, EvaluationRepository, WindowRepository
from .service import GradingWorkflow, GroupGradingResult
from .router import router as assessment_router

__all__ = [
    'GradingError',
    'ScoreOutOfRange',
    'PhaseNotActive',
    'UnknownComponent',
    'StudentNotEnrolled',
    'NotGroupMember',
    'GradesLocked',
    'Enrollment',
    'EvaluationRepository',
    'WindowRepository',
    'GradingWorkflow',
    'GroupGradingResult',
    'assessment_router',
]
