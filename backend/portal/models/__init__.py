"""SQLAlchemy models for the project-course portal."""

from .enums import ProjectType, WindowType, SubmissionType, AssessmentType, ASSESSMENT_SEQUENCE
from .window import Window
from .submission import Submission, SubmissionMember
from .evaluation import StudentEvaluation

__all__ = [
    "ProjectType",
    "WindowType",
    "SubmissionType",
    "AssessmentType",
    "ASSESSMENT_SEQUENCE",
    "Window",
    "Submission",
    "SubmissionMember",
    "StudentEvaluation",
]
