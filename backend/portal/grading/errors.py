"""Validation failures returned by grading operations.

These are values, not exceptions: workflow methods return them in place of an
evaluation so callers can present each one inline.
"""
from datetime import datetime
from typing import Literal, Optional, Union

from pydantic import BaseModel, ConfigDict

from ..models.enums import AssessmentType, ProjectType


class GradingError(BaseModel):
    model_config = ConfigDict(frozen=True)

    code: str

    @property
    def message(self) -> str:
        return self.code


class ScoreOutOfRange(GradingError):
    code: Literal["score_out_of_range"] = "score_out_of_range"
    assessment_type: AssessmentType
    raw_score: float
    minimum: float = 0
    maximum: float

    @property
    def message(self) -> str:
        return (
            f"{self.assessment_type.value} conduct score must be between "
            f"{self.minimum:g} and {self.maximum:g} (got {self.raw_score:g})"
        )


class PhaseNotActive(GradingError):
    code: Literal["phase_not_active"] = "phase_not_active"
    assessment_type: AssessmentType
    project_type: ProjectType

    @property
    def message(self) -> str:
        return f"{self.assessment_type.value} assessment window is not open for {self.project_type.value}"


class UnknownComponent(GradingError):
    code: Literal["unknown_component"] = "unknown_component"
    value: str

    @property
    def message(self) -> str:
        return f"Unknown assessment component: {self.value!r}"


class StudentNotEnrolled(GradingError):
    code: Literal["student_not_enrolled"] = "student_not_enrolled"
    student_id: str
    term: str

    @property
    def message(self) -> str:
        return f"Student {self.student_id} has no submission in term {self.term}"


class NotGroupMember(GradingError):
    code: Literal["not_group_member"] = "not_group_member"
    student_id: str
    group_id: str

    @property
    def message(self) -> str:
        return f"Student {self.student_id} is not a member of group {self.group_id}"


class GradesLocked(GradingError):
    code: Literal["grades_locked"] = "grades_locked"
    student_id: str
    published_at: Optional[datetime] = None

    @property
    def message(self) -> str:
        return "Grades have been published and cannot be modified"


AnyGradingError = Union[
    ScoreOutOfRange,
    PhaseNotActive,
    UnknownComponent,
    StudentNotEnrolled,
    NotGroupMember,
    GradesLocked,
]
