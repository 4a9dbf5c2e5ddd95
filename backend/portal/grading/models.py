"""Request/response schemas for the assessment API."""
from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field

from ..assessment.evaluation import ComponentScore, Evaluation, GradingStatus, StudentStatus
from ..assessment.phases import PhaseMode
from ..assessment.windows import WindowRecord, WindowState
from ..models.enums import AssessmentType, ProjectType


class PhaseResponse(BaseModel):
    project_type: ProjectType
    mode: PhaseMode
    assessment_type: Optional[AssessmentType] = None
    display_name: Optional[str] = None
    active_phases: list[AssessmentType] = []


class NextPhaseResponse(BaseModel):
    assessment_type: AssessmentType
    display_name: str
    progress: int


class WindowStatus(BaseModel):
    window: WindowRecord
    state: WindowState
    seconds_remaining: Optional[int] = None


class ScoreRequest(BaseModel):
    assessment_type: str
    raw_score: float
    comments: str = ""


class GroupScoreRequest(BaseModel):
    assessment_type: str
    scores: dict[str, float] = Field(..., min_length=1)
    comments: str = ""


class GroupScoreResponse(BaseModel):
    succeeded: list[str]
    failed: dict[str, dict]
    evaluations: dict[str, Evaluation] = {}


class ReleaseRequest(BaseModel):
    project_type: ProjectType
    released_by: Optional[str] = None


class ReleaseResponse(BaseModel):
    project_type: ProjectType
    published: int
    message: str


class ReleasedCountResponse(BaseModel):
    project_type: ProjectType
    count: int


class FacultyEvaluationView(BaseModel):
    """Everything faculty and coordinators may see."""
    evaluation: Evaluation
    grading_status: GradingStatus
    is_complete: bool
    next_phase: AssessmentType


class StudentEvaluationView(BaseModel):
    """What a student may see; totals stay hidden until release."""
    student_id: str
    term: str
    project_type: ProjectType
    status: StudentStatus
    is_published: bool
    published_at: Optional[datetime] = None
    total: Optional[float] = None
    components: dict[str, ComponentScore] = {}

    @classmethod
    def from_evaluation(cls, evaluation: Evaluation) -> "StudentEvaluationView":
        components = {}
        if evaluation.is_published:
            components = {
                t.value: evaluation.component(t)
                for t in sorted(evaluation.graded_types())
            }
        return cls(
            student_id=evaluation.student_id,
            term=evaluation.term,
            project_type=evaluation.project_type,
            status=evaluation.student_status(),
            is_published=evaluation.is_published,
            published_at=evaluation.published_at,
            total=evaluation.visible_total,
            components=components,
        )
