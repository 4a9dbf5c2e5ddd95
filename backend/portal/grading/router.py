"""Assessment router: phase resolution, grading and grade release endpoints."""
import enum
import os
from datetime import datetime, UTC

from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.orm import Session

from ..assessment.phases import AssessmentPhaseResolver, PhaseMode, next_logical_phase
from ..database import get_db
from ..models.enums import AssessmentType, ProjectType, WindowType
from .errors import (
    GradingError, GradesLocked, NotGroupMember, PhaseNotActive,
    ScoreOutOfRange, StudentNotEnrolled, UnknownComponent,
)
from .models import (
    FacultyEvaluationView, GroupScoreRequest, GroupScoreResponse, NextPhaseResponse,
    PhaseResponse, ReleaseRequest, ReleaseResponse, ReleasedCountResponse,
    ScoreRequest, StudentEvaluationView, WindowStatus,
)
from .repository import EvaluationRepository, WindowRepository
from .service import GradingWorkflow

router = APIRouter(prefix="/assessments", tags=["Assessments"])

DEFAULT_TERM = "2025-26"

ERROR_STATUS = {
    ScoreOutOfRange: 422,
    UnknownComponent: 422,
    NotGroupMember: 422,
    StudentNotEnrolled: status.HTTP_404_NOT_FOUND,
    PhaseNotActive: status.HTTP_409_CONFLICT,
    GradesLocked: status.HTTP_409_CONFLICT,
}


class EvaluationView(enum.Enum):
    faculty = "faculty"
    student = "student"


def _grading_config():
    term = os.getenv("PORTAL_ACADEMIC_TERM", DEFAULT_TERM)
    enforce_windows = os.getenv("PORTAL_ENFORCE_WINDOWS", "true").lower() == "true"
    return term, enforce_windows


def get_resolver(db: Session = Depends(get_db)) -> AssessmentPhaseResolver:
    """Dependency to get a resolver over the current windows."""
    return AssessmentPhaseResolver(WindowRepository(db).catalog())


def get_workflow(
    db: Session = Depends(get_db),
    resolver: AssessmentPhaseResolver = Depends(get_resolver),
) -> GradingWorkflow:
    """Dependency to get an instance of GradingWorkflow."""
    term, enforce_windows = _grading_config()
    return GradingWorkflow(EvaluationRepository(db), resolver, term, enforce_windows=enforce_windows)


def _raise_for(error: GradingError):
    raise HTTPException(
        status_code=ERROR_STATUS.get(type(error), status.HTTP_400_BAD_REQUEST),
        detail={"message": error.message, **error.model_dump(mode="json")},
    )


@router.get("/phase", response_model=PhaseResponse)
async def resolve_phase(
    project_type: ProjectType,
    mode: PhaseMode = PhaseMode.grading,
    resolver: AssessmentPhaseResolver = Depends(get_resolver),
):
    """Which assessment phase is open right now for a project type."""
    now = datetime.now(UTC)
    current = resolver.resolve_phase(now, project_type, mode)
    return PhaseResponse(
        project_type=project_type,
        mode=mode,
        assessment_type=current,
        display_name=current.display_name if current else None,
        active_phases=sorted(resolver.active_phases(now, project_type)),
    )


@router.get("/next-phase", response_model=NextPhaseResponse)
async def next_phase(completed: list[AssessmentType] = Query(default=[])):
    """Suggest the next phase from the phases already graded."""
    suggestion = next_logical_phase(completed)
    return NextPhaseResponse(
        assessment_type=suggestion,
        display_name=suggestion.display_name,
        progress=suggestion.progress,
    )


@router.get("/windows", response_model=list[WindowStatus])
async def list_windows(
    project_type: ProjectType,
    window_type: WindowType = WindowType.assessment,
    resolver: AssessmentPhaseResolver = Depends(get_resolver),
):
    """Windows of one type with their open/closed state."""
    now = datetime.now(UTC)
    catalog = resolver.catalog
    statuses = []
    for window in catalog.windows_for(window_type, project_type):
        remaining = catalog.time_remaining(window, now)
        statuses.append(WindowStatus(
            window=window,
            state=catalog.window_state(window, now),
            seconds_remaining=int(remaining.total_seconds()) if remaining is not None else None,
        ))
    return statuses


@router.put("/students/{student_id}/score", response_model=FacultyEvaluationView)
async def grade_student(
    student_id: str,
    request: ScoreRequest,
    workflow: GradingWorkflow = Depends(get_workflow),
):
    """Grade a single student for one phase."""
    result = workflow.grade_solo(student_id, request.assessment_type, request.raw_score, request.comments)
    if isinstance(result, GradingError):
        _raise_for(result)
    return FacultyEvaluationView(
        evaluation=result,
        grading_status=result.grading_status(),
        is_complete=result.is_complete(),
        next_phase=next_logical_phase(result.graded_types()),
    )


@router.put("/groups/{group_id}/scores", response_model=GroupScoreResponse)
async def grade_group(
    group_id: str,
    request: GroupScoreRequest,
    workflow: GradingWorkflow = Depends(get_workflow),
):
    """Grade several group members at once; failures are reported per student."""
    result = workflow.grade_group(group_id, request.assessment_type, request.scores, request.comments)
    return GroupScoreResponse(
        succeeded=sorted(result.succeeded),
        failed={
            student_id: {"message": error.message, **error.model_dump(mode="json")}
            for student_id, error in result.failed.items()
        },
        evaluations=result.evaluations,
    )


@router.post("/release", response_model=ReleaseResponse)
async def release_grades(
    request: ReleaseRequest,
    workflow: GradingWorkflow = Depends(get_workflow),
):
    """Publish all evaluations of a project type for the current term."""
    published = workflow.release_phase_for_project_type(request.project_type, released_by=request.released_by)
    return ReleaseResponse(
        project_type=request.project_type,
        published=published,
        message=f"Released {published} {request.project_type.value} evaluations",
    )


@router.get("/released-count", response_model=ReleasedCountResponse)
async def released_count(
    project_type: ProjectType,
    workflow: GradingWorkflow = Depends(get_workflow),
):
    """Number of published evaluations for a project type."""
    return ReleasedCountResponse(project_type=project_type, count=workflow.released_count(project_type))


@router.get("/students/{student_id}/evaluation")
async def read_evaluation(
    student_id: str,
    view: EvaluationView = EvaluationView.faculty,
    workflow: GradingWorkflow = Depends(get_workflow),
):
    """Read a student's evaluation as faculty or as the student."""
    evaluation = workflow.evaluation_for(student_id)
    if evaluation is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Evaluation not found")
    if view == EvaluationView.student:
        return StudentEvaluationView.from_evaluation(evaluation)
    return FacultyEvaluationView(
        evaluation=evaluation,
        grading_status=evaluation.grading_status(),
        is_complete=evaluation.is_complete(),
        next_phase=next_logical_phase(evaluation.graded_types()),
    )
