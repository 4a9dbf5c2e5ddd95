"""SQLAlchemy-backed access to windows, submissions and evaluations.

This is the single place where stored rows are turned into engine records and
back; nothing past this module looks at column layouts.
"""
from dataclasses import dataclass
from typing import Optional

from sqlalchemy.orm import Session

from ..assessment.evaluation import ComponentScore, Evaluation
from ..assessment.windows import WindowCatalog, as_utc
from ..models import (
    ASSESSMENT_SEQUENCE, ProjectType, StudentEvaluation, Submission, SubmissionMember, Window,
)


@dataclass(frozen=True)
class Enrollment:
    """Where a student sits for grading purposes in a term."""
    student_id: str
    project_type: ProjectType
    group_id: Optional[str] = None


def _utc_or_none(value):
    return as_utc(value) if value is not None else None


def row_to_evaluation(row: StudentEvaluation) -> Evaluation:
    components = {}
    for assessment_type in ASSESSMENT_SEQUENCE:
        prefix = assessment_type.name
        components[prefix] = ComponentScore(
            conduct=getattr(row, f"{prefix}_conduct") or 0,
            comments=getattr(row, f"{prefix}_comments") or "",
            conducted_at=_utc_or_none(getattr(row, f"{prefix}_conducted_at")),
        )
    return Evaluation(
        student_id=row.student_id,
        term=row.term,
        project_type=row.project_type,
        group_id=row.group_id,
        is_published=bool(row.is_published),
        published_at=_utc_or_none(row.published_at),
        published_by=row.published_by,
        **components,
    )


def apply_evaluation(row: StudentEvaluation, evaluation: Evaluation) -> StudentEvaluation:
    for assessment_type in ASSESSMENT_SEQUENCE:
        prefix = assessment_type.name
        score = evaluation.component(assessment_type)
        setattr(row, f"{prefix}_conduct", score.conduct)
        setattr(row, f"{prefix}_comments", score.comments)
        setattr(row, f"{prefix}_conducted_at", score.conducted_at)
    row.project_type = evaluation.project_type
    row.group_id = evaluation.group_id
    row.total_internal = evaluation.total_internal
    row.total_external = evaluation.total_external
    row.total = evaluation.total
    row.is_published = evaluation.is_published
    row.published_at = evaluation.published_at
    row.published_by = evaluation.published_by
    return row


class WindowRepository:
    def __init__(self, db: Session):
        self.db = db

    def catalog(self) -> WindowCatalog:
        """Load every window into a catalog."""
        return WindowCatalog.from_rows(self.db.query(Window).all())


class EvaluationRepository:
    """Get/put store for evaluations plus read-only roster lookups."""

    def __init__(self, db: Session):
        self.db = db

    def _row(self, student_id: str, term: str) -> Optional[StudentEvaluation]:
        return self.db.query(StudentEvaluation).filter(
            StudentEvaluation.student_id == student_id,
            StudentEvaluation.term == term,
        ).first()

    def get(self, student_id: str, term: str) -> Optional[Evaluation]:
        row = self._row(student_id, term)
        return row_to_evaluation(row) if row else None

    def save(self, evaluation: Evaluation) -> Evaluation:
        """Insert or overwrite the stored evaluation and commit."""
        row = self._row(evaluation.student_id, evaluation.term)
        if row is None:
            row = StudentEvaluation(student_id=evaluation.student_id, term=evaluation.term)
            self.db.add(row)
        apply_evaluation(row, evaluation)
        self.db.commit()
        self.db.refresh(row)
        return row_to_evaluation(row)

    def list_for_project_type(self, project_type: ProjectType, term: str) -> list[Evaluation]:
        rows = self.db.query(StudentEvaluation).filter(
            StudentEvaluation.project_type == project_type,
            StudentEvaluation.term == term,
        ).order_by(StudentEvaluation.student_id).all()
        return [row_to_evaluation(row) for row in rows]

    def count_published(self, project_type: ProjectType, term: str) -> int:
        return self.db.query(StudentEvaluation).filter(
            StudentEvaluation.project_type == project_type,
            StudentEvaluation.term == term,
            StudentEvaluation.is_published == True,  # noqa: E712
        ).count()

    def enrollment_for(self, student_id: str, term: str) -> Optional[Enrollment]:
        """Find the student's project type and group from their submissions."""
        submission = self.db.query(Submission).join(SubmissionMember).filter(
            SubmissionMember.student_id == student_id,
            Submission.term == term,
        ).order_by(Submission.submitted_at.desc()).first()
        if submission is None:
            return None
        return Enrollment(
            student_id=student_id,
            project_type=submission.project_type,
            group_id=submission.group_id,
        )

    def group_members(self, group_id: str, term: str) -> set[str]:
        rows = self.db.query(SubmissionMember.student_id).join(Submission).filter(
            Submission.group_id == group_id,
            Submission.term == term,
        ).distinct().all()
        return {row.student_id for row in rows}
