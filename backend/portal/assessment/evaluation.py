"""Per-student evaluation aggregate across the four assessment phases."""

import enum
from datetime import datetime, UTC
from typing import Iterable, Optional

from pydantic import BaseModel, ConfigDict, Field, computed_field

from ..models.enums import AssessmentType, ASSESSMENT_SEQUENCE, ProjectType
from .scoring import convert_decimal

_INTERNAL_TYPES = (AssessmentType.cla1, AssessmentType.cla2, AssessmentType.cla3)


class GradingStatus(enum.Enum):
    pending = "pending"
    partial = "partial"
    graded = "graded"


class StudentStatus(enum.Enum):
    """What a student sees for their own evaluation."""
    under_review = "under_review"
    pending_release = "pending_release"
    released = "released"


class ComponentScore(BaseModel):
    """One phase's raw score. A conduct of 0 means not graded yet."""

    model_config = ConfigDict(frozen=True, from_attributes=True)

    conduct: float = Field(default=0, ge=0)
    comments: str = ""
    conducted_at: Optional[datetime] = None

    @property
    def is_graded(self) -> bool:
        return self.conduct > 0


class Evaluation(BaseModel):
    """A student's evaluation for one academic term.

    Values are immutable; every update returns a new ``Evaluation`` with its
    totals derived from the component scores.
    """

    model_config = ConfigDict(frozen=True)

    student_id: str
    term: str
    project_type: ProjectType
    group_id: Optional[str] = None
    cla1: ComponentScore = ComponentScore()
    cla2: ComponentScore = ComponentScore()
    cla3: ComponentScore = ComponentScore()
    external: ComponentScore = ComponentScore()
    is_published: bool = False
    published_at: Optional[datetime] = None
    published_by: Optional[str] = None

    def component(self, assessment_type: AssessmentType) -> ComponentScore:
        return getattr(self, assessment_type.name)

    def converted(self, assessment_type: AssessmentType) -> float:
        return float(convert_decimal(self.component(assessment_type).conduct, assessment_type))

    def _sum(self, types) -> float:
        return float(sum(
            convert_decimal(self.component(t).conduct, t) for t in types
        ))

    @computed_field
    @property
    def total_internal(self) -> float:
        return self._sum(_INTERNAL_TYPES)

    @computed_field
    @property
    def total_external(self) -> float:
        return self._sum((AssessmentType.external,))

    @computed_field
    @property
    def total(self) -> float:
        return self._sum(ASSESSMENT_SEQUENCE)

    @property
    def visible_total(self) -> Optional[float]:
        """Total as a student may see it: hidden until published."""
        return self.total if self.is_published else None

    def set_component(
        self,
        assessment_type: AssessmentType,
        conduct: float,
        comments: str = "",
        conducted_at: Optional[datetime] = None,
    ) -> "Evaluation":
        score = ComponentScore(
            conduct=conduct,
            comments=comments,
            conducted_at=conducted_at or datetime.now(UTC),
        )
        return self.model_copy(update={assessment_type.name: score})

    def graded_types(self) -> set[AssessmentType]:
        return {t for t in ASSESSMENT_SEQUENCE if self.component(t).is_graded}

    def has_any_score(self) -> bool:
        return bool(self.graded_types())

    def is_complete(self) -> bool:
        return len(self.graded_types()) == len(ASSESSMENT_SEQUENCE)

    def grading_status(
        self,
        expected: Optional[Iterable[AssessmentType]] = None,
        release_gated: bool = False,
    ) -> GradingStatus:
        """Status over the phases a particular view cares about.

        A submission card for one phase passes just that phase; the overall
        summary uses all four. With ``release_gated`` a published evaluation
        always reads as graded.
        """
        if release_gated and self.is_published:
            return GradingStatus.graded
        expected = set(ASSESSMENT_SEQUENCE if expected is None else expected)
        graded = expected & self.graded_types()
        if not graded:
            return GradingStatus.pending
        if graded == expected:
            return GradingStatus.graded
        return GradingStatus.partial

    def student_status(self) -> StudentStatus:
        if self.is_published:
            return StudentStatus.released
        if self.has_any_score():
            return StudentStatus.pending_release
        return StudentStatus.under_review

    def publish(self, published_by: Optional[str] = None, at: Optional[datetime] = None) -> "Evaluation":
        """Mark the evaluation as released. Publishing twice changes nothing."""
        if self.is_published:
            return self
        return self.model_copy(update={
            "is_published": True,
            "published_at": at or datetime.now(UTC),
            "published_by": published_by,
        })
