"""Grading workflow: validate and apply solo/group grades, release results."""
import logging
from dataclasses import dataclass, field
from datetime import datetime, UTC
from typing import Callable, Mapping, Optional, Union

from ..assessment.evaluation import Evaluation
from ..assessment.phases import AssessmentPhaseResolver
from ..assessment.scoring import SCORE_TABLE, is_valid_raw_score
from ..models.enums import AssessmentType, ProjectType
from .errors import (
    GradingError, GradesLocked, NotGroupMember, PhaseNotActive,
    ScoreOutOfRange, StudentNotEnrolled, UnknownComponent,
)
from .repository import EvaluationRepository

logger = logging.getLogger(__name__)

GradeResult = Union[Evaluation, GradingError]


@dataclass
class GroupGradingResult:
    """Per-member outcome of a group grading action.

    Members are graded independently, so both maps can be non-empty.
    """
    succeeded: set[str] = field(default_factory=set)
    failed: dict[str, GradingError] = field(default_factory=dict)
    evaluations: dict[str, Evaluation] = field(default_factory=dict)

    @property
    def is_partial(self) -> bool:
        return bool(self.succeeded) and bool(self.failed)


def _coerce_assessment_type(value) -> Union[AssessmentType, UnknownComponent]:
    if isinstance(value, AssessmentType):
        candidate = value
    else:
        try:
            candidate = AssessmentType(value)
        except ValueError:
            try:
                candidate = AssessmentType[str(value)]
            except KeyError:
                return UnknownComponent(value=str(value))
    if candidate not in SCORE_TABLE:
        return UnknownComponent(value=candidate.value)
    return candidate


class GradingWorkflow:
    def __init__(
        self,
        repository: EvaluationRepository,
        resolver: AssessmentPhaseResolver,
        term: str,
        enforce_windows: bool = True,
        clock: Optional[Callable[[], datetime]] = None,
    ):
        self.repository = repository
        self.resolver = resolver
        self.term = term
        self.enforce_windows = enforce_windows
        self.clock = clock or (lambda: datetime.now(UTC))

    def evaluation_for(self, student_id: str) -> Optional[Evaluation]:
        return self.repository.get(student_id, self.term)

    def grade_solo(
        self,
        student_id: str,
        assessment_type,
        raw_score: float,
        comments: str = "",
        now: Optional[datetime] = None,
    ) -> GradeResult:
        """Record one student's raw score for a phase.

        Returns the updated evaluation, or the first validation failure found.
        """
        now = now or self.clock()
        assessment_type = _coerce_assessment_type(assessment_type)
        if isinstance(assessment_type, GradingError):
            return self._reject(student_id, assessment_type)

        if not is_valid_raw_score(raw_score, assessment_type):
            return self._reject(student_id, ScoreOutOfRange(
                assessment_type=assessment_type,
                raw_score=raw_score,
                maximum=SCORE_TABLE[assessment_type].raw_max,
            ))

        enrollment = self.repository.enrollment_for(student_id, self.term)
        if enrollment is None:
            return self._reject(student_id, StudentNotEnrolled(student_id=student_id, term=self.term))

        if self.enforce_windows and not self.resolver.is_phase_active(
            now, enrollment.project_type, assessment_type
        ):
            return self._reject(student_id, PhaseNotActive(
                assessment_type=assessment_type,
                project_type=enrollment.project_type,
            ))

        evaluation = self.repository.get(student_id, self.term)
        if evaluation is None:
            evaluation = Evaluation(
                student_id=student_id,
                term=self.term,
                project_type=enrollment.project_type,
                group_id=enrollment.group_id,
            )
        elif evaluation.is_published:
            return self._reject(student_id, GradesLocked(
                student_id=student_id,
                published_at=evaluation.published_at,
            ))

        evaluation = evaluation.set_component(assessment_type, raw_score, comments, conducted_at=now)
        saved = self.repository.save(evaluation)
        logger.info(
            f"{assessment_type.value} score updated for student {student_id}: "
            f"{raw_score}{' with comments' if comments else ''}"
        )
        return saved

    def grade_group(
        self,
        group_id: str,
        assessment_type,
        scores: Mapping[str, float],
        comments: str = "",
        now: Optional[datetime] = None,
    ) -> GroupGradingResult:
        """Grade each listed member on their own; one bad score never blocks the rest."""
        now = now or self.clock()
        members = self.repository.group_members(group_id, self.term)
        result = GroupGradingResult()
        for student_id, raw_score in scores.items():
            if student_id not in members:
                result.failed[student_id] = self._reject(
                    student_id, NotGroupMember(student_id=student_id, group_id=group_id)
                )
                continue
            outcome = self.grade_solo(student_id, assessment_type, raw_score, comments, now=now)
            if isinstance(outcome, GradingError):
                result.failed[student_id] = outcome
            else:
                result.succeeded.add(student_id)
                result.evaluations[student_id] = outcome
        if result.failed:
            logger.info(
                f"Group {group_id} graded with {len(result.succeeded)} succeeded "
                f"and {len(result.failed)} failed"
            )
        return result

    def release_phase_for_project_type(
        self,
        project_type: ProjectType,
        released_by: Optional[str] = None,
        now: Optional[datetime] = None,
    ) -> int:
        """Publish every unpublished evaluation for the project type this term.

        Safe to re-run: already published evaluations are left alone and not
        counted. Evaluations without any scored component stay unpublished.
        """
        now = now or self.clock()
        published = 0
        for evaluation in self.repository.list_for_project_type(project_type, self.term):
            if evaluation.is_published or not evaluation.has_any_score():
                continue
            self.repository.save(evaluation.publish(published_by=released_by, at=now))
            published += 1
        logger.info(f"Released {published} {project_type.value} evaluations for term {self.term}")
        return published

    def released_count(self, project_type: ProjectType) -> int:
        return self.repository.count_published(project_type, self.term)

    def _reject(self, student_id: str, error: GradingError) -> GradingError:
        logger.debug(f"Grading rejected for student {student_id}: {error.message}")
        return error
