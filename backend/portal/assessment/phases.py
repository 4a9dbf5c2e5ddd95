"""Resolve which assessment phase is currently open for a project type."""

import enum
from datetime import datetime
from typing import Iterable, Optional

from ..models.enums import AssessmentType, ASSESSMENT_SEQUENCE, ProjectType, WindowType
from .windows import WindowCatalog


class PhaseMode(enum.Enum):
    grading = "grading"
    submission = "submission"


_MODE_WINDOW_TYPES = {
    PhaseMode.grading: WindowType.assessment,
    PhaseMode.submission: WindowType.submission,
}


def next_logical_phase(completed: Iterable[AssessmentType]) -> AssessmentType:
    """Suggest the phase that follows the furthest one already graded.

    Nothing graded yet means CLA-1. External is terminal: once it has been
    reached it keeps being returned.
    """
    completed = list(completed)
    if not completed:
        return ASSESSMENT_SEQUENCE[0]
    highest = max(t.sequence_index for t in completed)
    if highest < len(ASSESSMENT_SEQUENCE) - 1:
        return ASSESSMENT_SEQUENCE[highest + 1]
    return AssessmentType.external


def is_valid_transition(from_type: Optional[AssessmentType], to_type: AssessmentType) -> bool:
    """Allow re-evaluating the same phase or moving to the next one."""
    if from_type is None:
        return to_type == ASSESSMENT_SEQUENCE[0]
    step = to_type.sequence_index - from_type.sequence_index
    return step in (0, 1)


class AssessmentPhaseResolver:
    """Answers "which phase should I act on now" from a window catalog.

    Every query is computed fresh from the catalog; a closed phase is reported
    as ``None`` or ``False``, never as an error.
    """

    def __init__(self, catalog: WindowCatalog):
        self.catalog = catalog

    def _typed_windows(self, now: datetime, window_type: WindowType, project_type: ProjectType):
        return [
            w for w in self.catalog.active_windows(now, window_type, project_type)
            if w.assessment_type is not None
        ]

    def _first_phase(self, now, window_type, project_type) -> Optional[AssessmentType]:
        windows = self._typed_windows(now, window_type, project_type)
        return windows[0].assessment_type if windows else None

    def current_grading_phase(self, now: datetime, project_type: ProjectType) -> Optional[AssessmentType]:
        return self._first_phase(now, WindowType.assessment, project_type)

    def current_submission_phase(self, now: datetime, project_type: ProjectType) -> Optional[AssessmentType]:
        return self._first_phase(now, WindowType.submission, project_type)

    def resolve_phase(
        self,
        now: datetime,
        project_type: ProjectType,
        mode: PhaseMode = PhaseMode.grading,
    ) -> Optional[AssessmentType]:
        return self._first_phase(now, _MODE_WINDOW_TYPES[mode], project_type)

    def active_phases(self, now: datetime, project_type: ProjectType) -> set[AssessmentType]:
        return {
            w.assessment_type
            for w in self._typed_windows(now, WindowType.assessment, project_type)
        }

    def is_phase_active(
        self,
        now: datetime,
        project_type: ProjectType,
        assessment_type: AssessmentType,
    ) -> bool:
        return assessment_type in self.active_phases(now, project_type)

    def is_submission_open(
        self,
        now: datetime,
        project_type: ProjectType,
        assessment_type: AssessmentType,
    ) -> bool:
        return any(
            w.assessment_type == assessment_type
            for w in self._typed_windows(now, WindowType.submission, project_type)
        )

    def is_grade_release_open(self, now: datetime, project_type: ProjectType) -> bool:
        return bool(self.catalog.active_windows(now, WindowType.grade_release, project_type))

    next_logical_phase = staticmethod(next_logical_phase)
    is_valid_transition = staticmethod(is_valid_transition)
