"""Test cases for assessment phase resolution."""

import pytest
from datetime import datetime, timedelta, UTC

from portal.assessment import (
    AssessmentPhaseResolver, PhaseMode, WindowCatalog, WindowRecord,
    is_valid_transition, next_logical_phase,
)
from portal.models import AssessmentType, ProjectType, WindowType

NOW = datetime(2025, 9, 15, 12, 0, tzinfo=UTC)


def window(assessment_type, window_type=WindowType.assessment, project_type=ProjectType.IDP,
           start_offset=-1, end_offset=1):
    return WindowRecord(
        window_type=window_type,
        project_type=project_type,
        assessment_type=assessment_type,
        start_date=NOW + timedelta(days=start_offset),
        end_date=NOW + timedelta(days=end_offset),
    )


@pytest.fixture
def resolver():
    return AssessmentPhaseResolver(WindowCatalog([
        window(AssessmentType.cla2),
        window(AssessmentType.cla1, window_type=WindowType.submission),
        window(AssessmentType.cla3, project_type=ProjectType.UROP),
        window(AssessmentType.external, start_offset=-10, end_offset=-5),
        window(None, window_type=WindowType.grade_release, project_type=ProjectType.CAPSTONE),
    ]))


class TestResolver:
    """Test cases for AssessmentPhaseResolver."""

    def test_current_grading_phase(self, resolver):
        """Test the open assessment window's type is reported."""
        assert resolver.current_grading_phase(NOW, ProjectType.IDP) == AssessmentType.cla2
        assert resolver.current_grading_phase(NOW, ProjectType.UROP) == AssessmentType.cla3

    def test_current_submission_phase(self, resolver):
        """Test submission windows are resolved separately from assessment windows."""
        assert resolver.current_submission_phase(NOW, ProjectType.IDP) == AssessmentType.cla1
        assert resolver.current_submission_phase(NOW, ProjectType.UROP) is None

    def test_no_window_is_none(self, resolver):
        """Test that a closed state is None rather than an error."""
        assert resolver.current_grading_phase(NOW, ProjectType.CAPSTONE) is None
        later = NOW + timedelta(days=30)
        assert resolver.current_grading_phase(later, ProjectType.IDP) is None

    def test_resolve_phase_modes(self, resolver):
        """Test resolve_phase dispatches on mode."""
        assert resolver.resolve_phase(NOW, ProjectType.IDP, PhaseMode.grading) == AssessmentType.cla2
        assert resolver.resolve_phase(NOW, ProjectType.IDP, PhaseMode.submission) == AssessmentType.cla1

    def test_overlap_earliest_start_wins(self):
        """Test that overlapping windows resolve to the earliest-opened one."""
        resolver = AssessmentPhaseResolver(WindowCatalog([
            window(AssessmentType.cla3, start_offset=-1),
            window(AssessmentType.cla2, start_offset=-3),
        ]))
        assert resolver.current_grading_phase(NOW, ProjectType.IDP) == AssessmentType.cla2
        assert resolver.active_phases(NOW, ProjectType.IDP) == {AssessmentType.cla2, AssessmentType.cla3}

    def test_windows_without_assessment_type_ignored(self):
        """Test that untyped assessment windows never resolve to a phase."""
        resolver = AssessmentPhaseResolver(WindowCatalog([window(None)]))
        assert resolver.current_grading_phase(NOW, ProjectType.IDP) is None
        assert resolver.active_phases(NOW, ProjectType.IDP) == set()

    def test_is_phase_active(self, resolver):
        """Test direct membership checks."""
        assert resolver.is_phase_active(NOW, ProjectType.IDP, AssessmentType.cla2)
        assert not resolver.is_phase_active(NOW, ProjectType.IDP, AssessmentType.external)
        # Submission windows do not open grading
        assert not resolver.is_phase_active(NOW, ProjectType.IDP, AssessmentType.cla1)

    def test_is_submission_open(self, resolver):
        """Test submission window membership."""
        assert resolver.is_submission_open(NOW, ProjectType.IDP, AssessmentType.cla1)
        assert not resolver.is_submission_open(NOW, ProjectType.IDP, AssessmentType.cla2)

    def test_is_grade_release_open(self, resolver):
        """Test grade release windows."""
        assert resolver.is_grade_release_open(NOW, ProjectType.CAPSTONE)
        assert not resolver.is_grade_release_open(NOW, ProjectType.IDP)


class TestNextLogicalPhase:
    """Test cases for next_logical_phase."""

    def test_nothing_completed(self):
        """Test the first suggestion is CLA-1."""
        assert next_logical_phase([]) == AssessmentType.cla1

    def test_follows_highest_completed(self):
        """Test the suggestion follows the furthest phase graded."""
        assert next_logical_phase([AssessmentType.cla1, AssessmentType.cla2]) == AssessmentType.cla3
        assert next_logical_phase({AssessmentType.cla2}) == AssessmentType.cla3

    def test_external_is_terminal(self):
        """Test that all four completed still suggests External."""
        assert next_logical_phase(list(AssessmentType)) == AssessmentType.external
        assert next_logical_phase([AssessmentType.external]) == AssessmentType.external

    def test_available_on_resolver(self):
        """Test the resolver exposes the same pure function."""
        assert AssessmentPhaseResolver.next_logical_phase([AssessmentType.cla1]) == AssessmentType.cla2


class TestTransitions:
    """Test cases for is_valid_transition."""

    def test_first_must_be_cla1(self):
        """Test the opening phase."""
        assert is_valid_transition(None, AssessmentType.cla1)
        assert not is_valid_transition(None, AssessmentType.cla2)

    def test_same_or_next(self):
        """Test re-evaluation and stepping forward are allowed."""
        assert is_valid_transition(AssessmentType.cla2, AssessmentType.cla2)
        assert is_valid_transition(AssessmentType.cla2, AssessmentType.cla3)

    def test_skipping_or_going_back(self):
        """Test skipping ahead and going back are rejected."""
        assert not is_valid_transition(AssessmentType.cla1, AssessmentType.cla3)
        assert not is_valid_transition(AssessmentType.cla3, AssessmentType.cla2)


class TestAssessmentType:
    """Test cases for AssessmentType ordering and labels."""

    def test_total_order(self):
        """Test the phases sort in the order they are conducted."""
        shuffled = [AssessmentType.external, AssessmentType.cla1, AssessmentType.cla3, AssessmentType.cla2]
        assert sorted(shuffled) == [
            AssessmentType.cla1, AssessmentType.cla2, AssessmentType.cla3, AssessmentType.external,
        ]

    def test_display_and_progress(self):
        """Test display names and progress percentages."""
        assert AssessmentType.cla2.display_name == "CLA-2 - Progress Review"
        assert [t.progress for t in sorted(AssessmentType)] == [25, 50, 75, 100]
