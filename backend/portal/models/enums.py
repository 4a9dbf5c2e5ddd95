"""Shared enums for models and the assessment engine."""
import enum


class ProjectType(enum.Enum):
    IDP = "IDP"
    UROP = "UROP"
    CAPSTONE = "CAPSTONE"


class WindowType(enum.Enum):
    proposal = "proposal"
    application = "application"
    submission = "submission"
    assessment = "assessment"
    grade_release = "grade_release"


class SubmissionType(enum.Enum):
    solo = "solo"
    group = "group"


class AssessmentType(enum.Enum):
    """Gradable components, in the order they are conducted."""
    cla1 = "CLA-1"
    cla2 = "CLA-2"
    cla3 = "CLA-3"
    external = "External"

    @property
    def sequence_index(self) -> int:
        return ASSESSMENT_SEQUENCE.index(self)

    def __lt__(self, other):
        if not isinstance(other, AssessmentType):
            return NotImplemented
        return self.sequence_index < other.sequence_index

    @property
    def display_name(self) -> str:
        return _DISPLAY_NAMES[self]

    @property
    def progress(self) -> int:
        """Percentage of the course completed once this phase is done."""
        return (self.sequence_index + 1) * 100 // len(ASSESSMENT_SEQUENCE)


ASSESSMENT_SEQUENCE = (
    AssessmentType.cla1,
    AssessmentType.cla2,
    AssessmentType.cla3,
    AssessmentType.external,
)

_DISPLAY_NAMES = {
    AssessmentType.cla1: "CLA-1 - Project Proposal",
    AssessmentType.cla2: "CLA-2 - Progress Review",
    AssessmentType.cla3: "CLA-3 - Final Implementation",
    AssessmentType.external: "External Evaluation",
}
