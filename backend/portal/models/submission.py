"""Submission models."""

from sqlalchemy import Column, String, ForeignKey, Enum as SQLEnum, Integer, UniqueConstraint
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func
import uuid

from ..database import Base
from .enums import AssessmentType, ProjectType, SubmissionType
from .types import UTCDateTime


class Submission(Base):
    """Solo or group project submission, owned by the submission subsystem."""
    __tablename__ = "submissions"

    id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    submission_type = Column(SQLEnum(SubmissionType), nullable=False, default=SubmissionType.solo)
    project_type = Column(SQLEnum(ProjectType), nullable=False)
    group_id = Column(String(36), index=True)
    term = Column(String(20), nullable=False, index=True)
    assessment_type = Column(SQLEnum(AssessmentType))
    github_url = Column(String(500))
    report_url = Column(String(500))
    presentation_url = Column(String(500))
    submitted_at = Column(UTCDateTime(), server_default=func.now())

    # Relationships
    members = relationship("SubmissionMember", back_populates="submission", cascade="all, delete-orphan")

    def __repr__(self):
        return f"<Submission(id={self.id}, type='{self.submission_type.value}')>"

    @property
    def is_group(self):
        """Check if this submission belongs to a group."""
        return self.submission_type == SubmissionType.group

    @property
    def student_ids(self):
        """Ids of the students covered by this submission."""
        return [member.student_id for member in self.members]


class SubmissionMember(Base):
    """A student covered by a submission."""
    __tablename__ = "submission_members"
    __table_args__ = (
        UniqueConstraint("submission_id", "student_id", name="uq_submission_student"),
    )

    id = Column(Integer, primary_key=True, index=True)
    submission_id = Column(String(36), ForeignKey("submissions.id"), nullable=False)
    student_id = Column(String(36), nullable=False, index=True)

    submission = relationship("Submission", back_populates="members")
