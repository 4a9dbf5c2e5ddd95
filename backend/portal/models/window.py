"""Window model."""

from sqlalchemy import Column, String, Enum as SQLEnum, CheckConstraint, Index
from sqlalchemy.sql import func
import uuid

from ..database import Base
from .enums import AssessmentType, ProjectType, WindowType
from .types import UTCDateTime


class Window(Base):
    """Time-bounded window gating proposals, submissions, grading and release.

    Rows are created by coordinator tooling; the assessment engine only reads
    them.
    """
    __tablename__ = "windows"
    __table_args__ = (
        CheckConstraint("start_date <= end_date", name="ck_window_bounds"),
        Index("ix_windows_lookup", "window_type", "project_type"),
    )

    id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    window_type = Column(SQLEnum(WindowType), nullable=False)
    project_type = Column(SQLEnum(ProjectType), nullable=False)
    assessment_type = Column(SQLEnum(AssessmentType), nullable=True)
    start_date = Column(UTCDateTime(), nullable=False)
    end_date = Column(UTCDateTime(), nullable=False)
    created_by = Column(String(36))
    created_at = Column(UTCDateTime(), server_default=func.now())

    def __repr__(self):
        return f"<Window(id={self.id}, type='{self.window_type.value}', project_type='{self.project_type.value}')>"
