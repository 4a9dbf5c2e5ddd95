"""Student evaluation model."""

from sqlalchemy import Column, String, Text, Boolean, Float, Enum as SQLEnum, UniqueConstraint
from sqlalchemy.sql import func
import uuid

from ..database import Base
from .enums import ProjectType
from .types import UTCDateTime


class StudentEvaluation(Base):
    """Stored evaluation row, one per student and academic term.

    Totals are written from the domain aggregate on every save so that
    reporting queries can read them without recomputing conversions.
    """
    __tablename__ = "student_evaluations"
    __table_args__ = (
        UniqueConstraint("student_id", "term", name="uq_student_term"),
    )

    id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    student_id = Column(String(36), nullable=False, index=True)
    term = Column(String(20), nullable=False)
    project_type = Column(SQLEnum(ProjectType), nullable=False, index=True)
    group_id = Column(String(36), index=True)

    cla1_conduct = Column(Float, nullable=False, default=0)
    cla1_comments = Column(Text, default="")
    cla1_conducted_at = Column(UTCDateTime())
    cla2_conduct = Column(Float, nullable=False, default=0)
    cla2_comments = Column(Text, default="")
    cla2_conducted_at = Column(UTCDateTime())
    cla3_conduct = Column(Float, nullable=False, default=0)
    cla3_comments = Column(Text, default="")
    cla3_conducted_at = Column(UTCDateTime())
    external_conduct = Column(Float, nullable=False, default=0)
    external_comments = Column(Text, default="")
    external_conducted_at = Column(UTCDateTime())

    total_internal = Column(Float, nullable=False, default=0)
    total_external = Column(Float, nullable=False, default=0)
    total = Column(Float, nullable=False, default=0)

    is_published = Column(Boolean, nullable=False, default=False, index=True)
    published_at = Column(UTCDateTime())
    published_by = Column(String(36))
    created_at = Column(UTCDateTime(), server_default=func.now())
    updated_at = Column(UTCDateTime(), server_default=func.now(), onupdate=func.now())

    def __repr__(self):
        return f"<StudentEvaluation(id={self.id}, student_id='{self.student_id}', term='{self.term}')>"
