"""Test configuration and fixtures."""

import pytest
from datetime import datetime, timedelta, UTC
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from portal.database import Base
from portal import models  # noqa: F401  registers tables on Base.metadata


# Use in-memory SQLite for testing
TEST_DATABASE_URL = "sqlite:///:memory:"
TEST_TERM = "2025-26"


@pytest.fixture(scope="session")
def engine():
    """Create test database engine."""
    engine = create_engine(
        TEST_DATABASE_URL,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    return engine


@pytest.fixture(scope="function")
def db_session(engine):
    """Create test database session."""
    TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

    # Start a transaction
    connection = engine.connect()
    transaction = connection.begin()
    session = TestingSessionLocal(bind=connection)

    yield session

    # Rollback transaction and close
    session.close()
    transaction.rollback()
    connection.close()


@pytest.fixture
def now():
    """Current instant; windows below are open around it."""
    return datetime.now(UTC)


@pytest.fixture
def make_window(db_session, now):
    """Factory for stored windows, open around ``now`` unless told otherwise."""
    from portal.models import Window, WindowType, ProjectType

    def _make(assessment_type=None, window_type=WindowType.assessment,
              project_type=ProjectType.IDP, start=None, end=None):
        window = Window(
            window_type=window_type,
            project_type=project_type,
            assessment_type=assessment_type,
            start_date=start or now - timedelta(days=1),
            end_date=end or now + timedelta(days=1),
        )
        db_session.add(window)
        db_session.commit()
        db_session.refresh(window)
        return window

    return _make


@pytest.fixture
def make_submission(db_session):
    """Factory for stored submissions covering the given students."""
    from portal.models import Submission, SubmissionMember, SubmissionType, ProjectType

    def _make(student_ids, group_id=None, project_type=ProjectType.IDP, term=TEST_TERM,
              assessment_type=None):
        submission = Submission(
            submission_type=SubmissionType.group if group_id else SubmissionType.solo,
            project_type=project_type,
            group_id=group_id,
            term=term,
            assessment_type=assessment_type,
            github_url="https://github.com/example/project",
            report_url="/uploads/report.pdf",
            members=[SubmissionMember(student_id=sid) for sid in student_ids],
        )
        db_session.add(submission)
        db_session.commit()
        db_session.refresh(submission)
        return submission

    return _make


@pytest.fixture
def sample_group(make_submission):
    """A three-student IDP group submission."""
    return make_submission(["stu-1", "stu-2", "stu-3"], group_id="grp-1")


@pytest.fixture
def cla1_window(make_window):
    """An open CLA-1 assessment window for IDP."""
    from portal.models import AssessmentType
    return make_window(AssessmentType.cla1)


@pytest.fixture
def workflow(db_session):
    """Grading workflow over the test session with windows loaded lazily."""
    from portal.assessment import AssessmentPhaseResolver
    from portal.grading import EvaluationRepository, GradingWorkflow, WindowRepository

    class _LiveResolver(AssessmentPhaseResolver):
        # Reload windows on every query so fixtures added later are visible
        def __init__(self):
            pass

        @property
        def catalog(self):
            return WindowRepository(db_session).catalog()

    return GradingWorkflow(EvaluationRepository(db_session), _LiveResolver(), TEST_TERM)


@pytest.fixture
def client(db_session):
    """Test client sharing the test session."""
    from fastapi.testclient import TestClient
    from portal.main import app
    from portal.database import get_db

    def override_get_db():
        yield db_session

    app.dependency_overrides[get_db] = override_get_db

    with TestClient(app) as test_client:
        yield test_client

    app.dependency_overrides.clear()
