import os
from datetime import datetime, timedelta, timezone

import pytest

TEST_DB_FILE = "test_assignment_desk.db"
TEST_DB_URL = f"sqlite:///./{TEST_DB_FILE}"

# startup init_db must create its schema in the test database too
os.environ.setdefault("ASSIGNMENT_DESK_DATABASE_URL", TEST_DB_URL)

from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker

from assignment_desk.core.deps import get_db
from assignment_desk.core.security import create_access_token
from assignment_desk.db.base import Base
from assignment_desk.main import app
from assignment_desk.models.assignment import Assignment
from assignment_desk.models.course import Course
from assignment_desk.models.submission import Submission
from assignment_desk.services.board import registry
from assignment_desk.services.store import RemoteStore

engine = create_engine(
    TEST_DB_URL,
    connect_args={"check_same_thread": False},
)
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

TEACHER_1 = "teacher-1"
TEACHER_2 = "teacher-2"
ADMIN = "admin-1"


def override_get_db():
    db = TestingSessionLocal()
    try:
        yield db
    finally:
        db.close()


def token_for(user_id: str | None, role: str | None) -> str:
    claims = {"role": role}
    if user_id is not None:
        claims["sub"] = user_id
    return create_access_token(claims)


def auth_header(token: str) -> dict:
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture(scope="session", autouse=True)
def setup_test_db():
    """Create a fresh schema once for the whole test session."""
    Base.metadata.drop_all(bind=engine)
    Base.metadata.create_all(bind=engine)
    yield
    Base.metadata.drop_all(bind=engine)
    engine.dispose()
    if os.path.exists(TEST_DB_FILE):
        os.remove(TEST_DB_FILE)


@pytest.fixture(autouse=True)
def seed_data():
    """
    Seed a clean dataset for each test:

    - c1 "Algebra I" taught by teacher-1, c2 "Biology" taught by teacher-2
    - a1 -> c1 (oldest, 3 submissions), a2 -> c2, a3 -> c1 (newest)
    """
    registry.clear()
    db = TestingSessionLocal()
    try:
        db.query(Submission).delete()
        db.query(Assignment).delete()
        db.query(Course).delete()
        db.commit()

        now = datetime.now(timezone.utc)

        db.add_all(
            [
                Course(id="c1", title="Algebra I", instructor_id=TEACHER_1),
                Course(id="c2", title="Biology", instructor_id=TEACHER_2),
            ]
        )
        db.add_all(
            [
                Assignment(
                    id="a1",
                    course_id="c1",
                    title="Linear equations",
                    description="Chapter 2 exercises",
                    due_date=(now + timedelta(days=7)).date(),
                    points=50,
                    created_at=now - timedelta(days=3),
                    created_by=TEACHER_1,
                ),
                Assignment(
                    id="a2",
                    course_id="c2",
                    title="Cell structure",
                    points=100,
                    created_at=now - timedelta(days=2),
                    created_by=TEACHER_2,
                ),
                Assignment(
                    id="a3",
                    course_id="c1",
                    title="Quadratics",
                    due_date=(now - timedelta(days=1)).date(),
                    points=80,
                    created_at=now - timedelta(days=1),
                    created_by=TEACHER_1,
                ),
            ]
        )
        db.add_all(
            [
                Submission(assignment_id="a1", student_id=f"student-{n}", content="work")
                for n in range(3)
            ]
        )
        db.commit()

        yield
    finally:
        db.close()


@pytest.fixture()
def db():
    session = TestingSessionLocal()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture()
def store(db):
    return RemoteStore(db)


@pytest.fixture()
def client():
    """Test client that uses the test DB session via dependency override."""
    app.dependency_overrides[get_db] = override_get_db
    with TestClient(app) as c:
        yield c
    app.dependency_overrides.clear()
