"""Shared fixtures: in-memory database and seeded users."""

import pytest
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine

from doubtout.models import Base, Doubt, DoubtStatus, Subject, User, UserRole

# Use in-memory SQLite
TEST_DATABASE_URL = "sqlite+aiosqlite:///:memory:"


async def make_user(
    session: AsyncSession,
    email: str,
    role: UserRole,
    full_name: str,
    points: int = 0,
    password_hash: str = "not-a-real-hash",
) -> int:
    """Insert and commit a user, returning its ID."""
    user = User(
        email=email,
        full_name=full_name,
        password_hash=password_hash,
        role=role,
        points=points,
    )
    session.add(user)
    await session.commit()
    return user.id


async def make_doubt(
    session: AsyncSession,
    asker_id: int,
    question: str,
    course: str = "DS",
    semester: int = 3,
    branch: str = "CS",
    assigned_professor_id: int | None = None,
) -> int:
    """Insert and commit a pending doubt, returning its ID."""
    doubt = Doubt(
        asker_id=asker_id,
        branch=branch,
        semester=semester,
        course=course,
        question=question,
        assigned_professor_id=assigned_professor_id,
        status=DoubtStatus.PENDING,
    )
    session.add(doubt)
    await session.commit()
    return doubt.id


async def make_subject(
    session: AsyncSession,
    department_id: int,
    semester: int,
    subject_name: str,
) -> int:
    """Insert and commit a subject, returning its ID."""
    subject = Subject(
        department_id=department_id,
        semester=semester,
        subject_name=subject_name,
    )
    session.add(subject)
    await session.commit()
    return subject.id


@pytest.fixture
async def test_engine():
    """Create an async SQLite engine for testing."""
    engine = create_async_engine(TEST_DATABASE_URL, echo=False)
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    await engine.dispose()


@pytest.fixture
def session_factory(test_engine):
    """Create the session factory bound to the test engine."""
    return async_sessionmaker(test_engine, class_=AsyncSession, expire_on_commit=False)


@pytest.fixture
async def test_session(session_factory):
    """Create a test session."""
    async with session_factory() as session:
        yield session


@pytest.fixture
async def student_id(test_session: AsyncSession) -> int:
    """A registered student."""
    return await make_user(
        test_session, "asha@bmsce.ac.in", UserRole.STUDENT, "Asha Rao"
    )


@pytest.fixture
async def second_student_id(test_session: AsyncSession) -> int:
    """Another registered student."""
    return await make_user(
        test_session, "bharat@bmsce.ac.in", UserRole.STUDENT, "Bharat Menon"
    )


@pytest.fixture
async def professor_id(test_session: AsyncSession) -> int:
    """A registered professor."""
    return await make_user(
        test_session, "prof.iyer@bmsce.ac.in", UserRole.PROFESSOR, "Dr. Iyer"
    )


@pytest.fixture
async def other_professor_id(test_session: AsyncSession) -> int:
    """A second professor."""
    return await make_user(
        test_session, "prof.khan@bmsce.ac.in", UserRole.PROFESSOR, "Dr. Khan"
    )
