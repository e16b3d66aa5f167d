"""End-to-end happy path through the DoubtOut API.

Flow: signup -> login -> ask -> answer -> practice -> review -> leaderboard
using httpx against the ASGI app with an in-memory SQLite database.
"""

import pytest
from httpx import ASGITransport, AsyncClient

from doubtout.db import get_db
from doubtout.main import app


@pytest.fixture
def e2e_get_db(session_factory):
    """Per-request sessions bound to the test engine."""

    async def _get_db():
        async with session_factory() as session:
            try:
                yield session
                await session.commit()
            except Exception:
                await session.rollback()
                raise

    return _get_db


@pytest.fixture
async def api(e2e_get_db):
    """An httpx client wired to the app with the test database."""
    app.dependency_overrides[get_db] = e2e_get_db
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client
    app.dependency_overrides.clear()


async def _signup(api: AsyncClient, email: str, full_name: str, role: str) -> int:
    response = await api.post(
        "/api/signup",
        json={
            "email": email,
            "password": "s3cret-pass",
            "fullName": full_name,
            "role": role,
            "roleDetails": {"department": "CSE"},
        },
    )
    assert response.status_code == 201, response.text
    return response.json()["user_id"]


class TestE2EHappyPath:
    """Full doubt lifecycle through the HTTP surface."""

    async def test_full_flow(self, api: AsyncClient) -> None:
        """Ask, answer, practice, approve and check the leaderboard."""
        asker = await _signup(api, "asha@bmsce.ac.in", "Asha Rao", "student")
        practicer = await _signup(api, "bharat@bmsce.ac.in", "Bharat Menon", "student")
        professor = await _signup(api, "iyer@bmsce.ac.in", "Dr. Iyer", "professor")

        # Login, then resolve the token
        response = await api.post(
            "/api/login",
            json={
                "email": "iyer@bmsce.ac.in",
                "password": "s3cret-pass",
                "role": "professor",
            },
        )
        assert response.status_code == 200
        login = response.json()
        assert login["user"] == {
            "user_id": professor,
            "fullName": "Dr. Iyer",
            "role": "professor",
        }
        response = await api.get(
            "/api/auth/me",
            headers={"Authorization": f"Bearer {login['token']}"},
        )
        assert response.json()["user_id"] == professor

        # Student asks an open-pool doubt
        response = await api.post(
            "/api/doubts",
            json={
                "user_id": asker,
                "branch": "CSE",
                "semester": 3,
                "course": "DS",
                "question": "What is a binary heap?",
                "professor": "",
            },
        )
        assert response.status_code == 201
        doubt_id = response.json()["doubt_id"]

        response = await api.get(f"/api/professor/doubts/{professor}")
        (inbox_entry,) = response.json()["doubts"]
        assert inbox_entry["doubt_id"] == doubt_id
        assert inbox_entry["student_name"] == "Asha Rao"

        # Another student practices on it
        response = await api.post(
            "/api/practice/answer",
            json={
                "doubt_id": doubt_id,
                "student_id": practicer,
                "answer_text": "A complete tree with the heap property",
            },
        )
        assert response.status_code == 200
        practice_id = response.json()["practice_id"]

        # Professor answers the doubt
        response = await api.post(
            "/api/answers",
            json={
                "doubt_id": doubt_id,
                "answer_text": "A complete binary tree ordered by key",
                "answered_by": professor,
            },
        )
        assert response.status_code == 201

        response = await api.get(f"/api/student/questions/{asker}")
        (history_entry,) = response.json()["questions"]
        assert history_entry["status"] == "answered"
        assert history_entry["answered_by_name"] == "Dr. Iyer"

        response = await api.get(f"/api/professor/doubts/{professor}")
        assert response.json()["doubts"] == []

        # Professor reviews the practice answer
        response = await api.get(f"/api/professor/practice/{professor}")
        (pending,) = response.json()["practices"]
        assert pending["practice_id"] == practice_id

        response = await api.post(
            "/api/professor/practice/review",
            json={
                "practice_id": practice_id,
                "professor_id": professor,
                "action": "approved",
            },
        )
        assert response.status_code == 200
        assert response.json()["message"] == "Answer approved successfully"

        # A second review is refused and awards nothing
        response = await api.post(
            "/api/professor/practice/review",
            json={
                "practice_id": practice_id,
                "professor_id": professor,
                "action": "approved",
            },
        )
        assert response.status_code == 404

        response = await api.get(f"/api/users/{practicer}/points")
        assert response.json() == {"points": 100}

        response = await api.get("/api/leaderboard")
        leaders = response.json()["leaderboard"]
        assert [entry["user_id"] for entry in leaders] == [practicer, asker]
        assert leaders[0]["points"] == 100

        response = await api.get(f"/api/student/contributions/{practicer}")
        contributions = response.json()
        assert contributions["approved_count"] == 1
        assert contributions["pending_count"] == 0

        response = await api.get("/api/archive", params={"search": "BINARY"})
        (archived,) = response.json()["archive"]
        assert archived["doubt_id"] == doubt_id
        assert archived["answered_by"] == "Dr. Iyer"

    async def test_duplicate_answer_conflicts(self, api: AsyncClient) -> None:
        """The second answer to a doubt is a 409 and the first one stays."""
        asker = await _signup(api, "asha@bmsce.ac.in", "Asha Rao", "student")
        first = await _signup(api, "iyer@bmsce.ac.in", "Dr. Iyer", "professor")
        second = await _signup(api, "khan@bmsce.ac.in", "Dr. Khan", "professor")
        response = await api.post(
            "/api/doubts",
            json={
                "user_id": asker,
                "branch": "CSE",
                "semester": 4,
                "course": "OS",
                "question": "Define deadlock",
            },
        )
        doubt_id = response.json()["doubt_id"]

        response = await api.post(
            "/api/answers",
            json={"doubt_id": doubt_id, "answer_text": "first", "answered_by": first},
        )
        answer_id = response.json()["answer_id"]
        response = await api.post(
            "/api/answers",
            json={"doubt_id": doubt_id, "answer_text": "second", "answered_by": second},
        )

        assert response.status_code == 409
        response = await api.get(f"/api/answers/{answer_id}")
        assert response.json() == {"answer_text": "first", "question": "Define deadlock"}

    async def test_signup_outside_domain_forbidden(self, api: AsyncClient) -> None:
        """Only campus addresses may register."""
        response = await api.post(
            "/api/signup",
            json={
                "email": "someone@gmail.com",
                "password": "pw",
                "fullName": "Someone",
                "role": "student",
                "roleDetails": {},
            },
        )

        assert response.status_code == 403
