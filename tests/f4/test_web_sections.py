"""Tests for course, game and leaderboard endpoints (F4)."""

from skillfriend.backend.mock import seed_rows
from skillfriend.backend.models import COURSES, GAMES


class TestHealth:
    def test_health_demo(self, demo_client):
        response = demo_client.get("/health")
        assert response.status_code == 200
        data = response.json()
        assert data["status"] == "ok"
        assert data["mode"] == "demo"

    def test_health_live(self, live_client):
        assert live_client.get("/health").json()["mode"] == "live"

    def test_health_counts_open_sessions(self, demo_client):
        assert demo_client.get("/health").json()["active_sessions"] == 0

        demo_client.post("/api/auth/session")

        assert demo_client.get("/health").json()["active_sessions"] == 1


class TestCourses:
    """Tests for /api/courses."""

    def test_list_anonymous(self, demo_client):
        response = demo_client.get("/api/courses")
        assert response.status_code == 200
        data = response.json()
        assert data["count"] == 3
        assert data["empty_message"] is None
        assert data["courses"][0]["title"] == "React Fundamentals"
        assert data["courses"][0]["enrolling"] is False

    def test_empty_catalog(self, live_client, live_headers, accepting_factory):
        seed_rows(accepting_factory.created[-1], COURSES, [])
        data = live_client.get("/api/courses", headers=live_headers).json()
        assert data["count"] == 0
        assert data["empty_message"] == "No courses available at the moment. Check back soon!"

    def test_default_image(self, live_client, live_headers, accepting_factory):
        seed_rows(
            accepting_factory.created[-1],
            COURSES,
            [{"id": "x", "title": "T", "description": "D", "price": 5}],
        )
        data = live_client.get("/api/courses", headers=live_headers).json()
        assert data["courses"][0]["image_url"].startswith("https://images.unsplash.com/")

    def test_enroll_requires_client(self, demo_client):
        assert demo_client.post("/api/courses/1/enroll").status_code == 401

    def test_enroll_anonymous(self, demo_client, demo_headers):
        response = demo_client.post("/api/courses/1/enroll", headers=demo_headers)
        assert response.status_code == 200
        data = response.json()
        assert data["ok"] is False
        assert data["notification"]["title"] == "Authentication Required"
        assert data["notification"]["variant"] == "destructive"

    def test_enroll_signed_in(self, live_client, signed_in_headers, accepting_factory):
        response = live_client.post("/api/courses/2/enroll", headers=signed_in_headers)
        assert response.status_code == 200
        data = response.json()
        assert data["ok"] is True
        assert data["notification"]["title"] == "Enrollment Successful!"
        assert accepting_factory.created[-1].insert_calls[0][1] == {"user_id": "1", "course_id": "2"}


class TestGames:
    """Tests for /api/games and /api/leaderboard."""

    def test_list_games(self, demo_client):
        data = demo_client.get("/api/games").json()
        assert data["count"] == 3
        assert all(g["playable"] for g in data["games"])

    def test_default_icon_and_unplayable(self, live_client, live_headers, accepting_factory):
        seed_rows(
            accepting_factory.created[-1],
            GAMES,
            [{"id": "c", "title": "Chess", "description": "", "points_reward": 10, "icon": None}],
        )
        game = live_client.get("/api/games", headers=live_headers).json()["games"][0]
        assert game["icon"] == "🎮"
        assert game["playable"] is False

    def test_leaderboard_ranks(self, demo_client):
        data = demo_client.get("/api/leaderboard").json()
        assert [e["rank"] for e in data["entries"]] == [1, 2, 3]
        assert [e["rank_marker"] for e in data["entries"]] == ["trophy", "medal", "award"]
        assert data["entries"][0]["full_name"] == "Alice Johnson"
        assert data["entries"][0]["avatar_initial"] == "A"

    def test_leaderboard_anonymous_name(self, live_client, live_headers, accepting_factory):
        accepting_factory.created[-1]._tables["profiles"][0]["full_name"] = None
        entries = live_client.get("/api/leaderboard", headers=live_headers).json()["entries"]
        assert "Anonymous User" in [e["full_name"] for e in entries]
