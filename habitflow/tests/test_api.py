"""
HTTP-level tests: routing, authentication and error mapping.
"""
from habitflow.constants import WEEKDAYS
from habitflow.services.category_service import CategoryService
from habitflow.tests.conftest import auth_headers, create_habit


class TestAuthRoutes:

    def test_register_login_and_me(self, client):
        response = client.post("/api/auth/register", json={
            "username": "dana", "email": "dana@example.com", "password": "secret123"
        })
        assert response.status_code == 201
        assert response.json()["user"]["username"] == "dana"
        assert "password_hash" not in response.json()["user"]

        response = client.post("/api/auth/login", json={"email": "dana@example.com", "password": "secret123"})
        assert response.status_code == 200
        token = response.json()["token"]

        response = client.get("/api/auth/me", headers={"Authorization": f"Bearer {token}"})
        assert response.status_code == 200
        assert response.json()["email"] == "dana@example.com"

    def test_register_validation(self, client):
        response = client.post("/api/auth/register", json={
            "username": "da", "email": "not-an-email", "password": "123"
        })
        assert response.status_code == 422

    def test_register_duplicate(self, client, user):
        response = client.post("/api/auth/register", json={
            "username": "someone", "email": user.email, "password": "secret123"
        })
        assert response.status_code == 409

    def test_login_bad_password(self, client, user):
        response = client.post("/api/auth/login", json={"email": user.email, "password": "nope-nope"})
        assert response.status_code == 401

    def test_protected_route_requires_token(self, client):
        assert client.get("/api/habits").status_code == 401
        assert client.get("/api/habits", headers={"Authorization": "Bearer garbage"}).status_code == 401

    def test_health_is_public(self, client):
        response = client.get("/api/health")
        assert response.status_code == 200
        assert response.json()["status"] == "active"


class TestHabitRoutes:

    def test_create_list_and_get(self, client, user):
        headers = auth_headers(user)
        response = client.post("/api/habits", json={"name": "Stretch", "category": "fitness"}, headers=headers)
        assert response.status_code == 201
        habit = response.json()
        assert habit["weekly_status"] == {day: False for day in WEEKDAYS}
        assert habit["streak"] == 0

        response = client.get("/api/habits", params={"category": "fitness"}, headers=headers)
        assert [h["id"] for h in response.json()] == [habit["id"]]

        response = client.get(f"/api/habits/{habit['id']}", headers=headers)
        assert response.status_code == 200

    def test_create_rejects_bad_category_and_days(self, client, user):
        headers = auth_headers(user)
        assert client.post("/api/habits", json={"name": "X", "category": "gaming"}, headers=headers).status_code == 422
        assert client.post("/api/habits", json={"name": "X", "target_days": ["Funday"]}, headers=headers).status_code == 422

    def test_check_and_uncheck(self, client, user, habit):
        headers = auth_headers(user)

        response = client.put(f"/api/habits/{habit.id}/check", json={
            "day": "Wed", "completed": True, "note": "Done early", "mood": "good"
        }, headers=headers)
        assert response.status_code == 200
        assert response.json()["streak"] == 1
        assert response.json()["weekly_status"]["Wed"] is True

        logs = client.get(f"/api/habits/{habit.id}/logs", headers=headers).json()
        assert len(logs) == 1
        assert logs[0]["mood"] == "good"

        response = client.put(f"/api/habits/{habit.id}/check", json={"day": "Wed", "completed": False}, headers=headers)
        assert response.json()["streak"] == 0
        assert response.json()["longest_streak"] == 1
        assert client.get(f"/api/habits/{habit.id}/logs", headers=headers).json() == []

    def test_check_invalid_day(self, client, user, habit):
        response = client.put(f"/api/habits/{habit.id}/check", json={"day": "Someday", "completed": True},
                              headers=auth_headers(user))
        assert response.status_code == 400
        assert response.json()["detail"] == "Invalid day provided"

    def test_check_other_users_habit(self, client, other_user, habit):
        response = client.put(f"/api/habits/{habit.id}/check", json={"day": "Mon", "completed": True},
                              headers=auth_headers(other_user))
        assert response.status_code == 404

    def test_update_habit(self, client, user, habit):
        response = client.put(f"/api/habits/{habit.id}", json={"name": "Read daily", "streak": 99},
                              headers=auth_headers(user))
        assert response.status_code == 200
        assert response.json()["name"] == "Read daily"
        assert response.json()["streak"] == 0

    def test_delete_habit(self, client, user, other_user, habit):
        assert client.delete(f"/api/habits/{habit.id}", headers=auth_headers(other_user)).status_code == 404
        assert client.delete(f"/api/habits/{habit.id}", headers=auth_headers(user)).status_code == 204
        assert client.get(f"/api/habits/{habit.id}", headers=auth_headers(user)).status_code == 404

    def test_admin_deletes_any_habit(self, client, admin, habit):
        assert client.delete(f"/api/habits/{habit.id}", headers=auth_headers(admin)).status_code == 204

    def test_stats(self, client, user, habit):
        response = client.get("/api/habits/stats", headers=auth_headers(user))
        assert response.status_code == 200
        assert response.json()["total_habits"] == 1


class TestGoalRoutes:

    def test_goal_lifecycle(self, client, user, habit):
        headers = auth_headers(user)

        response = client.post("/api/goals", json={
            "habit_id": habit.id, "title": "Twice this week", "target_streak": 2, "reward": "Movie"
        }, headers=headers)
        assert response.status_code == 201
        goal = response.json()
        assert goal["is_completed"] is False
        assert goal["habit"]["name"] == habit.name

        response = client.post("/api/goals", json={
            "habit_id": habit.id, "title": "Another", "target_streak": 3
        }, headers=headers)
        assert response.status_code == 409

        for day in ["Mon", "Tue"]:
            client.put(f"/api/habits/{habit.id}/check", json={"day": day, "completed": True}, headers=headers)

        assert client.get(f"/api/goals/{goal['id']}", headers=headers).json()["is_completed"] is False

        response = client.post("/api/goals/check", headers=headers)
        assert response.status_code == 200
        assert response.json()["completed_count"] == 1

        completed = client.get("/api/goals", params={"completed": True}, headers=headers).json()
        assert [g["id"] for g in completed] == [goal["id"]]
        assert completed[0]["completed_at"] is not None

    def test_goal_for_missing_habit(self, client, user):
        response = client.post("/api/goals", json={"habit_id": 12345, "title": "Ghost", "target_streak": 1},
                               headers=auth_headers(user))
        assert response.status_code == 404

    def test_goal_target_must_be_positive(self, client, user, habit):
        response = client.post("/api/goals", json={"habit_id": habit.id, "title": "Zero", "target_streak": 0},
                               headers=auth_headers(user))
        assert response.status_code == 422

    def test_update_and_delete_goal(self, client, user, other_user, habit):
        headers = auth_headers(user)
        goal = client.post("/api/goals", json={"habit_id": habit.id, "title": "Goal", "target_streak": 4},
                           headers=headers).json()

        assert client.put(f"/api/goals/{goal['id']}", json={"title": "Mine"},
                          headers=auth_headers(other_user)).status_code == 404

        response = client.put(f"/api/goals/{goal['id']}", json={"is_completed": True}, headers=headers)
        assert response.status_code == 200
        assert response.json()["is_completed"] is True

        assert client.delete(f"/api/goals/{goal['id']}", headers=headers).status_code == 204
        assert client.get(f"/api/goals/{goal['id']}", headers=headers).status_code == 404


class TestUserRoutes:

    def test_profile(self, client, user, habit):
        response = client.get("/api/users/profile", headers=auth_headers(user))
        assert response.status_code == 200
        assert response.json()["habit_count"] == 1

        response = client.put("/api/users/profile", json={"bio": "Hi"}, headers=auth_headers(user))
        assert response.json()["bio"] == "Hi"

    def test_profile_username_taken(self, client, user, other_user):
        response = client.put("/api/users/profile", json={"username": other_user.username},
                              headers=auth_headers(user))
        assert response.status_code == 409

    def test_admin_routes_forbidden_for_users(self, client, user, other_user):
        headers = auth_headers(user)
        assert client.get("/api/users", headers=headers).status_code == 403
        assert client.patch(f"/api/users/{other_user.id}/role", json={"role": "admin"}, headers=headers).status_code == 403
        assert client.delete(f"/api/users/{other_user.id}", headers=headers).status_code == 403

    def test_admin_manages_users(self, client, admin, user):
        headers = auth_headers(admin)

        users = client.get("/api/users", headers=headers).json()
        assert {u["username"] for u in users} == {admin.username, user.username}

        response = client.patch(f"/api/users/{user.id}/role", json={"role": "admin"}, headers=headers)
        assert response.status_code == 200
        assert response.json()["role"] == "admin"

        assert client.patch(f"/api/users/{admin.id}/role", json={"role": "user"}, headers=headers).status_code == 400
        assert client.patch(f"/api/users/{user.id}/role", json={"role": "owner"}, headers=headers).status_code == 422
        assert client.patch("/api/users/9999/role", json={"role": "user"}, headers=headers).status_code == 404

        assert client.delete(f"/api/users/{user.id}", headers=headers).status_code == 204
        assert client.delete(f"/api/users/{user.id}", headers=headers).status_code == 404

    def test_deleted_users_token_stops_working(self, client, admin, user):
        user_headers = auth_headers(user)
        client.delete(f"/api/users/{user.id}", headers=auth_headers(admin))

        assert client.get("/api/auth/me", headers=user_headers).status_code == 401


class TestCategoryRoutes:

    def test_lists_seeded_categories(self, client, db_session, user):
        CategoryService(db_session).seed_defaults()

        response = client.get("/api/categories", headers=auth_headers(user))

        assert response.status_code == 200
        assert len(response.json()) == 7
        assert response.json()[0]["is_default"] is True

    def test_seeding_is_idempotent(self, db_session):
        service = CategoryService(db_session)
        assert service.seed_defaults() == 7
        assert service.seed_defaults() == 0
