class TestProfile:
    def test_update_profile(self, client, portal):
        user, sh = portal.register("student")
        r = client.put("/api/users/profile", json={
            "phone": "+91 98765 43210",
            "cgpa": 9.1,
            "skills": ["Go", "Rust"],
        }, headers=sh)
        assert r.status_code == 200
        data = r.json()
        assert data["phone"] == "+91 98765 43210"
        assert data["cgpa"] == 9.1
        assert data["skills"] == ["Go", "Rust"]
        assert data["email"] == user["email"]
        assert data["created_at"] == user["created_at"]

    def test_role_and_password_are_ignored(self, client, portal):
        user, sh = portal.register("student")
        r = client.put("/api/users/profile", json={
            "role": "faculty",
            "password": "new-password-123",
            "first_name": "Renamed",
        }, headers=sh)
        assert r.status_code == 200
        assert r.json()["role"] == "student"
        assert r.json()["first_name"] == "Renamed"

        login = client.post("/api/auth/login", json={"email": user["email"], "password": "password123"})
        assert login.status_code == 200

    def test_email_change_conflict(self, client, portal):
        first, _ = portal.register("student")
        _, sh = portal.register("student")
        r = client.put("/api/users/profile", json={"email": first["email"]}, headers=sh)
        assert r.status_code == 409

    def test_profile_requires_auth(self, client):
        assert client.put("/api/users/profile", json={"phone": "1"}).status_code == 401


class TestFacultyDirectory:
    def test_list_users_faculty_only(self, client, portal):
        _, sh = portal.register("student")
        _, fh = portal.register("faculty")
        assert client.get("/api/users", headers=sh).status_code == 403

        r = client.get("/api/users", headers=fh)
        assert r.status_code == 200
        assert len(r.json()) == 2
        assert all("password_hash" not in u for u in r.json())

    def test_list_users_by_role(self, client, portal):
        portal.register("student")
        _, fh = portal.register("faculty")
        r = client.get("/api/users", params={"role": "student"}, headers=fh)
        assert [u["role"] for u in r.json()] == ["student"]

    def test_department_lists_students_only(self, client, portal):
        portal.register("student", department="Mechanical")
        portal.register("student", department="Computer Science")
        _, fh = portal.register("faculty", department="Mechanical")

        r = client.get("/api/users/departments/Mechanical", headers=fh)
        assert r.status_code == 200
        data = r.json()
        assert len(data) == 1
        assert data[0]["role"] == "student"
        assert data[0]["department"] == "Mechanical"
