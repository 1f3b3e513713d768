from conftest import future_deadline, past_deadline


class TestJobsCRUD:
    def test_create_job(self, client, portal):
        _, fh = portal.register("faculty")
        job = portal.post_job(fh, title="Data Analyst", type="Full-Time")
        assert job["title"] == "Data Analyst"
        assert job["type"] == "full-time"
        assert job["is_active"] is True
        assert job["is_expired"] is False

    def test_student_cannot_create_job(self, client, portal):
        _, sh = portal.register("student")
        r = client.post("/api/jobs", json={
            "title": "X", "company": "Y", "location": "Z", "type": "internship",
            "description": "d", "deadline": future_deadline(),
        }, headers=sh)
        assert r.status_code == 403

    def test_create_requires_auth(self, client):
        r = client.post("/api/jobs", json={"title": "X"})
        assert r.status_code == 401

    def test_invalid_type_rejected(self, client, portal):
        _, fh = portal.register("faculty")
        r = client.post("/api/jobs", json={
            "title": "X", "company": "Y", "location": "Z", "type": "contract",
            "description": "d", "deadline": future_deadline(),
        }, headers=fh)
        assert r.status_code == 400

    def test_get_job(self, client, portal):
        _, fh = portal.register("faculty")
        job = portal.post_job(fh)
        r = client.get(f"/api/jobs/{job['id']}")
        assert r.status_code == 200
        assert r.json()["company"] == "TechCorp"

    def test_get_unknown_job(self, client):
        r = client.get("/api/jobs/does-not-exist")
        assert r.status_code == 404

    def test_update_job(self, client, portal):
        _, fh = portal.register("faculty")
        job = portal.post_job(fh)
        r = client.put(f"/api/jobs/{job['id']}", json={"title": "Senior Engineer", "is_active": False}, headers=fh)
        assert r.status_code == 200
        data = r.json()
        assert data["title"] == "Senior Engineer"
        assert data["is_active"] is False
        assert data["company"] == job["company"]
        assert data["created_at"] == job["created_at"]
        assert data["posted_by"] == job["posted_by"]

    def test_expired_job_flag(self, client, portal):
        _, fh = portal.register("faculty")
        job = portal.post_job(fh, deadline=past_deadline())
        assert job["is_expired"] is True

    def test_delete_job(self, client, portal):
        _, fh = portal.register("faculty")
        job = portal.post_job(fh)
        r = client.delete(f"/api/jobs/{job['id']}", headers=fh)
        assert r.status_code == 200
        assert client.get(f"/api/jobs/{job['id']}").status_code == 404


class TestJobOwnership:
    def test_non_owner_cannot_delete(self, client, portal):
        _, owner = portal.register("faculty")
        _, other = portal.register("faculty")
        job = portal.post_job(owner)

        r = client.delete(f"/api/jobs/{job['id']}", headers=other)
        assert r.status_code == 403

        after = client.get(f"/api/jobs/{job['id']}")
        assert after.status_code == 200
        assert after.json() == job

    def test_non_owner_cannot_update(self, client, portal):
        _, owner = portal.register("faculty")
        _, other = portal.register("faculty")
        job = portal.post_job(owner)
        r = client.put(f"/api/jobs/{job['id']}", json={"title": "Hijacked"}, headers=other)
        assert r.status_code == 403
        assert client.get(f"/api/jobs/{job['id']}").json()["title"] == job["title"]

    def test_mine_lists_only_own_jobs(self, client, portal):
        _, owner = portal.register("faculty")
        _, other = portal.register("faculty")
        portal.post_job(owner, title="Mine")
        portal.post_job(other, title="Theirs")
        r = client.get("/api/jobs/mine", headers=owner)
        assert r.status_code == 200
        assert [j["title"] for j in r.json()] == ["Mine"]

    def test_delete_cascades_to_applications_and_saves(self, client, portal, db):
        from placement_portal.models.application import Application
        from placement_portal.models.saved_job import SavedJob

        _, fh = portal.register("faculty")
        _, sh = portal.register("student")
        job = portal.post_job(fh)
        assert client.post("/api/applications", json={"job_id": job["id"]}, headers=sh).status_code == 201
        assert client.post("/api/saved-jobs", json={"job_id": job["id"]}, headers=sh).status_code == 201

        assert client.delete(f"/api/jobs/{job['id']}", headers=fh).status_code == 200
        assert db.query(Application).filter(Application.job_id == job["id"]).count() == 0
        assert db.query(SavedJob).filter(SavedJob.job_id == job["id"]).count() == 0


class TestJobListing:
    def test_newest_first(self, client, portal):
        _, fh = portal.register("faculty")
        portal.post_job(fh, title="First")
        portal.post_job(fh, title="Second")
        portal.post_job(fh, title="Third")
        r = client.get("/api/jobs")
        assert r.status_code == 200
        assert [j["title"] for j in r.json()] == ["Third", "Second", "First"]

    def test_search_is_case_insensitive_substring(self, client, portal):
        _, fh = portal.register("faculty")
        portal.post_job(fh, title="Frontend Developer", description="Work with React and TypeScript")
        portal.post_job(fh, title="Backend Developer", description="Django services")
        portal.post_job(fh, title="ReactJS Intern", company="StartupXYZ", description="UI work")

        r = client.get("/api/jobs", params={"search": "react"})
        titles = sorted(j["title"] for j in r.json())
        assert titles == ["Frontend Developer", "ReactJS Intern"]

    def test_short_search_term(self, client, portal):
        _, fh = portal.register("faculty")
        portal.post_job(fh, title="UI Designer", description="Figma")
        portal.post_job(fh, title="Backend", description="APIs")
        r = client.get("/api/jobs", params={"search": "ui"})
        assert [j["title"] for j in r.json()] == ["UI Designer"]

    def test_wildcards_match_literally(self, client, portal):
        _, fh = portal.register("faculty")
        portal.post_job(fh, title="Quantum Researcher")
        portal.post_job(fh, title="Accountant")
        portal.post_job(fh, title="100% Remote Engineer", location="Remote")

        for term in ("_", "%", "r_m"):
            assert client.get("/api/jobs", params={"search": term}).json() == []
        assert [j["title"] for j in client.get("/api/jobs", params={"search": "0%"}).json()] == [
            "100% Remote Engineer"
        ]
        assert client.get("/api/jobs", params={"location": "%"}).json() == []

    def test_type_filter_is_validated(self, client, portal):
        _, fh = portal.register("faculty")
        portal.post_job(fh, title="Intern", type="internship")
        portal.post_job(fh, title="Staff", type="full-time")

        assert client.get("/api/jobs", params={"type": "contract"}).status_code == 400
        r = client.get("/api/jobs", params={"type": "Internship"})
        assert r.status_code == 200
        assert [j["title"] for j in r.json()] == ["Intern"]

    def test_search_matches_company(self, client, portal):
        _, fh = portal.register("faculty")
        portal.post_job(fh, title="Engineer", company="Globex Corporation")
        portal.post_job(fh, title="Engineer", company="Initech")
        r = client.get("/api/jobs", params={"search": "globex"})
        assert [j["company"] for j in r.json()] == ["Globex Corporation"]

    def test_filters_are_conjunctive(self, client, portal):
        _, fh = portal.register("faculty")
        portal.post_job(fh, title="A", location="Remote", type="internship")
        portal.post_job(fh, title="B", location="Remote", type="full-time")
        portal.post_job(fh, title="C", location="Pune", type="internship")

        r = client.get("/api/jobs", params={"location": "remote", "type": "internship"})
        assert [j["title"] for j in r.json()] == ["A"]

    def test_active_only(self, client, portal):
        _, fh = portal.register("faculty")
        portal.post_job(fh, title="Open")
        portal.post_job(fh, title="Closed", is_active=False)
        r = client.get("/api/jobs", params={"active_only": "true"})
        assert [j["title"] for j in r.json()] == ["Open"]
        assert len(client.get("/api/jobs").json()) == 2

    def test_public_listing_is_not_annotated(self, client, portal):
        _, fh = portal.register("faculty")
        portal.post_job(fh)
        job = client.get("/api/jobs").json()[0]
        assert job["saved_by_user"] is False
        assert job["applied_by_user"] is False

    def test_annotations_for_student(self, client, portal):
        _, fh = portal.register("faculty")
        _, sh = portal.register("student")
        saved = portal.post_job(fh, title="Saved")
        applied = portal.post_job(fh, title="Applied")
        portal.post_job(fh, title="Untouched")
        client.post("/api/saved-jobs", json={"job_id": saved["id"]}, headers=sh)
        client.post("/api/applications", json={"job_id": applied["id"]}, headers=sh)

        by_title = {j["title"]: j for j in client.get("/api/jobs", headers=sh).json()}
        assert by_title["Saved"]["saved_by_user"] is True
        assert by_title["Saved"]["applied_by_user"] is False
        assert by_title["Applied"]["applied_by_user"] is True
        assert by_title["Applied"]["saved_by_user"] is False
        assert by_title["Untouched"]["saved_by_user"] is False

    def test_invalid_token_on_public_listing(self, client):
        r = client.get("/api/jobs", headers={"Authorization": "Bearer broken"})
        assert r.status_code == 401
