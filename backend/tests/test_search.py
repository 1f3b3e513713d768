import pytest
from sqlalchemy import text

from placement_portal.services.job_service import JobFilters, JobService
from placement_portal.services.search_service import JobSearchIndex


class _UnavailableIndex(JobSearchIndex):
    def is_available(self, db):
        return False


class TestSearchIndex:
    def _seed(self, portal):
        _, fh = portal.register("faculty")
        portal.post_job(fh, title="Machine Learning Engineer", description="PyTorch models")
        portal.post_job(fh, title="Data Engineer", company="Learnly", description="Airflow")
        portal.post_job(fh, title="Accountant", company="Ledger & Co", description="Spreadsheets")

    def _titles(self, results):
        return sorted(r.job.title for r in results)

    def test_short_terms_are_not_answered(self, db):
        assert JobSearchIndex().search(db, "ml") is None

    def test_index_and_fallback_agree(self, portal, db):
        self._seed(portal)
        indexed = JobService(db).get_jobs(JobFilters(search="LEARN"))
        fallback = JobService(db, search_index=_UnavailableIndex()).get_jobs(JobFilters(search="LEARN"))
        assert self._titles(indexed) == self._titles(fallback)
        assert self._titles(indexed) == ["Data Engineer", "Machine Learning Engineer"]

    def test_padded_term_agrees(self, portal, db):
        self._seed(portal)
        indexed = JobService(db).get_jobs(JobFilters(search="  pytorch "))
        fallback = JobService(db, search_index=_UnavailableIndex()).get_jobs(JobFilters(search="  pytorch "))
        assert self._titles(indexed) == ["Machine Learning Engineer"]
        assert self._titles(fallback) == ["Machine Learning Engineer"]

    def test_fallback_treats_wildcards_literally(self, portal, db):
        self._seed(portal)
        fallback = JobService(db, search_index=_UnavailableIndex())
        assert fallback.get_jobs(JobFilters(search="e_g")) == []
        assert fallback.get_jobs(JobFilters(search="%")) == []
        assert self._titles(fallback.get_jobs(JobFilters(search="r & c"))) == ["Accountant"]

    def test_blank_term_is_no_filter(self, portal, db):
        self._seed(portal)
        assert len(JobService(db).get_jobs(JobFilters(search="   "))) == 3

    def test_index_follows_updates_and_deletes(self, client, portal, db):
        index = JobSearchIndex()
        _, fh = portal.register("faculty")
        job = portal.post_job(fh, title="Quantum Researcher")
        if not index.is_available(db):
            pytest.skip("SQLite lacks FTS5 trigram")

        assert index.search(db, "quantum") == {job["id"]}
        client.put(f"/api/jobs/{job['id']}", json={"title": "Classical Researcher"}, headers=fh)
        db.expire_all()
        assert index.search(db, "quantum") == set()
        assert index.search(db, "classical") == {job["id"]}

        client.delete(f"/api/jobs/{job['id']}", headers=fh)
        assert index.search(db, "classical") == set()

    def test_quotes_in_term_are_escaped(self, portal, db):
        self._seed(portal)
        results = JobService(db).get_jobs(JobFilters(search='Ledger "& Co'))
        assert results == []

    def test_rebuild(self, portal, db):
        self._seed(portal)
        index = JobSearchIndex()
        if not index.is_available(db):
            assert index.rebuild(db) is False
            pytest.skip("SQLite lacks FTS5 trigram")
        db.execute(text("INSERT INTO jobs_fts(jobs_fts) VALUES ('delete-all')"))
        db.commit()
        assert index.search(db, "spreadsheets") == set()
        assert index.rebuild(db) is True
        assert len(index.search(db, "spreadsheets")) == 1
