import logging
import sqlite3
from pathlib import Path
from sqlalchemy import create_engine, event
from sqlalchemy.orm import DeclarativeBase, sessionmaker

from placement_portal.config import settings

logger = logging.getLogger(__name__)


class Base(DeclarativeBase):
    pass


def _set_sqlite_pragmas(dbapi_conn, connection_record):
    cursor = dbapi_conn.cursor()
    cursor.execute("PRAGMA journal_mode=WAL")
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


def get_engine(db_path: Path | None = None):
    url = f"sqlite:///{db_path}" if db_path else settings.database_url
    engine = create_engine(
        url,
        connect_args={"check_same_thread": False, "timeout": 30},
    )
    event.listen(engine, "connect", _set_sqlite_pragmas)
    return engine


engine = get_engine()
SessionLocal = sessionmaker(bind=engine, autoflush=False, autocommit=False)


def get_db():
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


SCHEMA_SQL = """\
-- ============================================================
-- USERS
-- ============================================================
CREATE TABLE IF NOT EXISTS users (
    id            TEXT PRIMARY KEY,
    email         TEXT NOT NULL UNIQUE,
    password_hash TEXT NOT NULL,
    first_name    TEXT NOT NULL,
    last_name     TEXT NOT NULL,
    phone         TEXT,
    role          TEXT NOT NULL CHECK(role IN ('student','faculty')),
    department    TEXT,
    roll_number   TEXT,
    cgpa          REAL,
    skills        TEXT,
    created_at    TEXT NOT NULL
);

CREATE INDEX IF NOT EXISTS idx_users_department ON users(department);

-- ============================================================
-- JOBS
-- ============================================================
CREATE TABLE IF NOT EXISTS jobs (
    id           TEXT PRIMARY KEY,
    title        TEXT NOT NULL,
    company      TEXT NOT NULL,
    location     TEXT NOT NULL,
    type         TEXT NOT NULL CHECK(type IN ('full-time','part-time','internship')),
    experience   TEXT,
    salary       TEXT,
    description  TEXT NOT NULL,
    requirements TEXT,
    skills       TEXT,
    eligibility  TEXT,
    deadline     TEXT NOT NULL,
    is_active    INTEGER NOT NULL DEFAULT 1,
    posted_by    TEXT NOT NULL REFERENCES users(id),
    created_at   TEXT NOT NULL,
    updated_at   TEXT NOT NULL
);

CREATE INDEX IF NOT EXISTS idx_jobs_created ON jobs(created_at);
CREATE INDEX IF NOT EXISTS idx_jobs_posted_by ON jobs(posted_by);
CREATE INDEX IF NOT EXISTS idx_jobs_type ON jobs(type);

-- ============================================================
-- RESUMES
-- ============================================================
CREATE TABLE IF NOT EXISTS resumes (
    id              TEXT PRIMARY KEY,
    student_id      TEXT NOT NULL REFERENCES users(id),
    file_name       TEXT NOT NULL,
    file_path       TEXT NOT NULL,
    file_hash       TEXT NOT NULL,
    file_size_bytes INTEGER NOT NULL,
    mime_type       TEXT,
    is_default      INTEGER NOT NULL DEFAULT 0,
    uploaded_at     TEXT NOT NULL
);

CREATE INDEX IF NOT EXISTS idx_resumes_student ON resumes(student_id);
CREATE UNIQUE INDEX IF NOT EXISTS idx_resumes_one_default
    ON resumes(student_id) WHERE is_default = 1;

-- ============================================================
-- APPLICATIONS
-- ============================================================
CREATE TABLE IF NOT EXISTS applications (
    id               TEXT PRIMARY KEY,
    student_id       TEXT NOT NULL REFERENCES users(id),
    job_id           TEXT NOT NULL REFERENCES jobs(id) ON DELETE CASCADE,
    resume_id        TEXT REFERENCES resumes(id) ON DELETE SET NULL,
    cover_letter     TEXT,
    motivation       TEXT,
    status           TEXT NOT NULL DEFAULT 'pending'
                     CHECK(status IN ('pending','accepted','rejected')),
    rejection_reason TEXT,
    applied_at       TEXT NOT NULL,
    updated_at       TEXT NOT NULL
);

CREATE UNIQUE INDEX IF NOT EXISTS idx_applications_student_job
    ON applications(student_id, job_id);
CREATE INDEX IF NOT EXISTS idx_applications_job ON applications(job_id);

-- ============================================================
-- SAVED JOBS
-- ============================================================
CREATE TABLE IF NOT EXISTS saved_jobs (
    id         TEXT PRIMARY KEY,
    student_id TEXT NOT NULL REFERENCES users(id),
    job_id     TEXT NOT NULL REFERENCES jobs(id) ON DELETE CASCADE,
    saved_at   TEXT NOT NULL
);

CREATE UNIQUE INDEX IF NOT EXISTS idx_saved_jobs_student_job
    ON saved_jobs(student_id, job_id);

-- ============================================================
-- NOTIFICATIONS
-- ============================================================
CREATE TABLE IF NOT EXISTS notifications (
    id         TEXT PRIMARY KEY,
    user_id    TEXT NOT NULL REFERENCES users(id),
    title      TEXT NOT NULL,
    message    TEXT NOT NULL,
    type       TEXT NOT NULL
               CHECK(type IN ('job_alert','application_update','general')),
    is_read    INTEGER NOT NULL DEFAULT 0,
    created_at TEXT NOT NULL
);

CREATE INDEX IF NOT EXISTS idx_notifications_user ON notifications(user_id, is_read);
"""

# Trigram tokenizer needs SQLite >= 3.34 built with FTS5.
FTS_SQL = """\
CREATE VIRTUAL TABLE IF NOT EXISTS jobs_fts USING fts5(
    title, company, description,
    content='jobs', content_rowid='rowid',
    tokenize='trigram'
);

CREATE TRIGGER IF NOT EXISTS jobs_ai AFTER INSERT ON jobs BEGIN
    INSERT INTO jobs_fts(rowid, title, company, description)
    VALUES (new.rowid, new.title, new.company, new.description);
END;

CREATE TRIGGER IF NOT EXISTS jobs_ad AFTER DELETE ON jobs BEGIN
    INSERT INTO jobs_fts(jobs_fts, rowid, title, company, description)
    VALUES ('delete', old.rowid, old.title, old.company, old.description);
END;

CREATE TRIGGER IF NOT EXISTS jobs_au AFTER UPDATE ON jobs BEGIN
    INSERT INTO jobs_fts(jobs_fts, rowid, title, company, description)
    VALUES ('delete', old.rowid, old.title, old.company, old.description);
    INSERT INTO jobs_fts(rowid, title, company, description)
    VALUES (new.rowid, new.title, new.company, new.description);
END;
"""


MIGRATIONS = [
    # v0.2: track when an application was last reviewed
    "ALTER TABLE applications ADD COLUMN updated_at TEXT NOT NULL DEFAULT ''",
]


def init_db(db_path: Path | None = None):
    path = db_path or settings.db_path
    conn = sqlite3.connect(str(path))
    conn.executescript(SCHEMA_SQL)
    try:
        conn.executescript(FTS_SQL)
    except sqlite3.OperationalError as exc:
        logger.warning("Job search index unavailable, using plain filtering: %s", exc)
    # Run migrations idempotently (ALTER TABLE fails if column exists)
    for migration in MIGRATIONS:
        try:
            conn.execute(migration)
            conn.commit()
        except sqlite3.OperationalError:
            pass  # already applied
    conn.close()


def integrity_check(db_path: Path | None = None) -> str:
    path = db_path or settings.db_path
    conn = sqlite3.connect(str(path))
    try:
        result = conn.execute("PRAGMA integrity_check").fetchone()
    finally:
        conn.close()
    return result[0] if result else "no result"
