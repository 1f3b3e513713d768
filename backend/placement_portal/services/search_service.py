"""
Optional full-text index over job postings.

Backed by the ``jobs_fts`` FTS5 table (trigram tokenizer), which ``init_db``
creates only when the SQLite build supports it. Trigram phrase queries match
case-insensitive substrings, so a hit set from the index is the same set the
plain ILIKE filter would produce. Callers treat ``None`` as "no answer" and
filter on their own.
"""
import logging

from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

logger = logging.getLogger(__name__)

# Trigram indexes cannot answer queries shorter than one trigram.
MIN_TERM_LENGTH = 3


class JobSearchIndex:
    def is_available(self, db: Session) -> bool:
        try:
            row = db.execute(
                text("SELECT name FROM sqlite_master WHERE type = 'table' AND name = 'jobs_fts'")
            ).fetchone()
        except SQLAlchemyError as exc:
            logger.warning("Could not probe job search index: %s", exc)
            return False
        return row is not None

    def search(self, db: Session, term: str) -> set[str] | None:
        term = term.strip()
        if len(term) < MIN_TERM_LENGTH or not self.is_available(db):
            return None

        phrase = '"' + term.replace('"', '""') + '"'
        try:
            rows = db.execute(
                text(
                    """
                    SELECT j.id
                    FROM jobs_fts
                    JOIN jobs j ON j.rowid = jobs_fts.rowid
                    WHERE jobs_fts MATCH :phrase
                    """
                ),
                {"phrase": phrase},
            ).fetchall()
        except SQLAlchemyError as exc:
            logger.warning("Job search index query failed, falling back to filtering: %s", exc)
            return None
        return {r[0] for r in rows}

    def rebuild(self, db: Session) -> bool:
        if not self.is_available(db):
            logger.info("Job search index not available; search will use plain filtering.")
            return False
        try:
            db.execute(text("INSERT INTO jobs_fts(jobs_fts) VALUES ('rebuild')"))
            db.commit()
        except SQLAlchemyError as exc:
            db.rollback()
            logger.warning("Could not rebuild job search index: %s", exc)
            return False
        logger.info("Job search index rebuilt.")
        return True


job_search_index = JobSearchIndex()
