"""SQLiteStore — local file-based store for review history.

Schema:
  reviews  — one row per stored review. Issues and suggestions are kept as
             JSON columns rather than sub-tables: they are small, written
             once, and always read together with their review.

Row order follows the autoincrement ``seq`` column, so reviews saved within
the same clock tick still list in insertion order.
"""

from __future__ import annotations

import json
import logging
import sqlite3

from devmentor_store.base import BaseStore, StoreError, utc_now
from devmentor_store.models import IssueRecord, ReviewPage, StoredReview, SuggestionRecord

logger = logging.getLogger(__name__)

_SCHEMA = """
CREATE TABLE IF NOT EXISTS reviews (
    seq               INTEGER PRIMARY KEY AUTOINCREMENT,
    id                TEXT NOT NULL UNIQUE,
    submitter_id      TEXT NOT NULL,
    title             TEXT NOT NULL,
    description       TEXT,
    code              TEXT NOT NULL,
    language          TEXT NOT NULL,
    overall_score     REAL NOT NULL,
    complexity        TEXT NOT NULL,
    maintainability   INTEGER NOT NULL,
    performance       INTEGER NOT NULL,
    security          INTEGER NOT NULL,
    low_confidence    INTEGER DEFAULT 0,
    raw_text          TEXT NOT NULL,
    model_id          TEXT,
    token_count       INTEGER DEFAULT 0,
    issues_json       TEXT DEFAULT '[]',
    suggestions_json  TEXT DEFAULT '[]',
    created_at        TEXT NOT NULL,
    updated_at        TEXT NOT NULL
);
CREATE INDEX IF NOT EXISTS idx_reviews_submitter ON reviews (submitter_id);
"""


class SQLiteStore(BaseStore):
    """Stores reviews in a local SQLite database file.

    The database file path defaults to `.devmentor.db` in the current working
    directory. Configure via .devmentor.yml: `store_path: /path/to/devmentor.db`.
    """

    def __init__(self, db_path: str = ".devmentor.db"):
        try:
            self._conn = sqlite3.connect(db_path)
            self._conn.row_factory = sqlite3.Row
            self._conn.executescript(_SCHEMA)
            self._conn.commit()
        except sqlite3.Error as e:
            raise StoreError(f"Could not open review database {db_path!r}: {e}") from e

    def save(self, review: StoredReview) -> StoredReview:
        review = self._stamp_new(review)
        issues_json = json.dumps(
            [
                {
                    "type": i.type,
                    "severity": i.severity,
                    "line": i.line,
                    "message": i.message,
                    "suggestion": i.suggestion,
                }
                for i in review.issues
            ]
        )
        suggestions_json = json.dumps(
            [{"type": s.type, "message": s.message, "code_example": s.code_example} for s in review.suggestions]
        )
        try:
            self._conn.execute(
                """
                INSERT INTO reviews
                  (id, submitter_id, title, description, code, language,
                   overall_score, complexity, maintainability, performance, security,
                   low_confidence, raw_text, model_id, token_count,
                   issues_json, suggestions_json, created_at, updated_at)
                VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?)
                """,
                (
                    review.id,
                    review.submitter_id,
                    review.title,
                    review.description,
                    review.code,
                    review.language,
                    review.overall_score,
                    review.complexity,
                    review.maintainability,
                    review.performance,
                    review.security,
                    int(review.low_confidence),
                    review.raw_text,
                    review.model_id,
                    review.token_count,
                    issues_json,
                    suggestions_json,
                    review.created_at,
                    review.updated_at,
                ),
            )
            self._conn.commit()
        except sqlite3.Error as e:
            self._conn.rollback()
            raise StoreError(f"Failed to save review: {e}") from e
        logger.debug("Saved review %s for %s", review.id, review.submitter_id)
        return review

    def get(self, review_id: str, submitter_id: str) -> StoredReview | None:
        rows = self._select(
            "SELECT * FROM reviews WHERE id=? AND submitter_id=?",
            (review_id, submitter_id),
        )
        return self._row_to_review(rows[0]) if rows else None

    def list_reviews(self, submitter_id: str, page: int = 1, limit: int = 10) -> ReviewPage:
        page, limit = self._page_bounds(page, limit)
        total = self._select(
            "SELECT COUNT(*) FROM reviews WHERE submitter_id=?",
            (submitter_id,),
        )[0][0]
        rows = self._select(
            "SELECT * FROM reviews WHERE submitter_id=? ORDER BY seq DESC LIMIT ? OFFSET ?",
            (submitter_id, limit, (page - 1) * limit),
        )
        return ReviewPage(
            reviews=[self._row_to_review(r) for r in rows],
            page=page,
            limit=limit,
            total_count=total,
        )

    def all_reviews(self, submitter_id: str) -> list[StoredReview]:
        rows = self._select(
            "SELECT * FROM reviews WHERE submitter_id=? ORDER BY seq",
            (submitter_id,),
        )
        return [self._row_to_review(r) for r in rows]

    def _select(self, sql: str, params: tuple) -> list[sqlite3.Row]:
        try:
            return self._conn.execute(sql, params).fetchall()
        except sqlite3.Error as e:
            raise StoreError(f"Failed to read reviews: {e}") from e

    def update(
        self,
        review_id: str,
        submitter_id: str,
        title: str | None = None,
        description: str | None = None,
    ) -> StoredReview | None:
        existing = self.get(review_id, submitter_id)
        if existing is None:
            return None
        try:
            self._conn.execute(
                "UPDATE reviews SET title=?, description=?, updated_at=? WHERE id=?",
                (title or existing.title, description or existing.description, utc_now(), review_id),
            )
            self._conn.commit()
        except sqlite3.Error as e:
            self._conn.rollback()
            raise StoreError(f"Failed to update review {review_id}: {e}") from e
        return self.get(review_id, submitter_id)

    def delete(self, review_id: str, submitter_id: str) -> bool:
        try:
            cursor = self._conn.execute(
                "DELETE FROM reviews WHERE id=? AND submitter_id=?",
                (review_id, submitter_id),
            )
            self._conn.commit()
        except sqlite3.Error as e:
            self._conn.rollback()
            raise StoreError(f"Failed to delete review {review_id}: {e}") from e
        return cursor.rowcount > 0

    def close(self) -> None:
        self._conn.close()

    @staticmethod
    def _row_to_review(row: sqlite3.Row) -> StoredReview:
        issues = [
            IssueRecord(
                type=i.get("type", ""),
                severity=i.get("severity", "low"),
                line=i.get("line", 1),
                message=i.get("message", ""),
                suggestion=i.get("suggestion"),
            )
            for i in json.loads(row["issues_json"] or "[]")
        ]
        suggestions = [
            SuggestionRecord(
                type=s.get("type", ""),
                message=s.get("message", ""),
                code_example=s.get("code_example"),
            )
            for s in json.loads(row["suggestions_json"] or "[]")
        ]
        return StoredReview(
            id=row["id"],
            submitter_id=row["submitter_id"],
            title=row["title"],
            description=row["description"],
            code=row["code"],
            language=row["language"],
            overall_score=row["overall_score"],
            complexity=row["complexity"],
            maintainability=row["maintainability"],
            performance=row["performance"],
            security=row["security"],
            low_confidence=bool(row["low_confidence"]),
            raw_text=row["raw_text"],
            model_id=row["model_id"] or "",
            token_count=row["token_count"] or 0,
            issues=issues,
            suggestions=suggestions,
            created_at=row["created_at"],
            updated_at=row["updated_at"],
        )
