from __future__ import annotations

import json
import os
import sqlite3
import threading
import uuid
from datetime import datetime, timezone
from typing import Any, Iterable

from internai.catalog.normalizer import normalize_key, normalize_skills
from internai.schemas.jobs import JobPosting
from internai.schemas.users import UserProfile

_JOB_COLUMNS = (
    "id",
    "title",
    "company",
    "location",
    "description",
    "type",
    "work_mode",
    "is_paid",
    "salary_min",
    "salary_max",
    "required_skills_json",
    "experience_level",
    "status",
    "posted_by",
    "created_at",
)

_UPDATABLE_JOB_FIELDS = {
    "title": "title",
    "company": "company",
    "location": "location",
    "description": "description",
    "type": "type",
    "workMode": "work_mode",
    "isPaid": "is_paid",
    "salaryMin": "salary_min",
    "salaryMax": "salary_max",
    "requiredSkills": "required_skills_json",
    "experienceLevel": "experience_level",
    "status": "status",
}


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


def _like(value: str) -> str:
    escaped = value.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")
    return f"%{escaped}%"


def _compensation(salary_min: int | None, salary_max: int | None, is_paid: bool) -> str | None:
    if salary_min and salary_max:
        return f"₹{salary_min}-₹{salary_max}"
    if salary_min or salary_max:
        return f"₹{salary_min or salary_max}"
    return "Paid" if is_paid else None


def _row_to_job(row: sqlite3.Row) -> JobPosting:
    created_at = datetime.fromisoformat(row["created_at"])
    salary_min = row["salary_min"]
    salary_max = row["salary_max"]
    is_paid = bool(row["is_paid"])
    return JobPosting(
        id=row["id"],
        title=row["title"],
        company=row["company"],
        location=row["location"],
        description=row["description"],
        workMode=row["work_mode"],
        compensation=_compensation(salary_min, salary_max, is_paid),
        sourceAt=created_at,
        source="local",
        type=row["type"],
        requiredSkills=json.loads(row["required_skills_json"] or "[]"),
        experienceLevel=row["experience_level"],
        isPaid=is_paid,
        salaryMin=salary_min,
        salaryMax=salary_max,
        status=row["status"],
        postedBy=row["posted_by"],
        createdAt=created_at,
    )


def _row_to_user(row: sqlite3.Row) -> UserProfile:
    return UserProfile(
        id=row["id"],
        name=row["name"] or "",
        email=row["email"] or "",
        skills=json.loads(row["skills_json"] or "[]"),
        region=row["region"],
    )


class JobStore:
    """SQLite system of record for user profiles and persisted job postings."""

    def __init__(self, db_path: str) -> None:
        self._db_path = db_path
        self._conn: sqlite3.Connection | None = None
        self._conn_lock = threading.RLock()

    @property
    def db_path(self) -> str:
        return self._db_path

    def _get_connection(self) -> sqlite3.Connection:
        with self._conn_lock:
            if self._conn is not None:
                return self._conn

            directory = os.path.dirname(self._db_path)
            if directory:
                os.makedirs(directory, exist_ok=True)

            conn = sqlite3.connect(
                self._db_path,
                check_same_thread=False,
                timeout=5,
                isolation_level=None,
            )
            conn.row_factory = sqlite3.Row
            conn.execute("PRAGMA journal_mode=WAL;")
            conn.execute("PRAGMA synchronous=NORMAL;")
            conn.execute("PRAGMA busy_timeout=5000;")
            conn.execute(
                """
                CREATE TABLE IF NOT EXISTS users (
                    id TEXT PRIMARY KEY,
                    name TEXT NOT NULL DEFAULT '',
                    email TEXT NOT NULL DEFAULT '',
                    skills_json TEXT NOT NULL DEFAULT '[]',
                    region TEXT,
                    created_at TEXT NOT NULL,
                    updated_at TEXT NOT NULL
                );
                """
            )
            conn.execute(
                """
                CREATE TABLE IF NOT EXISTS jobs (
                    id TEXT PRIMARY KEY,
                    title TEXT NOT NULL,
                    company TEXT NOT NULL,
                    location TEXT NOT NULL,
                    description TEXT NOT NULL,
                    type TEXT NOT NULL,
                    work_mode TEXT NOT NULL DEFAULT 'On-site',
                    is_paid INTEGER NOT NULL DEFAULT 0,
                    salary_min INTEGER,
                    salary_max INTEGER,
                    required_skills_json TEXT NOT NULL DEFAULT '[]',
                    experience_level TEXT,
                    status TEXT NOT NULL DEFAULT 'active',
                    posted_by TEXT,
                    created_at TEXT NOT NULL
                );
                """
            )
            conn.execute(
                """
                CREATE INDEX IF NOT EXISTS idx_jobs_status_created
                ON jobs (status, created_at);
                """
            )
            self._conn = conn
            return conn

    def init_db(self) -> None:
        self._get_connection()

    def ping(self) -> None:
        conn = self._get_connection()
        with self._conn_lock:
            conn.execute("SELECT 1").fetchone()

    def close(self) -> None:
        with self._conn_lock:
            if self._conn is not None:
                self._conn.close()
                self._conn = None

    # Users

    def get_user(self, user_id: str) -> UserProfile | None:
        conn = self._get_connection()
        with self._conn_lock:
            row = conn.execute(
                "SELECT id, name, email, skills_json, region FROM users WHERE id = ?",
                (user_id,),
            ).fetchone()
        return _row_to_user(row) if row else None

    def upsert_user(self, user_id: str, changes: dict[str, Any]) -> UserProfile:
        """Apply ``changes`` (name, email, skills, region) creating the row if needed."""
        current = self.get_user(user_id) or UserProfile(id=user_id)
        merged = current.model_copy(update={k: v for k, v in changes.items() if k in {"name", "email", "skills", "region"}})
        merged.skills = normalize_skills(merged.skills)
        now_iso = _utc_now().isoformat()

        conn = self._get_connection()
        with self._conn_lock:
            conn.execute(
                """
                INSERT INTO users (id, name, email, skills_json, region, created_at, updated_at)
                VALUES (?, ?, ?, ?, ?, ?, ?)
                ON CONFLICT(id) DO UPDATE SET
                    name = excluded.name,
                    email = excluded.email,
                    skills_json = excluded.skills_json,
                    region = excluded.region,
                    updated_at = excluded.updated_at
                """,
                (
                    user_id,
                    merged.name,
                    merged.email,
                    json.dumps(merged.skills, ensure_ascii=False),
                    merged.region,
                    now_iso,
                    now_iso,
                ),
            )
        return merged

    # Jobs

    def create_job(self, data: dict[str, Any], *, posted_by: str | None = None) -> JobPosting:
        job_id = uuid.uuid4().hex
        created_at = _utc_now().isoformat()
        values = (
            job_id,
            data["title"],
            data["company"],
            data["location"],
            data["description"],
            data["type"],
            data.get("workMode") or "On-site",
            1 if data.get("isPaid") else 0,
            data.get("salaryMin"),
            data.get("salaryMax"),
            json.dumps(normalize_skills(data.get("requiredSkills")), ensure_ascii=False),
            data.get("experienceLevel"),
            data.get("status") or "active",
            posted_by,
            created_at,
        )
        placeholders = ", ".join("?" for _ in _JOB_COLUMNS)
        conn = self._get_connection()
        with self._conn_lock:
            conn.execute(f"INSERT INTO jobs ({', '.join(_JOB_COLUMNS)}) VALUES ({placeholders})", values)
        job = self.get_job(job_id)
        if job is None:
            raise RuntimeError(f"job {job_id} was not readable after insert")
        return job

    def get_job(self, job_id: str) -> JobPosting | None:
        conn = self._get_connection()
        with self._conn_lock:
            row = conn.execute(
                f"SELECT {', '.join(_JOB_COLUMNS)} FROM jobs WHERE id = ?",
                (job_id,),
            ).fetchone()
        return _row_to_job(row) if row else None

    def update_job(self, job_id: str, changes: dict[str, Any]) -> JobPosting | None:
        assignments: list[str] = []
        params: list[Any] = []
        for field, value in changes.items():
            column = _UPDATABLE_JOB_FIELDS.get(field)
            if column is None:
                continue
            if field == "requiredSkills":
                value = json.dumps(normalize_skills(value), ensure_ascii=False)
            elif field == "isPaid":
                value = 1 if value else 0
            assignments.append(f"{column} = ?")
            params.append(value)

        if assignments:
            conn = self._get_connection()
            with self._conn_lock:
                conn.execute(
                    f"UPDATE jobs SET {', '.join(assignments)} WHERE id = ?",
                    (*params, job_id),
                )
        return self.get_job(job_id)

    def delete_job(self, job_id: str) -> bool:
        conn = self._get_connection()
        with self._conn_lock:
            cur = conn.execute("DELETE FROM jobs WHERE id = ?", (job_id,))
        return bool(cur.rowcount)

    def search_jobs(
        self,
        *,
        role: str | None = None,
        company: str | None = None,
        skills: Iterable[str] | None = None,
        state: str | None = None,
        job_type: str | None = None,
        limit: int | None = None,
    ) -> list[JobPosting]:
        clauses = ["status = 'active'"]
        params: list[Any] = []

        if role:
            clauses.append("title LIKE ? ESCAPE '\\'")
            params.append(_like(role))
        if company:
            clauses.append("company LIKE ? ESCAPE '\\'")
            params.append(_like(company))
        if job_type:
            clauses.append("type = ?")
            params.append(job_type)
        if state:
            clauses.append(
                "(work_mode = 'Remote'"
                " OR location LIKE '%Remote%'"
                " OR location LIKE ? ESCAPE '\\')"
            )
            params.append(_like(state))

        sql = (
            f"SELECT {', '.join(_JOB_COLUMNS)} FROM jobs WHERE {' AND '.join(clauses)}"
            " ORDER BY created_at DESC, rowid DESC"
        )
        conn = self._get_connection()
        with self._conn_lock:
            rows = conn.execute(sql, params).fetchall()

        jobs = [_row_to_job(row) for row in rows]
        wanted = {normalize_key(skill) for skill in skills or [] if normalize_key(skill)}
        if wanted:
            jobs = [job for job in jobs if wanted & {normalize_key(s) for s in job.requiredSkills}]
        if limit is not None:
            jobs = jobs[:limit]
        return jobs

    def latest_jobs(self, limit: int = 10) -> list[JobPosting]:
        return self.search_jobs(limit=limit)
