"""Filtered listings of active jobs and discoverable resumes.

Filters are conjunctive. Free-text terms are case-insensitive substring matches
with LIKE wildcards escaped, and an absent or blank filter adds no predicate.
Ordering always ends on the primary key so identical inputs over identical data
return identical sequences.
"""
from __future__ import annotations

from sqlalchemy import String, and_, cast, or_
from sqlalchemy.orm import Session
from sqlalchemy.sql.elements import ColumnElement

from jobboard.models.enums import JobStatus, ResumeStatus, ResumeVisibility
from jobboard.models.job import Job
from jobboard.models.resume import Resume
from jobboard.schemas.job import JobFilters
from jobboard.schemas.resume import ResumeFilters


LIKE_ESCAPE = "\\"

DISCOVERABLE_VISIBILITIES = (ResumeVisibility.PUBLIC, ResumeVisibility.RECRUITERS_ONLY)

JOB_ORDERING = (Job.is_featured.desc(), Job.created_at.desc(), Job.id.desc())
RESUME_ORDERING = (Resume.is_premium.desc(), Resume.updated_at.desc(), Resume.id.desc())

# Terms containing list syntax would match across skills, so they skip the skills column.
SKILL_LIST_SYNTAX = frozenset('"[],\\')


def _clean(term: str | None) -> str:
    return (term or "").strip()


def _like_pattern(term: str) -> str:
    escaped = (
        term.replace(LIKE_ESCAPE, LIKE_ESCAPE * 2)
        .replace("%", LIKE_ESCAPE + "%")
        .replace("_", LIKE_ESCAPE + "_")
    )
    return f"%{escaped}%"


def _contains(column, term: str) -> ColumnElement:
    return column.ilike(_like_pattern(term), escape=LIKE_ESCAPE)


def job_predicates(filters: JobFilters) -> list[ColumnElement]:
    predicates: list[ColumnElement] = [Job.status == JobStatus.ACTIVE]

    search = _clean(filters.search)
    if search:
        predicates.append(or_(_contains(Job.title, search), _contains(Job.description, search)))

    location = _clean(filters.location)
    if location:
        predicates.append(_contains(Job.location, location))

    if filters.job_type is not None:
        predicates.append(Job.job_type == filters.job_type)

    return predicates


def resume_predicates(filters: ResumeFilters) -> list[ColumnElement]:
    predicates: list[ColumnElement] = [
        Resume.status == ResumeStatus.ACTIVE,
        Resume.visibility.in_(DISCOVERABLE_VISIBILITIES),
    ]

    search = _clean(filters.search)
    if search:
        matches = [_contains(Resume.headline, search), _contains(Resume.summary, search)]
        if not SKILL_LIST_SYNTAX.intersection(search):
            matches.append(_contains(cast(Resume.skills, String), search))
        predicates.append(or_(*matches))

    location = _clean(filters.location)
    if location:
        predicates.append(_contains(Resume.location, location))

    return predicates


def list_active_jobs(db: Session, filters: JobFilters | None = None) -> list[Job]:
    predicates = job_predicates(filters or JobFilters())
    return db.query(Job).filter(and_(*predicates)).order_by(*JOB_ORDERING).all()


def list_public_resumes(db: Session, filters: ResumeFilters | None = None) -> list[Resume]:
    predicates = resume_predicates(filters or ResumeFilters())
    return db.query(Resume).filter(and_(*predicates)).order_by(*RESUME_ORDERING).all()
