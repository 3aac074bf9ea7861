from __future__ import annotations

import pytest

from conftest import add_job, add_resume

from jobboard.errors import ErrorKind, ProcedureError
from jobboard.models import Job, Resume, User
from jobboard.models.enums import JobStatus, ResumeStatus, Role
from jobboard.schemas.job import AdminJobPatch
from jobboard.schemas.resume import AdminResumePatch
from jobboard.services import admin as admin_service


def _error(fn, *args) -> ProcedureError:
    with pytest.raises(ProcedureError) as exc_info:
        fn(*args)
    return exc_info.value


def test_list_users_is_admin_only(db, admin, recruiter, seeker_user):
    ids = {user.id for user in admin_service.list_users(db, admin)}
    assert {admin.id, recruiter.id, seeker_user.id} <= ids
    assert _error(admin_service.list_users, db, recruiter).kind is ErrorKind.FORBIDDEN
    assert _error(admin_service.list_users, db, None).kind is ErrorKind.UNAUTHENTICATED


def test_update_user_role_is_idempotent(db, admin, seeker_user):
    first = admin_service.update_user_role(db, admin, seeker_user.id, Role.RECRUITER)
    second = admin_service.update_user_role(db, admin, seeker_user.id, Role.RECRUITER)
    assert first == second
    db.expire_all()
    assert db.get(User, seeker_user.id).role == Role.RECRUITER


def test_update_role_of_missing_user(db, admin):
    assert _error(admin_service.update_user_role, db, admin, 999, Role.ADMIN).kind is ErrorKind.NOT_FOUND


def test_non_admin_cannot_change_roles(db, recruiter, seeker_user):
    error = _error(admin_service.update_user_role, db, recruiter, seeker_user.id, Role.ADMIN)
    assert error.kind is ErrorKind.FORBIDDEN


def test_approve_and_reject_jobs(db, admin, company):
    pending = add_job(db, company, status=JobStatus.PENDING_APPROVAL)
    doomed = add_job(db, company, status=JobStatus.PENDING_APPROVAL)

    admin_service.approve_job(db, admin, pending.id)
    admin_service.reject_job(db, admin, doomed.id)
    db.expire_all()
    assert db.get(Job, pending.id).status == JobStatus.ACTIVE
    assert db.get(Job, doomed.id).status == JobStatus.REJECTED


def test_rejected_job_cannot_be_approved(db, admin, company):
    job = add_job(db, company, status=JobStatus.REJECTED)
    assert _error(admin_service.approve_job, db, admin, job.id).kind is ErrorKind.INVALID_TRANSITION


def test_approve_missing_job(db, admin):
    assert _error(admin_service.approve_job, db, admin, 999).kind is ErrorKind.NOT_FOUND


def test_recruiter_cannot_approve_own_job(db, recruiter, company):
    job = add_job(db, company, status=JobStatus.PENDING_APPROVAL)
    assert _error(admin_service.approve_job, db, recruiter, job.id).kind is ErrorKind.FORBIDDEN


def test_approve_and_reject_resumes(db, admin, seeker_user, other_seeker_user):
    pending = add_resume(db, seeker_user, status=ResumeStatus.PENDING_APPROVAL)
    draft = add_resume(db, other_seeker_user, status=ResumeStatus.DRAFT)

    admin_service.approve_resume(db, admin, pending.id)
    admin_service.reject_resume(db, admin, draft.id)
    db.expire_all()
    assert db.get(Resume, pending.id).status == ResumeStatus.ACTIVE
    assert db.get(Resume, draft.id).status == ResumeStatus.REJECTED


def test_admin_features_job(db, admin, company):
    job = add_job(db, company)
    admin_service.update_job(db, admin, job.id, AdminJobPatch(is_featured=True, title="Head Instructor"))
    db.expire_all()
    stored = db.get(Job, job.id)
    assert stored.is_featured is True
    assert stored.title == "Head Instructor"


def test_admin_marks_resume_premium(db, admin, seeker_user):
    resume = add_resume(db, seeker_user)
    admin_service.update_resume(db, admin, resume.id, AdminResumePatch(is_premium=True))
    db.expire_all()
    assert db.get(Resume, resume.id).is_premium is True


def test_admin_update_missing_records(db, admin):
    assert _error(admin_service.update_job, db, admin, 999, AdminJobPatch()).kind is ErrorKind.NOT_FOUND
    assert _error(admin_service.update_resume, db, admin, 999, AdminResumePatch()).kind is ErrorKind.NOT_FOUND


@pytest.mark.parametrize("field", ["is_featured", "salary_currency", "status"])
def test_admin_cannot_null_required_job_fields(db, admin, company, field):
    job = add_job(db, company, is_featured=True)
    error = _error(admin_service.update_job, db, admin, job.id, AdminJobPatch(**{field: None}))
    assert error.kind is ErrorKind.BAD_REQUEST
    assert error.message == f"{field} cannot be empty"
    db.expire_all()
    stored = db.get(Job, job.id)
    assert stored.is_featured is True
    assert stored.status == JobStatus.ACTIVE


@pytest.mark.parametrize("field", ["is_premium", "status", "visibility"])
def test_admin_cannot_null_required_resume_fields(db, admin, seeker_user, field):
    resume = add_resume(db, seeker_user)
    error = _error(admin_service.update_resume, db, admin, resume.id, AdminResumePatch(**{field: None}))
    assert error.kind is ErrorKind.BAD_REQUEST
    assert error.message == f"{field} cannot be empty"
    db.expire_all()
    assert db.get(Resume, resume.id).status == ResumeStatus.ACTIVE
