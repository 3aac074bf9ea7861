from __future__ import annotations

import pytest

from conftest import add_resume

from jobboard.errors import ErrorKind, ProcedureError
from jobboard.models import Resume
from jobboard.models.enums import ResumeStatus, ResumeVisibility
from jobboard.schemas.resume import ResumeCreate, ResumeOut, ResumePatch
from jobboard.services import resumes


def _error(fn, *args) -> ProcedureError:
    with pytest.raises(ProcedureError) as exc_info:
        fn(*args)
    return exc_info.value


def test_create_resume_defaults(db, seeker):
    payload = ResumeCreate(
        headline="Kite instructor",
        skills=["kitesurfing", "first-aid", "kitesurfing"],
        experience=[{"title": "Instructor", "company": "Lagoon Kite"}],
    )
    ack = resumes.create_resume(db, seeker, payload)

    db.expire_all()
    resume = db.get(Resume, ack.id)
    assert resume.user_id == seeker.id
    assert resume.status == ResumeStatus.PENDING_APPROVAL
    assert resume.visibility == ResumeVisibility.PUBLIC
    assert resume.is_premium is False

    out = ResumeOut.model_validate(resume)
    assert out.skills == ["kitesurfing", "first-aid"]
    assert out.experience[0].company == "Lagoon Kite"
    assert out.education == []


def test_second_resume_is_rejected(db, seeker_user, seeker):
    add_resume(db, seeker_user)
    error = _error(resumes.create_resume, db, seeker, ResumeCreate(headline="Again"))
    assert error.kind is ErrorKind.BAD_REQUEST
    assert error.message == "Resume already exists"
    assert db.query(Resume).count() == 1


def test_recruiter_cannot_create_resume(db, recruiter):
    assert _error(resumes.create_resume, db, recruiter, ResumeCreate()).kind is ErrorKind.FORBIDDEN


def test_resume_cannot_start_active(db, seeker):
    payload = ResumeCreate(status=ResumeStatus.ACTIVE)
    assert _error(resumes.create_resume, db, seeker, payload).kind is ErrorKind.INVALID_TRANSITION


def test_owner_updates_resume(db, seeker_user, seeker):
    resume = add_resume(db, seeker_user)
    resumes.update_resume(db, seeker, resume.id, ResumePatch(summary="Six seasons", visibility=ResumeVisibility.PRIVATE))
    db.expire_all()
    stored = db.get(Resume, resume.id)
    assert stored.summary == "Six seasons"
    assert stored.visibility == ResumeVisibility.PRIVATE
    assert stored.headline == "Certified kitesurf instructor"


def test_owner_cannot_self_activate(db, seeker_user, seeker):
    resume = add_resume(db, seeker_user, status=ResumeStatus.DRAFT)
    patch = ResumePatch(status=ResumeStatus.ACTIVE)
    assert _error(resumes.update_resume, db, seeker, resume.id, patch).kind is ErrorKind.INVALID_TRANSITION


def test_other_seeker_cannot_update(db, seeker_user, other_seeker):
    resume = add_resume(db, seeker_user)
    patch = ResumePatch(headline="Mine now")
    assert _error(resumes.update_resume, db, other_seeker, resume.id, patch).kind is ErrorKind.FORBIDDEN


def test_update_missing_resume(db, seeker):
    assert _error(resumes.update_resume, db, seeker, 999, ResumePatch()).kind is ErrorKind.NOT_FOUND


def test_private_resume_is_hidden_from_others(db, seeker_user, seeker, other_seeker, recruiter, admin):
    resume = add_resume(db, seeker_user, visibility=ResumeVisibility.PRIVATE)

    for caller in (None, other_seeker, recruiter):
        assert _error(resumes.get_resume, db, caller, resume.id).kind is ErrorKind.NOT_FOUND
    assert resumes.get_resume(db, seeker, resume.id).id == resume.id
    assert resumes.get_resume(db, admin, resume.id).id == resume.id


def test_recruiters_only_resume_is_readable_by_id(db, seeker_user):
    resume = add_resume(db, seeker_user, visibility=ResumeVisibility.RECRUITERS_ONLY)
    assert resumes.get_resume(db, None, resume.id).id == resume.id


def test_get_my_resume(db, seeker_user, seeker, other_seeker):
    resume = add_resume(db, seeker_user)
    assert resumes.get_my_resume(db, seeker).id == resume.id
    assert resumes.get_my_resume(db, other_seeker) is None


def test_resume_listings(db, seeker_user, other_seeker_user, admin, recruiter):
    public = add_resume(db, seeker_user)
    hidden = add_resume(db, other_seeker_user, visibility=ResumeVisibility.PRIVATE)

    assert [r.id for r in resumes.list_public_resumes(db, None)] == [public.id]
    assert {r.id for r in resumes.list_all_resumes(db, admin)} == {public.id, hidden.id}
    assert _error(resumes.list_all_resumes, db, recruiter).kind is ErrorKind.FORBIDDEN
