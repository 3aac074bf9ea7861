"""Publication lifecycle of jobs and resumes, review lifecycle of applications."""
from __future__ import annotations

import logging
from enum import Enum

from jobboard.errors import ErrorKind, ProcedureError
from jobboard.models.enums import ApplicationStatus, JobStatus, ResumeStatus, Role


logger = logging.getLogger(__name__)

_RECRUITER_OR_ADMIN = frozenset({Role.RECRUITER, Role.ADMIN})
_JOB_SEEKER_OR_ADMIN = frozenset({Role.JOB_SEEKER, Role.ADMIN})
_ADMIN_ONLY = frozenset({Role.ADMIN})

JOB_TRANSITIONS: dict[tuple[JobStatus, JobStatus], frozenset[Role]] = {
    (JobStatus.DRAFT, JobStatus.PENDING_APPROVAL): _RECRUITER_OR_ADMIN,
    (JobStatus.PENDING_APPROVAL, JobStatus.DRAFT): _RECRUITER_OR_ADMIN,
    (JobStatus.PENDING_APPROVAL, JobStatus.ACTIVE): _ADMIN_ONLY,
    (JobStatus.PENDING_APPROVAL, JobStatus.REJECTED): _ADMIN_ONLY,
    (JobStatus.ACTIVE, JobStatus.INACTIVE): _RECRUITER_OR_ADMIN,
    (JobStatus.INACTIVE, JobStatus.ACTIVE): _ADMIN_ONLY,
    (JobStatus.INACTIVE, JobStatus.PENDING_APPROVAL): _RECRUITER_OR_ADMIN,
}
JOB_TERMINAL = frozenset({JobStatus.REJECTED})

RESUME_TRANSITIONS: dict[tuple[ResumeStatus, ResumeStatus], frozenset[Role]] = {
    (ResumeStatus.DRAFT, ResumeStatus.PENDING_APPROVAL): _JOB_SEEKER_OR_ADMIN,
    (ResumeStatus.PENDING_APPROVAL, ResumeStatus.DRAFT): _JOB_SEEKER_OR_ADMIN,
    (ResumeStatus.ACTIVE, ResumeStatus.DRAFT): _JOB_SEEKER_OR_ADMIN,
    (ResumeStatus.ACTIVE, ResumeStatus.PENDING_APPROVAL): _JOB_SEEKER_OR_ADMIN,
    (ResumeStatus.REJECTED, ResumeStatus.DRAFT): _JOB_SEEKER_OR_ADMIN,
    (ResumeStatus.REJECTED, ResumeStatus.PENDING_APPROVAL): _JOB_SEEKER_OR_ADMIN,
    (ResumeStatus.DRAFT, ResumeStatus.ACTIVE): _ADMIN_ONLY,
    (ResumeStatus.DRAFT, ResumeStatus.REJECTED): _ADMIN_ONLY,
    (ResumeStatus.PENDING_APPROVAL, ResumeStatus.ACTIVE): _ADMIN_ONLY,
    (ResumeStatus.PENDING_APPROVAL, ResumeStatus.REJECTED): _ADMIN_ONLY,
}
RESUME_TERMINAL: frozenset[ResumeStatus] = frozenset()

# Statuses a caller may choose when creating a record.
JOB_INITIAL = frozenset({JobStatus.DRAFT, JobStatus.PENDING_APPROVAL})
RESUME_INITIAL = frozenset({ResumeStatus.DRAFT, ResumeStatus.PENDING_APPROVAL})

APPLICATION_REVIEWERS = _RECRUITER_OR_ADMIN


def _check_coverage(states: type[Enum], table: dict, terminal: frozenset) -> None:
    # Every state must either have an outgoing edge or be declared terminal.
    sources = {source for source, _ in table}
    uncovered = set(states) - sources - set(terminal)
    if uncovered:
        raise RuntimeError(f"{states.__name__} has states with no transitions: {sorted(s.value for s in uncovered)}")


_check_coverage(JobStatus, JOB_TRANSITIONS, JOB_TERMINAL)
_check_coverage(ResumeStatus, RESUME_TRANSITIONS, RESUME_TERMINAL)


def _transition(kind: str, table: dict, role: Role, current: Enum, requested: Enum) -> Enum:
    if current == requested:
        return requested
    allowed = table.get((current, requested))
    if allowed is None or role not in allowed:
        logger.info("Rejected %s transition %s -> %s for %s", kind, current.value, requested.value, role.value)
        raise ProcedureError(
            ErrorKind.INVALID_TRANSITION,
            f"Cannot move {kind} from {current.value} to {requested.value}",
        )
    return requested


def transition_job(role: Role, current: JobStatus, requested: JobStatus) -> JobStatus:
    return _transition("job", JOB_TRANSITIONS, role, JobStatus(current), JobStatus(requested))


def transition_resume(role: Role, current: ResumeStatus, requested: ResumeStatus) -> ResumeStatus:
    return _transition("resume", RESUME_TRANSITIONS, role, ResumeStatus(current), ResumeStatus(requested))


def transition_application(role: Role, current: ApplicationStatus, requested: ApplicationStatus) -> ApplicationStatus:
    # Review statuses are a flat set: any reviewer may set any of them.
    if role not in APPLICATION_REVIEWERS:
        raise ProcedureError(
            ErrorKind.INVALID_TRANSITION,
            f"Cannot move application from {ApplicationStatus(current).value} to {ApplicationStatus(requested).value}",
        )
    return ApplicationStatus(requested)


def initial_job_status(requested: JobStatus | None) -> JobStatus:
    if requested is None:
        return JobStatus.PENDING_APPROVAL
    if requested not in JOB_INITIAL:
        raise ProcedureError(ErrorKind.INVALID_TRANSITION, f"A new job cannot start as {requested.value}")
    return requested


def initial_resume_status(requested: ResumeStatus | None) -> ResumeStatus:
    if requested is None:
        return ResumeStatus.PENDING_APPROVAL
    if requested not in RESUME_INITIAL:
        raise ProcedureError(ErrorKind.INVALID_TRANSITION, f"A new resume cannot start as {requested.value}")
    return requested

