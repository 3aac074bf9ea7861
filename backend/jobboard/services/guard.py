"""Role and ownership checks run at the top of every procedure.

The guard is pure: it never touches storage. Callers load the target record
themselves and describe it with a :class:`Target` before asking for an
ownership decision.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Union

from jobboard.errors import ErrorKind, ProcedureError
from jobboard.models.enums import Role


logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Caller:
    id: int
    role: Role

    @property
    def is_admin(self) -> bool:
        return self.role == Role.ADMIN


class Gate(Enum):
    PUBLIC = "public"
    AUTHENTICATED = "authenticated"
    JOB_SEEKER = "job_seeker"
    RECRUITER = "recruiter"
    ADMIN = "admin"


GATE_ROLES: dict[Gate, frozenset[Role]] = {
    Gate.AUTHENTICATED: frozenset(Role),
    Gate.JOB_SEEKER: frozenset({Role.JOB_SEEKER, Role.ADMIN}),
    Gate.RECRUITER: frozenset({Role.RECRUITER, Role.ADMIN}),
    Gate.ADMIN: frozenset({Role.ADMIN}),
}

GATE_MESSAGES: dict[Gate, str] = {
    Gate.JOB_SEEKER: "Job seeker access required",
    Gate.RECRUITER: "Recruiter access required",
    Gate.ADMIN: "Admin access required",
}


@dataclass(frozen=True)
class Rule:
    gate: Gate
    owned: bool = False


class Action(str, Enum):
    AUTH_ME = "auth.me"
    AUTH_LOGOUT = "auth.logout"
    AUTH_UPDATE_ROLE = "auth.updateRole"

    COMPANY_CREATE = "company.create"
    COMPANY_UPDATE = "company.update"
    COMPANY_GET_BY_ID = "company.getById"
    COMPANY_GET_MINE = "company.getMine"
    COMPANY_GET_ALL = "company.getAll"

    JOB_CREATE = "job.create"
    JOB_UPDATE = "job.update"
    JOB_GET_BY_ID = "job.getById"
    JOB_GET_MINE = "job.getMine"
    JOB_GET_ACTIVE = "job.getActive"
    JOB_GET_ALL = "job.getAll"

    RESUME_CREATE = "resume.create"
    RESUME_UPDATE = "resume.update"
    RESUME_GET_MINE = "resume.getMine"
    RESUME_GET_BY_ID = "resume.getById"
    RESUME_GET_PUBLIC = "resume.getPublic"
    RESUME_GET_ALL = "resume.getAll"

    APPLICATION_CREATE = "application.create"
    APPLICATION_UPDATE_STATUS = "application.updateStatus"
    APPLICATION_GET_MINE = "application.getMine"
    APPLICATION_GET_BY_JOB = "application.getByJob"

    SAVED_JOB_SAVE = "savedJob.save"
    SAVED_JOB_UNSAVE = "savedJob.unsave"
    SAVED_JOB_GET_MINE = "savedJob.getMine"
    SAVED_JOB_CHECK = "savedJob.check"

    SAVED_SEARCH_CREATE = "savedSearch.create"
    SAVED_SEARCH_GET_MINE = "savedSearch.getMine"
    SAVED_SEARCH_DELETE = "savedSearch.delete"
    SAVED_SEARCH_RUN = "savedSearch.run"

    SAVED_CANDIDATE_SAVE = "savedCandidate.save"
    SAVED_CANDIDATE_UNSAVE = "savedCandidate.unsave"
    SAVED_CANDIDATE_GET_MINE = "savedCandidate.getMine"
    SAVED_CANDIDATE_CHECK = "savedCandidate.check"

    ADMIN_GET_USERS = "admin.getUsers"
    ADMIN_UPDATE_USER_ROLE = "admin.updateUserRole"
    ADMIN_APPROVE_JOB = "admin.approveJob"
    ADMIN_REJECT_JOB = "admin.rejectJob"
    ADMIN_APPROVE_RESUME = "admin.approveResume"
    ADMIN_REJECT_RESUME = "admin.rejectResume"
    ADMIN_UPDATE_JOB = "admin.updateJob"
    ADMIN_UPDATE_RESUME = "admin.updateResume"


RULES: dict[Action, Rule] = {
    Action.AUTH_ME: Rule(Gate.PUBLIC),
    Action.AUTH_LOGOUT: Rule(Gate.PUBLIC),
    Action.AUTH_UPDATE_ROLE: Rule(Gate.AUTHENTICATED),
    Action.COMPANY_CREATE: Rule(Gate.RECRUITER),
    Action.COMPANY_UPDATE: Rule(Gate.RECRUITER, owned=True),
    Action.COMPANY_GET_BY_ID: Rule(Gate.PUBLIC),
    Action.COMPANY_GET_MINE: Rule(Gate.RECRUITER),
    Action.COMPANY_GET_ALL: Rule(Gate.PUBLIC),
    # job.create is owned through the target company.
    Action.JOB_CREATE: Rule(Gate.RECRUITER, owned=True),
    Action.JOB_UPDATE: Rule(Gate.RECRUITER, owned=True),
    Action.JOB_GET_BY_ID: Rule(Gate.PUBLIC),
    Action.JOB_GET_MINE: Rule(Gate.RECRUITER),
    Action.JOB_GET_ACTIVE: Rule(Gate.PUBLIC),
    Action.JOB_GET_ALL: Rule(Gate.ADMIN),
    Action.RESUME_CREATE: Rule(Gate.JOB_SEEKER),
    Action.RESUME_UPDATE: Rule(Gate.JOB_SEEKER, owned=True),
    Action.RESUME_GET_MINE: Rule(Gate.JOB_SEEKER),
    Action.RESUME_GET_BY_ID: Rule(Gate.PUBLIC),
    Action.RESUME_GET_PUBLIC: Rule(Gate.PUBLIC),
    Action.RESUME_GET_ALL: Rule(Gate.ADMIN),
    Action.APPLICATION_CREATE: Rule(Gate.JOB_SEEKER),
    # Owned by the recruiter of the job the application targets.
    Action.APPLICATION_UPDATE_STATUS: Rule(Gate.RECRUITER, owned=True),
    Action.APPLICATION_GET_MINE: Rule(Gate.JOB_SEEKER),
    Action.APPLICATION_GET_BY_JOB: Rule(Gate.RECRUITER, owned=True),
    Action.SAVED_JOB_SAVE: Rule(Gate.JOB_SEEKER),
    Action.SAVED_JOB_UNSAVE: Rule(Gate.JOB_SEEKER),
    Action.SAVED_JOB_GET_MINE: Rule(Gate.JOB_SEEKER),
    Action.SAVED_JOB_CHECK: Rule(Gate.JOB_SEEKER),
    Action.SAVED_SEARCH_CREATE: Rule(Gate.JOB_SEEKER),
    Action.SAVED_SEARCH_GET_MINE: Rule(Gate.JOB_SEEKER),
    Action.SAVED_SEARCH_DELETE: Rule(Gate.JOB_SEEKER, owned=True),
    Action.SAVED_SEARCH_RUN: Rule(Gate.JOB_SEEKER, owned=True),
    Action.SAVED_CANDIDATE_SAVE: Rule(Gate.RECRUITER),
    Action.SAVED_CANDIDATE_UNSAVE: Rule(Gate.RECRUITER),
    Action.SAVED_CANDIDATE_GET_MINE: Rule(Gate.RECRUITER),
    Action.SAVED_CANDIDATE_CHECK: Rule(Gate.RECRUITER),
    Action.ADMIN_GET_USERS: Rule(Gate.ADMIN),
    Action.ADMIN_UPDATE_USER_ROLE: Rule(Gate.ADMIN, owned=True),
    Action.ADMIN_APPROVE_JOB: Rule(Gate.ADMIN, owned=True),
    Action.ADMIN_REJECT_JOB: Rule(Gate.ADMIN, owned=True),
    Action.ADMIN_APPROVE_RESUME: Rule(Gate.ADMIN, owned=True),
    Action.ADMIN_REJECT_RESUME: Rule(Gate.ADMIN, owned=True),
    Action.ADMIN_UPDATE_JOB: Rule(Gate.ADMIN, owned=True),
    Action.ADMIN_UPDATE_RESUME: Rule(Gate.ADMIN, owned=True),
}

_missing_rules = set(Action) - set(RULES)
if _missing_rules:
    raise RuntimeError(f"Actions without an authorization rule: {sorted(a.value for a in _missing_rules)}")


@dataclass(frozen=True)
class Target:
    """The record an action is aimed at, reduced to what the guard needs."""

    exists: bool = True
    owner_ids: frozenset[int] = field(default_factory=frozenset)

    @classmethod
    def owned_by(cls, *owner_ids: int) -> Target:
        return cls(exists=True, owner_ids=frozenset(owner_ids))

    @classmethod
    def missing(cls) -> Target:
        return cls(exists=False)


@dataclass(frozen=True)
class Allow:
    pass


@dataclass(frozen=True)
class Deny:
    kind: ErrorKind
    reason: str


Decision = Union[Allow, Deny]

ALLOW = Allow()


def authorize(caller: Caller | None, action: Action, target: Target | None = None) -> Decision:
    rule = RULES[action]

    if rule.gate is Gate.PUBLIC:
        return ALLOW

    if caller is None:
        return Deny(ErrorKind.UNAUTHENTICATED, "Authentication required")

    if caller.role not in GATE_ROLES[rule.gate]:
        return Deny(ErrorKind.FORBIDDEN, GATE_MESSAGES.get(rule.gate, "Access denied"))

    if not rule.owned or target is None:
        return ALLOW

    if not target.exists:
        return Deny(ErrorKind.NOT_FOUND, "Not found")

    if caller.is_admin or caller.id in target.owner_ids:
        return ALLOW
    return Deny(ErrorKind.FORBIDDEN, "You do not own this resource")


def ensure(decision: Decision, action: Action | None = None) -> None:
    if isinstance(decision, Deny):
        if action is not None:
            logger.info("Denied %s: %s", action.value, decision.kind.value)
        raise ProcedureError(decision.kind, decision.reason)


def require(caller: Caller | None, action: Action, target: Target | None = None) -> None:
    """Shorthand for ``ensure(authorize(...))``."""
    ensure(authorize(caller, action, target), action)


def is_owner_or_admin(caller: Caller | None, owner_id: int) -> bool:
    if caller is None:
        return False
    return caller.is_admin or caller.id == owner_id
