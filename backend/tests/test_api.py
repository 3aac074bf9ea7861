from __future__ import annotations

from conftest import IDENTITY_SECRET, add_job, add_resume, auth_headers

from jobboard.models import Job, User
from jobboard.models.enums import JobStatus, JobType, ResumeVisibility, Role


def test_health(client):
    assert client.get("/health").json()["status"] == "ok"


def test_session_requires_identity_secret(client):
    response = client.post("/api/auth/session", json={"open_id": "abc"})
    assert response.status_code == 401
    assert response.json()["error"]["kind"] == "UNAUTHENTICATED"

    response = client.post("/api/auth/session", json={"open_id": "abc"}, headers={"X-Identity-Secret": "wrong"})
    assert response.status_code == 401


def test_session_issues_usable_token(client):
    response = client.post(
        "/api/auth/session",
        json={"open_id": "abc", "name": "Ana"},
        headers={"X-Identity-Secret": IDENTITY_SECRET},
    )
    assert response.status_code == 200
    body = response.json()
    assert body["role"] == "job_seeker"

    me = client.get("/api/auth/me", headers={"Authorization": f"Bearer {body['access_token']}"})
    assert me.json()["open_id"] == "abc"
    assert me.json()["name"] == "Ana"


def test_owner_session_is_admin(client):
    response = client.post(
        "/api/auth/session",
        json={"open_id": "owner-open-id"},
        headers={"X-Identity-Secret": IDENTITY_SECRET},
    )
    assert response.json()["role"] == "admin"


def test_me_is_null_for_anonymous(client):
    response = client.get("/api/auth/me")
    assert response.status_code == 200
    assert response.json() is None


def test_invalid_token_is_treated_as_anonymous(client):
    response = client.get("/api/jobs/mine", headers={"Authorization": "Bearer forged"})
    assert response.status_code == 401
    assert response.json() == {"error": {"kind": "UNAUTHENTICATED", "message": "Authentication required"}}


def test_self_role_switch_rejects_admin(client, seeker_user):
    response = client.post("/api/auth/role", json={"role": "admin"}, headers=auth_headers(seeker_user))
    assert response.status_code == 400
    assert response.json()["error"]["kind"] == "BAD_REQUEST"
    assert response.json()["error"]["details"]


def test_self_role_switch(client, db, seeker_user):
    response = client.post("/api/auth/role", json={"role": "recruiter"}, headers=auth_headers(seeker_user))
    assert response.json() == {"success": True, "id": seeker_user.id}
    db.expire_all()
    assert db.get(User, seeker_user.id).role == Role.RECRUITER


def test_anonymous_browses_active_jobs(client, db, company):
    add_job(db, company, title="Kitesurf Instructor", skills=["kitesurfing", "first-aid"])
    add_job(db, company, title="Hidden", status=JobStatus.DRAFT)

    response = client.get("/api/jobs", params={"search": "kite"})
    assert response.status_code == 200
    body = response.json()
    assert [job["title"] for job in body] == ["Kitesurf Instructor"]
    assert body[0]["skills"] == ["kitesurfing", "first-aid"]
    assert body[0]["status"] == "active"


def test_job_type_query_parameter(client, db, company):
    add_job(db, company, title="Seasonal")
    add_job(db, company, title="Contract", job_type=JobType.CONTRACT)

    response = client.get("/api/jobs", params={"job_type": "contract"})
    assert [job["title"] for job in response.json()] == ["Contract"]
    assert client.get("/api/jobs", params={"job_type": "gig"}).status_code == 400


def test_recruiter_flow(client, db, recruiter_user, admin_user):
    headers = auth_headers(recruiter_user)
    company = client.post("/api/companies", json={"name": "Lagoon Kite"}, headers=headers).json()
    assert company["success"] is True

    created = client.post(
        "/api/jobs",
        json={
            "company_id": company["id"],
            "title": "Kite Coach",
            "description": "Coach on the lagoon",
            "job_type": "seasonal",
            "skills": ["kitesurfing", "first-aid"],
        },
        headers=headers,
    )
    assert created.status_code == 200
    job_id = created.json()["id"]
    assert client.get(f"/api/jobs/{job_id}").json()["status"] == "pending_approval"
    assert client.get("/api/jobs").json() == []

    approve = client.post(f"/api/admin/jobs/{job_id}/approve", headers=headers)
    assert approve.status_code == 403

    self_approve = client.patch(f"/api/jobs/{job_id}", json={"status": "active"}, headers=headers)
    assert self_approve.status_code == 400
    assert self_approve.json()["error"]["kind"] == "INVALID_TRANSITION"

    approve = client.post(f"/api/admin/jobs/{job_id}/approve", headers=auth_headers(admin_user))
    assert approve.status_code == 200
    assert [job["id"] for job in client.get("/api/jobs").json()] == [job_id]


def test_job_seeker_cannot_create_company(client, seeker_user):
    response = client.post("/api/companies", json={"name": "Nope"}, headers=auth_headers(seeker_user))
    assert response.status_code == 403
    assert response.json()["error"] == {"kind": "FORBIDDEN", "message": "Recruiter access required"}


def test_salary_range_is_rejected(client, recruiter_user, company):
    response = client.post(
        "/api/jobs",
        json={
            "company_id": company.id,
            "title": "Coach",
            "description": "Coach",
            "job_type": "seasonal",
            "salary_min": 5000,
            "salary_max": 1000,
        },
        headers=auth_headers(recruiter_user),
    )
    assert response.status_code == 400


def test_unknown_fields_are_rejected(client, recruiter_user, company):
    response = client.patch(
        f"/api/companies/{company.id}",
        json={"is_premium": True},
        headers=auth_headers(recruiter_user),
    )
    assert response.status_code == 400


def test_missing_job_is_not_found(client):
    response = client.get("/api/jobs/4040")
    assert response.status_code == 404
    assert response.json()["error"]["kind"] == "NOT_FOUND"


def test_application_flow(client, db, company, seeker_user, recruiter_user):
    job = add_job(db, company)
    seeker = auth_headers(seeker_user)

    no_resume = client.post("/api/applications", json={"job_id": job.id}, headers=seeker)
    assert no_resume.status_code == 400
    assert no_resume.json()["error"]["message"] == "Please create a resume first"

    assert client.post("/api/resumes", json={"headline": "Kite coach"}, headers=seeker).status_code == 200
    duplicate_resume = client.post("/api/resumes", json={"headline": "Again"}, headers=seeker)
    assert duplicate_resume.json()["error"]["message"] == "Resume already exists"

    applied = client.post("/api/applications", json={"job_id": job.id, "cover_letter": "Hello"}, headers=seeker)
    assert applied.status_code == 200
    again = client.post("/api/applications", json={"job_id": job.id}, headers=seeker)
    assert again.json()["error"]["message"] == "Already applied to this job"

    mine = client.get("/api/applications/mine", headers=seeker).json()
    assert [a["status"] for a in mine] == ["submitted"]

    recruiter = auth_headers(recruiter_user)
    by_job = client.get(f"/api/applications/by-job/{job.id}", headers=recruiter).json()
    assert [a["id"] for a in by_job] == [applied.json()["id"]]

    update = client.patch(
        f"/api/applications/{applied.json()['id']}/status",
        json={"status": "shortlisted", "notes": "Call"},
        headers=recruiter,
    )
    assert update.status_code == 200
    assert client.get("/api/applications/mine", headers=seeker).json()[0]["status"] == "shortlisted"


def test_private_resume_is_not_found_for_others(client, db, seeker_user, other_seeker_user):
    resume = add_resume(db, seeker_user, visibility=ResumeVisibility.PRIVATE)

    assert client.get(f"/api/resumes/{resume.id}").status_code == 404
    assert client.get(f"/api/resumes/{resume.id}", headers=auth_headers(other_seeker_user)).status_code == 404
    owner_view = client.get(f"/api/resumes/{resume.id}", headers=auth_headers(seeker_user))
    assert owner_view.status_code == 200
    assert owner_view.json()["visibility"] == "private"


def test_saved_jobs_and_searches(client, db, company, seeker_user):
    job = add_job(db, company, title="Kite Contract", job_type=JobType.CONTRACT)
    headers = auth_headers(seeker_user)

    assert client.get(f"/api/saved-jobs/{job.id}", headers=headers).json() == {"saved": False}
    client.post(f"/api/saved-jobs/{job.id}", headers=headers)
    client.post(f"/api/saved-jobs/{job.id}", headers=headers)
    assert [row["job_id"] for row in client.get("/api/saved-jobs", headers=headers).json()] == [job.id]
    client.delete(f"/api/saved-jobs/{job.id}", headers=headers)
    assert client.get(f"/api/saved-jobs/{job.id}", headers=headers).json() == {"saved": False}

    created = client.post(
        "/api/saved-searches",
        json={"name": "Contracts", "search_params": {"job_type": "contract"}},
        headers=headers,
    )
    search_id = created.json()["id"]
    listed = client.get("/api/saved-searches", headers=headers).json()
    assert listed[0]["search_params"]["job_type"] == "contract"
    run = client.get(f"/api/saved-searches/{search_id}/jobs", headers=headers).json()
    assert [row["title"] for row in run] == ["Kite Contract"]
    assert client.delete(f"/api/saved-searches/{search_id}", headers=headers).status_code == 200


def test_saved_candidates(client, recruiter_user, seeker_user):
    headers = auth_headers(recruiter_user)
    path = f"/api/saved-candidates/{seeker_user.id}"

    assert client.post(path, headers=headers).status_code == 200
    assert client.post(path, json={"notes": "Strong swimmer"}, headers=headers).status_code == 200
    rows = client.get("/api/saved-candidates", headers=headers).json()
    assert [(row["candidate_id"], row["notes"]) for row in rows] == [(seeker_user.id, "Strong swimmer")]
    assert client.get(path, headers=headers).json() == {"saved": True}
    client.delete(path, headers=headers)
    assert client.get(path, headers=headers).json() == {"saved": False}


def test_admin_manages_roles_and_features(client, db, company, admin_user, seeker_user):
    headers = auth_headers(admin_user)
    job = add_job(db, company)

    users = client.get("/api/admin/users", headers=headers).json()
    assert seeker_user.id in {user["id"] for user in users}

    for _ in range(2):
        response = client.put(f"/api/admin/users/{seeker_user.id}/role", json={"role": "recruiter"}, headers=headers)
        assert response.status_code == 200

    client.patch(f"/api/admin/jobs/{job.id}", json={"is_featured": True}, headers=headers)
    db.expire_all()
    assert db.get(Job, job.id).is_featured is True
    assert db.get(User, seeker_user.id).role == Role.RECRUITER

    assert client.get("/api/admin/users", headers=auth_headers(seeker_user)).status_code == 403


def test_logout_acknowledges_any_caller(client, seeker_user):
    assert client.post("/api/auth/logout").json() == {"success": True, "id": None}
    response = client.post("/api/auth/logout", headers=auth_headers(seeker_user))
    assert response.status_code == 200
    assert response.json()["success"] is True
