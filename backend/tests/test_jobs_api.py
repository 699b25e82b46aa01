from __future__ import annotations

from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import Session

from factories import days_after_base, make_application, make_job
from quickhire.database import get_db
from quickhire.main import app
from quickhire.models.application import Application
from quickhire.models.job import Job


def _job_payload(**overrides) -> dict:
    payload = {
        "title": "  Frontend Engineer ",
        "company": "Northstar Commerce",
        "location": "New York, USA",
        "category": "Engineering",
        "description": "Build candidate experiences with React.",
        "employment_type": "Full-time",
        "salary_range": "$110k - $140k",
    }
    payload.update(overrides)
    return payload


def test_list_jobs_returns_counts_and_total_header(client, db_session):
    older = make_job(db_session, title="Older", created_at=days_after_base(0))
    make_job(db_session, title="Newer", created_at=days_after_base(1))
    make_application(db_session, older)

    response = client.get("/api/jobs")

    assert response.status_code == 200
    assert response.headers["X-Total-Count"] == "2"
    body = response.json()
    assert [job["title"] for job in body] == ["Newer", "Older"]
    assert [job["application_count"] for job in body] == [0, 1]


def test_list_jobs_applies_query_filters_and_sort(client, db_session):
    job_a = make_job(db_session, title="Frontend Engineer", location="Remote", created_at=days_after_base(0))
    make_job(db_session, title="Backend Engineer", location="Remote", created_at=days_after_base(1))
    make_job(db_session, title="Frontend Engineer", location="London, UK", created_at=days_after_base(2))
    make_application(db_session, job_a)

    response = client.get(
        "/api/jobs",
        params={"search": "ENGINEER", "location": "Remote", "category": "", "sort": "applications"},
    )

    assert response.status_code == 200
    assert [(job["title"], job["location"]) for job in response.json()] == [
        ("Frontend Engineer", "Remote"),
        ("Backend Engineer", "Remote"),
    ]
    assert response.headers["X-Total-Count"] == "2"


def test_list_jobs_with_no_matches_is_an_empty_array(client, db_session):
    make_job(db_session, category="Design")

    response = client.get("/api/jobs", params={"category": "Finance"})

    assert response.status_code == 200
    assert response.json() == []
    assert response.headers["X-Total-Count"] == "0"


def test_meta_endpoint_lists_filter_choices(client, db_session):
    make_job(db_session, category="Marketing", location="London, UK", employment_type="Contract")
    make_job(db_session, category="Design", location="Remote", employment_type="Full-time")

    response = client.get("/api/jobs/meta")

    assert response.status_code == 200
    assert response.json() == {
        "categories": ["Design", "Marketing"],
        "locations": ["London, UK", "Remote"],
        "employment_types": ["Contract", "Full-time"],
    }


def test_job_detail_found_missing_and_malformed(client, db_session):
    job = make_job(db_session, title="Support Lead")
    make_application(db_session, job)

    found = client.get(f"/api/jobs/{job.id}")
    assert found.status_code == 200
    assert found.json()["application_count"] == 1

    missing = client.get("/api/jobs/999999")
    assert missing.status_code == 404
    assert missing.json() == {"message": "Job not found."}

    malformed = client.get("/api/jobs/abc")
    assert malformed.status_code == 400
    assert malformed.json() == {"message": "Invalid job id."}


def test_create_job_requires_admin_token(client):
    response = client.post("/api/jobs", json=_job_payload())

    assert response.status_code == 401
    assert response.json() == {"message": "Admin access required."}

    wrong = client.post("/api/jobs", json=_job_payload(), headers={"X-Admin-Token": "nope"})
    assert wrong.status_code == 401


def test_create_job_rejects_invalid_payload_with_field_errors(client, admin_headers):
    response = client.post("/api/jobs", json={}, headers=admin_headers)

    assert response.status_code == 400
    body = response.json()
    assert body["message"] == "Invalid job payload."
    assert len(body["errors"]) == 7
    assert list(body["fields"]) == [
        "title",
        "company",
        "location",
        "category",
        "description",
        "employment_type",
        "salary_range",
    ]


def test_create_job_trims_values_and_starts_with_zero_applications(client, db_session, admin_headers):
    response = client.post("/api/jobs", json=_job_payload(), headers=admin_headers)

    assert response.status_code == 201
    body = response.json()
    assert body["title"] == "Frontend Engineer"
    assert body["application_count"] == 0
    assert body["id"] > 0
    assert body["created_at"]
    assert db_session.query(Job).count() == 1


def test_delete_job_cascades_to_applications(client, db_session, admin_headers):
    job = make_job(db_session)
    keep = make_job(db_session, title="Keep me")
    make_application(db_session, job)
    make_application(db_session, job, email="other@example.com")
    make_application(db_session, keep)
    job_id = job.id

    response = client.delete(f"/api/jobs/{job_id}", headers=admin_headers)

    assert response.status_code == 204
    assert response.content == b""
    db_session.expire_all()
    assert db_session.query(Application).filter(Application.job_id == job_id).count() == 0
    assert db_session.query(Application).count() == 1
    assert client.get(f"/api/jobs/{job_id}").status_code == 404


def test_delete_job_missing_malformed_and_unauthorised(client, db_session, admin_headers):
    assert client.delete("/api/jobs/999999", headers=admin_headers).status_code == 404
    assert client.delete("/api/jobs/abc", headers=admin_headers).status_code == 400
    job = make_job(db_session)
    assert client.delete(f"/api/jobs/{job.id}").status_code == 401


def test_ids_beyond_the_integer_range_are_not_found(client, admin_headers):
    response = client.get("/api/jobs/99999999999999999999")
    assert response.status_code == 404
    assert response.json() == {"message": "Job not found."}

    deleted = client.delete("/api/jobs/99999999999999999999", headers=admin_headers)
    assert deleted.status_code == 404


def test_request_id_is_echoed_or_generated(client):
    echoed = client.get("/api/jobs", headers={"X-Request-ID": "req-123"})
    assert echoed.headers["X-Request-ID"] == "req-123"

    generated = client.get("/api/jobs")
    assert len(generated.headers["X-Request-ID"]) == 32


def test_health_round_trips_to_the_store(client):
    response = client.get("/api/health")
    assert response.status_code == 200
    assert response.json() == {"ok": True}


def test_unreachable_store_maps_to_generic_server_error(tmp_path):
    broken = create_engine(f"sqlite:///{tmp_path / 'missing' / 'nested' / 'jobs.db'}")

    def broken_db():
        db = Session(bind=broken)
        try:
            yield db
        finally:
            db.close()

    app.dependency_overrides[get_db] = broken_db
    try:
        response = TestClient(app).get("/api/jobs", headers={"X-Request-ID": "req-broken"})
    finally:
        app.dependency_overrides.clear()

    assert response.status_code == 500
    assert response.json() == {"message": "Internal server error."}
    assert response.headers["X-Request-ID"] == "req-broken"
    assert "unable to open" not in response.text


def test_unexpected_errors_do_not_leak_detail(client, monkeypatch):
    def explode(db, criteria):
        raise RuntimeError("secret connection string")

    monkeypatch.setattr("quickhire.api.jobs.list_jobs", explode)
    response = TestClient(app, raise_server_exceptions=False).get("/api/jobs")

    assert response.status_code == 500
    assert response.json() == {"message": "Internal server error."}
    assert "secret" not in response.text
