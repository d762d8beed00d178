"""
Tests for candidate listing, lookup, edits, tag assignment and tag catalogue.
"""
from datetime import datetime, timedelta, timezone

from recruitdesk.db.models import Candidate, Tag


def _add_candidate(db, name, status="pending", tags=(), created_at=None):
    candidate = Candidate(
        uuid=f"uuid-{name}",
        sender="+3900",
        status=status,
        full_name=name,
        email=f"{name.split()[0].lower()}@example.com",
        raw_answers={"fullName": name},
        tags=list(tags),
    )
    if created_at is not None:
        candidate.created_at = created_at
    db.add(candidate)
    db.commit()
    db.refresh(candidate)
    return candidate


def test_list_candidates_newest_first(client, db, auth_headers):
    now = datetime.now(timezone.utc)
    _add_candidate(db, "Old One", created_at=now - timedelta(days=2))
    _add_candidate(db, "New One", created_at=now)
    _add_candidate(db, "Mid One", created_at=now - timedelta(days=1))

    response = client.get("/api/candidates", headers=auth_headers)

    assert response.status_code == 200
    assert [c["fullName"] for c in response.json()] == ["New One", "Mid One", "Old One"]
    assert response.headers["X-Total-Count"] == "3"


def test_list_candidates_includes_reviews_and_tags(client, reviewed_candidate, auth_headers):
    data = client.get("/api/candidates", headers=auth_headers).json()

    assert len(data) == 1
    assert [r["phase"] for r in data[0]["reviews"]] == [1, 2]
    assert data[0]["tags"] == []


def test_list_candidates_filters(client, db, tags, auth_headers):
    python, docker, aws = tags
    _add_candidate(db, "Ada Lovelace", status="pending", tags=[python, docker])
    _add_candidate(db, "Alan Turing", status="reviewed", tags=[python])
    _add_candidate(db, "Grace Hopper", status="rejected", tags=[aws])

    def names(**params):
        response = client.get("/api/candidates", params=params, headers=auth_headers)
        assert response.status_code == 200
        return sorted(c["fullName"] for c in response.json())

    assert names(search="LOVE") == ["Ada Lovelace"]
    assert names(status=["pending", "rejected"]) == ["Ada Lovelace", "Grace Hopper"]
    assert names(tag=["python"]) == ["Ada Lovelace", "Alan Turing"]
    assert names(tag=["Python", "Docker"]) == ["Ada Lovelace"]
    assert names(tag=["python"], status=["reviewed"]) == ["Alan Turing"]


def test_list_candidates_unknown_status_filter(client, auth_headers):
    response = client.get("/api/candidates", params={"status": "hired"}, headers=auth_headers)
    assert response.status_code == 400


def test_list_candidates_pagination(client, db, auth_headers):
    now = datetime.now(timezone.utc)
    for i in range(5):
        _add_candidate(db, f"Candidate {i}", created_at=now + timedelta(minutes=i))

    response = client.get("/api/candidates", params={"page": 2, "pageSize": 2}, headers=auth_headers)

    assert response.status_code == 200
    assert [c["fullName"] for c in response.json()] == ["Candidate 2", "Candidate 1"]
    assert response.headers["X-Total-Count"] == "5"


def test_get_candidate_not_found(client, auth_headers):
    response = client.get("/api/candidates/9999", headers=auth_headers)

    assert response.status_code == 404
    assert response.json() == {"status": "error", "message": "Candidate not found"}


def test_get_candidate_invalid_id(client, auth_headers):
    response = client.get("/api/candidates/abc", headers=auth_headers)
    assert response.status_code == 400


def test_update_candidate_partial(client, db, candidate, auth_headers):
    response = client.put(
        f"/api/candidates/{candidate.id}",
        json={"status": "rejected", "githubLink": "github.com/ada"},
        headers=auth_headers,
    )

    assert response.status_code == 200
    data = response.json()
    assert data["status"] == "rejected"
    assert data["githubLink"] == "github.com/ada"
    assert data["fullName"] == "Ada Lovelace"
    assert data["email"] == "ada@example.com"


def test_update_candidate_accepts_snake_case(client, candidate, auth_headers):
    response = client.put(
        f"/api/candidates/{candidate.id}",
        json={"full_name": "Augusta Ada King"},
        headers=auth_headers,
    )
    assert response.status_code == 200
    assert response.json()["fullName"] == "Augusta Ada King"


def test_update_candidate_rejects_unknown_status(client, candidate, auth_headers):
    response = client.put(f"/api/candidates/{candidate.id}", json={"status": "hired"}, headers=auth_headers)
    assert response.status_code == 400


def test_update_candidate_rejects_bad_email(client, candidate, auth_headers):
    response = client.put(f"/api/candidates/{candidate.id}", json={"email": "not-an-email"}, headers=auth_headers)
    assert response.status_code == 400


def test_update_candidate_rejects_empty_body(client, candidate, auth_headers):
    response = client.put(f"/api/candidates/{candidate.id}", json={}, headers=auth_headers)

    assert response.status_code == 400
    assert response.json()["message"] == "No fields to update"


def test_update_candidate_not_found(client, auth_headers):
    response = client.put("/api/candidates/9999", json={"status": "reviewed"}, headers=auth_headers)
    assert response.status_code == 404


def test_set_candidate_tags(client, candidate, tags, auth_headers):
    python, docker, aws = tags
    response = client.put(
        f"/api/candidates/{candidate.id}/tags",
        json={"tagIds": [python.id, aws.id]},
        headers=auth_headers,
    )

    assert response.status_code == 200
    assert [t["name"] for t in response.json()["tags"]] == ["AWS", "Python"]


def test_set_candidate_tags_unknown_tag(client, db, candidate, tags, auth_headers):
    response = client.put(
        f"/api/candidates/{candidate.id}/tags",
        json={"tagIds": [tags[0].id, 999]},
        headers=auth_headers,
    )

    assert response.status_code == 400
    assert "999" in response.json()["message"]
    db.expire_all()
    assert db.get(Candidate, candidate.id).tags == []


def test_set_candidate_tags_unknown_candidate(client, tags, auth_headers):
    response = client.put("/api/candidates/9999/tags", json={"tagIds": [tags[0].id]}, headers=auth_headers)
    assert response.status_code == 404


def test_list_tags_alphabetical(client, db, auth_headers):
    db.add_all([Tag(name="Redis"), Tag(name="Agile"), Tag(name="Go")])
    db.commit()

    response = client.get("/api/tags", headers=auth_headers)

    assert response.status_code == 200
    assert [t["name"] for t in response.json()] == ["Agile", "Go", "Redis"]


def test_list_tags_requires_token(client):
    assert client.get("/api/tags").status_code == 401


def test_list_candidates_partial_paging_uses_defaults(client, db, auth_headers):
    now = datetime.now(timezone.utc)
    for i in range(25):
        _add_candidate(db, f"Candidate {i}", created_at=now + timedelta(minutes=i))

    first = client.get("/api/candidates", params={"pageSize": 3}, headers=auth_headers)
    assert [c["fullName"] for c in first.json()] == ["Candidate 24", "Candidate 23", "Candidate 22"]

    second = client.get("/api/candidates", params={"page": 2}, headers=auth_headers)
    assert [c["fullName"] for c in second.json()] == ["Candidate 4", "Candidate 3", "Candidate 2", "Candidate 1", "Candidate 0"]
    assert second.headers["X-Total-Count"] == "25"
