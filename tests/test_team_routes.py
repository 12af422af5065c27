import uuid

import pytest
from fastapi.testclient import TestClient

from api.deps import get_repository
from api.main import app
from infrastructure.adapters.repository.sqlalchemy_repository import SqlAlchemyRepository


@pytest.fixture()
def client(session):
    app.dependency_overrides[get_repository] = lambda: SqlAlchemyRepository(session)
    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides.clear()


def _generate(client, hackathon_id, team_size=3):
    resp = client.post("/teams/generate", json={"hackathon_id": str(hackathon_id), "team_size": team_size})
    assert resp.status_code == 201
    return resp.json()["generation_id"]


def test_generate_and_list(client, hackathon_with_pool) -> None:
    hackathon_id, pids = hackathon_with_pool(6)

    generation_id = _generate(client, hackathon_id)
    resp = client.get("/teams/", params={"generation_id": generation_id})

    assert resp.status_code == 200
    teams = resp.json()
    assert len(teams) == 2
    assert {t["generation_id"] for t in teams} == {generation_id}
    member = teams[0]["members"][0]
    assert set(member) == {
        "participant_id", "first_name", "last_name", "role", "skills", "motivation", "years_experience",
    }
    placed = {m["participant_id"] for t in teams for m in t["members"]}
    assert placed == {str(p) for p in pids}


def test_generate_without_team_size_uses_default(client, hackathon_with_pool) -> None:
    hackathon_id, _ = hackathon_with_pool(8)

    resp = client.post("/teams/generate", json={"hackathon_id": str(hackathon_id)})
    teams = client.get("/teams/", params={"generation_id": resp.json()["generation_id"]}).json()

    assert [len(t["members"]) for t in teams] == [4, 4]


def test_generate_unknown_hackathon_is_404(client) -> None:
    resp = client.post("/teams/generate", json={"hackathon_id": str(uuid.uuid4())})

    assert resp.status_code == 404
    assert "Hackathon not found" in resp.json()["detail"]


def test_generate_without_questionnaire_is_409(client, seed) -> None:
    resp = client.post("/teams/generate", json={"hackathon_id": str(seed.hackathon(None))})

    assert resp.status_code == 409


def test_list_by_hackathon(client, hackathon_with_pool) -> None:
    hackathon_id, _ = hackathon_with_pool(9)
    _generate(client, hackathon_id)

    resp = client.get(f"/teams/hackathon/{hackathon_id}")

    assert resp.status_code == 200
    assert [t["name"] for t in resp.json()] == ["Team 1", "Team 2", "Team 3"]


def test_rename(client, hackathon_with_pool) -> None:
    hackathon_id, _ = hackathon_with_pool(3)
    _generate(client, hackathon_id)
    team_id = client.get(f"/teams/hackathon/{hackathon_id}").json()[0]["id"]

    resp = client.patch(f"/teams/{team_id}/name", json={"name": "  Owls "})
    assert resp.status_code == 200
    assert resp.json()["name"] == "Owls"

    assert client.patch(f"/teams/{team_id}/name", json={"name": "   "}).status_code == 400
    assert client.patch(f"/teams/{team_id}/name", json={}).status_code == 422
    assert client.patch(f"/teams/{uuid.uuid4()}/name", json={"name": "x"}).status_code == 404


def test_add_and_remove_members(client, seed, hackathon_with_pool) -> None:
    hackathon_id, _ = hackathon_with_pool(6)
    _generate(client, hackathon_id)
    team_a, team_b = client.get(f"/teams/hackathon/{hackathon_id}").json()
    newcomer = str(seed.participant())

    resp = client.post(f"/teams/{team_a['id']}/members", json={"participant_ids": [newcomer]})
    assert resp.status_code == 200
    assert resp.json()["members"][-1]["participant_id"] == newcomer
    assert resp.json()["members"][-1]["role"] is None

    taken = team_b["members"][0]["participant_id"]
    resp = client.post(f"/teams/{team_a['id']}/members", json={"participant_ids": [taken]})
    assert resp.status_code == 409

    resp = client.delete(f"/teams/{team_a['id']}/members/{newcomer}")
    assert resp.status_code == 200
    assert newcomer not in {m["participant_id"] for m in resp.json()["members"]}

    resp = client.delete(f"/teams/{team_a['id']}/members/{newcomer}")
    assert resp.status_code == 404


def test_move_member(client, hackathon_with_pool) -> None:
    hackathon_id, _ = hackathon_with_pool(6)
    _generate(client, hackathon_id)
    team_a, team_b = client.get(f"/teams/hackathon/{hackathon_id}").json()
    mover = team_a["members"][0]["participant_id"]

    for _ in range(2):
        resp = client.post("/teams/move", json={"participant_id": mover, "target_team_id": team_b["id"]})
        assert resp.status_code == 204

    moved_to = client.get(f"/teams/{team_b['id']}").json()
    assert moved_to["members"][-1]["participant_id"] == mover
    assert len(client.get(f"/teams/{team_a['id']}").json()["members"]) == 2

    resp = client.post("/teams/move", json={"participant_id": mover, "target_team_id": str(uuid.uuid4())})
    assert resp.status_code == 404


def test_delete_team(client, hackathon_with_pool) -> None:
    hackathon_id, _ = hackathon_with_pool(3)
    _generate(client, hackathon_id)
    team_id = client.get(f"/teams/hackathon/{hackathon_id}").json()[0]["id"]

    assert client.delete(f"/teams/{team_id}").status_code == 204
    assert client.get(f"/teams/{team_id}").status_code == 404
    assert client.delete(f"/teams/{team_id}").status_code == 404
