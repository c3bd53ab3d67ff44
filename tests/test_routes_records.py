from conftest import PASSWORD

from teamhub.db import INTERACTIONS, ORGANIZATIONS, TEAMS, TESTINGS


def test_admin_creates_organization_that_can_log_in(client, world):
    res = client.post(
        "/api/organization/v1/create",
        json={"name": "Harbor Athletics", "email": "Harbor@Example.com", "teams_limit": 3},
        headers=world.headers["admin"],
    )
    assert res.status_code == 200
    body = res.json()

    login = client.post("/api/auth/v1/login", json={
        "email": "harbor@example.com", "password": body["temporary_password"],
    })
    assert login.status_code == 200

    view = client.get(f"/api/organization/v1/{body['organization_id']}/view", headers=world.headers["admin"])
    assert view.json()["teams_limit"] == 3
    assert view.json()["trainers_limit"] > 0


def test_duplicate_email_is_a_conflict(client, world):
    res = client.post(
        "/api/trainer/v1/create",
        json={"name": "Someone", "email": "tr1@example.com"},
        headers=world.headers["org1"],
    )
    assert res.status_code == 409


def test_organization_creates_team_in_own_organization(client, world, db, run):
    res = client.post(
        f"/api/team/v1/create?organization={world.O2}",
        json={"name": "Jumpers", "description": "long and high"},
        headers=world.headers["org1"],
    )
    assert res.status_code == 200
    assert res.json()["organization_id"] == str(world.O1)
    assert run(db[INTERACTIONS].count_documents({"user": world.O1, "type": "create"})) == 1


def test_admin_must_name_the_organization(client, world):
    res = client.post("/api/team/v1/create", json={"name": "Jumpers"}, headers=world.headers["admin"])
    assert res.status_code == 400

    res = client.post(
        f"/api/team/v1/create?organization={world.O2}", json={"name": "Jumpers"}, headers=world.headers["admin"],
    )
    assert res.status_code == 200
    assert res.json()["organization_id"] == str(world.O2)


def test_limit_stops_creation(client, world, db, run):
    run(db[ORGANIZATIONS].update_one({"_id": world.O1}, {"$set": {"teams_limit": 1}}))
    res = client.post("/api/team/v1/create", json={"name": "Jumpers"}, headers=world.headers["org1"])
    assert res.status_code == 400
    assert "limit" in res.json()["detail"]


def test_admin_edits_limits(client, world):
    res = client.put(
        f"/api/organization/v1/{world.O1}/edit-limits",
        json={"athletes_limit": 2},
        headers=world.headers["admin"],
    )
    assert res.status_code == 200
    assert res.json()["athletes_limit"] == 2

    res = client.post(
        "/api/athlete/v1/create",
        json={"name": "Third One", "email": "third@example.com", "birth_date": "2005-01-01",
              "height": 170, "weight": 60},
        headers=world.headers["org1"],
    )
    assert res.status_code == 400


def test_locked_organization_cannot_log_in(client, world):
    res = client.put(
        f"/api/organization/v1/{world.O1}/edit-lock", json={"locked": True}, headers=world.headers["admin"],
    )
    assert res.status_code == 200

    login = client.post("/api/auth/v1/login", json={"email": "org1@example.com", "password": PASSWORD})
    assert login.status_code == 401

    timeline = client.get(f"/api/organization/v1/{world.O1}/interactions", headers=world.headers["admin"]).json()
    assert [i["type"] for i in timeline["documents"]] == ["lock"]


def test_team_members_drive_trainer_access(client, world):
    assert client.get(f"/api/athlete/v1/{world.A2}/view", headers=world.headers["tr1"]).status_code == 403

    res = client.put(
        f"/api/team/v1/{world.T1}/edit-members",
        json={"athletes": [str(world.A1), str(world.A2), str(world.A2)]},
        headers=world.headers["org1"],
    )
    assert res.status_code == 200
    assert res.json()["athletes"] == [str(world.A1), str(world.A2)]

    assert client.get(f"/api/athlete/v1/{world.A2}/view", headers=world.headers["tr1"]).status_code == 200

    res = client.put(
        f"/api/team/v1/{world.T1}/edit-members", json={"trainers": []}, headers=world.headers["org1"],
    )
    assert res.json()["removed"]["trainers"] == [str(world.TR1)]
    assert client.get(f"/api/athlete/v1/{world.A1}/view", headers=world.headers["tr1"]).status_code == 403


def test_members_must_belong_to_the_team_organization(client, world):
    res = client.put(
        f"/api/team/v1/{world.T1}/edit-members",
        json={"athletes": [str(world.A3)]},
        headers=world.headers["org1"],
    )
    assert res.status_code == 400


def test_trainer_records_testing_for_team_athlete(client, world, db, run):
    payload = {"date": "2024-04-01", "data": {"sprint_30m": 4.05, "vertical_jump": 61}}
    ok = client.post(f"/api/testing/v1/create?athlete={world.A1}", json=payload, headers=world.headers["tr1"])
    assert ok.status_code == 200
    assert ok.json()["athlete_id"] == str(world.A1)

    denied = client.post(f"/api/testing/v1/create?athlete={world.A2}", json=payload, headers=world.headers["tr1"])
    assert denied.status_code == 403
    assert run(db[TESTINGS].count_documents({"athlete": world.A1})) == 2


def test_testing_delete_is_checked_through_its_athlete(client, world, db, run):
    foreign = client.delete(f"/api/testing/v1/{world.S3}/delete", headers=world.headers["tr1"])
    assert foreign.status_code == 403

    own = client.delete(f"/api/testing/v1/{world.S1}/delete", headers=world.headers["tr1"])
    assert own.status_code == 200
    assert run(db[TESTINGS].count_documents({})) == 1


def test_athlete_cannot_delete_own_testing(client, world):
    res = client.delete(f"/api/testing/v1/{world.S1}/delete", headers=world.headers["ath1"])
    assert res.status_code == 403


def test_deleting_athlete_cleans_up(client, world, db, run):
    res = client.delete(f"/api/athlete/v1/{world.A1}/delete", headers=world.headers["org1"])
    assert res.status_code == 200

    team = run(db[TEAMS].find_one({"_id": world.T1}))
    assert team["athletes"] == []
    assert run(db[TESTINGS].count_documents({"athlete": world.A1})) == 0

    login = client.post("/api/auth/v1/login", json={"email": "ath1@example.com", "password": PASSWORD})
    assert login.status_code == 401


def test_deleting_trainer_removes_team_membership(client, world, db, run):
    res = client.delete(f"/api/trainer/v1/{world.TR1}/delete", headers=world.headers["org1"])
    assert res.status_code == 200
    assert run(db[TEAMS].find_one({"_id": world.T1}))["trainers"] == []


def test_listing_search_matches_account_names(client, world):
    res = client.get("/api/trainer/v1/listing?search=tr2", headers=world.headers["org1"])
    assert res.status_code == 200
    assert [t["_id"] for t in res.json()["documents"]] == [str(world.TR2)]


def test_pagination_bounds_are_validated(client, world):
    res = client.get("/api/team/v1/listing?limit=0", headers=world.headers["admin"])
    assert res.status_code == 422


def test_manage_trainers_listing_offers_organization_trainers(client, world):
    res = client.get(f"/api/team/v1/{world.T1}/manage-trainers-listing", headers=world.headers["org1"])
    assert res.status_code == 200
    body = res.json()
    assert [t["_id"] for t in body["documents"]] == [str(world.TR1), str(world.TR2)]
    assert [t["_id"] for t in body["selected"]] == [str(world.TR1)]
    assert body["total"] == 2
    assert body["documents"][0] == {"_id": str(world.TR1), "name": "Tr1", "email": "tr1@example.com"}


def test_manage_athletes_listing_searches_and_pages(client, world):
    res = client.get(f"/api/team/v1/{world.T1}/manage-athletes-listing?search=ath2", headers=world.headers["org1"])
    assert res.json() == {
        "documents": [{"_id": str(world.A2), "name": "Ath2", "email": "ath2@example.com"}],
        "selected": [],
        "total": 1,
    }

    page = client.get(f"/api/team/v1/{world.T1}/manage-athletes-listing?page=2&limit=1", headers=world.headers["org1"])
    body = page.json()
    assert body["total"] == 2
    assert [a["_id"] for a in body["documents"]] == [str(world.A2)]
    assert [a["_id"] for a in body["selected"]] == [str(world.A1)]


def test_manage_listings_are_guarded_like_team_edits(client, world):
    for path in ("manage-trainers-listing", "manage-athletes-listing"):
        foreign = client.get(f"/api/team/v1/{world.T2}/{path}", headers=world.headers["org1"])
        assert foreign.status_code == 403

        trainer = client.get(f"/api/team/v1/{world.T1}/{path}", headers=world.headers["tr1"])
        assert trainer.status_code == 403

        admin = client.get(f"/api/team/v1/{world.T2}/{path}", headers=world.headers["admin"])
        assert admin.status_code == 200
        assert admin.json()["total"] == 1
