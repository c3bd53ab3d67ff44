import asyncio
import os
from datetime import datetime
from types import SimpleNamespace

# must be set before teamhub.settings is imported
os.environ.setdefault("TEAMHUB_ENV", "test")
os.environ.setdefault("BCRYPT_ROUNDS", "4")
os.environ.setdefault("SECRET_KEY", "test-secret")
os.environ.setdefault("SESSION_SECRET_KEY", "test-session-secret")

import pytest
import pytest_asyncio
from fastapi.testclient import TestClient
from mongomock_motor import AsyncMongoMockClient

from teamhub.auth import create_access_token, get_password_hash
from teamhub.db import ATHLETES, ORGANIZATIONS, TEAMS, TESTINGS, TRAINERS, USERS
from teamhub.main import create_app

PASSWORD = "correct-horse"


async def _insert(db, collection, doc):
    doc["_id"] = (await db[collection].insert_one(doc)).inserted_id
    return doc


async def seed_world(db):
    """
    Two organizations with their own trainers, athletes, teams and testings.

    O1: trainers tr1 (TR1), tr2 (TR2); athletes ath1 (A1), ath2 (A2)
        team T1 = {TR1} x {A1}; TR2 and A2 are in no team
    O2: trainer tr3 (TR3); athlete ath3 (A3); team T2 = {TR3} x {A3}
    """
    hashed = get_password_hash(PASSWORD)
    users = {}
    for key, role in (
        ("admin", "admin"),
        ("org1", "organization"), ("org2", "organization"),
        ("tr1", "trainer"), ("tr2", "trainer"), ("tr3", "trainer"),
        ("ath1", "athlete"), ("ath2", "athlete"), ("ath3", "athlete"),
    ):
        users[key] = await _insert(db, USERS, {
            "name": key.capitalize(),
            "email": f"{key}@example.com",
            "password": hashed,
            "role": role,
            "locked": False,
            "verified_at": None,
        })

    limits = {"teams_limit": 10, "trainers_limit": 10, "athletes_limit": 10, "testings_limit": 10}
    o1 = await _insert(db, ORGANIZATIONS, {"user": users["org1"]["_id"], **limits})
    o2 = await _insert(db, ORGANIZATIONS, {"user": users["org2"]["_id"], **limits})

    tr1 = await _insert(db, TRAINERS, {"user": users["tr1"]["_id"], "organization": o1["_id"]})
    tr2 = await _insert(db, TRAINERS, {"user": users["tr2"]["_id"], "organization": o1["_id"]})
    tr3 = await _insert(db, TRAINERS, {"user": users["tr3"]["_id"], "organization": o2["_id"]})

    a1 = await _insert(db, ATHLETES, {"user": users["ath1"]["_id"], "organization": o1["_id"]})
    a2 = await _insert(db, ATHLETES, {"user": users["ath2"]["_id"], "organization": o1["_id"]})
    a3 = await _insert(db, ATHLETES, {"user": users["ath3"]["_id"], "organization": o2["_id"]})

    t1 = await _insert(db, TEAMS, {
        "name": "Sprinters", "description": "", "organization": o1["_id"],
        "trainers": [tr1["_id"]], "athletes": [a1["_id"]],
    })
    t2 = await _insert(db, TEAMS, {
        "name": "Throwers", "description": "", "organization": o2["_id"],
        "trainers": [tr3["_id"]], "athletes": [a3["_id"]],
    })

    s1 = await _insert(db, TESTINGS, {
        "athlete": a1["_id"], "organization": o1["_id"], "date": datetime(2024, 3, 1), "data": {"sprint_30m": 4.1},
    })
    s3 = await _insert(db, TESTINGS, {
        "athlete": a3["_id"], "organization": o2["_id"], "date": datetime(2024, 3, 2), "data": {"shot_put": 12.5},
    })

    return SimpleNamespace(
        users=users,
        O1=o1["_id"], O2=o2["_id"],
        TR1=tr1["_id"], TR2=tr2["_id"], TR3=tr3["_id"],
        A1=a1["_id"], A2=a2["_id"], A3=a3["_id"],
        T1=t1["_id"], T2=t2["_id"],
        S1=s1["_id"], S3=s3["_id"],
        headers={
            key: {"Authorization": f"Bearer {create_access_token(user)}"}
            for key, user in users.items()
        },
    )


@pytest.fixture
def db():
    return AsyncMongoMockClient()["teamhub_test"]


@pytest.fixture
def run():
    """Run a coroutine to completion from a sync test."""
    return asyncio.run


@pytest.fixture
def world(db):
    return asyncio.run(seed_world(db))


@pytest_asyncio.fixture
async def async_world(db):
    return await seed_world(db)


@pytest.fixture
def app(db):
    return create_app(database=db)


@pytest.fixture
def client(app):
    return TestClient(app)
