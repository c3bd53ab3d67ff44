from teamhub.db import (
    ATHLETES,
    AUDIT_EVENTS,
    INTERACTIONS,
    ORGANIZATIONS,
    PASSWORD_RESETS,
    SESSIONS,
    TEAMS,
    TESTINGS,
    TRAINERS,
    USERS,
)


async def ensure_indexes(db):
    # accounts
    await db[USERS].create_index("email", unique=True)

    # one role row per account; looked up on every scoped request
    await db[ORGANIZATIONS].create_index("user", unique=True)
    await db[TRAINERS].create_index("user", unique=True)
    await db[ATHLETES].create_index("user", unique=True)
    await db[TRAINERS].create_index("organization")
    await db[ATHLETES].create_index("organization")

    # teams & membership checks
    await db[TEAMS].create_index([("organization", 1), ("name", 1)])
    await db[TEAMS].create_index("trainers")
    await db[TEAMS].create_index("athletes")

    # testings
    await db[TESTINGS].create_index([("athlete", 1), ("date", -1)])
    await db[TESTINGS].create_index("organization")

    # activity / sessions / audit
    await db[INTERACTIONS].create_index([("user", 1), ("created_at", -1)])
    await db[SESSIONS].create_index("jti", unique=True)
    await db[SESSIONS].create_index("exp")
    await db[PASSWORD_RESETS].create_index("token", unique=True)
    await db[AUDIT_EVENTS].create_index([("ts", 1)])
    await db[AUDIT_EVENTS].create_index([("action", 1)])
