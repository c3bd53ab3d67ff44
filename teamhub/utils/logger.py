from datetime import datetime, timezone

from teamhub.db import INTERACTIONS

INTERACTION_TYPES = ("create", "edit", "lock", "unlock", "delete")


async def log_interaction(db, user, author, type: str, title: str, description: str | None = None):
    """
    Activity record shown on an entity's interactions timeline.
    `user` is the entity the interaction belongs to, `author` the acting user.
    """
    if type not in INTERACTION_TYPES:
        raise ValueError(f"unknown interaction type {type!r}")
    result = await db[INTERACTIONS].insert_one({
        "user": user,
        "author": author,
        "type": type,
        "title": title,
        "description": description,
        "created_at": datetime.now(timezone.utc),
    })
    return result.inserted_id
