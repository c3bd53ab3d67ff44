# teamhub/db/interactions.py
from teamhub.db import INTERACTIONS, USERS
from teamhub.utils.pagination import Pagination, paginate


async def list_interactions(db, entity_id, pagination: Pagination) -> dict:
    """Newest-first interactions of one entity, with the author's name resolved."""
    listing = await paginate(
        db[INTERACTIONS],
        {"user": entity_id},
        pagination,
        sort=[("created_at", -1), ("_id", -1)],
    )
    authors = {d["author"] for d in listing["documents"] if d.get("author") is not None}
    names = {}
    if authors:
        async for u in db[USERS].find({"_id": {"$in": list(authors)}}, {"name": 1}):
            names[u["_id"]] = u.get("name")
    for d in listing["documents"]:
        d["author_name"] = names.get(d.get("author"))
    return listing
