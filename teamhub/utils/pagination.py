# teamhub/utils/pagination.py
from __future__ import annotations

from dataclasses import dataclass

from fastapi import Query


@dataclass(frozen=True)
class Pagination:
    page: int = 1
    limit: int = 20

    @property
    def skip(self) -> int:
        return self.limit * (self.page - 1)


def pagination_params(
    page: int = Query(1, ge=1, le=9999),
    limit: int = Query(20, ge=1, le=9999),
) -> Pagination:
    return Pagination(page=page, limit=limit)


async def paginate(collection, query: dict, pagination: Pagination, sort=None, projection=None) -> dict:
    """Run a paged find; returns {"documents": [...], "total": n}."""
    total = await collection.count_documents(query)
    if not total:
        return {"documents": [], "total": 0}
    cursor = collection.find(query, projection)
    if sort:
        cursor = cursor.sort(sort)
    cursor = cursor.skip(pagination.skip).limit(pagination.limit)
    return {"documents": await cursor.to_list(length=pagination.limit), "total": total}
