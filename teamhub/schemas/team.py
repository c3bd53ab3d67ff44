from typing import List, Optional

from pydantic import BaseModel, Field


class TeamCreate(BaseModel):
    name: str = Field(min_length=2, max_length=64)
    description: str = Field("", max_length=512)


class TeamEdit(TeamCreate):
    pass


class MembersEdit(BaseModel):
    # None leaves the set as it is, [] empties it
    trainers: Optional[List[str]] = None
    athletes: Optional[List[str]] = None
