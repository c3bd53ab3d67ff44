from typing import Optional

from pydantic import BaseModel, Field

from teamhub.schemas.accounts import AccountCreate


class Limits(BaseModel):
    teams_limit: Optional[int] = Field(None, ge=0, le=100000)
    trainers_limit: Optional[int] = Field(None, ge=0, le=100000)
    athletes_limit: Optional[int] = Field(None, ge=0, le=100000)
    testings_limit: Optional[int] = Field(None, ge=0, le=1000000)


class OrganizationCreate(AccountCreate, Limits):
    pass


class LockEdit(BaseModel):
    locked: bool
