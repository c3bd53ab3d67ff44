from datetime import date

from pydantic import BaseModel, Field

from teamhub.schemas.accounts import AccountCreate


class AthleteData(BaseModel):
    birth_date: date
    height: float = Field(gt=0, lt=300)
    weight: float = Field(gt=0, lt=500)


class AthleteCreate(AccountCreate, AthleteData):
    pass
