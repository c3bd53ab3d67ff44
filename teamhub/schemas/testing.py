import datetime as dt
from typing import Dict

from pydantic import BaseModel, Field


class NewTesting(BaseModel):
    date: dt.date
    data: Dict[str, float] = Field(min_length=1)
