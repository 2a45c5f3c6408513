from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, Field, field_validator

from foursome_generator.roster import MAX_HANDICAP


class PlayerCreate(BaseModel):
    name: str
    handicap: Optional[int] = Field(default=None, ge=0, le=MAX_HANDICAP)
    charity: Optional[str] = None

    @field_validator("name")
    @classmethod
    def _name_not_blank(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("name must not be blank")
        return value

    @field_validator("charity")
    @classmethod
    def _blank_charity_is_none(cls, value: Optional[str]) -> Optional[str]:
        if value is None:
            return None
        return value.strip() or None


class Player(BaseModel):
    id: int
    name: str
    handicap: Optional[int] = None
    charity: Optional[str] = None
    created_at: datetime


class PlayerListResponse(BaseModel):
    items: List[Player]
    count: int


class WipeResponse(BaseModel):
    deleted: int


class FoursomesRequest(BaseModel):
    seed: Optional[int] = Field(default=None, description="Seed for a reproducible shuffle and codes")


class Group(BaseModel):
    id: str
    label: str
    code: str = Field(pattern=r"^[0-9A-Z]{6}$")
    players: List[Player]


class FoursomesResponse(BaseModel):
    groups: List[Group]
    count: int
