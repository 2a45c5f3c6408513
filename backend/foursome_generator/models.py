from dataclasses import dataclass, field
from datetime import datetime
from typing import Optional, Tuple, Union

PlayerId = Union[int, str]


@dataclass(frozen=True)
class Player:
    id: PlayerId
    name: str
    handicap: Optional[int] = None
    charity: Optional[str] = None
    created_at: Optional[datetime] = None


@dataclass(frozen=True)
class PlayerDraft:
    """Record submitted to the store; the store assigns id and created_at."""

    name: str
    handicap: Optional[int] = None
    charity: Optional[str] = None

    def as_payload(self) -> dict:
        return {"name": self.name, "handicap": self.handicap, "charity": self.charity}


@dataclass(frozen=True)
class RawPlayerRow:
    """Unvalidated text fields as they arrive from a form or spreadsheet."""

    name: str
    handicap: str = ""
    charity: str = ""


@dataclass(frozen=True)
class Group:
    id: str
    label: str
    code: str
    players: Tuple[Player, ...] = field(default_factory=tuple)

    def __len__(self) -> int:
        return len(self.players)
