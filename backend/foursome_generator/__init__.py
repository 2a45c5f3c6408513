"""
Embedded foursome generator.

Roster management against a record store, and randomized grouping of the
roster into foursomes with short codes.
"""

from .controller import EventController  # noqa: F401
from .errors import (  # noqa: F401
    FoursomeError,
    ImportFormatError,
    InsufficientPlayers,
    StoreFailure,
    ValidationFailure,
)
from .grouping import GroupingEngine, GroupingState  # noqa: F401
from .models import Group, Player, PlayerDraft, RawPlayerRow  # noqa: F401
from .roster import RosterManager  # noqa: F401
from .store import HttpRecordStore, RecordStore  # noqa: F401
