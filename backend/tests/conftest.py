import os
import sys
from datetime import UTC, datetime, timedelta
from pathlib import Path

import pytest

# Ensure the backend package is importable when running tests from repo root.
ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

# Keep the app's startup hook away from the on-disk dev database.
os.environ.setdefault("DATABASE_URL", "sqlite://")

# Register models for metadata creation in tests.
from app import models  # noqa: E402,F401
from foursome_generator.errors import StoreFailure  # noqa: E402
from foursome_generator.models import Player  # noqa: E402


class FakeStore:
    """In-memory record store with switches to simulate remote failures."""

    def __init__(self):
        self.records = []
        self.next_id = 1
        self.calls = []
        self.fail_list = False
        self.fail_insert = False
        self.fail_delete = False
        self.fail_insert_after = None
        self._clock = datetime(2024, 5, 1, 8, 0, tzinfo=UTC)

    def list_players(self):
        self.calls.append("list")
        if self.fail_list:
            raise StoreFailure("list unavailable")
        return sorted(self.records, key=lambda p: (p.created_at, p.id))

    def insert_player(self, draft):
        self.calls.append("insert")
        inserted = self.calls.count("insert") - 1
        if self.fail_insert or (self.fail_insert_after is not None and inserted >= self.fail_insert_after):
            raise StoreFailure("insert rejected")
        self._clock += timedelta(seconds=1)
        self.records.append(
            Player(
                id=self.next_id,
                name=draft.name,
                handicap=draft.handicap,
                charity=draft.charity,
                created_at=self._clock,
            )
        )
        self.next_id += 1

    def delete_player(self, player_id):
        self.calls.append("delete")
        if self.fail_delete:
            raise StoreFailure("delete rejected")
        self.records = [p for p in self.records if p.id != player_id]


@pytest.fixture
def store():
    return FakeStore()
