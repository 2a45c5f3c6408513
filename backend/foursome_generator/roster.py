"""
Roster manager: the authoritative, ordered player list.

The in-memory roster is only ever replaced by a full reload from the record
store, never patched locally, so after any successful mutation it mirrors the
store exactly.
"""

from __future__ import annotations

import logging
from typing import Callable, Iterable, Optional, Tuple

from .errors import StoreFailure, ValidationFailure
from .models import Player, PlayerDraft, PlayerId, RawPlayerRow
from .store import RecordStore

logger = logging.getLogger(__name__)

Confirm = Callable[[Player], bool]

# World Handicap System ceiling
MAX_HANDICAP = 54


def parse_handicap(text: Optional[str]) -> Optional[int]:
    """Blank means no handicap; anything else must be a plain non-negative integer."""
    raw = (text or "").strip()
    if not raw:
        return None
    if not raw.isdecimal():
        raise ValidationFailure(f"Handicap must be a whole number of 0 or more, got {raw!r}")
    value = int(raw, 10)
    if value > MAX_HANDICAP:
        raise ValidationFailure(f"Handicap must be at most {MAX_HANDICAP}, got {value}")
    return value


def normalize_player(name: Optional[str], handicap_text: Optional[str] = "", charity_text: Optional[str] = "") -> PlayerDraft:
    clean_name = (name or "").strip()
    if not clean_name:
        raise ValidationFailure("Player name is required")
    charity = (charity_text or "").strip() or None
    return PlayerDraft(name=clean_name, handicap=parse_handicap(handicap_text), charity=charity)


class RosterManager:
    def __init__(self, store: RecordStore) -> None:
        self._store = store
        self._players: Tuple[Player, ...] = ()

    @property
    def players(self) -> Tuple[Player, ...]:
        return self._players

    def __len__(self) -> int:
        return len(self._players)

    def find(self, player_id: PlayerId) -> Optional[Player]:
        for player in self._players:
            if player.id == player_id:
                return player
        return None

    def load(self) -> Tuple[Player, ...]:
        """Replace the roster with the store's current contents."""
        try:
            fetched = self._store.list_players()
        except StoreFailure:
            logger.error("Failed to load roster; keeping %d cached players", len(self._players), exc_info=True)
            raise
        self._players = tuple(fetched)
        logger.debug("Loaded roster with %d players", len(self._players))
        return self._players

    def add_player(self, name: Optional[str], handicap_text: Optional[str] = "", charity_text: Optional[str] = "") -> Optional[Player]:
        """Validate, submit, and reload. Returns the new player as reloaded."""
        draft = normalize_player(name, handicap_text, charity_text)
        before = {p.id for p in self._players}
        try:
            self._store.insert_player(draft)
        except StoreFailure:
            logger.error("Failed to add player %r", draft.name, exc_info=True)
            raise
        logger.info("Added player %s", draft.name)
        self.load()
        added = [p for p in self._players if p.id not in before and p.name == draft.name]
        return added[-1] if added else None

    def delete_player(self, player_id: PlayerId, confirm: Optional[Confirm] = None) -> bool:
        """
        Delete one player after confirmation.

        Returns False when the confirmation is declined (no store call made).
        """
        target = self.find(player_id) or Player(id=player_id, name=str(player_id))
        if confirm is not None and not confirm(target):
            logger.debug("Deletion of player %s declined", player_id)
            return False
        try:
            self._store.delete_player(player_id)
        except StoreFailure:
            logger.error("Failed to delete player %s", player_id, exc_info=True)
            raise
        logger.info("Deleted player %s", player_id)
        self.load()
        return True

    def import_players(self, rows: Iterable[RawPlayerRow]) -> Tuple[Player, ...]:
        """
        Validate every row, then insert them in order and reload once.

        A row failing validation aborts the import before any store call; the
        message names the 1-based row number.
        """
        drafts = []
        for index, row in enumerate(rows, start=1):
            try:
                drafts.append(normalize_player(row.name, row.handicap, row.charity))
            except ValidationFailure as exc:
                raise ValidationFailure(f"Row {index}: {exc}") from exc

        inserted = 0
        for draft in drafts:
            try:
                self._store.insert_player(draft)
            except StoreFailure as exc:
                logger.error("Import stopped after %d of %d players", inserted, len(drafts), exc_info=True)
                self._reload_after_partial_write()
                raise StoreFailure(f"Imported {inserted} of {len(drafts)} players before failure: {exc}") from exc
            inserted += 1

        logger.info("Imported %d players", inserted)
        return self.load()

    def wipe(self, confirm: Optional[Callable[[int], bool]] = None) -> int:
        """Delete every player currently held. Returns the number deleted."""
        targets = [p.id for p in self._players]
        if confirm is not None and not confirm(len(targets)):
            return 0

        deleted = 0
        for player_id in targets:
            try:
                self._store.delete_player(player_id)
            except StoreFailure as exc:
                logger.error("Wipe stopped after %d of %d players", deleted, len(targets), exc_info=True)
                self._reload_after_partial_write()
                raise StoreFailure(f"Deleted {deleted} of {len(targets)} players before failure: {exc}") from exc
            deleted += 1

        logger.info("Wiped %d players", deleted)
        self.load()
        return deleted

    def _reload_after_partial_write(self) -> None:
        try:
            self.load()
        except StoreFailure:
            # load() already logged; the original failure is what the caller sees.
            pass
