"""
Record store contract and the HTTP client store.

The store is the persistent, authoritative collection of player records.
`HttpRecordStore` talks to the web service in `app`; `app.store` provides a
direct database implementation of the same contract.
"""

from __future__ import annotations

import logging
from datetime import datetime
from typing import Any, List, Optional, Protocol

import requests

from .errors import StoreFailure
from .models import Player, PlayerDraft, PlayerId

logger = logging.getLogger(__name__)


class RecordStore(Protocol):
    def list_players(self) -> List[Player]:
        """All players ordered by ascending creation time."""
        ...

    def insert_player(self, draft: PlayerDraft) -> None:
        ...

    def delete_player(self, player_id: PlayerId) -> None:
        """Delete by id; deleting an absent id is not an error."""
        ...


def player_from_payload(payload: dict) -> Player:
    created_at = payload.get("created_at")
    if isinstance(created_at, str):
        created_at = datetime.fromisoformat(created_at)
    return Player(
        id=payload["id"],
        name=payload["name"],
        handicap=payload.get("handicap"),
        charity=payload.get("charity"),
        created_at=created_at,
    )


class HttpRecordStore:
    """
    Record store backed by the Ginvitational web API.

    `session` may be any client exposing get/post/delete and returning
    responses with `status_code` and `json()`; defaults to a requests Session.
    """

    def __init__(
        self,
        base_url: str,
        session: Optional[Any] = None,
        api_prefix: str = "/api",
        timeout: float = 10,
    ) -> None:
        self.base_url = base_url.rstrip("/")
        self.api_prefix = api_prefix
        self.session = session if session is not None else requests.Session()
        self.timeout = timeout

    def _url(self, path: str) -> str:
        return f"{self.base_url}{self.api_prefix}{path}"

    def _request(self, method: str, path: str, **kwargs):
        url = self._url(path)
        try:
            resp = getattr(self.session, method)(url, timeout=self.timeout, **kwargs)
        except requests.RequestException as exc:
            raise StoreFailure(f"{method.upper()} {url} failed: {exc}") from exc
        if resp.status_code >= 400:
            raise StoreFailure(f"{method.upper()} {url} returned {resp.status_code}: {_error_detail(resp)}")
        return resp

    def list_players(self) -> List[Player]:
        resp = self._request("get", "/players")
        try:
            items = resp.json()["items"]
            players = [player_from_payload(item) for item in items]
        except (ValueError, KeyError, TypeError, AttributeError) as exc:
            raise StoreFailure(f"Unreadable player list from {self._url('/players')}: {exc!r}") from exc
        logger.debug("Fetched %d players from %s", len(players), self.base_url)
        return players

    def insert_player(self, draft: PlayerDraft) -> None:
        self._request("post", "/players", json=draft.as_payload())

    def delete_player(self, player_id: PlayerId) -> None:
        self._request("delete", f"/players/{player_id}")


def _error_detail(resp) -> str:
    try:
        body = resp.json()
    except ValueError:
        return resp.text
    if isinstance(body, dict) and "detail" in body:
        return str(body["detail"])
    return str(body)
