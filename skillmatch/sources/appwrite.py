"""Appwrite: users collection of the rooms app, read through the REST API.

Docs: https://appwrite.io/docs/references/cloud/server-rest/databases
"""
from __future__ import annotations

import json
from typing import Any, Callable

import requests

from skillmatch.log import get_logger
from skillmatch.models import Candidate
from skillmatch.retry import retry
from skillmatch.sources.base import PoolSource

log = get_logger(__name__)

DEFAULT_ENDPOINT = "https://fra.cloud.appwrite.io/v1"
ROOM_MEMBERS_COLLECTION = "room_members"
# Appwrite caps the number of values in one equal() query
ID_CHUNK_SIZE = 20
PAGE_LIMIT = 100


def _client_error(exc: BaseException) -> bool:
    response = getattr(exc, "response", None)
    return response is not None and 400 <= response.status_code < 500


def _query(method: str, attribute: str | None = None, values: list[Any] | None = None) -> str:
    q: dict[str, Any] = {"method": method}
    if attribute is not None:
        q["attribute"] = attribute
    if values is not None:
        q["values"] = values
    return json.dumps(q)


class AppwritePoolSource(PoolSource):
    def __init__(self, env_getter: Callable[[str], str], session: requests.Session | None = None) -> None:
        self.endpoint = (env_getter("APPWRITE_ENDPOINT") or DEFAULT_ENDPOINT).rstrip("/")
        self.project_id = env_getter("APPWRITE_PROJECT_ID")
        self.api_key = env_getter("APPWRITE_API_KEY")
        self.database_id = env_getter("APPWRITE_DATABASE_ID") or "dbandroid"
        self.users_collection = env_getter("APPWRITE_USER_COLLECTION_ID") or "users"
        self.session = session or requests.Session()

    def _headers(self) -> dict[str, str]:
        return {
            "X-Appwrite-Project": self.project_id,
            "X-Appwrite-Key": self.api_key,
            "Content-Type": "application/json",
        }

    @retry(
        max_attempts=3,
        base_delay=1.0,
        retryable=(requests.RequestException,),
        giveup=_client_error,
    )
    def _list_documents(self, collection: str, queries: list[str]) -> list[dict[str, Any]]:
        url = f"{self.endpoint}/databases/{self.database_id}/collections/{collection}/documents"
        r = self.session.get(url, params={"queries[]": queries}, headers=self._headers(), timeout=15)
        r.raise_for_status()
        return r.json().get("documents", [])

    def _room_member_ids(self, room_id: str) -> list[str]:
        docs = self._list_documents(
            ROOM_MEMBERS_COLLECTION,
            [_query("equal", "roomId", [room_id]), _query("limit", values=[PAGE_LIMIT])],
        )
        return list(dict.fromkeys(d["userId"] for d in docs if d.get("userId")))

    def load(self, room_id: str | None = None, available_only: bool = False) -> list[Candidate]:
        base: list[str] = []
        if available_only:
            base.append(_query("equal", "isAvailable", [True]))

        docs: list[dict[str, Any]] = []
        if room_id:
            member_ids = self._room_member_ids(room_id)
            if not member_ids:
                log.info("Room %s has no members", room_id)
                return []
            for i in range(0, len(member_ids), ID_CHUNK_SIZE):
                chunk = member_ids[i:i + ID_CHUNK_SIZE]
                docs.extend(self._list_documents(
                    self.users_collection,
                    base + [_query("equal", "$id", chunk), _query("limit", values=[ID_CHUNK_SIZE])],
                ))
        else:
            docs = self._list_documents(
                self.users_collection, base + [_query("limit", values=[PAGE_LIMIT])],
            )

        pool: list[Candidate] = []
        for doc in docs:
            try:
                pool.append(Candidate.from_dict(doc))
            except ValueError as exc:
                log.warning("Skipping user document: %s", exc)
        log.info("[Appwrite] loaded %d candidate(s)", len(pool))
        return pool
