from __future__ import annotations

import time
import uuid
from dataclasses import fields, replace
from threading import RLock
from typing import Any, Callable, Dict, Optional

from riskcurve.risk.curve import InvalidPatientInputError, PatientInput

DEFAULT_SELECTION = PatientInput(sex="male", age=35, medication="sertraline", dose=50)

_SELECTION_FIELDS = frozenset(item.name for item in fields(PatientInput))


class InMemorySelectionStore:
    """Per-session "current selection" owned by the UI layer.

    Each stored selection is an immutable ``PatientInput``; updates swap in a new one.
    """

    def __init__(
        self,
        ttl_seconds: int,
        *,
        default: PatientInput = DEFAULT_SELECTION,
        clock: Callable[[], float] = time.time,
    ):
        self._ttl_seconds = ttl_seconds
        self._default = default
        self._clock = clock
        self._lock = RLock()
        self._sessions: Dict[str, Dict[str, Any]] = {}

    def create_session(self, initial: Optional[PatientInput] = None) -> str:
        session_id = uuid.uuid4().hex
        now = self._clock()
        with self._lock:
            self._sessions[session_id] = {
                "session_id": session_id,
                "created_at": now,
                "updated_at": now,
                "expires_at": now + self._ttl_seconds,
                "selection": initial or self._default,
            }
        return session_id

    def _live_session(self, session_id: str) -> Dict[str, Any]:
        session = self._sessions.get(session_id)
        if session is None or session["expires_at"] <= self._clock():
            self._sessions.pop(session_id, None)
            raise KeyError(session_id)
        return session

    def _touch(self, session: Dict[str, Any]) -> None:
        now = self._clock()
        session["updated_at"] = now
        session["expires_at"] = now + self._ttl_seconds

    def get(self, session_id: str) -> PatientInput:
        with self._lock:
            return self._live_session(session_id)["selection"]

    def update(self, session_id: str, **changes: Any) -> PatientInput:
        unknown = sorted(set(changes) - _SELECTION_FIELDS)
        if unknown:
            raise InvalidPatientInputError(f"Unknown selection fields: {', '.join(unknown)}")
        with self._lock:
            session = self._live_session(session_id)
            # replace() re-runs validation; a rejected change leaves the old selection.
            updated = replace(session["selection"], **changes)
            session["selection"] = updated
            self._touch(session)
            return updated

    def delete(self, session_id: str) -> bool:
        with self._lock:
            return self._sessions.pop(session_id, None) is not None

    def purge_expired(self) -> int:
        now = self._clock()
        with self._lock:
            expired = [sid for sid, item in self._sessions.items() if item["expires_at"] <= now]
            for sid in expired:
                del self._sessions[sid]
        return len(expired)

    def session_count(self) -> int:
        with self._lock:
            return len(self._sessions)
