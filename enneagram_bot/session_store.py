from __future__ import annotations

import time
from dataclasses import dataclass, field
from enum import Enum
from typing import Callable, Dict, Optional


class QuizStep(str, Enum):
    """Conversation steps in the order a respondent passes through them."""
    START = "start"
    ASK_NAME = "ask_name"
    Q1A = "q1a"
    Q1B = "q1b"
    Q2A = "q2a"
    Q3 = "q3"
    WING_CHOICE = "wing_choice"
    CONFIRM_SAVE = "confirm_save"


@dataclass
class QuizAnswers:
    """Normalized answers; None means the question has not been asked yet."""
    q1a: Optional[str] = None
    q1b: Optional[str] = None
    q2a: Optional[str] = None
    q3: Optional[str] = None


@dataclass
class QuizSession:
    """Per-user quiz progress."""
    user_id: str
    step: QuizStep = QuizStep.START
    display_name: Optional[str] = None
    answers: QuizAnswers = field(default_factory=QuizAnswers)
    personality_type: Optional[str] = None
    wing_label: Optional[str] = None
    updated_at: float = field(default=0.0, compare=False)


class SessionStore:
    """In-process session map keyed by user id."""

    def __init__(
        self,
        ttl_sec: Optional[float] = None,
        max_sessions: Optional[int] = None,
        clock: Callable[[], float] = time.time,
    ) -> None:
        """Purpose: Initialize an empty session map with optional eviction limits.
        Inputs/Outputs: Inputs are an idle TTL in seconds, a max_sessions cap and a clock;
            no return value.
        Side Effects / State: Creates the in-memory session cache.
        Failure Modes: None; zero or None disables the corresponding limit.
        Testing Notes: Inject a fake clock to exercise TTL expiry deterministically.
        """
        self._ttl_sec = ttl_sec
        self._max_sessions = max_sessions
        self._clock = clock
        self._sessions: Dict[str, QuizSession] = {}

    def __len__(self) -> int:
        return len(self._sessions)

    def __contains__(self, user_id: object) -> bool:
        return user_id in self._sessions

    def get(self, user_id: str) -> Optional[QuizSession]:
        """Return the live session for ``user_id`` without creating one."""
        session = self._sessions.get(user_id)
        if session is not None and self._is_expired(session):
            self._sessions.pop(user_id, None)
            return None
        return session

    def get_or_create(self, user_id: str) -> QuizSession:
        """Purpose: Fetch the session for a user, creating a fresh one on first contact.
        Inputs/Outputs: Input is user_id; output is the mutable QuizSession.
        Side Effects / State: Refreshes updated_at; may create a session and prune others.
        Dependencies: reset, _prune_sessions.
        Failure Modes: None.
        Testing Notes: Two calls for the same user return the same object.
        """
        session = self.get(user_id)
        if session is None:
            return self.reset(user_id)
        session.updated_at = self._clock()
        return session

    def reset(self, user_id: str) -> QuizSession:
        """Purpose: Replace a user's session with a freshly initialized one.
        Inputs/Outputs: Input is user_id; output is the new session at START.
        Side Effects / State: Overwrites any existing session and prunes the map.
        Failure Modes: None.
        Testing Notes: A reset session equals QuizSession(user_id).
        """
        session = QuizSession(user_id=user_id, updated_at=self._clock())
        self._sessions[user_id] = session
        self._prune_sessions(keep=user_id)
        return session

    def _is_expired(self, session: QuizSession) -> bool:
        if not self._ttl_sec or self._ttl_sec <= 0:
            return False
        return self._clock() - session.updated_at > self._ttl_sec

    def _prune_sessions(self, keep: Optional[str] = None) -> bool:
        """Purpose: Drop expired sessions, then enforce max_sessions by recency.
        Inputs/Outputs: Input is a user id that must survive; returns True if any
            session was removed.
        Side Effects / State: Mutates the session cache.
        Failure Modes: None; no-op when both limits are unset.
        Testing Notes: Set max_sessions=2, create three users, oldest is gone.
        """
        removed = [user_id for user_id, session in self._sessions.items() if user_id != keep and self._is_expired(session)]
        for user_id in removed:
            self._sessions.pop(user_id, None)

        if self._max_sessions and 0 < self._max_sessions < len(self._sessions):
            ordered = sorted(self._sessions.values(), key=lambda s: s.updated_at, reverse=True)
            keep_ids = {session.user_id for session in ordered[: self._max_sessions]}
            if keep is not None:
                keep_ids.add(keep)
            overflow = [user_id for user_id in self._sessions if user_id not in keep_ids]
            for user_id in overflow:
                self._sessions.pop(user_id, None)
            removed.extend(overflow)
        return bool(removed)
