"""Bounded in-process conversation history, keyed by user identifier.

A convenience for callers that do not send their own history. It is not
authoritative storage and is lost on restart. Instances are injected into
the router so each test can use a fresh one.
"""
import threading
from collections import deque
from typing import Deque, Dict, Tuple

from mindguard.shared.models import ConversationTurn

DEFAULT_MAX_TURNS_PER_USER = 20


class ConversationHistoryCache:
    """Thread-safe per-user turn buffer with oldest-first eviction."""

    def __init__(self, max_turns_per_user: int = DEFAULT_MAX_TURNS_PER_USER):
        if max_turns_per_user <= 0:
            raise ValueError("max_turns_per_user must be positive")

        self.max_turns_per_user = max_turns_per_user
        self._turns: Dict[str, Deque[ConversationTurn]] = {}
        self._lock = threading.Lock()

    def get(self, user_id: str) -> Tuple[ConversationTurn, ...]:
        """Return a snapshot of the user's turns, oldest first."""
        with self._lock:
            turns = self._turns.get(user_id)
            return tuple(turns) if turns else ()

    def _buffer(self, user_id: str) -> Deque[ConversationTurn]:
        # Caller holds the lock
        turns = self._turns.get(user_id)
        if turns is None:
            turns = deque(maxlen=self.max_turns_per_user)
            self._turns[user_id] = turns
        return turns

    def append(self, user_id: str, turn: ConversationTurn) -> None:
        with self._lock:
            self._buffer(user_id).append(turn)

    def record_exchange(self, user_id: str, message: str, response: str) -> None:
        """Append a user turn and the assistant reply as one atomic step."""
        with self._lock:
            turns = self._buffer(user_id)
            turns.append(ConversationTurn(is_user=True, message=message))
            turns.append(ConversationTurn(is_user=False, response=response))

    def clear(self, user_id: str) -> None:
        with self._lock:
            self._turns.pop(user_id, None)

    def __len__(self) -> int:
        with self._lock:
            return len(self._turns)
