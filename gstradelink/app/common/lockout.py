"""Login lockout guard.

State lives in the browser (the signed session cookie), so it is per browser
and trivially reset by clearing cookies. It slows down credential guessing
from one browser; it is not a security boundary.
"""

from __future__ import annotations

import logging
import math
import time
from dataclasses import dataclass
from typing import Callable, MutableMapping, Optional

logger = logging.getLogger(__name__)

MAX_FAILED_ATTEMPTS = 5
LOCKOUT_SECONDS = 15 * 60
STORAGE_KEY = "admin_login_lockout"


def _now() -> float:
    return time.time()


@dataclass
class LockoutState:
    attempts: int = 0
    locked_until: Optional[float] = None

    @property
    def locked(self) -> bool:
        return self.locked_until is not None


class LockoutGuard:
    def __init__(
        self,
        storage: MutableMapping,
        clock: Callable[[], float] | None = None,
        max_attempts: int = MAX_FAILED_ATTEMPTS,
        lockout_seconds: int = LOCKOUT_SECONDS,
        key: str = STORAGE_KEY,
    ):
        self.storage = storage
        self.clock = clock or _now
        self.max_attempts = max_attempts
        self.lockout_seconds = lockout_seconds
        self.key = key

    def _load(self) -> LockoutState:
        raw = self.storage.get(self.key) or {}
        try:
            attempts = max(0, int(raw.get("attempts", 0)))
            until = raw.get("locked_until")
            until = float(until) if until is not None else None
        except (AttributeError, TypeError, ValueError):
            # Unreadable state counts as a clean slate
            return LockoutState()
        return LockoutState(attempts=attempts, locked_until=until)

    def _save(self, state: LockoutState) -> None:
        self.storage[self.key] = {"attempts": state.attempts, "locked_until": state.locked_until}

    def clear(self) -> None:
        self.storage.pop(self.key, None)

    def state(self) -> LockoutState:
        state = self._load()
        if state.locked_until is not None and self.clock() >= state.locked_until:
            self.clear()
            return LockoutState()
        return state

    def is_locked(self) -> bool:
        return self.state().locked

    def seconds_remaining(self) -> int:
        state = self.state()
        if state.locked_until is None:
            return 0
        return max(0, math.ceil(state.locked_until - self.clock()))

    def record_failure(self) -> LockoutState:
        state = self.state()
        if state.locked:
            return state

        attempts = state.attempts + 1
        if attempts >= self.max_attempts:
            state = LockoutState(attempts=attempts, locked_until=self.clock() + self.lockout_seconds)
            logger.warning("Login locked for %ss after %d failed attempts", self.lockout_seconds, attempts)
        else:
            state = LockoutState(attempts=attempts)
        self._save(state)
        return state

    def record_success(self) -> None:
        self.clear()


def format_countdown(seconds: int) -> str:
    seconds = max(0, int(seconds))
    return f"{seconds // 60:02d}:{seconds % 60:02d}"
