"""Two-phase element registration that waits for layout to settle.

``begin`` queues a pending registration; the commit runs once the requested
number of frames has ended (``end_frame``), or immediately via ``complete``.
``cancel`` drops a pending entry so a deactivated element never registers late.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from itertools import count
from typing import Any, Callable, List, Optional

from focus_navigation.logging_utils import get_logger

LOGGER = get_logger("Registry")

CommitFn = Callable[[], bool]

_token_ids = count(1)


@dataclass(eq=False)
class PendingRegistration:
    element: Any
    commit: CommitFn
    frames_remaining: int
    token_id: int = field(default_factory=lambda: next(_token_ids))
    cancelled: bool = False
    committed: bool = False


class DeferredRegistrationQueue:
    def __init__(self, delay_frames: int = 1) -> None:
        self.delay_frames = max(0, int(delay_frames))
        self._pending: List[PendingRegistration] = []

    def __len__(self) -> int:
        return len(self._pending)

    def begin(self, element: Any, commit: CommitFn, *, delay_frames: Optional[int] = None) -> PendingRegistration:
        frames = self.delay_frames if delay_frames is None else max(0, int(delay_frames))
        token = PendingRegistration(element=element, commit=commit, frames_remaining=frames)
        self._pending.append(token)
        return token

    def complete(self, token: PendingRegistration) -> bool:
        """Run the commit for ``token`` now; ``False`` if it was cancelled or already ran."""
        if token.cancelled or token.committed or token not in self._pending:
            return False
        self._pending.remove(token)
        token.committed = True
        return bool(token.commit())

    def cancel(self, token: PendingRegistration) -> bool:
        if token not in self._pending:
            return False
        self._pending.remove(token)
        token.cancelled = True
        LOGGER.debug("Cancelled pending registration #%d for %r", token.token_id, token.element)
        return True

    def end_frame(self) -> List[PendingRegistration]:
        """Advance one frame and commit every registration that is now due."""
        due: List[PendingRegistration] = []
        for token in list(self._pending):
            if token.frames_remaining <= 0:
                due.append(token)
            else:
                token.frames_remaining -= 1
        # Commits may queue new registrations; those wait for the next frame.
        for token in due:
            self.complete(token)
        return due
