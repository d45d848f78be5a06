"""Ordered queue of short-lived operator messages."""
from __future__ import annotations

import asyncio
import logging
import uuid
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Literal

from jobconsole.core.settings import NOTIFICATION_TTL_SECONDS

logger = logging.getLogger(__name__)

NotificationKind = Literal["success", "error", "info"]
KINDS = ("success", "error", "info")


@dataclass(frozen=True, slots=True)
class Notification:
    id: str
    message: str
    kind: NotificationKind
    created_at: datetime

    def as_dict(self) -> dict[str, str]:
        return {
            "id": self.id,
            "message": self.message,
            "kind": self.kind,
            "created_at": self.created_at.isoformat(),
        }


class NotificationChannel:
    """Queue of notifications that each expire after a fixed time-to-live.

    The channel is bound to the event loop it was started on; expiry timers
    are plain ``call_later`` handles which :meth:`close` cancels.
    """

    def __init__(self, ttl: float = NOTIFICATION_TTL_SECONDS) -> None:
        self._ttl = ttl
        self._entries: dict[str, Notification] = {}
        self._timers: dict[str, asyncio.TimerHandle] = {}
        self._loop: asyncio.AbstractEventLoop | None = None

    @property
    def running(self) -> bool:
        return self._loop is not None

    @property
    def entries(self) -> list[Notification]:
        return list(self._entries.values())

    def start(self, loop: asyncio.AbstractEventLoop | None = None) -> None:
        self._loop = loop or asyncio.get_running_loop()

    def push(self, message: str, kind: NotificationKind = "info") -> Notification:
        if self._loop is None:
            raise RuntimeError("notification channel has not been started")
        if kind not in KINDS:
            raise ValueError(f"unknown notification kind: {kind}")

        entry = Notification(
            id=uuid.uuid4().hex,
            message=message,
            kind=kind,
            created_at=datetime.now(timezone.utc),
        )
        self._entries[entry.id] = entry
        self._timers[entry.id] = self._loop.call_later(self._ttl, self._expire, entry.id)
        log = logger.warning if kind == "error" else logger.info
        log("[%s] %s", kind, message)
        return entry

    def success(self, message: str) -> Notification:
        return self.push(message, "success")

    def error(self, message: str) -> Notification:
        return self.push(message, "error")

    def info(self, message: str) -> Notification:
        return self.push(message, "info")

    def _expire(self, entry_id: str) -> None:
        self._timers.pop(entry_id, None)
        self._entries.pop(entry_id, None)

    def dismiss(self, entry_id: str) -> bool:
        timer = self._timers.pop(entry_id, None)
        if timer is not None:
            timer.cancel()
        return self._entries.pop(entry_id, None) is not None

    def close(self) -> None:
        for timer in self._timers.values():
            timer.cancel()
        self._timers.clear()
        self._entries.clear()
        self._loop = None
