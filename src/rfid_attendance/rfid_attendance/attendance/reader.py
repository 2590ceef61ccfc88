from __future__ import annotations

from typing import Iterable, Protocol


class ReaderAvailability(Protocol):
    """Whether the RFID reader installed in a classroom can accept scans."""

    def is_online(self, classroom_id: str) -> bool:
        raise NotImplementedError


class AlwaysOnline:
    def is_online(self, classroom_id: str) -> bool:
        return True


class StaticReaderAvailability:
    """Readers listed as offline reject scans; everything else is online."""

    def __init__(self, offline: Iterable[str] = ()):
        self._offline = set(offline)

    def set_offline(self, classroom_id: str) -> None:
        self._offline.add(classroom_id)

    def set_online(self, classroom_id: str) -> None:
        self._offline.discard(classroom_id)

    def is_online(self, classroom_id: str) -> bool:
        return classroom_id not in self._offline
