# Process-wide note history keyed by exact location.
# Grows for the server's lifetime; nothing is evicted.
import threading
from typing import Callable, Dict, List

from models.geo import Point, RouteNote

def location_key(point: Point) -> str:
    # A space never appears in an integer's decimal text.
    return f"{point.latitude} {point.longitude}"


class NoteBoard:
    def __init__(self):
        self._notes: Dict[str, List[RouteNote]] = {}
        self._locks: Dict[str, threading.Lock] = {}
        self._guard = threading.Lock()

    def __len__(self) -> int:
        with self._guard:
            return len(self._notes)

    def _lock_for(self, key: str) -> threading.Lock:
        with self._guard:
            lock = self._locks.get(key)
            if lock is None:
                lock = self._locks[key] = threading.Lock()
                self._notes[key] = []
            return lock

    def post(self, note: RouteNote, deliver: Callable[[RouteNote], None]) -> int:
        """
        Append `note` and replay the full history at its location through
        `deliver`, oldest first. Append and replay hold the location's lock,
        so concurrent posters at one location never see a partial history.
        Returns the history length after the append.
        """
        key = location_key(note.location)
        with self._lock_for(key):
            history = self._notes[key]
            history.append(note)
            for stored in history:
                deliver(stored)
            return len(history)

    def history(self, point: Point) -> List[RouteNote]:
        key = location_key(point)
        with self._guard:
            lock = self._locks.get(key)
        if lock is None:
            return []
        with lock:
            return list(self._notes[key])
