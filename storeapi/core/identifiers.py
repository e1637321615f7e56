"""Identifiers — surrogate id generation and well-formedness checks.

Invariants:
    - MillisecondIdSequence never issues the same id twice and never goes backwards,
      even when the wall clock stalls or steps back
    - new_object_id() returns 24 lowercase hex chars in the ObjectId layout:
      4-byte seconds timestamp | 5-byte per-process random | 3-byte counter
    - is_object_id() accepts either hex case; callers normalise with .lower()
"""

import itertools
import os
import random
import re
import threading
import time
from typing import Callable

from storeapi.core.domain_types import MemoryId, ObjectIdHex


OBJECT_ID_PATTERN = re.compile(r"^[0-9a-fA-F]{24}$")

_PROCESS_UNIQUE = os.urandom(5)
_counter = itertools.count(random.randint(0, 0xFFFFFF))
_counter_lock = threading.Lock()


def new_object_id(now: float | None = None) -> ObjectIdHex:
    """Generate a fresh ObjectId-style identifier."""
    seconds = int(time.time() if now is None else now) & 0xFFFFFFFF
    with _counter_lock:
        count = next(_counter) & 0xFFFFFF
    raw = (
        seconds.to_bytes(4, "big")
        + _PROCESS_UNIQUE
        + count.to_bytes(3, "big")
    )
    return ObjectIdHex(raw.hex())


def is_object_id(raw: object) -> bool:
    return isinstance(raw, str) and OBJECT_ID_PATTERN.match(raw) is not None


class MillisecondIdSequence:
    """Timestamp-derived integer ids, strictly increasing per sequence.

    The id is the current time in milliseconds unless that would not exceed
    the last issued id, in which case it is last + 1.
    """

    def __init__(
        self, floor: int = 0, clock: Callable[[], float] = time.time,
    ):
        self._last = floor
        self._clock = clock

    @property
    def last(self) -> int:
        return self._last

    def next_id(self) -> MemoryId:
        candidate = int(self._clock() * 1000)
        self._last = max(candidate, self._last + 1)
        return MemoryId(self._last)
