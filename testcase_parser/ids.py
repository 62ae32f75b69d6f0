from __future__ import annotations

import itertools
import time
import uuid
from typing import Callable, Optional


class IdFactory:
    """Hands out ids that are unique for the lifetime of the factory.

    Parsers create one per call unless the caller injects its own, so ids are
    only guaranteed distinct within a single parse invocation.
    """

    def __init__(self, stamp: Optional[str] = None, generator: Optional[Callable[[str], str]] = None):
        self.stamp = stamp if stamp is not None else str(int(time.time() * 1000))
        self._counter = itertools.count()
        self._generator = generator

    def next(self, prefix: str) -> str:
        if self._generator is not None:
            return self._generator(prefix)
        return f"{prefix}-{self.stamp}-{next(self._counter)}"

    @classmethod
    def uuid(cls) -> "IdFactory":
        return cls(generator=lambda prefix: f"{prefix}-{uuid.uuid4().hex}")
