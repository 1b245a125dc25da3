"""Context stack and key resolution."""
from __future__ import annotations

from contextlib import contextmanager
from typing import Any, Iterable, Iterator, List, Optional

from .values import Value, wrap


class ContextStack:
    """
    The data frames in scope while rendering, innermost frame last.

    Lookups search from the innermost frame outwards, so a key bound in a
    section's context shadows the same key further out.
    """

    def __init__(self, frames: Iterable[Any] = ()):
        self._frames: List[Value] = [wrap(f) for f in frames]

    def __len__(self) -> int:
        return len(self._frames)

    def __repr__(self) -> str:
        return f"ContextStack({self._frames!r})"

    def push(self, value: Any) -> None:
        self._frames.append(wrap(value))

    def pop(self) -> Value:
        return self._frames.pop()

    def top(self) -> Optional[Value]:
        return self._frames[-1] if self._frames else None

    @contextmanager
    def pushed(self, value: Any) -> Iterator["ContextStack"]:
        self.push(value)
        try:
            yield self
        finally:
            self.pop()

    def resolve(self, key: str) -> Optional[Value]:
        """
        Find the value bound to ``key``; None when nothing binds it.

        ``.`` is the top frame. A dotted key is first tried as a literal key;
        failing that, its first segment is resolved against the whole stack and
        every following segment against the previous result only.
        """
        if key == ".":
            return self.top()
        value = self._find(key)
        if value is not None or "." not in key:
            return value

        head, *rest = key.split(".")
        value = self._find(head)
        for part in rest:
            if value is None:
                return None
            value = value.lookup(part)
        return value

    def _find(self, key: str) -> Optional[Value]:
        for frame in reversed(self._frames):
            value = frame.lookup(key)
            if value is not None:
                return value
        return None
