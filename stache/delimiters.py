"""Tag delimiters, scoped to a single compile pass."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Tuple

DEFAULT_OPEN = "{{"
DEFAULT_CLOSE = "}}"


@dataclass
class Delimiters:
    open: str = DEFAULT_OPEN
    close: str = DEFAULT_CLOSE

    @staticmethod
    def parse(content: str) -> Optional[Tuple[str, str]]:
        """
        Parse the body of a ``{{=open close=}}`` tag (command already removed).

        Returns the new pair, or None when the tag does not hold exactly two
        markers.
        """
        content = content.strip()
        # Only the closing "=" marker is stripped; a marker containing "="
        # anywhere else is rejected rather than guessed at.
        if content.endswith("="):
            content = content[:-1]
        parts = content.split()
        if len(parts) != 2 or any("=" in p for p in parts):
            return None
        return parts[0], parts[1]

    def change(self, open_: str, close: str) -> None:
        self.open = open_
        self.close = close
