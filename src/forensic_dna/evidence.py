"""Evidence sequences and STR occurrence counting."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional


def count_occurrences(sequence: str, marker: str) -> int:
    """Count non-overlapping occurrences of ``marker`` in ``sequence``.

    The scan is greedy from the left: after a hit at index ``i`` the search
    resumes at ``i + len(marker)``, so ``"AAAA"`` holds ``"AA"`` twice.
    """
    if not marker or len(marker) > len(sequence):
        return 0

    repeats = 0
    position = sequence.find(marker)
    while position != -1:
        repeats += 1
        position = sequence.find(marker, position + len(marker))
    return repeats


@dataclass
class EvidenceContext:
    """The two unknown sequences recovered from a scene."""
    first: Optional[str] = None
    second: Optional[str] = None

    @property
    def combined(self) -> str:
        """First sequence followed by the second, unset parts read as empty."""
        return (self.first or "") + (self.second or "")

    def count(self, marker: str) -> int:
        """Non-overlapping occurrences of ``marker`` in the combined sequence."""
        return count_occurrences(self.combined, marker)
