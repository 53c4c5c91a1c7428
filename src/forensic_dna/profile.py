"""STR markers and per-person profiles."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Tuple

from .evidence import count_occurrences


def required_matches(n_markers: int) -> int:
    """Number of matching markers needed to flag a profile (half, rounded up)."""
    return (n_markers + 1) // 2


@dataclass(frozen=True)
class STRMarker:
    """A short tandem repeat and how often it was observed for a person."""
    name: str
    occurrences: int

    def matches(self, sequence: str) -> bool:
        """Whether the stored count equals the count found in ``sequence``."""
        return self.occurrences == count_occurrences(sequence, self.name)


@dataclass
class Profile:
    """STR markers for one person plus the "of interest" flag.

    The marker tuple keeps source order and is never changed after
    construction; only ``interest_flag`` is mutated.
    """
    markers: Tuple[STRMarker, ...] = ()
    interest_flag: bool = False

    def __post_init__(self) -> None:
        self.markers = tuple(self.markers)

    @classmethod
    def from_pairs(cls, pairs: Iterable[Tuple[str, int]]) -> "Profile":
        return cls(tuple(STRMarker(name, occurrences) for name, occurrences in pairs))

    def __len__(self) -> int:
        return len(self.markers)

    def matching_markers(self, sequence: str) -> int:
        """Count markers whose stored occurrences equal their count in ``sequence``."""
        return sum(1 for marker in self.markers if marker.matches(sequence))

    def is_match(self, sequence: str) -> bool:
        """Whether enough markers match ``sequence`` to flag this profile.

        Matches are tallied marker by marker and the decision is made as
        soon as the tally reaches the required count, so a profile without
        markers is never a match.
        """
        required = required_matches(len(self.markers))
        matched = 0
        for marker in self.markers:
            if marker.matches(sequence):
                matched += 1
            if matched >= required:
                return True
        return False
