"""
Reader for the plain-text profile database format.

Layout:
    line 1      first unknown sequence
    line 2      second unknown sequence
    line 3      number of people
    remainder   per person, whitespace-separated tokens:
                <first> <last> <n> followed by n pairs of <str-name> <occurrences>

Person records may wrap across lines; only token order matters.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Iterator, List, Tuple

from .exceptions import FileFormatError
from .logging_config import PerformanceLogger
from .profile import Profile, STRMarker
from .tree import DuplicatePolicy, ProfileStore

logger = logging.getLogger(__name__)


@dataclass
class LoadRecord:
    """One person as read from the database file."""
    last_name: str
    first_name: str
    markers: List[STRMarker] = field(default_factory=list)

    @property
    def full_name(self) -> str:
        return f"{self.last_name}, {self.first_name}"

    def to_profile(self) -> Profile:
        return Profile(tuple(self.markers))


@dataclass
class ProfileDatabase:
    """Parsed contents of a database file."""
    first_evidence: str
    second_evidence: str
    records: List[LoadRecord] = field(default_factory=list)


class _TokenStream:
    """Whitespace token reader that reports where it ran dry."""

    def __init__(self, text: str, source: str) -> None:
        self._tokens: Iterator[str] = iter(text.split())
        self.source = source
        self.consumed = 0

    def next(self, what: str) -> str:
        try:
            token = next(self._tokens)
        except StopIteration:
            raise FileFormatError(
                f"Unexpected end of {self.source} while reading {what}",
                {"source": self.source, "expected": what, "tokens_read": self.consumed},
            ) from None
        self.consumed += 1
        return token

    def next_int(self, what: str, minimum: int = 0) -> int:
        token = self.next(what)
        try:
            value = int(token)
        except ValueError:
            raise FileFormatError(
                f"Expected an integer for {what} in {self.source}, got {token!r}",
                {"source": self.source, "expected": what, "token": token},
            ) from None
        if value < minimum:
            raise FileFormatError(
                f"{what} must be >= {minimum} in {self.source}, got {value}",
                {"source": self.source, "expected": what, "token": token},
            )
        return value

    def remaining(self) -> List[str]:
        return list(self._tokens)


def _split_header(text: str, source: str) -> Tuple[str, str, int, str]:
    lines = text.split("\n", 3)
    if len(lines) < 3:
        raise FileFormatError(
            f"{source} needs two evidence lines and a person count",
            {"source": source, "lines": len(lines)},
        )
    first, second, count_line = (line.strip() for line in lines[:3])
    body = lines[3] if len(lines) > 3 else ""
    try:
        n_people = int(count_line)
    except ValueError:
        raise FileFormatError(
            f"Line 3 of {source} must be the number of people, got {count_line!r}",
            {"source": source, "line": 3, "token": count_line},
        ) from None
    if n_people < 0:
        raise FileFormatError(
            f"Number of people cannot be negative in {source}",
            {"source": source, "line": 3, "token": count_line},
        )
    return first, second, n_people, body


def parse_database(text: str, source: str = "<string>") -> ProfileDatabase:
    """Parse database text into evidence sequences and person records.

    Raises:
        FileFormatError: If the header is incomplete, a count is not a
            non-negative integer, or the body ends early.
    """
    first, second, n_people, body = _split_header(text, source)
    tokens = _TokenStream(body, source)

    records = []
    for index in range(n_people):
        first_name = tokens.next(f"first name of person {index + 1}")
        last_name = tokens.next(f"last name of person {index + 1}")
        n_markers = tokens.next_int(f"STR count of {first_name} {last_name}")
        markers = []
        for _ in range(n_markers):
            marker_name = tokens.next(f"STR name for {first_name} {last_name}")
            occurrences = tokens.next_int(f"occurrences of {marker_name} for {first_name} {last_name}")
            markers.append(STRMarker(marker_name, occurrences))
        records.append(LoadRecord(last_name, first_name, markers))

    leftover = tokens.remaining()
    if leftover:
        logger.warning(f"Ignoring {len(leftover)} trailing tokens in {source}")

    return ProfileDatabase(first, second, records)


def read_database(path: str | Path) -> ProfileDatabase:
    """Read and parse a database file."""
    path = Path(path)
    text = path.read_text(encoding="utf-8")
    return parse_database(text, source=str(path))


def build_store(
    source: str | Path | ProfileDatabase,
    duplicate_policy: DuplicatePolicy = DuplicatePolicy.REPLACE,
) -> ProfileStore:
    """Build a profile store, inserting people in the order they appear.

    Args:
        source: Path to a database file, or an already parsed database
        duplicate_policy: Policy for a name that appears twice

    Returns:
        Store holding every record and both evidence sequences
    """
    database = source if isinstance(source, ProfileDatabase) else read_database(source)

    with PerformanceLogger(logger, "build profile store"):
        store = ProfileStore(
            database.first_evidence,
            database.second_evidence,
            duplicate_policy=duplicate_policy,
        )
        for record in database.records:
            store.insert(record.full_name, record.to_profile())

    logger.info(f"Loaded {len(database.records)} profiles, tree height {store.height()}")
    return store
