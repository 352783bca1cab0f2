"""View models for the autopfs dashboard.

These models hold a job result after it has been fetched and normalized.
Numeric leaves that failed to parse keep their raw token, so anything that
consumes these models must cope with a ``str`` where an ``int`` is expected.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, List, Union

JOB_STATE_DONE = "done"

# The zero time (0001-01-01T00:00:00Z) is how the backend marks a missing date
MISSING_DATE = datetime(1, 1, 1, tzinfo=timezone.utc)

# Character number the backend uses for "GM credit, no character"
GM_CHARACTER = -2

# An int, or the raw token that could not be parsed as one
IntOrRaw = Union[int, Any]


def is_missing_date(value: datetime) -> bool:
    """Return True if the date is the missing/zero sentinel."""
    return value.year <= 1


@dataclass
class Message:
    """One status line pushed by the job."""

    time: datetime
    message: str = ""
    state: str = ""


@dataclass
class Character:
    """A character known to the job's account."""

    system: str = ""
    number: IntOrRaw = 0
    name: str = ""
    prestige: Any = None  # passed through untouched
    faction: str = ""


@dataclass
class Session:
    """One recorded play or GM session."""

    date: datetime = MISSING_DATE
    event_numbers: List[IntOrRaw] = field(default_factory=list)
    game: str = ""
    season: IntOrRaw = 0
    number: IntOrRaw = 0
    variant: str = ""
    scenario_name: str = ""
    # Negative numbers mark the GM-as-character role
    characters: List[IntOrRaw] = field(default_factory=list)
    player: bool = False
    gm: bool = False

    @property
    def role(self) -> str:
        """Player/GM label; a session with neither flag counts as played."""
        if self.gm:
            return "P/GM" if self.player else "GM"
        return "P"

    def record(self) -> List[str]:
        """Flatten the session into a CSV row."""
        characters = [
            "GM" if char == GM_CHARACTER else str(char)
            for char in self.characters
        ]
        return [
            "MISSING" if is_missing_date(self.date) else self.date.strftime("%Y-%m-%d"),
            " ".join(str(e) for e in self.event_numbers),
            " ".join(characters),
            str(self.season),
            str(self.number),
            self.variant,
            self.scenario_name,
            self.role,
        ]


CSV_HEADER = [
    "Date",
    "Event Number",
    "Character",
    "Season",
    "Number",
    "Variant",
    "Scenario Name",
    "Player/GM",
]


@dataclass
class Job:
    """A tracked background job and everything it has produced so far."""

    job_id: str
    state: str = ""
    job_date: datetime = MISSING_DATE
    sessions: List[Session] = field(default_factory=list)
    messages: List[Message] = field(default_factory=list)
    characters: List[Character] = field(default_factory=list)

    @property
    def done(self) -> bool:
        return self.state == JOB_STATE_DONE
