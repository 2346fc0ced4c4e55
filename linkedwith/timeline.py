"""Relationship timelines.

A timeline joins exactly two identities and records every establish and
tear-down as a timestamp in an append-only, non-decreasing log. The kind of
each event is implied by its position: even indexes establish, odd indexes
tear down. So the number of events at-or-before an instant decides whether
the link was active then:

    events:   t1        t3        t5
    count:  0 | 1     2 | 3     4 | 5 ...
    state:  - | on    - | on    - | on

State machine:
    UNASSIGNED --assign--> INACTIVE <--establish/tear_down--> ACTIVE
"""
from bisect import bisect_right
from enum import Enum
from typing import Any, Iterator, Optional

from .core.constants import (
    EVENT_ESTABLISHED,
    EVENT_TORN_DOWN,
    INVALID_TIMELINE_TEXT,
    PARTICIPANT_COUNT,
)
from .core.errors import stoprule_required, stoprule_uninitialized
from .core.status import Outcome, StatusCode
from .identity import Identity, sort_by_id


class TimelineState(Enum):
    UNASSIGNED = "unassigned"
    INACTIVE = "inactive"
    ACTIVE = "active"


class Timeline:
    """Activity record of one unordered pair of identities."""

    def __init__(self):
        self._participants: tuple[Identity, ...] = ()
        self._valid = False
        self._events: list[Any] = []

    @property
    def valid(self) -> bool:
        return self._valid

    @property
    def participants(self) -> tuple[Identity, Identity]:
        """Both participants, lowest id first."""
        self._check_valid("get participants")
        return self._participants

    @property
    def ids(self) -> frozenset[str]:
        self._check_valid("get participant ids")
        return frozenset(p.id for p in self._participants)

    @property
    def events(self) -> tuple:
        return tuple(self._events)

    @property
    def state(self) -> TimelineState:
        if not self._valid:
            return TimelineState.UNASSIGNED
        if len(self._events) % 2:
            return TimelineState.ACTIVE
        return TimelineState.INACTIVE

    def assign(self, participants) -> Outcome:
        """Attach the two participants. Legal exactly once.

        Args:
            participants: Collection of two valid identities with distinct ids

        Returns:
            SUCCESS, ALREADY_VALID if already assigned, INVALID_USERS otherwise
        """
        if participants is None:
            stoprule_required("participants")
        if self._valid:
            return Outcome.failure(StatusCode.ALREADY_VALID)

        members = list(participants)
        if not _participants_are_legal(members):
            return Outcome.failure(StatusCode.INVALID_USERS)

        self._participants = tuple(sort_by_id(members))
        self._valid = True
        return Outcome.success()

    def establish(self, date) -> Outcome:
        """Record the link coming up at date.

        Returns:
            SUCCESS, INVALID_DATE if date precedes the latest event,
            ALREADY_ACTIVE if the link is up at date
        """
        self._check_event_args(date, "establish")

        if not self._events:
            self._events.append(date)
            return Outcome.success()
        if date < self._events[-1]:
            return Outcome.failure(StatusCode.INVALID_DATE)
        if self.is_active(date):
            return Outcome.failure(StatusCode.ALREADY_ACTIVE)

        self._events.append(date)
        return Outcome.success()

    def tear_down(self, date) -> Outcome:
        """Record the link going down at date.

        Returns:
            SUCCESS, INVALID_DATE if date precedes the latest event,
            ALREADY_INACTIVE if the link was never up or is down at date
        """
        self._check_event_args(date, "tear down")

        if not self._events:
            return Outcome.failure(StatusCode.ALREADY_INACTIVE)
        if date < self._events[-1]:
            return Outcome.failure(StatusCode.INVALID_DATE)
        if not self.is_active(date):
            return Outcome.failure(StatusCode.ALREADY_INACTIVE)

        self._events.append(date)
        return Outcome.success()

    def count_at(self, date) -> int:
        """Number of events that happened at or before date."""
        self._check_event_args(date, "get status")
        return bisect_right(self._events, date)

    def is_active(self, date) -> bool:
        return self.count_at(date) % 2 == 1

    def first_event(self) -> Optional[Any]:
        self._check_valid("get an event")
        if not self._events:
            return None
        return self._events[0]

    def next_event(self, date) -> Optional[Any]:
        """First event strictly after date, or None."""
        idx = self.count_at(date)
        if idx < len(self._events):
            return self._events[idx]
        return None

    def other_participant(self, identity_id: str) -> Optional[Identity]:
        """The participant whose id is not identity_id, None if neither matches."""
        if identity_id is None:
            stoprule_required("identity_id")
        self._check_valid("find a participant")

        first, second = self._participants
        if first.id == identity_id:
            return second
        if second.id == identity_id:
            return first
        return None

    def history(self) -> Iterator[tuple[Any, str]]:
        """Yield (timestamp, kind) for every recorded event in order."""
        self._check_valid("get history")
        for idx, date in enumerate(self._events):
            yield date, EVENT_ESTABLISHED if idx % 2 == 0 else EVENT_TORN_DOWN

    def _check_valid(self, action: str) -> None:
        if not self._valid:
            stoprule_uninitialized("link", action)

    def _check_event_args(self, date, action: str) -> None:
        if date is None:
            stoprule_required("date")
        self._check_valid(action)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Timeline):
            return NotImplemented
        if not (self._valid and other._valid):
            return self is other
        return self.ids == other.ids

    def __hash__(self) -> int:
        if not self._valid:
            return id(self)
        return hash(self.ids)

    def __str__(self) -> str:
        if not self._valid:
            return INVALID_TIMELINE_TEXT
        first, second = self._participants
        lines = [f"Link between {first} and {second}"]
        for date, kind in self.history():
            verb = "established" if kind == EVENT_ESTABLISHED else "torn down"
            lines.append(f"Link {verb} on {date}")
        return "\n".join(lines)

    def __repr__(self) -> str:
        if not self._valid:
            return "Timeline(<unassigned>)"
        first, second = self._participants
        return f"Timeline({first.id!r}, {second.id!r}, events={len(self._events)})"


def _participants_are_legal(members: list) -> bool:
    if len(members) != PARTICIPANT_COUNT:
        return False
    if not all(isinstance(m, Identity) and m.valid for m in members):
        return False
    first, second = members
    return first.id != second.id
