"""Build a registry from a JSON Lines operation log.

One operation per line:
    {"op": "add", "id": "1", "first_name": "Ada", "email": "ada@example.com"}
    {"op": "establish", "ids": ["1", "2"], "at": "2000-03-01T00:00:00Z"}
    {"op": "tear_down", "ids": ["1", "2"], "at": "2000-04-01T00:00:00Z"}

Blank lines are skipped. Timestamps without an offset are taken as UTC.
"""
import json
from collections import Counter
from dataclasses import dataclass, field
from datetime import datetime, timezone

from linkedwith import GraphRegistry, Identity

PROFILE_FIELDS = ("first_name", "middle_name", "last_name", "email", "phone_number")


class ReplayError(Exception):
    """The operation log is malformed."""
    pass


@dataclass
class ReplayResult:
    registry: GraphRegistry
    applied: int = 0
    statuses: Counter = field(default_factory=Counter)


def parse_instant(text: str) -> datetime:
    """Parse an ISO-8601 timestamp, defaulting to UTC."""
    try:
        parsed = datetime.fromisoformat(text.replace("Z", "+00:00"))
    except (AttributeError, ValueError) as e:
        raise ReplayError(f"Invalid timestamp: {text!r}") from e
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


def replay(path: str, registry: GraphRegistry | None = None) -> ReplayResult:
    """Apply every operation in the file to a registry.

    Args:
        path: JSON Lines file
        registry: Registry to apply to, a fresh one if None

    Returns:
        ReplayResult with the registry and a count of outcome statuses

    Raises:
        ReplayError: On invalid JSON, unknown ops or missing fields
    """
    result = ReplayResult(registry=registry or GraphRegistry())

    with open(path) as f:
        for line_no, line in enumerate(f, start=1):
            if not line.strip():
                continue
            try:
                op = json.loads(line)
            except json.JSONDecodeError as e:
                raise ReplayError(f"Line {line_no}: invalid JSON: {e}") from e
            status = _apply(result.registry, op, line_no)
            result.statuses[status] += 1
            result.applied += 1

    return result


def _apply(registry: GraphRegistry, op: dict, line_no: int) -> str:
    if not isinstance(op, dict):
        raise ReplayError(f"Line {line_no}: expected a JSON object")
    kind = op.get("op")

    if kind == "add":
        if not op.get("id") or not isinstance(op["id"], str):
            raise ReplayError(f"Line {line_no}: add needs a string id")
        identity = Identity(op["id"])
        for name in PROFILE_FIELDS:
            if op.get(name) is not None:
                getattr(identity, f"set_{name}")(op[name])
        return "added" if registry.add_identity(identity) else "duplicate"

    if kind in ("establish", "tear_down"):
        ids = op.get("ids")
        if not isinstance(ids, list) or "at" not in op:
            raise ReplayError(f"Line {line_no}: {kind} needs ids and at")
        if not all(isinstance(i, str) for i in ids):
            raise ReplayError(f"Line {line_no}: {kind} ids must be strings")
        at = parse_instant(op["at"])
        if kind == "establish":
            outcome = registry.establish_edge(ids, at)
        else:
            outcome = registry.tear_down_edge(ids, at)
        return outcome.status.value

    raise ReplayError(f"Line {line_no}: unknown op {kind!r}")
