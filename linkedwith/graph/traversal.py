"""Time-filtered neighborhood queries over the graph registry.

Query patterns:
    - Neighborhood: "Who could X reach through live links at T?" (<100ms)
    - Trend: "How did X's neighborhood size change over time?" (<1000ms)

Distances count hops beyond the first: identities directly linked to the
origin sit at distance 0, their contacts at 1, and so on.
"""
import time
from collections import deque
from typing import Optional

from ..config import features
from ..core.constants import NEIGHBORHOOD_SLO_MS, TREND_SLO_MS
from ..core.errors import stoprule_required
from ..core.receipt import emit_receipt
from ..core.status import Outcome, StatusCode
from ..friend import Friend


def expand(registry, origin_id: str, date, max_distance: Optional[int] = None) -> dict[str, int]:
    """Breadth-first walk over links active at date.

    Args:
        registry: GraphRegistry to walk
        origin_id: Member to start from (never part of the result)
        date: Instant every crossed link must be active at
        max_distance: Largest distance admitted, None for unbounded

    Returns:
        Mapping of reached identity id -> distance, in discovery order
    """
    admitted: dict[str, int] = {}
    visited = {origin_id}
    queue = deque([(origin_id, 0)])

    while queue:
        parent_id, distance = queue.popleft()

        if max_distance is not None and distance > max_distance:
            continue

        for timeline in registry.timelines_of(parent_id):
            if not timeline.is_active(date):
                continue
            other = timeline.other_participant(parent_id)
            if other.id in visited:
                continue
            visited.add(other.id)
            admitted[other.id] = distance
            queue.append((other.id, distance + 1))

    return admitted


def event_dates(registry, identity_ids) -> set:
    """Every distinct event timestamp on links touching the given members."""
    dates = set()
    for identity_id in identity_ids:
        for timeline in registry.timelines_of(identity_id):
            dates.update(timeline.events)
    return dates


def neighborhood(
    registry,
    origin_id: str,
    date,
    max_distance: Optional[int] = None,
) -> Outcome:
    """Identities reachable from origin through links active at date.

    SLO: <100ms

    Args:
        registry: GraphRegistry to query
        origin_id: Member to start from
        date: Instant to evaluate link activity at
        max_distance: Optional non-negative distance limit

    Returns:
        Outcome with a frozenset of Friend on SUCCESS; INVALID_USERS for an
        unknown origin, INVALID_DISTANCE for a negative limit
    """
    if origin_id is None:
        stoprule_required("origin_id", registry.tenant_id)
    if date is None:
        stoprule_required("date", registry.tenant_id)

    start = time.perf_counter()

    if not registry.is_member(origin_id):
        outcome = Outcome.failure(StatusCode.INVALID_USERS)
    elif max_distance is not None and max_distance < 0:
        outcome = Outcome.failure(StatusCode.INVALID_DISTANCE)
    else:
        reached = expand(registry, origin_id, date, max_distance)
        outcome = Outcome.success(frozenset(
            Friend(registry.lookup(identity_id), distance)
            for identity_id, distance in reached.items()
        ))

    _report(registry, "neighborhood", origin_id, outcome, start, NEIGHBORHOOD_SLO_MS)
    return outcome


def neighborhood_trend(registry, origin_id: str, now=None) -> Outcome:
    """Neighborhood size at every event date of the current neighborhood.

    The neighborhood is taken unbounded as of now; each event date found
    on links touching its members triggers a full recomputation.

    SLO: <1000ms

    Args:
        registry: GraphRegistry to query
        origin_id: Member to start from
        now: Instant defining the current neighborhood, registry.now() if None

    Returns:
        Outcome with a dict of date -> size ordered by date on SUCCESS;
        INVALID_USERS for an unknown origin
    """
    if origin_id is None:
        stoprule_required("origin_id", registry.tenant_id)

    start = time.perf_counter()

    if not registry.is_member(origin_id):
        outcome = Outcome.failure(StatusCode.INVALID_USERS)
    else:
        if now is None:
            now = registry.now()
        members = expand(registry, origin_id, now)
        trend = {
            date: len(expand(registry, origin_id, date))
            for date in sorted(event_dates(registry, members))
        }
        outcome = Outcome.success(trend)

    _report(registry, "trend", origin_id, outcome, start, TREND_SLO_MS)
    return outcome


def _report(registry, query_type: str, origin_id: str, outcome: Outcome,
            start: float, slo_ms: int) -> None:
    elapsed_ms = (time.perf_counter() - start) * 1000

    if features.FEATURE_SLO_CHECKS_ENABLED and elapsed_ms > slo_ms:
        emit_receipt("graph_slo_violation", {
            "query_type": query_type,
            "elapsed_ms": elapsed_ms,
            "slo_ms": slo_ms,
            "tenant_id": registry.tenant_id,
        })

    if features.FEATURE_QUERY_RECEIPTS_ENABLED:
        emit_receipt("graph_query", {
            "query_type": query_type,
            "origin_id": origin_id,
            "status": outcome.status.value,
            "result_size": len(outcome.value) if outcome.ok else 0,
            "elapsed_ms": elapsed_ms,
            "tenant_id": registry.tenant_id,
        })
