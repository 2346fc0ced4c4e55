"""Graph registry.

Owns the identities of the network and the timelines between them. Storage
is a NetworkX graph keyed by identity id:

    node attrs:  identity -> Identity
    edge attrs:  timeline -> index into the timeline arena

Timelines live in an append-only arena and are addressed by stable index, so
identities never hold references to timelines (and vice versa through the
graph). Adjacency iteration follows edge insertion order.
"""
from datetime import datetime, timezone
from typing import Callable, Iterable, Optional

import networkx as nx

from ..config import features
from ..core.constants import DEFAULT_TENANT, PARTICIPANT_COUNT
from ..core.errors import stoprule_required
from ..core.receipt import emit_receipt
from ..core.status import Outcome, StatusCode
from ..identity import Identity
from ..timeline import Timeline
from . import traversal


def utc_now() -> datetime:
    """Time source for a registry with nothing logged yet."""
    return datetime.now(timezone.utc)


class GraphRegistry:
    """Identities plus the relationship timelines joining them.

    Example:
        registry = GraphRegistry()
        registry.add_identity(Identity("1"))
        registry.add_identity(Identity("2"))

        registry.establish_edge({"1", "2"}, march)      # Outcome(SUCCESS)
        registry.is_edge_active({"1", "2"}, april)      # True
        registry.neighborhood("1", april).value          # {Friend(2, 0)}
    """

    def __init__(self, clock: Optional[Callable[[], object]] = None,
                 tenant_id: str = DEFAULT_TENANT):
        self._graph = nx.Graph()
        self._timelines: list[Timeline] = []
        self.clock = clock
        self.tenant_id = tenant_id

    # ------------------------------------------------------------------
    # Identities
    # ------------------------------------------------------------------

    def add_identity(self, identity: Identity) -> bool:
        """Add a valid identity that is not yet a member.

        Returns:
            True if added, False if invalid or already present
        """
        if identity is None:
            stoprule_required("identity", self.tenant_id)
        if not identity.valid or self.is_member(identity.id):
            return False

        self._graph.add_node(identity.id, identity=identity)

        if features.FEATURE_MUTATION_RECEIPTS_ENABLED:
            emit_receipt("identity_added", {
                "identity_id": identity.id,
                "tenant_id": self.tenant_id,
            })
        return True

    def is_member(self, identity_id: str) -> bool:
        return self.lookup(identity_id) is not None

    def lookup(self, identity_id: str) -> Optional[Identity]:
        """Get a member by id. None for unknown or empty ids."""
        if identity_id is None:
            stoprule_required("identity_id", self.tenant_id)
        if not identity_id or identity_id not in self._graph:
            return None
        return self._graph.nodes[identity_id]["identity"]

    def identities(self) -> list[Identity]:
        return [data["identity"] for _, data in self._graph.nodes(data=True)]

    # ------------------------------------------------------------------
    # Timelines
    # ------------------------------------------------------------------

    def timeline(self, index: int) -> Timeline:
        return self._timelines[index]

    def timelines_of(self, identity_id: str) -> list[Timeline]:
        """Timelines the member participates in, in creation order."""
        if not self.is_member(identity_id):
            return []
        return [
            self._timelines[data["timeline"]]
            for data in self._graph.adj[identity_id].values()
        ]

    def timeline_between(self, ids: Iterable[str]) -> Optional[Timeline]:
        ids = self._id_list(ids)
        pair = self._legal_pair(ids)
        if pair is None:
            return None
        data = self._graph.get_edge_data(*pair)
        if data is None:
            return None
        return self._timelines[data["timeline"]]

    def establish_edge(self, ids: Iterable[str], date) -> Outcome:
        """Bring the link between two members up at date.

        A timeline is created on first use; both adjacency entries are
        written together.

        Returns:
            INVALID_USERS for an illegal pair, else the timeline's outcome
        """
        if date is None:
            stoprule_required("date", self.tenant_id)
        ids = self._id_list(ids)
        pair = self._legal_pair(ids)
        if pair is None:
            return self._record("establish", ids, date,
                                Outcome.failure(StatusCode.INVALID_USERS))

        existing = self.timeline_between(pair)
        if existing is not None:
            return self._record("establish", pair, date, existing.establish(date))

        timeline = Timeline()
        outcome = timeline.assign(self.lookup(i) for i in pair)
        if outcome.ok:
            outcome = timeline.establish(date)
        if not outcome.ok:
            return self._record("establish", pair, date, outcome)

        self._timelines.append(timeline)
        self._graph.add_edge(*pair, timeline=len(self._timelines) - 1)
        return self._record("establish", pair, date, outcome)

    def tear_down_edge(self, ids: Iterable[str], date) -> Outcome:
        """Take the link between two members down at date.

        Returns:
            INVALID_USERS for an illegal pair, ALREADY_INACTIVE if the pair
            was never linked, else the timeline's outcome
        """
        if date is None:
            stoprule_required("date", self.tenant_id)
        ids = self._id_list(ids)
        pair = self._legal_pair(ids)
        if pair is None:
            return self._record("tear_down", ids, date,
                                Outcome.failure(StatusCode.INVALID_USERS))

        timeline = self.timeline_between(pair)
        if timeline is None:
            return self._record("tear_down", pair, date,
                                Outcome.failure(StatusCode.ALREADY_INACTIVE))
        return self._record("tear_down", pair, date, timeline.tear_down(date))

    def is_edge_active(self, ids: Iterable[str], date) -> bool:
        if date is None:
            stoprule_required("date", self.tenant_id)
        timeline = self.timeline_between(ids)
        return timeline is not None and timeline.is_active(date)

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def neighborhood(self, origin_id: str, date, max_distance: Optional[int] = None) -> Outcome:
        return traversal.neighborhood(self, origin_id, date, max_distance)

    def neighborhood_trend(self, origin_id: str, now=None) -> Outcome:
        return traversal.neighborhood_trend(self, origin_id, now)

    def now(self):
        """Current instant, comparable with the logged event timestamps.

        An injected clock always wins. Otherwise the wall clock is read in
        the timezone of the latest datetime event (naive stays naive), and
        non-datetime timestamps fall back to the latest event itself.
        """
        if self.clock is not None:
            return self.clock()

        latest = self._latest_event()
        if latest is None:
            return utc_now()
        if isinstance(latest, datetime):
            return datetime.now(latest.tzinfo)
        return latest

    # ------------------------------------------------------------------
    # Introspection
    # ------------------------------------------------------------------

    def node_count(self) -> int:
        return self._graph.number_of_nodes()

    def edge_count(self) -> int:
        return self._graph.number_of_edges()

    def to_dict(self) -> dict:
        """Export identities and links to dictionary format."""
        return {
            "identities": [
                {
                    "id": identity.id,
                    "name": identity.display_name,
                    "email": identity.email,
                    "phone_number": identity.phone_number,
                }
                for identity in self.identities()
            ],
            "links": [
                {
                    "ids": sorted(timeline.ids),
                    "state": timeline.state.value,
                    "events": [str(date) for date in timeline.events],
                }
                for timeline in self._timelines
            ],
        }

    # ------------------------------------------------------------------
    # Private
    # ------------------------------------------------------------------

    def _latest_event(self):
        latest = None
        for timeline in self._timelines:
            if timeline.events and (latest is None or timeline.events[-1] > latest):
                latest = timeline.events[-1]
        return latest

    def _id_list(self, ids: Iterable[str]) -> list[str]:
        if ids is None:
            stoprule_required("ids", self.tenant_id)
        ids = list(ids)
        if any(i is None for i in ids):
            stoprule_required("ids", self.tenant_id)
        return ids

    def _legal_pair(self, ids: Iterable[str]) -> Optional[tuple[str, str]]:
        """Two distinct member ids, sorted. None if the pair is illegal."""
        pair = sorted(ids)
        if len(pair) != PARTICIPANT_COUNT or pair[0] == pair[1]:
            return None
        if not all(self.is_member(i) for i in pair):
            return None
        return pair[0], pair[1]

    def _record(self, action: str, ids, date, outcome: Outcome) -> Outcome:
        if features.FEATURE_MUTATION_RECEIPTS_ENABLED:
            emit_receipt("link_event", {
                "action": action,
                "ids": sorted(str(i) for i in ids),
                "date": None if date is None else str(date),
                "status": outcome.status.value,
                "tenant_id": self.tenant_id,
            })
        return outcome

