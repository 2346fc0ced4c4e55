"""Neighborhood projection: an identity seen from a query origin."""
from dataclasses import dataclass, field

from .core.errors import stoprule_required, stoprule_uninitialized
from .identity import Identity


@dataclass(frozen=True)
class Friend:
    """An identity and its hop distance from the query origin.

    Two friends are equal when they refer to the same identity, whatever
    distance each one recorded.
    """
    identity: Identity
    distance: int = field(compare=False)

    def __post_init__(self):
        if self.identity is None:
            stoprule_required("identity")
        if not self.identity.valid:
            stoprule_uninitialized("identity", "befriend")
        if self.distance is None or self.distance < 0:
            stoprule_required("distance")

    @property
    def id(self) -> str:
        return self.identity.id

    def __str__(self) -> str:
        return f"Friend {self.identity}\nDistance: {self.distance}"
