"""
LinkedWith - temporal social graph

Identities joined by time-stamped links. Answers two questions:
    - Was the link between A and B active at T?
    - Who was within N hops of A at T, and how has that changed?

Every query emits a receipt.
"""

__version__ = "1.0.0"

from .core import (
    Outcome,
    RequiredValueError,
    StatusCode,
    StopRule,
    UninitializedObjectError,
    emit_receipt,
)
from .friend import Friend
from .graph import GraphRegistry
from .identity import Identity
from .timeline import Timeline, TimelineState

__all__ = [
    # Core
    "Outcome",
    "StatusCode",
    "StopRule",
    "RequiredValueError",
    "UninitializedObjectError",
    "emit_receipt",
    # Model
    "Identity",
    "Timeline",
    "TimelineState",
    "Friend",
    # Graph
    "GraphRegistry",
]
