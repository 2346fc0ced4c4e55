"""Test configuration and fixtures for the LinkedWith test suite.

Fixtures:
    t0..t3: fixed UTC instants, one month apart
    registry: empty GraphRegistry with a frozen clock
    members: registry with identities "1".."4"
    chain: members plus links (1,2)@t1, (2,3)@t1, (3,4)@t2
    receipts: parse receipts printed to stdout so far
"""
import json
from datetime import datetime, timezone

import pytest

from linkedwith import GraphRegistry, Identity


T0 = datetime(2000, 2, 1, tzinfo=timezone.utc)
T1 = datetime(2000, 3, 1, tzinfo=timezone.utc)
T2 = datetime(2000, 4, 1, tzinfo=timezone.utc)
T3 = datetime(2000, 5, 1, tzinfo=timezone.utc)
NOW = datetime(2001, 1, 1, tzinfo=timezone.utc)


@pytest.fixture
def t0() -> datetime:
    return T0


@pytest.fixture
def t1() -> datetime:
    return T1


@pytest.fixture
def t2() -> datetime:
    return T2


@pytest.fixture
def t3() -> datetime:
    return T3


@pytest.fixture
def registry() -> GraphRegistry:
    """Empty registry whose clock is frozen at NOW."""
    return GraphRegistry(clock=lambda: NOW)


@pytest.fixture
def members(registry: GraphRegistry) -> GraphRegistry:
    """Registry holding identities "1" through "4"."""
    for i in range(1, 5):
        registry.add_identity(Identity(str(i)))
    return registry


@pytest.fixture
def chain(members: GraphRegistry) -> GraphRegistry:
    """1 - 2 - 3 - 4, with the last link only coming up at T2."""
    members.establish_edge({"1", "2"}, T1)
    members.establish_edge({"2", "3"}, T1)
    members.establish_edge({"3", "4"}, T2)
    return members


@pytest.fixture
def receipts(capsys):
    """Return a reader that parses every receipt printed so far."""
    def read() -> list[dict]:
        out = capsys.readouterr().out
        return [json.loads(line) for line in out.splitlines() if line.startswith("{")]
    return read


@pytest.fixture(autouse=True)
def enable_mutation_receipts(monkeypatch):
    """Record every mutation as a receipt during tests.

    Mutation receipts are disabled by default (shadow mode); tests run with
    them on so the receipt path is exercised alongside every change.
    """
    import linkedwith.config.features as features
    monkeypatch.setattr(features, 'FEATURE_MUTATION_RECEIPTS_ENABLED', True)
