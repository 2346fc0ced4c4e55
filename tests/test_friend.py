"""Tests for neighborhood projections."""
import dataclasses

import pytest

from linkedwith import Friend, Identity, RequiredValueError, UninitializedObjectError


def test_equality_ignores_distance():
    """Two projections of the same identity are the same projection."""
    assert Friend(Identity("2"), 0) == Friend(Identity("2"), 3)
    assert len({Friend(Identity("2"), 0), Friend(Identity("2"), 3)}) == 1
    assert Friend(Identity("2"), 0) != Friend(Identity("3"), 0)


def test_immutable():
    """Friends cannot be modified."""
    friend = Friend(Identity("2"), 1)
    with pytest.raises(dataclasses.FrozenInstanceError):
        friend.distance = 4


def test_rejects_invalid_identity(capsys):
    """Only valid identities can be friends."""
    with pytest.raises(UninitializedObjectError):
        Friend(Identity(), 0)


def test_rejects_negative_distance(capsys):
    """Distances are never negative."""
    with pytest.raises(RequiredValueError):
        Friend(Identity("2"), -1)


def test_str():
    """Display shows the identity and distance."""
    friend = Friend(Identity("2"), 1)
    assert friend.id == "2"
    assert str(friend) == "Friend Identity ID: 2\nDistance: 1"
