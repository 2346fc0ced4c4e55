"""Tests for the graph registry.

Validates membership, link establishment / tear-down through the registry,
adjacency bookkeeping and mutation receipts.
"""
from datetime import timedelta

import pytest

from linkedwith import GraphRegistry, Identity, RequiredValueError, StatusCode
from linkedwith.core import validate_receipt


class TestMembership:
    """add_identity, lookup and is_member."""

    def test_add_and_lookup(self, registry):
        """A valid identity becomes a member once added."""
        ada = Identity("1")

        assert not registry.is_member("1")
        assert registry.lookup("1") is None
        assert registry.add_identity(ada) is True

        assert registry.is_member("1")
        assert registry.lookup("1") is ada
        assert registry.node_count() == 1

    def test_add_duplicate(self, registry):
        """A second identity with the same id is rejected."""
        registry.add_identity(Identity("1"))
        assert registry.add_identity(Identity("1")) is False
        assert registry.node_count() == 1

    def test_add_invalid(self, registry):
        """Invalid identities never join."""
        assert registry.add_identity(Identity()) is False
        assert registry.node_count() == 0

    def test_lookup_empty_id(self, members):
        """The empty id is never a member."""
        assert members.lookup("") is None
        assert not members.is_member("")

    def test_none_arguments(self, registry, capsys):
        """None identities and ids raise."""
        with pytest.raises(RequiredValueError):
            registry.add_identity(None)
        with pytest.raises(RequiredValueError):
            registry.lookup(None)

    def test_identities(self, members):
        """Members come back in insertion order."""
        assert [i.id for i in members.identities()] == ["1", "2", "3", "4"]


class TestEdges:
    """establish_edge, tear_down_edge, is_edge_active."""

    def test_establish_and_tear_down(self, members, t0, t1):
        """Establish, reject an earlier tear-down, tear down, tear down again."""
        assert members.establish_edge({"1", "2"}, t1).status is StatusCode.SUCCESS
        assert members.is_edge_active({"1", "2"}, t1)

        assert members.tear_down_edge({"1", "2"}, t0).status is StatusCode.INVALID_DATE
        assert members.tear_down_edge({"1", "2"}, t1).status is StatusCode.SUCCESS
        assert members.tear_down_edge({"1", "2"}, t1).status is StatusCode.ALREADY_INACTIVE

    def test_reestablish(self, members, t1, t2, t3):
        """A torn-down link can come back on the same timeline."""
        members.establish_edge(["1", "2"], t1)
        members.tear_down_edge(["2", "1"], t2)
        assert members.establish_edge(("1", "2"), t3).ok

        assert members.edge_count() == 1
        assert members.timeline_between({"1", "2"}).events == (t1, t2, t3)
        assert not members.is_edge_active({"1", "2"}, t2 + timedelta(days=1))
        assert members.is_edge_active({"1", "2"}, t3)

    def test_establish_twice(self, members, t1, t2):
        """Establishing a live link is ALREADY_ACTIVE."""
        members.establish_edge({"1", "2"}, t1)
        assert members.establish_edge({"1", "2"}, t2).status is StatusCode.ALREADY_ACTIVE

    @pytest.mark.parametrize("ids", [
        {"1"},
        ["1", "1"],
        {"1", "9"},
        {"1", "2", "3"},
        {"1", ""},
        set(),
    ])
    def test_illegal_pairs(self, members, ids, t1):
        """Anything but two distinct members is INVALID_USERS."""
        assert members.establish_edge(ids, t1).status is StatusCode.INVALID_USERS
        assert members.tear_down_edge(ids, t1).status is StatusCode.INVALID_USERS
        assert not members.is_edge_active(ids, t1)
        assert members.edge_count() == 0

    def test_tear_down_unknown_link(self, members, t1):
        """Tearing down a never-linked pair is ALREADY_INACTIVE."""
        assert members.tear_down_edge({"1", "2"}, t1).status is StatusCode.ALREADY_INACTIVE
        assert members.edge_count() == 0

    def test_inactive_without_link(self, members, t1):
        """A pair without a timeline is inactive."""
        assert not members.is_edge_active({"1", "2"}, t1)

    def test_none_arguments(self, members, t1, capsys):
        """None ids, elements or dates raise."""
        with pytest.raises(RequiredValueError):
            members.establish_edge(None, t1)
        with pytest.raises(RequiredValueError):
            members.establish_edge({"1", "2"}, None)
        with pytest.raises(RequiredValueError):
            members.tear_down_edge(["1", None], t1)


class TestAdjacency:
    """Both participants see every link, in creation order."""

    def test_both_participants_hold_link(self, chain):
        """A link is listed under both of its participants."""
        link = chain.timeline_between({"2", "3"})
        assert link in chain.timelines_of("2")
        assert link in chain.timelines_of("3")

    def test_creation_order(self, chain):
        """Links are listed in creation order."""
        assert [sorted(t.ids) for t in chain.timelines_of("2")] == [["1", "2"], ["2", "3"]]
        assert [sorted(t.ids) for t in chain.timelines_of("3")] == [["2", "3"], ["3", "4"]]

    def test_unknown_member_has_no_links(self, chain):
        """Non-members have no links."""
        assert chain.timelines_of("9") == []

    def test_arena_indexes_are_stable(self, chain):
        """Timelines keep the index they were created at."""
        assert chain.timeline(0) is chain.timeline_between({"1", "2"})
        assert chain.timeline(2) is chain.timeline_between({"3", "4"})

    def test_to_dict(self, chain, t2):
        """Export lists identities and links with state and events."""
        exported = chain.to_dict()
        assert [i["id"] for i in exported["identities"]] == ["1", "2", "3", "4"]
        assert exported["links"][2] == {
            "ids": ["3", "4"], "state": "active", "events": [str(t2)],
        }


class TestMutationReceipts:
    """Every mutation is recorded when the feature is on."""

    def test_identity_added_receipt(self, registry, receipts):
        """Adding an identity emits identity_added."""
        registry.add_identity(Identity("1"))
        receipt = receipts()[-1]
        assert receipt["receipt_type"] == "identity_added"
        assert receipt["identity_id"] == "1"
        assert validate_receipt(receipt)

    def test_link_event_receipt(self, members, receipts, t1):
        """Successful and failed edge changes are both recorded."""
        receipts()
        members.establish_edge({"2", "1"}, t1)
        members.establish_edge({"1", "9"}, t1)

        success, failure = receipts()
        assert success["receipt_type"] == "link_event"
        assert success["action"] == "establish"
        assert success["ids"] == ["1", "2"]
        assert success["status"] == "success"
        assert success["date"] == str(t1)
        assert failure["status"] == "invalid_users"
        assert validate_receipt(success)

    def test_receipts_off(self, members, receipts, monkeypatch, t1):
        """Disabling mutation receipts silences mutations."""
        import linkedwith.config.features as features
        monkeypatch.setattr(features, 'FEATURE_MUTATION_RECEIPTS_ENABLED', False)
        receipts()

        members.establish_edge({"1", "2"}, t1)
        members.add_identity(Identity("5"))

        assert receipts() == []

    def test_tenant(self, t1, receipts):
        """Receipts carry the registry tenant."""
        registry = GraphRegistry(tenant_id="acme")
        registry.add_identity(Identity("1"))
        assert receipts()[-1]["tenant_id"] == "acme"

    def test_anomaly_tenant(self, t1, receipts):
        """Contract violations in registry calls report the registry tenant."""
        registry = GraphRegistry(tenant_id="acme")
        registry.add_identity(Identity("1"))
        receipts()

        with pytest.raises(RequiredValueError):
            registry.establish_edge(["1", None], t1)
        with pytest.raises(RequiredValueError):
            registry.lookup(None)

        anomalies = receipts()
        assert [r["receipt_type"] for r in anomalies] == ["anomaly", "anomaly"]
        assert {r["tenant_id"] for r in anomalies} == {"acme"}
