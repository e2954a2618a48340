"""
Tests for network reaping by association.
"""

from reaper.cleanup.executor import RemovalExecutor
from reaper.cleanup.models import RemovalResult, ResourceKind
from reaper.cleanup.networks import NetworkReapOrchestrator, networks_of

from fakes import FakeEngine, make_resource


def test_networks_union_first_seen_order():
    """Test network union in first-seen order."""
    containers = [
        make_resource("a", networks=["net-2", "net-1"]),
        make_resource("b", networks=["net-1", "net-3"]),
    ]

    networks = networks_of(containers)

    assert [n.name for n in networks] == ["net-2", "net-1", "net-3"]
    assert all(n.kind is ResourceKind.NETWORK for n in networks)


def test_predefined_networks_are_ignored():
    """Test that bridge, host and none are never reaped."""
    containers = [make_resource("a", networks=["bridge", "app-net", "host", "none"])]

    assert [n.name for n in networks_of(containers)] == ["app-net"]


def test_reap_removes_each_network_once():
    """Test that shared networks are removed once."""
    engine = FakeEngine()
    containers = [make_resource("a", networks=["n"]), make_resource("b", networks=["n"])]

    outcomes = NetworkReapOrchestrator(RemovalExecutor(engine)).reap_networks(containers, dry_run=False)

    assert [(o.resource.id, o.result) for o in outcomes] == [("n", RemovalResult.REMOVED)]
    assert engine.removal_calls == [(ResourceKind.NETWORK, "n")]


def test_reap_dry_run():
    """Test network reaping in dry-run mode."""
    engine = FakeEngine()

    outcomes = NetworkReapOrchestrator(RemovalExecutor(engine)).reap_networks(
        [make_resource("a", networks=["n"])], dry_run=True
    )

    assert outcomes[0].is_dry_run
    assert engine.removal_calls == []


def test_network_failure_is_isolated():
    """Test that one network failure does not stop the others."""
    from reaper.errors import EngineConflict

    engine = FakeEngine(failures={"n1": EngineConflict("n1", "network n1 has active endpoints")})
    containers = [make_resource("a", networks=["n1", "n2"])]

    outcomes = NetworkReapOrchestrator(RemovalExecutor(engine)).reap_networks(containers, dry_run=False)

    assert [o.result for o in outcomes] == [RemovalResult.FAILED, RemovalResult.REMOVED]
    assert "active endpoints" in outcomes[0].reason


def test_no_networks_no_calls():
    """Test that no networks means no engine calls."""
    engine = FakeEngine()

    outcomes = NetworkReapOrchestrator(RemovalExecutor(engine)).reap_networks(
        [make_resource("a")], dry_run=False
    )

    assert outcomes == []
    assert engine.events == []
