from cost import INFINITE, UNSET, finite
from distance_table import init_table, snapshot_all
from link_mutator import apply_event
from relaxation import is_stable, relax_node
from topology import TopologyStore
from topology_input import LinkEvent


def line_topology():
    # A -1- B -1- C
    store = TopologyStore()
    for name in ["A", "B", "C"]:
        store.create_node(name)
    apply_event(store, LinkEvent("A", "B", 1))
    apply_event(store, LinkEvent("B", "C", 1))
    for node in store:
        init_table(node, store.names())
    return store


def test_first_round_learns_two_hop_route():
    store = line_topology()
    snapshot_all(store)
    a = store.lookup("A")

    assert not relax_node(store, a)
    assert a.table["C"] == {"B": finite(2), "C": UNSET}
    # direct entries are never relaxed
    assert a.table["B"]["B"] == finite(1)


def test_relaxation_reads_previous_round_only():
    store = line_topology()
    snapshot_all(store)
    c = store.lookup("C")
    b = store.lookup("B")
    relax_node(store, c)

    # B has not seen C's new A entry yet: C's snapshot still says A is unknown
    relax_node(store, b)
    assert b.table["A"]["C"] == INFINITE
    assert c.table["A"]["B"] == finite(2)

    snapshot_all(store)
    relax_node(store, b)
    assert b.table["A"]["C"] == finite(3)


def test_unchanged_infinite_keeps_node_converged():
    store = line_topology()
    snapshot_all(store)
    b = store.lookup("B")
    assert relax_node(store, b)
    assert b.table["A"]["C"] == INFINITE


def test_ceiling_turns_stale_cost_infinite():
    store = line_topology()
    snapshot_all(store)
    a = store.lookup("A")
    relax_node(store, a, ceiling=1)
    assert a.table["C"]["B"] == INFINITE


def test_ceiling_limited_to_clipped_destinations():
    store = line_topology()
    snapshot_all(store)
    a = store.lookup("A")
    relax_node(store, a, ceiling=1, clipped=set())
    assert a.table["C"]["B"] == finite(2)

    relax_node(store, a, ceiling=1, clipped={"C"})
    assert a.table["C"]["B"] == INFINITE


def test_is_stable_reads_current_tables():
    store = line_topology()
    a = store.lookup("A")
    assert not is_stable(store, a)

    for _ in range(3):
        snapshot_all(store)
        for node in store:
            relax_node(store, node)
    assert all(is_stable(store, node) for node in store)
