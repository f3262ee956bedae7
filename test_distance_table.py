from cost import INFINITE, UNSET, finite
from distance_table import get_min, init_table
from topology import Node


def test_init_table_full_shape():
    node = Node("A")
    node.links = {"B": 4}
    init_table(node, ["A", "B", "C", "D"])

    assert list(node.table) == ["B", "C", "D"]
    assert node.table["B"] == {"B": finite(4), "C": UNSET, "D": UNSET}
    assert node.table["C"] == {"B": INFINITE, "C": UNSET, "D": UNSET}
    assert node.table["D"] == {"B": INFINITE, "C": UNSET, "D": UNSET}
    assert "A" not in node.table


def test_init_table_without_links():
    node = Node("D")
    init_table(node, ["A", "D"])
    assert node.table == {"A": {"A": UNSET}}


def test_get_min_first_smallest_wins():
    row = {"B": finite(3), "C": finite(2), "D": finite(2)}
    assert get_min(row) == ("C", finite(2))


def test_get_min_ignores_sentinels():
    row = {"B": UNSET, "C": INFINITE, "D": finite(9)}
    assert get_min(row) == ("D", finite(9))


def test_get_min_without_route():
    assert get_min({"B": UNSET, "C": INFINITE}) == (None, INFINITE)
    assert get_min({}) == (None, INFINITE)
