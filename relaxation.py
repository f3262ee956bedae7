from cost import INFINITE
from distance_table import get_min


def via_cost(store, node, dest, via, ceiling=None, previous=True):
    """
    Cost of reaching dest through neighbor via: c(x,v) + min D_v(y).

    The neighbor's belief is read from its table_prev snapshot, or from its live
    table when previous is False. Returns INFINITE when the neighbor knows no route
    or when the sum exceeds `ceiling`.
    """
    neighbor = store.lookup(via)
    beliefs = neighbor.table_prev if previous else neighbor.table
    _, best = get_min(beliefs.get(dest, {}))
    if not best.is_finite:
        return INFINITE
    candidate = node.table[via][via] + best
    if ceiling is not None and candidate.is_finite and candidate.value > ceiling:
        return INFINITE
    return candidate


def relax_node(store, node, ceiling=None, clipped=None):
    """
    One Bellman-Ford step for a node: D_x(y) via v = c(x,v) + min D_v(y).

    Neighbor beliefs are read from table_prev only, so every node of a round
    advances from the same snapshot. Direct entries (via == destination) and UNSET
    entries are left alone. Candidates above `ceiling` count as unreachable; with
    `clipped` given, only for the destinations it contains.

    Returns the node's converged flag: True when no entry changed.
    """
    node.converged = True
    for dest, row in node.table.items():
        limit = ceiling if clipped is None or dest in clipped else None
        for via, current in row.items():
            if via == dest or current.is_unset:
                continue
            candidate = via_cost(store, node, dest, via, limit)
            if candidate != current:
                row[via] = candidate
                node.converged = False
    return node.converged


def is_stable(store, node, ceiling=None, clipped=None):
    """True when a round taken from the current tables would leave the node unchanged."""
    for dest, row in node.table.items():
        limit = ceiling if clipped is None or dest in clipped else None
        for via, current in row.items():
            if via == dest or current.is_unset:
                continue
            if via_cost(store, node, dest, via, limit, previous=False) != current:
                return False
    return True
