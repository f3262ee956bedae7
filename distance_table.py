from cost import INFINITE, UNSET, finite


def init_table(node, names):
    """
    Builds the full distance table of a node from its direct links.

    Every other node gets a row, and every row has one via-entry per other node.
    Entries start UNSET; columns of direct neighbors are then filled with the link
    cost on their own row and INFINITE everywhere else.
    """
    others = [name for name in names if name != node.name]
    node.table = {}
    for dest in others:
        row = {via: UNSET for via in others}
        for neighbor, cost in node.links.items():
            row[neighbor] = finite(cost) if neighbor == dest else INFINITE
        node.table[dest] = row
    node.table_prev = {}


def get_min(row):
    """
    Returns (via, cost) for the cheapest finite entry of a table row.

    The first via with the strictly smallest cost wins. UNSET and INFINITE entries
    are never selected; (None, INFINITE) means the row holds no usable route.
    """
    best_via, best = None, INFINITE
    for via, cost in row.items():
        if cost.is_finite and (best_via is None or cost.value < best.value):
            best_via, best = via, cost
    return best_via, best


def snapshot_all(store):
    for node in store:
        node.snapshot()
