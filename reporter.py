import sys

import numpy as np
import pandas as pd

from distance_table import get_min


def render_table(node, t, compact=False):
    """
    Formats a router's distance table at round t.

    Rows are destinations, columns are via-neighbors (INF = unreachable,
    '-' = no connection). With compact=True each row shows only its best cost.
    """
    lines = [f"router {node.name} at t={t}"]
    lines.append("".join(f"\t{dest}" for dest in node.table))
    for dest, row in node.table.items():
        if compact:
            _, best = get_min(row)
            lines.append(f"{dest}\t{best}")
        else:
            lines.append(dest + "".join(f"\t{cost}" for cost in row.values()))
    return "\n".join(lines) + "\n\n"


def render_routes(store):
    lines = []
    for node in store:
        for dest, row in node.table.items():
            via, best = get_min(row)
            if via is None:
                lines.append(f"router {node.name}: {dest} is unreachable")
            else:
                lines.append(f"router {node.name}: {dest} is {best.value} routing through {via}")
    return "\n".join(lines) + "\n\n"


class Reporter:
    """Writes round tables and route summaries as the simulation runs."""
    def __init__(self, stream=None, compact=False):
        self.stream = stream if stream is not None else sys.stdout
        self.compact = compact
        # (t, router name, rendered block); t is None for route summaries
        self.history = []

    def table(self, node, t):
        text = render_table(node, t, compact=self.compact)
        self.history.append((t, node.name, text))
        self.stream.write(text)

    def routes(self, store):
        text = render_routes(store)
        self.history.append((None, None, text))
        self.stream.write(text)


def routes_frame(store):
    """Best route per (router, destination) as a DataFrame; cost is NaN when unreachable."""
    records = []
    for node in store:
        for dest, row in node.table.items():
            via, best = get_min(row)
            records.append({
                "router": node.name,
                "destination": dest,
                "cost": float(best.value) if via is not None else np.nan,
                "via": via,
            })
    return pd.DataFrame(records, columns=["router", "destination", "cost", "via"])


def cost_matrix(store):
    """
    Square matrix of best costs indexed by store.names() order.
    Unreachable pairs are inf, the diagonal is 0.
    """
    names = store.names()
    index = {name: i for i, name in enumerate(names)}
    matrix = np.full((len(names), len(names)), np.inf)
    np.fill_diagonal(matrix, 0.0)
    for node in store:
        for dest, row in node.table.items():
            via, best = get_min(row)
            if via is not None:
                matrix[index[node.name], index[dest]] = best.value
    return matrix
