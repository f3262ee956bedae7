import networkx as nx

from distance_table import get_min


class RoutingAlgorithm:
    def __init__(self, graph):
        self.graph = graph

    def find_path(self, source, target):
        raise NotImplementedError("Subclasses must implement find_path")

    def path_cost(self, path):
        return sum(self.graph[u][v]['weight'] for u, v in zip(path, path[1:]))


class ShortestPathRouting(RoutingAlgorithm):
    """
    Global link-state view: Dijkstra over the whole weighted graph.
    Used as the reference the distance-vector results are checked against.
    """
    def find_path(self, source, target):
        try:
            return nx.shortest_path(self.graph, source=source, target=target, weight='weight')
        except nx.NetworkXNoPath:
            return None

    def shortest_costs(self, source):
        """{destination: cost} for every node reachable from source (source excluded)."""
        lengths = nx.single_source_dijkstra_path_length(self.graph, source, weight='weight')
        lengths.pop(source, None)
        return lengths


class DistanceVectorRouting(RoutingAlgorithm):
    """
    Hop-by-hop forwarding using only the routers' converged distance tables.
    """
    def __init__(self, store):
        super().__init__(store.graph)
        self.store = store

    def next_hop(self, source, target):
        node = self.store.lookup(source)
        row = node.table.get(target)
        if row is None:
            return None
        via, _ = get_min(row)
        return via

    def find_path(self, source, target):
        path = [source]
        current = source
        visited = {source}

        while current != target:
            next_hop = self.next_hop(current, target)
            if next_hop is None or next_hop in visited:
                # unreachable, or tables still disagree (forwarding loop)
                return None
            path.append(next_hop)
            visited.add(next_hop)
            current = next_hop

        return path


def compare_with_reference(store):
    """
    Checks every router's best cost against Dijkstra on the same graph.

    Returns a list of (router, destination, dv_cost, reference_cost) mismatches,
    where None stands for unreachable. An empty list means the tables agree.
    """
    reference = ShortestPathRouting(store.graph)
    mismatches = []
    for node in store:
        expected = reference.shortest_costs(node.name)
        for dest, row in node.table.items():
            via, best = get_min(row)
            dv_cost = best.value if via is not None else None
            ref_cost = expected.get(dest)
            if dv_cost != ref_cost:
                mismatches.append((node.name, dest, dv_cost, ref_cost))
    return mismatches
