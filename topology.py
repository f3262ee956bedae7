import networkx as nx


class RoutingError(Exception):
    """Base class for topology and input errors."""


class UnknownNode(RoutingError):
    def __init__(self, name):
        super().__init__(f"unknown node: {name}")
        self.name = name


class DuplicateNode(RoutingError):
    def __init__(self, name):
        super().__init__(f"node declared twice: {name}")
        self.name = name


class MalformedLine(RoutingError):
    def __init__(self, line, reason, lineno=None):
        where = f"line {lineno}: " if lineno is not None else ""
        super().__init__(f"{where}{reason}: {line!r}")
        self.line = line
        self.reason = reason
        self.lineno = lineno


class Node:
    def __init__(self, name):
        self.name = name
        self.converged = False
        # neighbor name -> positive int cost
        self.links = {}
        # destination -> via-neighbor -> Cost
        self.table = {}
        self.table_prev = {}

    def snapshot(self):
        """Copies the current table into table_prev for the next round."""
        self.table_prev = {dest: dict(row) for dest, row in self.table.items()}

    def __repr__(self):
        return f"Node({self.name!r}, links={self.links})"


class TopologyStore:
    """
    Owns every router of one simulation, addressed by name.

    Links are kept on the nodes themselves and mirrored into an undirected
    networkx graph ('weight' attribute) for path lookups and drawing.
    """
    def __init__(self):
        self.nodes = {}
        self.graph = nx.Graph()

    def create_node(self, name):
        if name in self.nodes:
            raise DuplicateNode(name)
        node = Node(name)
        self.nodes[name] = node
        self.graph.add_node(name)
        return node

    def lookup(self, name):
        try:
            return self.nodes[name]
        except KeyError:
            raise UnknownNode(name) from None

    def names(self):
        return sorted(self.nodes)

    def __iter__(self):
        for name in self.names():
            yield self.nodes[name]

    def __len__(self):
        return len(self.nodes)

    def __contains__(self, name):
        return name in self.nodes

    def all_converged(self):
        return all(node.converged for node in self.nodes.values())

    def unreachable_from(self, name):
        """Names outside the connected component of `name` in the current graph."""
        return set(self.graph) - nx.node_connected_component(self.graph, name)

    def total_link_cost(self):
        return sum(w for _, _, w in self.graph.edges(data="weight"))

    def max_link_cost(self):
        return max((w for _, _, w in self.graph.edges(data="weight")), default=0)
