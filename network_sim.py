from collections import namedtuple
from enum import Enum

import simpy

from distance_table import get_min, init_table, snapshot_all
from link_mutator import apply_event
from relaxation import is_stable, relax_node
from topology import TopologyStore
from topology_input import LinkEvent
from utils import setup_logger

logger = setup_logger()

ConvergenceResult = namedtuple("ConvergenceResult", ["rounds", "start", "routes"])


class SimulationState(Enum):
    UNINITIALIZED = "uninitialized"
    INITIALIZING = "initializing"
    ROUND_LOOP = "round_loop"
    CONVERGED = "converged"


class NetworkSimulation:
    def __init__(self, env, reporter=None, infinity=None):
        """
        Distance-vector simulation over a named topology.

        Args:
            env: simpy Environment, one tick per synchronous round
            reporter: optional Reporter notified with every round table and route summary
            infinity: fixed count-to-infinity ceiling; by default derived from the
                current link costs at every round
        """
        self.env = env
        self.store = TopologyStore()
        self.reporter = reporter
        self.infinity = infinity
        self.state = SimulationState.UNINITIALIZED
        self.results = []

    @property
    def graph(self):
        return self.store.graph

    def add_node(self, name):
        return self.store.create_node(name)

    def add_link(self, source, dest, cost):
        return apply_event(self.store, LinkEvent(source, dest, cost))

    def create_topology(self, names, links):
        """Registers nodes and the initial links, then builds every distance table."""
        for name in names:
            self.add_node(name)
        for event in links:
            apply_event(self.store, event)
        self.initialize()
        logger.info(f"Topology created with {len(self.store)} nodes and {len(self.graph.edges())} links")

    def initialize(self):
        self.state = SimulationState.INITIALIZING
        names = self.store.names()
        for node in self.store:
            init_table(node, names)
            node.converged = False

    def apply_updates(self, events):
        """
        Applies a later batch of link changes.
        The next converge() resumes from the mutated tables and the last snapshot.
        """
        changed = 0
        for event in events:
            if apply_event(self.store, event):
                changed += 1
        logger.info(f"Applied update batch: {changed} of {len(events)} events changed the topology")
        return changed

    def ceiling(self):
        """
        Count-to-infinity ceiling: the fixed infinity when one was given, otherwise
        one link plus a simple path over the current topology.
        """
        if self.infinity is not None:
            return self.infinity
        return self.store.total_link_cost() + self.store.max_link_cost()

    def clipped(self, node):
        """
        Destinations the ceiling applies to for this router: all of them under a
        fixed infinity, otherwise only those outside its connected component.
        Reachable destinations keep their transient costs, which are bounded anyway.
        """
        if self.infinity is not None:
            return None
        return self.store.unreachable_from(node.name)

    def resume(self):
        """
        Relaxes every router once from the snapshot of the previous pass, with no
        report and no new round. When that leaves everyone converged but a mutated
        table has not been seen by its neighbors yet, those routers are woken up.
        """
        ceiling = self.ceiling()
        for node in self.store:
            relax_node(self.store, node, ceiling, self.clipped(node))
        if self.store.all_converged():
            for node in self.store:
                if not is_stable(self.store, node, ceiling, self.clipped(node)):
                    node.converged = False
        logger.debug(f"Update pass resumed: {sum(not n.converged for n in self.store)} routers unconverged")

    def run_rounds(self):
        """
        Round loop, run as a SimPy process.
        Each round snapshots every table, then relaxes every node from the snapshots.
        """
        self.state = SimulationState.ROUND_LOOP
        while not self.store.all_converged():
            t = int(self.env.now)
            snapshot_all(self.store)
            ceiling = self.ceiling()
            changed = []
            for node in self.store:
                if self.reporter is not None:
                    self.reporter.table(node, t)
                if not relax_node(self.store, node, ceiling, self.clipped(node)):
                    changed.append(node.name)
            logger.debug(f"Round t={t}: {len(changed)} routers changed {changed}")
            yield self.env.timeout(1)

        self.state = SimulationState.CONVERGED
        if self.reporter is not None:
            self.reporter.routes(self.store)

    def converge(self):
        """
        Runs synchronous rounds until no table changes.
        Tables are built first when the topology was never initialized; after a
        finished pass the loop is resumed from the previous snapshot.
        """
        if self.state is SimulationState.UNINITIALIZED:
            self.initialize()
        elif self.state is SimulationState.CONVERGED:
            self.resume()
        start = int(self.env.now)
        self.env.process(self.run_rounds())
        self.env.run()
        result = ConvergenceResult(rounds=int(self.env.now) - start, start=start, routes=self.best_routes())
        self.results.append(result)
        logger.info(f"Converged after {result.rounds} rounds (t={int(self.env.now)})")
        return result

    def best_routes(self):
        """Returns {(router, destination): (via, Cost)} from the current tables."""
        routes = {}
        for node in self.store:
            for dest, row in node.table.items():
                routes[(node.name, dest)] = get_min(row)
        return routes


def run_simulation(topology, reporter=None, infinity=None, env=None):
    """
    Runs a parsed TopologyInput end to end: the initial topology, then the
    update batch when there is one. Returns the simulation.
    """
    sim = NetworkSimulation(env if env is not None else simpy.Environment(), reporter=reporter, infinity=infinity)
    sim.create_topology(topology.nodes, topology.links)
    sim.converge()
    if topology.updates:
        sim.apply_updates(topology.updates)
        sim.converge()
    return sim
