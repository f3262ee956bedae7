"""
Command-line entry point: reads a topology description, runs distance-vector
rounds to convergence and prints every round table and the final routes.
"""

import argparse
import logging
import sys

import simpy

from network_sim import NetworkSimulation
from reporter import Reporter, routes_frame
from routing import compare_with_reference
from topology import RoutingError
from topology_input import read_topology
from utils import setup_logger
from visualization import visualize_network

logger = setup_logger("Main")


def parse_args(argv):
    parser = argparse.ArgumentParser(
        description="Synchronous distance-vector routing simulation.",
    )
    parser.add_argument("input", nargs="?", help="Topology file (defaults to stdin)")
    parser.add_argument("--log-level", default="warning", choices=["debug", "info", "warning", "error"])
    parser.add_argument("--infinity", type=int, default=None,
                        help="Fixed count-to-infinity ceiling (default: derived from link costs)")
    parser.add_argument("--compact", action="store_true", help="Print only the best cost per table row")
    parser.add_argument("--csv", help="Write the final routes to this CSV file")
    parser.add_argument("--plot", help="Save a topology drawing to this PNG file")
    parser.add_argument("--source", help="Router whose routes are highlighted in --plot")
    parser.add_argument("--verify", action="store_true",
                        help="Cross-check converged costs against Dijkstra")
    return parser.parse_args(argv)


def setup_logging(level_name):
    level = getattr(logging, level_name.upper(), logging.WARNING)
    for name in ("NetworkSim", "Main"):
        setup_logger(name, level)


def read_input(path):
    if path is None:
        return read_topology(sys.stdin)
    with open(path, "r", encoding="utf-8") as stream:
        return read_topology(stream)


def verify(sim):
    mismatches = compare_with_reference(sim.store)
    for router, dest, dv_cost, ref_cost in mismatches:
        logger.error(f"router {router}: {dest} distance-vector={dv_cost} reference={ref_cost}")
    return not mismatches


def main(argv=None):
    args = parse_args(sys.argv[1:] if argv is None else argv)
    setup_logging(args.log_level)

    try:
        topology = read_input(args.input)
    except (OSError, RoutingError) as e:
        logger.error(f"Cannot read topology: {e}")
        return 1

    env = simpy.Environment()
    sim = NetworkSimulation(env, reporter=Reporter(sys.stdout, compact=args.compact), infinity=args.infinity)

    try:
        sim.create_topology(topology.nodes, topology.links)
    except RoutingError as e:
        logger.error(f"Invalid topology: {e}")
        return 1
    sim.converge()
    ok = not args.verify or verify(sim)

    if topology.updates:
        try:
            sim.apply_updates(topology.updates)
        except RoutingError as e:
            logger.error(f"Invalid topology update: {e}")
            return 1
        sim.converge()
        ok = (not args.verify or verify(sim)) and ok

    if args.csv:
        routes_frame(sim.store).to_csv(args.csv, index=False)
        logger.info(f"Routes written to {args.csv}")

    if args.plot:
        if args.source is not None and args.source not in sim.store:
            logger.error(f"Cannot plot routes: unknown node {args.source}")
            return 1
        visualize_network(sim.store, source=args.source, filename=args.plot)

    return 0 if ok else 1


if __name__ == "__main__":
    sys.exit(main())
