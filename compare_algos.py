import random
import logging

import matplotlib.pyplot as plt
import networkx as nx
import numpy as np
import simpy

from network_sim import NetworkSimulation
from routing import compare_with_reference
from topology_input import LinkEvent
from utils import setup_logger

logger = setup_logger("Main")

# Disable inner logs for cleaner output
logging.getLogger("NetworkSim").setLevel(logging.WARNING)


def random_topology(num_nodes=10, connectivity=0.3, seed=42, max_cost=10):
    """
    Random undirected topology as (names, link events).
    Routers are named R0..R{n-1}; link costs are uniform in 1..max_cost.
    """
    rng = random.Random(seed)
    graph = nx.gnp_random_graph(num_nodes, connectivity, seed=seed)
    names = [f"R{n}" for n in graph.nodes()]
    links = [LinkEvent(f"R{u}", f"R{v}", rng.randint(1, max_cost)) for u, v in graph.edges()]
    return names, links


def run_scenario(num_nodes=10, connectivity=0.3, seed=42, removals=0):
    """
    Converges one random topology, optionally removes `removals` random links
    and converges again. Every pass is checked against Dijkstra.
    """
    names, links = random_topology(num_nodes, connectivity, seed)
    env = simpy.Environment()
    sim = NetworkSimulation(env)
    sim.create_topology(names, links)

    first = sim.converge()
    stats = {
        'nodes': num_nodes,
        'links': len(links),
        'rounds': first.rounds,
        'mismatches': len(compare_with_reference(sim.store)),
        'update_rounds': 0,
    }

    if removals and links:
        rng = random.Random(seed + 1)
        removed = rng.sample(links, min(removals, len(links)))
        sim.apply_updates([LinkEvent(e.source, e.dest, -1) for e in removed])
        second = sim.converge()
        stats['update_rounds'] = second.rounds
        stats['mismatches'] += len(compare_with_reference(sim.store))

    return stats


def compare(sizes=(5, 10, 15, 20, 25), connectivity=0.3, trials=5, removals=1):
    results = {}
    for size in sizes:
        runs = [run_scenario(size, connectivity, seed, removals) for seed in range(trials)]
        results[size] = {
            'rounds': np.mean([r['rounds'] for r in runs]),
            'update_rounds': np.mean([r['update_rounds'] for r in runs]),
            'mismatches': sum(r['mismatches'] for r in runs),
        }
        logger.info(f"{size} nodes: {results[size]}")
    return results


def plot_results(results, filename="dv_convergence.png"):
    sizes = sorted(results)
    rounds = [results[s]['rounds'] for s in sizes]
    update_rounds = [results[s]['update_rounds'] for s in sizes]

    x = np.arange(len(sizes))
    width = 0.35

    fig, ax = plt.subplots(figsize=(8, 5))
    ax.bar(x - width / 2, rounds, width, label='Initial convergence')
    ax.bar(x + width / 2, update_rounds, width, label='After link removal')
    ax.set_xticks(x)
    ax.set_xticklabels([str(s) for s in sizes])
    ax.set_xlabel('Routers')
    ax.set_ylabel('Mean rounds')
    ax.set_title('Distance-Vector Convergence Rounds')
    ax.legend()
    fig.tight_layout()
    fig.savefig(filename)
    plt.close(fig)
    logger.info(f"Plot saved to {filename}")


if __name__ == "__main__":
    results = compare()
    print(f"{'Routers':>8} {'Rounds':>8} {'Update':>8} {'Mismatches':>11}")
    for size, row in sorted(results.items()):
        print(f"{size:>8} {row['rounds']:>8.1f} {row['update_rounds']:>8.1f} {row['mismatches']:>11}")
    plot_results(results)
