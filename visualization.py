import networkx as nx
import matplotlib.pyplot as plt
import matplotlib.patches as mpatches

from routing import DistanceVectorRouting
from utils import setup_logger

logger = setup_logger()


def visualize_network(store, source=None, filename="network_topology.png", return_fig=False):
    """
    Visualizes the topology and, optionally, the distance-vector routes of one router.
    - Link costs are drawn as edge labels.
    - With `source`, the edges of every converged route from it are highlighted.
    - Nodes the source cannot reach are drawn red.

    Args:
        store: TopologyStore holding the converged tables
        source: router whose routes are highlighted
        return_fig: return the Figure instead of saving it to `filename`
    """
    graph = store.graph
    fig = plt.figure(figsize=(10, 8))

    pos = nx.spring_layout(graph, seed=42) if len(graph) else {}

    # 1. Node Coloring
    routing = DistanceVectorRouting(store)
    unreachable = set()
    route_edges = set()
    if source is not None:
        for dest in store.names():
            if dest == source:
                continue
            path = routing.find_path(source, dest)
            if path is None:
                unreachable.add(dest)
                continue
            route_edges.update(tuple(sorted(edge)) for edge in zip(path, path[1:]))

    node_colors = []
    for node in graph.nodes():
        if node == source:
            node_colors.append('#4488FF')  # Blue
        elif node in unreachable:
            node_colors.append('#FF4444')  # Red
        else:
            node_colors.append('#44FF44')  # Green

    nx.draw_networkx_nodes(graph, pos, node_color=node_colors, node_size=600, edgecolors='black')
    nx.draw_networkx_edges(graph, pos, alpha=0.3, edge_color='gray', style='dashed')

    legend_patches = [mpatches.Patch(color='#44FF44', label='Reachable Router')]

    # 2. Route Highlighting
    if source is not None:
        legend_patches.insert(0, mpatches.Patch(color='#4488FF', label=f'Source {source}'))
        legend_patches.append(mpatches.Patch(color='#FF4444', label='Unreachable'))
        if route_edges:
            nx.draw_networkx_edges(
                graph, pos,
                edgelist=sorted(route_edges),
                edge_color='purple',
                width=3,
                alpha=0.8,
            )
            legend_patches.append(mpatches.Patch(color='purple', label='Distance-Vector Routes'))

    nx.draw_networkx_labels(graph, pos, font_weight='bold')
    edge_labels = nx.get_edge_attributes(graph, 'weight')
    nx.draw_networkx_edge_labels(graph, pos, edge_labels=edge_labels, font_size=8)

    plt.legend(handles=legend_patches, loc='upper left', bbox_to_anchor=(1, 1))
    plt.title("Network Topology & Distance-Vector Routes")
    plt.axis('off')
    plt.tight_layout()

    if return_fig:
        plt.close(fig)
        return fig

    try:
        plt.savefig(filename)
        logger.info(f"Network visualization saved to {filename}")
    finally:
        plt.close()
