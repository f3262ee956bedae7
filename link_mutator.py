from cost import INFINITE, UNSET, finite
from topology import MalformedLine
from utils import setup_logger

logger = setup_logger()

REMOVE = -1


def apply_link(source, dest_name, cost):
    """
    Applies one direction of a link event to the source node.
    Returns True when the node's links or table changed.
    """
    if dest_name in source.links:
        if cost == REMOVE:
            del source.links[dest_name]
            # dest is no longer a via-candidate; transitive costs settle in later rounds
            for row in source.table.values():
                row[dest_name] = UNSET
            return True
        if source.links[dest_name] == cost:
            return False
        source.links[dest_name] = cost
        source.table.setdefault(dest_name, {})[dest_name] = finite(cost)
        return True

    if cost == REMOVE:
        return False

    source.links[dest_name] = cost
    for row in source.table.values():
        row[dest_name] = INFINITE
    source.table.setdefault(dest_name, {})[dest_name] = finite(cost)
    return True


def apply_event(store, event):
    """
    Applies a link event to both endpoints.

    Both names are resolved before anything is touched, so an UnknownNode
    leaves the topology unchanged.
    """
    source = store.lookup(event.source)
    dest = store.lookup(event.dest)
    if source is dest:
        raise MalformedLine(f"{event.source} {event.dest} {event.cost}", "self link")
    cost = event.cost
    if cost != REMOVE and (isinstance(cost, bool) or not isinstance(cost, int) or cost <= 0):
        raise MalformedLine(f"{event.source} {event.dest} {cost}", "cost must be -1 or a positive integer")

    changed_source = apply_link(source, dest.name, cost)
    changed_dest = apply_link(dest, source.name, cost)

    if cost == REMOVE:
        if store.graph.has_edge(source.name, dest.name):
            store.graph.remove_edge(source.name, dest.name)
            logger.info(f"Removed link {source.name}<->{dest.name}")
    elif changed_source or changed_dest:
        store.graph.add_edge(source.name, dest.name, weight=cost)
        logger.info(f"Link {source.name}<->{dest.name} cost {cost}")

    if changed_source:
        source.converged = False
    if changed_dest:
        dest.converged = False
    return changed_source or changed_dest
