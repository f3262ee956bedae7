from collections import namedtuple

from topology import MalformedLine

LinkEvent = namedtuple("LinkEvent", ["source", "dest", "cost"])
TopologyInput = namedtuple("TopologyInput", ["nodes", "links", "updates"])


def parse_link_line(line, lineno=None):
    """
    Parses '<source> <dest> <cost>' into a LinkEvent.
    A cost of -1 removes the link; any other cost must be a positive integer.
    """
    fields = line.split()
    if len(fields) != 3:
        raise MalformedLine(line, "expected '<source> <dest> <cost>'", lineno)
    source, dest, raw_cost = fields
    try:
        cost = int(raw_cost)
    except ValueError:
        raise MalformedLine(line, "cost is not an integer", lineno) from None
    if cost != -1 and cost <= 0:
        raise MalformedLine(line, "cost must be -1 or a positive integer", lineno)
    if source == dest:
        raise MalformedLine(line, "self link", lineno)
    return LinkEvent(source, dest, cost)


def _section(numbered):
    # stops at the first empty line or at end of input; whitespace-only lines are content
    for lineno, raw in numbered:
        if not raw.rstrip("\r\n"):
            return
        yield lineno, raw.strip()


def read_topology(lines):
    """
    Reads the three blank-line separated sections of a topology description:
    node names, initial links, and an optional batch of link updates.
    """
    numbered = enumerate(lines, 1)

    nodes = []
    for lineno, line in _section(numbered):
        if len(line.split()) != 1:
            raise MalformedLine(line, "node name must be a single token", lineno)
        nodes.append(line)

    links = [parse_link_line(line, lineno) for lineno, line in _section(numbered)]
    updates = [parse_link_line(line, lineno) for lineno, line in _section(numbered)]
    return TopologyInput(nodes, links, updates)
