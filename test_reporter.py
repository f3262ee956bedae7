import io

import numpy as np
import simpy

from network_sim import NetworkSimulation
from reporter import Reporter, cost_matrix, render_routes, render_table, routes_frame
from topology_input import LinkEvent


def line_sim():
    sim = NetworkSimulation(simpy.Environment())
    sim.create_topology(["A", "B", "C", "D"], [LinkEvent("A", "B", 1), LinkEvent("B", "C", 1)])
    return sim


def test_render_initial_table():
    sim = line_sim()
    text = render_table(sim.store.lookup("A"), 0)
    assert text == (
        "router A at t=0\n"
        "\tB\tC\tD\n"
        "B\t1\t-\t-\n"
        "C\tINF\t-\t-\n"
        "D\tINF\t-\t-\n"
        "\n"
    )


def test_render_compact_table():
    sim = line_sim()
    sim.converge()
    text = render_table(sim.store.lookup("A"), 3, compact=True)
    assert text == "router A at t=3\n\tB\tC\tD\nB\t1\nC\t2\nD\tINF\n\n"


def test_render_routes():
    sim = line_sim()
    sim.converge()
    text = render_routes(sim.store)
    lines = text.splitlines()
    assert lines[0] == "router A: B is 1 routing through B"
    assert lines[1] == "router A: C is 2 routing through B"
    assert lines[2] == "router A: D is unreachable"
    assert "router D: A is unreachable" in lines
    assert text.endswith("\n\n")


def test_reporter_keeps_history():
    stream = io.StringIO()
    reporter = Reporter(stream)
    sim = NetworkSimulation(simpy.Environment(), reporter=reporter)
    sim.create_topology(["A", "B"], [LinkEvent("A", "B", 5)])
    sim.converge()

    assert [(t, name) for t, name, _ in reporter.history] == [(0, "A"), (0, "B"), (None, None)]
    assert stream.getvalue() == "".join(block for _, _, block in reporter.history)


def test_routes_frame():
    sim = line_sim()
    sim.converge()
    frame = routes_frame(sim.store)
    assert list(frame.columns) == ["router", "destination", "cost", "via"]
    assert len(frame) == 12
    row = frame[(frame.router == "C") & (frame.destination == "A")].iloc[0]
    assert row.cost == 2 and row.via == "B"
    unreachable = frame[frame.destination == "D"]
    assert unreachable.cost.isna().all()


def test_cost_matrix():
    sim = line_sim()
    sim.converge()
    matrix = cost_matrix(sim.store)
    assert matrix.shape == (4, 4)
    assert matrix[0, 2] == 2
    assert matrix[2, 0] == 2
    assert np.isinf(matrix[3, 0])
    assert (np.diag(matrix) == 0).all()
    assert (matrix == matrix.T).all()
