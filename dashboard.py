import io

import pandas as pd
import streamlit as st

from network_sim import run_simulation
from reporter import Reporter, routes_frame
from routing import compare_with_reference
from topology import RoutingError
from topology_input import read_topology
from visualization import visualize_network

SAMPLE_TOPOLOGY = """X
Y
Z

X Z 7
X Y 2
Y Z 1

X Z 1
Y Z -1
"""


st.set_page_config(page_title="Distance-Vector Simulator", layout="wide")
st.title("Distance-Vector Routing Simulator")

if 'topology_text' not in st.session_state:
    st.session_state.topology_text = SAMPLE_TOPOLOGY

# Sidebar Setup
st.sidebar.header("Simulation Controls")
use_fixed_infinity = st.sidebar.checkbox("Fixed infinity ceiling", value=False)
infinity = None
if use_fixed_infinity:
    infinity = int(st.sidebar.number_input("Infinity", min_value=1, max_value=10000, value=16))
compact = st.sidebar.checkbox("Show best cost only", value=False)

text = st.text_area(
    "Topology (routers, blank line, links, blank line, optional updates)",
    key="topology_text",
    height=240,
)

try:
    reporter = Reporter(io.StringIO(), compact=compact)
    sim = run_simulation(read_topology(text.splitlines()), reporter=reporter, infinity=infinity)
except RoutingError as e:
    st.error(f"Invalid topology: {e}")
    st.stop()

# Summary metrics
col1, col2, col3 = st.columns(3)
col1.metric("Routers", len(sim.store))
col2.metric("Links", len(sim.graph.edges()))
col3.metric("Rounds", sum(r.rounds for r in sim.results))

tab_routes, tab_rounds, tab_graph = st.tabs(["Routes", "Round Tables", "Topology"])

with tab_routes:
    st.subheader("Converged Routes")
    frame = routes_frame(sim.store)
    st.dataframe(frame)

    mismatches = compare_with_reference(sim.store)
    if mismatches:
        st.warning("Distance-vector costs differ from Dijkstra:")
        st.dataframe(pd.DataFrame(mismatches, columns=["router", "destination", "distance_vector", "reference"]))
    else:
        st.success("All routes match the Dijkstra reference.")

with tab_rounds:
    rounds = sorted({t for t, _, _ in reporter.history if t is not None})
    if rounds:
        t = st.selectbox("Round", rounds)
        for round_t, _, block in reporter.history:
            if round_t == t:
                st.code(block, language=None)
    else:
        st.info("No rounds were needed.")

with tab_graph:
    source = st.selectbox("Highlight routes from", ["(none)"] + sim.store.names())
    fig = visualize_network(sim.store, source=None if source == "(none)" else source, return_fig=True)
    st.pyplot(fig)
