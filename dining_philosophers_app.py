# dining_philosophers_app.py
"""
Dining Philosophers simulation with Streamlit visualization.

Features:
- Choose number of philosophers (1..12).
- Forks are always picked up lowest id first (resource hierarchy), so the
  table never deadlocks.
- Timescale slider controls thinking/eating durations (ms per random unit)
- Seed base: fixed for reproducible timing, otherwise a fresh one per run
- Start / Stop controls
- Matplotlib visualization drawing philosophers (states) and forks (free/in-use)

Run with: streamlit run dining_philosophers_app.py
"""

import time

import matplotlib.pyplot as plt
import streamlit as st

from philosophers.errors import ConfigurationError
from philosophers.observers import StateBoard
from philosophers.render import draw_table
from philosophers.simulation import DiningSimulation, SimulationConfig, fresh_seed_base

st.set_page_config(page_title="Dining Philosophers Simulator", layout="wide")
st.title("Dining Philosophers: Simulation & Visualization")

# persistent variables in session_state
if "sim" not in st.session_state:
    st.session_state.sim = None
    st.session_state.board = None

# -------------------
# Controls
# -------------------

with st.sidebar:
    st.header("Controls")
    n = st.slider("Number of philosophers", min_value=1, max_value=12, value=5, step=1)
    timescale = st.slider("Timescale (ms per unit)", min_value=10, max_value=1000, value=200, step=10)
    use_seed = st.checkbox("Fixed seed base", value=False)
    seed = st.number_input("Seed base", min_value=0, value=0, step=1, disabled=not use_seed)
    start_btn = st.button("Start")
    stop_btn = st.button("Stop / Reset")


def _new_simulation():
    config = SimulationConfig(
        n_philosophers=n,
        timescale=timescale,
        seed_base=int(seed) if use_seed else fresh_seed_base(),
    )
    board = StateBoard(n)
    return DiningSimulation(config, board), board


if start_btn:
    # restart simulation fresh
    if st.session_state.sim is not None:
        st.session_state.sim.stop()
    sim, board = _new_simulation()
    try:
        sim.start()
    except ConfigurationError as exc:
        st.error(str(exc))
    else:
        st.session_state.sim, st.session_state.board = sim, board

if stop_btn and st.session_state.sim is not None:
    st.session_state.sim.stop()
    st.session_state.sim = None
    st.session_state.board = None

sim = st.session_state.sim
board = st.session_state.board

# -------------------
# Main area
# -------------------

col1, col2 = st.columns([2, 1])

if sim is None:
    with col1:
        st.info("Pick the settings in the sidebar and press Start.")
else:
    philosophers = board.snapshot()
    fork_taken_by = sim.forks.holders()

    with col1:
        st.subheader("Live visualization")
        fig = draw_table(philosophers, fork_taken_by, title=f"Timescale: {sim.config.timescale}ms")
        st.pyplot(fig)
        plt.close(fig)
        st.caption(f"Seed base: {sim.config.seed_base}")

    with col2:
        st.subheader("Philosopher states")
        now = time.time()
        st.table([
            {
                "Philosopher": f"P{p.idx}",
                "State": p.state.value,
                "In state (s)": round(now - p.last_state_change, 1),
                "Times eaten": p.times_eaten,
            }
            for p in philosophers
        ])
        st.markdown("**Fork ownership**")
        for i, owner in enumerate(fork_taken_by):
            st.write(f"Fork {i} : {'free' if owner is None else f'held by P{owner}'}")

    # redraw every ~0.5s while the philosophers are at the table
    if sim.running:
        time.sleep(0.5)
        st.rerun()
