"""SSB Real-Time Monitor — Streamlit dashboard.

Run with:
    streamlit run src/ssb_monitor/dashboard/app.py

Layout: sidebar sliders (temperature, salt, depth of discharge) and a
start/stop button → main area with metric cards, a SoH trend chart and an
environment chart. The page is a thin shell: it supplies inputs to the
engine and draws whatever the engine exposes.
"""

from __future__ import annotations

import plotly.graph_objects as go
import streamlit as st

from ssb_monitor.config import EnvironmentalInputs, MonitorConfig
from ssb_monitor.engine.simulation import SimulationEngine
from ssb_monitor.log import setup_logging
from ssb_monitor.models.results import TickResult

_CFG = MonitorConfig()
_RANGES = _CFG.ranges

# ---------------------------------------------------------------------------
# Page config
# ---------------------------------------------------------------------------
st.set_page_config(page_title="SSB Real-Time Monitor", page_icon="🔋", layout="wide")


# ---------------------------------------------------------------------------
# Session-scoped engine (one cell per browser session)
# ---------------------------------------------------------------------------

def _read_sliders() -> EnvironmentalInputs:
    """Input accessor handed to the engine."""
    return EnvironmentalInputs(
        temperature_c=st.session_state["temperature_c"],
        salt_ppm=st.session_state["salt_ppm"],
        depth_of_discharge_pct=st.session_state["depth_of_discharge_pct"],
    )


if "engine" not in st.session_state:
    setup_logging()
    st.session_state["engine"] = SimulationEngine.from_config(_CFG, input_accessor=_read_sliders)

engine: SimulationEngine = st.session_state["engine"]


def _card(icon: str, label: str, value: str, accent: str = "#10b981") -> str:
    """Return HTML for a metric card with a colored top accent."""
    return f"""
    <div style="
        background: linear-gradient(135deg, rgba(30,34,44,0.95), rgba(22,26,35,0.98));
        border: 1px solid rgba(255,255,255,0.05);
        border-top: 3px solid {accent};
        border-radius: 8px;
        padding: 14px 16px 12px;
        text-align: center;
    ">
        <div style="font-size: 1.3rem;">{icon}</div>
        <div style="font-size: 0.7rem; color: rgba(255,255,255,0.5); text-transform: uppercase;">{label}</div>
        <div style="font-size: 1.35rem; font-weight: 700;">{value}</div>
    </div>
    """


# ---------------------------------------------------------------------------
# Sidebar — environmental controls
# ---------------------------------------------------------------------------
with st.sidebar:
    st.header("Environment")
    for key, label, fmt in (
        ("temperature_c", "Temperature (°C)", "%.1f°C"),
        ("salt_ppm", "Salt concentration (ppm)", "%d ppm"),
        ("depth_of_discharge_pct", "Depth of discharge (%)", "%d%%"),
    ):
        rng = getattr(_RANGES, key)
        st.slider(
            label,
            min_value=float(rng.min_value),
            max_value=float(rng.max_value),
            value=float(getattr(_CFG.initial_inputs, key)),
            step=float(rng.step),
            format=fmt,
            key=key,
        )

    if engine.is_running:
        if st.button("⏹️ Stop Simulation", use_container_width=True):
            engine.stop()
            st.rerun()
    else:
        if st.button("🚀 Start Real-time", type="primary", use_container_width=True):
            engine.start()
            st.rerun()


st.title("🔋 Solid-State Battery Degradation Monitor")


# ---------------------------------------------------------------------------
# Live area — the fragment re-runs every tick interval and acts as the driver
# ---------------------------------------------------------------------------

def _render_metrics(result: TickResult | None) -> None:
    state = engine.state
    cols = st.columns(6)
    if result is None:
        values = ["—"] * 4
    else:
        m = result.metrics
        values = [
            f"{m.degradation_rate_pct:.3f}%",
            f"{m.internal_resistance_mohm} mΩ",
            f"{m.voltage_variance_v:.3f}V",
            f"{m.projected_soh_3y_pct:.0f}%",
        ]
    cards = [
        ("🔋", "SoH", f"{state.state_of_health_pct:.1f}%", "#10b981"),
        ("🔄", "Cycle", f"{state.cycle_count}", "#3b82f6"),
        ("📉", "Degradation / cycle", values[0], "#ef4444"),
        ("⚡", "Internal resistance", values[1], "#f59e0b"),
        ("〰️", "Voltage variance", values[2], "#8b5cf6"),
        ("📅", "3 years", values[3], "#14b8a6"),
    ]
    for col, (icon, label, value, accent) in zip(cols, cards):
        col.markdown(_card(icon, label, value, accent), unsafe_allow_html=True)
    st.caption("🟢 LIVE" if state.running else "🔴 STOPPED")


def _render_charts() -> None:
    history = engine.history
    labels = history.labels()

    soh_col, env_col = st.columns(2)

    fig_soh = go.Figure()
    fig_soh.add_trace(go.Scatter(
        x=labels, y=history.series("state_of_health_pct"), name="SoH (%)",
        line=dict(color="#10b981", width=3, shape="spline"), fill="tozeroy",
        fillcolor="rgba(16,185,129,0.2)",
    ))
    fig_soh.update_layout(
        height=300, margin=dict(l=10, r=10, t=30, b=10), showlegend=False,
        yaxis=dict(range=[_CFG.engine.soh_floor_pct, _CFG.engine.initial_soh_pct], title="SoH (%)"),
        title="State of Health",
    )
    soh_col.plotly_chart(fig_soh, use_container_width=True)

    fig_env = go.Figure()
    fig_env.add_trace(go.Scatter(x=labels, y=history.series("temperature_c"), name="Temp (°C)",
                                 line=dict(color="#ef4444")))
    fig_env.add_trace(go.Scatter(x=labels, y=history.series("salt_ppm") / 100, name="Salt (ppm/100)",
                                 line=dict(color="#3b82f6"), yaxis="y2"))
    fig_env.add_trace(go.Scatter(x=labels, y=history.series("depth_of_discharge_pct"), name="DoD (%)",
                                 line=dict(color="#f59e0b")))
    fig_env.update_layout(
        height=300, margin=dict(l=10, r=10, t=30, b=10), title="Environment",
        yaxis=dict(title="°C / %"),
        yaxis2=dict(title="ppm/100", overlaying="y", side="right", showgrid=False),
    )
    env_col.plotly_chart(fig_env, use_container_width=True)


@st.fragment(run_every=_CFG.engine.tick_interval_s if engine.is_running else None)
def _live() -> None:
    result = engine.tick() if engine.is_running else engine.last_result
    _render_metrics(result)
    _render_charts()


_live()
