# app.py
from __future__ import annotations
import json
from dataclasses import replace
import streamlit as st

from edoji.config import SCHEMES, DetuneBounds, OptimizerConfig, ProximityParams, SchemeParams
from edoji.logs import setup_logging
from edoji.ruler import build_ruler_params, render_html
from edoji.session import SessionState

# ─────────────────────────── Streamlit UI ───────────────────────────
st.set_page_config(page_title="EDO vs JI Explorer", layout="wide")
st.title("🎼 EDO vs JI Explorer")

if "session" not in st.session_state:
    setup_logging()
    st.session_state.session = SessionState()
    st.session_state.detune = 0.0
session: SessionState = st.session_state.session

with st.sidebar:
    st.header("Tuning")
    edo          = st.number_input("EDO", 1, 311, 12, step=1)
    period_text  = st.text_input("Period (n/d or cents)", "2/1")
    # a new EDO starts from the nominal period
    if int(edo) != session.inputs.edo:
        session.set_edo(int(edo))
        st.session_state.detune = session.inputs.detune
    detune       = st.slider("Period detune (¢)", -50.0, 50.0, step=0.01, key="detune")

    st.header("JI reference")
    odd_limit    = st.number_input("Odd limit", 0, 99, 7, step=2,
                                   help="Even values use the odd number below; 0 uses a minimal 1/1, 5/4, 3/2 set.")
    prime_limit  = st.number_input("Prime limit (0 = off)", 0, 97, 0, step=1)
    manual_text  = st.text_area("Manual intervals", "",
                                help="Ratios (7/4), cents with suffix (702c) or bare cents (386.3).")
    show_edo_lbl = st.checkbox("EDO step labels", True)
    show_ji_lbl  = st.checkbox("JI fraction labels", True)

    st.header("Detune optimizer")
    scheme       = st.selectbox("Weighting", list(SCHEMES), index=0)
    symmetric    = st.checkbox("Symmetric (also match JI → EDO)", False)
    within       = st.number_input("Proximity window (¢)", 1.0, 100.0, 15.0, step=1.0)
    bonus5       = st.number_input("Bonus ≤5¢", 0.0, 5.0, 0.5, step=0.1)
    bonus1       = st.number_input("Bonus ≤1¢", 0.0, 5.0, 0.5, step=0.1)
    power        = st.number_input("Scheme power", 0.0, 4.0, 1.0, step=0.1)
    odd_power    = st.number_input("Mixed: odd power", 0.0, 4.0, 0.6, step=0.1)
    prime_power  = st.number_input("Mixed: prime power", 0.0, 4.0, 0.8, step=0.1)
    half_step    = st.checkbox("Limit search to ± half a step", False)

session.inputs = replace(session.inputs, odd_limit=int(odd_limit), prime_limit=int(prime_limit),
                         manual_text=manual_text, period_text=period_text)
snap = session.set_detune(detune)

bounds = DetuneBounds.half_step(int(edo), snap.period.cents) if half_step else DetuneBounds()
session.optimizer = OptimizerConfig(
    scheme=scheme, symmetric=symmetric,
    proximity=ProximityParams(within=within, bonus5=bonus5, bonus1=bonus1),
    weights=SchemeParams(power=power, odd_power=odd_power, prime_power=prime_power),
    bounds=bounds,
)

def _apply_detune(value: float):
    st.session_state.detune = max(-50.0, min(50.0, round(float(value), 2)))

def _optimize():
    result = st.session_state.session.optimize()
    st.session_state.last_result = result
    if result.ok:
        _apply_detune(result.detune)

def _match_selected():
    target = st.session_state.session.match_selected()
    if target is None:
        return
    if abs(target) > 50.0:
        st.session_state.notice = f"Required detune {target:+.3f}¢ is outside ±50¢; clamped."
    _apply_detune(target)

# ─────────────────────────── Main flow ───────────────────────────
st.markdown(f"**Period:** {snap.octave_cents:.2f}¢ ({snap.period.cents:.2f}¢ nominal {detune:+.2f}¢) "
            f"• **EDO steps:** {len(snap.edo_steps) - 1} • **JI intervals:** {len(snap.ji)}")
if "notice" in st.session_state:
    st.warning(st.session_state.pop("notice"))

col_opt, col_sel = st.columns(2)
with col_opt:
    st.button("Optimize detune", on_click=_optimize)
    if "last_result" in st.session_state:
        r = st.session_state.last_result
        if r.ok:
            st.caption(f"Last optimum: {r.detune:+.2f}¢ (score {r.score:.3f})")
        else:
            st.caption("Empty JI reference set; no detune suggested.")

with col_sel:
    labels = [f"{snap.ji_label(j)} ({e.cents:.2f}¢)" for j, e in enumerate(snap.ji)]
    pick = st.selectbox("Selected JI", range(len(labels)), format_func=lambda j: labels[j])
    session.select_ji(snap.ji[pick].cents, tolerance=0.0)
    st.button("Match nearest EDO step", on_click=_match_selected)

params = build_ruler_params(snap, session.selected_ji_index, show_edo_lbl, show_ji_lbl)
st.components.v1.html(render_html(params), height=360)

probe = st.slider("Inspect position (¢)", 0.0, float(snap.period.cents), 700.0 if snap.period.cents >= 700 else 0.0)
info = snap.inspect(probe)
if "ji_cents" in info:
    st.markdown(f"Nearest EDO: **{info['edo_cents']:.2f}¢** (step {info['edo_step']}/{info['edo_count']}) • "
                f"Nearest JI: **{info['ji_cents']:.2f}¢** ({info['ji_label']}) • "
                f"Deviation **{info['deviation']:+.2f}¢**")

st.subheader("Step deviations")
st.dataframe([{"step": m.step, "EDO ¢": round(m.edo_cents, 3), "JI": snap.ji_label(m.ji_index),
               "JI ¢": round(m.ji_cents, 3), "deviation ¢": round(m.deviation, 3), "band": m.band}
              for m in snap.matches], use_container_width=True)

st.download_button(
    "⬇️ Export session JSON",
    file_name="edo_ji_session.json",
    mime="application/json",
    data=json.dumps({"snapshot": snap.to_dict(), "optimizer": session.optimizer.to_dict()}, indent=2)
)
