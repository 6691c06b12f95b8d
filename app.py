"""
Kernel Boundary Playground — Streamlit (Python) app

Run locally:
  python -m venv .venv && source .venv/bin/activate
  python -m pip install -e .
  streamlit run app.py
"""
import logging

import numpy as np
import pandas as pd
import plotly.graph_objects as go
import streamlit as st

from kernel_playground import (
    ClassificationParameters, InsufficientClassDiversity, KernelKind, classify, generate_boundary,
)
from kernel_playground.config import C_RANGE, DEGREE_RANGE, GAMMA_RANGE, GRID_RESOLUTION
from kernel_playground.datasets import DATASETS, load_dataset, to_frame
from kernel_playground.summary import breakdown_frame, decisions_frame, summarize, technical_frame

logging.basicConfig(level=logging.INFO, format="%(asctime)s - %(levelname)s - %(message)s")
logger = logging.getLogger(__name__)

st.set_page_config(page_title="Kernel Boundary Playground", layout="wide")

# ------------------------------------
# Header & quick intro
# ------------------------------------
st.title("🧠 Kernel Boundary Playground")
st.markdown(
    """
    See how a computer learns to **separate two groups** of cases. No math required.
    - Pick a **scenario** (loans, students, customers, patients).
    - Move **Flexibility** to make the computer stricter or more forgiving.
    - Move **Sensitivity** to change how far each case's influence reaches.
    - Watch the **boundary**, the **important teaching cases** and the **scores** update.
    """
)

# ------------------------------------
# Sidebar controls
# ------------------------------------
with st.sidebar:
    st.title("Boundary Lab")
    st.caption("Use the controls below. Hover labels for help.")
    ds_id = st.selectbox("Scenario", list(DATASETS.keys()), index=0,
                         format_func=lambda k: f"{DATASETS[k].icon} {DATASETS[k].name}",
                         help="Four real-world style scenarios, each shown with its own kind of boundary.")
    spec = DATASETS[ds_id]
    st.caption(spec.description)

    st.markdown("---")
    st.subheader("Adjust the learning")
    C = st.slider("Flexibility (C)", C_RANGE.min, C_RANGE.max, C_RANGE.default, C_RANGE.step,
                  help="Lower: allows some mistakes to find a simpler pattern. "
                       "Higher: tries harder to get every case right.")
    gamma = st.slider("Sensitivity (gamma)", GAMMA_RANGE.min, GAMMA_RANGE.max, GAMMA_RANGE.default,
                      GAMMA_RANGE.step,
                      help="How far each case's influence reaches. Higher = tighter, more detailed regions.")
    degree = int(DEGREE_RANGE.default)
    if spec.kernel is KernelKind.POLYNOMIAL:
        degree = st.slider("Curve complexity (degree)", int(DEGREE_RANGE.min), int(DEGREE_RANGE.max),
                           int(DEGREE_RANGE.default), int(DEGREE_RANGE.step),
                           help="1 = straight line, 2 = one hill, 3 = a wigglier curve.")

    st.markdown("---")
    st.subheader("Display")
    show_sv = st.checkbox("Show important teaching cases", value=True)
    show_margins = st.checkbox("Show safety buffer zones", value=True)
    show_surface = st.checkbox("Show score background", value=False,
                               help="Colors the plane by the raw decision score.")

# ------------------------------------
# Load data & run the engine
# ------------------------------------
points = load_dataset(ds_id)
params = ClassificationParameters(C=C, gamma=gamma, polynomial_degree=degree)

try:
    result = classify(points, params, spec.kernel)
except InsufficientClassDiversity as e:
    logger.warning("Classification skipped for %s: %s", ds_id, e)
    st.warning("Not enough data: this scenario needs cases from both groups.")
    st.stop()

boundary = generate_boundary(points, params, spec.kernel, strict_separation=spec.strict_separation)

df = to_frame(points)
pos_df = df[df["label"] == 1]
neg_df = df[df["label"] == 0]
sv_df = df.iloc[result.support_vector_indices]

# ------------------------------------
# Plotly figure
# ------------------------------------
def xy(curve):
    return [p.x for p in curve], [p.y for p in curve]


fig = go.Figure()
if show_surface:
    RES = GRID_RESOLUTION + 1
    grid = result.boundary_grid_samples
    # grid samples are x-major; Contour wants z[y][x]
    zz = np.array([s.value for s in grid]).reshape(RES, RES).T
    fig.add_trace(go.Contour(
        x=np.unique([s.x for s in grid]),
        y=np.unique([s.y for s in grid]),
        z=zz,
        contours=dict(coloring="heatmap", showlines=False),
        opacity=0.35,
        showscale=False,
        hoverinfo="skip",
    ))

if boundary.curve:
    bx, by = xy(boundary.curve)
    fig.add_trace(go.Scatter(x=bx, y=by, mode="lines", name="Decision Boundary",
                             line=dict(width=3, dash="dash", color="black")))
for label, contour in boundary.contours.items():
    if contour:
        cx, cy = xy(contour + contour[:1])
        name = spec.positive_label if label == 1 else spec.negative_label
        color = spec.positive_color if label == 1 else spec.negative_color
        fig.add_trace(go.Scatter(x=cx, y=cy, mode="lines", name=f"{name} region",
                                 line=dict(width=3, color=color)))
if show_margins and boundary.margins is not None:
    for name, curve in (("Upper Margin", boundary.margins.upper), ("Lower Margin", boundary.margins.lower)):
        mx, my = xy(curve)
        fig.add_trace(go.Scatter(x=mx, y=my, mode="lines", name=name,
                                 line=dict(width=1, dash="dot", color="gray")))

fig.add_trace(go.Scatter(x=pos_df["x"], y=pos_df["y"], mode="markers", name=spec.positive_label,
                         marker=dict(size=8, color=spec.positive_color, opacity=0.7)))
fig.add_trace(go.Scatter(x=neg_df["x"], y=neg_df["y"], mode="markers", name=spec.negative_label,
                         marker=dict(size=8, color=spec.negative_color, opacity=0.7)))
if show_sv and len(sv_df):
    fig.add_trace(go.Scatter(x=sv_df["x"], y=sv_df["y"], mode="markers", name="Important cases",
                             marker=dict(size=16, symbol="circle-open", line=dict(width=3),
                                         color=[spec.positive_color if l == 1 else spec.negative_color
                                                for l in sv_df["label"]])))

pad_x = (df["x"].max() - df["x"].min()) * 0.1
pad_y = (df["y"].max() - df["y"].min()) * 0.1
fig.update_layout(
    title=f"{spec.icon} {spec.name} — {spec.kernel.value} kernel",
    xaxis_title=spec.x_label,
    yaxis_title=spec.y_label,
    xaxis=dict(range=[df["x"].min() - pad_x, df["x"].max() + pad_x]),
    yaxis=dict(range=[df["y"].min() - pad_y, df["y"].max() + pad_y]),
    margin=dict(l=0, r=0, t=40, b=0),
    legend=dict(orientation="h", yanchor="bottom", y=1.02, xanchor="right", x=1),
    height=640,
)

# ------------------------------------
# Tabs: Visualization | How it decided | About the data
# ------------------------------------
tab1, tab2, tab3 = st.tabs(["Live Visualization", "How the Computer Decided", "About the Data"])
cards = summarize(spec, result)

with tab1:
    st.markdown("**What you're seeing:** each dot is one case. The dashed line is where the computer "
                "switches its answer. Ringed dots are the important teaching cases near that line.")
    left, right = st.columns([2, 1])
    with left:
        st.plotly_chart(fig, use_container_width=True, config={"displayModeBar": False})
    with right:
        for key in ("accuracy", "precision", "recall"):
            st.metric(cards[key]["title"], cards[key]["value"], help=cards[key]["detail"])
        st.caption(cards["support_vectors"])
        st.markdown("---")
        st.markdown(f"**Horizontal:** {spec.x_explanation}  \n**Vertical:** {spec.y_explanation}")

with tab2:
    st.info(f"💡 {cards['explanation']}")
    st.subheader("Decision Breakdown")
    st.dataframe(breakdown_frame(spec, result), use_container_width=True)
    with st.expander("Technical view"):
        st.dataframe(technical_frame(points, result).style.format({"Value": "{:.4f}"}), use_container_width=True)
        idx = result.support_vector_indices
        st.caption(f"Support vector indices: {idx[:10]}{' ...' if len(idx) > 10 else ''}")

with tab3:
    for title, text in spec.overview.items():
        st.markdown(f"**{title}:** {text}")
    counts = pd.Series({spec.positive_label: len(pos_df), spec.negative_label: len(neg_df)})
    st.bar_chart(counts)

# ------------------------------------
# Download current decisions (for reproducibility)
# ------------------------------------
@st.cache_data
def to_csv_bytes(frame):
    return frame.to_csv(index=False).encode()


csv_bytes = to_csv_bytes(decisions_frame(points, result))
st.download_button("Download decisions (CSV)", data=csv_bytes,
                   file_name=f"{spec.id}_decisions.csv", mime="text/csv")

# ------------------------------------
# Footer
# ------------------------------------
st.caption("Kernel Boundary Playground · Streamlit · ✓ No math required · ✓ Interactive learning")
