from __future__ import annotations

import math
from pathlib import Path
from typing import List, Tuple

import plotly.graph_objects as go

from kepler_solver.analysis.sweep import SweepLog, SweepSample

_METRICS = ("iterations", "residual_error", "step_error")


def _grid(samples: List[SweepSample], metric: str) -> Tuple[List[float], List[float], List[List[float]]]:
    # rows = eccentricity, columns = mean anomaly
    es = sorted({s.e for s in samples})
    ms = sorted({s.M_rad for s in samples})
    e_index = {e: i for i, e in enumerate(es)}
    m_index = {m: j for j, m in enumerate(ms)}

    z: List[List[float]] = [[math.nan] * len(ms) for _ in es]
    for s in samples:
        value = float(getattr(s, metric))
        if metric != "iterations":
            # log scale; exact zeros are shown at the floor
            value = math.log10(max(value, 1e-20))
        z[e_index[s.e]][m_index[s.M_rad]] = value
    return es, ms, z


def render_convergence_heatmap(
    log: SweepLog,
    starter_name: str,
    solver_name: str,
    metric: str = "iterations",
    out_html: str = "out/convergence.html",
) -> str:
    """
    Renders a heatmap over the (M, e) grid for one starter/solver run:
      - iterations: iteration count per grid point
      - residual_error / step_error: log10 of the final error
    """
    if metric not in _METRICS:
        raise ValueError(f"metric must be one of {_METRICS}. Got: {metric}")

    key = (starter_name, solver_name)
    if key not in log.samples:
        raise ValueError(f"run '{starter_name}|{solver_name}' not found in log.samples")

    es, ms, z = _grid(log.samples[key], metric)

    fig = go.Figure()
    fig.add_trace(go.Heatmap(
        x=[math.degrees(m) for m in ms],
        y=es,
        z=z,
        colorscale="Viridis",
        colorbar=dict(title=metric if metric == "iterations" else f"log10 {metric}"),
        name=f"{starter_name}|{solver_name}",
    ))

    fig.update_layout(
        title=f"Convergence map: {solver_name} with starter {starter_name}",
        xaxis_title="Mean anomaly M (deg)",
        yaxis_title="Eccentricity e",
        margin=dict(l=60, r=20, t=40, b=50),
    )

    Path(out_html).parent.mkdir(parents=True, exist_ok=True)
    fig.write_html(out_html, auto_open=False)
    return out_html
