# edoji/ruler.py
from __future__ import annotations
import json
from typing import Optional

from edoji.session import Snapshot

JI_BAR_COLOR = "#2563eb"
SELECTED_COLOR = "#111111"

def build_ruler_params(snap: Snapshot, selected_ji_index: Optional[int] = None,
                       show_edo_labels: bool = True, show_ji_labels: bool = True) -> dict:
    """Tick positions, colours and hover text for the two-row ruler."""
    domain = max(snap.period.cents, snap.edo_steps[-1] if snap.edo_steps else 0.0)
    edo = []
    for m in snap.matches:
        edo.append(dict(
            cents=m.edo_cents,
            color=m.color,
            label=str(m.step) if show_edo_labels else "",
            hover=(f"step {m.step}/{len(snap.matches) - 1}: {m.edo_cents:.2f}c"
                   f"<br>nearest JI {snap.ji_label(m.ji_index)} ({m.ji_cents:.2f}c)"
                   f"<br>deviation {m.deviation:+.2f}c ({m.band})"),
        ))
    ji = []
    for j, e in enumerate(snap.ji):
        ji.append(dict(
            cents=e.cents,
            color=SELECTED_COLOR if j == selected_ji_index else JI_BAR_COLOR,
            label=e.label if show_ji_labels else "",
            hover=f"{snap.ji_label(j)}: {e.cents:.2f}c ({e.source})",
        ))
    return dict(domain=domain, octave_cents=snap.octave_cents, edo=edo, ji=ji)

def render_html(params: dict, height: int = 320) -> str:
    """Self-contained Plotly page: EDO ticks on top, JI ticks below."""
    return f"""
<html>
<head>
  <meta charset="utf-8" />
  <script src="https://cdn.plot.ly/plotly-2.31.1.min.js"></script>
  <style>
    body {{ background:#ffffff; margin:0; }}
    #plot {{ width:100%; height:{height}px; }}
  </style>
</head>
<body>
  <div id="plot"></div>
  <script>
    const P = {json.dumps(params)};

    function ticks(items, y0, y1, textPos) {{
      const lines = items.map(it => ({{
        type:'scatter', mode:'lines', x:[it.cents, it.cents], y:[y0, y1],
        line:{{width:2, color:it.color}}, hoverinfo:'skip', showlegend:false
      }}));
      const marks = {{
        type:'scatter', mode:'markers+text',
        x: items.map(it => it.cents), y: items.map(() => textPos),
        text: items.map(it => it.label), textposition: textPos > 0 ? 'top center' : 'bottom center',
        marker:{{size:8, opacity:0}}, hovertext: items.map(it => it.hover), hoverinfo:'text',
        showlegend:false
      }};
      return lines.concat([marks]);
    }}

    const traces = ticks(P.edo, 0.05, 1.0, 1.0).concat(ticks(P.ji, -1.0, -0.05, -1.0));
    const layout = {{
      xaxis:{{ range:[-0.01 * P.domain, 1.01 * P.domain], title:'cents', zeroline:false }},
      yaxis:{{ visible:false, range:[-1.4, 1.4] }},
      margin:{{ l:20, r:20, t:30, b:40 }},
      title:`Period ${{P.octave_cents.toFixed(2)}} c: EDO (top) vs JI (bottom)`,
      hovermode:'closest',
    }};
    Plotly.newPlot(document.getElementById('plot'), traces, layout, {{displayModeBar:false}});
  </script>
</body>
</html>
"""
