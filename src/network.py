# src/network.py
"""
Signed affiliation network of tribes: alliances (+1) and enmities (-1).

Reading an edge list, building the networkx graph, summarising each tribe's
position, detecting alliance blocs, and drawing an interactive plotly figure
(hover for details, zoom, export to a standalone HTML file).
"""
from __future__ import annotations

import os
from typing import Dict, Optional, Tuple

import numpy as np
import pandas as pd
import networkx as nx
import plotly.graph_objects as go
from networkx.algorithms.community import greedy_modularity_communities

from helpers import _find_col, _require_columns

POSITIVE_WORDS = {"+", "pos", "positive", "ally", "allies", "alliance", "friend"}
NEGATIVE_WORDS = {"-", "neg", "negative", "enemy", "enemies", "enmity", "rival", "hostile"}

ALLY_COLOR = "#2E6F40"
ENEMY_COLOR = "#B80C09"
BLOC_COLORS = ["#345995", "#D4AF37", "#2E6F40", "#B80C09", "#7D5BA6", "#F28F3B", "#4F9D9D", "#8C8C8C"]


# ---------------------------------------------------------------------
# Edge list I/O
# ---------------------------------------------------------------------
def _parse_sign(x) -> int:
    """
    Map a sign label to +1 / -1.

    Accepts '+'/'-', numbers (sign of the value) and words such as
    'alliance' / 'enmity'. Zero and unrecognised labels raise ValueError.
    """
    if isinstance(x, (int, float, np.integer, np.floating)) and not isinstance(x, bool):
        v = float(x)
        if np.isfinite(v) and v != 0:
            return 1 if v > 0 else -1
        raise ValueError(f"Edge sign must be non-zero, got {x!r}")
    s = str(x).strip().lower()
    if s in POSITIVE_WORDS:
        return 1
    if s in NEGATIVE_WORDS:
        return -1
    try:
        return _parse_sign(float(s))
    except ValueError:
        raise ValueError(f"Unrecognised edge sign: {x!r}") from None


def _exact_col(df: pd.DataFrame, names) -> Optional[str]:
    """First column whose stripped, lowercased name is one of `names`."""
    wanted = {n.lower() for n in names}
    for c in df.columns:
        if str(c).strip().lower() in wanted:
            return c
    return None


def read_affiliation_edges(file_path: str) -> pd.DataFrame:
    """
    Read an edge list CSV into columns source, target, sign.

    Column detection is liberal:
    - source: 'source', a column named exactly 'from', or the first column
              containing 'tribe'
    - target: 'target', a column named exactly 'to', or the second column
              containing 'tribe'
    - sign:   any column containing 'sign', 'type' or 'relation' (optional;
              all edges are alliances when absent)
    """
    if not os.path.exists(file_path):
        raise FileNotFoundError(f"File not found: {file_path}")
    df = pd.read_csv(file_path)

    tribe_cols = [c for c in df.columns if "tribe" in str(c).lower()]
    src = _find_col(df, ["source"]) or _exact_col(df, ["from"]) or (tribe_cols[0] if tribe_cols else None)
    dst = _find_col(df, ["target"]) or _exact_col(df, ["to"]) or (tribe_cols[1] if len(tribe_cols) > 1 else None)
    if src is None or dst is None or src == dst:
        raise KeyError(f"Could not find source/target columns in {file_path}; got {list(df.columns)}")
    sign_col = _find_col(df, ["sign"]) or _find_col(df, ["type"]) or _find_col(df, ["relation"])

    out = pd.DataFrame({
        "source": df[src].astype(str).str.strip(),
        "target": df[dst].astype(str).str.strip(),
    })
    out["sign"] = df[sign_col].map(_parse_sign) if sign_col is not None else 1
    return out


# ---------------------------------------------------------------------
# Graph construction & summaries
# ---------------------------------------------------------------------
def build_affiliation_graph(edges: pd.DataFrame, source: str = "source", target: str = "target",
                            sign: Optional[str] = "sign") -> nx.Graph:
    """
    Undirected signed graph; every edge carries `sign` in {+1, -1}.

    A pair listed twice must carry the same sign; contradictory duplicates and
    self loops raise ValueError.
    """
    cols = [source, target] + ([sign] if sign is not None else [])
    _require_columns(edges, cols)

    G = nx.Graph()
    for rec in edges[cols].itertuples(index=False, name=None):
        u, v = str(rec[0]), str(rec[1])
        if u == v:
            raise ValueError(f"Self loop on '{u}' is not a valid affiliation.")
        s = _parse_sign(rec[2]) if sign is not None else 1
        if G.has_edge(u, v) and G[u][v]["sign"] != s:
            raise ValueError(f"Contradictory signs for the pair ({u}, {v}).")
        G.add_edge(u, v, sign=s)
    return G


def _positive_subgraph(G: nx.Graph) -> nx.Graph:
    H = nx.Graph()
    H.add_nodes_from(G.nodes())
    H.add_edges_from((u, v) for u, v, s in G.edges(data="sign") if s > 0)
    return H


def detect_alliances(G: nx.Graph) -> Dict[str, int]:
    """
    Alliance blocs: modularity communities of the alliance-only subgraph.
    Returns {node: bloc id}; bloc 0 is the largest.
    """
    if G.number_of_nodes() == 0:
        return {}
    H = _positive_subgraph(G)
    if H.number_of_edges() == 0:
        return {n: i for i, n in enumerate(sorted(G.nodes()))}
    blocs = sorted(greedy_modularity_communities(H), key=lambda c: (-len(c), sorted(c)[0]))
    return {n: i for i, bloc in enumerate(blocs) for n in bloc}


def network_summary(G: nx.Graph) -> pd.DataFrame:
    """
    One row per tribe: degree, allies, enemies, bloc, and the share of its
    enemies sitting in other blocs (1.0 when enmities only cross blocs).
    """
    blocs = detect_alliances(G)
    rows = []
    for n in G.nodes():
        signs = [G[n][m]["sign"] for m in G.neighbors(n)]
        enemies = [m for m in G.neighbors(n) if G[n][m]["sign"] < 0]
        cross = sum(1 for m in enemies if blocs.get(m) != blocs.get(n))
        rows.append({
            "tribe": n,
            "degree": len(signs),
            "allies": sum(1 for s in signs if s > 0),
            "enemies": len(enemies),
            "bloc": blocs.get(n, -1),
            "enemies_outside_bloc": (cross / len(enemies)) if enemies else np.nan,
        })
    cols = ["tribe", "degree", "allies", "enemies", "bloc", "enemies_outside_bloc"]
    return (pd.DataFrame(rows, columns=cols)
              .sort_values(["bloc", "degree", "tribe"], ascending=[True, False, True])
              .reset_index(drop=True))


def balance_ratio(G: nx.Graph) -> float:
    """
    Share of triangles that are structurally balanced (product of signs > 0).
    NaN when the graph has no triangles.
    """
    balanced = total = 0
    for clique in nx.enumerate_all_cliques(G):
        if len(clique) < 3:
            continue
        if len(clique) > 3:
            break
        a, b, c = clique
        prod = G[a][b]["sign"] * G[b][c]["sign"] * G[a][c]["sign"]
        total += 1
        balanced += prod > 0
    return balanced / total if total else float("nan")


# ---------------------------------------------------------------------
# Interactive drawing
# ---------------------------------------------------------------------
def network_layout(G: nx.Graph, seed: int = 42, k: Optional[float] = None) -> Dict[str, Tuple[float, float]]:
    """
    Spring layout in which only alliances attract; reproducible for a seed.
    """
    H = _positive_subgraph(G)
    pos = nx.spring_layout(H, k=k, iterations=100, seed=seed)
    return {n: (float(x), float(y)) for n, (x, y) in pos.items()}


def _edge_trace(G, positions, sign, color, dash, name):
    xs, ys = [], []
    for u, v, s in G.edges(data="sign"):
        if s != sign:
            continue
        x0, y0 = positions[u]
        x1, y1 = positions[v]
        xs.extend([x0, x1, None])
        ys.extend([y0, y1, None])
    return go.Scatter(x=xs, y=ys, mode="lines", name=name, hoverinfo="none",
                      line=dict(width=1.5, color=color, dash=dash))


def plot_network_interactive(G: nx.Graph, *, positions=None, title: str = "Tribal affiliations",
                             seed: int = 42, save_path: Optional[str] = None) -> go.Figure:
    """
    Interactive plotly drawing of the signed network.

    Alliances are solid green lines, enmities dashed red lines; nodes are
    coloured by alliance bloc, sized by degree, and show allies/enemies on hover.
    """
    if G.number_of_nodes() == 0:
        raise ValueError("Cannot draw an empty network.")
    if positions is None:
        positions = network_layout(G, seed=seed)
    summary = network_summary(G).set_index("tribe")

    fig = go.Figure()
    fig.add_trace(_edge_trace(G, positions, 1, ALLY_COLOR, "solid", "Alliance"))
    fig.add_trace(_edge_trace(G, positions, -1, ENEMY_COLOR, "dash", "Enmity"))

    nodes = list(G.nodes())
    text = [
        f"<b>{n}</b><br>allies: {summary.loc[n, 'allies']}<br>"
        f"enemies: {summary.loc[n, 'enemies']}<br>bloc: {summary.loc[n, 'bloc']}"
        for n in nodes
    ]
    fig.add_trace(go.Scatter(
        x=[positions[n][0] for n in nodes],
        y=[positions[n][1] for n in nodes],
        mode="markers+text",
        name="Tribe",
        text=nodes,
        textposition="top center",
        hovertext=text,
        hoverinfo="text",
        marker=dict(
            size=[12 + 3 * int(summary.loc[n, "degree"]) for n in nodes],
            color=[BLOC_COLORS[int(summary.loc[n, "bloc"]) % len(BLOC_COLORS)] for n in nodes],
            line=dict(width=1.5, color="black"),
        ),
        showlegend=False,
    ))
    fig.update_layout(
        title=dict(text=title),
        hovermode="closest",
        legend=dict(orientation="h", yanchor="bottom", y=-0.08, x=0.0),
        margin=dict(b=40, l=5, r=5, t=50),
        xaxis=dict(showgrid=False, zeroline=False, showticklabels=False),
        yaxis=dict(showgrid=False, zeroline=False, showticklabels=False),
        plot_bgcolor="white",
        height=650,
    )
    if save_path:
        folder = os.path.dirname(os.path.abspath(save_path))
        os.makedirs(folder, exist_ok=True)
        fig.write_html(save_path, include_plotlyjs="cdn")
    return fig
