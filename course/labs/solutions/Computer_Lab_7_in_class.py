#!/usr/bin/env python3
# -*- coding: utf-8 -*-
# Computer Lab 7: Networks
# In-Class Version - Streamlined for teaching

# # Introduction to Statistics and Data Analysis
# ## Computer Lab 7: An interactive network of tribal alliances and enmities
# ---

# #### 7.1 Load the edge list
# Each row is a pair of tribes and whether they are allies or enemies.
# The example network is illustrative; swap in your own CSV with the same columns.

# ---- code cell ----
import sys
from pathlib import Path

ROOT = Path(__file__).resolve().parents[3]
sys.path.insert(0, str(ROOT / 'src'))

from data_loaders import _load_config
from manipulation import count_by
from network import (
    read_affiliation_edges, build_affiliation_graph, detect_alliances,
    network_summary, balance_ratio, plot_network_interactive,
)

cfg, PATHS = _load_config(str(ROOT), str(ROOT / 'config.yaml'))
edges = read_affiliation_edges(PATHS['tribes_csv'])
print(edges.head(10))
print()
print(count_by(edges.assign(relation=edges['sign'].map({1: 'alliance', -1: 'enmity'})), 'relation'))

# #### 7.2 Build the graph

# ---- code cell ----
G = build_affiliation_graph(edges)
print(f"{G.number_of_nodes()} tribes, {G.number_of_edges()} relations")

# #### 7.3 Who has the most allies? The most enemies?

# ---- code cell ----
summary = network_summary(G)
print(summary.to_string(index=False))

most_allies = summary.loc[summary['allies'].idxmax(), 'tribe']
most_enemies = summary.loc[summary['enemies'].idxmax(), 'tribe']
print(f"\nMost allies: {most_allies}   Most enemies: {most_enemies}")

# #### 7.4 Alliance blocs
# Blocs are groups of tribes tied together by alliances.

# ---- code cell ----
blocs = detect_alliances(G)
for bloc in sorted(set(blocs.values())):
    members = sorted(t for t, b in blocs.items() if b == bloc)
    print(f"Bloc {bloc}: {', '.join(members)}")

# #### 7.5 Structural balance: "the enemy of my enemy is my friend"
# A triangle is balanced when the product of its three signs is positive.

# ---- code cell ----
print(f"Share of balanced triangles: {balance_ratio(G):.2f}")
print(f"Share of enmities that cross blocs: {summary['enemies_outside_bloc'].mean():.2f}")

# #### 7.6 Draw it: hover over a tribe, zoom, drag

# ---- code cell ----
out_html = Path(PATHS['figures_dir']) / cfg['network']['html']
fig = plot_network_interactive(G, seed=int(cfg['network']['layout_seed']),
                               title='Tribal alliances (solid) and enmities (dashed)',
                               save_path=str(out_html))
fig.show()
print(f"✓ Saved interactive network to {out_html}")

# #### 7.7 Exercise: what changes if two rival tribes make peace?

# ---- code cell ----
peace = edges.copy()
mask = ((peace['source'] == 'Imbo') & (peace['target'] == 'Jaru'))
peace.loc[mask, 'sign'] = 1
G_peace = build_affiliation_graph(peace)
print(f"Balance before: {balance_ratio(G):.2f}   after: {balance_ratio(G_peace):.2f}")
print(network_summary(G_peace)[['tribe', 'bloc']].to_string(index=False))
