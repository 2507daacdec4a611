#!/usr/bin/env python3
# -*- coding: utf-8 -*-
# Computer Lab 3: Charts with seaborn and matplotlib
# In-Class Version - Streamlined for teaching

# # Introduction to Statistics and Data Analysis
# ## Computer Lab 3: A grammar of graphics in Python
# ---

# #### 3.1 Setup: theme, data, output folder

# ---- code cell ----
import sys
from pathlib import Path

import matplotlib.pyplot as plt
import numpy as np

ROOT = Path(__file__).resolve().parents[3]
sys.path.insert(0, str(ROOT / 'src'))

from data_loaders import simulate_survey, _load_config
from figures_static import (
    apply_course_theme, label_axes, plot_scatter, plot_histogram, plot_distribution,
)

cfg, PATHS = _load_config(str(ROOT), str(ROOT / 'config.yaml'))
fig_dir = Path(PATHS['figures_dir']) / 'lab3'

apply_course_theme(**{k: cfg['figures'][k] for k in ('style', 'context', 'palette', 'font_scale')})
df = simulate_survey(n=1000, seed=2025)
df['log_income'] = np.log(df['income'])

# #### 3.2 One variable: the income distribution (geom_histogram)

# ---- code cell ----
fig, ax = plot_histogram(df, 'income', bins=40,
                         title='Monthly income', xlabel='Income', ylabel='Respondents',
                         caption='Simulated course survey', save_path=str(fig_dir / 'income_hist.png'))
plt.show()

# Log scale makes the shape easier to read
# ---- code cell ----
fig, ax = plot_histogram(df, 'log_income', hue='education', stat='density', kde=True,
                         title='Log income by education', xlabel='log(income)')
plt.show()

# #### 3.3 Two numeric variables: age and income (geom_point + geom_smooth)

# ---- code cell ----
fig, ax = plot_scatter(df, 'age', 'log_income', fit_line=True, alpha=0.4,
                       title='Age and log income', xlabel='Age', ylabel='log(income)',
                       save_path=str(fig_dir / 'age_income.png'))
plt.show()

# #### 3.4 Numeric by group (geom_boxplot / geom_violin)

# ---- code cell ----
fig, axes = plt.subplots(1, 2, figsize=(12, 5), sharey=True)
plot_distribution(df, 'education', 'log_income', kind='box', ax=axes[0],
                  title='Box plot', panel='a.')
plot_distribution(df, 'education', 'log_income', kind='violin', show_points=True, ax=axes[1],
                  title='Violin plot with points', panel='b.')
fig_dir.mkdir(parents=True, exist_ok=True)
fig.savefig(fig_dir / 'income_by_education.pdf', bbox_inches='tight')
plt.show()

# #### 3.5 Facets: turnout by region and education (facet_wrap)

# ---- code cell ----
import seaborn as sns

turnout = (df.groupby(['region', 'education'], observed=True)['voted']
             .mean().reset_index(name='turnout'))
g = sns.catplot(data=turnout, x='education', y='turnout', col='region', col_wrap=2,
                kind='bar', height=3.2, aspect=1.3, color='#345995')
g.set_axis_labels('', 'Turnout')
g.set_titles('{col_name}')
g.set(ylim=(0, 1))
plt.show()

# #### 3.6 Exercise: trust by sex, with your own labels and a caption

# ---- code cell ----
fig, ax = plt.subplots(figsize=(7, 4))
sns.countplot(data=df, x='trust', hue='sex', ax=ax)
label_axes(ax, title='Trust in institutions', xlabel='Trust (1 = none, 5 = complete)',
           ylabel='Respondents', caption='Simulated course survey, n = 1,000')
plt.show()

print(f"✓ Figures written to {fig_dir}")
