import os
import numpy as np
import pandas as pd
import matplotlib.pyplot as plt
import seaborn as sns
import matplotlib.patches as mpatches
from matplotlib.lines import Line2D
from matplotlib.ticker import FuncFormatter

from helpers import _require_columns


COURSE_COLORS = ["#345995", "#B80C09", "#D4AF37", "#2E6F40"]


def apply_course_theme(style="whitegrid", context="notebook", palette="colorblind", font_scale=1.0):
    """
    One call to set the look of every figure in a lab (seaborn theme).
    """
    sns.set_theme(style=style, context=context, palette=palette, font_scale=font_scale)


def label_axes(ax, title=None, xlabel=None, ylabel=None, caption=None, panel=None):
    """
    Titles, axis labels, an optional caption under the plot and an optional
    bold panel letter ('a.', 'b.') in the top-left corner.
    """
    if title is not None:
        ax.set_title(title)
    if panel is not None:
        ax.set_title(panel, loc='left', fontweight='bold', fontsize=15)
    if xlabel is not None:
        ax.set_xlabel(xlabel)
    if ylabel is not None:
        ax.set_ylabel(ylabel)
    if caption:
        ax.annotate(caption, xy=(1.0, -0.14), xycoords='axes fraction',
                    ha='right', va='top', fontsize=8, color='0.35')
    return ax


def _new_axes(ax, figsize):
    if ax is None:
        fig, ax = plt.subplots(figsize=figsize)
    else:
        fig = ax.figure
    return fig, ax


def _finish(fig, ax, save_path, dpi):
    ax.grid(which='major', linestyle='--', alpha=0.2)
    sns.despine(ax=ax)
    fig.tight_layout()
    if save_path:
        folder = os.path.dirname(os.path.abspath(save_path))
        os.makedirs(folder, exist_ok=True)
        fig.savefig(save_path, dpi=dpi, bbox_inches='tight')
    return fig, ax


# ─── Points, histograms, distributions ──────────────────────────────────────

def plot_scatter(df, x, y, hue=None, *, fit_line=False, alpha=0.7, ax=None,
                 figsize=(7, 5), save_path=None, dpi=150, **labels):
    """
    Points layer, optionally coloured by `hue`, with an optional OLS trend line.
    Extra keywords (title, xlabel, ylabel, caption) go to `label_axes`.
    """
    _require_columns(df, [c for c in (x, y, hue) if c is not None])
    fig, ax = _new_axes(ax, figsize)
    sns.scatterplot(data=df, x=x, y=y, hue=hue, alpha=alpha, edgecolor='k', linewidth=0.3, ax=ax)
    if fit_line:
        sns.regplot(data=df, x=x, y=y, scatter=False, ci=95, color='k',
                    line_kws={'linewidth': 1.5}, ax=ax)
    label_axes(ax, **labels)
    return _finish(fig, ax, save_path, dpi)


def plot_histogram(df, x, hue=None, *, bins='auto', stat='count', kde=False, ax=None,
                   figsize=(7, 5), save_path=None, dpi=150, **labels):
    """
    Histogram of one numeric column; `stat` as in seaborn ('count', 'density', 'percent').
    """
    _require_columns(df, [c for c in (x, hue) if c is not None])
    fig, ax = _new_axes(ax, figsize)
    sns.histplot(data=df, x=x, hue=hue, bins=bins, stat=stat, kde=kde,
                 edgecolor='k', alpha=0.7, ax=ax)
    label_axes(ax, **labels)
    return _finish(fig, ax, save_path, dpi)


def plot_distribution(df, x, y, kind='box', hue=None, *, show_points=False, ax=None,
                      figsize=(7, 5), save_path=None, dpi=150, **labels):
    """
    Boxplot or violin plot of numeric `y` across the groups in `x`.
    `show_points` overlays the raw observations as a strip.
    """
    _require_columns(df, [c for c in (x, y, hue) if c is not None])
    fig, ax = _new_axes(ax, figsize)
    if kind == 'box':
        sns.boxplot(data=df, x=x, y=y, hue=hue, ax=ax)
    elif kind == 'violin':
        sns.violinplot(data=df, x=x, y=y, hue=hue, inner='quartile', cut=0, ax=ax)
    else:
        raise ValueError(f"kind must be 'box' or 'violin', got: '{kind}'")
    if show_points:
        sns.stripplot(data=df, x=x, y=y, hue=hue, dodge=hue is not None, color='k',
                      alpha=0.35, size=3, legend=False, ax=ax)
    label_axes(ax, **labels)
    return _finish(fig, ax, save_path, dpi)


# ─── Model output ───────────────────────────────────────────────────────────

def plot_coefficients(tidy_df, *, exponentiate=False, drop_intercept=True, ax=None,
                      figsize=(7, 5), save_path=None, dpi=150, **labels):
    """
    Coefficient (forest) plot from `regression.tidy_coefficients` output:
    point estimate with its confidence interval, one row per term, and a
    reference line at 0 (log-odds) or 1 (odds ratios).
    """
    _require_columns(tidy_df, ['term', 'estimate', 'conf_low', 'conf_high'])
    d = tidy_df.copy()
    if drop_intercept:
        d = d[d['term'] != 'Intercept']
    if d.empty:
        raise ValueError("No coefficients left to plot.")
    d = d.iloc[::-1].reset_index(drop=True)

    fig, ax = _new_axes(ax, figsize)
    y = np.arange(len(d))
    ref = 1.0 if exponentiate else 0.0
    ax.axvline(ref, color='k', linestyle='--', linewidth=1)
    ax.errorbar(
        d['estimate'], y,
        xerr=[d['estimate'] - d['conf_low'], d['conf_high'] - d['estimate']],
        fmt='o', color=COURSE_COLORS[0], ecolor=COURSE_COLORS[0], capsize=3, markeredgecolor='k'
    )
    ax.set_yticks(y)
    ax.set_yticklabels(d['term'])
    if exponentiate:
        ax.set_xscale('log')
        ax.xaxis.set_major_formatter(FuncFormatter(lambda v, _: f"{v:g}"))
    labels.setdefault('xlabel', 'Odds ratio' if exponentiate else 'Log-odds estimate')
    label_axes(ax, **labels)
    return _finish(fig, ax, save_path, dpi)


def plot_predicted_probabilities(pred_df, x, by=None, *, ax=None, figsize=(7, 5),
                                 save_path=None, dpi=150, **labels):
    """
    Predicted probability over `x` with its confidence band; one line per
    level of `by`. Categorical `x` is drawn as points with error bars.
    """
    _require_columns(pred_df, [x, 'probability', 'conf_low', 'conf_high'] + ([by] if by else []))
    fig, ax = _new_axes(ax, figsize)
    groups = [(None, pred_df)] if by is None else list(pred_df.groupby(by, sort=False))
    numeric_x = pd.api.types.is_numeric_dtype(pred_df[x]) and pred_df[x].nunique() > 2

    handles = []
    for j, (level, g) in enumerate(groups):
        color = COURSE_COLORS[j % len(COURSE_COLORS)]
        g = g.sort_values(x)
        if numeric_x:
            ax.plot(g[x], g['probability'], color=color, linewidth=2)
            ax.fill_between(g[x], g['conf_low'], g['conf_high'], color=color, alpha=0.2)
        else:
            offs = (j - (len(groups) - 1) / 2) * 0.1
            pos = np.arange(len(g)) + offs
            ax.errorbar(pos, g['probability'],
                        yerr=[g['probability'] - g['conf_low'], g['conf_high'] - g['probability']],
                        fmt='o', color=color, capsize=3)
            ax.set_xticks(np.arange(len(g)))
            ax.set_xticklabels(g[x].astype(str))
        if level is not None:
            handles.append(Line2D([0], [0], color=color, lw=2, label=str(level)))

    ax.set_ylim(0, 1)
    if handles:
        ax.legend(handles=handles, title=by, loc='best', frameon=True, edgecolor='k')
    labels.setdefault('xlabel', x)
    labels.setdefault('ylabel', 'Predicted probability')
    label_axes(ax, **labels)
    return _finish(fig, ax, save_path, dpi)


# ─── Search costs (control-flow lab) ────────────────────────────────────────

def plot_search_costs(costs_df, *, ax=None, figsize=(7, 5), save_path=None, dpi=150, **labels):
    """
    Probes used by bisection and comparisons used by the linear scan against
    sequence length, both axes logarithmic, with the log2(n) reference curve.
    """
    _require_columns(costs_df, ['n', 'bisection_probes', 'linear_comparisons'])
    d = costs_df.sort_values('n')
    fig, ax = _new_axes(ax, figsize)

    ax.plot(d['n'], d['bisection_probes'], marker='o', color=COURSE_COLORS[0], linewidth=2)
    lin = d.dropna(subset=['linear_comparisons'])
    ax.plot(lin['n'], lin['linear_comparisons'], marker='s', color=COURSE_COLORS[1], linewidth=2)
    ax.plot(d['n'], np.log2(d['n'].astype(float)), color='k', linestyle='--', linewidth=1)
    ax.set_xscale('log')
    ax.set_yscale('log')

    handles = [
        mpatches.Patch(facecolor=COURSE_COLORS[0], edgecolor='k', label='Bisection probes'),
        mpatches.Patch(facecolor=COURSE_COLORS[1], edgecolor='k', label='Linear comparisons'),
        Line2D([0], [0], color='k', linestyle='--', lw=1, label=r'$\log_2 n$'),
    ]
    ax.legend(handles=handles, loc='upper left', frameon=True, edgecolor='k')
    labels.setdefault('xlabel', 'Sequence length n')
    labels.setdefault('ylabel', 'Comparisons')
    label_axes(ax, **labels)
    return _finish(fig, ax, save_path, dpi)
