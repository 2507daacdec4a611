"""
Tests for figures_static.py

Figures are drawn on the Agg backend; tests check the artists that end up on
the axes and that files are written, not pixel output.
"""

import sys
from pathlib import Path

import matplotlib
matplotlib.use("Agg")
import matplotlib.pyplot as plt
import numpy as np
import pandas as pd
import pytest

sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from figures_static import (
    apply_course_theme,
    label_axes,
    plot_scatter,
    plot_histogram,
    plot_distribution,
    plot_coefficients,
    plot_predicted_probabilities,
    plot_search_costs,
)


@pytest.fixture
def penguins():
    rng = np.random.default_rng(0)
    n = 60
    return pd.DataFrame({
        'species': np.repeat(['Adelie', 'Gentoo', 'Chinstrap'], n // 3),
        'flipper_length_mm': rng.normal(200, 10, size=n),
        'body_mass_g': rng.normal(4200, 500, size=n),
    })


@pytest.fixture(autouse=True)
def close_figures():
    yield
    plt.close('all')


class TestTheme:
    """Theme and labels"""

    def test_apply_theme_runs(self):
        apply_course_theme(style='ticks', context='paper', palette='deep')

    def test_label_axes(self):
        fig, ax = plt.subplots()
        label_axes(ax, title='Mass', xlabel='x', ylabel='y', caption='Source: lab data', panel='a.')
        assert ax.get_xlabel() == 'x'
        assert ax.get_ylabel() == 'y'
        assert ax.get_title(loc='left') == 'a.'
        assert ax.get_title() == 'Mass'
        assert any(t.get_text() == 'Source: lab data' for t in ax.texts)


class TestBasicCharts:
    """Points, histograms, distributions"""

    def test_scatter(self, penguins, tmp_path):
        out = tmp_path / "scatter.png"
        fig, ax = plot_scatter(penguins, 'flipper_length_mm', 'body_mass_g', hue='species',
                               fit_line=True, save_path=str(out), title='Mass vs flipper')
        assert out.exists()
        assert ax.get_title() == 'Mass vs flipper'
        assert len(ax.collections) >= 1

    def test_scatter_missing_column(self, penguins):
        with pytest.raises(KeyError):
            plot_scatter(penguins, 'bill_length_mm', 'body_mass_g')

    def test_histogram(self, penguins):
        fig, ax = plot_histogram(penguins, 'body_mass_g', bins=12, xlabel='Body mass (g)')
        assert len(ax.patches) == 12
        assert ax.get_xlabel() == 'Body mass (g)'

    def test_boxplot(self, penguins):
        fig, ax = plot_distribution(penguins, 'species', 'body_mass_g', kind='box')
        fig.canvas.draw()
        labels = [t.get_text() for t in ax.get_xticklabels()]
        assert labels == ['Adelie', 'Gentoo', 'Chinstrap']

    def test_violin_with_points(self, penguins, tmp_path):
        out = tmp_path / "violin.pdf"
        plot_distribution(penguins, 'species', 'body_mass_g', kind='violin',
                          show_points=True, save_path=str(out))
        assert out.exists()

    def test_unknown_kind(self, penguins):
        with pytest.raises(ValueError):
            plot_distribution(penguins, 'species', 'body_mass_g', kind='ridge')

    def test_draw_on_existing_axes(self, penguins):
        fig, axes = plt.subplots(1, 2)
        f, ax = plot_histogram(penguins, 'body_mass_g', ax=axes[1])
        assert f is fig
        assert ax is axes[1]


class TestModelCharts:
    """Coefficient and probability plots"""

    @pytest.fixture
    def tidy(self):
        return pd.DataFrame({
            'term': ['Intercept', 'age', 'C(group)[T.urban]'],
            'estimate': [-3.0, 0.06, 0.8],
            'conf_low': [-3.5, 0.04, 0.5],
            'conf_high': [-2.5, 0.08, 1.1],
        })

    def test_coefficients_drop_intercept(self, tidy):
        fig, ax = plot_coefficients(tidy)
        labels = [t.get_text() for t in ax.get_yticklabels()]
        assert 'Intercept' not in labels
        assert len(labels) == 2
        assert ax.get_xlabel() == 'Log-odds estimate'

    def test_coefficients_odds_ratio_scale(self, tidy):
        odds = tidy.assign(estimate=np.exp(tidy['estimate']),
                           conf_low=np.exp(tidy['conf_low']),
                           conf_high=np.exp(tidy['conf_high']))
        fig, ax = plot_coefficients(odds, exponentiate=True)
        assert ax.get_xscale() == 'log'
        assert ax.get_xlabel() == 'Odds ratio'

    def test_coefficients_only_intercept(self, tidy):
        with pytest.raises(ValueError):
            plot_coefficients(tidy.iloc[:1])

    def test_predicted_probabilities_lines(self):
        age = np.linspace(18, 80, 10)
        pred = pd.DataFrame({
            'age': np.concatenate([age, age]),
            'group': ['rural'] * 10 + ['urban'] * 10,
            'probability': np.concatenate([np.linspace(0.2, 0.6, 10), np.linspace(0.3, 0.8, 10)]),
        })
        pred['conf_low'] = pred['probability'] - 0.05
        pred['conf_high'] = pred['probability'] + 0.05
        fig, ax = plot_predicted_probabilities(pred, 'age', by='group')
        assert len(ax.lines) == 2
        assert ax.get_ylim() == (0.0, 1.0)
        assert ax.get_legend() is not None

    def test_predicted_probabilities_categorical(self):
        pred = pd.DataFrame({'group': ['rural', 'urban'], 'probability': [0.4, 0.6],
                             'conf_low': [0.35, 0.55], 'conf_high': [0.45, 0.65]})
        fig, ax = plot_predicted_probabilities(pred, 'group')
        assert [t.get_text() for t in ax.get_xticklabels()] == ['rural', 'urban']


class TestSearchCostChart:
    """Control-flow lab figure"""

    def test_search_costs(self, tmp_path):
        costs = pd.DataFrame({
            'n': [10, 100, 1000, 10000],
            'bisection_probes': [4, 7, 10, 14],
            'linear_comparisons': [10, 100, 1000, np.nan],
        })
        out = tmp_path / "figs" / "costs.pdf"
        fig, ax = plot_search_costs(costs, save_path=str(out))
        assert out.exists()
        assert ax.get_xscale() == 'log'
        assert ax.get_yscale() == 'log'
        assert len(ax.lines) == 3
