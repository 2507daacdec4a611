# src/regression.py
"""
Logistic regression for the modelling labs, built on statsmodels' formula API.

- `fit_logit` fits a binary logit from an R-style formula.
- `tidy_coefficients` / `model_fit_stats` turn a fitted model into tables.
- `prediction_grid` / `predicted_probabilities` give probabilities (with
  confidence bands) over one focal variable, others held at typical values.
- `regression_table` / `save_regression_table` lay several models side by
  side in the usual publication format: estimate with stars, standard error
  in parentheses underneath, fit statistics at the foot.
"""
from __future__ import annotations

import os
import re
import warnings
from typing import Dict, Optional

import numpy as np
import pandas as pd
import statsmodels.formula.api as smf
from scipy import stats

from helpers import _format_estimate, _significance_stars, _require_columns


# ---------------------------------------------------------------------
# Fitting
# ---------------------------------------------------------------------
def _formula_variables(data: pd.DataFrame, formula: str) -> list:
    """Columns of `data` named in `formula`, in frame order."""
    tokens = set(re.findall(r"[A-Za-z_][A-Za-z0-9_.]*", formula))
    return [c for c in data.columns if c in tokens]


def fit_logit(data: pd.DataFrame, formula: str, *, disp: bool = False, maxiter: int = 100):
    """
    Fit a binary logistic regression, e.g. 'survived ~ C(sex) + age + fare'.

    Rows with missing values in any variable of the formula are dropped first
    so that the fitted sample is explicit (and matches `nobs`).

    Parameters
    ----------
    data : pd.DataFrame
    formula : str
        Patsy formula; the outcome must be coded 0/1 (or boolean).
    disp : bool
        Print optimizer progress.
    maxiter : int
        Newton iterations before giving up.

    Returns
    -------
    statsmodels BinaryResultsWrapper
    """
    if "~" not in formula:
        raise ValueError(f"Formula must have the form 'outcome ~ predictors', got: '{formula}'")
    outcome = formula.split("~", 1)[0].strip()
    _require_columns(data, [outcome])

    used = _formula_variables(data, formula)
    sample = data.dropna(subset=used).copy()
    if sample.empty:
        raise ValueError("No complete cases left for the model variables.")
    if pd.api.types.is_bool_dtype(sample[outcome]):
        sample[outcome] = sample[outcome].astype(int)
    levels = set(pd.unique(sample[outcome]))
    if not levels <= {0, 1}:
        raise ValueError(f"Outcome '{outcome}' must be coded 0/1; found values {sorted(map(str, levels))}")

    result = smf.logit(formula, data=sample).fit(disp=disp, maxiter=maxiter)
    if not result.mle_retvals.get("converged", True):
        warnings.warn(f"Logit for '{formula}' did not converge in {maxiter} iterations; estimates may be unreliable.")
    return result


# ---------------------------------------------------------------------
# Tables from a fitted model
# ---------------------------------------------------------------------
def tidy_coefficients(result, *, ci_level: float = 0.95, exponentiate: bool = False) -> pd.DataFrame:
    """
    One row per term: estimate, std_error, statistic, p_value, conf_low, conf_high.

    With `exponentiate=True` the estimate and interval are reported as odds
    ratios (exp of the log-odds); the standard error stays on the log-odds scale.
    """
    if not 0 < ci_level < 1:
        raise ValueError(f"ci_level must lie in (0, 1), got {ci_level}")
    ci = result.conf_int(alpha=1.0 - ci_level)
    out = pd.DataFrame({
        "term": result.params.index,
        "estimate": result.params.to_numpy(float),
        "std_error": result.bse.to_numpy(float),
        "statistic": result.tvalues.to_numpy(float),
        "p_value": result.pvalues.to_numpy(float),
        "conf_low": ci.iloc[:, 0].to_numpy(float),
        "conf_high": ci.iloc[:, 1].to_numpy(float),
    })
    if exponentiate:
        for c in ("estimate", "conf_low", "conf_high"):
            out[c] = np.exp(out[c])
    return out


def model_fit_stats(result) -> dict:
    """nobs, McFadden pseudo R², log-likelihood, AIC and BIC."""
    return {
        "nobs": int(result.nobs),
        "pseudo_r2": float(result.prsquared),
        "log_likelihood": float(result.llf),
        "aic": float(result.aic),
        "bic": float(result.bic),
    }


# ---------------------------------------------------------------------
# Predicted probabilities
# ---------------------------------------------------------------------
def _typical_value(s: pd.Series):
    s = s.dropna()
    if pd.api.types.is_numeric_dtype(s) and not pd.api.types.is_bool_dtype(s):
        return float(s.mean())
    return s.mode().iloc[0]


def _grid_values(s: pd.Series, n_points: int):
    s = s.dropna()
    if pd.api.types.is_numeric_dtype(s) and not pd.api.types.is_bool_dtype(s) and s.nunique() > 2:
        return np.linspace(float(s.min()), float(s.max()), int(n_points))
    if isinstance(s.dtype, pd.CategoricalDtype):
        return list(s.cat.categories)
    return sorted(s.unique().tolist())


def prediction_grid(data: pd.DataFrame, focal: str, *, by: Optional[str] = None,
                    n_points: int = 50, covariates=None) -> pd.DataFrame:
    """
    Data for "typical case" predictions.

    `focal` varies over its range (numeric) or levels (categorical); `by`, if
    given, is crossed with it; every other covariate is held at its mean
    (numeric) or most common value (categorical).

    Parameters
    ----------
    covariates : list[str], optional
        Columns to include; defaults to every column of `data`.
    """
    _require_columns(data, [focal] + ([by] if by else []))
    covariates = list(data.columns) if covariates is None else list(covariates)

    grid = pd.DataFrame({focal: _grid_values(data[focal], n_points)})
    if by is not None:
        levels = pd.DataFrame({by: _grid_values(data[by], n_points)})
        grid = grid.merge(levels, how="cross")
    for col in covariates:
        if col in grid.columns:
            continue
        grid[col] = _typical_value(data[col])
    return grid


def predicted_probabilities(result, data: pd.DataFrame, focal: str, *, by: Optional[str] = None,
                            n_points: int = 50, ci_level: float = 0.95) -> pd.DataFrame:
    """
    Predicted P(outcome = 1) over `focal` (and `by`), with a confidence band.

    The band is built on the linear predictor, eta ± z * se(eta), then mapped
    through the logistic function, so it always stays inside [0, 1]. eta and
    its standard error come from the fitted model's own formula transform
    (`get_prediction(which="linear")`).

    Returns
    -------
    pd.DataFrame
        The prediction grid plus columns probability, conf_low, conf_high.
    """
    if not 0 < ci_level < 1:
        raise ValueError(f"ci_level must lie in (0, 1), got {ci_level}")
    outcome = result.model.endog_names
    covariates = [c for c in _formula_variables(data, str(result.model.formula)) if c != outcome]
    grid = prediction_grid(data, focal, by=by, n_points=n_points, covariates=covariates)

    pred = result.get_prediction(grid, which="linear")
    eta = np.asarray(pred.predicted, dtype=float)
    se = np.asarray(pred.se, dtype=float)
    z = stats.norm.ppf(0.5 + ci_level / 2.0)

    out = grid.copy()
    out["probability"] = stats.logistic.cdf(eta)
    out["conf_low"] = stats.logistic.cdf(eta - z * se)
    out["conf_high"] = stats.logistic.cdf(eta + z * se)
    return out


# ---------------------------------------------------------------------
# Publication tables
# ---------------------------------------------------------------------
def regression_table(models: Dict[str, object], *, digits: int = 3, stars=(0.1, 0.05, 0.01),
                     exponentiate: bool = False, term_labels: Optional[Dict[str, str]] = None) -> pd.DataFrame:
    """
    Side-by-side table of fitted models.

    Layout (one column per model):
        term        | Model 1     | Model 2
        Intercept   | -1.234***   | -0.987**
                    | (0.210)     | (0.305)
        ...
        Observations| 712         | 712
        Pseudo R²   | 0.213       | 0.251

    Terms missing from a model are left blank. Stars follow `stars`
    (default: * p<0.1, ** p<0.05, *** p<0.01).
    """
    if not models:
        raise ValueError("regression_table needs at least one fitted model.")
    term_labels = term_labels or {}
    tidy = {name: tidy_coefficients(res, exponentiate=exponentiate).set_index("term")
            for name, res in models.items()}

    terms: list = []
    for t in tidy.values():
        terms.extend(x for x in t.index if x not in terms)

    rows = []
    for term in terms:
        est_row = {"term": term_labels.get(term, term)}
        se_row = {"term": ""}
        for name, t in tidy.items():
            if term in t.index:
                r = t.loc[term]
                est_row[name] = _format_estimate(r["estimate"], digits) + _significance_stars(r["p_value"], stars)
                se_row[name] = f"({_format_estimate(r['std_error'], digits)})"
            else:
                est_row[name] = ""
                se_row[name] = ""
        rows.extend([est_row, se_row])

    fit = {name: model_fit_stats(res) for name, res in models.items()}
    footer = [
        ("Observations", lambda f: f"{f['nobs']:d}"),
        ("Pseudo R²", lambda f: _format_estimate(f["pseudo_r2"], digits)),
        ("Log-likelihood", lambda f: _format_estimate(f["log_likelihood"], digits)),
        ("AIC", lambda f: _format_estimate(f["aic"], digits)),
    ]
    for label, fmt in footer:
        row = {"term": label}
        row.update({name: fmt(f) for name, f in fit.items()})
        rows.append(row)

    return pd.DataFrame(rows, columns=["term"] + list(models.keys()))


def star_note(stars=(0.1, 0.05, 0.01)) -> str:
    """Footnote text for the stars used in `regression_table`."""
    parts = [f"{'*' * (i + 1)} p<{t:g}" for i, t in enumerate(sorted(stars, reverse=True))]
    return "Note: " + "; ".join(parts)


def save_regression_table(table: pd.DataFrame, path: str, *, caption: Optional[str] = None) -> str:
    """
    Write a regression table; the format follows the extension.

    .csv  -> plain CSV
    .html -> HTML table (caption as <caption>)
    .tex  -> LaTeX tabular
    .txt  -> fixed-width text
    """
    ext = os.path.splitext(path)[1].lower()
    folder = os.path.dirname(os.path.abspath(path))
    os.makedirs(folder, exist_ok=True)
    if ext == ".csv":
        table.to_csv(path, index=False)
    elif ext == ".html":
        html = table.to_html(index=False, border=0, classes="regression-table")
        if caption:
            html = html.replace(">\n", f">\n  <caption>{caption}</caption>\n", 1)
        with open(path, "w", encoding="utf-8") as fh:
            fh.write(html)
    elif ext == ".tex":
        table.to_latex(path, index=False, caption=caption, escape=True)
    elif ext == ".txt":
        with open(path, "w", encoding="utf-8") as fh:
            if caption:
                fh.write(caption + "\n\n")
            fh.write(table.to_string(index=False))
            fh.write("\n")
    else:
        raise ValueError(f"Unsupported table format '{ext}'; use .csv, .html, .tex or .txt")
    return path
