# src/helpers.py
"""
General-purpose helpers shared across the course modules.

This module centralizes reusable utilities that are agnostic to any one lab:
- Liberal column-name detection for CSV inputs.
- List/number coercions for config values.
- Number formatting and significance stars for regression tables.

All functions are pure and side-effect free, facilitating reuse and unit testing.

IMPORTANT: This module does not import project-specific modules to avoid circular
dependencies. Callers must supply any configuration defaults they need.
"""
from __future__ import annotations

import numpy as np
import pandas as pd

# ---------------------------------------------------------------------------
# CSV helpers
# ---------------------------------------------------------------------------

def _find_col(df: pd.DataFrame, must_include: list[str]) -> str | None:
    """
    Return the first column name in `df` whose lowercase name contains *all*
    substrings in `must_include`. Used for robust header detection.

    Parameters
    ----------
    df : pd.DataFrame
        DataFrame with candidate columns.
    must_include : list[str]
        Substrings that must all appear in the lowercase column name.

    Returns
    -------
    str | None
        Original column name or None if not found.
    """
    low = {str(c).lower(): c for c in df.columns}
    for lc, orig in low.items():
        if all(s in lc for s in must_include):
            return orig
    return None


def _require_columns(df: pd.DataFrame, cols) -> None:
    """Raise KeyError naming every column of `cols` missing from `df`."""
    missing = [c for c in cols if c not in df.columns]
    if missing:
        raise KeyError(f"Column(s) not found in DataFrame: {missing}")


# ---------------------------------------------------------------------------
# List / number coercions for config-like values
# ---------------------------------------------------------------------------

def _coerce_list(x):
    """
    Coerce input to a flat list of strings.

    Rules
    -----
    - If `x` is a list, flatten one level; split any string items on ';' or ','.
    - If `x` is a string, split on ';' or ',' and strip.
    - Otherwise return None (caller should fall back to project defaults).

    Parameters
    ----------
    x : Any

    Returns
    -------
    list[str] | None
    """
    if isinstance(x, list):
        flat: list[str] = []
        for it in x:
            if isinstance(it, list):
                flat.extend(str(s) for s in it)
            elif isinstance(it, str) and (";" in it or "," in it):
                flat.extend(
                    [s.strip() for s in it.replace(",", ";").split(";") if s.strip()]
                )
            else:
                flat.append(str(it))
        return flat
    if isinstance(x, str):
        if ";" in x or "," in x:
            return [s.strip() for s in x.replace(",", ";").split(";") if s.strip()]
        return [x.strip()]
    return None


def _coerce_float(x):
    """Float or None for blanks, 'nan' and unparseable input."""
    try:
        if x is None:
            return None
        s = str(x).strip()
        if s == "" or s.lower() == "nan":
            return None
        return float(s)
    except (TypeError, ValueError):
        return None


def _coerce_int_list(x) -> list[int] | None:
    """
    Coerce a config value into a list of positive ints.

    Accepts a list of numbers, or a string such as "10, 100, 1e3".
    Non-positive or unparseable entries are dropped.
    """
    items = _coerce_list(x) if not isinstance(x, (int, float)) else [str(x)]
    if items is None:
        return None
    out: list[int] = []
    for it in items:
        v = _coerce_float(it)
        if v is not None and np.isfinite(v) and v > 0:
            out.append(int(v))
    return out


# ---------------------------------------------------------------------------
# Table formatting
# ---------------------------------------------------------------------------

def _significance_stars(p: float, thresholds=(0.1, 0.05, 0.01)) -> str:
    """
    Conventional significance stars for a p-value.

    With the default thresholds: p < 0.01 -> '***', p < 0.05 -> '**',
    p < 0.1 -> '*', otherwise ''. Thresholds may be given in any order.

    Parameters
    ----------
    p : float
        p-value.
    thresholds : Iterable[float]
        Cut-offs; one star per threshold the p-value falls below.

    Returns
    -------
    str
    """
    try:
        p = float(p)
    except (TypeError, ValueError):
        return ""
    if not np.isfinite(p):
        return ""
    return "*" * sum(1 for t in thresholds if p < float(t))


def _format_estimate(x, digits: int = 3) -> str:
    """Fixed-point string with `digits` decimals; '' for None/NaN."""
    if x is None:
        return ""
    try:
        v = float(x)
    except (TypeError, ValueError):
        return str(x)
    if not np.isfinite(v):
        return ""
    return f"{v:.{int(digits)}f}"
