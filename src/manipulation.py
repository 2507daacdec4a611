# src/manipulation.py
"""
Data-manipulation idioms used in the wrangling lab.

Each helper is a short composition of pandas calls that mirrors one of the
`dplyr`/`tidyr` verbs the course compares against (count, group_by + summarise,
case_when, pivot_longer / pivot_wider), plus a column-name cleaner for messy
survey exports. Inputs are never modified in place.
"""
from __future__ import annotations

import re
import unicodedata
import numpy as np
import pandas as pd

from helpers import _require_columns


def _snake(name) -> str:
    s = unicodedata.normalize("NFKD", str(name))
    s = "".join(c for c in s if not unicodedata.combining(c))
    s = re.sub(r"([a-z0-9])([A-Z])", r"\1_\2", s)
    s = re.sub(r"[^0-9a-zA-Z]+", "_", s).strip("_").lower()
    if not s:
        s = "x"
    if s[0].isdigit():
        s = f"x{s}"
    return s


def clean_names(df: pd.DataFrame) -> pd.DataFrame:
    """
    Return a copy with snake_case ASCII column names.

    'Household Size' -> 'household_size', 'ageGroup' -> 'age_group',
    'Año' -> 'ano', '2019 rate' -> 'x2019_rate'. Collisions get numeric
    suffixes ('value', 'value_2', ...).
    """
    seen: dict[str, int] = {}
    new_cols = []
    for c in df.columns:
        base = _snake(c)
        k = seen.get(base, 0) + 1
        seen[base] = k
        new_cols.append(base if k == 1 else f"{base}_{k}")
    out = df.copy()
    out.columns = new_cols
    return out


def count_by(df: pd.DataFrame, cols, *, sort: bool = True, normalize: bool = False,
             name: str = "n", dropna: bool = False) -> pd.DataFrame:
    """
    Frequency table of the combinations of `cols` (dplyr::count).

    Parameters
    ----------
    cols : str | list[str]
        Grouping column(s).
    sort : bool
        Largest groups first; otherwise in group-key order.
    normalize : bool
        Add a 'prop' column with group shares.
    name : str
        Name of the count column.
    dropna : bool
        Drop groups with missing keys (kept by default, like count()).
    """
    cols = [cols] if isinstance(cols, str) else list(cols)
    _require_columns(df, cols)
    out = (df.groupby(cols, dropna=dropna, observed=True)
             .size()
             .reset_index(name=name))
    if sort:
        out = out.sort_values(name, ascending=False, kind="stable").reset_index(drop=True)
    if normalize:
        total = out[name].sum()
        out["prop"] = out[name] / total if total else np.nan
    return out


def summarise_by(df: pd.DataFrame, by, **aggs) -> pd.DataFrame:
    """
    Grouped summary with named outputs (group_by + summarise).

    Each keyword is `output=(column, func)`, e.g.
        summarise_by(df, "species", mean_mass=("body_mass_g", "mean"), n=("body_mass_g", "size"))
    The result is flat, one row per group.
    """
    if not aggs:
        raise ValueError("summarise_by needs at least one named aggregation, e.g. n=('col', 'size').")
    by = [by] if isinstance(by, str) else list(by)
    _require_columns(df, by + [spec[0] for spec in aggs.values()])
    return (df.groupby(by, observed=True, dropna=False)
              .agg(**aggs)
              .reset_index())


def case_when(df: pd.DataFrame, conditions, default=None) -> pd.Series:
    """
    Vectorised if/else-if chain: the first matching condition wins.

    Parameters
    ----------
    conditions : list[tuple]
        (condition, value) pairs. A condition is a boolean Series/array or a
        callable taking `df`; a value is a scalar or an aligned array.
    default : Any
        Value where no condition holds (NaN if None).
    """
    fill = np.nan if default is None else default
    out = pd.Series(fill, index=df.index, dtype=object)
    # applied last-to-first so earlier conditions overwrite later ones
    for cond, value in reversed(list(conditions)):
        mask = cond(df) if callable(cond) else cond
        mask = np.asarray(mask, dtype=bool)
        if mask.shape != (len(df),):
            raise ValueError(f"Condition has shape {mask.shape}; expected ({len(df)},).")
        if np.ndim(value) == 0:
            out[mask] = value
        else:
            out[mask] = np.asarray(value, dtype=object)[mask]
    return out.infer_objects()


def pivot_longer(df: pd.DataFrame, id_cols, names_to: str = "name", values_to: str = "value",
                 value_cols=None) -> pd.DataFrame:
    """Wide -> long: stack every non-id column (or `value_cols`) into name/value pairs."""
    id_cols = [id_cols] if isinstance(id_cols, str) else list(id_cols)
    _require_columns(df, id_cols)
    if value_cols is not None:
        _require_columns(df, list(value_cols))
    return df.melt(id_vars=id_cols, value_vars=value_cols, var_name=names_to, value_name=values_to)


def pivot_wider(df: pd.DataFrame, id_cols, names_from: str, values_from: str) -> pd.DataFrame:
    """Long -> wide; duplicated (id, name) pairs raise ValueError rather than being averaged."""
    id_cols = [id_cols] if isinstance(id_cols, str) else list(id_cols)
    _require_columns(df, id_cols + [names_from, values_from])
    if df.duplicated(id_cols + [names_from]).any():
        raise ValueError(f"Values in '{values_from}' are not uniquely identified by {id_cols + [names_from]}.")
    out = df.pivot(index=id_cols, columns=names_from, values=values_from).reset_index()
    out.columns.name = None
    return out
