# src/data_loaders.py
import os
import yaml
import pyreadr
import pandas as pd
import numpy as np


def return_default_config():
    """
    Returns the default configuration dictionary
    """
    return {
        "paths": {
            "data_dir": "./data",
            "results_dir": "./results",
            "figures_dir": "./figures",
            "tribes_csv": "./data/tribes_example.csv",
        },
        "diagnostics": {"verbose": True},
        "maintenance": {"clean_run": False},
        "search": {
            "max_probes": None,          # None -> ceil(log2 n) + 1
            "method": "iterative",
        },
        "benchmark": {
            "sizes": [10, 100, 1_000, 10_000, 100_000, 1_000_000, 10_000_000],
            "position": "last",
            "linear_max_n": 1_000_000,
            "repeats": 3,
            "results_csv": "search_costs.csv",
            "figure": "search_costs.pdf",
        },
        "figures": {
            "style": "whitegrid", "context": "notebook",
            "palette": "colorblind", "font_scale": 1.0, "dpi": 150,
        },
        "regression": {"ci_level": 0.95, "stars": [0.1, 0.05, 0.01], "digits": 3},
        "network": {"layout_seed": 42, "html": "tribes_network.html"},
    }

def _resolve(ROOT_DIR, p):
    """
    Resolve path p relative to ROOT_DIR if not absolute.
    """
    return os.path.abspath(os.path.join(ROOT_DIR, p))

def _deep_merge(dst, src):
    """
    Recursively merge src into dst
    """
    for k, v in src.items():
        if isinstance(v, dict) and isinstance(dst.get(k), dict):
            _deep_merge(dst[k], v)
        else:
            dst[k] = v

def _load_config(ROOT_DIR: str, path: str):
    """
    Load YAML config if present; otherwise use defaults for both config and paths.
    Returns (cfg, PATHS)
    """
    cfg = return_default_config()
    if os.path.exists(path):
        with open(path, "r", encoding="utf-8") as fh:
            user = yaml.safe_load(fh) or {}
        if not isinstance(user, dict):
            raise ValueError(f"[config] Top level of {path} must be a mapping, got {type(user).__name__}")
        _deep_merge(cfg, user)
    else:
        print(f"[config] No config file at {path}; using built-in defaults.")

    PATHS = {key: _resolve(ROOT_DIR, p) for key, p in cfg["paths"].items()}
    return cfg, PATHS

# ----------------------------- dataset readers ------------------------------

def read_rds_file(file_path: str) -> pd.DataFrame:
    """
    Reads an RDS file and returns its contents as a pandas DataFrame.
    """
    try:
        result = pyreadr.read_r(file_path)
        return result[None]
    except Exception as e:
        raise RuntimeError(f"Failed to read {file_path}: {e}") from e

def read_rdata_file(file_path: str, object_name: str = None) -> pd.DataFrame:
    """
    Reads one data frame out of an .RData/.rda workspace.
    Without `object_name` the workspace must hold exactly one object.
    """
    try:
        result = pyreadr.read_r(file_path)
    except Exception as e:
        raise RuntimeError(f"Failed to read {file_path}: {e}") from e
    if object_name is not None:
        if object_name not in result:
            raise KeyError(f"Object '{object_name}' not found in {file_path}; available: {list(result.keys())}")
        return result[object_name]
    if len(result) != 1:
        raise ValueError(
            f"{file_path} holds {len(result)} objects ({list(result.keys())}); pass object_name to choose one."
        )
    return next(iter(result.values()))

def load_dataset(file_path, **kwargs) -> pd.DataFrame:
    """
    Load a course dataset, dispatching on the file extension.

    Supported: .rds, .rdata/.rda (pyreadr), .csv, .tsv, .parquet.
    Extra keyword arguments go to the underlying reader.
    """
    file_path = str(file_path)
    if not os.path.exists(file_path):
        raise FileNotFoundError(f"File not found: {file_path}")
    ext = os.path.splitext(file_path)[1].lower()
    if ext == ".rds":
        return read_rds_file(file_path)
    if ext in (".rdata", ".rda"):
        return read_rdata_file(file_path, **kwargs)
    if ext == ".csv":
        return pd.read_csv(file_path, **kwargs)
    if ext == ".tsv":
        return pd.read_csv(file_path, sep="\t", **kwargs)
    if ext == ".parquet":
        return pd.read_parquet(file_path, **kwargs)
    raise ValueError(f"Unsupported file type '{ext}' for {file_path}")

# ----------------------------- inspection ------------------------------

def missing_summary(df: pd.DataFrame) -> pd.DataFrame:
    """
    Per-column missing values: count and percent of rows, most missing first.
    """
    n = len(df)
    counts = df.isna().sum()
    pct = (counts / n * 100.0) if n else counts.astype(float) * 0.0
    out = pd.DataFrame({"missing": counts.astype(int), "percent": pct.astype(float)})
    out.index.name = "column"
    return out.sort_values(["missing"], ascending=False, kind="stable")

def inspect_frame(df: pd.DataFrame, n: int = 5) -> dict:
    """
    Collect the first-look views of a data frame in one place:
    shape, head, tail, column types, summary statistics and missingness.

    The summary covers every column (numeric and categorical), like R's summary().
    """
    dtypes = pd.DataFrame({
        "dtype": df.dtypes.astype(str),
        "n_unique": df.nunique(dropna=True),
        "non_null": df.notna().sum(),
    })
    dtypes.index.name = "column"
    summary = df.describe(include="all").T if df.shape[1] else pd.DataFrame()
    return {
        "shape": df.shape,
        "head": df.head(n),
        "tail": df.tail(n),
        "dtypes": dtypes,
        "summary": summary,
        "missing": missing_summary(df),
    }

def _short_dtype(s: pd.Series) -> str:
    """<dbl>, <int>, <chr>, ... tags in the spirit of the tibble printout."""
    if pd.api.types.is_bool_dtype(s):
        return "<lgl>"
    if pd.api.types.is_integer_dtype(s):
        return "<int>"
    if pd.api.types.is_float_dtype(s):
        return "<dbl>"
    if pd.api.types.is_datetime64_any_dtype(s):
        return "<dttm>"
    if isinstance(s.dtype, pd.CategoricalDtype):
        return "<fct>"
    return "<chr>"

def glimpse(df: pd.DataFrame, width: int = 80) -> str:
    """
    Transposed preview: one line per column with its type and leading values.

    Example
    -------
    Rows: 3
    Columns: 2
    $ age  <int> 25, 31, 47
    $ name <chr> Ana, Ben, Caro
    """
    lines = [f"Rows: {len(df):,}", f"Columns: {df.shape[1]}"]
    if df.shape[1] == 0:
        return "\n".join(lines)
    name_w = max(len(str(c)) for c in df.columns)
    for col in df.columns:
        s = df[col]
        prefix = f"$ {str(col):<{name_w}} {_short_dtype(s)} "
        room = max(int(width) - len(prefix), 0)
        vals = ", ".join("NA" if pd.isna(v) else str(v) for v in s.head(50).tolist())
        if len(vals) > room:
            vals = vals[: max(room - 3, 0)] + "..."
        lines.append(prefix + vals)
    return "\n".join(lines)

def numeric_columns(df: pd.DataFrame) -> list:
    """Names of numeric (non-boolean) columns, in frame order."""
    return [c for c in df.columns
            if pd.api.types.is_numeric_dtype(df[c]) and not pd.api.types.is_bool_dtype(df[c])]

def describe_numeric(df: pd.DataFrame, percentiles=(0.25, 0.5, 0.75)) -> pd.DataFrame:
    """
    describe() for numeric columns with the missing count appended.
    """
    cols = numeric_columns(df)
    if not cols:
        raise ValueError("DataFrame has no numeric columns to describe.")
    out = df[cols].describe(percentiles=list(percentiles)).T
    out["missing"] = df[cols].isna().sum().astype(int)
    out["skew"] = df[cols].skew(numeric_only=True).astype(float).replace([np.inf, -np.inf], np.nan)
    return out

# ----------------------------- classroom data ------------------------------

EDUCATION_LEVELS = ["primary", "secondary", "tertiary"]
REGIONS = ["north", "south", "east", "west"]

def simulate_survey(n: int = 1000, seed: int = 2025, missing_frac: float = 0.03) -> pd.DataFrame:
    """
    Seeded classroom survey used when no course dataset is at hand.

    Columns: respondent_id, age, sex, region, education (ordered categorical),
    income, trust (1-5), voted (0/1). Turnout follows a logistic model that
    rises with age and education, so the regression labs have a known answer.
    `missing_frac` of age and income values are set to NaN.
    """
    n = int(n)
    if n <= 0:
        raise ValueError(f"n must be positive, got {n}")
    if not 0.0 <= float(missing_frac) < 1.0:
        raise ValueError(f"missing_frac must be in [0, 1), got {missing_frac}")
    rng = np.random.default_rng(seed)

    age = rng.integers(18, 86, size=n).astype(float)
    edu_idx = rng.choice(3, size=n, p=[0.3, 0.45, 0.25])
    region = rng.choice(REGIONS, size=n)
    sex = rng.choice(["female", "male"], size=n)
    income = np.round(np.exp(rng.normal(9.8 + 0.35 * edu_idx, 0.5)), -1)
    trust = np.clip(np.round(rng.normal(3.0 + 0.3 * edu_idx, 1.0)), 1, 5).astype(int)

    eta = -2.4 + 0.035 * age + 0.55 * edu_idx + 0.3 * (region == "north")
    voted = (rng.uniform(size=n) < 1.0 / (1.0 + np.exp(-eta))).astype(int)

    df = pd.DataFrame({
        "respondent_id": np.arange(1, n + 1),
        "age": age,
        "sex": sex,
        "region": region,
        "education": pd.Categorical.from_codes(edu_idx, categories=EDUCATION_LEVELS, ordered=True),
        "income": income,
        "trust": trust,
        "voted": voted,
    })
    n_missing = int(round(missing_frac * n))
    if n_missing:
        df.loc[rng.choice(n, size=n_missing, replace=False), "age"] = np.nan
        df.loc[rng.choice(n, size=n_missing, replace=False), "income"] = np.nan
    return df
