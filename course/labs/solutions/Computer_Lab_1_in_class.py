#!/usr/bin/env python3
# -*- coding: utf-8 -*-
# Computer Lab 1: Looking at your data
# In-Class Version - Streamlined for teaching

# # Introduction to Statistics and Data Analysis
# ## Computer Lab 1: Loading and inspecting a dataset
# ---

# #### 1.1 Set up the environment and load the course survey.
# If you have the course `.rds` file, point `survey_path` at it; otherwise we
# simulate a survey with the same columns.

# ---- code cell ----
import sys
from pathlib import Path

import numpy as np
import pandas as pd

ROOT = Path(__file__).resolve().parents[3]
sys.path.insert(0, str(ROOT / 'src'))

from data_loaders import (
    load_dataset, simulate_survey, inspect_frame, glimpse,
    missing_summary, describe_numeric, numeric_columns,
)

survey_path = ROOT / 'data' / 'survey.rds'
if survey_path.exists():
    df = load_dataset(survey_path)
    print(f"✓ Loaded {survey_path.name}")
else:
    df = simulate_survey(n=1000, seed=2025)
    print("✓ No survey.rds found, using the simulated course survey")

df.head(10)

# #### 1.2 How big is the dataset? What are the first and last rows?

# ---- code cell ----
views = inspect_frame(df, n=5)
print(f"Rows: {views['shape'][0]:,}   Columns: {views['shape'][1]}")
print("\nFirst rows:")
print(views['head'])
print("\nLast rows:")
print(views['tail'])

# #### 1.3 What type is each column? (compare with `glimpse()` in R)

# ---- code cell ----
print(glimpse(df, width=90))

print("\n" + "="*60)
print("Column types")
print("="*60)
print(views['dtypes'])

# #### 1.4 Which columns have missing values, and how many?

# ---- code cell ----
missing = missing_summary(df)
print(missing[missing['missing'] > 0])

# Question: is the missingness in age related to turnout?
# ---- code cell ----
age_missing = df['age'].isna()
print(f"Turnout when age is recorded: {df.loc[~age_missing, 'voted'].mean():.3f}")
print(f"Turnout when age is missing:  {df.loc[age_missing, 'voted'].mean():.3f}")

# #### 1.5 Summary statistics for the numeric columns

# ---- code cell ----
print("Numeric columns:", numeric_columns(df))
summary = describe_numeric(df.drop(columns=['respondent_id']))
summary.round(2)

# #### 1.6 Categorical columns: frequencies and shares

# ---- code cell ----
for col in ['sex', 'region', 'education']:
    counts = df[col].value_counts(dropna=False, sort=False)
    shares = (counts / counts.sum() * 100).round(1)
    print(f"\n{col}")
    print(pd.DataFrame({'n': counts, 'percent': shares}))

# #### 1.7 Exercise: mean and median income by education level.
# Why are the mean and the median so different?

# ---- code cell ----
income_by_edu = df.groupby('education', observed=True)['income'].agg(['mean', 'median', 'count'])
print(income_by_edu.round(0))

skew = df['income'].skew()
print(f"\nSkewness of income: {skew:.2f}")
print("✓ Income is right-skewed: a few high earners pull the mean above the median.")

# #### 1.8 Exercise: log income

# ---- code cell ----
df['log_income'] = np.log(df['income'])
print(df[['income', 'log_income']].describe().round(2))
print(f"Skewness of log income: {df['log_income'].skew():.2f}")
