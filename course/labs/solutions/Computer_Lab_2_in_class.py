#!/usr/bin/env python3
# -*- coding: utf-8 -*-
# Computer Lab 2: Data manipulation
# In-Class Version - Streamlined for teaching

# # Introduction to Statistics and Data Analysis
# ## Computer Lab 2: Filtering, grouping, recoding and reshaping
# ---

# #### 2.1 Load the survey and tidy the column names

# ---- code cell ----
import sys
from pathlib import Path

import numpy as np
import pandas as pd

ROOT = Path(__file__).resolve().parents[3]
sys.path.insert(0, str(ROOT / 'src'))

from data_loaders import simulate_survey
from manipulation import clean_names, count_by, summarise_by, case_when, pivot_longer, pivot_wider

df = simulate_survey(n=1000, seed=2025)

# Exports from survey software rarely have usable names; pretend ours did not either.
messy = df.rename(columns={'age': 'Age (years)', 'income': 'Monthly Income', 'voted': 'Voted2024'})
print(list(messy.columns))
df = clean_names(messy)
print(list(df.columns))

# #### 2.2 filter(): respondents aged 30 or older in the north

# ---- code cell ----
north_30 = df[(df['age_years'] >= 30) & (df['region'] == 'north')]
print(f"{len(north_30)} of {len(df)} respondents")

# The same with .query()
north_30_q = df.query("age_years >= 30 and region == 'north'")
assert north_30.equals(north_30_q)
print("✓ Boolean indexing and .query() agree")

# #### 2.3 select() and arrange(): youngest five voters, three columns

# ---- code cell ----
(df.loc[df['voted2024'] == 1, ['respondent_id', 'age_years', 'education']]
   .sort_values('age_years')
   .head(5))

# #### 2.4 count(): how many respondents per region and education level?

# ---- code cell ----
print(count_by(df, 'region'))
print()
print(count_by(df, ['region', 'education'], normalize=True).head(8))

# #### 2.5 group_by() + summarise(): turnout and income by education

# ---- code cell ----
by_edu = summarise_by(
    df, 'education',
    n=('respondent_id', 'size'),
    turnout=('voted2024', 'mean'),
    median_income=('monthly_income', 'median'),
    mean_age=('age_years', 'mean'),
)
by_edu.round(3)

# #### 2.6 mutate() with case_when(): age bands
# Conditions are checked in order; the first one that holds wins.

# ---- code cell ----
df['age_band'] = case_when(df, [
    (df['age_years'].isna(), 'unknown'),
    (df['age_years'] < 30, '18-29'),
    (df['age_years'] < 50, '30-49'),
    (df['age_years'] < 65, '50-64'),
], default='65+')

print(count_by(df, 'age_band', sort=False))

# #### 2.7 Exercise: turnout by age band and sex, as a wide table

# ---- code cell ----
turnout_long = summarise_by(df, ['age_band', 'sex'], turnout=('voted2024', 'mean'))
turnout_wide = pivot_wider(turnout_long, 'age_band', names_from='sex', values_from='turnout')
turnout_wide['gap'] = turnout_wide['female'] - turnout_wide['male']
print(turnout_wide.round(3))

# #### 2.8 pivot_longer(): back to one row per (age band, sex)

# ---- code cell ----
back = pivot_longer(turnout_wide.drop(columns='gap'), 'age_band', names_to='sex', values_to='turnout')
print(back.sort_values(['age_band', 'sex']).head(6))

# #### 2.9 Exercise: income above the regional median?

# ---- code cell ----
regional_median = df.groupby('region')['monthly_income'].transform('median')
df['above_regional_median'] = case_when(df, [
    (df['monthly_income'].isna(), np.nan),
    (df['monthly_income'] > regional_median, True),
], default=False)
print(count_by(df, ['region', 'above_regional_median'], sort=False))

print("\n✓ Lab 2 complete")
