#!/usr/bin/env python3
# -*- coding: utf-8 -*-
# Computer Lab 5: Regression tables for papers
# In-Class Version - Streamlined for teaching

# # Introduction to Statistics and Data Analysis
# ## Computer Lab 5: From fitted models to a publication table
# ---

# #### 5.1 Setup: three nested turnout models

# ---- code cell ----
import sys
from pathlib import Path

ROOT = Path(__file__).resolve().parents[3]
sys.path.insert(0, str(ROOT / 'src'))

from data_loaders import simulate_survey, _load_config
from regression import fit_logit, regression_table, star_note, save_regression_table

cfg, PATHS = _load_config(str(ROOT), str(ROOT / 'config.yaml'))
reg_cfg = cfg['regression']
table_dir = Path(PATHS['results_dir']) / 'tables'

df = simulate_survey(n=1000, seed=2025)
# Fit every model on the same rows so the Observations line matches
df = df.dropna(subset=['age', 'income'])

models = {
    '(1)': fit_logit(df, 'voted ~ age'),
    '(2)': fit_logit(df, 'voted ~ age + C(education)'),
    '(3)': fit_logit(df, 'voted ~ age + C(education) + C(region) + C(sex) + trust'),
}

# #### 5.2 A side-by-side table (stargazer / modelsummary style)

# ---- code cell ----
labels = {
    'Intercept': 'Constant',
    'age': 'Age (years)',
    'C(education)[T.secondary]': 'Education: secondary',
    'C(education)[T.tertiary]': 'Education: tertiary',
    'C(region)[T.north]': 'Region: north',
    'C(region)[T.south]': 'Region: south',
    'C(region)[T.west]': 'Region: west',
    'C(sex)[T.male]': 'Male',
    'trust': 'Trust in institutions',
}
table = regression_table(models, digits=int(reg_cfg['digits']), stars=tuple(reg_cfg['stars']),
                         term_labels=labels)
print(table.to_string(index=False))
print(star_note(tuple(reg_cfg['stars'])))

# #### 5.3 Odds ratios instead of log-odds

# ---- code cell ----
table_or = regression_table(models, digits=2, exponentiate=True, term_labels=labels)
print(table_or.to_string(index=False))

# #### 5.4 Which model fits best? Compare AIC and pseudo R²

# ---- code cell ----
fit_rows = table.set_index('term').loc[['Observations', 'Pseudo R²', 'AIC']]
print(fit_rows)

# #### 5.5 Export: CSV for checking, HTML for the web, LaTeX for the paper

# ---- code cell ----
caption = "Logistic regression of turnout. Standard errors in parentheses."
for ext in ('csv', 'html', 'tex', 'txt'):
    path = save_regression_table(table, str(table_dir / f'turnout_models.{ext}'), caption=caption)
    print(f"✓ {path}")

# #### 5.6 Exercise: report the age effect in words

# ---- code cell ----
m3 = models['(3)']
beta = m3.params['age']
lo, hi = m3.conf_int().loc['age']
print(f"Holding education, region, sex and trust fixed, one extra year of age changes the "
      f"log-odds of voting by {beta:.3f} (95% CI {lo:.3f} to {hi:.3f}).")
