#!/usr/bin/env python3
# -*- coding: utf-8 -*-
# Computer Lab 4: Logistic regression
# In-Class Version - Streamlined for teaching

# # Introduction to Statistics and Data Analysis
# ## Computer Lab 4: Who turns out to vote?
# ---

# #### 4.1 Setup

# ---- code cell ----
import sys
from pathlib import Path

import matplotlib.pyplot as plt
import numpy as np

ROOT = Path(__file__).resolve().parents[3]
sys.path.insert(0, str(ROOT / 'src'))

from data_loaders import simulate_survey, _load_config
from figures_static import apply_course_theme, plot_coefficients, plot_predicted_probabilities
from regression import fit_logit, tidy_coefficients, model_fit_stats, predicted_probabilities

cfg, PATHS = _load_config(str(ROOT), str(ROOT / 'config.yaml'))
ci_level = float(cfg['regression']['ci_level'])
fig_dir = Path(PATHS['figures_dir']) / 'lab4'

apply_course_theme()
df = simulate_survey(n=1000, seed=2025)

# #### 4.2 Why not a straight line? Turnout is 0 or 1.

# ---- code cell ----
print(df['voted'].value_counts())
print(f"\nOverall turnout: {df['voted'].mean():.3f}")

# #### 4.3 A first model: turnout on age
# Rows with a missing age are dropped before fitting.

# ---- code cell ----
m1 = fit_logit(df, 'voted ~ age')
print(m1.summary())

# #### 4.4 Interpreting the coefficient: log-odds and odds ratios

# ---- code cell ----
tidy1 = tidy_coefficients(m1, ci_level=ci_level)
odds1 = tidy_coefficients(m1, ci_level=ci_level, exponentiate=True)
print(tidy1.round(4))
print()
print(odds1.round(4))

age_or = odds1.set_index('term').loc['age', 'estimate']
print(f"\nEach extra year of age multiplies the odds of voting by {age_or:.3f}")
print(f"Ten extra years: x{age_or ** 10:.2f}")

# #### 4.5 Adding education and region

# ---- code cell ----
m2 = fit_logit(df, 'voted ~ age + C(education) + C(region) + C(sex)')
tidy2 = tidy_coefficients(m2, ci_level=ci_level)
print(tidy2.round(3))

fit = model_fit_stats(m2)
print(f"\nn = {fit['nobs']}, pseudo R² = {fit['pseudo_r2']:.3f}, AIC = {fit['aic']:.1f}")

# #### 4.6 Coefficient plot

# ---- code cell ----
fig, axes = plt.subplots(1, 2, figsize=(13, 5))
plot_coefficients(tidy2, ax=axes[0], title='Log-odds', panel='a.')
plot_coefficients(tidy_coefficients(m2, exponentiate=True), exponentiate=True, ax=axes[1],
                  title='Odds ratios', panel='b.')
fig_dir.mkdir(parents=True, exist_ok=True)
fig.savefig(fig_dir / 'coefficients.pdf', bbox_inches='tight')
plt.show()

# #### 4.7 Predicted probabilities for a typical respondent
# Other covariates are held at their mean (numeric) or most common value.

# ---- code cell ----
pred_age = predicted_probabilities(m2, df, 'age', by='education', n_points=60, ci_level=ci_level)
fig, ax = plot_predicted_probabilities(pred_age, 'age', by='education',
                                       title='Predicted turnout by age and education',
                                       xlabel='Age', save_path=str(fig_dir / 'pred_age.png'))
plt.show()

# ---- code cell ----
pred_region = predicted_probabilities(m2, df, 'region')
print(pred_region[['region', 'probability', 'conf_low', 'conf_high']].round(3))
fig, ax = plot_predicted_probabilities(pred_region, 'region', title='Predicted turnout by region')
plt.show()

# #### 4.8 Exercise: how well does the model classify?

# ---- code cell ----
used = df.dropna(subset=['age'])
p_hat = m2.predict(used)
predicted_vote = (p_hat >= 0.5).astype(int)
accuracy = (predicted_vote == used['voted']).mean()
baseline = max(used['voted'].mean(), 1 - used['voted'].mean())
print(f"Accuracy: {accuracy:.3f}   (always guessing the majority class: {baseline:.3f})")
print(f"Mean predicted probability: {np.mean(p_hat):.3f}   observed turnout: {used['voted'].mean():.3f}")
