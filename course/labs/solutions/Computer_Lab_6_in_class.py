#!/usr/bin/env python3
# -*- coding: utf-8 -*-
# Computer Lab 6: Control flow and searching
# In-Class Version - Streamlined for teaching

# # Introduction to Statistics and Data Analysis
# ## Computer Lab 6: if/else, loops, functions, recursion and binary search
# ---

# #### 6.1 Setup

# ---- code cell ----
import sys
from pathlib import Path

import matplotlib.pyplot as plt

ROOT = Path(__file__).resolve().parents[3]
sys.path.insert(0, str(ROOT / 'src'))

from search import (
    ExhaustedSearch, bisection_search, bisect_iterative, bisect_recursive,
    linear_search, count_probes, default_probe_budget,
)
from search_benchmark import compare_search_costs
from data_loaders import _load_config
from figures_static import apply_course_theme, plot_search_costs

cfg, PATHS = _load_config(str(ROOT), str(ROOT / 'config.yaml'))
search_cfg = cfg['search']
apply_course_theme()

# #### 6.2 if / elif / else

# ---- code cell ----
def describe_turnout(rate):
    if rate >= 0.7:
        return 'high'
    elif rate >= 0.5:
        return 'medium'
    else:
        return 'low'

for rate in [0.82, 0.55, 0.31]:
    print(f"{rate:.2f} -> {describe_turnout(rate)}")

# #### 6.3 for and while loops: the guessing game
# I think of a number between 1 and 100. Each guess I tell you "higher" or "lower".

# ---- code cell ----
secret = 73
lo, hi = 1, 100
guesses = 0
while True:
    guess = (lo + hi) // 2
    guesses += 1
    if guess == secret:
        print(f"Found {secret} in {guesses} guesses")
        break
    elif guess < secret:
        print(f"  {guess}: higher")
        lo = guess + 1
    else:
        print(f"  {guess}: lower")
        hi = guess - 1

# #### 6.4 The same idea, written as a library function
# `bisect_iterative` returns the position and the number of probes it needed.
# The budget ceil(log2 n) + 1 is enough for any value that is present.

# ---- code cell ----
numbers = range(1, 11)
for target in [1, 5, 10]:
    idx, probes = bisect_iterative(numbers, target)
    print(f"target {target:>2}: index {idx}, {probes} probes (budget {default_probe_budget(len(numbers))})")

# #### 6.5 What happens when the value is not there?

# ---- code cell ----
for target in [0, 11]:
    try:
        bisection_search(numbers, target, max_probes=search_cfg['max_probes'], method=search_cfg['method'])
    except ExhaustedSearch as exc:
        print(f"target {target:>2}: {exc}  [reason = {exc.reason}]")

# #### 6.6 Recursion: a function that calls itself

# ---- code cell ----
def factorial(k):
    if k <= 1:
        return 1
    return k * factorial(k - 1)

print([factorial(k) for k in range(8)])

# Binary search can be written the same way: search the half that can still hold the target.
# ---- code cell ----
for target in [1, 5, 10]:
    assert bisect_recursive(numbers, target) == bisect_iterative(numbers, target)
print("✓ Recursive and iterative versions give the same index and probe count")

# #### 6.7 Exercise: one probe count per search on ten million numbers

# ---- code cell ----
big = range(1, 10_000_001)
idx, probes = bisect_iterative(big, 9_999_999)
print(f"Found 9,999,999 at index {idx:,} after {probes} probes")
print(f"A linear scan would have needed {count_probes(big, 9_999_999, method='linear')['probes']:,} comparisons")

# #### 6.8 Any sorted sequence works: a sorted list of surnames

# ---- code cell ----
names = sorted(['Okafor', 'Ahmed', 'Kowalski', 'Nguyen', 'Silva', 'Bianchi', 'Haddad', 'Yamamoto'])
print(names)
print(bisection_search(names, 'Nguyen'))
print(linear_search(names, 'Nguyen'))

# #### 6.9 How does the cost grow with n?

# ---- code cell ----
costs = compare_search_costs([10, 100, 1_000, 10_000, 100_000, 1_000_000],
                             position='last', linear_max_n=1_000_000, progress=True)
print(costs[['n', 'bisection_probes', 'probe_budget', 'linear_comparisons']])

fig, ax = plot_search_costs(costs, title='Binary search vs linear search')
plt.show()

# #### 6.10 Exercise: a value that is absent uses the whole budget

# ---- code cell ----
absent = compare_search_costs([10, 1_000, 1_000_000], position='absent', linear_max_n=10_000)
print(absent[['n', 'found', 'bisection_probes', 'probe_budget', 'linear_comparisons']])
