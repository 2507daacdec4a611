"""
Comprehensive test suite for helpers.py

Tests cover:
- Column matching
- Config value coercions
- Table formatting (stars, fixed-point estimates)
"""

import os
import sys

import numpy as np
import pandas as pd
import pytest

sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..', 'src'))

from helpers import (
    _find_col,
    _require_columns,
    _coerce_list,
    _coerce_float,
    _coerce_int_list,
    _significance_stars,
    _format_estimate,
)


class TestCSVHelpers:
    """Test column detection"""

    def test_find_col_case_insensitive(self):
        """Matching ignores case and returns the original name"""
        df = pd.DataFrame(columns=['Source', 'TARGET', 'Relation'])
        assert _find_col(df, ['source']) == 'Source'
        assert _find_col(df, ['target']) == 'TARGET'

    def test_find_col_all_substrings(self):
        """All substrings must be present"""
        df = pd.DataFrame(columns=['tribe_from', 'tribe_to', 'sign'])
        assert _find_col(df, ['tribe', 'from']) == 'tribe_from'
        assert _find_col(df, ['tribe', 'sign']) is None

    def test_find_col_not_found(self):
        """Returns None when nothing matches"""
        df = pd.DataFrame(columns=['age', 'sex'])
        assert _find_col(df, ['nonexistent']) is None

    def test_require_columns(self):
        """Missing columns are all named in the KeyError"""
        df = pd.DataFrame(columns=['a', 'b'])
        _require_columns(df, ['a'])
        with pytest.raises(KeyError, match="'c'"):
            _require_columns(df, ['a', 'c', 'd'])


class TestCoercions:
    """Test config coercions"""

    def test_coerce_list_string(self):
        assert _coerce_list("a, b;c") == ['a', 'b', 'c']
        assert _coerce_list(" single ") == ['single']

    def test_coerce_list_nested(self):
        assert _coerce_list(['a', ['b', 'c'], 'd;e']) == ['a', 'b', 'c', 'd', 'e']

    def test_coerce_list_other(self):
        assert _coerce_list(None) is None
        assert _coerce_list(5) is None

    def test_coerce_float(self):
        assert _coerce_float("3.5") == 3.5
        assert _coerce_float(" ") is None
        assert _coerce_float("nan") is None
        assert _coerce_float("abc") is None
        assert _coerce_float(None) is None

    def test_coerce_int_list(self):
        assert _coerce_int_list([10, 100, 1000]) == [10, 100, 1000]
        assert _coerce_int_list("10, 1e3, -5, x") == [10, 1000]
        assert _coerce_int_list(50) == [50]
        assert _coerce_int_list(None) is None


class TestTableFormatting:
    """Test stars and number formatting"""

    @pytest.mark.parametrize("p,expected", [
        (0.001, '***'),
        (0.03, '**'),
        (0.07, '*'),
        (0.2, ''),
        (0.05, '*'),
    ])
    def test_default_stars(self, p, expected):
        assert _significance_stars(p) == expected

    def test_custom_thresholds(self):
        assert _significance_stars(0.004, thresholds=(0.05, 0.01, 0.001)) == '**'

    def test_stars_invalid(self):
        assert _significance_stars(np.nan) == ''
        assert _significance_stars(None) == ''

    def test_format_estimate(self):
        assert _format_estimate(1.23456) == '1.235'
        assert _format_estimate(-0.5, digits=2) == '-0.50'
        assert _format_estimate(np.nan) == ''
        assert _format_estimate(None) == ''
