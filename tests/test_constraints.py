"""
Tests for fixed-value constraints on extra pool members.
"""

import pandas as pd
import pytest

from mixviz.constraints import DEFAULT_TOLERANCE, constraint_ranges, default_targets, passes


class TestPasses:

    def test_default_tolerance(self):
        assert DEFAULT_TOLERANCE == 0.005

    def test_within_tolerance(self):
        assert passes({'D': 0.503}, {'D': 0.5})

    def test_outside_tolerance(self):
        assert not passes({'D': 0.51}, {'D': 0.5})

    def test_every_constraint_must_hold(self):
        shares = {'D': 0.5, 'E': 0.2}

        assert passes(shares, {'D': 0.5, 'E': 0.2})
        assert not passes(shares, {'D': 0.5, 'E': 0.3})

    def test_missing_value_fails(self):
        assert not passes({'D': 0.5}, {'E': 0.5})

    def test_missing_target_fails(self):
        assert not passes({'D': 0.5}, {'D': None})

    def test_nan_target_fails(self):
        assert not passes({'D': 0.9}, {'D': float('nan')})
        assert not passes({'D': 0.5}, {'D': float('inf')})

    def test_nan_value_or_tolerance_fails(self):
        assert not passes({'D': float('nan')}, {'D': 0.5})
        assert not passes({'D': 0.5}, {'D': 0.5}, float('nan'))

    def test_no_constraints_pass(self):
        assert passes({'D': 0.5}, {})

    def test_monotonic_in_tolerance(self):
        values = [0.40, 0.48, 0.495, 0.5, 0.503, 0.51, 0.6]
        tolerances = [0.0, 0.001, 0.005, 0.01, 0.05, 0.2]

        admitted = [
            sum(passes({'D': value}, {'D': 0.5}, tolerance) for value in values)
            for tolerance in tolerances
        ]

        assert admitted == sorted(admitted)
        for narrow, wide in zip(tolerances, tolerances[1:]):
            for value in values:
                if passes({'D': value}, {'D': 0.5}, narrow):
                    assert passes({'D': value}, {'D': 0.5}, wide)


class TestConstraintRanges:

    def test_observed_normalized_range(self, pool_data):
        ranges = constraint_ranges(pool_data, ['A', 'B', 'C', 'D', 'E'], ['D', 'E'])

        assert ranges['D'] == pytest.approx((0.0, 0.51))
        assert ranges['E'] == pytest.approx((0.1, 0.25))

    def test_invalid_rows_ignored(self):
        data = pd.DataFrame([
            {'A': 1, 'D': 1},
            {'A': 0, 'D': 0},
            {'A': 'x', 'D': 5},
            {'A': 4, 'D': -1},
        ])

        assert constraint_ranges(data, ['A', 'D'], ['D']) == {'D': (0.5, 0.5)}

    def test_no_pool(self):
        assert constraint_ranges(pd.DataFrame([{'A': 1}]), [], ['A']) == {}

    def test_field_without_observation_left_out(self):
        assert constraint_ranges(pd.DataFrame([{'A': 0, 'D': 0}]), ['A', 'D'], ['D']) == {}


class TestDefaultTargets:

    def test_new_field_starts_at_midpoint(self):
        targets = default_targets({'D': (0.2, 0.6)}, ['D'], {})

        assert targets == {'D': pytest.approx(0.4)}

    def test_existing_target_kept(self):
        assert default_targets({'D': (0.2, 0.6)}, ['D'], {'D': 0.25}) == {'D': 0.25}

    def test_dropped_fields_lose_their_target(self):
        targets = default_targets({'D': (0.2, 0.6), 'E': (0.0, 0.1)}, ['D'], {'D': 0.3, 'E': 0.05})

        assert targets == {'D': 0.3}

    def test_field_without_range_gets_no_target(self):
        assert default_targets({}, ['D'], {}) == {}
