"""
Unit tests for qa_pulse.metrics.resolver

Covers:
- Default metrics when nothing is supplied
- Alias priority, header trimming and numeric coercion
- Explicit vs. computed rates
- Division by zero
"""

import unittest

from qa_pulse.core.utils import coerce_number, safe_percent
from qa_pulse.metrics.resolver import MetricsResolver, resolve_metrics, default_metrics

from tests.fixtures.sample_data import create_sample_record


class TestDefaults(unittest.TestCase):
    """Test suite for the fallback metrics."""

    def test_no_input_gives_defaults(self):
        metrics = resolve_metrics(None)
        self.assertEqual(metrics.total_cases, 144)
        self.assertEqual(metrics.total_executed, 132)
        self.assertEqual(metrics.total_passed, 117)
        self.assertEqual(metrics.total_failed, 6)
        self.assertEqual(metrics.need_to_retest, 10)
        self.assertEqual(metrics.yet_to_validate, 6)
        self.assertEqual(metrics.in_progress, 2)

    def test_default_rates(self):
        metrics = default_metrics()
        self.assertAlmostEqual(metrics.execution_rate, 91.67, places=2)
        self.assertAlmostEqual(metrics.pass_rate, 88.64, places=2)
        self.assertAlmostEqual(metrics.retest_rate, 6.94, places=2)
        self.assertAlmostEqual(metrics.validation_rate, 4.17, places=2)

    def test_empty_mapping_equals_no_input(self):
        self.assertEqual(resolve_metrics({}), resolve_metrics(None))

    def test_unknown_columns_are_ignored(self):
        self.assertEqual(resolve_metrics({'Build': 'r42', 'Owner': 'QA'}), default_metrics())

    def test_metrics_are_immutable(self):
        metrics = default_metrics()
        with self.assertRaises(Exception):
            metrics.total_cases = 1


class TestScenarios(unittest.TestCase):
    """Test suite for documented resolution examples."""

    def test_partial_record_mixes_values_and_defaults(self):
        metrics = resolve_metrics({
            'Total Test Cases': 100,
            'Total Executed': 80,
            'Total Passed': 70,
            'Total Failed': 10,
        })
        counts = {k: v for k, v in metrics.to_dict().items() if not k.endswith('_rate')}
        self.assertEqual(counts, {
            'total_cases': 100, 'total_executed': 80, 'total_passed': 70, 'total_failed': 10,
            'need_to_retest': 10, 'yet_to_validate': 6, 'in_progress': 2,
        })
        self.assertAlmostEqual(metrics.execution_rate, 80.0)
        self.assertAlmostEqual(metrics.pass_rate, 87.5)
        self.assertAlmostEqual(metrics.retest_rate, 10.0)
        self.assertAlmostEqual(metrics.validation_rate, 6.0)

    def test_explicit_pass_rate_is_not_recomputed(self):
        metrics = resolve_metrics({'Pass %': '95'})
        self.assertEqual(metrics.total_executed, 132)
        self.assertAlmostEqual(metrics.pass_rate, 95.0)

    def test_explicit_zero_rate_is_kept(self):
        metrics = resolve_metrics({'% Execution': 0})
        self.assertAlmostEqual(metrics.execution_rate, 0.0)

    def test_full_record(self):
        metrics = resolve_metrics(create_sample_record())
        self.assertEqual(metrics.total_cases, 200)
        self.assertEqual(metrics.in_progress, 3)
        self.assertAlmostEqual(metrics.execution_rate, 75.0)
        self.assertAlmostEqual(metrics.pass_rate, 80.0)
        self.assertAlmostEqual(metrics.retest_rate, 4.0)
        self.assertAlmostEqual(metrics.validation_rate, 2.5)


class TestAliasResolution(unittest.TestCase):
    """Test suite for alias priority and cell coercion."""

    def test_first_alias_wins_regardless_of_key_order(self):
        forward = resolve_metrics({'Total Test Cases': 50, 'Test Cases': 60})
        backward = resolve_metrics({'Test Cases': 60, 'Total Test Cases': 50})
        self.assertEqual(forward.total_cases, 50)
        self.assertEqual(backward.total_cases, 50)

    def test_lower_priority_alias_used_when_higher_is_blank(self):
        metrics = resolve_metrics({'Total Executed': '', 'Executed': 90})
        self.assertEqual(metrics.total_executed, 90)

    def test_unparseable_value_falls_back_to_default(self):
        metrics = resolve_metrics({'Total Passed': 'n/a'})
        self.assertEqual(metrics.total_passed, 117)

    def test_negative_count_treated_as_absent(self):
        metrics = resolve_metrics({'Total Failed': -3, 'Failed': 4})
        self.assertEqual(metrics.total_failed, 4)

    def test_zero_count_is_kept(self):
        metrics = resolve_metrics({'Total Failed': 0})
        self.assertEqual(metrics.total_failed, 0)

    def test_headers_are_trimmed(self):
        metrics = resolve_metrics({'  Total Test Cases ': '120'})
        self.assertEqual(metrics.total_cases, 120)

    def test_string_numbers_are_coerced(self):
        metrics = resolve_metrics({'Total Test Cases': ' 1,024 ', '% Passed': '91.5%'})
        self.assertEqual(metrics.total_cases, 1024)
        self.assertAlmostEqual(metrics.pass_rate, 91.5)

    def test_fractional_count_is_truncated(self):
        metrics = resolve_metrics({'Total Executed': 80.9})
        self.assertEqual(metrics.total_executed, 80)

    def test_custom_alias_table(self):
        resolver = MetricsResolver(
            count_aliases={'total_cases': ('Cases',)},
            rate_aliases={},
            defaults={'total_cases': 1},
        )
        self.assertEqual(resolver.resolve_count({'Cases': 7}, 'total_cases'), 7)

    def test_missing_default_rejected(self):
        with self.assertRaises(ValueError):
            MetricsResolver(count_aliases={'total_cases': ('Cases',)}, defaults={'other': 1})


class TestRates(unittest.TestCase):
    """Test suite for rate derivation."""

    def test_zero_cases_gives_zero_rates(self):
        metrics = resolve_metrics({'Total Test Cases': 0})
        self.assertAlmostEqual(metrics.execution_rate, 0.0)
        self.assertAlmostEqual(metrics.retest_rate, 0.0)
        self.assertAlmostEqual(metrics.validation_rate, 0.0)

    def test_zero_executed_gives_zero_pass_rate(self):
        metrics = resolve_metrics({'Total Executed': 0})
        self.assertAlmostEqual(metrics.pass_rate, 0.0)
        self.assertEqual(metrics.failure_rate, 0.0)

    def test_retest_and_validation_always_computed(self):
        metrics = resolve_metrics({
            'Total Test Cases': 50,
            'Need To Retest': 5,
            'Yet to validate': 10,
            'Retest Rate': 99,
            'Validation Rate': 99,
        })
        self.assertAlmostEqual(metrics.retest_rate, 10.0)
        self.assertAlmostEqual(metrics.validation_rate, 20.0)

    def test_resolution_is_idempotent(self):
        record = create_sample_record()
        self.assertEqual(resolve_metrics(record), resolve_metrics(record))

    def test_failure_rate_and_pending(self):
        metrics = default_metrics()
        self.assertAlmostEqual(metrics.failure_rate, 6 / 132 * 100)
        self.assertEqual(metrics.pending, 6)

    def test_pending_never_negative(self):
        metrics = resolve_metrics({'Total Test Cases': 10, 'Total Executed': 20})
        self.assertEqual(metrics.pending, 0)


class TestCoercion(unittest.TestCase):
    """Test suite for cell coercion helpers."""

    def test_coerce_number(self):
        self.assertEqual(coerce_number(5), 5.0)
        self.assertEqual(coerce_number('7.5'), 7.5)
        self.assertEqual(coerce_number('12%'), 12.0)
        self.assertIsNone(coerce_number(''))
        self.assertIsNone(coerce_number(None))
        self.assertIsNone(coerce_number(True))
        self.assertIsNone(coerce_number(float('nan')))
        self.assertIsNone(coerce_number('abc'))

    def test_unparseable_cell_is_logged(self):
        with self.assertLogs('qa_pulse.core.utils', level='DEBUG') as captured:
            self.assertIsNone(coerce_number('n/a'))
        self.assertIn('n/a', captured.output[0])

    def test_safe_percent(self):
        self.assertEqual(safe_percent(1, 4), 25.0)
        self.assertEqual(safe_percent(5, 0), 0.0)


if __name__ == '__main__':
    unittest.main()
