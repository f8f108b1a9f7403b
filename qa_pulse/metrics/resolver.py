"""
Metrics Resolver - maps one raw CSV row onto the TestMetrics schema.

Test trackers export their summary sheets with whatever header wording the
team happened to pick ("Total Test Cases", "Test Cases", "Pass %", ...).  The
resolver turns one such row into a complete ``TestMetrics`` value and never
fails while doing it.

Resolution rules
----------------
1. **Counts**: for each field, walk its aliases in priority order
   (``COUNT_ALIASES``).  The first alias whose cell parses as a number wins.
   Unparseable or negative cells count as absent.  No alias -> the field's
   entry in ``DEFAULT_COUNTS``.
2. **Explicit rates**: ``execution_rate`` and ``pass_rate`` first try their
   own alias columns (``RATE_ALIASES``).  Only when none parses do they fall
   back to executed/cases and passed/executed.
3. **Derived rates**: ``retest_rate`` and ``validation_rate`` are always
   computed from the resolved counts, whatever rate-looking columns the row
   carries.
4. **Division by zero**: any ratio with a zero denominator is 0.0.

Column order in the input mapping never matters; only alias priority does.
Unrecognised columns are ignored.

Usage::

    from qa_pulse.metrics import resolve_metrics

    metrics = resolve_metrics({'Total Test Cases': 100, 'Total Executed': 80})
    metrics = resolve_metrics(None)          # full default metrics
"""

import logging
from typing import Any, Dict, Mapping, Optional, Sequence

from qa_pulse.core.config import DEFAULT_COUNTS, COUNT_ALIASES, RATE_ALIASES
from qa_pulse.core.utils import coerce_number, clean_header, safe_percent
from qa_pulse.models.data_models import TestMetrics

logger = logging.getLogger(__name__)


class MetricsResolver:
    """Resolves raw records into ``TestMetrics`` using an alias table.

    The alias tables and defaults are injectable so a differently worded
    tracker can be supported without touching the resolution rules.

    Attributes:
        count_aliases: field -> ordered header variants for the seven counts
        rate_aliases: field -> ordered header variants for explicit rates
        defaults: field -> fallback count
    """

    def __init__(
        self,
        count_aliases: Optional[Mapping[str, Sequence[str]]] = None,
        rate_aliases: Optional[Mapping[str, Sequence[str]]] = None,
        defaults: Optional[Mapping[str, int]] = None,
    ):
        self.count_aliases = dict(count_aliases or COUNT_ALIASES)
        self.rate_aliases = dict(rate_aliases or RATE_ALIASES)
        self.defaults = dict(defaults or DEFAULT_COUNTS)

        missing = [f for f in self.count_aliases if f not in self.defaults]
        if missing:
            raise ValueError(f"No default for count fields: {missing}")

    # ------------------------------------------------------------------
    # Lookup helpers
    # ------------------------------------------------------------------

    @staticmethod
    def _normalise(record: Optional[Mapping[str, Any]]) -> Dict[str, Any]:
        """Re-key a record by trimmed header.  The first occurrence of a
        header wins if trimming makes two keys collide."""
        if not record:
            return {}
        normalised = {}
        for key, value in record.items():
            header = clean_header(key)
            if header not in normalised:
                normalised[header] = value
        return normalised

    @staticmethod
    def _first_number(row: Mapping[str, Any], aliases: Sequence[str]) -> Optional[float]:
        for alias in aliases:
            number = coerce_number(row.get(alias))
            if number is not None:
                return number
        return None

    def resolve_count(self, row: Mapping[str, Any], field: str) -> int:
        """Resolve one count field: first parseable, non-negative alias or default."""
        for alias in self.count_aliases[field]:
            number = coerce_number(row.get(alias))
            if number is None:
                continue
            if number < 0:
                logger.debug(f"Ignoring negative {alias!r}={number} for {field}")
                continue
            return int(number)
        return int(self.defaults[field])

    def resolve_rate(self, row: Mapping[str, Any], field: str) -> Optional[float]:
        """Explicit rate from its alias columns, or None if no alias parses."""
        return self._first_number(row, self.rate_aliases.get(field, ()))

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def resolve(self, record: Optional[Mapping[str, Any]] = None) -> TestMetrics:
        """Build a complete ``TestMetrics`` from a raw record (or nothing)."""
        row = self._normalise(record)

        counts = {field: self.resolve_count(row, field) for field in self.count_aliases}

        execution_rate = self.resolve_rate(row, 'execution_rate')
        if execution_rate is None:
            execution_rate = safe_percent(counts['total_executed'], counts['total_cases'])

        pass_rate = self.resolve_rate(row, 'pass_rate')
        if pass_rate is None:
            pass_rate = safe_percent(counts['total_passed'], counts['total_executed'])

        metrics = TestMetrics(
            **counts,
            execution_rate=execution_rate,
            pass_rate=pass_rate,
            retest_rate=safe_percent(counts['need_to_retest'], counts['total_cases']),
            validation_rate=safe_percent(counts['yet_to_validate'], counts['total_cases']),
        )

        if row:
            matched = [h for h in row if self._is_known(h)]
            logger.debug(f"Resolved metrics from columns {matched}: {metrics}")
        return metrics

    def _is_known(self, header: str) -> bool:
        return any(header in aliases for aliases in self.count_aliases.values()) or \
            any(header in aliases for aliases in self.rate_aliases.values())


_DEFAULT_RESOLVER = MetricsResolver()


def resolve_metrics(record: Optional[Mapping[str, Any]] = None) -> TestMetrics:
    """Resolve a raw record with the configured alias table and defaults."""
    return _DEFAULT_RESOLVER.resolve(record)


def default_metrics() -> TestMetrics:
    """The metrics shown when no document is available."""
    return _DEFAULT_RESOLVER.resolve(None)


DEFAULT_METRICS = default_metrics()
