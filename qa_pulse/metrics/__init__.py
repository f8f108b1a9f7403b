"""
Metrics module for QA Pulse.

Column aliasing, numeric coercion and rate derivation for test campaigns.
"""

from .resolver import (
    MetricsResolver,
    resolve_metrics,
    default_metrics,
    DEFAULT_METRICS,
)

__all__ = [
    'MetricsResolver',
    'resolve_metrics',
    'default_metrics',
    'DEFAULT_METRICS',
]
