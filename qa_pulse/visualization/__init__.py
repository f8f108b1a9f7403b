"""
Visualization module for QA Pulse.

Plotly charts, metric-card HTML and the dark dashboard theme.
"""

from .charts import (
    breakdown_series,
    breakdown_frame,
    chart_results_summary,
    chart_test_distribution,
    metric_cards,
    metric_card_html,
    notice_html,
    render_metric_cards_html,
)

__all__ = [
    'breakdown_series',
    'breakdown_frame',
    'chart_results_summary',
    'chart_test_distribution',
    'metric_cards',
    'metric_card_html',
    'notice_html',
    'render_metric_cards_html',
]
