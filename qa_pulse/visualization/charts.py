"""
QA Pulse - Chart & Card Library
===============================

This module is the charting back-end of the dashboard.  Every public
function takes a ``TestMetrics`` value and returns either a
``plotly.graph_objects.Figure`` or an HTML string that Streamlit renders via
``st.plotly_chart()`` / ``st.markdown(..., unsafe_allow_html=True)``.

Breakdown series
----------------
Both charts draw the same six-category breakdown of a campaign:

    Category          Value
    ----------------  ------------------------------------------------
    Passed            total_passed
    Failed            total_failed
    In Progress       in_progress
    Need to Retest    need_to_retest
    Yet to Validate   yet_to_validate
    Pending           max(0, total_cases - total_executed - yet_to_validate)

Colors come from ``BREAKDOWN_COLORS`` in ``qa_pulse.core.config``.

Metric cards
------------
``metric_cards()`` describes the seven cards (title, value, subtitle, icon,
gradient class, static trend badge) and ``metric_card_html()`` renders one.
Card values use the ``count-up`` CSS animation defined in
``qa_pulse.visualization.styles``.
"""

import html
from typing import Dict, List, Optional

import pandas as pd
import plotly.graph_objects as go

from qa_pulse.core.config import BREAKDOWN_COLORS, CARD_TRENDS, CHART_HEIGHT
from qa_pulse.models.data_models import TestMetrics
from qa_pulse.visualization.styles import get_plotly_theme, AXIS_STYLE, TOOLTIP_STYLE


# ---------------------------------------------------------------------------
# Private helper
# ---------------------------------------------------------------------------

def _apply_theme(fig: go.Figure) -> go.Figure:
    """Apply the dark theme, axis grid and tooltip styling to *fig* (in place)."""
    fig.update_layout(**get_plotly_theme(), hoverlabel=TOOLTIP_STYLE)
    fig.update_xaxes(**AXIS_STYLE)
    fig.update_yaxes(**AXIS_STYLE)
    return fig


# ============================================================================
# BREAKDOWN SERIES
# ============================================================================

def breakdown_series(metrics: TestMetrics) -> List[Dict]:
    """Six-category breakdown as ``[{'name', 'value', 'color'}, ...]`` in chart order."""
    values = {
        'Passed': metrics.total_passed,
        'Failed': metrics.total_failed,
        'In Progress': metrics.in_progress,
        'Need to Retest': metrics.need_to_retest,
        'Yet to Validate': metrics.yet_to_validate,
        'Pending': metrics.pending,
    }
    return [
        {'name': name, 'value': values[name], 'color': color}
        for name, color in BREAKDOWN_COLORS.items()
    ]


def breakdown_frame(metrics: TestMetrics) -> pd.DataFrame:
    """The breakdown series as a DataFrame (columns: name, value, color)."""
    return pd.DataFrame(breakdown_series(metrics), columns=['name', 'value', 'color'])


# ============================================================================
# BAR CHART: Test Results Summary
# ============================================================================

def chart_results_summary(metrics: TestMetrics) -> go.Figure:
    """Vertical bar chart, one bar per breakdown category in its own color."""
    df = breakdown_frame(metrics)

    fig = go.Figure(go.Bar(
        x=df['name'],
        y=df['value'],
        marker_color=df['color'],
        marker_cornerradius=8,
        hovertemplate='<b>%{x}</b><br>value : %{y}<extra></extra>',
    ))
    _apply_theme(fig)
    fig.update_layout(height=CHART_HEIGHT, showlegend=False, bargap=0.25)
    return fig


# ============================================================================
# DONUT CHART: Test Distribution
# ============================================================================

def chart_test_distribution(metrics: TestMetrics) -> go.Figure:
    """Donut chart of the breakdown categories."""
    df = breakdown_frame(metrics)

    fig = go.Figure(go.Pie(
        labels=df['name'],
        values=df['value'],
        marker=dict(colors=df['color'].tolist(),
                    line=dict(color='rgba(0,0,0,0)', width=0)),
        hole=80 / 140,          # inner / outer radius
        sort=False,             # keep category order
        direction='clockwise',
        textinfo='none',
        hovertemplate='<b>%{label}</b><br>value : %{value}<extra></extra>',
    ))
    _apply_theme(fig)
    fig.update_layout(
        height=CHART_HEIGHT,
        legend=dict(orientation='h', yanchor='top', y=-0.05, x=0.5, xanchor='center'),
    )
    return fig


# ============================================================================
# METRIC CARDS
# ============================================================================

def metric_cards(metrics: TestMetrics) -> List[Dict]:
    """Describe the seven metric cards for a campaign, in display order."""
    return [
        dict(key='total_cases', title='TOTAL TEST CASES', value=metrics.total_cases,
             subtitle=None, icon='🎯', gradient='gradient-purple'),
        dict(key='total_executed', title='TOTAL EXECUTED', value=metrics.total_executed,
             subtitle=f"{metrics.execution_rate:.2f}% Execution Rate",
             icon='⚡', gradient='gradient-blue'),
        dict(key='total_passed', title='TOTAL PASSED', value=metrics.total_passed,
             subtitle=f"{metrics.pass_rate:.2f}% Pass Rate",
             icon='🏆', gradient='gradient-green'),
        dict(key='total_failed', title='TOTAL FAILED', value=metrics.total_failed,
             subtitle=f"{metrics.failure_rate:.2f}% Failure Rate",
             icon='⚠️', gradient='gradient-red'),
        dict(key='in_progress', title='IN PROGRESS', value=metrics.in_progress,
             subtitle=None, icon='⏱️', gradient='gradient-orange'),
        dict(key='need_to_retest', title='NEED TO RETEST', value=metrics.need_to_retest,
             subtitle=f"{metrics.retest_rate:.2f}% Retest Rate",
             icon='🔄', gradient='gradient-indigo'),
        dict(key='yet_to_validate', title='YET TO VALIDATE', value=metrics.yet_to_validate,
             subtitle=f"{metrics.validation_rate:.2f}% Validation Rate",
             icon='❗', gradient='gradient-amber'),
    ]


def trend_badge_html(trend: Optional[float]) -> str:
    """Static trend pill: '↗ 2.3%' (green) or '↘ 0.8%' (red); empty for None/0."""
    if not trend:
        return ""
    css = 'trend-up' if trend > 0 else 'trend-down'
    arrow = '↗' if trend > 0 else '↘'
    return f'<span class="trend {css}">{arrow} {abs(trend)}%</span>'


def metric_card_html(title: str, value: int, icon: str, gradient: str,
                     subtitle: Optional[str] = None, trend: Optional[float] = None) -> str:
    """Build one metric card as an HTML snippet for ``st.markdown()``.

    The value counts up from 0 via the ``count-up`` CSS animation; the final
    number is also in the ``title`` attribute and aria label.
    """
    value = int(value)
    subtitle_html = (
        f'<div class="metric-subtitle">{html.escape(subtitle)}</div>' if subtitle else ""
    )
    return f"""
    <div class="metric-card {gradient}">
        <div class="metric-header">
            <div>
                <span class="metric-title">{html.escape(title)}</span>
                {trend_badge_html(trend)}
            </div>
            <div class="metric-icon {gradient}">{icon}</div>
        </div>
        <div class="metric-value count-up" style="--target: {value};"
             title="{value}" aria-label="{value}"></div>
        {subtitle_html}
    </div>
    """


def render_metric_cards_html(metrics: TestMetrics) -> List[str]:
    """HTML for all seven cards with the configured static trends."""
    return [
        metric_card_html(
            title=card['title'], value=card['value'], icon=card['icon'],
            gradient=card['gradient'], subtitle=card['subtitle'],
            trend=CARD_TRENDS.get(card['key']),
        )
        for card in metric_cards(metrics)
    ]


NOTICE_ICONS = {'error': '❌', 'info': 'ℹ️'}


def notice_html(message: str, level: str = 'info') -> str:
    """Glass-card notice for an error or info message; the message is escaped."""
    icon = NOTICE_ICONS.get(level, NOTICE_ICONS['info'])
    return f'<div class="glass-card notice-{level}">{icon} {html.escape(str(message))}</div>'
