"""
QA Pulse Dashboard - Streamlit Web Interface.

Project picker plus a per-project dashboard with:
- Count-up metric cards with static trend badges
- Interactive Plotly bar and donut charts
- CSV / workbook upload replacing the displayed metrics
- Live clock
"""

from .app import run_dashboard, get_dashboard_path, build_streamlit_command
from .state import DashboardState, DashboardController, get_controller

__all__ = [
    'run_dashboard',
    'get_dashboard_path',
    'build_streamlit_command',
    'DashboardState',
    'DashboardController',
    'get_controller',
]
