"""
QA Pulse - Streamlit Page Script
================================

The single Streamlit entry point of the dashboard.  It renders one of two
views, chosen by ``DashboardState.view``:

1. **Projects page** -- a card per catalog project with an "Open" button.
2. **Project dashboard** -- header with back button, live clock and upload
   widget; error / info notices; seven metric cards; the "Test Results
   Summary" bar chart and the "Test Distribution" donut chart.

Execution flow (per rerun)
--------------------------
1. ``st.set_page_config`` + CSS injection.
2. Fetch the session's ``DashboardController`` (created on first run).
3. Render the active view.  Buttons and the upload widget call controller
   intents; a changed view triggers ``st.rerun()``.

The "Live" clock is a fragment that re-runs on its own every
``CLOCK_INTERVAL_S`` seconds while the dashboard view is on screen and stops
as soon as the user goes back to the project list.

Usage:
    streamlit run qa_pulse/dashboard/streamlit_app.py
    python -m qa_pulse
"""

import sys
from datetime import datetime
from pathlib import Path

# Allow ``streamlit run`` from a source checkout without installing the package.
sys.path.insert(0, str(Path(__file__).parent.parent.parent))

import streamlit as st

from qa_pulse.core.config import (
    APP_TITLE, APP_ICON, DASHBOARD_SUBTITLE, CLOCK_INTERVAL_S, UPLOAD_TYPES,
)
from qa_pulse.dashboard.state import VIEW_DASHBOARD, get_controller
from qa_pulse.models.data_models import PROJECTS
from qa_pulse.visualization.charts import (
    chart_results_summary, chart_test_distribution, notice_html, render_metric_cards_html,
)
from qa_pulse.visualization.styles import inject_css

UPLOAD_KEY = "qa_pulse_upload"

# ============================================================================
# PAGE CONFIG (must be first Streamlit call)
# ============================================================================
st.set_page_config(
    page_title=APP_TITLE,
    page_icon=APP_ICON,
    layout="wide",
    initial_sidebar_state="collapsed",
)
inject_css()

controller = get_controller(st.session_state)


# ============================================================================
# PROJECTS PAGE
# ============================================================================

def render_projects_page():
    st.markdown('<h1 class="gradient-text">📂 Projects</h1>', unsafe_allow_html=True)
    st.markdown('<p class="page-subtitle">Select a project to view its dashboard</p>',
                unsafe_allow_html=True)

    cols = st.columns(len(PROJECTS))
    for col, project in zip(cols, PROJECTS):
        with col:
            st.markdown(f"""
            <div class="project-card" style="--project-color: {project.color};">
                <div class="project-icon">🎯</div>
                <p class="project-name">{project.name}</p>
                <p class="project-subtitle">{project.subtitle}</p>
                <p class="project-description">{project.description}</p>
            </div>
            """, unsafe_allow_html=True)

            if st.button("Open dashboard →", key=f"open_{project.id}", use_container_width=True):
                with st.spinner(f"Loading {project.subtitle} Dashboard... "
                                "Processing your test execution data..."):
                    controller.select_project(project.id)
                st.rerun()


# ============================================================================
# PROJECT DASHBOARD
# ============================================================================

@st.fragment(run_every=CLOCK_INTERVAL_S)
def render_live_clock():
    now = datetime.now().strftime("%H:%M:%S")
    st.markdown(
        f'<div class="live-indicator"><span class="live-dot"></span>Live • {now}</div>',
        unsafe_allow_html=True,
    )


def _on_upload():
    uploaded = st.session_state.get(UPLOAD_KEY)
    if uploaded is None:
        return
    get_controller(st.session_state).upload_file(uploaded.name, uploaded.getvalue())


def render_dashboard():
    state = controller.state
    project = state.project

    if st.button("← Back to Projects", key="back"):
        controller.go_back()
        st.rerun()

    st.markdown(f'<h1 class="gradient-text">📈 {project.dashboard_title}</h1>',
                unsafe_allow_html=True)
    st.markdown(f'<p class="page-subtitle">{DASHBOARD_SUBTITLE}</p>', unsafe_allow_html=True)
    render_live_clock()

    st.file_uploader(
        "Upload Different File",
        type=UPLOAD_TYPES,
        key=UPLOAD_KEY,
        on_change=_on_upload,
        help="The first data row of the file is used.",
    )

    # ── Notices ──────────────────────────────────────────────────────────
    if state.error:
        st.markdown(notice_html(state.error, 'error'), unsafe_allow_html=True)
    if state.show_source_notice:
        st.markdown(notice_html(state.notice, 'info'), unsafe_allow_html=True)

    # ── Metric cards (4 + 3) ─────────────────────────────────────────────
    cards = render_metric_cards_html(state.metrics)
    for row in (cards[:4], cards[4:]):
        cols = st.columns(4)
        for col, card in zip(cols, row):
            col.markdown(card, unsafe_allow_html=True)

    # ── Charts ───────────────────────────────────────────────────────────
    left, right = st.columns(2)
    with left:
        st.markdown("### Test Results Summary")
        st.plotly_chart(chart_results_summary(state.metrics), use_container_width=True)
    with right:
        st.markdown("### Test Distribution")
        st.plotly_chart(chart_test_distribution(state.metrics), use_container_width=True)


# ============================================================================
# ROUTING
# ============================================================================
if controller.state.view == VIEW_DASHBOARD and controller.state.project is not None:
    render_dashboard()
else:
    render_projects_page()
