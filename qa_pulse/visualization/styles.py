"""
QA Pulse - Styles & Theme Configuration
=======================================

Every visual constant the dashboard uses that is not a data color lives
here: the dark-theme stylesheet, the Plotly layout theme and the card
gradient classes.  Data colors (the six breakdown categories) come from
``qa_pulse.core.config.BREAKDOWN_COLORS``.

Card Gradients
--------------
Each metric card is tinted with one of the gradient classes below.  The
mapping follows the meaning of the metric, not its value:

    Class              Used by
    -----------------  -----------------------------
    gradient-purple    Total test cases
    gradient-blue      Total executed
    gradient-green     Total passed
    gradient-red       Total failed
    gradient-orange    In progress
    gradient-indigo    Need to retest
    gradient-amber     Yet to validate

Module Contents at a Glance
----------------------------
- ``CARD_GRADIENTS`` -- gradient class -> (start, end) colors
- ``get_plotly_theme()`` / ``AXIS_STYLE`` -- Plotly chart theming
- ``TOOLTIP_STYLE`` -- light hover label on dark charts
- ``inject_css()`` -- injects the full dark-theme stylesheet into Streamlit
"""

import streamlit as st

from qa_pulse.core.config import COUNTER_DURATION_MS

# ============================================================================
# CARD GRADIENTS
# ============================================================================

CARD_GRADIENTS = {
    'gradient-purple': ('#8b5cf6', '#6d28d9'),
    'gradient-blue':   ('#3b82f6', '#1d4ed8'),
    'gradient-green':  ('#10b981', '#047857'),
    'gradient-red':    ('#ef4444', '#b91c1c'),
    'gradient-orange': ('#f59e0b', '#b45309'),
    'gradient-indigo': ('#6366f1', '#4338ca'),
    'gradient-amber':  ('#f97316', '#c2410c'),
}


# ============================================================================
# PLOTLY THEME
# ============================================================================

def get_plotly_theme() -> dict:
    """Return a base Plotly layout configuration for the dark dashboard theme.

    Unpack into ``fig.update_layout(**get_plotly_theme())``.
    """
    return dict(
        paper_bgcolor='rgba(0,0,0,0)',
        plot_bgcolor='rgba(0,0,0,0)',
        font=dict(family='Inter', color='rgba(255,255,255,0.8)', size=12),
        margin=dict(l=20, r=30, t=20, b=5),
    )


# Subtle dashed grid that blends with the dark background.
AXIS_STYLE = dict(
    gridcolor='rgba(255,255,255,0.1)',
    griddash='dash',
    zerolinecolor='rgba(255,255,255,0.1)',
    linecolor='rgba(255,255,255,0.8)',
)

# Light tooltip box so hover values stay readable over dark charts.
TOOLTIP_STYLE = dict(
    bgcolor='rgba(255, 255, 255, 0.95)',
    bordercolor='rgba(0, 0, 0, 0.1)',
    font=dict(color='#333333', family='Inter'),
)


# ============================================================================
# CSS INJECTION
# ============================================================================

def _gradient_rules() -> str:
    return "\n".join(
        f"    .metric-card.{name} {{ background: linear-gradient(135deg, {start}33 0%, {end}55 100%); "
        f"border-left: 4px solid {start}; }}\n"
        f"    .metric-icon.{name} {{ background: {start}; }}"
        for name, (start, end) in CARD_GRADIENTS.items()
    )


def inject_css():
    """Inject the dark-theme stylesheet into the Streamlit page.

    Call once near the top of the page script, after ``st.set_page_config``.

    The stylesheet covers:
    - **Typography**: Google Fonts "Inter"
    - **Metric Card**: gradient card with hover lift and a count-up value
      (CSS ``@property`` animation of an integer counter from 0 to
      ``--target``)
    - **Trend Badge**: green up / red down pill next to the card title
    - **Project Card**: landing-page card tinted with ``--project-color``
    - **Live Indicator**: pulsing dot beside the clock
    - **Notices**: info and error glass cards
    - **Streamlit Chrome**: hides the default footer and menu
    """
    st.markdown(f"""
<style>
    @import url('https://fonts.googleapis.com/css2?family=Inter:wght@300;400;500;600;700;800&display=swap');

    .stApp {{ font-family: 'Inter', sans-serif; }}

    /* ================================================================
       HEADERS
       ================================================================ */
    .gradient-text {{
        background: linear-gradient(135deg, #ffffff 0%, #c4b5fd 50%, #93c5fd 100%);
        -webkit-background-clip: text;
        -webkit-text-fill-color: transparent;
        font-weight: 800;
        text-align: center;
        margin: 0;
    }}
    .page-subtitle {{
        color: #94a3b8;
        text-align: center;
        margin-bottom: 12px;
    }}

    /* ================================================================
       METRIC CARD
       ================================================================ */
    .metric-card {{
        border-radius: 16px;
        padding: 20px;
        margin: 8px 0;
        min-height: 150px;
        transition: transform 0.3s ease, box-shadow 0.3s ease;
    }}
    .metric-card:hover {{
        transform: translateY(-4px);
        box-shadow: 0 12px 40px rgba(0, 0, 0, 0.35);
    }}
{_gradient_rules()}
    .metric-header {{
        display: flex;
        justify-content: space-between;
        align-items: flex-start;
    }}
    .metric-title {{
        font-size: 0.8rem;
        color: #e2e8f0;
        letter-spacing: 1.5px;
        font-weight: 600;
    }}
    .metric-icon {{
        width: 40px;
        height: 40px;
        border-radius: 12px;
        display: flex;
        align-items: center;
        justify-content: center;
        font-size: 1.2rem;
    }}
    .metric-value {{
        font-size: 2.6rem;
        font-weight: 700;
        color: #ffffff;
        margin-top: 8px;
    }}
    .metric-subtitle {{
        font-size: 0.85rem;
        color: #cbd5e1;
        margin-top: 4px;
    }}

    /* Count-up: animate an integer custom property from 0 to --target
       and print it through a CSS counter. */
    @property --num {{
        syntax: '<integer>';
        initial-value: 0;
        inherits: false;
    }}
    @keyframes count-up {{
        from {{ --num: 0; }}
        to   {{ --num: var(--target); }}
    }}
    .count-up {{
        animation: count-up {COUNTER_DURATION_MS}ms ease-out forwards;
        counter-reset: num var(--num);
    }}
    .count-up::after {{ content: counter(num); }}

    /* ================================================================
       TREND BADGE
       ================================================================ */
    .trend {{
        display: inline-block;
        margin-left: 8px;
        padding: 1px 8px;
        border-radius: 999px;
        font-size: 0.75rem;
        font-weight: 600;
    }}
    .trend-up {{ color: #22c55e; background: rgba(34, 197, 94, 0.15); }}
    .trend-down {{ color: #ef4444; background: rgba(239, 68, 68, 0.15); }}

    /* ================================================================
       PROJECT CARD
       ================================================================ */
    .project-card {{
        background: rgba(255, 255, 255, 0.05);
        border: 1px solid rgba(255, 255, 255, 0.1);
        border-top: 4px solid var(--project-color);
        border-radius: 16px;
        padding: 24px;
        text-align: center;
        transition: transform 0.3s ease, box-shadow 0.3s ease;
    }}
    .project-card:hover {{
        transform: translateY(-4px);
        box-shadow: 0 12px 40px rgba(0, 0, 0, 0.35);
    }}
    .project-icon {{
        width: 56px;
        height: 56px;
        border-radius: 16px;
        margin: 0 auto 12px auto;
        display: flex;
        align-items: center;
        justify-content: center;
        font-size: 1.6rem;
        background: var(--project-color);
    }}
    .project-name {{ font-size: 1.4rem; font-weight: 700; color: #ffffff; margin: 0; }}
    .project-subtitle {{ color: #c4b5fd; font-weight: 600; margin: 4px 0; }}
    .project-description {{ color: #94a3b8; font-size: 0.9rem; margin: 0; }}

    /* ================================================================
       LIVE INDICATOR
       ================================================================ */
    .live-indicator {{
        text-align: center;
        color: #cbd5e1;
        font-size: 0.9rem;
    }}
    .live-dot {{
        display: inline-block;
        width: 10px;
        height: 10px;
        border-radius: 50%;
        background: #22c55e;
        box-shadow: 0 0 8px #22c55e;
        margin-right: 6px;
        animation: live-pulse 2s infinite;
    }}
    @keyframes live-pulse {{
        0%, 100% {{ opacity: 1; transform: scale(1); }}
        50% {{ opacity: 0.5; transform: scale(1.2); }}
    }}

    /* ================================================================
       NOTICES
       ================================================================ */
    .glass-card {{
        background: rgba(255, 255, 255, 0.05);
        backdrop-filter: blur(10px);
        border-radius: 16px;
        border: 1px solid rgba(255, 255, 255, 0.1);
        padding: 16px 20px;
        margin: 10px 0;
    }}
    .notice-info {{
        background: rgba(59, 130, 246, 0.1);
        border: 1px solid rgba(59, 130, 246, 0.3);
        color: #93c5fd;
    }}
    .notice-error {{
        background: rgba(239, 68, 68, 0.1);
        border: 1px solid rgba(239, 68, 68, 0.3);
        color: #fca5a5;
    }}

    /* ================================================================
       STREAMLIT CHROME
       ================================================================ */
    #MainMenu {{ visibility: hidden; }}
    footer {{ visibility: hidden; }}
</style>
""", unsafe_allow_html=True)
