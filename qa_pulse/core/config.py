"""
Central Configuration Module for QA Pulse.

=== PURPOSE ===
This module is the single source of truth for every constant the dashboard
relies on: the fallback test counts, the CSV column alias table, where the
auto-loaded CSV document lives, the project catalog, and the chart palette.
Every other module imports from here rather than defining its own magic
numbers, so the dashboard can be re-pointed or re-tuned in one place.

=== DATA FLOW ===
  1. The loader (qa_pulse.data.loader) reads CSV_SOURCE for the project named
     by AUTOLOAD_PROJECT_ID and hands the first parsed row to the resolver.
  2. The resolver (qa_pulse.metrics.resolver) walks COUNT_ALIASES and
     RATE_ALIASES in priority order for every field and falls back to
     DEFAULT_COUNTS.
  3. The presentation layer reads CARD_TRENDS, BREAKDOWN_COLORS and
     PROJECT_CATALOG to render cards, charts and the project picker.

=== ENVIRONMENT OVERRIDES ===
    QA_PULSE_CSV_SOURCE       path or http(s) URL of the auto-loaded CSV
    QA_PULSE_FETCH_TIMEOUT    seconds to wait for an http(s) source
    QA_PULSE_CLOCK_INTERVAL   seconds between "Live" clock refreshes
"""

import os
import logging

logger = logging.getLogger(__name__)

# ==========================================
# PAGE / BRANDING
# ==========================================
APP_TITLE = "QA Pulse | Test Execution Dashboard"
APP_ICON = "🧪"
DASHBOARD_SUBTITLE = "Real-time Testing Metrics & Analytics"

# ==========================================
# DOCUMENT SOURCE
# ==========================================
# Only one project auto-loads a CSV document when its dashboard opens; every
# other project starts from the default metrics and waits for an upload.
AUTOLOAD_PROJECT_ID = "model-i"

# Well-known location of the auto-loaded document.  A plain path is read
# from disk (relative to the working directory); an http(s) URL is fetched.
CSV_SOURCE = os.environ.get("QA_PULSE_CSV_SOURCE", "dashboard.csv")

FETCH_TIMEOUT_S = float(os.environ.get("QA_PULSE_FETCH_TIMEOUT", "10"))

# File types accepted by the manual upload widget.
UPLOAD_TYPES = ["csv", "xlsx"]

# ==========================================
# LIVE CLOCK
# ==========================================
CLOCK_INTERVAL_S = int(os.environ.get("QA_PULSE_CLOCK_INTERVAL", "5"))

# ==========================================
# DEFAULT METRICS
# ==========================================
# Demo campaign shown whenever no document is available or a column is
# missing.  Rates are never stored here; they are derived by the resolver.
DEFAULT_COUNTS = {
    'total_cases': 144,
    'total_executed': 132,
    'total_passed': 117,
    'total_failed': 6,
    'need_to_retest': 10,
    'yet_to_validate': 6,
    'in_progress': 2,
}

# ==========================================
# CSV COLUMN ALIASES
# ==========================================
# Each field maps to the header variants seen in exported test trackers, in
# priority order.  Lookups happen after headers are stripped of whitespace.
COUNT_ALIASES = {
    'total_cases': ('Total Test Cases', 'Total Cases', 'Test Cases'),
    'total_executed': ('Total Executed', 'Executed', 'Total Run'),
    'total_passed': ('Total Passed', 'Passed', 'Pass'),
    'total_failed': ('Total Failed', 'Failed', 'Fail'),
    'need_to_retest': ('Need To Retest', 'Need to Retest', 'Retest', 'To Retest'),
    'yet_to_validate': ('Yet to validate', 'Yet To Validate', 'To Validate', 'Pending Validation'),
    'in_progress': ('Total In Progress', 'In Progress', 'Progress', 'Running'),
}

# Explicit rate columns.  retest_rate and validation_rate are always derived
# from the resolved counts.
RATE_ALIASES = {
    'execution_rate': ('% Execution', 'Execution Rate', 'Execution %'),
    'pass_rate': ('% Passed', 'Pass Rate', 'Pass %'),
}

# ==========================================
# PROJECT CATALOG
# ==========================================
# Static, read-only.  Order is the order of the cards on the projects page.
PROJECT_CATALOG = [
    {
        'id': 'model-i',
        'name': 'Model-I',
        'subtitle': 'Acera-1310',
        'description': 'Functional Testing Summary',
        'color': '#8b5cf6',
    },
    {
        'id': 'model-h',
        'name': 'Model-H',
        'subtitle': 'Acera-1320',
        'description': 'Hardware Testing Dashboard',
        'color': '#3b82f6',
    },
    {
        'id': 'model-k',
        'name': 'Model-K',
        'subtitle': 'Edimax 11be',
        'description': 'Kernel Performance Metrics',
        'color': '#10b981',
    },
]

# ==========================================
# METRIC CARDS
# ==========================================
# Trend badges are static campaign-over-campaign deltas (percent).  They are
# display constants, not computed from data.  None hides the badge.
CARD_TRENDS = {
    'total_cases': 2.3,
    'total_executed': 5.7,
    'total_passed': 1.2,
    'total_failed': -0.8,
    'in_progress': None,
    'need_to_retest': -1.4,
    'yet_to_validate': 0.8,
}

# Duration of the count-up animation on card values.
COUNTER_DURATION_MS = 1000

# ==========================================
# CHART PALETTE
# ==========================================
# Category -> color for the breakdown bar and donut charts.  Order matters:
# it is the bar order and the donut slice order.
BREAKDOWN_COLORS = {
    'Passed': '#10B981',
    'Failed': '#EF4444',
    'In Progress': '#F59E0B',
    'Need to Retest': '#8B5CF6',
    'Yet to Validate': '#F97316',
    'Pending': '#6B7280',
}

CHART_HEIGHT = 350

# ==========================================
# NOTICES
# ==========================================
SOURCE_MISSING_NOTICE = (
    "CSV file not found. Using default demo data. Place your CSV file at "
    "`{source}` to load real data."
)
FETCH_PARSE_ERROR = "CSV parsing failed: {error}"
UPLOAD_PARSE_ERROR = "Failed to parse uploaded file: {error}"
