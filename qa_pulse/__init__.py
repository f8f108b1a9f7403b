"""
QA Pulse - browser dashboard for test-execution metrics.

This package turns the first row of a test tracker's CSV export into a
complete set of campaign metrics and serves them as a Streamlit dashboard:
- Alias-based column resolution with per-field defaults
- Auto-load from a local path or http(s) URL, plus manual upload
- Count-up metric cards, bar and donut breakdown charts
- A small static project catalog
"""

__version__ = "1.0.0"
__author__ = "QA Pulse Team"

# Core imports
from .core.config import *
from .core.utils import coerce_number, clean_header, safe_percent

# Models
from .models import (
    TestMetrics,
    Project,
    PROJECTS,
    get_project,
    list_projects,
    LoadStatus,
    LoadOutcome,
)

# Metrics resolution
from .metrics import MetricsResolver, resolve_metrics, default_metrics, DEFAULT_METRICS

# Document loading
from .data import (
    DocumentError,
    SourceUnavailableError,
    ParseFailureError,
    load_document,
    load_project_metrics,
    load_upload,
)

__all__ = [
    # Core
    'coerce_number',
    'clean_header',
    'safe_percent',

    # Models
    'TestMetrics',
    'Project',
    'PROJECTS',
    'get_project',
    'list_projects',
    'LoadStatus',
    'LoadOutcome',

    # Metrics
    'MetricsResolver',
    'resolve_metrics',
    'default_metrics',
    'DEFAULT_METRICS',

    # Data
    'DocumentError',
    'SourceUnavailableError',
    'ParseFailureError',
    'load_document',
    'load_project_metrics',
    'load_upload',
]
