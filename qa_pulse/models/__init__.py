"""
Models module for QA Pulse.

Contains the immutable records passed between loader, state and views.
"""

from .data_models import (
    TestMetrics,
    Project,
    PROJECTS,
    get_project,
    list_projects,
    LoadStatus,
    LoadOutcome,
)

__all__ = [
    'TestMetrics',
    'Project',
    'PROJECTS',
    'get_project',
    'list_projects',
    'LoadStatus',
    'LoadOutcome',
]
