"""
Data models for the QA Pulse dashboard.

This module defines the **schema layer** of the dashboard.  Every value that
crosses a seam (loader -> state -> views) is one of the records below, and
all of them are immutable: a new load produces a new record, it never edits
the previous one.

Dataclass overview
------------------
::

    TestMetrics
        The resolved counts and rates of one test campaign.  Built by
        ``qa_pulse.metrics.resolver`` from the first row of a CSV document
        (or from nothing, which yields the defaults).

    Project
        One entry of the static project catalog shown on the landing page.

    LoadOutcome
        What a single load event produced: the metrics to display plus a
        ``LoadStatus`` and an optional user-facing message.

Count fields are documented to satisfy ``total_executed <= total_cases`` and
``total_passed, total_failed <= total_executed``.  These are expectations of
well-formed tracker exports, not enforced invariants: a sheet that breaks
them is still displayed as-is.
"""

from dataclasses import dataclass, asdict
from enum import Enum
from typing import Dict, List, Optional

from qa_pulse.core.config import PROJECT_CATALOG


# ============================================================================
# TEST METRICS
# ============================================================================

@dataclass(frozen=True)
class TestMetrics:
    """Resolved test-execution metrics for one campaign.

    Counts are non-negative integers.  Rates are percentages (0-100 for
    well-formed input) stored unrounded; rounding is a display concern.
    """
    __test__ = False  # not a pytest test class

    # ---- Counts ----
    total_cases: int
    total_executed: int
    total_passed: int
    total_failed: int
    need_to_retest: int
    yet_to_validate: int
    in_progress: int

    # ---- Rates (percent) ----
    execution_rate: float
    pass_rate: float
    retest_rate: float
    validation_rate: float

    @property
    def failure_rate(self) -> float:
        """Failed share of executed cases, 0.0 when nothing was executed."""
        if not self.total_executed:
            return 0.0
        return self.total_failed / self.total_executed * 100

    @property
    def pending(self) -> int:
        """Cases neither executed nor waiting on validation (never negative)."""
        return max(0, self.total_cases - self.total_executed - self.yet_to_validate)

    def to_dict(self) -> Dict[str, float]:
        """Convert to a plain dict (field name -> value)."""
        return asdict(self)


# ============================================================================
# PROJECT CATALOG
# ============================================================================

@dataclass(frozen=True)
class Project:
    """A project card on the landing page."""
    id: str
    name: str
    subtitle: str
    description: str
    color: str                # Accent color (hex) for the card and icon

    @property
    def dashboard_title(self) -> str:
        return f"{self.subtitle} Dashboard"


PROJECTS = tuple(Project(**entry) for entry in PROJECT_CATALOG)


def get_project(project_id: str) -> Optional[Project]:
    """Look up a catalog entry by id, or None for an unknown id."""
    for project in PROJECTS:
        if project.id == project_id:
            return project
    return None


def list_projects() -> List[Project]:
    return list(PROJECTS)


# ============================================================================
# LOAD OUTCOME
# ============================================================================

class LoadStatus(Enum):
    """How a load event ended.  Every status still carries renderable metrics."""
    DEFAULT = "default"                        # No document attempted
    LOADED = "loaded"                          # First data row resolved
    EMPTY = "empty"                            # Document parsed, zero data rows
    SOURCE_UNAVAILABLE = "source_unavailable"  # Missing / unreachable / blank
    PARSE_FAILURE = "parse_failure"            # Parser reported a structural error


@dataclass(frozen=True)
class LoadOutcome:
    """Result of one fetch or upload.

    ``message`` is the text the dashboard shows: informational for
    ``SOURCE_UNAVAILABLE``, an error for ``PARSE_FAILURE``, None otherwise.
    """
    metrics: TestMetrics
    status: LoadStatus
    message: Optional[str] = None
    source: Optional[str] = None

    @property
    def from_document(self) -> bool:
        return self.status is LoadStatus.LOADED

    @property
    def is_error(self) -> bool:
        return self.status is LoadStatus.PARSE_FAILURE
