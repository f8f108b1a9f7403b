"""
Dashboard application state and the intents that change it.

Streamlit re-runs the page script on every interaction, so the dashboard
keeps a single ``DashboardState`` in ``st.session_state`` and lets a
``DashboardController`` own every change to it.  Views never assign state
directly; they call one of three intents:

    select_project(project_id)   projects page  -> dashboard (loads metrics)
    go_back()                    dashboard      -> projects page
    upload_file(name, payload)   dashboard      -> replace displayed metrics

Metrics are replaced atomically: the new ``TestMetrics`` is fully resolved
before it is assigned, so a rerun never sees a half-updated value.
"""

import logging
from dataclasses import dataclass, field
from datetime import datetime
from typing import Callable, Optional

from qa_pulse.core.config import AUTOLOAD_PROJECT_ID
from qa_pulse.data.loader import load_project_metrics, load_upload
from qa_pulse.metrics.resolver import default_metrics
from qa_pulse.models.data_models import (
    LoadOutcome, LoadStatus, Project, TestMetrics, get_project,
)

logger = logging.getLogger(__name__)

VIEW_PROJECTS = "projects"
VIEW_DASHBOARD = "dashboard"

SESSION_KEY = "qa_pulse_state"


@dataclass
class DashboardState:
    """Everything the page needs to render, held for one browser session."""
    view: str = VIEW_PROJECTS
    project_id: Optional[str] = None
    metrics: TestMetrics = field(default_factory=default_metrics)
    csv_found: bool = False            # Displayed metrics came from a document
    error: Optional[str] = None        # Visible error notice
    notice: Optional[str] = None       # Informational notice
    loaded_at: Optional[datetime] = None

    @property
    def project(self) -> Optional[Project]:
        return get_project(self.project_id) if self.project_id else None

    @property
    def show_source_notice(self) -> bool:
        """The "CSV not found" hint is only meaningful for the auto-loading project."""
        return (
            self.notice is not None
            and not self.csv_found
            and self.project_id == AUTOLOAD_PROJECT_ID
        )


class DashboardController:
    """Owns a ``DashboardState`` and applies view intents to it.

    The loaders are injectable so tests can drive the controller without
    touching the filesystem or the network.
    """

    def __init__(
        self,
        state: Optional[DashboardState] = None,
        project_loader: Callable[[str], LoadOutcome] = load_project_metrics,
        upload_loader: Callable[..., LoadOutcome] = load_upload,
    ):
        self.state = state if state is not None else DashboardState()
        self._project_loader = project_loader
        self._upload_loader = upload_loader

    # ------------------------------------------------------------------
    # Intents
    # ------------------------------------------------------------------

    def select_project(self, project_id: str) -> LoadOutcome:
        """Open a project's dashboard and load its metrics.

        Raises:
            KeyError: ``project_id`` is not in the catalog.
        """
        if get_project(project_id) is None:
            raise KeyError(f"Unknown project: {project_id}")

        logger.info(f"Opening dashboard for {project_id}")
        outcome = self._project_loader(project_id)

        state = self.state
        state.project_id = project_id
        state.view = VIEW_DASHBOARD
        self._apply(outcome)
        return outcome

    def go_back(self) -> None:
        """Return to the project list.  Loaded metrics are discarded."""
        logger.info("Back to projects")
        self.state = DashboardState()

    def upload_file(self, filename: str, payload: bytes) -> LoadOutcome:
        """Replace the displayed metrics with those of an uploaded document."""
        outcome = self._upload_loader(filename, payload, current=self.state.metrics)
        if outcome.status is LoadStatus.LOADED:
            self._apply(outcome)
        else:
            # Keep what is on screen; only surface the error, if any.
            self.state.error = outcome.message if outcome.is_error else None
        return outcome

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    def _apply(self, outcome: LoadOutcome) -> None:
        state = self.state
        state.metrics = outcome.metrics
        state.csv_found = outcome.from_document
        state.error = outcome.message if outcome.is_error else None
        state.notice = outcome.message if outcome.status is LoadStatus.SOURCE_UNAVAILABLE else None
        state.loaded_at = datetime.now()


def get_controller(session_state) -> DashboardController:
    """Return the session's controller, creating it on first use.

    ``session_state`` is ``st.session_state`` (any mutable mapping works).
    """
    if SESSION_KEY not in session_state:
        session_state[SESSION_KEY] = DashboardController()
    return session_state[SESSION_KEY]
