"""
Dashboard launch helpers.

Builds the ``streamlit run`` command for the dashboard page script and runs
it in the foreground.  ``qa_pulse.run`` wraps the same command in a managed
subprocess with logging and cleanup.
"""

import os
import subprocess
import sys
from pathlib import Path
from typing import Dict, List, Optional


def get_dashboard_path() -> Path:
    """Get the path to the main streamlit app file."""
    return Path(__file__).parent / "streamlit_app.py"


def build_streamlit_command(port: int = 8501, headless: bool = True) -> List[str]:
    """Command line that serves the dashboard with the dark theme."""
    return [
        sys.executable, "-m", "streamlit", "run",
        str(get_dashboard_path()),
        "--server.port", str(port),
        "--server.headless", "true" if headless else "false",
        "--browser.gatherUsageStats", "false",
        "--theme.base", "dark",
        "--theme.primaryColor", "#8b5cf6",
        "--theme.backgroundColor", "#0f0c29",
        "--theme.secondaryBackgroundColor", "#1e1b4b",
        "--theme.textColor", "#E0E0E0",
    ]


def build_environment(csv_source: Optional[str] = None) -> Dict[str, str]:
    """Environment for the Streamlit process, pointing it at ``csv_source`` if given."""
    env = dict(os.environ)
    if csv_source:
        env["QA_PULSE_CSV_SOURCE"] = str(csv_source)
    return env


def run_dashboard(csv_source: str = None, port: int = 8501):
    """
    Launch the Streamlit dashboard and block until it exits.

    Args:
        csv_source: Path or URL of the auto-loaded CSV (optional)
        port: Port to run on (default 8501)
    """
    cmd = build_streamlit_command(port=port, headless=False)
    return subprocess.run(cmd, env=build_environment(csv_source))
