"""
QA Pulse - Main CLI Entry Point
===============================

Command-line entry point that serves the dashboard, or checks a CSV export
without starting a server.

MODE 1 -- Dashboard  (launch_dashboard)
    Spawns a Streamlit subprocess running ``qa_pulse/dashboard/streamlit_app.py``
    with the dark theme, opens the browser after a short delay and stops the
    server again when this process exits.  ``--csv`` re-points the
    auto-loaded document (path or http(s) URL) for that server only.

MODE 2 -- Check  (check_file)
    Loads a CSV (or .xlsx) export exactly the way the dashboard would, prints
    the resolved metrics table and exits non-zero if the file could not be
    used.  Handy for validating a tracker export before dropping it in place.

Usage:
    python -m qa_pulse                        # Launch dashboard on port 8501
    python -m qa_pulse --port 8502 --no-browser
    python -m qa_pulse --csv https://example.org/dashboard.csv
    python -m qa_pulse --check exports/dashboard.csv
"""

import argparse
import atexit
import logging
import socket
import subprocess
import sys
import threading
import time
import webbrowser
from pathlib import Path

from qa_pulse import __version__
from qa_pulse.core.config import CSV_SOURCE
from qa_pulse.dashboard.app import build_environment, build_streamlit_command, get_dashboard_path
from qa_pulse.data.loader import load_document, load_upload
from qa_pulse.models.data_models import LoadStatus

logger = logging.getLogger(__name__)


# ==========================================
# LOGGING CONFIGURATION
# ==========================================

def setup_logging(verbose: bool = False, log_dir: Path = None) -> Path:
    """
    Configure the root logger with file and console handlers.

    Every run writes a timestamped DEBUG log under ``logs/`` in the working
    directory; the console only shows warnings (or info with ``--verbose``).

    Args:
        verbose: Lower the console handler to INFO.
        log_dir: Directory for log files (default: ``./logs``).

    Returns:
        Path of the new log file.
    """
    log_dir = Path(log_dir) if log_dir is not None else Path.cwd() / "logs"
    log_dir.mkdir(parents=True, exist_ok=True)

    timestamp = time.strftime('%Y%m%d_%H%M%S')
    log_file = log_dir / f"qa_pulse_{timestamp}.log"

    file_formatter = logging.Formatter(
        '%(asctime)s | %(name)s | %(levelname)s | %(message)s',
        datefmt='%Y-%m-%d %H:%M:%S'
    )
    console_formatter = logging.Formatter(
        '%(asctime)s | %(levelname)s | %(message)s',
        datefmt='%H:%M:%S'
    )

    file_handler = logging.FileHandler(log_file)
    file_handler.setLevel(logging.DEBUG)
    file_handler.setFormatter(file_formatter)

    console_handler = logging.StreamHandler()
    console_handler.setLevel(logging.INFO if verbose else logging.WARNING)
    console_handler.setFormatter(console_formatter)

    root_logger = logging.getLogger()
    root_logger.setLevel(logging.DEBUG)

    # Drop handlers from an earlier call so lines are not duplicated
    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)
        handler.close()

    root_logger.addHandler(file_handler)
    root_logger.addHandler(console_handler)

    if verbose:
        print(f"📝 Verbose logging enabled. Log file: {log_file}")
    else:
        print(f"📝 Logging to: {log_file}")

    return log_file


# ==========================================
# ARGUMENTS
# ==========================================

def parse_args(argv=None):
    """Parse and return command-line arguments."""
    parser = argparse.ArgumentParser(
        prog='qa_pulse',
        description='QA Pulse - Test Execution Dashboard',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  python -m qa_pulse                      Launch the dashboard
  python -m qa_pulse --port 8502          Use a custom port
  python -m qa_pulse --csv data.csv       Auto-load a different CSV
  python -m qa_pulse --check data.csv     Print resolved metrics and exit
        """
    )

    parser.add_argument(
        '--port',
        type=int,
        default=8501,
        help='Port for Streamlit dashboard (default: 8501)'
    )

    parser.add_argument(
        '--csv',
        type=str,
        default=None,
        help=f'Path or http(s) URL of the auto-loaded CSV (default: {CSV_SOURCE})'
    )

    parser.add_argument(
        '--no-browser',
        action='store_true',
        help='Do not automatically open browser'
    )

    parser.add_argument(
        '--verbose', '-v',
        action='store_true',
        help='Show detailed logging output'
    )

    parser.add_argument(
        '--check',
        type=str,
        metavar='FILE',
        help='Resolve FILE the way the dashboard would, print the metrics and exit'
    )

    parser.add_argument(
        '--version',
        action='version',
        version=f'%(prog)s {__version__}'
    )

    return parser.parse_args(argv)


# ==========================================
# CHECK MODE
# ==========================================

def format_metrics_table(metrics) -> str:
    """Two-column text table of every field plus the derived values."""
    rows = list(metrics.to_dict().items())
    rows += [('failure_rate', metrics.failure_rate), ('pending', metrics.pending)]
    width = max(len(name) for name, _ in rows)
    lines = []
    for name, value in rows:
        shown = f"{value:.2f}%" if isinstance(value, float) else str(value)
        lines.append(f"  {name.ljust(width)}  {shown:>10}")
    return "\n".join(lines)


def check_file(path: str) -> bool:
    """
    Load ``path`` the way the dashboard does and print the resolved metrics.

    A local ``.xlsx`` goes through the upload path (first sheet); anything
    else, including URLs, through the auto-load path.

    Returns:
        True if the metrics came from the document, False if defaults (or a
        previous value) would be shown instead.
    """
    if path.lower().endswith('.xlsx'):
        file_path = Path(path)
        if not file_path.is_file():
            print(f"❌ File not found: {path}")
            return False
        outcome = load_upload(file_path.name, file_path.read_bytes())
    else:
        outcome = load_document(path)

    print()
    print("=" * 60)
    print(f"  🧪 QA PULSE - {path}")
    print("=" * 60)
    print(f"  Status: {outcome.status.value}")
    if outcome.message:
        print(f"  {outcome.message}")
    print("-" * 60)
    print(format_metrics_table(outcome.metrics))
    print("=" * 60)
    print()

    return outcome.status is LoadStatus.LOADED


# ==========================================
# DASHBOARD MODE
# ==========================================

def port_in_use(port: int) -> bool:
    with socket.socket(socket.AF_INET, socket.SOCK_STREAM) as sock:
        return sock.connect_ex(('localhost', port)) == 0


def launch_dashboard(port: int = 8501, csv_source: str = None, open_browser: bool = True) -> bool:
    """
    Launch the Streamlit dashboard as a managed subprocess.

    Streamlit runs headless; the browser is opened from a daemon thread after
    a 3-second delay.  An atexit handler terminates the server so it never
    outlives this process.

    Args:
        port: TCP port for the Streamlit HTTP server.
        csv_source: Path or URL of the auto-loaded CSV (optional).
        open_browser: Open http://localhost:{port} once the server is up.

    Returns:
        True if the dashboard ran and exited cleanly (including Ctrl+C),
        False on errors.
    """
    print()
    print("=" * 60)
    print("  🌐 Launching QA Pulse Dashboard")
    print("=" * 60)
    print()

    dashboard_path = get_dashboard_path()
    if not dashboard_path.exists():
        print(f"❌ Error: Dashboard not found at {dashboard_path}")
        return False

    try:
        if port_in_use(port):
            print(f"⚠️  Port {port} is already in use")
            print("   Please use a different port with --port flag")
            return False
    except OSError as e:
        logger.warning(f"Could not check port status: {e}")

    print(f"  📊 Starting Streamlit server on port {port}...")
    print(f"  🔗 URL: http://localhost:{port}")
    if csv_source:
        print(f"  📄 CSV source: {csv_source}")
    print()
    print("  Press Ctrl+C to stop the dashboard")
    print("-" * 60)
    sys.stdout.flush()

    cmd = build_streamlit_command(port=port, headless=True)
    logger.info(f"Starting dashboard: {' '.join(cmd)}")

    streamlit_process = None

    def cleanup():
        """Terminate the Streamlit subprocess, killing it after 5 seconds."""
        nonlocal streamlit_process
        if streamlit_process and streamlit_process.poll() is None:
            print("\n🧹 Cleaning up dashboard process...")
            streamlit_process.terminate()
            try:
                streamlit_process.wait(timeout=5)
            except subprocess.TimeoutExpired:
                print("   Force killing process...")
                streamlit_process.kill()

    atexit.register(cleanup)

    try:
        if open_browser:
            def open_browser_delayed():
                time.sleep(3)
                try:
                    webbrowser.open(f"http://localhost:{port}")
                except webbrowser.Error as e:
                    logger.warning(f"Failed to open browser: {e}")

            threading.Thread(target=open_browser_delayed, daemon=True).start()

        streamlit_process = subprocess.Popen(cmd, env=build_environment(csv_source))
        streamlit_process.wait()
        return True

    except KeyboardInterrupt:
        print("\n\n✅ Dashboard stopped by user.")
        cleanup()
        return True
    except FileNotFoundError:
        print("\n❌ Streamlit not found. Install with: pip install streamlit plotly")
        return False
    except Exception as e:
        print(f"\n❌ Error launching dashboard: {e}")
        logger.error("Dashboard launch failed", exc_info=True)
        cleanup()
        return False


def main(argv=None):
    """Parse CLI args and dispatch to check mode or dashboard mode."""
    args = parse_args(argv)
    setup_logging(verbose=args.verbose)

    if args.check:
        sys.exit(0 if check_file(args.check) else 1)

    success = launch_dashboard(
        port=args.port,
        csv_source=args.csv,
        open_browser=not args.no_browser,
    )
    sys.exit(0 if success else 1)


if __name__ == "__main__":
    main()
