"""
QA Pulse - Document Loading
===========================

This module is the single entry point for getting a CSV document into the
dashboard.  It reads the document (from disk, over http(s), or from the
Streamlit upload widget), parses it with pandas, hands the **first** data
row to the metrics resolver, and reports how the load went.

Data Flow
---------
1. Source  -->  raw text            (``read_source``)
2. Raw text / bytes  -->  DataFrame (``parse_document``)
   - header row gives the field names, stripped of surrounding whitespace
   - cells are typed automatically (numbers become numbers)
   - blank lines are skipped
3. ``DataFrame.iloc[0]``  -->  RawRecord  (``first_record``), NaN -> None
4. RawRecord  -->  TestMetrics     (``qa_pulse.metrics.resolve_metrics``)

Failure policy
--------------
Nothing in this module lets an exception reach the page.  ``load_document``
and ``load_upload`` always return a ``LoadOutcome`` whose metrics can be
rendered:

    Source missing / non-2xx / blank   -> SOURCE_UNAVAILABLE, default metrics
    Parser error                       -> PARSE_FAILURE, default metrics
                                          (upload: previous metrics kept)
    Header row only                    -> EMPTY, default metrics
                                          (upload: previous metrics kept)
    Individual cell unusable           -> handled per field by the resolver

There is no retry: a failed load is final until the next load event.
"""

import io
import logging
from pathlib import Path
from typing import Any, Dict, Optional, Union

import numpy as np
import pandas as pd
import requests

from qa_pulse.core.config import (
    CSV_SOURCE, FETCH_TIMEOUT_S, AUTOLOAD_PROJECT_ID,
    SOURCE_MISSING_NOTICE, FETCH_PARSE_ERROR, UPLOAD_PARSE_ERROR,
)
from qa_pulse.core.utils import clean_header
from qa_pulse.metrics.resolver import resolve_metrics, default_metrics
from qa_pulse.models.data_models import LoadOutcome, LoadStatus, TestMetrics

logger = logging.getLogger(__name__)


# ============================================================================
# ERRORS
# ============================================================================

class DocumentError(Exception):
    """Base class for document loading failures."""


class SourceUnavailableError(DocumentError):
    """The document could not be read, or it was blank."""


class ParseFailureError(DocumentError):
    """The parser reported a structural error in the document."""


# ============================================================================
# READING
# ============================================================================

def is_remote(source: str) -> bool:
    return str(source).lower().startswith(('http://', 'https://'))


def read_source(source: Union[str, Path] = None, timeout: float = None) -> str:
    """Return the text of a CSV document from a path or an http(s) URL.

    Raises:
        SourceUnavailableError: missing file, non-success HTTP status,
            network error, or a document that is empty / whitespace only.
    """
    source = str(source if source is not None else CSV_SOURCE)
    timeout = FETCH_TIMEOUT_S if timeout is None else timeout

    if is_remote(source):
        logger.info(f"Fetching CSV from {source}")
        try:
            response = requests.get(source, timeout=timeout)
        except requests.RequestException as e:
            raise SourceUnavailableError(f"Could not fetch {source}: {e}") from e
        logger.debug(f"Response status: {response.status_code}")
        if not response.ok:
            raise SourceUnavailableError(
                f"CSV file not found (status: {response.status_code})"
            )
        text = response.text
    else:
        path = Path(source)
        logger.info(f"Reading CSV from {path.resolve()}")
        if not path.is_file():
            raise SourceUnavailableError(f"CSV file not found: {path}")
        try:
            # Undecodable bytes become U+FFFD rather than failing the whole document
            text = path.read_bytes().decode('utf-8-sig', errors='replace')
        except OSError as e:
            raise SourceUnavailableError(f"Cannot read {path}: {e}") from e

    logger.debug(f"CSV content loaded, length: {len(text)}")
    if not text or not text.strip():
        raise SourceUnavailableError("CSV file is empty")
    return text


# ============================================================================
# PARSING
# ============================================================================

def parse_document(document: Union[str, bytes], filename: str = "") -> pd.DataFrame:
    """Parse a CSV (or, by file extension, an .xlsx workbook) into a DataFrame.

    Headers are stripped of surrounding whitespace and blank lines skipped.

    Raises:
        ParseFailureError: the document is not a readable table.
    """
    if filename.lower().endswith('.xlsx'):
        payload = document if isinstance(document, bytes) else document.encode()
        try:
            df = pd.read_excel(io.BytesIO(payload), sheet_name=0)
        except Exception as e:
            raise ParseFailureError(f"Cannot open workbook: {e}") from e
        return _finish(df)

    try:
        if isinstance(document, bytes):
            document = document.decode('utf-8-sig', errors='replace')
        # index_col=False keeps header alignment when rows end with a trailing comma
        df = pd.read_csv(io.StringIO(document), skip_blank_lines=True, index_col=False)
    except pd.errors.EmptyDataError as e:
        raise ParseFailureError("No columns to parse from file") from e
    except (pd.errors.ParserError, ValueError) as e:
        raise ParseFailureError(str(e)) from e

    return _finish(df)


def _finish(df: pd.DataFrame) -> pd.DataFrame:
    df.columns = [clean_header(c) for c in df.columns]
    # Rows with every cell blank carry no data (read_excel keeps them as NaN rows)
    df = df.dropna(how='all')
    logger.debug(f"Parsed {len(df)} data rows, columns: {list(df.columns)}")
    return df


def _to_python(value: Any) -> Any:
    """numpy scalars -> Python scalars, NaN / NaT -> None."""
    if isinstance(value, np.generic):
        value = value.item()
    try:
        if pd.isna(value):
            return None
    except (TypeError, ValueError):
        pass
    return value


def first_record(df: pd.DataFrame) -> Optional[Dict[str, Any]]:
    """The first data row as a RawRecord, or None for a header-only table.

    When stripping whitespace leaves two identical headers, the leftmost
    column wins.
    """
    if df.empty:
        return None
    record = {}
    for column, value in zip(df.columns, df.iloc[0].tolist()):
        key = str(column)
        if key not in record:
            record[key] = _to_python(value)
    logger.info(f"Available columns: {list(record)}")
    return record


# ============================================================================
# LOAD EVENTS
# ============================================================================

def resolve_document(document: Union[str, bytes], filename: str = "") -> Optional[TestMetrics]:
    """Parse a document and resolve its first row.

    Returns None when the document has a header but no data rows.

    Raises:
        ParseFailureError: see ``parse_document``.
    """
    record = first_record(parse_document(document, filename))
    if record is None:
        return None
    return resolve_metrics(record)


def load_document(source: Union[str, Path] = None, timeout: float = None) -> LoadOutcome:
    """Fetch the well-known CSV document and resolve it.

    Never raises.  Any failure yields the default metrics with a status (and
    message) describing what went wrong.
    """
    source = str(source if source is not None else CSV_SOURCE)
    try:
        text = read_source(source, timeout=timeout)
    except SourceUnavailableError as e:
        logger.warning(f"{e}. Using default data.")
        return LoadOutcome(
            metrics=default_metrics(),
            status=LoadStatus.SOURCE_UNAVAILABLE,
            message=SOURCE_MISSING_NOTICE.format(source=source),
            source=source,
        )

    try:
        metrics = resolve_document(text)
    except ParseFailureError as e:
        logger.error(f"CSV parsing errors in {source}: {e}")
        return LoadOutcome(
            metrics=default_metrics(),
            status=LoadStatus.PARSE_FAILURE,
            message=FETCH_PARSE_ERROR.format(error=e),
            source=source,
        )

    if metrics is None:
        logger.warning(f"No data found in {source}. Using default data.")
        return LoadOutcome(metrics=default_metrics(), status=LoadStatus.EMPTY, source=source)

    logger.info(f"Loaded metrics from {source}")
    return LoadOutcome(metrics=metrics, status=LoadStatus.LOADED, source=source)


def load_project_metrics(project_id: str, source: Union[str, Path] = None) -> LoadOutcome:
    """Metrics for a project's dashboard on entry.

    Only ``AUTOLOAD_PROJECT_ID`` reads a document; every other project starts
    from the default metrics straight away.
    """
    if project_id != AUTOLOAD_PROJECT_ID:
        logger.info(f"Using default data for {project_id}")
        return LoadOutcome(metrics=default_metrics(), status=LoadStatus.DEFAULT)
    logger.info(f"Loading CSV data for {project_id}")
    return load_document(source)


def load_upload(filename: str, payload: bytes,
                current: Optional[TestMetrics] = None) -> LoadOutcome:
    """Resolve a user-uploaded document.

    On a parse failure or an empty document the metrics on display
    (``current``) stay as they are; with nothing on display, the defaults
    are used.
    """
    logger.info(f"Manual file upload: {filename}")
    fallback = current if current is not None else default_metrics()

    if not payload or not payload.strip():
        logger.warning(f"Uploaded file {filename} is empty")
        return LoadOutcome(metrics=fallback, status=LoadStatus.EMPTY, source=filename)

    try:
        metrics = resolve_document(payload, filename=filename)
    except ParseFailureError as e:
        logger.error(f"Manual upload error: {e}")
        return LoadOutcome(
            metrics=fallback,
            status=LoadStatus.PARSE_FAILURE,
            message=UPLOAD_PARSE_ERROR.format(error=e),
            source=filename,
        )

    if metrics is None:
        logger.warning(f"No data rows in uploaded file {filename}")
        return LoadOutcome(metrics=fallback, status=LoadStatus.EMPTY, source=filename)

    return LoadOutcome(metrics=metrics, status=LoadStatus.LOADED, source=filename)
