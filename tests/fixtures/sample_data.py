"""
Sample data fixtures for testing

This module provides tracker exports that mimic the summary sheets test
teams drop next to the dashboard, in the header wordings the resolver is
expected to understand.
"""

import io
import tempfile
from pathlib import Path

import pandas as pd


# Header row + one data row, exactly as the main tracker exports it.
SAMPLE_CSV = (
    "Total Test Cases,Total Executed,Total Passed,Total Failed,"
    "Need To Retest,Yet to validate,Total In Progress,% Execution,% Passed\n"
    "200,150,120,20,8,5,3,75.00%,80.00%\n"
)

# Same campaign, alternate wording, padded headers, no rate columns.
SAMPLE_CSV_ALIASED = (
    " Test Cases , Executed , Passed , Failed , Retest , To Validate , Running \n"
    "100,80,70,5,4,2,1\n"
)

HEADER_ONLY_CSV = "Total Test Cases,Total Executed,Total Passed\n"

# Quoted field never closed.
MALFORMED_CSV = 'a,b\n1,2\n"3,4\n'

# Spreadsheet export with a delimiter at the end of each data row.
TRAILING_COMMA_CSV = "Total Test Cases,Total Executed,Total Passed\n100,80,70,\n"

# cp1252 export with a non-ASCII name in an unrelated column.
CP1252_CSV_BYTES = "Total Test Cases,Owner\n100,Ren\u00e9\n".encode('cp1252')


def create_sample_record():
    """
    Create a RawRecord as the loader hands it to the resolver.

    Returns:
        dict: Header -> cell value for one tracker row
    """
    return {
        'Total Test Cases': 200,
        'Total Executed': 150,
        'Total Passed': 120,
        'Total Failed': 20,
        'Need To Retest': 8,
        'Yet to validate': 5,
        'Total In Progress': 3,
    }


def create_sample_csv_file(content=SAMPLE_CSV, suffix='.csv'):
    """
    Write CSV text to a temporary file.

    Args:
        content: CSV text to write
        suffix: File extension

    Returns:
        Path: Path to the created file (caller removes it)
    """
    temp_file = tempfile.NamedTemporaryFile(
        mode='w', suffix=suffix, delete=False, encoding='utf-8', newline=''
    )
    temp_file.write(content)
    temp_file.close()
    return Path(temp_file.name)


def create_sample_excel_bytes():
    """
    Build an .xlsx workbook holding the sample tracker row.

    Returns:
        bytes: Workbook contents, as the upload widget would deliver them
    """
    buffer = io.BytesIO()
    pd.DataFrame([create_sample_record()]).to_excel(buffer, index=False, sheet_name='Summary')
    return buffer.getvalue()
