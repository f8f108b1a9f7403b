"""
Data module for QA Pulse.

Reads, parses and resolves CSV documents into load outcomes.
"""

from .loader import (
    DocumentError,
    SourceUnavailableError,
    ParseFailureError,
    read_source,
    parse_document,
    first_record,
    resolve_document,
    load_document,
    load_project_metrics,
    load_upload,
)

__all__ = [
    'DocumentError',
    'SourceUnavailableError',
    'ParseFailureError',
    'read_source',
    'parse_document',
    'first_record',
    'resolve_document',
    'load_document',
    'load_project_metrics',
    'load_upload',
]
