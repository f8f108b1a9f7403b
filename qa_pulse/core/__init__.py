"""
Core module for QA Pulse.

Contains configuration and shared numeric helpers.
"""

from qa_pulse.core.config import *
from qa_pulse.core.utils import coerce_number, clean_header, safe_percent

__all__ = [
    'coerce_number',
    'clean_header',
    'safe_percent',
]
