"""
QA Pulse Test Suite

This package contains unit tests and fixtures for the QA Pulse dashboard.

Run tests with:
    pytest tests/
    pytest tests/test_resolver.py -v
    pytest tests/test_loader.py::TestLoadDocument -v
"""

__version__ = "1.0.0"
