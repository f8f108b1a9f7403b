"""Shared test data for the QA Pulse test suite."""
