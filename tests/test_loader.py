"""
Unit tests for qa_pulse.data.loader

Tests the document path end to end:
- Reading local files and http(s) sources (requests mocked)
- Parsing CSV and workbook documents
- Load outcomes for missing, blank, header-only and malformed documents
- Uploads keeping the displayed metrics on failure
"""

import os
import unittest
from unittest.mock import patch, MagicMock

import requests

from qa_pulse.data.loader import (
    ParseFailureError,
    SourceUnavailableError,
    first_record,
    is_remote,
    load_document,
    load_project_metrics,
    load_upload,
    parse_document,
    read_source,
)
from qa_pulse.metrics.resolver import default_metrics, resolve_metrics
from qa_pulse.models.data_models import LoadStatus

from tests.fixtures.sample_data import (
    CP1252_CSV_BYTES,
    HEADER_ONLY_CSV,
    MALFORMED_CSV,
    SAMPLE_CSV,
    SAMPLE_CSV_ALIASED,
    TRAILING_COMMA_CSV,
    create_sample_csv_file,
    create_sample_excel_bytes,
)


def _response(status_code=200, text=SAMPLE_CSV):
    response = MagicMock()
    response.status_code = status_code
    response.ok = 200 <= status_code < 300
    response.text = text
    return response


class TestReadSource(unittest.TestCase):
    """Test suite for reading documents from disk and http(s)."""

    def setUp(self):
        self.csv_file = create_sample_csv_file()

    def tearDown(self):
        if self.csv_file.exists():
            os.remove(self.csv_file)

    def test_read_local_file(self):
        text = read_source(self.csv_file)
        self.assertIn('Total Test Cases', text)

    def test_missing_file_raises(self):
        with self.assertRaises(SourceUnavailableError):
            read_source(str(self.csv_file) + '.missing')

    def test_blank_file_raises(self):
        self.csv_file.write_text("  \n\n")
        with self.assertRaises(SourceUnavailableError):
            read_source(self.csv_file)

    def test_is_remote(self):
        self.assertTrue(is_remote('https://example.org/dashboard.csv'))
        self.assertTrue(is_remote('HTTP://example.org/dashboard.csv'))
        self.assertFalse(is_remote('dashboard.csv'))

    @patch('qa_pulse.data.loader.requests.get')
    def test_read_url(self, mock_get):
        mock_get.return_value = _response()
        text = read_source('https://example.org/dashboard.csv', timeout=3)
        self.assertEqual(text, SAMPLE_CSV)
        mock_get.assert_called_once_with('https://example.org/dashboard.csv', timeout=3)

    @patch('qa_pulse.data.loader.requests.get')
    def test_url_not_found_raises(self, mock_get):
        mock_get.return_value = _response(status_code=404, text='')
        with self.assertRaises(SourceUnavailableError) as context:
            read_source('https://example.org/dashboard.csv')
        self.assertIn('404', str(context.exception))

    @patch('qa_pulse.data.loader.requests.get')
    def test_network_error_raises(self, mock_get):
        mock_get.side_effect = requests.ConnectionError('refused')
        with self.assertRaises(SourceUnavailableError):
            read_source('https://example.org/dashboard.csv')


class TestParseDocument(unittest.TestCase):
    """Test suite for parsing and first-row extraction."""

    def test_headers_are_stripped(self):
        df = parse_document(SAMPLE_CSV_ALIASED)
        self.assertIn('Test Cases', df.columns)
        self.assertIn('Running', df.columns)

    def test_first_record_types_numbers(self):
        record = first_record(parse_document(SAMPLE_CSV))
        self.assertEqual(record['Total Test Cases'], 200)
        self.assertIsInstance(record['Total Test Cases'], int)
        self.assertEqual(record['% Execution'], '75.00%')

    def test_only_first_row_is_used(self):
        text = SAMPLE_CSV + "999,999,999,999,999,999,999,1%,1%\n"
        record = first_record(parse_document(text))
        self.assertEqual(record['Total Test Cases'], 200)

    def test_blank_lines_skipped(self):
        text = "Total Test Cases,Total Executed\n\n\n50,40\n"
        record = first_record(parse_document(text))
        self.assertEqual(record, {'Total Test Cases': 50, 'Total Executed': 40})

    def test_missing_cell_becomes_none(self):
        record = first_record(parse_document("Total Test Cases,Total Executed\n50,\n"))
        self.assertIsNone(record['Total Executed'])

    def test_header_only_has_no_record(self):
        self.assertIsNone(first_record(parse_document(HEADER_ONLY_CSV)))

    def test_bytes_with_bom(self):
        df = parse_document(('\ufeff' + SAMPLE_CSV).encode('utf-8'))
        self.assertEqual(df.columns[0], 'Total Test Cases')

    def test_trailing_comma_keeps_header_alignment(self):
        record = first_record(parse_document(TRAILING_COMMA_CSV))
        self.assertEqual(record['Total Test Cases'], 100)
        self.assertEqual(record['Total Executed'], 80)
        self.assertEqual(record['Total Passed'], 70)

    def test_undecodable_bytes_are_replaced(self):
        record = first_record(parse_document(CP1252_CSV_BYTES))
        self.assertEqual(record['Total Test Cases'], 100)

    def test_malformed_csv_raises(self):
        with self.assertRaises(ParseFailureError):
            parse_document(MALFORMED_CSV)

    def test_workbook_upload(self):
        record = first_record(parse_document(create_sample_excel_bytes(), filename='summary.xlsx'))
        self.assertEqual(record['Total Test Cases'], 200)

    def test_corrupt_workbook_raises(self):
        with self.assertRaises(ParseFailureError):
            parse_document(b'not a workbook', filename='summary.xlsx')


class TestLoadDocument(unittest.TestCase):
    """Test suite for the auto-load event."""

    def setUp(self):
        self.csv_file = create_sample_csv_file()

    def tearDown(self):
        if self.csv_file.exists():
            os.remove(self.csv_file)

    def test_loaded(self):
        outcome = load_document(self.csv_file)
        self.assertEqual(outcome.status, LoadStatus.LOADED)
        self.assertTrue(outcome.from_document)
        self.assertEqual(outcome.metrics.total_cases, 200)
        self.assertAlmostEqual(outcome.metrics.execution_rate, 75.0)
        self.assertIsNone(outcome.message)

    def test_missing_source_uses_defaults(self):
        outcome = load_document(str(self.csv_file) + '.missing')
        self.assertEqual(outcome.status, LoadStatus.SOURCE_UNAVAILABLE)
        self.assertEqual(outcome.metrics, default_metrics())
        self.assertIn('CSV file not found', outcome.message)
        self.assertFalse(outcome.is_error)

    def test_header_only_is_empty(self):
        self.csv_file.write_text(HEADER_ONLY_CSV)
        outcome = load_document(self.csv_file)
        self.assertEqual(outcome.status, LoadStatus.EMPTY)
        self.assertEqual(outcome.metrics, default_metrics())

    def test_parse_failure_uses_defaults(self):
        self.csv_file.write_text(MALFORMED_CSV)
        outcome = load_document(self.csv_file)
        self.assertEqual(outcome.status, LoadStatus.PARSE_FAILURE)
        self.assertTrue(outcome.is_error)
        self.assertTrue(outcome.message.startswith('CSV parsing failed:'))
        self.assertEqual(outcome.metrics, default_metrics())

    def test_non_utf8_file_is_loaded(self):
        self.csv_file.write_bytes(CP1252_CSV_BYTES)
        outcome = load_document(self.csv_file)
        self.assertEqual(outcome.status, LoadStatus.LOADED)
        self.assertEqual(outcome.metrics.total_cases, 100)

    def test_trailing_comma_file(self):
        self.csv_file.write_text(TRAILING_COMMA_CSV)
        outcome = load_document(self.csv_file)
        self.assertEqual(outcome.status, LoadStatus.LOADED)
        self.assertEqual(outcome.metrics.total_cases, 100)
        self.assertEqual(outcome.metrics.total_executed, 80)
        self.assertAlmostEqual(outcome.metrics.pass_rate, 87.5)

    @patch('qa_pulse.data.loader.requests.get')
    def test_url_source(self, mock_get):
        mock_get.return_value = _response(text=SAMPLE_CSV_ALIASED)
        outcome = load_document('https://example.org/dashboard.csv')
        self.assertEqual(outcome.status, LoadStatus.LOADED)
        self.assertEqual(outcome.metrics.total_cases, 100)
        self.assertEqual(outcome.metrics.in_progress, 1)

    @patch('qa_pulse.data.loader.load_document')
    def test_only_autoload_project_reads_document(self, mock_load):
        outcome = load_project_metrics('model-h')
        mock_load.assert_not_called()
        self.assertEqual(outcome.status, LoadStatus.DEFAULT)
        self.assertEqual(outcome.metrics, default_metrics())

    def test_autoload_project_reads_document(self):
        outcome = load_project_metrics('model-i', source=self.csv_file)
        self.assertEqual(outcome.status, LoadStatus.LOADED)


class TestLoadUpload(unittest.TestCase):
    """Test suite for manual uploads."""

    def setUp(self):
        self.current = resolve_metrics({'Total Test Cases': 10})

    def test_upload_replaces_metrics(self):
        outcome = load_upload('dashboard.csv', SAMPLE_CSV.encode(), current=self.current)
        self.assertEqual(outcome.status, LoadStatus.LOADED)
        self.assertEqual(outcome.metrics.total_cases, 200)

    def test_trailing_comma_upload(self):
        outcome = load_upload('t.csv', TRAILING_COMMA_CSV.encode(), current=self.current)
        self.assertEqual(outcome.status, LoadStatus.LOADED)
        self.assertEqual(outcome.metrics.total_cases, 100)
        self.assertEqual(outcome.metrics.total_passed, 70)

    def test_non_utf8_upload(self):
        outcome = load_upload('export.csv', CP1252_CSV_BYTES, current=self.current)
        self.assertEqual(outcome.status, LoadStatus.LOADED)
        self.assertEqual(outcome.metrics.total_cases, 100)

    def test_parse_failure_keeps_current(self):
        outcome = load_upload('bad.csv', MALFORMED_CSV.encode(), current=self.current)
        self.assertEqual(outcome.status, LoadStatus.PARSE_FAILURE)
        self.assertIs(outcome.metrics, self.current)
        self.assertTrue(outcome.message.startswith('Failed to parse uploaded file:'))

    def test_header_only_keeps_current(self):
        outcome = load_upload('empty.csv', HEADER_ONLY_CSV.encode(), current=self.current)
        self.assertEqual(outcome.status, LoadStatus.EMPTY)
        self.assertIs(outcome.metrics, self.current)

    def test_empty_payload_without_current_uses_defaults(self):
        outcome = load_upload('empty.csv', b'')
        self.assertEqual(outcome.status, LoadStatus.EMPTY)
        self.assertEqual(outcome.metrics, default_metrics())

    def test_workbook_upload(self):
        outcome = load_upload('summary.xlsx', create_sample_excel_bytes())
        self.assertEqual(outcome.status, LoadStatus.LOADED)
        self.assertEqual(outcome.metrics.need_to_retest, 8)


if __name__ == '__main__':
    unittest.main()
