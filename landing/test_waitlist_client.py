"""
Tests for the waitlist store client.
"""
from unittest.mock import patch, Mock
import requests
from django.test import SimpleTestCase
from landing.factories import SignupRequestFactory
from landing.waitlist_client import (
    WaitlistClient,
    WaitlistAPIError,
    InsertResult,
    classify_error,
    DUPLICATE_KEY,
    OTHER,
)


def _error_response(status_code, body=None, text=''):
    """Build a mock response whose raise_for_status raises HTTPError."""
    response = Mock()
    response.status_code = status_code
    response.text = text
    if body is None:
        response.json.side_effect = ValueError('No JSON object could be decoded')
    else:
        response.json.return_value = body
    response.raise_for_status.side_effect = requests.exceptions.HTTPError(response=response)
    return response


class ClassifyErrorTest(SimpleTestCase):
    """Test duplicate detection on store errors."""

    def test_unique_violation_code_is_duplicate(self):
        self.assertEqual(classify_error('23505', None), DUPLICATE_KEY)

    def test_numeric_code_is_compared_as_text(self):
        self.assertEqual(classify_error(23505, ''), DUPLICATE_KEY)

    def test_duplicate_in_message_is_duplicate(self):
        self.assertEqual(
            classify_error(None, 'duplicate key value violates unique constraint "waitlist_email_key"'),
            DUPLICATE_KEY
        )

    def test_other_errors(self):
        self.assertEqual(classify_error('42501', 'permission denied for table waitlist'), OTHER)
        self.assertEqual(classify_error(None, None), OTHER)
        self.assertEqual(classify_error(None, 'Request timed out. Please try again.'), OTHER)


class InsertResultTest(SimpleTestCase):

    def test_success(self):
        result = InsertResult.success({'email': 'ada@example.com'})
        self.assertTrue(result.ok)
        self.assertFalse(result.is_duplicate)
        self.assertEqual(result.record, {'email': 'ada@example.com'})

    def test_error(self):
        result = InsertResult.error(DUPLICATE_KEY, 'duplicate key')
        self.assertFalse(result.ok)
        self.assertTrue(result.is_duplicate)
        self.assertEqual(result.detail, 'duplicate key')


class WaitlistClientInsertTest(SimpleTestCase):
    """Test inserting signups through the REST endpoint."""

    def setUp(self):
        self.client = WaitlistClient(
            base_url='https://project.supabase.co/',
            api_key='anon-key',
            table='waitlist',
            timeout=5,
        )
        self.signup = SignupRequestFactory(
            name='Ada',
            email='ada@example.com',
            interests='tech',
        )

    def test_headers_carry_anon_key(self):
        self.assertEqual(self.client.headers['apikey'], 'anon-key')
        self.assertEqual(self.client.headers['Authorization'], 'Bearer anon-key')
        self.assertEqual(self.client.headers['Prefer'], 'return=minimal')

    @patch('landing.waitlist_client.requests.request')
    def test_insert_posts_one_record(self, mock_request):
        mock_response = Mock()
        mock_response.status_code = 201
        mock_response.content = b''
        mock_request.return_value = mock_response

        result = self.client.insert(self.signup)

        self.assertTrue(result.ok)
        self.assertEqual(result.record, {'name': 'Ada', 'email': 'ada@example.com', 'interests': 'tech'})
        mock_request.assert_called_once_with(
            'post',
            'https://project.supabase.co/rest/v1/waitlist',
            json=[{'name': 'Ada', 'email': 'ada@example.com', 'interests': 'tech'}],
            headers=self.client.headers,
            timeout=5,
        )

    @patch('landing.waitlist_client.requests.request')
    def test_unique_violation_is_duplicate(self, mock_request):
        mock_request.return_value = _error_response(409, {
            'code': '23505',
            'details': 'Key (email)=(ada@example.com) already exists.',
            'hint': None,
            'message': 'duplicate key value violates unique constraint "waitlist_email_key"',
        })

        with self.assertLogs('landing.waitlist_client', level='ERROR'):
            result = self.client.insert(self.signup)

        self.assertFalse(result.ok)
        self.assertEqual(result.kind, DUPLICATE_KEY)
        self.assertIn('duplicate key', result.detail)

    @patch('landing.waitlist_client.requests.request')
    def test_duplicate_message_without_code_is_duplicate(self, mock_request):
        mock_request.return_value = _error_response(400, {
            'message': 'duplicate entry for email',
        })

        with self.assertLogs('landing.waitlist_client', level='ERROR'):
            result = self.client.insert(self.signup)

        self.assertEqual(result.kind, DUPLICATE_KEY)

    @patch('landing.waitlist_client.requests.request')
    def test_other_http_error(self, mock_request):
        mock_request.return_value = _error_response(401, {
            'code': '42501',
            'message': 'new row violates row-level security policy for table "waitlist"',
        })

        with self.assertLogs('landing.waitlist_client', level='ERROR'):
            result = self.client.insert(self.signup)

        self.assertFalse(result.ok)
        self.assertEqual(result.kind, OTHER)

    @patch('landing.waitlist_client.requests.request')
    def test_non_json_error_body(self, mock_request):
        mock_request.return_value = _error_response(502, text='Bad Gateway')

        with self.assertLogs('landing.waitlist_client', level='ERROR'):
            result = self.client.insert(self.signup)

        self.assertEqual(result.kind, OTHER)
        self.assertEqual(result.detail, 'API error: 502')

    @patch('landing.waitlist_client.requests.request')
    def test_timeout_is_other(self, mock_request):
        mock_request.side_effect = requests.exceptions.Timeout()

        with self.assertLogs('landing.waitlist_client', level='ERROR'):
            result = self.client.insert(self.signup)

        self.assertEqual(result.kind, OTHER)
        self.assertEqual(result.detail, 'Request timed out. Please try again.')

    @patch('landing.waitlist_client.requests.request')
    def test_connection_error_is_other(self, mock_request):
        mock_request.side_effect = requests.exceptions.ConnectionError()

        with self.assertLogs('landing.waitlist_client', level='ERROR'):
            result = self.client.insert(self.signup)

        self.assertEqual(result.kind, OTHER)

    @patch('landing.waitlist_client.requests.request')
    def test_other_request_failures_are_other(self, mock_request):
        for error in [
            requests.exceptions.ChunkedEncodingError('broken'),
            requests.exceptions.TooManyRedirects('loop'),
            requests.exceptions.ContentDecodingError('bad gzip'),
            requests.exceptions.RequestException('unknown'),
        ]:
            with self.subTest(error=error.__class__.__name__):
                mock_request.side_effect = error

                with self.assertLogs('landing.waitlist_client', level='ERROR'):
                    result = self.client.insert(self.signup)

                self.assertFalse(result.ok)
                self.assertEqual(result.kind, OTHER)
                self.assertEqual(result.detail, 'Request to the waitlist store failed.')

    @patch('landing.waitlist_client.requests.request')
    def test_make_request_decodes_json_body(self, mock_request):
        mock_response = Mock()
        mock_response.content = b'[{"email": "ada@example.com"}]'
        mock_response.json.return_value = [{'email': 'ada@example.com'}]
        mock_request.return_value = mock_response

        data = self.client._make_request('get', '/rest/v1/waitlist')

        self.assertEqual(data, [{'email': 'ada@example.com'}])

    @patch('landing.waitlist_client.requests.request')
    def test_make_request_raises_on_bad_json(self, mock_request):
        mock_response = Mock()
        mock_response.content = b'<html>'
        mock_response.json.side_effect = ValueError('Expecting value')
        mock_request.return_value = mock_response

        with self.assertLogs('landing.waitlist_client', level='ERROR'):
            with self.assertRaises(WaitlistAPIError):
                self.client._make_request('get', '/rest/v1/waitlist')


class UnconfiguredClientTest(SimpleTestCase):

    def test_missing_configuration_logs_warning(self):
        with self.assertLogs('landing.waitlist_client', level='WARNING') as logs:
            WaitlistClient(base_url='', api_key='')

        self.assertIn('not configured', logs.output[0])

    @patch('landing.waitlist_client.requests.request')
    def test_insert_fails_without_calling_store(self, mock_request):
        with self.assertLogs('landing.waitlist_client', level='WARNING'):
            client = WaitlistClient(base_url='', api_key='')

        result = client.insert(SignupRequestFactory())

        self.assertFalse(result.ok)
        self.assertEqual(result.kind, OTHER)
        mock_request.assert_not_called()
