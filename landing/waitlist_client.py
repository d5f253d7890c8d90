"""
Client for the hosted waitlist table.

Talks to a PostgREST-compatible REST endpoint (Supabase) using the anon key.
Remote failures are turned into an InsertResult here, where the call returns,
so callers never inspect raw error payloads.
"""
import requests
import logging
from django.conf import settings


logger = logging.getLogger(__name__)

# Postgres unique_violation SQLSTATE
UNIQUE_VIOLATION_CODE = '23505'

DUPLICATE_KEY = 'duplicate_key'
OTHER = 'other'


class WaitlistAPIError(Exception):
    """Raised when a request to the waitlist store fails."""

    def __init__(self, message, code=None, status_code=None):
        super().__init__(message)
        self.message = message
        self.code = code
        self.status_code = status_code


def classify_error(code, message):
    """
    Decide whether a store error means the email is already registered.

    Args:
        code: Error code reported by the store (may be None)
        message: Error message reported by the store (may be None)

    Returns:
        str: DUPLICATE_KEY or OTHER
    """
    if code is not None and str(code) == UNIQUE_VIOLATION_CODE:
        return DUPLICATE_KEY
    if message and 'duplicate' in message:
        return DUPLICATE_KEY
    return OTHER


class InsertResult:
    """Outcome of an insert: either ok with the record, or an error kind with detail."""

    def __init__(self, ok, record=None, kind=None, detail=''):
        self.ok = ok
        self.record = record
        self.kind = kind
        self.detail = detail

    @classmethod
    def success(cls, record):
        return cls(True, record=record)

    @classmethod
    def error(cls, kind, detail=''):
        return cls(False, kind=kind, detail=detail)

    @property
    def is_duplicate(self):
        return not self.ok and self.kind == DUPLICATE_KEY

    def __repr__(self):
        if self.ok:
            return f'<InsertResult ok record={self.record!r}>'
        return f'<InsertResult error kind={self.kind} detail={self.detail!r}>'


class WaitlistClient:
    """Client for inserting signups into the remote waitlist table."""

    def __init__(self, base_url=None, api_key=None, table=None, timeout=None):
        self.base_url = (base_url if base_url is not None else settings.SUPABASE_URL).rstrip('/')
        self.api_key = api_key if api_key is not None else settings.SUPABASE_ANON_KEY
        self.table = table or settings.WAITLIST_TABLE
        self.timeout = timeout or settings.WAITLIST_REQUEST_TIMEOUT

        if not self.base_url or not self.api_key:
            logger.warning("SUPABASE_URL or SUPABASE_ANON_KEY not configured")

        self.headers = {
            'apikey': self.api_key,
            'Authorization': f'Bearer {self.api_key}',
            'Content-Type': 'application/json',
            'Prefer': 'return=minimal',
        }

    def _make_request(self, method, endpoint, **kwargs):
        """
        Make HTTP request to the store with error handling.

        Args:
            method: HTTP method ('get', 'post', ...)
            endpoint: REST path (e.g., '/rest/v1/waitlist')
            **kwargs: Additional arguments to pass to requests

        Returns:
            Decoded JSON body, or None when the response has no body

        Raises:
            WaitlistAPIError: If the request fails
        """
        if not self.base_url:
            raise WaitlistAPIError("Waitlist store is not configured.")

        url = f"{self.base_url}{endpoint}"
        kwargs.setdefault('headers', self.headers)
        kwargs.setdefault('timeout', self.timeout)

        try:
            response = requests.request(method, url, **kwargs)
            response.raise_for_status()
            if not response.content:
                return None
            return response.json()
        except requests.exceptions.Timeout:
            logger.error(f"Waitlist request timeout: {method} {url}")
            raise WaitlistAPIError("Request timed out. Please try again.")
        except requests.exceptions.ConnectionError:
            logger.error(f"Waitlist connection error: {method} {url}")
            raise WaitlistAPIError("Unable to connect to the waitlist store.")
        except requests.exceptions.HTTPError as e:
            status_code = e.response.status_code
            logger.error(f"Waitlist HTTP error: {status_code} {url} - {e.response.text}")
            code = None
            try:
                error_data = e.response.json()
                code = error_data.get('code')
                error_msg = error_data.get('message') or error_data.get('error') or str(e)
            except (ValueError, AttributeError):
                error_msg = f"API error: {status_code}"
            raise WaitlistAPIError(error_msg, code=code, status_code=status_code)
        except ValueError as e:
            logger.error(f"Waitlist JSON decode error: {url} - {str(e)}")
            raise WaitlistAPIError("Invalid response from server.")
        except requests.exceptions.RequestException as e:
            logger.error(f"Waitlist request failed: {method} {url} - {e.__class__.__name__}: {str(e)}")
            raise WaitlistAPIError("Request to the waitlist store failed.")

    def insert(self, signup):
        """
        Insert one signup into the waitlist table.

        Args:
            signup: SignupRequest (or any object with as_record())

        Returns:
            InsertResult: success with the sent record, or an error with its kind
        """
        record = signup.as_record()
        endpoint = f"/rest/v1/{self.table}"

        try:
            self._make_request('post', endpoint, json=[record])
        except WaitlistAPIError as e:
            return InsertResult.error(classify_error(e.code, e.message), e.message)

        return InsertResult.success(record)


# Singleton instance
waitlist_client = WaitlistClient()
