"""
Waitlist signup workflow.

SignupForm holds the state of one signup form (field values, the email error,
the in-progress flag and the last outcome) and runs the submit workflow:
validate the email locally, insert the record remotely, then reset the form on
success or keep the values for a retry on failure.
"""
import logging
from .validators import validate_email
from .waitlist_client import waitlist_client

logger = logging.getLogger(__name__)

FIELDS = ('name', 'email', 'interests')

INVALID_EMAIL_MESSAGE = 'Please enter a valid email address'
SUCCESS_MESSAGE = "Thanks for joining! We'll be in touch soon."
DUPLICATE_MESSAGE = 'This email is already on our waitlist.'
GENERIC_FAILURE_MESSAGE = 'Something went wrong. Please try again.'


class SubmissionInProgress(Exception):
    """Raised when submit() is called while a submission is outstanding."""
    pass


class SignupRequest:
    """The name, email and interests a visitor enters."""

    def __init__(self, name='', email='', interests=''):
        self.name = name
        self.email = email
        self.interests = interests

    def as_record(self):
        return {
            'name': self.name,
            'email': self.email,
            'interests': self.interests,
        }

    def __eq__(self, other):
        if not isinstance(other, SignupRequest):
            return NotImplemented
        return self.as_record() == other.as_record()

    def __repr__(self):
        return f'<SignupRequest {self.email!r}>'


class SubmitStatus:
    """Outcome of the last submission. success is None until something was submitted."""

    def __init__(self, success=None, message=''):
        self.success = success
        self.message = message

    @property
    def is_set(self):
        return self.success is not None

    def as_dict(self):
        return {'success': self.success, 'message': self.message}

    def __eq__(self, other):
        if not isinstance(other, SubmitStatus):
            return NotImplemented
        return self.as_dict() == other.as_dict()

    def __repr__(self):
        return f'<SubmitStatus success={self.success} message={self.message!r}>'


class SignupForm:
    """State and operations of the waitlist signup form."""

    def __init__(self, client=None):
        self.client = client or waitlist_client
        self.data = SignupRequest()
        self.errors = {}
        self.is_submitting = False
        self.status = SubmitStatus()

    def update_field(self, field_id, value):
        """
        Set one field. Editing the email clears a recorded email error; the
        address is only checked again on the next submit.
        """
        if field_id not in FIELDS:
            raise ValueError(f"Unknown signup field: {field_id}")

        setattr(self.data, field_id, value)

        if field_id == 'email' and self.errors.get('email'):
            del self.errors['email']

    @staticmethod
    def validate_email(value):
        return validate_email(value)

    def submit(self):
        """
        Validate and send the signup to the waitlist store.

        Returns:
            SubmitStatus: the outcome (unchanged if the email was rejected locally)

        Raises:
            SubmissionInProgress: If a submission from this form is outstanding
        """
        if self.is_submitting:
            raise SubmissionInProgress("A submission is already in progress.")

        if not self.validate_email(self.data.email):
            self.errors = {'email': INVALID_EMAIL_MESSAGE}
            return self.status

        self.is_submitting = True
        self.status = SubmitStatus()
        self.errors = {}

        try:
            result = self.client.insert(self.data)

            if result.ok:
                logger.info(f"Waitlist signup recorded for {self.data.email}")
                self.status = SubmitStatus(True, SUCCESS_MESSAGE)
                self.data = SignupRequest()
            else:
                logger.error(f"Error submitting waitlist form: {result.kind} - {result.detail}")
                if result.is_duplicate:
                    self.status = SubmitStatus(False, DUPLICATE_MESSAGE)
                else:
                    self.status = SubmitStatus(False, GENERIC_FAILURE_MESSAGE)
        finally:
            self.is_submitting = False

        return self.status
