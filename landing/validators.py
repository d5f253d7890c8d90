"""
Email validation for the waitlist form.

A best-effort syntactic filter: it accepts dot-atom or quoted local parts and
either a hostname or a bracketed IPv4 literal as the domain. It does not check
that the address exists.
"""
import re


EMAIL_REGEX = re.compile(
    r'^(([^<>()\[\]\\.,;:\s@"]+(\.[^<>()\[\]\\.,;:\s@"]+)*)|(".+"))'
    r'@((\[[0-9]{1,3}\.[0-9]{1,3}\.[0-9]{1,3}\.[0-9]{1,3}\])'
    r'|(([a-zA-Z\-0-9]+\.)+[a-zA-Z]{2,}))\Z'
)


def validate_email(value):
    """Return True if value looks like an email address."""
    if not isinstance(value, str):
        return False
    return EMAIL_REGEX.match(value) is not None
