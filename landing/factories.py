"""
Factory definitions for waitlist signups
"""
import factory
from .signup import SignupRequest


class SignupRequestFactory(factory.Factory):
    """Factory for creating signup requests"""

    class Meta:
        model = SignupRequest

    name = factory.Faker('first_name')
    email = factory.Sequence(lambda n: f'reader{n}@example.com')
    interests = 'Technology, Business'
