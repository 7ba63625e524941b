"""
Shared pytest fixtures for the SpendWise test suite.

Key Concepts Demonstrated:
- Fixture scopes (function, session)
- Test data factories (Faker)
"""

import pytest
from faker import Faker


# Initialize Faker for generating test data
fake = Faker()


@pytest.fixture
def faker_name():
    """
    Factory for short, unique-looking display names.

    Returns:
        Function returning a new capitalised word on each call.
    """

    def _make() -> str:
        return fake.unique.word().capitalize()

    return _make
