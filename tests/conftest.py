import random

import pytest


@pytest.fixture
def rng():
    """Seeded generator so randomized assertions are repeatable."""
    return random.Random(1234)
