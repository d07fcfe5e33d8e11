"""Shared fixtures for the path tracer tests."""

import pytest

from pathtracer.core.utils import make_rng


@pytest.fixture
def rng():
    """A seeded generator so sampled tests are repeatable."""
    return make_rng(1234)
