"""Shared test fixtures for the payments generator tests."""

import matplotlib
matplotlib.use("Agg")

import pytest

from payment_data.generator import generate


@pytest.fixture
def small_table():
    """20 customers over 4 buckets, 15 kept."""
    return generate(
        seed=7,
        entity_count=20,
        time_buckets=["2018-01", "2018-02", "2018-03", "2018-04"],
        outcome_probability=0.7,
        detail_options=["bank transfer", "check", "credit card"],
        retained_entity_count=15,
    )
