"""Pytest configuration and shared fixtures."""

from datetime import date

import pytest

from employee_scheduling.demo_data import generate_demo_data
from employee_scheduling.domain.models import Employee

# Wednesday; the demo roster starts on Monday 2024-06-10
DEMO_REFERENCE_DATE = date(2024, 6, 5)


def pytest_configure(config):
    """Configure pytest."""
    # Add custom markers
    config.addinivalue_line(
        "markers", "integration: marks tests as integration tests (deselect with '-m \"not integration\"')"
    )
    config.addinivalue_line(
        "markers", "slow: marks tests as slow (deselect with '-m \"not slow\"')"
    )


@pytest.fixture
def amy():
    return Employee("Amy")


@pytest.fixture
def beth():
    return Employee("Beth")


@pytest.fixture
def demo_schedule():
    """Small demo instance generated with the default seed."""
    return generate_demo_data(today=DEMO_REFERENCE_DATE)
