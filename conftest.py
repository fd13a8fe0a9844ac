# conftest.py
"""
Pytest configuration and fixtures for the startup pipeline tests.

Living at the repository root puts the root on sys.path, so tests can refer to
helper steps by import path ("tests.helpers.steps:StepA") the same way a
config file would.
"""

import pytest

from tests.helpers import steps as helper_steps


@pytest.fixture(autouse=True)
def step_journal():
    """
    Shared record of step activity.

    Helper steps append "<step_id>:start" / "<step_id>:end" entries here.
    Cleared before and after each test.
    """
    helper_steps.reset_journal()
    yield helper_steps.JOURNAL
    helper_steps.reset_journal()
