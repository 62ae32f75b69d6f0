from __future__ import annotations

import pytest

from testcase_parser.ids import IdFactory


@pytest.fixture()
def ids() -> IdFactory:
    """An id source with a fixed stamp so ids are predictable."""
    return IdFactory(stamp="t")


@pytest.fixture()
def login_feature() -> str:
    return (
        "Feature: Login\n"
        "Scenario: Valid login\n"
        "Given user is on login page\n"
        "When user enters valid credentials\n"
        "Then user should be logged in\n"
    )


@pytest.fixture()
def login_steps() -> str:
    return (
        "Title: Login Test\n"
        "Preconditions: User has an account\n"
        "Steps:\n"
        "1. Enter username\n"
        "Expected: Username field is filled\n"
        "2. Click submit\n"
        "Expected Result: User is redirected\n"
    )
