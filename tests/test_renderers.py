from __future__ import annotations

from testcase_parser import models
from testcase_parser.bdd.models import BDDFeature, BDDScenario, BDDStep, StepType
from testcase_parser.bdd.parser import parse_bdd_text
from testcase_parser.bdd.renderer import feature_file_name, to_gherkin, write_features
from testcase_parser.parsing.step_by_step import parse_step_by_step_text
from testcase_parser.rendering.step_renderer import to_step_text, write_step_cases


def _login_feature() -> BDDFeature:
    return BDDFeature(
        title="Login: Valid login",
        description="As a user\nI want to sign in",
        scenarios=[
            BDDScenario(
                id="scenario-1",
                title="Valid login",
                steps=[
                    BDDStep(type=StepType.GIVEN, content="a registered user"),
                    BDDStep(type=StepType.WHEN, content="they submit valid credentials"),
                    BDDStep(type=StepType.THEN, content="the dashboard is shown"),
                    BDDStep(type=StepType.AND, content="a welcome message appears"),
                ],
            )
        ],
    )


def _login_case() -> models.StepByStepTestCase:
    return models.StepByStepTestCase(
        title="Login",
        description="Checks the login flow",
        preconditions="User exists",
        expected_outcome="User is logged in",
        steps=[
            models.TestStep(id="a", description="Enter username", expected_result="Field is filled"),
            models.TestStep(id="b", description="Click submit"),
        ],
    )


def test_to_gherkin():
    assert to_gherkin(_login_feature()) == (
        "Feature: Login: Valid login\n"
        "  As a user\n"
        "  I want to sign in\n"
        "  Scenario: Valid login\n"
        "    Given a registered user\n"
        "    When they submit valid credentials\n"
        "    Then the dashboard is shown\n"
        "    And a welcome message appears\n"
    )


def test_gherkin_reparses_to_same_content():
    original = _login_feature()

    parsed = parse_bdd_text(to_gherkin(original))

    assert parsed.title == original.title
    assert parsed.description == original.description
    assert [s.title for s in parsed.scenarios] == ["Valid login"]
    assert parsed.scenarios[0].steps == original.scenarios[0].steps


def test_feature_file_name():
    assert feature_file_name(_login_feature(), 3) == "003_login_valid_login.feature"
    assert feature_file_name(BDDFeature(), 1) == "001_untitled.feature"


def test_write_features(tmp_path):
    seen = []

    written = write_features([_login_feature()], tmp_path / "out", progress_callback=lambda i, t, p: seen.append((i, t)))

    assert [p.name for p in written] == ["001_login_valid_login.feature"]
    assert written[0].read_text(encoding="utf-8").startswith("Feature: Login: Valid login\n")
    assert seen == [(1, 1)]


def test_step_text_layout():
    text = to_step_text(_login_case())

    assert text.splitlines() == [
        "Title: Login",
        "Description: Checks the login flow",
        "Preconditions: User exists",
        "Steps:",
        "1. Enter username",
        "Expected: Field is filled",
        "2. Click submit",
        "Expected Outcome: User is logged in",
    ]


def test_step_text_reparses_to_same_content():
    original = _login_case()

    parsed = parse_step_by_step_text(to_step_text(original))

    assert parsed.title == original.title
    assert parsed.description == original.description
    assert parsed.preconditions == original.preconditions
    assert parsed.expected_outcome == original.expected_outcome
    assert [(s.description, s.expected_result) for s in parsed.steps] == [
        ("Enter username", "Field is filled"),
        ("Click submit", None),
    ]


def test_write_step_cases(tmp_path):
    written = write_step_cases([_login_case()], tmp_path)

    assert [p.name for p in written] == ["001_login.txt"]
    assert written[0].read_text(encoding="utf-8").startswith("Title: Login\n")


def test_step_text_keeps_keyword_led_first_lines_and_result_prefix():
    original = models.StepByStepTestCase(
        title="Guest checkout",
        description="Steps below cover guest users\nand returning buyers",
        preconditions="Title search is enabled",
        expected_outcome="Description of the order is stored",
        steps=[
            models.TestStep(id="a", description="Add an item", expected_result="Cart badge shows 1"),
            models.TestStep(id="b", description="Pay", expected_result="Result: ok"),
        ],
    )

    text = to_step_text(original)
    parsed = parse_step_by_step_text(text)

    assert "Expected: Result: Result: ok" in text.splitlines()
    assert parsed.title == original.title
    assert parsed.description == original.description
    assert parsed.preconditions == original.preconditions
    assert parsed.expected_outcome == original.expected_outcome
    assert [(s.description, s.expected_result) for s in parsed.steps] == [
        ("Add an item", "Cart badge shows 1"),
        ("Pay", "Result: ok"),
    ]
