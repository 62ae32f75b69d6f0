from __future__ import annotations

import pytest

from testcase_parser.bdd.models import BDDFeature
from testcase_parser.config import AppConfig
from testcase_parser.generation.generator import (
    _build_generator_prompt,
    _strip_code_fences,
    generate_batch,
    generate_test_cases,
)
from testcase_parser import models
from testcase_parser.models import StepByStepTestCase


BDD_RESPONSE = """Here are your test cases:
```gherkin
Feature: Password reset
  Scenario: Reset link is emailed
    Given a registered user
    When they request a password reset
    Then a reset link is emailed
  Scenario: Unknown email
    Given no account for the email
    When a reset is requested
    Then a generic confirmation is shown
```
"""


class FakeClient:
    def __init__(self, response: str):
        self.response = response
        self.prompts = []

    def complete(self, prompt, system=None, temperature=1.0):
        self.prompts.append(prompt)
        if "explode" in prompt:
            raise RuntimeError("model unavailable")
        return self.response


@pytest.fixture()
def config() -> AppConfig:
    return AppConfig(openai_api_key="test", planner_concurrency=2)


def test_strip_code_fences():
    assert _strip_code_fences("```json\n[1]\n```") == "[1]"
    assert _strip_code_fences("no fences") == "no fences"


def test_prompt_mentions_requirement_coverage_and_layout():
    prompt = _build_generator_prompt("Users can reset passwords", models.TestCaseFormat.STEP_BY_STEP, "basic")

    assert "Users can reset passwords" in prompt
    assert "Coverage: basic" in prompt
    assert "Expected Outcome:" in prompt


def test_unknown_coverage_falls_back_to_standard_hint():
    prompt = _build_generator_prompt("req", models.TestCaseFormat.BDD, "exhaustive")

    assert "4-6 test cases" in prompt


def test_generate_bdd_parses_fenced_response(config):
    client = FakeClient(BDD_RESPONSE)

    result = generate_test_cases("Users can reset passwords", "BDD", "standard", config, client=client)

    assert result.format is models.TestCaseFormat.BDD
    assert [c.title for c in result.cases] == [
        "Password reset: Reset link is emailed",
        "Password reset: Unknown email",
    ]
    assert all(isinstance(c, BDDFeature) for c in result.cases)
    assert result.raw == BDD_RESPONSE
    assert len(client.prompts) == 1


def test_generate_passes_json_through(config):
    client = FakeClient('[{"title": "From JSON", "steps": []}]')

    result = generate_test_cases("req", models.TestCaseFormat.STEP_BY_STEP, "basic", config, client=client)

    assert result.cases == [{"title": "From JSON", "steps": []}]


def test_generate_step_by_step_text(config):
    client = FakeClient("Title: Reset\nSteps:\n1. Request reset\nExpected: Email sent\n")

    result = generate_test_cases("req", models.TestCaseFormat.STEP_BY_STEP, "basic", config, client=client)

    assert len(result.cases) == 1
    case = result.cases[0]
    assert isinstance(case, StepByStepTestCase)
    assert case.steps[0].expected_result == "Email sent"


def test_generate_batch_keeps_order_and_survives_failures(config):
    seen = []

    results = generate_batch(
        ["first requirement", "explode please", "third requirement"],
        "BDD",
        "basic",
        config,
        client_factory=lambda cfg: FakeClient(BDD_RESPONSE),
        progress_callback=lambda i, total, r: seen.append((i, total)),
    )

    assert [r.requirement for r in results] == ["first requirement", "explode please", "third requirement"]
    assert [len(r.cases) for r in results] == [2, 0, 2]
    assert sorted(seen) == [(1, 3), (2, 3), (3, 3)]


def test_llm_client_rejects_empty_completion():
    from types import SimpleNamespace

    from testcase_parser.llm.client import GenerationError, LLMClient

    reply = SimpleNamespace(choices=[SimpleNamespace(message=SimpleNamespace(content="  \n"))])
    client = LLMClient.__new__(LLMClient)
    client.model = "test-model"
    client.client = SimpleNamespace(chat=SimpleNamespace(completions=SimpleNamespace(create=lambda **kwargs: reply)))

    with pytest.raises(GenerationError, match="empty completion"):
        client.complete("write tests")
