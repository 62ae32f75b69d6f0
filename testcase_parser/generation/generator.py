from __future__ import annotations

import logging
from concurrent.futures import ThreadPoolExecutor, as_completed
from typing import Callable, List, Optional, Union

from ..config import AppConfig
from ..llm.client import LLMClient
from ..models import GeneratedTestCases, TestCaseFormat
from ..parsing.dispatch import parse_multiple_test_cases


logger = logging.getLogger(__name__)


GENERATOR_SYSTEM = (
    "You are a senior QA engineer writing manual test cases from requirements. "
    "Cover happy paths, validation and error paths, and permission boundaries where relevant. "
    "Output only the test cases in the requested plain-text format, with no commentary."
)

COVERAGE_HINTS = {
    "basic": "Write 2-3 test cases covering the main happy path and the most likely failure.",
    "standard": "Write 4-6 test cases covering happy paths, input validation and common error paths.",
    "comprehensive": "Write 8-12 test cases covering happy paths, boundaries, error paths, permissions and edge cases.",
}

FORMAT_TEMPLATES = {
    TestCaseFormat.BDD: """
Write each test case as its own Gherkin feature with exactly one scenario:

Feature: <feature name>
  <optional one-line description>
  Scenario: <scenario name>
    Given <precondition>
    When <action>
    Then <expected outcome>
    And <additional outcome>
""".strip(),
    TestCaseFormat.STEP_BY_STEP: """
Write each test case in this layout:

Title: <test case title>
Description: <what is being verified>
Preconditions: <required state>
Steps:
1. <action>
Expected: <expected result of the action>
2. <action>
Expected: <expected result of the action>
Expected Outcome: <overall expected outcome>
""".strip(),
}


def _build_generator_prompt(requirement: str, fmt: TestCaseFormat, coverage: str) -> str:
    hint = COVERAGE_HINTS.get(coverage, COVERAGE_HINTS["standard"])
    return f"""
Requirement:
{requirement.strip()}

Coverage: {coverage}
{hint}

{FORMAT_TEMPLATES[fmt]}
""".strip()


def _strip_code_fences(text: str) -> str:
    if "```" not in text:
        return text
    first = text.find("```")
    rest = text[first + 3 :]
    lang_tag_end = rest.find("\n")
    if lang_tag_end != -1:
        rest = rest[lang_tag_end + 1 :]
    second = rest.find("```")
    if second != -1:
        rest = rest[:second]
    return rest.strip()


def generate_test_cases(
    requirement: str,
    fmt: Union[TestCaseFormat, str],
    coverage: str,
    config: AppConfig,
    client: Optional[LLMClient] = None,
) -> GeneratedTestCases:
    fmt = TestCaseFormat(fmt)
    client = client or LLMClient(config)
    prompt = _build_generator_prompt(requirement, fmt, coverage)
    raw = client.complete(prompt, system=GENERATOR_SYSTEM)
    cases = parse_multiple_test_cases(_strip_code_fences(raw), fmt)
    logger.info("Generated %d %s test case(s)", len(cases), fmt.value)
    return GeneratedTestCases(requirement=requirement, format=fmt, coverage=coverage, raw=raw, cases=cases)


def generate_batch(
    requirements: List[str],
    fmt: Union[TestCaseFormat, str],
    coverage: str,
    config: AppConfig,
    client_factory: Callable[[AppConfig], LLMClient] = LLMClient,
    progress_callback: Optional[Callable[[int, int, GeneratedTestCases], None]] = None,
) -> List[GeneratedTestCases]:
    fmt = TestCaseFormat(fmt)

    def do_generate(idx: int, requirement: str) -> tuple[int, GeneratedTestCases]:
        result = generate_test_cases(requirement, fmt, coverage, config, client=client_factory(config))
        return idx, result

    total = len(requirements)
    results: List[GeneratedTestCases] = [None] * total  # type: ignore
    completed = 0

    with ThreadPoolExecutor(max_workers=max(1, config.planner_concurrency)) as executor:
        future_to_info = {executor.submit(do_generate, idx, req): (idx, req) for idx, req in enumerate(requirements)}
        for future in as_completed(future_to_info):
            orig_idx, req = future_to_info[future]
            try:
                idx, result = future.result()
            except Exception:
                logger.exception("Generation failed for requirement #%d", orig_idx + 1)
                idx, result = orig_idx, GeneratedTestCases(requirement=req, format=fmt, coverage=coverage)

            results[idx] = result
            completed += 1
            if progress_callback:
                progress_callback(completed, total, result)

    return [r for r in results if r is not None]
