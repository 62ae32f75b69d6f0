from __future__ import annotations

import re
from pathlib import Path
from typing import Callable, List, Optional, Sequence

from ..models import StepByStepTestCase
from ..parsing.step_by_step import RESULT_PREFIX


def _section(header: str, value: str) -> List[str]:
    # First line rides on the header so it can never be mistaken for one.
    first, *rest = value.split("\n")
    return [f"{header}: {first}", *rest]


def _expected(value: str) -> str:
    # The parser drops one leading "Result:", so shield a literal one.
    if RESULT_PREFIX.match(value):
        return f"Expected: Result: {value}"
    return f"Expected: {value}"


def to_step_text(test_case: StepByStepTestCase) -> str:
    """Render a test case in the labelled layout the step-by-step parser reads.

    Continuation lines (second and later lines of a section or step) still
    go through the parser's header and numbering rules, so they only survive
    a re-parse when they don't open with a section keyword, a step number or
    an ``Expected`` marker.
    """
    lines: List[str] = [f"Title: {test_case.title}"]
    if test_case.description:
        lines.extend(_section("Description", test_case.description))
    if test_case.preconditions:
        lines.extend(_section("Preconditions", test_case.preconditions))
    if test_case.steps:
        lines.append("Steps:")
        for number, step in enumerate(test_case.steps, start=1):
            first, *rest = step.description.split("\n")
            lines.append(f"{number}. {first}")
            lines.extend(rest)
            if step.expected_result:
                lines.append(_expected(step.expected_result))
    if test_case.expected_outcome:
        lines.extend(_section("Expected Outcome", test_case.expected_outcome))
    return "\n".join(lines) + "\n"


def write_step_cases(
    test_cases: Sequence[StepByStepTestCase],
    out_dir: Path,
    progress_callback: Optional[Callable[[int, int, Path], None]] = None,
) -> List[Path]:
    out_dir.mkdir(parents=True, exist_ok=True)
    written: List[Path] = []
    total = len(test_cases)
    for idx, case in enumerate(test_cases, start=1):
        slug = re.sub(r"[^a-z0-9]+", "_", case.title.lower()).strip("_") or "untitled"
        file_path = out_dir / f"{idx:03d}_{slug}.txt"
        file_path.write_text(to_step_text(case), encoding="utf-8")
        written.append(file_path)
        if progress_callback:
            progress_callback(idx, total, file_path)
    return written
