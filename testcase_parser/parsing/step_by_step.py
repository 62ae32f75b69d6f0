from __future__ import annotations

import logging
import re
from enum import Enum
from typing import List, Optional

from ..ids import IdFactory
from ..models import StepByStepTestCase, TestStep


logger = logging.getLogger(__name__)


class Section(Enum):
    TITLE = "title"
    DESCRIPTION = "description"
    PRECONDITIONS = "preconditions"
    STEPS = "steps"
    EXPECTED_OUTCOME = "expected_outcome"


# Checked in order; group 1 holds any content on the header line itself.
SECTION_HEADERS = (
    (re.compile(r"^(?:test\s*case|title):?\s*(.*)$", re.IGNORECASE), Section.TITLE),
    (re.compile(r"^description:?\s*(.*)$", re.IGNORECASE), Section.DESCRIPTION),
    (re.compile(r"^(?:preconditions?|pre-conditions?):?\s*(.*)$", re.IGNORECASE), Section.PRECONDITIONS),
    (re.compile(r"^(?:steps?|test\s*steps?):?\s*(.*)$", re.IGNORECASE), Section.STEPS),
    (re.compile(r"^(?:expected\s*outcome|expected\s*result):?\s*(.*)$", re.IGNORECASE), Section.EXPECTED_OUTCOME),
)

NUMBERED_STEP = re.compile(r"^(\d+)[.)\]]\s*(.+)$")
NUMBERED_STEP_ANYWHERE = re.compile(r"\d+[.)\]]\s*(.+)")
EXPECTED_MARKER = re.compile(r"^expected\b(?!\s*outcome)(?:\s*results?\b)?\s*:?\s*(.*)$", re.IGNORECASE)
RESULT_PREFIX = re.compile(r"^results?:?\s*", re.IGNORECASE)
TRAILING_COLONS = re.compile(r":+$")


def _strip_colons(value: str) -> str:
    return TRAILING_COLONS.sub("", value.strip())


def _clean_result(value: str) -> str:
    return RESULT_PREFIX.sub("", value.strip(), count=1)


def _match_header(line: str) -> Optional[tuple[Section, str]]:
    for pattern, section in SECTION_HEADERS:
        match = pattern.match(line)
        if match:
            return section, match.group(1)
    return None


def _is_structural(line: str) -> bool:
    return bool(NUMBERED_STEP.match(line)) or _match_header(line) is not None


class LineCursor:
    """Forward-only cursor over the non-blank, trimmed lines of a text."""

    def __init__(self, text: str):
        self.lines: List[str] = [line.strip() for line in text.split("\n") if line.strip()]
        self.position = 0

    def __bool__(self) -> bool:
        return self.position < len(self.lines)

    @property
    def current(self) -> str:
        return self.lines[self.position]

    def peek(self, offset: int = 1) -> Optional[str]:
        index = self.position + offset
        if index < len(self.lines):
            return self.lines[index]
        return None

    def advance(self, count: int = 1) -> None:
        self.position += count


def _append(test_case: StepByStepTestCase, field: str, line: str) -> None:
    existing = getattr(test_case, field)
    setattr(test_case, field, f"{existing}\n{line}" if existing else line)


def _read_expected(cursor: LineCursor, step: TestStep, inline: str, lookahead: int) -> None:
    """Resolve the expected result introduced by an ``Expected`` marker.

    ``lookahead`` is how far the marker sits from the cursor. Inline content
    wins; a bare marker takes the following line, unless that line starts a
    new step or section.
    """
    content = _clean_result(inline)
    if content:
        step.expected_result = content
        cursor.advance(lookahead)
        return
    following = cursor.peek(lookahead + 1)
    if following is not None and not _is_structural(following):
        step.expected_result = _clean_result(following)
        cursor.advance(lookahead + 1)
    elif lookahead:
        cursor.advance(lookahead)


def _extract_steps_from_description(test_case: StepByStepTestCase, ids: IdFactory) -> None:
    matches = list(NUMBERED_STEP_ANYWHERE.finditer(test_case.description))
    if not matches:
        return
    logger.debug("No steps section found; extracted %d numbered step(s) from description", len(matches))
    test_case.steps = [TestStep(id=ids.next("step"), description=m.group(1).strip()) for m in matches]
    test_case.description = NUMBERED_STEP_ANYWHERE.sub("", test_case.description).strip()


def parse_step_by_step_text(text: str, ids: Optional[IdFactory] = None) -> StepByStepTestCase:
    """Parse a labelled, numbered test procedure.

    Recognized sections are Title/Test Case, Description, Preconditions,
    Steps and Expected Outcome/Result. Within Steps, numbered lines open a
    step and ``Expected:`` lines attach an expected result to it. When no
    steps are found, numbered items inside the description are promoted to
    steps.
    """
    ids = ids or IdFactory()
    cursor = LineCursor(text)
    test_case = StepByStepTestCase()
    section: Optional[Section] = None
    step: Optional[TestStep] = None

    while cursor:
        line = cursor.current

        header = _match_header(line)
        if header:
            section, inline = header
            inline = _strip_colons(inline)
            if inline and section is not Section.STEPS:
                setattr(test_case, section.value, inline)
            cursor.advance()
            continue

        if section is Section.TITLE:
            if not test_case.title:
                test_case.title = _strip_colons(line)
        elif section in (Section.DESCRIPTION, Section.PRECONDITIONS, Section.EXPECTED_OUTCOME):
            _append(test_case, section.value, _strip_colons(line))
        elif section is Section.STEPS:
            numbered = NUMBERED_STEP.match(line)
            if numbered:
                if step is not None:
                    test_case.steps.append(step)
                step = TestStep(id=ids.next("step"), description=numbered.group(2).strip())
                following = cursor.peek()
                marker = EXPECTED_MARKER.match(following) if following is not None else None
                if marker:
                    _read_expected(cursor, step, marker.group(1), lookahead=1)
            elif step is not None:
                marker = EXPECTED_MARKER.match(line)
                if marker:
                    _read_expected(cursor, step, marker.group(1), lookahead=0)
                else:
                    step.description += "\n" + line
            else:
                logger.debug("Ignoring unnumbered line before the first step: %s", line)

        cursor.advance()

    if step is not None:
        test_case.steps.append(step)

    if not test_case.steps and test_case.description:
        _extract_steps_from_description(test_case, ids)

    return test_case
