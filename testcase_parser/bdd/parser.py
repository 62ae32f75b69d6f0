from __future__ import annotations

import logging
from enum import Enum
from typing import List, Optional

from ..ids import IdFactory
from .models import BDDFeature, BDDScenario, BDDStep, StepType


logger = logging.getLogger(__name__)


class ScanState(Enum):
    PREAMBLE = "preamble"
    FEATURE_DESCRIPTION = "feature_description"
    SCENARIO = "scenario"


FEATURE_PREFIX = "Feature:"
SCENARIO_PREFIXES = ("Scenario:", "Scenario Outline:")

# (prefix, step type, needs a preceding step to attach to)
STEP_PREFIXES = (
    ("Given ", StepType.GIVEN, False),
    ("When ", StepType.WHEN, False),
    ("Then ", StepType.THEN, False),
    ("And ", StepType.AND, True),
    ("But ", StepType.BUT, True),
)


def _match_step(line: str) -> Optional[tuple[str, StepType, bool]]:
    for prefix, step_type, connective in STEP_PREFIXES:
        if line.startswith(prefix):
            return prefix, step_type, connective
    return None


def parse_bdd_text(text: str, ids: Optional[IdFactory] = None) -> BDDFeature:
    """Parse a single Gherkin-style block into a feature.

    Keywords are matched case-sensitively at the start of each trimmed line.
    Lines that fit no rule are dropped, except free text following the
    ``Feature:`` header, which becomes the feature description.
    """
    ids = ids or IdFactory()
    lines: List[str] = [line.strip() for line in text.split("\n")]
    lines = [line for line in lines if line]

    feature = BDDFeature()
    description: List[str] = []
    current: Optional[BDDScenario] = None
    state = ScanState.PREAMBLE

    for line in lines:
        if line.startswith(FEATURE_PREFIX):
            feature.title = line[len(FEATURE_PREFIX) :].strip()
            state = ScanState.FEATURE_DESCRIPTION
            continue

        scenario_prefix = next((p for p in SCENARIO_PREFIXES if line.startswith(p)), None)
        if scenario_prefix:
            if current is not None:
                feature.scenarios.append(current)
            current = BDDScenario(
                id=ids.next("scenario"),
                title=line[len(scenario_prefix) :].strip(),
            )
            state = ScanState.SCENARIO
            continue

        step = _match_step(line)
        if step:
            prefix, step_type, connective = step
            if current is None:
                logger.debug("Dropping step outside of a scenario: %s", line)
            elif connective and not current.steps:
                logger.debug("Dropping '%s' step with no preceding step: %s", step_type.value, line)
            else:
                current.steps.append(BDDStep(type=step_type, content=line[len(prefix) :].strip()))
            continue

        if state is ScanState.FEATURE_DESCRIPTION:
            description.append(line)

    if current is not None:
        feature.scenarios.append(current)

    feature.description = "\n".join(description)
    return feature
