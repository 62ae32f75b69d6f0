from __future__ import annotations

import json
import logging
from typing import List, Optional, Union

from ..bdd.models import BDDFeature
from ..bdd.normalizer import normalize_features
from ..bdd.parser import parse_bdd_text
from ..ids import IdFactory
from ..models import ParsedRecord, StepByStepTestCase, TestCaseFormat
from .splitter import has_feature_marker, split_features, split_step_by_step
from .step_by_step import parse_step_by_step_text


logger = logging.getLogger(__name__)


def parse_multiple_bdd_test_cases(text: str, ids: Optional[IdFactory] = None) -> List[BDDFeature]:
    """Parse every ``Feature:`` block and emit one test case per scenario.

    Text without any ``Feature:`` line is parsed as a single feature and
    returned as-is.
    """
    ids = ids or IdFactory()
    if not has_feature_marker(text):
        return [parse_bdd_text(text, ids=ids)]

    features = [parse_bdd_text(segment, ids=ids) for segment in split_features(text)]
    return normalize_features(features)


def parse_multiple_step_by_step_test_cases(text: str, ids: Optional[IdFactory] = None) -> List[StepByStepTestCase]:
    ids = ids or IdFactory()
    return [parse_step_by_step_text(segment, ids=ids) for segment in split_step_by_step(text)]


def _decode_json(text: str) -> Optional[List[object]]:
    try:
        data = json.loads(text)
    except (ValueError, RecursionError, TypeError) as exc:
        logger.debug("Input is not JSON, falling back to text parsing: %s", exc)
        return None
    if isinstance(data, list):
        logger.info("Parsed input as a JSON array of %d record(s)", len(data))
        return data
    if isinstance(data, dict):
        logger.info("Parsed input as a JSON object, wrapping it in a list")
        return [data]
    logger.warning("JSON input is not an object or array, falling back to text parsing")
    return None


def parse_multiple_test_cases(
    text: str,
    format: Union[TestCaseFormat, str],
    ids: Optional[IdFactory] = None,
) -> List[ParsedRecord]:
    """Turn pasted or generated text into test-case records.

    JSON arrays and objects are returned without validation. Anything else
    is parsed as BDD when ``format`` is BDD and as step-by-step otherwise.
    """
    decoded = _decode_json(text)
    if decoded is not None:
        return decoded

    if format == TestCaseFormat.BDD:
        result: List[ParsedRecord] = list(parse_multiple_bdd_test_cases(text, ids=ids))
    else:
        result = list(parse_multiple_step_by_step_test_cases(text, ids=ids))
    logger.debug("Parsed %d test case(s) as %s", len(result), format)
    return result
