from __future__ import annotations

import logging
from typing import Iterable, List

from .models import BDDFeature


logger = logging.getLogger(__name__)


def _combined(feature: BDDFeature, index: int) -> BDDFeature:
    scenario = feature.scenarios[index]
    return BDDFeature(
        title=f"{feature.title}: {scenario.title}",
        description=feature.description,
        scenarios=[scenario],
    )


def split_scenarios(feature: BDDFeature) -> List[BDDFeature]:
    """Expand a feature into one record per scenario.

    Single-scenario features still get the combined ``feature: scenario``
    title. Features without scenarios are returned unchanged.
    """
    count = len(feature.scenarios)
    if count == 0:
        logger.warning('Feature "%s" has no scenarios; keeping it as an empty test case', feature.title)
        return [feature]
    if count > 1:
        logger.warning('Feature "%s" has %d scenarios; splitting into one test case per scenario', feature.title, count)
    return [_combined(feature, i) for i in range(count)]


def validate_features(features: Iterable[BDDFeature]) -> List[BDDFeature]:
    valid: List[BDDFeature] = []
    for feature in features:
        if len(feature.scenarios) > 1:
            logger.error(
                'Test case "%s" has %d scenarios; expected at most one, discarding it',
                feature.title,
                len(feature.scenarios),
            )
            continue
        valid.append(feature)
    return valid


def normalize_features(features: Iterable[BDDFeature]) -> List[BDDFeature]:
    expanded: List[BDDFeature] = []
    for feature in features:
        expanded.extend(split_scenarios(feature))
    result = validate_features(expanded)
    logger.info("Normalized to %d test case(s) with at most one scenario each", len(result))
    return result
