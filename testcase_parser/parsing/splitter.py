from __future__ import annotations

import re
from typing import List


FEATURE_SPLIT = re.compile(r"(?=^[ \t]*Feature:)", re.MULTILINE)
TEST_CASE_SPLIT = re.compile(r"(?=^[ \t]*(?:test[ \t]*case|title):)", re.MULTILINE | re.IGNORECASE)


def _split(pattern: re.Pattern, text: str) -> List[str]:
    return [segment for segment in pattern.split(text) if segment.strip()]


def has_feature_marker(text: str) -> bool:
    return FEATURE_SPLIT.search(text) is not None


def split_features(text: str) -> List[str]:
    """Split text before every line that opens with ``Feature:``."""
    return _split(FEATURE_SPLIT, text)


def split_step_by_step(text: str) -> List[str]:
    """Split text before every ``Test Case:`` or ``Title:`` line (any case)."""
    return _split(TEST_CASE_SPLIT, text)
