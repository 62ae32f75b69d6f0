from __future__ import annotations

from enum import Enum
from typing import Any, Dict, List, Optional, Union

from pydantic import BaseModel, ConfigDict, Field

from .bdd.models import BDDFeature


class TestCaseFormat(str, Enum):
    __test__ = False

    BDD = "BDD"
    STEP_BY_STEP = "STEP_BY_STEP"

    @staticmethod
    def from_string(value: str) -> "TestCaseFormat":
        normalized = value.strip().upper().replace("-", "_").replace(" ", "_")
        try:
            return TestCaseFormat(normalized)
        except ValueError:
            raise ValueError("Format must be BDD or STEP_BY_STEP") from None


class TestStep(BaseModel):
    __test__ = False
    model_config = ConfigDict(populate_by_name=True)

    id: str
    description: str = ""
    expected_result: Optional[str] = Field(default=None, alias="expectedResult")


class StepByStepTestCase(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    title: str = ""
    description: str = ""
    preconditions: str = ""
    expected_outcome: str = Field(default="", alias="expectedOutcome")
    steps: List[TestStep] = Field(default_factory=list)


# JSON passthrough yields whatever shape the caller supplied.
ParsedRecord = Union[BDDFeature, StepByStepTestCase, Dict[str, Any], Any]


def record_to_dict(record: ParsedRecord) -> Any:
    if isinstance(record, BaseModel):
        return record.model_dump(mode="json", by_alias=True, exclude_none=True)
    return record


class GeneratedTestCases(BaseModel):
    requirement: str
    format: TestCaseFormat
    coverage: str = "standard"
    raw: str = ""
    cases: List[Any] = Field(default_factory=list)
