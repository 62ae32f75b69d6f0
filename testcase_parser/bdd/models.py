from __future__ import annotations

from enum import Enum
from typing import List

from pydantic import BaseModel, Field


class StepType(str, Enum):
    GIVEN = "given"
    WHEN = "when"
    THEN = "then"
    AND = "and"
    BUT = "but"

    @property
    def keyword(self) -> str:
        return self.value.capitalize()


class BDDStep(BaseModel):
    type: StepType
    content: str = ""


class BDDScenario(BaseModel):
    id: str
    title: str = ""
    steps: List[BDDStep] = Field(default_factory=list)


class BDDFeature(BaseModel):
    title: str = ""
    description: str = ""
    scenarios: List[BDDScenario] = Field(default_factory=list)
