from .bdd.models import BDDFeature, BDDScenario, BDDStep, StepType
from .bdd.parser import parse_bdd_text
from .ids import IdFactory
from .models import StepByStepTestCase, TestCaseFormat, TestStep
from .parsing.dispatch import (
    parse_multiple_bdd_test_cases,
    parse_multiple_step_by_step_test_cases,
    parse_multiple_test_cases,
)
from .parsing.step_by_step import parse_step_by_step_text

__version__ = "0.1.0"

__all__ = [
    "BDDFeature",
    "BDDScenario",
    "BDDStep",
    "IdFactory",
    "StepByStepTestCase",
    "StepType",
    "TestCaseFormat",
    "TestStep",
    "parse_bdd_text",
    "parse_multiple_bdd_test_cases",
    "parse_multiple_step_by_step_test_cases",
    "parse_multiple_test_cases",
    "parse_step_by_step_text",
]
