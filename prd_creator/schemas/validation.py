"""Validation rule and report schemas."""

from typing import Literal

from pydantic import Field

from prd_creator.schemas.base import CamelModel

Polarity = Literal["require", "forbid"]
Severity = Literal["error", "warning"]


class ValidationRuleCreate(CamelModel):
    id: str = Field(..., min_length=1, max_length=128)
    name: str = Field(..., min_length=1)
    description: str | None = None
    pattern: str = Field(..., min_length=1)
    polarity: Polarity = "require"


class ValidationRuleUpdate(CamelModel):
    id: str = Field(..., min_length=1)
    name: str | None = Field(default=None, min_length=1)
    description: str | None = None
    pattern: str | None = Field(default=None, min_length=1)
    polarity: Polarity | None = None


class ValidationRuleDelete(CamelModel):
    id: str = Field(..., min_length=1)


class RuleInfo(CamelModel):
    id: str
    name: str
    description: str | None = None


class ValidatePrdRequest(CamelModel):
    prd_content: str = Field(..., min_length=1)
    validation_rules: list[str] | None = None  # rule ids; None = all


class RuleResult(CamelModel):
    rule_id: str
    name: str
    passed: bool
    severity: Severity
    message: str
    source: Literal["builtin", "custom"]


class ValidationReport(CamelModel):
    valid: bool
    score: int  # percentage of rules passed
    passed: int
    failed: int
    results: list[RuleResult]
