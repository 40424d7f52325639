"""PRD validation — built-in structural rules plus custom pattern rules."""

from __future__ import annotations

import logging
import re
from collections.abc import Callable
from dataclasses import dataclass

from sqlalchemy.ext.asyncio import AsyncSession

from prd_creator.exceptions import NotFoundError
from prd_creator.models.validation_rule import ValidationRule
from prd_creator.schemas.validation import RuleInfo, RuleResult, ValidationReport
from prd_creator.services import validation_rule_service

logger = logging.getLogger(__name__)

_HEADING_RE = re.compile(r"^(#{1,6})[ \t]+(.+?)[ \t]*#*[ \t]*$", re.MULTILINE)
_BULLET_RE = re.compile(r"^\s*(?:[-*+•]|\d+[.)])\s+\S", re.MULTILINE)
_PLACEHOLDER_RE = re.compile(r"\{\{\s*[A-Za-z_][A-Za-z0-9_]*\s*\}\}")
_TBD_RE = re.compile(r"\bTBD\b|\bto be determined\b", re.IGNORECASE)

MIN_WORDS = 200


@dataclass(frozen=True)
class BuiltinRule:
    id: str
    name: str
    description: str
    severity: str
    check: Callable[[str], tuple[bool, str]]


def find_section(content: str, title: str) -> str | None:
    """Return the body under the first heading matching ``title`` (a regex), or None."""
    title_re = re.compile(title, re.IGNORECASE)
    headings = list(_HEADING_RE.finditer(content))
    for i, match in enumerate(headings):
        if not title_re.search(match.group(2)):
            continue
        level = len(match.group(1))
        end = len(content)
        for nxt in headings[i + 1:]:
            if len(nxt.group(1)) <= level:
                end = nxt.start()
                break
        return content[match.end():end]
    return None


def _section_check(title: str, label: str) -> Callable[[str], tuple[bool, str]]:
    def check(content: str) -> tuple[bool, str]:
        if find_section(content, title) is None:
            return False, f"Missing a '{label}' section"
        return True, f"Found a '{label}' section"

    return check


def _check_title(content: str) -> tuple[bool, str]:
    first = next((line for line in content.splitlines() if line.strip()), "")
    if re.match(r"^#\s+\S", first):
        return True, "Document starts with a title heading"
    return False, "Document should start with a level-1 '# Title' heading"


def _check_features(content: str) -> tuple[bool, str]:
    section = find_section(content, r"features")
    if section is None:
        return False, "Missing a 'Core Features' section"
    count = len(_BULLET_RE.findall(section))
    if count == 0:
        return False, "'Core Features' section lists no features"
    return True, f"'Core Features' section lists {count} item(s)"


def _check_placeholders(content: str) -> tuple[bool, str]:
    leftovers = sorted(set(_PLACEHOLDER_RE.findall(content)))
    if leftovers:
        return False, f"Unfilled placeholders: {', '.join(leftovers)}"
    return True, "No unfilled placeholders"


def _check_tbd(content: str) -> tuple[bool, str]:
    hits = len(_TBD_RE.findall(content))
    if hits:
        return False, f"Found {hits} 'TBD' / 'to be determined' marker(s)"
    return True, "No 'TBD' markers"


def _check_length(content: str) -> tuple[bool, str]:
    words = len(content.split())
    if words < MIN_WORDS:
        return False, f"Document has {words} words; at least {MIN_WORDS} expected"
    return True, f"Document has {words} words"


BUILTIN_RULES: tuple[BuiltinRule, ...] = (
    BuiltinRule("has-title", "Has title", "Document begins with a level-1 heading naming the product",
                "error", _check_title),
    BuiltinRule("has-overview", "Has product overview", "Includes an overview, introduction or summary section",
                "error", _section_check(r"overview|introduction|summary", "Overview")),
    BuiltinRule("has-target-audience", "Has target audience", "Describes who the product is for",
                "error", _section_check(r"audience|personas?|users", "Target Audience")),
    BuiltinRule("has-core-features", "Has core features", "Lists the core features as bullet points",
                "error", _check_features),
    BuiltinRule("has-constraints", "Has constraints", "Documents constraints and limitations",
                "warning", _section_check(r"constraints|limitations", "Constraints")),
    BuiltinRule("has-user-stories", "Has user stories", "Includes user stories",
                "warning", _section_check(r"user stor", "User Stories")),
    BuiltinRule("has-acceptance-criteria", "Has acceptance criteria", "Includes acceptance criteria",
                "warning", _section_check(r"acceptance criteria", "Acceptance Criteria")),
    BuiltinRule("has-success-metrics", "Has success metrics", "Defines how success will be measured",
                "warning", _section_check(r"success metrics|kpis?|metrics", "Success Metrics")),
    BuiltinRule("no-unfilled-placeholders", "No unfilled placeholders",
                "No {{PLACEHOLDER}} tokens remain from the template", "error", _check_placeholders),
    BuiltinRule("no-tbd", "No TBD markers", "No sections are left as TBD / to be determined",
                "warning", _check_tbd),
    BuiltinRule("minimum-length", "Minimum length", f"Document contains at least {MIN_WORDS} words",
                "warning", _check_length),
)

_BUILTIN_BY_ID = {rule.id: rule for rule in BUILTIN_RULES}


def list_builtin_rules() -> list[RuleInfo]:
    return [RuleInfo(id=r.id, name=r.name, description=r.description) for r in BUILTIN_RULES]


async def list_all_rules(db: AsyncSession) -> list[RuleInfo]:
    custom = await validation_rule_service.list_rules(db)
    return list_builtin_rules() + [RuleInfo(id=r.id, name=r.name, description=r.description) for r in custom]


def evaluate_custom_rule(rule: ValidationRule, content: str) -> RuleResult:
    """A malformed pattern fails this rule only."""
    try:
        found = re.search(rule.pattern, content, re.MULTILINE) is not None
    except re.error as exc:
        logger.warning("Invalid pattern in validation rule %s: %s", rule.id, exc)
        return RuleResult(rule_id=rule.id, name=rule.name, passed=False, severity="error",
                          message=f"Invalid pattern: {exc}", source="custom")

    if rule.polarity == "forbid":
        passed = not found
        message = "Forbidden pattern not present" if passed else f"Forbidden pattern found: {rule.pattern}"
    else:
        passed = found
        message = "Required pattern found" if passed else f"Required pattern not found: {rule.pattern}"
    return RuleResult(rule_id=rule.id, name=rule.name, passed=passed, severity="error",
                      message=message, source="custom")


def _evaluate_builtin(rule: BuiltinRule, content: str) -> RuleResult:
    passed, message = rule.check(content)
    return RuleResult(rule_id=rule.id, name=rule.name, passed=passed, severity=rule.severity,
                      message=message, source="builtin")


async def validate_prd(db: AsyncSession, content: str, rule_ids: list[str] | None = None) -> ValidationReport:
    custom = {r.id: r for r in await validation_rule_service.list_rules(db)}

    results: list[RuleResult] = []
    if not rule_ids:
        results.extend(_evaluate_builtin(r, content) for r in BUILTIN_RULES)
        results.extend(evaluate_custom_rule(r, content) for r in custom.values())
    else:
        missing = [rid for rid in rule_ids if rid not in _BUILTIN_BY_ID and rid not in custom]
        if missing:
            raise NotFoundError(f"Unknown validation rule(s): {', '.join(missing)}")
        for rid in dict.fromkeys(rule_ids):
            if rid in _BUILTIN_BY_ID:
                results.append(_evaluate_builtin(_BUILTIN_BY_ID[rid], content))
            else:
                results.append(evaluate_custom_rule(custom[rid], content))

    passed = sum(1 for r in results if r.passed)
    failed = len(results) - passed
    report = ValidationReport(
        valid=not any(not r.passed and r.severity == "error" for r in results),
        score=round(100 * passed / len(results)) if results else 100,
        passed=passed,
        failed=failed,
        results=results,
    )
    logger.info("Validated PRD against %d rules: %d passed, %d failed", len(results), passed, failed)
    return report
