"""PRD validation + custom rule repository tests."""

import pytest

from prd_creator.exceptions import NotFoundError, ValidationError
from prd_creator.providers.template_provider import render_prd
from prd_creator.schemas.prd import ProductBrief
from prd_creator.schemas.validation import ValidationRuleCreate, ValidationRuleUpdate
from prd_creator.services import template_service, validation_rule_service, validation_service

GOOD_PRD = """# Acme - Product Requirements Document

## Product Overview
Acme helps teams ship.

## Target Audience
Engineering managers.

## Core Features
- Dashboards
- Alerts

## Constraints
- Must run on-prem

## User Stories
As a manager I want dashboards.

## Acceptance Criteria
Dashboards load in under a second.

## Success Metrics
Weekly active teams.
"""


def _results(report):
    return {r.rule_id: r for r in report.results}


@pytest.mark.asyncio
async def test_builtin_rules_pass_for_complete_document(session):
    report = await validation_service.validate_prd(session, GOOD_PRD)
    results = _results(report)

    for rule_id in ("has-title", "has-overview", "has-target-audience", "has-core-features",
                    "has-constraints", "has-user-stories", "has-acceptance-criteria",
                    "has-success-metrics", "no-unfilled-placeholders", "no-tbd"):
        assert results[rule_id].passed, rule_id
    # Short sample document
    assert results["minimum-length"].passed is False
    assert results["minimum-length"].severity == "warning"
    assert report.valid is True


@pytest.mark.asyncio
async def test_missing_sections_and_placeholders_fail(session):
    report = await validation_service.validate_prd(session, "Some notes about {{PRODUCT_NAME}}\n\nTBD")
    results = _results(report)

    assert results["has-title"].passed is False
    assert results["has-core-features"].passed is False
    assert results["no-unfilled-placeholders"].passed is False
    assert "{{PRODUCT_NAME}}" in results["no-unfilled-placeholders"].message
    assert results["no-tbd"].passed is False
    assert report.valid is False
    assert report.passed + report.failed == len(report.results)


@pytest.mark.asyncio
async def test_features_section_needs_bullets(session):
    content = "# X\n\n## Core Features\n\nNothing listed yet.\n\n## Other\n- not a feature\n"
    report = await validation_service.validate_prd(session, content, ["has-core-features"])
    assert report.results[0].passed is False


@pytest.mark.asyncio
async def test_rendered_standard_template_has_no_placeholders(session, settings):
    await template_service.initialize_defaults(session, settings.seed_templates_dir)
    standard = await template_service.get_template(session, "standard")
    brief = ProductBrief(
        product_name="Acme", product_description="d", target_audience="a", core_features=["A", "B"]
    )

    report = await validation_service.validate_prd(
        session, render_prd(standard.content, brief), ["no-unfilled-placeholders", "has-core-features"]
    )
    assert all(r.passed for r in report.results)


@pytest.mark.asyncio
async def test_selected_rules_only(session):
    report = await validation_service.validate_prd(session, GOOD_PRD, ["has-title", "no-tbd"])
    assert [r.rule_id for r in report.results] == ["has-title", "no-tbd"]
    assert report.score == 100


@pytest.mark.asyncio
async def test_unknown_rule_id(session):
    with pytest.raises(NotFoundError):
        await validation_service.validate_prd(session, GOOD_PRD, ["has-title", "no-such-rule"])


@pytest.mark.asyncio
async def test_custom_rule_polarity(session):
    await validation_rule_service.add_rule(
        session, ValidationRuleCreate(id="mentions-gdpr", name="Mentions GDPR", pattern=r"\bGDPR\b")
    )
    await validation_rule_service.add_rule(
        session,
        ValidationRuleCreate(id="no-lorem", name="No lorem ipsum", pattern=r"(?i)lorem ipsum", polarity="forbid"),
    )

    report = await validation_service.validate_prd(session, GOOD_PRD, ["mentions-gdpr", "no-lorem"])
    results = _results(report)
    assert results["mentions-gdpr"].passed is False
    assert results["no-lorem"].passed is True
    assert results["mentions-gdpr"].source == "custom"

    report = await validation_service.validate_prd(
        session, GOOD_PRD + "\nGDPR applies.\nLorem ipsum.", ["mentions-gdpr", "no-lorem"]
    )
    results = _results(report)
    assert results["mentions-gdpr"].passed is True
    assert results["no-lorem"].passed is False


@pytest.mark.asyncio
async def test_invalid_pattern_fails_only_that_rule(session):
    await validation_rule_service.add_rule(
        session, ValidationRuleCreate(id="broken", name="Broken", pattern="([unclosed")
    )
    await validation_rule_service.add_rule(
        session, ValidationRuleCreate(id="has-acme", name="Has Acme", pattern="Acme")
    )

    report = await validation_service.validate_prd(session, GOOD_PRD)
    results = _results(report)
    assert results["broken"].passed is False
    assert results["broken"].message.startswith("Invalid pattern")
    assert results["has-acme"].passed is True
    assert results["has-title"].passed is True
    assert len(report.results) == len(validation_service.BUILTIN_RULES) + 2


# ── Custom rule CRUD ────────────────────────────────────────────────


@pytest.mark.asyncio
async def test_add_duplicate_rule(session):
    data = ValidationRuleCreate(id="dup", name="Dup", pattern="x")
    await validation_rule_service.add_rule(session, data)
    with pytest.raises(ValidationError):
        await validation_rule_service.add_rule(session, data)


@pytest.mark.asyncio
async def test_update_rule_partial(session):
    await validation_rule_service.add_rule(
        session, ValidationRuleCreate(id="r1", name="Rule", description="desc", pattern="a")
    )
    rule = await validation_rule_service.update_rule(session, ValidationRuleUpdate(id="r1", pattern="b"))
    assert (rule.name, rule.description, rule.pattern, rule.polarity) == ("Rule", "desc", "b", "require")


@pytest.mark.asyncio
async def test_update_missing_rule(session):
    with pytest.raises(NotFoundError):
        await validation_rule_service.update_rule(session, ValidationRuleUpdate(id="ghost", name="x"))


@pytest.mark.asyncio
async def test_delete_rule_is_idempotent(session):
    await validation_rule_service.add_rule(session, ValidationRuleCreate(id="gone", name="Gone", pattern="x"))
    await validation_rule_service.delete_rule(session, "gone")
    await validation_rule_service.delete_rule(session, "gone")
    assert await validation_rule_service.get_rule(session, "gone") is None


@pytest.mark.asyncio
async def test_list_all_rules_merges_builtin_and_custom(session):
    await validation_rule_service.add_rule(session, ValidationRuleCreate(id="zz-custom", name="Custom", pattern="x"))
    rules = await validation_service.list_all_rules(session)
    ids = [r.id for r in rules]
    assert ids[: len(validation_service.BUILTIN_RULES)] == [r.id for r in validation_service.BUILTIN_RULES]
    assert ids[-1] == "zz-custom"
