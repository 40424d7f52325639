"""Validation rule service — CRUD over custom pattern rules."""

from __future__ import annotations

import logging

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from prd_creator.exceptions import NotFoundError, ValidationError
from prd_creator.models.validation_rule import ValidationRule
from prd_creator.schemas.validation import ValidationRuleCreate, ValidationRuleUpdate

logger = logging.getLogger(__name__)


async def list_rules(db: AsyncSession) -> list[ValidationRule]:
    result = await db.execute(select(ValidationRule).order_by(ValidationRule.id))
    return list(result.scalars().all())


async def get_rule(db: AsyncSession, rule_id: str) -> ValidationRule | None:
    return await db.get(ValidationRule, rule_id)


async def add_rule(db: AsyncSession, data: ValidationRuleCreate) -> ValidationRule:
    if await db.get(ValidationRule, data.id):
        raise ValidationError(f"Validation rule already exists: {data.id}")

    rule = ValidationRule(
        id=data.id,
        name=data.name,
        description=data.description,
        pattern=data.pattern,
        polarity=data.polarity,
    )
    db.add(rule)
    await db.commit()
    await db.refresh(rule)
    logger.info("Added validation rule: %s", rule.id)
    return rule


async def update_rule(db: AsyncSession, data: ValidationRuleUpdate) -> ValidationRule:
    rule = await db.get(ValidationRule, data.id)
    if not rule:
        raise NotFoundError(f"Rule not found: {data.id}")

    for field, value in data.model_dump(exclude_unset=True, exclude={"id"}).items():
        if value is not None:
            setattr(rule, field, value)

    await db.commit()
    await db.refresh(rule)
    logger.info("Updated validation rule: %s", rule.id)
    return rule


async def delete_rule(db: AsyncSession, rule_id: str) -> None:
    """Hard delete; a missing id is not an error."""
    rule = await db.get(ValidationRule, rule_id)
    if not rule:
        return
    await db.delete(rule)
    await db.commit()
    logger.info("Deleted validation rule: %s", rule_id)
