"""Template service — versioned, soft-deletable PRD templates."""

from __future__ import annotations

import json
import logging
from pathlib import Path

import pydantic
from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from prd_creator.exceptions import NotFoundError, ValidationError
from prd_creator.models.template import Template, TemplateVersion, utcnow
from prd_creator.schemas.template import TemplateCreate, TemplateImportEntry, TemplateUpdate
from prd_creator.utils.markdown import parse_frontmatter

logger = logging.getLogger(__name__)

STANDARD_TEMPLATE = """# {{PRODUCT_NAME}} - Product Requirements Document

## Introduction

### Product Overview
{{PRODUCT_DESCRIPTION}}

### Target Audience
{{TARGET_AUDIENCE}}

## Core Features

{{CORE_FEATURES}}

## Constraints and Limitations

{{CONSTRAINTS}}

## User Stories

*To be added by the product team*

## Acceptance Criteria

*To be added for each feature*

## Timeline

*To be determined*

---

Generated on {{DATE}}"""


async def get_template(db: AsyncSession, id_or_name: str) -> Template:
    """Look up by id, then by name. Soft-deleted rows are still returned."""
    tpl = await db.get(Template, id_or_name)
    if tpl:
        return tpl

    stmt = (
        select(Template)
        .where(Template.name == id_or_name)
        .order_by(Template.deleted, Template.updated_at.desc())
        .limit(1)
    )
    tpl = (await db.execute(stmt)).scalars().first()
    if not tpl:
        logger.error("Template not found: %s", id_or_name)
        raise NotFoundError(f"Template not found: {id_or_name}")
    return tpl


async def create_template(db: AsyncSession, data: TemplateCreate) -> Template:
    now = utcnow()
    tpl = Template(
        name=data.name,
        description=data.description,
        content=data.content,
        tags=json.dumps(data.tags),
        version=1,
        deleted=False,
        created_at=now,
        updated_at=now,
    )
    db.add(tpl)
    await db.commit()
    await db.refresh(tpl)
    logger.info("Created new template: %s (%s)", tpl.name, tpl.id)
    return tpl


async def update_template(db: AsyncSession, template_id: str, data: TemplateUpdate) -> Template:
    tpl = await db.get(Template, template_id)
    if not tpl:
        raise NotFoundError(f"Template not found: {template_id}")

    # Snapshot and update are committed separately; a crash between the two
    # commits can leave one without the other.
    db.add(TemplateVersion(template_id=tpl.id, version=tpl.version, content=tpl.content, created_at=utcnow()))
    await db.commit()

    if data.name is not None:
        tpl.name = data.name
    if data.description is not None:
        tpl.description = data.description
    if data.content is not None:
        tpl.content = data.content
    if data.tags is not None:
        tpl.tags = json.dumps(data.tags)
    tpl.version += 1
    tpl.updated_at = utcnow()

    await db.commit()
    await db.refresh(tpl)
    logger.info("Updated template: %s (%s) to version %d", tpl.name, tpl.id, tpl.version)
    return tpl


async def list_templates(db: AsyncSession) -> list[Template]:
    stmt = select(Template).where(Template.deleted.is_(False)).order_by(Template.name)
    result = await db.execute(stmt)
    return list(result.scalars().all())


async def list_versions(db: AsyncSession, template_id: str) -> list[TemplateVersion]:
    tpl = await get_template(db, template_id)
    stmt = (
        select(TemplateVersion)
        .where(TemplateVersion.template_id == tpl.id)
        .order_by(TemplateVersion.version.desc())
    )
    result = await db.execute(stmt)
    return list(result.scalars().all())


async def delete_template(db: AsyncSession, template_id: str) -> None:
    """Soft delete. Unknown or already-deleted ids are not an error."""
    tpl = await db.get(Template, template_id)
    if not tpl:
        return
    tpl.deleted = True
    tpl.updated_at = utcnow()
    await db.commit()
    logger.info("Soft-deleted template: %s (%s)", tpl.name, tpl.id)


# ── Import / export ────────────────────────────────────────────────


async def export_templates(db: AsyncSession, file_path: str | Path) -> int:
    """Write every non-deleted template (with content) as a JSON array."""
    stmt = select(Template).where(Template.deleted.is_(False)).order_by(Template.name)
    rows = (await db.execute(stmt)).scalars().all()
    exported = [
        {
            "id": t.id,
            "name": t.name,
            "description": t.description,
            "content": t.content,
            "tags": json.loads(t.tags) if t.tags else [],
            "version": t.version,
            "createdAt": t.created_at.isoformat(),
            "updatedAt": t.updated_at.isoformat(),
        }
        for t in rows
    ]
    path = Path(file_path)
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(exported, indent=2), encoding="utf-8")
    logger.info("Exported %d templates to %s", len(exported), path)
    return len(exported)


async def import_templates(db: AsyncSession, file_path: str | Path) -> dict[str, list[str]]:
    """Upsert templates from a JSON array, keyed by name.

    Returns dict with 'created' and 'updated' lists of template names.
    """
    path = Path(file_path)
    if not path.is_file():
        raise NotFoundError(f"Import file not found: {path}")
    try:
        raw = json.loads(path.read_text(encoding="utf-8"))
    except json.JSONDecodeError as exc:
        raise ValidationError(f"Import file is not valid JSON: {exc}") from exc
    if not isinstance(raw, list):
        raise ValidationError("Import file must contain a JSON array of templates")

    try:
        entries = [TemplateImportEntry.model_validate(item) for item in raw]
    except pydantic.ValidationError as exc:
        raise ValidationError(f"Invalid template entry in import file: {exc}") from exc

    created: list[str] = []
    updated: list[str] = []
    for entry in entries:
        try:
            existing = await get_template(db, entry.name)
        except NotFoundError:
            await create_template(
                db,
                TemplateCreate(
                    name=entry.name, description=entry.description, content=entry.content, tags=entry.tags or []
                ),
            )
            created.append(entry.name)
            continue
        await update_template(
            db,
            existing.id,
            TemplateUpdate(name=entry.name, description=entry.description, content=entry.content, tags=entry.tags),
        )
        updated.append(entry.name)

    logger.info("Imported templates from %s: %d created, %d updated", path, len(created), len(updated))
    return {"created": created, "updated": updated}


# ── Seed templates ─────────────────────────────────────────────────


async def initialize_defaults(db: AsyncSession, seed_dir: Path) -> list[str]:
    """Seed bundled templates into an empty store. Returns the names added."""
    count = (await db.execute(select(func.count()).select_from(Template))).scalar_one()
    if count > 0:
        logger.info("Found %d existing templates, skipping initialization", count)
        return []

    logger.info("Initializing default templates from %s", seed_dir)
    added: list[str] = []
    try:
        if not seed_dir.is_dir():
            raise FileNotFoundError(f"Seed directory not readable: {seed_dir}")
        for md_file in sorted(seed_dir.glob("*.md")):
            meta, body = parse_frontmatter(md_file.read_text(encoding="utf-8"))
            name = md_file.stem
            tags = meta.get("tags") if isinstance(meta.get("tags"), list) else ["default"]
            await create_template(
                db,
                TemplateCreate(
                    name=name,
                    description=str(meta.get("description") or f"Default template: {name}"),
                    content=body,
                    tags=[str(t) for t in tags],
                ),
            )
            added.append(name)
            logger.info("Added default template: %s", name)
    except OSError as exc:
        logger.warning("Error initializing default templates: %s", exc)

    if not added:
        logger.info("Creating standard template as fallback")
        await create_template(
            db,
            TemplateCreate(
                name="standard",
                description="Standard PRD template",
                content=STANDARD_TEMPLATE,
                tags=["default"],
            ),
        )
        added.append("standard")
    return added
