"""Template CRUD + version history + import/export endpoints."""

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.ext.asyncio import AsyncSession

from prd_creator.database import get_db
from prd_creator.exceptions import NotFoundError, ValidationError
from prd_creator.schemas.system import SuccessResponse
from prd_creator.schemas.template import (
    TemplateCreate,
    TemplateFileRequest,
    TemplateResponse,
    TemplateSummary,
    TemplateUpdate,
    TemplateVersionResponse,
)
from prd_creator.services import template_service

router = APIRouter()


@router.get("/", response_model=list[TemplateSummary])
async def list_templates(db: AsyncSession = Depends(get_db)):
    return await template_service.list_templates(db)


@router.post("/", response_model=TemplateResponse, status_code=201)
async def create_template(data: TemplateCreate, db: AsyncSession = Depends(get_db)):
    return await template_service.create_template(db, data)


@router.post("/export", response_model=SuccessResponse)
async def export_templates(body: TemplateFileRequest, db: AsyncSession = Depends(get_db)):
    await template_service.export_templates(db, body.file_path)
    return SuccessResponse(file_path=body.file_path)


@router.post("/import", response_model=SuccessResponse)
async def import_templates(body: TemplateFileRequest, db: AsyncSession = Depends(get_db)):
    try:
        await template_service.import_templates(db, body.file_path)
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=e.message)
    except ValidationError as e:
        raise HTTPException(status_code=422, detail=e.message)
    return SuccessResponse(file_path=body.file_path)


@router.get("/{id_or_name}/versions", response_model=list[TemplateVersionResponse])
async def list_versions(id_or_name: str, db: AsyncSession = Depends(get_db)):
    try:
        return await template_service.list_versions(db, id_or_name)
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=e.message)


@router.get("/{id_or_name}", response_model=TemplateResponse)
async def get_template(id_or_name: str, db: AsyncSession = Depends(get_db)):
    try:
        return await template_service.get_template(db, id_or_name)
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=e.message)


@router.patch("/{template_id}", response_model=TemplateResponse)
async def update_template(template_id: str, data: TemplateUpdate, db: AsyncSession = Depends(get_db)):
    try:
        return await template_service.update_template(db, template_id, data)
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=e.message)


@router.delete("/{template_id}", status_code=204)
async def delete_template(template_id: str, db: AsyncSession = Depends(get_db)):
    await template_service.delete_template(db, template_id)
