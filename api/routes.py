"""
REST API routes for prompt templates.
"""

from __future__ import annotations

import logging
from typing import Dict, List

from fastapi import APIRouter, Depends, Path, Response, status

from auth.dependencies import get_current_user_id, get_store
from database.store import CredentialStore
from utils.errors import ValidationError
from utils.schemas import TemplateCreateRequest, TemplateRecord

logger = logging.getLogger(__name__)

# Largest id a 64-bit INTEGER primary key can hold.
MAX_TEMPLATE_ID = 2**63 - 1

router = APIRouter()


@router.get("/templates", response_model=List[TemplateRecord])
async def list_templates(
    store: CredentialStore = Depends(get_store),
    _auth_user_id: int = Depends(get_current_user_id),
) -> List[TemplateRecord]:
    return await store.list_templates()


@router.post("/templates", status_code=status.HTTP_204_NO_CONTENT)
async def add_template(
    payload: TemplateCreateRequest,
    store: CredentialStore = Depends(get_store),
    auth_user_id: int = Depends(get_current_user_id),
) -> Response:
    if not payload.prompt.strip():
        raise ValidationError("Prompt not provided")
    template = await store.add_template(payload.prompt)
    logger.info("Template %s added by user %s", template.id, auth_user_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.delete("/templates/{template_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_template(
    template_id: int = Path(..., ge=1, le=MAX_TEMPLATE_ID),
    store: CredentialStore = Depends(get_store),
    auth_user_id: int = Depends(get_current_user_id),
) -> Response:
    """Delete a template by id.  Unknown ids yield 404."""
    await store.delete_template(template_id)
    logger.info("Template %s deleted by user %s", template_id, auth_user_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.get("/health")
async def health_check() -> Dict[str, str]:
    return {"status": "ok"}
