"""
Workflow API endpoints for promotion workflows
"""
from fastapi import APIRouter, HTTPException, status, Depends
from typing import Optional
import logging

from pipeline_registry.core.config import settings
from pipeline_registry.core.errors import RecordNotFoundError, RecordStoreError
from pipeline_registry.schemas.workflow import Workflow, WorkflowCreate
from pipeline_registry.services.record_store import RecordStore, get_record_store
from pipeline_registry.services.workflow_service import create_workflow, get_workflow, save_workflow

logger = logging.getLogger(__name__)

router = APIRouter()


async def _get_workflow(name: str, namespace: Optional[str], record_store: RecordStore) -> Workflow:
    namespace = namespace or settings.DEFAULT_NAMESPACE
    try:
        return await get_workflow(record_store, name, namespace)
    except RecordNotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    except RecordStoreError as e:
        raise HTTPException(status_code=status.HTTP_502_BAD_GATEWAY, detail=str(e))


@router.get("", response_model=Workflow)
async def get_default_workflow(
    namespace: Optional[str] = None,
    record_store: RecordStore = Depends(get_record_store),
):
    """
    Get the default workflow, generated from the automatically promoted
    permanent environments when none is stored.
    """
    return await _get_workflow("", namespace, record_store)


@router.get("/{name}", response_model=Workflow)
async def get_named_workflow(
    name: str,
    namespace: Optional[str] = None,
    record_store: RecordStore = Depends(get_record_store),
):
    return await _get_workflow(name, namespace, record_store)


@router.post("", response_model=Workflow, status_code=status.HTTP_201_CREATED)
async def store_workflow(
    request: WorkflowCreate,
    record_store: RecordStore = Depends(get_record_store),
):
    """
    Store a workflow, replacing any existing workflow with the same name.
    """
    namespace = request.namespace or settings.DEFAULT_NAMESPACE
    workflow = create_workflow(namespace, request.name, *request.steps)
    if not workflow.name:
        raise HTTPException(status_code=status.HTTP_422_UNPROCESSABLE_ENTITY, detail="Workflow name is required")
    try:
        return await save_workflow(record_store, workflow)
    except RecordStoreError as e:
        logger.error(f"Failed to store workflow {workflow.name}: {str(e)}")
        raise HTTPException(status_code=status.HTTP_502_BAD_GATEWAY, detail=str(e))
