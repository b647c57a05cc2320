"""
Git service API endpoints for resolving and registering git hosts
"""
from fastapi import APIRouter, HTTPException, status, Depends, Query
from typing import List, Optional
import logging
import sys

from pipeline_registry.core.config import settings
from pipeline_registry.core.errors import (
    GitServiceKindNotFoundError,
    InvalidGitServiceNameError,
    InvalidGitURLError,
    RecordStoreError,
    SecretMissingKindLabelError,
)
from pipeline_registry.schemas.git_service import (
    GitService,
    GitServiceEnsureRequest,
    GitServiceKindResponse,
    GitServiceResponse,
)
from pipeline_registry.services.git_kind_resolver import resolve_git_service_kind
from pipeline_registry.services.git_service_registry import ensure_git_service_exists_for_host
from pipeline_registry.services.record_store import (
    RecordKind,
    RecordStore,
    SecretStore,
    get_record_store,
    get_secret_store,
)

logger = logging.getLogger(__name__)

router = APIRouter()


def _to_response(git_service: GitService, namespace: str) -> GitServiceResponse:
    return GitServiceResponse(namespace=namespace, **git_service.model_dump())


@router.get("", response_model=List[GitServiceResponse])
async def list_git_services(
    namespace: Optional[str] = None,
    record_store: RecordStore = Depends(get_record_store),
):
    """
    List the GitService records stored in a namespace.
    """
    namespace = namespace or settings.DEFAULT_NAMESPACE
    try:
        records = await record_store.list_records(namespace, RecordKind.GIT_SERVICES.value)
    except RecordStoreError as e:
        raise HTTPException(status_code=status.HTTP_502_BAD_GATEWAY, detail=str(e))
    return [_to_response(GitService.from_record(r), namespace) for r in records]


@router.get("/kind", response_model=GitServiceKindResponse)
async def get_git_service_kind(
    url: str = Query(..., min_length=1),
    namespace: Optional[str] = None,
    record_store: RecordStore = Depends(get_record_store),
    secret_store: SecretStore = Depends(get_secret_store),
):
    """
    Resolve the git kind of a host from the SaaS host table, git credential
    secrets, or stored GitService records, in that order.
    """
    namespace = namespace or settings.DEFAULT_NAMESPACE
    try:
        kind = await resolve_git_service_kind(record_store, secret_store, namespace, url)
    except GitServiceKindNotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    except SecretMissingKindLabelError as e:
        raise HTTPException(status_code=status.HTTP_422_UNPROCESSABLE_ENTITY, detail=str(e))
    except RecordStoreError as e:
        raise HTTPException(status_code=status.HTTP_502_BAD_GATEWAY, detail=str(e))
    return GitServiceKindResponse(url=url, kind=kind)


@router.put("", response_model=Optional[GitServiceResponse])
async def ensure_git_service(
    request: GitServiceEnsureRequest,
    record_store: RecordStore = Depends(get_record_store),
):
    """
    Ensure a GitService record maps the URL to the kind.
    Returns null when the host needs no record (default kind or missing URL).
    """
    namespace = request.namespace or settings.DEFAULT_NAMESPACE
    try:
        git_service = await ensure_git_service_exists_for_host(
            record_store,
            namespace,
            request.kind,
            request.name,
            request.url,
            out=sys.stdout,
        )
    except (InvalidGitURLError, InvalidGitServiceNameError) as e:
        raise HTTPException(status_code=status.HTTP_422_UNPROCESSABLE_ENTITY, detail=str(e))
    except RecordStoreError as e:
        logger.error(f"Failed to ensure GitService for {request.url}: {str(e)}")
        raise HTTPException(status_code=status.HTTP_502_BAD_GATEWAY, detail=str(e))

    if git_service is None:
        return None
    return _to_response(git_service, namespace)
