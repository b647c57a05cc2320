"""
Keeps exactly one GitService record per git host URL.

This is a plain read-modify-write against the record store with no
optimistic locking: two concurrent calls for the same new URL can both
miss the list and both try to create, in which case the losing create
fails and the error is surfaced to the caller. No retries happen here.
"""
import logging
import sys
from typing import Any, Awaitable, Optional, TextIO
from urllib.parse import urlparse

from pipeline_registry.core.errors import (
    InvalidGitServiceNameError,
    InvalidGitURLError,
    RecordNotFoundError,
    RecordStoreError,
)
from pipeline_registry.core.naming import to_valid_name_with_dots
from pipeline_registry.schemas.git_service import DEFAULT_GIT_KIND, GitService
from pipeline_registry.services.record_store import RecordKind, RecordStore

logger = logging.getLogger(__name__)

GIT_SERVICES = RecordKind.GIT_SERVICES.value


async def _store_call(operation: str, name: Optional[str], call: Awaitable[Any]) -> Any:
    try:
        return await call
    except RecordStoreError as e:
        raise RecordStoreError(operation, "GitService", name, e.cause or e) from e
    except Exception as e:
        raise RecordStoreError(operation, "GitService", name, e) from e


def git_service_name_from_url(url: str) -> str:
    """Derive a display name for a git service from the host part of its URL."""
    try:
        parsed = urlparse(url)
    except ValueError as e:
        raise InvalidGitURLError(url, str(e)) from e
    host = parsed.netloc.rsplit("@", 1)[-1]
    if not host:
        raise InvalidGitURLError(url, "missing host")
    return host


async def ensure_git_service_exists_for_host(
    record_store: RecordStore,
    namespace: str,
    kind: str,
    name: Optional[str],
    url: str,
    out: Optional[TextIO] = None,
) -> Optional[GitService]:
    """
    Ensure there is a GitService record mapping the given URL to the given kind.

    Returns the record as stored after the call, or None when nothing needs to
    be stored (empty kind, the default kind, or an empty URL).

    Raises:
        InvalidGitURLError: no name was supplied and the URL has no parsable host
        InvalidGitServiceNameError: the name has no characters left after sanitizing
        RecordStoreError: a list/get/create/update call failed
    """
    if not kind or kind == DEFAULT_GIT_KIND or not url:
        return None
    out = out or sys.stdout

    records = await _store_call("list", None, record_store.list_records(namespace, GIT_SERVICES))
    for record in records:
        if record.get("url") != url:
            continue
        existing = GitService.from_record(record)
        if existing.kind == kind:
            return existing
        out.write(f"Updating GitService {existing.name} as the kind has changed from {existing.kind} to {kind}\n")
        logger.info(f"Updating kind of GitService {existing.name} from {existing.kind} to {kind}")
        updated = {**record, "kind": kind}
        await _store_call("update kind on", existing.name, record_store.update_record(namespace, GIT_SERVICES, updated))
        return GitService.from_record(updated)

    if not name:
        name = git_service_name_from_url(url)
    record_name = to_valid_name_with_dots(name)
    if not record_name:
        raise InvalidGitServiceNameError(name)
    git_service = GitService(name=record_name, url=url, kind=kind, display_name=name)

    try:
        current = await record_store.get_record(namespace, GIT_SERVICES, record_name)
    except RecordNotFoundError:
        current = None
    except RecordStoreError as e:
        raise RecordStoreError("get", "GitService", record_name, e.cause or e) from e
    except Exception as e:
        raise RecordStoreError("get", "GitService", record_name, e) from e

    if current is None:
        logger.info(f"Creating GitService {record_name} for {url} with kind {kind}")
        await _store_call("create", record_name, record_store.create_record(namespace, GIT_SERVICES, git_service.to_record()))
        return git_service

    if current.get("url") == url and current.get("kind") == kind:
        return GitService.from_record(current)

    logger.info(f"Updating GitService {record_name} to {url} with kind {kind}")
    updated = {**current, "url": url, "kind": kind}
    await _store_call("update", record_name, record_store.update_record(namespace, GIT_SERVICES, updated))
    return GitService.from_record(updated)
