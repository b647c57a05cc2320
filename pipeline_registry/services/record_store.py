"""
Record store abstractions.

Records are plain dicts keyed by (namespace, kind, name). Implementations
raise RecordNotFoundError for a missing record and RecordStoreError for any
other failure. Nothing is cached between calls.
"""
import copy
import logging
from abc import ABC, abstractmethod
from enum import Enum
from typing import Any, Dict, List, Tuple

from pipeline_registry.core.errors import RecordNotFoundError, RecordStoreError
from pipeline_registry.schemas.credential import CredentialSecret

logger = logging.getLogger(__name__)


class RecordKind(str, Enum):
    GIT_SERVICES = "gitservices"
    WORKFLOWS = "workflows"
    ENVIRONMENTS = "environments"


class RecordStore(ABC):
    """Generic list/get/create/update interface over named records."""

    @abstractmethod
    async def list_records(self, namespace: str, kind: str) -> List[Dict[str, Any]]:
        ...

    @abstractmethod
    async def get_record(self, namespace: str, kind: str, name: str) -> Dict[str, Any]:
        ...

    @abstractmethod
    async def create_record(self, namespace: str, kind: str, record: Dict[str, Any]) -> Dict[str, Any]:
        ...

    @abstractmethod
    async def update_record(self, namespace: str, kind: str, record: Dict[str, Any]) -> Dict[str, Any]:
        ...


class SecretStore(ABC):
    @abstractmethod
    async def list_secrets(self, namespace: str) -> List[CredentialSecret]:
        ...


class InMemoryRecordStore(RecordStore):
    """Dict backed store used by tests and when no database is configured."""

    def __init__(self):
        self._records: Dict[Tuple[str, str, str], Dict[str, Any]] = {}

    async def list_records(self, namespace: str, kind: str) -> List[Dict[str, Any]]:
        return [
            copy.deepcopy(record)
            for (ns, k, _), record in self._records.items()
            if ns == namespace and k == kind
        ]

    async def get_record(self, namespace: str, kind: str, name: str) -> Dict[str, Any]:
        record = self._records.get((namespace, kind, name))
        if record is None:
            raise RecordNotFoundError(kind, name, namespace)
        return copy.deepcopy(record)

    async def create_record(self, namespace: str, kind: str, record: Dict[str, Any]) -> Dict[str, Any]:
        name = record.get("name")
        if not name:
            raise RecordStoreError("create", kind, name, ValueError("record name is required"))
        key = (namespace, kind, name)
        if key in self._records:
            raise RecordStoreError("create", kind, name, ValueError("record already exists"))
        self._records[key] = copy.deepcopy(record)
        return copy.deepcopy(record)

    async def update_record(self, namespace: str, kind: str, record: Dict[str, Any]) -> Dict[str, Any]:
        name = record.get("name")
        key = (namespace, kind, name)
        if key not in self._records:
            raise RecordNotFoundError(kind, name, namespace)
        self._records[key] = copy.deepcopy(record)
        return copy.deepcopy(record)


class InMemorySecretStore(SecretStore):
    def __init__(self):
        self._secrets: Dict[str, List[CredentialSecret]] = {}

    def add_secret(self, namespace: str, secret: CredentialSecret) -> None:
        self._secrets.setdefault(namespace, []).append(secret)

    async def list_secrets(self, namespace: str) -> List[CredentialSecret]:
        return list(self._secrets.get(namespace, []))


_memory_record_store = InMemoryRecordStore()
_memory_secret_store = InMemorySecretStore()


def get_record_store() -> RecordStore:
    """Return the configured record store (Supabase if configured, otherwise in-memory)."""
    from pipeline_registry.services.database import db_service

    if db_service is not None:
        return db_service.record_store
    return _memory_record_store


def get_secret_store() -> SecretStore:
    from pipeline_registry.services.database import db_service

    if db_service is not None:
        return db_service.secret_store
    return _memory_secret_store
