import logging
from supabase import create_client, Client
from pipeline_registry.core.config import settings
from pipeline_registry.core.errors import RecordNotFoundError, RecordStoreError
from pipeline_registry.schemas.credential import CredentialSecret
from pipeline_registry.services.record_store import RecordStore, SecretStore
from typing import List, Dict, Any, Optional

logger = logging.getLogger(__name__)


class SupabaseRecordStore(RecordStore):
    """Record store backed by a Supabase table of (namespace, kind, name, data) rows"""

    def __init__(self, client: Client, table: str = None):
        self.client = client
        self.table = table or settings.RECORDS_TABLE

    def _query(self, namespace: str, kind: str):
        return self.client.table(self.table).select("*").eq("namespace", namespace).eq("kind", kind)

    async def list_records(self, namespace: str, kind: str) -> List[Dict[str, Any]]:
        try:
            response = self._query(namespace, kind).execute()
        except Exception as e:
            raise RecordStoreError("list", kind, cause=e) from e
        return [row.get("data") or {} for row in (response.data or [])]

    async def get_record(self, namespace: str, kind: str, name: str) -> Dict[str, Any]:
        try:
            response = self._query(namespace, kind).eq("name", name).execute()
        except Exception as e:
            raise RecordStoreError("get", kind, name, e) from e
        if not response.data:
            raise RecordNotFoundError(kind, name, namespace)
        return response.data[0].get("data") or {}

    async def create_record(self, namespace: str, kind: str, record: Dict[str, Any]) -> Dict[str, Any]:
        name = record.get("name")
        row = {"namespace": namespace, "kind": kind, "name": name, "data": record}
        try:
            response = self.client.table(self.table).insert(row).execute()
        except Exception as e:
            # the (namespace, kind, name) unique constraint rejects duplicates here
            raise RecordStoreError("create", kind, name, e) from e
        return response.data[0].get("data") if response.data else record

    async def update_record(self, namespace: str, kind: str, record: Dict[str, Any]) -> Dict[str, Any]:
        name = record.get("name")
        try:
            response = (
                self.client.table(self.table)
                .update({"data": record})
                .eq("namespace", namespace)
                .eq("kind", kind)
                .eq("name", name)
                .execute()
            )
        except Exception as e:
            raise RecordStoreError("update", kind, name, e) from e
        if not response.data:
            raise RecordNotFoundError(kind, name, namespace)
        return response.data[0].get("data") or record


class SupabaseSecretStore(SecretStore):
    """Secret lookup backed by a Supabase table of (namespace, name, annotations, labels) rows"""

    def __init__(self, client: Client, table: str = None):
        self.client = client
        self.table = table or settings.SECRETS_TABLE

    async def list_secrets(self, namespace: str) -> List[CredentialSecret]:
        try:
            response = self.client.table(self.table).select("*").eq("namespace", namespace).execute()
        except Exception as e:
            raise RecordStoreError("list", "secrets", cause=e) from e
        return [
            CredentialSecret(
                name=row.get("name"),
                annotations=row.get("annotations") or {},
                labels=row.get("labels") or {},
            )
            for row in (response.data or [])
        ]


class DatabaseService:
    """Service for interacting with Supabase database"""

    def __init__(self, client: Optional[Client] = None):
        self.client: Client = client or create_client(
            settings.SUPABASE_URL,
            settings.SUPABASE_SERVICE_KEY
        )
        self.record_store = SupabaseRecordStore(self.client)
        self.secret_store = SupabaseSecretStore(self.client)


def _create_db_service() -> Optional[DatabaseService]:
    if not (settings.SUPABASE_URL and settings.SUPABASE_SERVICE_KEY):
        logger.info("Supabase is not configured; using the in-memory record store")
        return None
    return DatabaseService()


# Global instance
db_service = _create_db_service()
