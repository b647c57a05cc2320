"""
Resolves the git kind (API dialect) spoken by a git host.

Lookups run in priority order and the first one that finds a kind wins:

1. the static table of well-known SaaS hosts
2. git credential secrets annotated with the host URL
3. stored GitService records

A credential secret that matches the URL but has no kind label stops the
chain with SecretMissingKindLabelError. A failure to list the secrets is
logged and treated as "nothing found" so the stored records still get
consulted.
"""
import logging
from typing import Awaitable, Callable, List, Optional

from pipeline_registry.core.config import settings
from pipeline_registry.core.errors import GitServiceKindNotFoundError, SecretMissingKindLabelError
from pipeline_registry.schemas.git_service import SAAS_GIT_KINDS
from pipeline_registry.services.record_store import RecordKind, RecordStore, SecretStore

logger = logging.getLogger(__name__)

KindLookup = Callable[[str], Awaitable[Optional[str]]]


def saas_git_kind(url: str) -> Optional[str]:
    """Return the kind of a well-known SaaS git host, or None."""
    if not url:
        return None
    return SAAS_GIT_KINDS.get(url.rstrip("/"))


class GitKindResolver:
    """Looks up the git kind for a host URL within a namespace."""

    def __init__(
        self,
        record_store: RecordStore,
        secret_store: SecretStore,
        namespace: str,
        secret_prefix: str = None,
        url_annotation: str = None,
        kind_label: str = None,
    ):
        self.record_store = record_store
        self.secret_store = secret_store
        self.namespace = namespace
        self.secret_prefix = secret_prefix or settings.GIT_CREDENTIALS_SECRET_PREFIX
        self.url_annotation = url_annotation or settings.SECRET_URL_ANNOTATION
        self.kind_label = kind_label or settings.SECRET_SERVICE_KIND_LABEL

    @property
    def lookups(self) -> List[KindLookup]:
        return [self.kind_from_saas_hosts, self.kind_from_secrets, self.kind_from_git_services]

    async def resolve(self, url: str) -> str:
        for lookup in self.lookups:
            kind = await lookup(url)
            if kind:
                logger.debug(f"Resolved git kind {kind} for {url} using {lookup.__name__}")
                return kind
        raise GitServiceKindNotFoundError(url)

    async def kind_from_saas_hosts(self, url: str) -> Optional[str]:
        return saas_git_kind(url)

    async def kind_from_secrets(self, url: str) -> Optional[str]:
        try:
            secrets = await self.secret_store.list_secrets(self.namespace)
        except Exception as e:
            logger.warning(
                f"Failed to list the secrets in namespace {self.namespace} while resolving git kind for {url}: {str(e)}"
            )
            return None

        # First match wins; the secret store does not guarantee ordering
        for secret in secrets:
            if not secret.name.startswith(self.secret_prefix):
                continue
            secret_url = secret.get_annotation(self.url_annotation)
            if secret_url is None or secret_url != url:
                continue
            kind = secret.get_label(self.kind_label)
            if kind is None:
                raise SecretMissingKindLabelError(secret.name, url, self.kind_label)
            return kind
        return None

    async def kind_from_git_services(self, url: str) -> Optional[str]:
        records = await self.record_store.list_records(self.namespace, RecordKind.GIT_SERVICES.value)
        for record in records:
            if record.get("url") == url:
                return record.get("kind")
        return None


async def resolve_git_service_kind(
    record_store: RecordStore,
    secret_store: SecretStore,
    namespace: str,
    url: str,
) -> str:
    """Return the kind of the given git host or raise GitServiceKindNotFoundError."""
    resolver = GitKindResolver(record_store, secret_store, namespace)
    return await resolver.resolve(url)
