"""Loads the environments of a namespace in promotion order."""
import logging
from typing import Dict, List, Tuple

from pipeline_registry.schemas.environment import Environment
from pipeline_registry.services.record_store import RecordKind, RecordStore

logger = logging.getLogger(__name__)


async def get_ordered_environments(
    record_store: RecordStore,
    namespace: str,
) -> Tuple[Dict[str, Environment], List[str]]:
    """
    Return the environments keyed by name and their names sorted by
    promotion order, falling back to the name for equal orders.
    """
    records = await record_store.list_records(namespace, RecordKind.ENVIRONMENTS.value)
    environments: Dict[str, Environment] = {}
    for record in records:
        env = Environment.from_record(record)
        environments[env.name] = env

    names = sorted(environments, key=lambda n: (environments[n].order, n))
    logger.debug(f"Ordered environments in namespace {namespace}: {names}")
    return environments, names
