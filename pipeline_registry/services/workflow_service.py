"""
Workflow lookup with a generated default.

When the default workflow has never been stored, a promotion pipeline is
derived from the environments that are both permanent and automatically
promoted, one sequential promote step per environment in promotion order.
The generated workflow is returned, not persisted.
"""
import logging
from typing import Awaitable, Callable, Dict, List, Optional, Tuple

from pipeline_registry.core.config import settings
from pipeline_registry.core.errors import RecordNotFoundError
from pipeline_registry.core.naming import to_valid_name
from pipeline_registry.schemas.environment import Environment
from pipeline_registry.schemas.workflow import PromoteWorkflowStep, Workflow, WorkflowStep, WorkflowStepKind
from pipeline_registry.services.environment_service import get_ordered_environments
from pipeline_registry.services.record_store import RecordKind, RecordStore

logger = logging.getLogger(__name__)

WORKFLOWS = RecordKind.WORKFLOWS.value

OrderedEnvironments = Callable[[RecordStore, str], Awaitable[Tuple[Dict[str, Environment], List[str]]]]


def create_workflow_promote_step(env_name: str, parallel: bool = False) -> WorkflowStep:
    return WorkflowStep(
        kind=WorkflowStepKind.PROMOTE.value,
        name=f"step-promote-{env_name}",
        promote=PromoteWorkflowStep(environment=env_name, parallel=parallel),
    )


def create_workflow(namespace: str, name: str, *steps: WorkflowStep) -> Workflow:
    return Workflow(name=to_valid_name(name), namespace=namespace, steps=list(steps))


async def get_workflow(
    record_store: RecordStore,
    name: Optional[str],
    namespace: str,
    ordered_environments: OrderedEnvironments = get_ordered_environments,
) -> Workflow:
    """Get the workflow with the given name, defaulting the default workflow.

    Args:
        record_store: Store holding workflows (and environments for the default
            ordering collaborator)
        name: Workflow name; blank means the default workflow
        namespace: Namespace to look in
        ordered_environments: Returns (environments by name, names in promotion order)

    Raises:
        RecordNotFoundError: a non-default workflow is not stored
        RecordStoreError: the store failed, or the environments could not be listed
    """
    default_name = settings.DEFAULT_WORKFLOW_NAME
    name = name or default_name

    try:
        record = await record_store.get_record(namespace, WORKFLOWS, name)
        return Workflow.from_record(record)
    except RecordNotFoundError:
        if name != default_name:
            raise

    environments, names = await ordered_environments(record_store, namespace)

    steps = []
    for env_name in names:
        env = environments.get(env_name)
        if env is not None and env.is_auto_promoted_permanent():
            steps.append(create_workflow_promote_step(env_name, False))

    logger.info(f"Generated default workflow for namespace {namespace} with {len(steps)} promote steps")
    return Workflow(name=default_name, namespace=namespace, steps=steps)


async def save_workflow(record_store: RecordStore, workflow: Workflow) -> Workflow:
    """Store a workflow, replacing any existing one with the same name."""
    record = workflow.to_record()
    try:
        await record_store.get_record(workflow.namespace, WORKFLOWS, workflow.name)
    except RecordNotFoundError:
        await record_store.create_record(workflow.namespace, WORKFLOWS, record)
        return workflow
    await record_store.update_record(workflow.namespace, WORKFLOWS, record)
    return workflow
