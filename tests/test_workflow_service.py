"""
Unit tests for workflow lookup and the generated default workflow.
"""
import pytest
from pydantic import ValidationError
from unittest.mock import AsyncMock, MagicMock

from conftest import NAMESPACE, add_environments
from pipeline_registry.core.errors import RecordNotFoundError, RecordStoreError
from pipeline_registry.schemas.environment import Environment
from pipeline_registry.schemas.workflow import Workflow
from pipeline_registry.services.record_store import RecordKind
from pipeline_registry.services.workflow_service import (
    create_workflow,
    create_workflow_promote_step,
    get_workflow,
    save_workflow,
)

WORKFLOWS = RecordKind.WORKFLOWS.value


def step_summary(workflow: Workflow):
    return [(s.kind, s.name, s.promote.environment, s.promote.parallel) for s in workflow.steps]


class TestWorkflowFactories:

    @pytest.mark.unit
    def test_promote_step(self):
        step = create_workflow_promote_step("staging", True)

        assert step.kind == "promote"
        assert step.name == "step-promote-staging"
        assert step.promote.environment == "staging"
        assert step.promote.parallel is True

    @pytest.mark.unit
    def test_promote_step_is_immutable(self):
        step = create_workflow_promote_step("staging")

        with pytest.raises(ValidationError):
            step.name = "other"

    @pytest.mark.unit
    def test_create_workflow_sanitizes_name(self):
        workflow = create_workflow(NAMESPACE, "My Release", create_workflow_promote_step("prod"))

        assert workflow.name == "my-release"
        assert workflow.namespace == NAMESPACE
        assert [s.name for s in workflow.steps] == ["step-promote-prod"]


class TestGetWorkflow:

    @pytest.mark.unit
    @pytest.mark.asyncio
    async def test_default_generated_from_given_order(self, record_store):
        environments = {
            "staging": Environment(name="staging", kind="permanent", promotion_strategy="automatic"),
            "production": Environment(name="production", kind="permanent", promotion_strategy="automatic"),
            "qa": Environment(name="qa", kind="permanent", promotion_strategy="manual"),
        }
        ordered = AsyncMock(return_value=(environments, ["staging", "production", "qa"]))

        workflow = await get_workflow(record_store, "", NAMESPACE, ordered_environments=ordered)

        assert workflow.name == "default"
        assert workflow.namespace == NAMESPACE
        assert step_summary(workflow) == [
            ("promote", "step-promote-staging", "staging", False),
            ("promote", "step-promote-production", "production", False),
        ]
        ordered.assert_awaited_once_with(record_store, NAMESPACE)

    @pytest.mark.unit
    @pytest.mark.asyncio
    async def test_default_generated_from_stored_environments(self, record_store, promotion_environments):
        await add_environments(record_store, NAMESPACE, *promotion_environments)

        workflow = await get_workflow(record_store, None, NAMESPACE)

        assert [s.name for s in workflow.steps] == ["step-promote-staging", "step-promote-production"]

    @pytest.mark.unit
    @pytest.mark.asyncio
    async def test_generated_default_is_not_persisted(self, record_store, promotion_environments):
        await add_environments(record_store, NAMESPACE, *promotion_environments)

        await get_workflow(record_store, "default", NAMESPACE)

        assert await record_store.list_records(NAMESPACE, WORKFLOWS) == []

    @pytest.mark.unit
    @pytest.mark.asyncio
    async def test_names_missing_from_lookup_are_skipped(self, record_store):
        environments = {"staging": Environment(name="staging", kind="permanent", promotion_strategy="automatic")}
        ordered = AsyncMock(return_value=(environments, ["ghost", "staging"]))

        workflow = await get_workflow(record_store, "", NAMESPACE, ordered_environments=ordered)

        assert [s.name for s in workflow.steps] == ["step-promote-staging"]

    @pytest.mark.unit
    @pytest.mark.asyncio
    async def test_no_qualifying_environments_gives_empty_workflow(self, record_store):
        await add_environments(
            record_store,
            NAMESPACE,
            Environment(name="preview", kind="preview", promotion_strategy="automatic"),
            Environment(name="prod", kind="permanent", promotion_strategy="manual"),
        )

        workflow = await get_workflow(record_store, "", NAMESPACE)

        assert workflow.name == "default"
        assert workflow.steps == []

    @pytest.mark.unit
    @pytest.mark.asyncio
    async def test_stored_default_is_returned(self, record_store, promotion_environments):
        await add_environments(record_store, NAMESPACE, *promotion_environments)
        stored = create_workflow(NAMESPACE, "default", create_workflow_promote_step("production", True))
        await save_workflow(record_store, stored)

        workflow = await get_workflow(record_store, "", NAMESPACE)

        assert workflow == stored

    @pytest.mark.unit
    @pytest.mark.asyncio
    async def test_missing_named_workflow_is_not_generated(self, record_store, promotion_environments):
        await add_environments(record_store, NAMESPACE, *promotion_environments)
        ordered = AsyncMock()

        with pytest.raises(RecordNotFoundError) as exc_info:
            await get_workflow(record_store, "custom", NAMESPACE, ordered_environments=ordered)

        assert exc_info.value.name == "custom"
        ordered.assert_not_called()

    @pytest.mark.unit
    @pytest.mark.asyncio
    async def test_stored_named_workflow_is_returned(self, record_store):
        stored = create_workflow(NAMESPACE, "custom", create_workflow_promote_step("qa"))
        await save_workflow(record_store, stored)

        assert await get_workflow(record_store, "custom", NAMESPACE) == stored

    @pytest.mark.unit
    @pytest.mark.asyncio
    async def test_environment_ordering_failure_aborts(self, record_store):
        ordered = AsyncMock(side_effect=RecordStoreError("list", "environments"))

        with pytest.raises(RecordStoreError):
            await get_workflow(record_store, "", NAMESPACE, ordered_environments=ordered)

    @pytest.mark.unit
    @pytest.mark.asyncio
    async def test_store_failure_on_default_is_not_masked(self):
        store = MagicMock()
        store.get_record = AsyncMock(side_effect=RecordStoreError("get", WORKFLOWS, "default"))
        ordered = AsyncMock()

        with pytest.raises(RecordStoreError):
            await get_workflow(store, "", NAMESPACE, ordered_environments=ordered)

        ordered.assert_not_called()


class TestSaveWorkflow:

    @pytest.mark.unit
    @pytest.mark.asyncio
    async def test_replaces_existing(self, record_store):
        await save_workflow(record_store, create_workflow(NAMESPACE, "release", create_workflow_promote_step("qa")))
        await save_workflow(record_store, create_workflow(NAMESPACE, "release", create_workflow_promote_step("prod")))

        records = await record_store.list_records(NAMESPACE, WORKFLOWS)
        assert len(records) == 1
        assert records[0]["steps"][0]["name"] == "step-promote-prod"
