"""
Pytest fixtures for Pipeline Registry tests.
"""
import pytest
from typing import Generator

from fastapi import FastAPI
from fastapi.testclient import TestClient

# Import the app
import sys
import os

# Add the parent directory to path for imports
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from pipeline_registry.main import app
from pipeline_registry.schemas.credential import CredentialSecret
from pipeline_registry.schemas.environment import Environment
from pipeline_registry.services.record_store import (
    InMemoryRecordStore,
    InMemorySecretStore,
    RecordKind,
    get_record_store,
    get_secret_store,
)


# ============ Fixtures ============

NAMESPACE = "jx"


@pytest.fixture
def record_store() -> InMemoryRecordStore:
    """Empty in-memory record store."""
    return InMemoryRecordStore()


@pytest.fixture
def secret_store() -> InMemorySecretStore:
    """Empty in-memory secret store."""
    return InMemorySecretStore()


def git_credentials_secret(name: str, url: str = None, kind: str = None) -> CredentialSecret:
    annotations = {"jenkins.io/url": url} if url is not None else {}
    labels = {"jenkins.io/service-kind": kind} if kind is not None else {}
    return CredentialSecret(name=name, annotations=annotations, labels=labels)


async def add_environments(store: InMemoryRecordStore, namespace: str, *environments: Environment) -> None:
    for env in environments:
        await store.create_record(namespace, RecordKind.ENVIRONMENTS.value, env.to_record())


@pytest.fixture
def promotion_environments() -> list[Environment]:
    """staging and production are auto-promoted permanent environments, qa is manual."""
    return [
        Environment(name="dev", namespace=NAMESPACE, kind="development", promotion_strategy="never", order=0),
        Environment(name="staging", namespace=NAMESPACE, kind="permanent", promotion_strategy="automatic", order=100),
        Environment(name="production", namespace=NAMESPACE, kind="permanent", promotion_strategy="automatic", order=200),
        Environment(name="qa", namespace=NAMESPACE, kind="permanent", promotion_strategy="manual", order=300),
    ]


# ============ App and Client Fixtures ============


@pytest.fixture
def test_app(record_store: InMemoryRecordStore, secret_store: InMemorySecretStore) -> Generator[FastAPI, None, None]:
    """FastAPI app wired to the in-memory stores."""
    app.dependency_overrides[get_record_store] = lambda: record_store
    app.dependency_overrides[get_secret_store] = lambda: secret_store

    yield app

    app.dependency_overrides.clear()


@pytest.fixture
def client(test_app: FastAPI) -> Generator[TestClient, None, None]:
    """Create a synchronous test client."""
    with TestClient(test_app) as c:
        yield c
