# SPDX-License-Identifier: Apache-2.0
"""
Shared fixtures.

`cluster` is a fresh in-memory cluster client per test; `client` is a
`LegacyClient` connected to it with "test" as its default namespace.
The `kvcompat` logger is handed back to the application after every test
so that tests installing log callbacks do not leak them.
"""

from __future__ import annotations

import pytest

from kvcompat.legacy.client import LegacyClient
from kvcompat.legacy.logging_shim import reset_logging
from tests.mock.mock_cluster_client import MockClusterClient

NAMESPACE = "test"
SET_NAME = "demo"


@pytest.fixture
def cluster() -> MockClusterClient:
    return MockClusterClient()


@pytest.fixture
def client(cluster: MockClusterClient) -> LegacyClient:
    return LegacyClient(cluster, "127.0.0.1", 3000, default_namespace=NAMESPACE)


@pytest.fixture(autouse=True)
def _reset_logging():
    yield
    reset_logging()
