# kvcompat/cluster/__init__.py
# SPDX-License-Identifier: Apache-2.0

"""
Cluster client contract - Public API

Value objects, result codes and the `ClusterClient` protocol that
`LegacyClient` delegates to. Concrete bindings live in sibling modules and
are imported explicitly so their vendor packages stay optional.
"""

from kvcompat.cluster.cluster_base import (
    # Constants
    DEFAULT_MAX_RETRIES,
    DEFAULT_SLEEP_BETWEEN_RETRIES_MS,
    DIGEST_SIZE,

    # Errors
    NativeResultCode,
    ClusterClientError,

    # Addressing and payload
    Key,
    Bin,
    Record,
    OperationType,
    Operation,

    # Policies
    RecordExistsAction,
    ScanPriority,
    Policy,
    WritePolicy,
    ScanPolicy,

    # Protocol
    ScanRecordCallback,
    ClusterClient,
)

__all__ = [
    "DEFAULT_MAX_RETRIES",
    "DEFAULT_SLEEP_BETWEEN_RETRIES_MS",
    "DIGEST_SIZE",
    "NativeResultCode",
    "ClusterClientError",
    "Key",
    "Bin",
    "Record",
    "OperationType",
    "Operation",
    "RecordExistsAction",
    "ScanPriority",
    "Policy",
    "WritePolicy",
    "ScanPolicy",
    "ScanRecordCallback",
    "ClusterClient",
]
