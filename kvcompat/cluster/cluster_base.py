# kvcompat/cluster/cluster_base.py
# SPDX-License-Identifier: Apache-2.0
"""
Cluster client contract.

Purpose
-------
The legacy facade never talks to the network itself. Every read, write,
batch and scan is delegated to a *cluster client*: a component that owns
node discovery, connection pools, retries and the wire protocol.

This module pins down the shapes that cross that boundary:

- Value objects the cluster client consumes (`Key`, `Bin`, `Operation`,
  `Policy`, `WritePolicy`, `ScanPolicy`)
- Value objects it returns (`Record`)
- The native result-code space and the single exception type it raises
  (`NativeResultCode`, `ClusterClientError`)
- The `ClusterClient` protocol itself

Anything satisfying `ClusterClient` can sit behind `LegacyClient`: the
bundled Aerospike binding, an in-memory test double, or a proxy.

Policy defaults
---------------
`Policy()` carries the cluster client's own defaults (no timeout, two
retries, 500ms between retries). The legacy translator relies on
`max_retries` keeping that default when it only overrides the timeout, so
changing `DEFAULT_MAX_RETRIES` changes legacy retry pacing too.
"""

from __future__ import annotations

import enum
from dataclasses import dataclass, field
from typing import (
    Any,
    Callable,
    Dict,
    List,
    Mapping,
    Optional,
    Protocol,
    Sequence,
    runtime_checkable,
)


DEFAULT_MAX_RETRIES = 2
DEFAULT_SLEEP_BETWEEN_RETRIES_MS = 500
DIGEST_SIZE = 20

# =============================================================================
# Native result codes
# =============================================================================


class NativeResultCode(enum.IntEnum):
    """
    Result codes raised by the cluster client.

    Negative values are produced client-side; non-negative values come back
    from a server node.
    """

    INVALID_NODE_ERROR = -3
    PARSE_ERROR = -2
    SERIALIZE_ERROR = -1
    OK = 0
    SERVER_ERROR = 1
    KEY_NOT_FOUND_ERROR = 2
    GENERATION_ERROR = 3
    PARAMETER_ERROR = 4
    KEY_EXISTS_ERROR = 5
    BIN_EXISTS_ERROR = 6
    CLUSTER_KEY_MISMATCH = 7
    SERVER_MEM_ERROR = 8
    TIMEOUT = 9
    NO_XDS = 10
    SERVER_NOT_AVAILABLE = 11
    BIN_TYPE_ERROR = 12
    RECORD_TOO_BIG = 13
    KEY_BUSY = 14


class ClusterClientError(Exception):
    """
    The only exception type a cluster client is allowed to raise.

    Attributes:
        code: Native result code. Plain ints are accepted so that codes the
            facade does not know yet still round-trip.
        message: Human-readable description
        details: Optional JSON-serializable context
    """

    def __init__(
        self,
        code: int,
        message: str = "",
        *,
        details: Optional[Mapping[str, Any]] = None,
    ):
        super().__init__(message or f"cluster error {int(code)}")
        self.code = int(code)
        self.message = message
        self.details = dict(details or {})

    def asdict(self) -> Dict[str, Any]:
        return {
            "error": type(self).__name__,
            "code": self.code,
            "message": self.message,
            "details": self.details,
        }


# =============================================================================
# Addressing and payload
# =============================================================================


@dataclass(frozen=True)
class Key:
    """
    Record address.

    Exactly one of `user_key` / `digest` is meaningful. Key-addressed
    references leave hashing to the cluster client; digest-addressed
    references carry the precomputed 20-byte digest and no set name.
    """

    namespace: str
    set_name: Optional[str] = None
    user_key: Any = None
    digest: Optional[bytes] = None

    @property
    def is_digest(self) -> bool:
        return self.digest is not None


@dataclass(frozen=True)
class Bin:
    """Named field value. `name` is empty on single-bin namespaces."""

    name: Optional[str]
    value: Any


@dataclass(frozen=True)
class Record:
    """
    A record as returned by the cluster client.

    Attributes:
        bins: Bin name → value
        generation: Server modification counter
        expiration: Expiration time, seconds since the server epoch (0 = never)
        duplicates: Conflicting versions' bin maps, when the server kept
            duplicates instead of resolving them
    """

    bins: Dict[str, Any] = field(default_factory=dict)
    generation: int = 0
    expiration: int = 0
    duplicates: Optional[List[Dict[str, Any]]] = None


class OperationType(enum.Enum):
    READ = "read"
    WRITE = "write"
    ADD = "add"
    APPEND = "append"
    PREPEND = "prepend"
    TOUCH = "touch"


@dataclass(frozen=True)
class Operation:
    """
    One step of a single-record multi-operation request.

    A READ with `bin_name=None` reads every bin.
    """

    op_type: OperationType
    bin_name: Optional[str] = None
    value: Any = None

    @classmethod
    def put(cls, bin: Bin) -> "Operation":
        return cls(OperationType.WRITE, bin.name, bin.value)

    @classmethod
    def get(cls, bin_name: Optional[str] = None) -> "Operation":
        return cls(OperationType.READ, bin_name)

    @classmethod
    def add(cls, bin: Bin) -> "Operation":
        return cls(OperationType.ADD, bin.name, bin.value)

    @classmethod
    def append(cls, bin: Bin) -> "Operation":
        return cls(OperationType.APPEND, bin.name, bin.value)

    @classmethod
    def prepend(cls, bin: Bin) -> "Operation":
        return cls(OperationType.PREPEND, bin.name, bin.value)

    @classmethod
    def touch(cls) -> "Operation":
        return cls(OperationType.TOUCH)


# =============================================================================
# Policies
# =============================================================================


class RecordExistsAction(enum.Enum):
    """
    How a write treats an existing record.

    EXPECT_GEN_EQUAL accepts the write only when the stored generation equals
    `WritePolicy.generation`; EXPECT_GEN_GT only when the stored generation is
    greater than or equal to it. Both accept a write to an absent record.
    DUPLICATE keeps both versions when the stored generation differs.
    """

    UPDATE = "update"
    FAIL = "fail"
    EXPECT_GEN_EQUAL = "expect_gen_equal"
    EXPECT_GEN_GT = "expect_gen_gt"
    DUPLICATE = "duplicate"


class ScanPriority(enum.Enum):
    AUTO = "auto"
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


@dataclass
class Policy:
    """
    Per-request transaction policy.

    Attributes:
        timeout: Total request budget in milliseconds (0 = no timeout)
        max_retries: Additional attempts after the first one
        sleep_between_retries: Delay between attempts in milliseconds
    """

    timeout: int = 0
    max_retries: int = DEFAULT_MAX_RETRIES
    sleep_between_retries: int = DEFAULT_SLEEP_BETWEEN_RETRIES_MS


@dataclass
class WritePolicy(Policy):
    record_exists_action: RecordExistsAction = RecordExistsAction.UPDATE
    generation: int = 0
    expiration: int = 0


@dataclass
class ScanPolicy(Policy):
    scan_percent: int = 100
    concurrent_nodes: bool = True
    threads_per_node: int = 1
    fail_on_cluster_change: bool = False
    include_bin_data: bool = True
    priority: ScanPriority = ScanPriority.AUTO


# =============================================================================
# Client protocol
# =============================================================================

ScanRecordCallback = Callable[[str, Optional[str], bytes, Dict[str, Any], int, int], None]
"""Native scan callback: (namespace, set, digest, bins, generation, expiration)."""


@runtime_checkable
class ClusterClient(Protocol):
    """
    Operations the legacy facade delegates to.

    Implementations raise `ClusterClientError` for every failure and return
    `None` / `False` for "record not found" on reads, deletes and
    existence checks.
    """

    def add_host(self, hostname: str, port: int) -> None: ...

    def is_connected(self) -> bool: ...

    def get_node_names(self) -> List[str]: ...

    def close(self) -> None: ...

    def compute_digest(self, set_name: Optional[str], user_key: Any) -> bytes: ...

    def put(self, policy: WritePolicy, key: Key, bins: Sequence[Bin]) -> None: ...

    def append(self, policy: WritePolicy, key: Key, bins: Sequence[Bin]) -> None: ...

    def prepend(self, policy: WritePolicy, key: Key, bins: Sequence[Bin]) -> None: ...

    def add(self, policy: WritePolicy, key: Key, bins: Sequence[Bin]) -> None: ...

    def delete(self, policy: WritePolicy, key: Key) -> bool: ...

    def exists(self, policy: Policy, key: Key) -> bool: ...

    def get(
        self,
        policy: Policy,
        key: Key,
        bin_names: Optional[Sequence[str]] = None,
    ) -> Optional[Record]: ...

    def get_batch(
        self,
        policy: Policy,
        keys: Sequence[Key],
        bin_names: Optional[Sequence[str]] = None,
    ) -> List[Optional[Record]]: ...

    def exists_batch(self, policy: Policy, keys: Sequence[Key]) -> List[bool]: ...

    def operate(
        self,
        policy: WritePolicy,
        key: Key,
        operations: Sequence[Operation],
    ) -> Optional[Record]: ...

    def scan_all(
        self,
        policy: ScanPolicy,
        namespace: str,
        set_name: Optional[str],
        callback: ScanRecordCallback,
    ) -> None: ...

    def scan_node(
        self,
        policy: ScanPolicy,
        node_name: str,
        namespace: str,
        set_name: Optional[str],
        callback: ScanRecordCallback,
    ) -> None: ...


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
