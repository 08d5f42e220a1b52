# kvcompat/cluster/aerospike_adapter.py
# SPDX-License-Identifier: Apache-2.0
"""
Aerospike binding for the cluster client contract.

This module implements `ClusterClient` on top of the official `aerospike`
Python package, so `LegacyClient` can run against a real cluster.

Goals
-----
- Map contract policies → Aerospike policy / meta dicts.
- Map contract keys → Aerospike key tuples (user key or digest).
- Normalize `aerospike.exception.AerospikeError` into `ClusterClientError`
  with a contract `NativeResultCode`.
- Support "thin" (caller owns the Aerospike client) and "standalone"
  (hosts from arguments or `AEROSPIKE_HOSTS`) modes.

Usage
-----
    import aerospike
    from kvcompat import LegacyClient
    from kvcompat.cluster.aerospike_adapter import AerospikeClusterClient

    # standalone
    cluster = AerospikeClusterClient(hosts=[("127.0.0.1", 3000)])

    # thin
    as_client = aerospike.client({"hosts": [("127.0.0.1", 3000)]}).connect()
    cluster = AerospikeClusterClient(client=as_client)

    client = LegacyClient(cluster)

Limitations
-----------
- The Aerospike client takes its seed hosts at construction time, so
  `add_host` reconnects with the enlarged host list.
- Duplicate-version writes (`RecordExistsAction.DUPLICATE`) are not
  supported by current servers and fail with PARAMETER_ERROR.
- A full-record read inside `operate` needs a follow-up `get`, so such
  calls cost two round trips.
- `RecordExistsAction.EXPECT_GEN_GT` (stored generation >= g) reads the
  record header before writing, so it also costs two round trips.
- Scan priority, threads per node and fail-on-cluster-change are no longer
  honored by current clients and are ignored.
"""

from __future__ import annotations

import logging
import os
import time
from typing import Any, Dict, List, Mapping, Optional, Sequence, Tuple

from kvcompat.config import parse_hosts
from kvcompat.cluster.cluster_base import (
    Bin,
    ClusterClientError,
    Key,
    NativeResultCode,
    Operation,
    OperationType,
    Policy,
    Record,
    RecordExistsAction,
    ScanPolicy,
    ScanRecordCallback,
    WritePolicy,
)
from kvcompat.core.error_context import attach_context

logger = logging.getLogger(__name__)

# Try to import the Aerospike client.
try:  # pragma: no cover - import surface only
    import aerospike  # type: ignore
    from aerospike import exception as aerospike_exception  # type: ignore
    from aerospike_helpers.operations import operations as aerospike_ops  # type: ignore
except Exception:  # pragma: no cover
    aerospike = None  # type: ignore[assignment]
    aerospike_exception = None  # type: ignore[assignment]
    aerospike_ops = None  # type: ignore[assignment]

# Server expiration times are seconds since 2010-01-01 00:00:00 UTC.
SERVER_EPOCH_OFFSET = 1262304000

# ttl values meaning "never expires"
_NEVER_EXPIRES = (0, -1, 0xFFFFFFFF)

# Client-side (negative) codes that mean a node could not be reached.
_NODE_ERROR_CODES = frozenset({-4, -6, -7, -8, -10})
_CLIENT_PARAM_ERROR = -2


def expiration_from_ttl(ttl: Optional[int], now: Optional[float] = None) -> int:
    """Convert a remaining ttl into an absolute server-epoch expiration (0 = never)."""
    if ttl is None or ttl in _NEVER_EXPIRES:
        return 0
    current = int(time.time() if now is None else now)
    return current - SERVER_EPOCH_OFFSET + int(ttl)


def native_code_for(code: Optional[int]) -> int:
    """
    Map an Aerospike error code to the contract's native code space.

    Server codes (>= 0) share numbering with `NativeResultCode` and pass
    through unchanged; negative client-side codes are folded into the three
    client-side contract codes.
    """
    if code is None:
        return NativeResultCode.SERVER_ERROR
    code = int(code)
    if code >= 0:
        return code
    if code in _NODE_ERROR_CODES:
        return NativeResultCode.INVALID_NODE_ERROR
    if code == _CLIENT_PARAM_ERROR:
        return NativeResultCode.PARAMETER_ERROR
    return NativeResultCode.PARSE_ERROR


class AerospikeClusterClient:
    """
    `ClusterClient` backed by the `aerospike` package.

    Design notes
    ------------
    - Synchronous: every method is one blocking Aerospike call, except the
      read-all `operate` case noted in the module docstring.
    - Retries are executed by the Aerospike client from the policy's
      `max_retries` / `sleep_between_retries`.
    - "Record not found" is returned as None / False, never raised.
    """

    _component = "aerospike"

    def __init__(
        self,
        client: Any = None,
        *,
        hosts: Optional[Sequence[Tuple[str, int]]] = None,
        config: Optional[Mapping[str, Any]] = None,
        digest_namespace: str = "kvcompat",
    ) -> None:
        if aerospike is None or aerospike_ops is None:
            raise RuntimeError(
                "AerospikeClusterClient requires the `aerospike` Python package. "
                "Install via `pip install kvcompat[aerospike]`."
            )

        self._config: Dict[str, Any] = dict(config or {})
        self._digest_namespace = digest_namespace
        self._client: Any = client

        if client is not None:
            self._hosts: List[Tuple[str, int]] = list(self._config.get("hosts", []))
            return

        if hosts is None:
            hosts = parse_hosts(os.getenv("AEROSPIKE_HOSTS", ""))
        self._hosts = list(hosts)
        if self._hosts:
            self._connect()

    # ------------------------------------------------------------------ #
    # Internal helpers
    # ------------------------------------------------------------------ #

    def _connect(self) -> None:
        config = dict(self._config)
        config["hosts"] = list(self._hosts)
        try:
            client = aerospike.client(config)
            if not client.is_connected():
                client.connect()
        except Exception as exc:  # noqa: BLE001
            raise self._translate_error(exc, op="connect")
        self._client = client
        logger.debug("connected to %d seed host(s)", len(self._hosts))

    def _require_client(self) -> Any:
        if self._client is None:
            raise ClusterClientError(
                NativeResultCode.INVALID_NODE_ERROR,
                "no hosts registered",
            )
        return self._client

    def _translate_error(self, err: Exception, *, op: str) -> ClusterClientError:
        if isinstance(err, ClusterClientError):
            return err
        raw = getattr(err, "code", None)
        msg = getattr(err, "msg", None) or str(err) or f"Aerospike error during {op}"
        logger.debug("Aerospike error in %s: %r", op, err)
        translated = ClusterClientError(
            native_code_for(raw if isinstance(raw, int) else None),
            str(msg),
            details={"op": op, "aerospike_code": raw},
        )
        attach_context(translated, self._component, aerospike_op=op)
        return translated

    @staticmethod
    def _is_not_found(err: Exception) -> bool:
        return aerospike_exception is not None and isinstance(
            err, aerospike_exception.RecordNotFound
        )

    @staticmethod
    def _to_key(key: Key) -> Tuple[Any, ...]:
        if key.is_digest:
            return (key.namespace, key.set_name, None, bytearray(key.digest or b""))
        return (key.namespace, key.set_name, key.user_key)

    @staticmethod
    def _policy(policy: Policy) -> Dict[str, Any]:
        return {
            "total_timeout": int(policy.timeout),
            "max_retries": int(policy.max_retries),
            "sleep_between_retries": int(policy.sleep_between_retries),
        }

    def _stored_generation(self, policy: Policy, key: Key) -> Optional[int]:
        client = self._require_client()
        try:
            _, meta = client.exists(self._to_key(key), self._policy(policy))
        except Exception as exc:  # noqa: BLE001
            if self._is_not_found(exc):
                return None
            raise self._translate_error(exc, op="exists")
        return None if meta is None else int(meta.get("gen", 0))

    def _write_args(
        self, policy: WritePolicy, key: Key
    ) -> Tuple[Dict[str, Any], Dict[str, Any]]:
        """
        Build the (meta, policy) dicts for a write.

        The server has no "stored generation >= g" check, so EXPECT_GEN_GT
        reads the current generation first and then writes with an exact
        generation match on what it read. A concurrent update between the
        two calls makes the write fail with GENERATION_ERROR.
        """
        as_policy = self._policy(policy)
        meta: Dict[str, Any] = {}
        if policy.expiration:
            meta["ttl"] = int(policy.expiration)

        action = policy.record_exists_action
        if action is RecordExistsAction.FAIL:
            as_policy["exists"] = aerospike.POLICY_EXISTS_CREATE
        elif action is RecordExistsAction.EXPECT_GEN_EQUAL:
            as_policy["gen"] = aerospike.POLICY_GEN_EQ
            meta["gen"] = int(policy.generation)
        elif action is RecordExistsAction.EXPECT_GEN_GT:
            stored = self._stored_generation(policy, key)
            if stored is None:
                as_policy["exists"] = aerospike.POLICY_EXISTS_CREATE
            elif stored < policy.generation:
                raise ClusterClientError(
                    NativeResultCode.GENERATION_ERROR,
                    f"stored generation {stored} is below {policy.generation}",
                )
            else:
                as_policy["gen"] = aerospike.POLICY_GEN_EQ
                meta["gen"] = stored
        elif action is RecordExistsAction.DUPLICATE:
            raise ClusterClientError(
                NativeResultCode.PARAMETER_ERROR,
                "duplicate-version writes are not supported",
            )
        return meta, as_policy

    @staticmethod
    def _to_record(meta: Optional[Mapping[str, Any]], bins: Optional[Mapping[str, Any]]) -> Record:
        meta = meta or {}
        return Record(
            bins=dict(bins or {}),
            generation=int(meta.get("gen", 0)),
            expiration=expiration_from_ttl(meta.get("ttl")),
        )

    def _to_ops(self, operations: Sequence[Operation]) -> Tuple[List[Any], bool]:
        """Return Aerospike operations plus whether a full-record read was requested."""
        ops: List[Any] = []
        read_all = False
        for op in operations:
            if op.op_type is OperationType.READ:
                if op.bin_name is None:
                    read_all = True
                else:
                    ops.append(aerospike_ops.read(op.bin_name))
            elif op.op_type is OperationType.WRITE:
                ops.append(aerospike_ops.write(op.bin_name, op.value))
            elif op.op_type is OperationType.ADD:
                ops.append(aerospike_ops.increment(op.bin_name, op.value))
            elif op.op_type is OperationType.APPEND:
                ops.append(aerospike_ops.append(op.bin_name, op.value))
            elif op.op_type is OperationType.PREPEND:
                ops.append(aerospike_ops.prepend(op.bin_name, op.value))
            elif op.op_type is OperationType.TOUCH:
                ops.append(aerospike_ops.touch())
        return ops, read_all

    def _bin_ops(self, factory: Any, bins: Sequence[Bin]) -> List[Any]:
        return [factory(b.name, b.value) for b in bins]

    def _operate_write(
        self, op: str, policy: WritePolicy, key: Key, ops: List[Any]
    ) -> None:
        client = self._require_client()
        meta, as_policy = self._write_args(policy, key)
        try:
            client.operate(self._to_key(key), ops, meta, as_policy)
        except Exception as exc:  # noqa: BLE001
            raise self._translate_error(exc, op=op)

    # ------------------------------------------------------------------ #
    # Connection
    # ------------------------------------------------------------------ #

    def add_host(self, hostname: str, port: int) -> None:
        entry = (hostname, int(port))
        if entry in self._hosts and self._client is not None:
            return
        if entry not in self._hosts:
            self._hosts.append(entry)
        if self._client is not None:
            self.close()
        self._connect()

    def is_connected(self) -> bool:
        return self._client is not None and bool(self._client.is_connected())

    def get_node_names(self) -> List[str]:
        client = self._require_client()
        try:
            nodes = client.get_node_names()
        except Exception as exc:  # noqa: BLE001
            raise self._translate_error(exc, op="get_node_names")
        return [n["node_name"] if isinstance(n, Mapping) else str(n) for n in nodes]

    def close(self) -> None:
        if self._client is None:
            return
        try:
            self._client.close()
        except Exception as exc:  # noqa: BLE001
            logger.debug("error closing Aerospike client: %r", exc)
        self._client = None

    def compute_digest(self, set_name: Optional[str], user_key: Any) -> bytes:
        # the namespace does not participate in the digest
        try:
            digest = aerospike.calc_digest(self._digest_namespace, set_name or "", user_key)
        except Exception as exc:  # noqa: BLE001
            raise self._translate_error(exc, op="compute_digest")
        return bytes(digest)

    # ------------------------------------------------------------------ #
    # Writes
    # ------------------------------------------------------------------ #

    def put(self, policy: WritePolicy, key: Key, bins: Sequence[Bin]) -> None:
        client = self._require_client()
        meta, as_policy = self._write_args(policy, key)
        try:
            client.put(self._to_key(key), {b.name: b.value for b in bins}, meta, as_policy)
        except Exception as exc:  # noqa: BLE001
            raise self._translate_error(exc, op="put")

    def append(self, policy: WritePolicy, key: Key, bins: Sequence[Bin]) -> None:
        self._operate_write("append", policy, key, self._bin_ops(aerospike_ops.append, bins))

    def prepend(self, policy: WritePolicy, key: Key, bins: Sequence[Bin]) -> None:
        self._operate_write("prepend", policy, key, self._bin_ops(aerospike_ops.prepend, bins))

    def add(self, policy: WritePolicy, key: Key, bins: Sequence[Bin]) -> None:
        self._operate_write("add", policy, key, self._bin_ops(aerospike_ops.increment, bins))

    def delete(self, policy: WritePolicy, key: Key) -> bool:
        client = self._require_client()
        meta, as_policy = self._write_args(policy, key)
        as_policy.pop("exists", None)
        try:
            client.remove(self._to_key(key), meta or None, as_policy)
        except Exception as exc:  # noqa: BLE001
            if self._is_not_found(exc):
                return False
            raise self._translate_error(exc, op="delete")
        return True

    # ------------------------------------------------------------------ #
    # Reads
    # ------------------------------------------------------------------ #

    def exists(self, policy: Policy, key: Key) -> bool:
        client = self._require_client()
        try:
            _, meta = client.exists(self._to_key(key), self._policy(policy))
        except Exception as exc:  # noqa: BLE001
            if self._is_not_found(exc):
                return False
            raise self._translate_error(exc, op="exists")
        return meta is not None

    def get(
        self,
        policy: Policy,
        key: Key,
        bin_names: Optional[Sequence[str]] = None,
    ) -> Optional[Record]:
        client = self._require_client()
        as_key = self._to_key(key)
        try:
            if bin_names is None:
                _, meta, bins = client.get(as_key, self._policy(policy))
            else:
                _, meta, bins = client.select(as_key, list(bin_names), self._policy(policy))
        except Exception as exc:  # noqa: BLE001
            if self._is_not_found(exc):
                return None
            raise self._translate_error(exc, op="get")
        return self._to_record(meta, bins)

    def _batch(
        self,
        op: str,
        policy: Policy,
        keys: Sequence[Key],
        bin_names: Optional[Sequence[str]],
    ) -> List[Any]:
        client = self._require_client()
        try:
            batch = client.batch_read(
                [self._to_key(k) for k in keys],
                None if bin_names is None else list(bin_names),
                self._policy(policy),
            )
        except Exception as exc:  # noqa: BLE001
            raise self._translate_error(exc, op=op)

        entries = list(batch.batch_records)
        for entry in entries:
            if entry.result not in (NativeResultCode.OK, NativeResultCode.KEY_NOT_FOUND_ERROR):
                raise ClusterClientError(
                    native_code_for(entry.result),
                    f"batch entry failed during {op}",
                    details={"op": op, "aerospike_code": entry.result},
                )
        return entries

    def get_batch(
        self,
        policy: Policy,
        keys: Sequence[Key],
        bin_names: Optional[Sequence[str]] = None,
    ) -> List[Optional[Record]]:
        records: List[Optional[Record]] = []
        for entry in self._batch("get_batch", policy, keys, bin_names):
            if entry.result == NativeResultCode.OK and entry.record is not None:
                _, meta, bins = entry.record
                records.append(self._to_record(meta, bins))
            else:
                records.append(None)
        return records

    def exists_batch(self, policy: Policy, keys: Sequence[Key]) -> List[bool]:
        return [
            entry.result == NativeResultCode.OK
            for entry in self._batch("exists_batch", policy, keys, [])
        ]

    def operate(
        self,
        policy: WritePolicy,
        key: Key,
        operations: Sequence[Operation],
    ) -> Optional[Record]:
        client = self._require_client()
        ops, read_all = self._to_ops(operations)
        meta, as_policy = self._write_args(policy, key)
        as_key = self._to_key(key)
        try:
            _, out_meta, bins = client.operate(as_key, ops, meta, as_policy)
            if read_all:
                _, out_meta, bins = client.get(as_key, self._policy(policy))
        except Exception as exc:  # noqa: BLE001
            if self._is_not_found(exc):
                return None
            raise self._translate_error(exc, op="operate")
        return self._to_record(out_meta, bins)

    # ------------------------------------------------------------------ #
    # Scans
    # ------------------------------------------------------------------ #

    def _scan(
        self,
        op: str,
        policy: ScanPolicy,
        namespace: str,
        set_name: Optional[str],
        callback: ScanRecordCallback,
        node_name: Optional[str] = None,
    ) -> None:
        client = self._require_client()
        as_policy = {
            "total_timeout": int(policy.timeout),
            "max_retries": int(policy.max_retries),
        }
        options: Dict[str, Any] = {
            "concurrent": bool(policy.concurrent_nodes),
            "nobins": not policy.include_bin_data,
        }
        if policy.scan_percent < 100:
            options["percent"] = int(policy.scan_percent)

        def _forward(record: Tuple[Any, Any, Any]) -> None:
            as_key, meta, bins = record
            meta = meta or {}
            callback(
                as_key[0],
                as_key[1],
                bytes(as_key[3]) if as_key[3] is not None else b"",
                dict(bins or {}),
                int(meta.get("gen", 0)),
                expiration_from_ttl(meta.get("ttl")),
            )

        try:
            scan = client.scan(namespace, set_name)
            if node_name is None:
                scan.foreach(_forward, as_policy, options)
            else:
                scan.foreach(_forward, as_policy, options, nodename=node_name)
        except Exception as exc:  # noqa: BLE001
            raise self._translate_error(exc, op=op)

    def scan_all(
        self,
        policy: ScanPolicy,
        namespace: str,
        set_name: Optional[str],
        callback: ScanRecordCallback,
    ) -> None:
        self._scan("scan_all", policy, namespace, set_name, callback)

    def scan_node(
        self,
        policy: ScanPolicy,
        node_name: str,
        namespace: str,
        set_name: Optional[str],
        callback: ScanRecordCallback,
    ) -> None:
        self._scan("scan_node", policy, namespace, set_name, callback, node_name=node_name)


__all__ = [
    "SERVER_EPOCH_OFFSET",
    "expiration_from_ttl",
    "native_code_for",
    "AerospikeClusterClient",
]
